from gpad.parser.parser import GpadParser
from gpad.parser.transformer import parse_statements

__all__ = ["GpadParser", "parse_statements"]
