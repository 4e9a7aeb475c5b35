from gpad.stylesheet.model import RESET_MARKER, StyleSheet, has_reset
from gpad.stylesheet.parser import parse_sheet_body, split_entries

__all__ = ["RESET_MARKER", "StyleSheet", "has_reset", "parse_sheet_body", "split_entries"]
