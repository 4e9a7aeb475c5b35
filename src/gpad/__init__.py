"""Gpad: a compact DSL for creating and styling construction objects."""

__version__ = "0.1.0"

from gpad.applier import DefaultStyleCache, StyleApplier, default_style_cache  # noqa: E402
from gpad.codecs import CodecRegistry, PropertyCodec, create_default_registry  # noqa: E402
from gpad.config import GpadConfig  # noqa: E402
from gpad.converter import StyleConverter, convert_style  # noqa: E402
from gpad.errors import ParseError  # noqa: E402
from gpad.generator import GpadGenerator  # noqa: E402
from gpad.host import StubConstruction  # noqa: E402
from gpad.macros import MacroDefinition  # noqa: E402
from gpad.parser import GpadParser  # noqa: E402
from gpad.stylesheet import StyleSheet  # noqa: E402
from gpad.xml import parse_style_xml  # noqa: E402


def parse_gpad(source: str, construction=None, *, config: GpadConfig | None = None) -> list:
    """Parse source against construction (a fresh StubConstruction by default)."""
    parser = GpadParser(construction or StubConstruction(), config=config)
    return parser.parse(source)


__all__ = [
    "__version__",
    "CodecRegistry",
    "DefaultStyleCache",
    "GpadConfig",
    "GpadGenerator",
    "GpadParser",
    "MacroDefinition",
    "ParseError",
    "PropertyCodec",
    "StubConstruction",
    "StyleApplier",
    "StyleConverter",
    "StyleSheet",
    "convert_style",
    "create_default_registry",
    "default_style_cache",
    "parse_gpad",
    "parse_style_xml",
]
