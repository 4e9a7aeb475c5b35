"""Property codecs: one decode/encode pair per Gpad property family."""

from gpad.codecs.animation import ANIMATION
from gpad.codecs.bar_tag import BAR_TAG, bars
from gpad.codecs.base import AttributeMap, CodecRegistry, PropertyCodec, strip_defaults
from gpad.codecs.color import color_codec
from gpad.codecs.coords import COORDS
from gpad.codecs.eqn_style import EQN_STYLE
from gpad.codecs.font import FONT
from gpad.codecs.geometry import POSITION_CODECS
from gpad.codecs.line_style import LINE_STYLE
from gpad.codecs.scripts import JS_CLICK, JS_CLICK_FUNCTION, JS_UPDATE_FUNCTION, RANDOM_CODEC
from gpad.codecs.show import SHOW
from gpad.codecs.simple import SIMPLE_CODECS
from gpad.codecs.slider import SLIDER
from gpad.codecs.spreadsheet_trace import SPREADSHEET_TRACE
from gpad.codecs.start_point import START_POINT, corners
from gpad.codecs.tableview import TABLEVIEW

__all__ = [
    "AttributeMap",
    "CodecRegistry",
    "PropertyCodec",
    "strip_defaults",
    "bars",
    "corners",
    "create_default_registry",
    "default_registry",
]

_default: CodecRegistry | None = None


def create_default_registry() -> CodecRegistry:
    """Create a CodecRegistry with every built-in Gpad property registered."""
    registry = CodecRegistry()

    for codec in SIMPLE_CODECS:
        registry.register(codec)

    # Colors
    for element in ("objColor", "bgColor", "borderColor"):
        registry.register(color_codec(element))
    registry.register(BAR_TAG)

    # Structured properties
    registry.register(LINE_STYLE)
    registry.register(SHOW)
    registry.register(ANIMATION)
    registry.register(COORDS)
    registry.register(SLIDER)
    registry.register(SPREADSHEET_TRACE)
    registry.register(TABLEVIEW)
    registry.register(START_POINT)
    registry.register(FONT)
    registry.register(EQN_STYLE)
    for codec in POSITION_CODECS:
        registry.register(codec)

    # Script slots
    registry.register(JS_CLICK)
    registry.register(JS_UPDATE_FUNCTION)
    registry.register(JS_CLICK_FUNCTION)
    registry.register(RANDOM_CODEC)

    return registry


def default_registry() -> CodecRegistry:
    """The shared registry used when no registry is passed explicitly."""
    global _default
    if _default is None:
        _default = create_default_registry()
    return _default
