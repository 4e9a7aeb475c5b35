"""Name and value tables that translate between Gpad and the element XML."""

from __future__ import annotations

from enum import Enum

__all__ = [
    "GPAD_TO_XML_NAME",
    "XML_TO_GPAD_NAME",
    "GPAD_TO_XML_ATTR",
    "SimpleKind",
    "SIMPLE_PROPERTIES",
    "SIMPLE_DEFAULTS",
    "INVERTED_BOOLEANS",
    "VALUE_MAPS",
    "VALUE_MAPS_REVERSE",
    "LINE_TYPES",
    "LINE_TYPE_NAMES",
    "HIDDEN_MODES",
    "HIDDEN_MODE_NAMES",
    "FILL_TYPES",
    "COLOR_SPACES",
    "EQN_STYLES",
    "xml_name",
    "gpad_name",
]

GPAD_TO_XML_NAME: dict[str, str] = {
    "@screen": "absoluteScreenLocation",
    "hideLabelInAlgebra": "algebra",
    "showIf": "condition",
    "showGeneralAngle": "emphasizeRightAngle",
    "filename": "file",
}

XML_TO_GPAD_NAME: dict[str, str] = {v: k for k, v in GPAD_TO_XML_NAME.items()}

# Simple properties whose single attribute is not called "val".
GPAD_TO_XML_ATTR: dict[str, str] = {
    "hideLabelInAlgebra": "labelVisible",
    "showIf": "showObject",
    "filename": "name",
    "audio": "src",
    "linkedGeo": "exp",
    "decoration": "type",
}


def xml_name(name: str) -> str:
    """Element name for a Gpad property name."""
    return GPAD_TO_XML_NAME.get(name, name)


def gpad_name(element: str) -> str:
    """Gpad property name for an element name."""
    return XML_TO_GPAD_NAME.get(element, element)


class SimpleKind(str, Enum):
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STR = "str"


SIMPLE_PROPERTIES: dict[str, SimpleKind] = {
    "autocolor": SimpleKind.BOOL,
    "auxiliary": SimpleKind.BOOL,
    "breakpoint": SimpleKind.BOOL,
    "centered": SimpleKind.BOOL,
    "comboBox": SimpleKind.BOOL,
    "contentSerif": SimpleKind.BOOL,
    "fixed": SimpleKind.BOOL,
    "hideLabelInAlgebra": SimpleKind.BOOL,
    "inBackground": SimpleKind.BOOL,
    "interpolate": SimpleKind.BOOL,
    "isLaTeX": SimpleKind.BOOL,
    "isMask": SimpleKind.BOOL,
    "keepTypeOnTransform": SimpleKind.BOOL,
    "levelOfDetailQuality": SimpleKind.BOOL,
    "outlyingIntersections": SimpleKind.BOOL,
    "selectionAllowed": SimpleKind.BOOL,
    "showGeneralAngle": SimpleKind.BOOL,
    "showOnAxis": SimpleKind.BOOL,
    "showTrimmed": SimpleKind.BOOL,
    "symbolic": SimpleKind.BOOL,
    "trace": SimpleKind.BOOL,
    "arcSize": SimpleKind.INT,
    "decimals": SimpleKind.INT,
    "layer": SimpleKind.INT,
    "length": SimpleKind.INT,
    "selectedIndex": SimpleKind.INT,
    "significantfigures": SimpleKind.INT,
    "slopeTriangleSize": SimpleKind.INT,
    "fading": SimpleKind.FLOAT,
    "ordering": SimpleKind.FLOAT,
    "pointSize": SimpleKind.FLOAT,
    "angleStyle": SimpleKind.STR,
    "audio": SimpleKind.STR,
    "caption": SimpleKind.STR,
    "content": SimpleKind.STR,
    "coordStyle": SimpleKind.STR,
    "decoration": SimpleKind.STR,
    "dynamicCaption": SimpleKind.STR,
    "endStyle": SimpleKind.STR,
    "filename": SimpleKind.STR,
    "headStyle": SimpleKind.STR,
    "incrementY": SimpleKind.STR,
    "labelMode": SimpleKind.STR,
    "linkedGeo": SimpleKind.STR,
    "parentLabel": SimpleKind.STR,
    "pointStyle": SimpleKind.STR,
    "showIf": SimpleKind.STR,
    "startStyle": SimpleKind.STR,
    "textAlign": SimpleKind.STR,
    "tooltipMode": SimpleKind.STR,
    "verticalAlign": SimpleKind.STR,
}

# Encode defaults, as attribute values in the element XML.
SIMPLE_DEFAULTS: dict[str, str] = {
    "arcSize": "30",
    "decimals": "-1",
    "layer": "0",
    "length": "20",
    "selectedIndex": "0",
    "significantfigures": "-1",
    "slopeTriangleSize": "1",
    "fading": "0",
    "ordering": "NaN",
    "pointSize": "5",
    "angleStyle": "0",
    "caption": "",
    "coordStyle": "cartesian",
    "decoration": "0",
    "endStyle": "default",
    "headStyle": "0",
    "labelMode": "0",
    "pointStyle": "-1",
    "startStyle": "default",
    "textAlign": "left",
    "tooltipMode": "0",
    "verticalAlign": "top",
}

# Gpad booleans stored negated in the element XML.
INVERTED_BOOLEANS = frozenset({"showGeneralAngle"})

_START_END_STYLES = {
    name: name
    for name in (
        "default",
        "line",
        "arrow",
        "crows_foot",
        "arrow_outline",
        "arrow_filled",
        "circle_outline",
        "circle",
        "square_outline",
        "square",
        "diamond_outline",
        "diamond",
    )
}

VALUE_MAPS: dict[str, dict[str, str]] = {
    "angleStyle": {"0-360": "0", "0-180": "1", "180-360": "2", "any": "3"},
    "coordStyle": {
        name: name
        for name in ("cartesian", "polar", "complex", "cartesian3d", "spherical")
    },
    "decoration": {
        "none": "0",
        "single_tick": "1",
        "double_tick": "2",
        "triple_tick": "3",
        "simple_arrow": "4",
        "double_arrow": "5",
        "triple_arrow": "6",
    },
    "endStyle": _START_END_STYLES,
    "headStyle": {"default": "0", "arrow": "1"},
    "labelMode": {"name": "0", "namevalue": "1", "value": "2", "caption": "3"},
    "pointStyle": {
        "default": "-1",
        "dot": "0",
        "cross": "1",
        "circle": "2",
        "plus": "3",
        "diamond": "4",
        "empty_diamond": "5",
        "triangle_north": "6",
        "triangle_south": "7",
        "triangle_east": "8",
        "triangle_west": "9",
        "no_outline": "10",
    },
    "startStyle": _START_END_STYLES,
    "textAlign": {name: name for name in ("left", "center", "right")},
    "tooltipMode": {
        "algebraview": "0",
        "on": "1",
        "off": "2",
        "caption": "3",
        "nextcell": "4",
    },
    "verticalAlign": {name: name for name in ("top", "middle", "bottom")},
}

VALUE_MAPS_REVERSE: dict[str, dict[str, str]] = {
    name: {v: k for k, v in mapping.items()} for name, mapping in VALUE_MAPS.items()
}

LINE_TYPES: dict[str, str] = {
    "pointwise": "-1",
    "full": "0",
    "dashedshort": "10",
    "dashedlong": "15",
    "dotted": "20",
    "dasheddotted": "30",
}
LINE_TYPE_NAMES: dict[str, str] = {v: k for k, v in LINE_TYPES.items()}

HIDDEN_MODES: dict[str, str] = {"": "0", "dashed": "1", "show": "2"}
HIDDEN_MODE_NAMES: dict[str, str] = {v: k for k, v in HIDDEN_MODES.items()}

# Index in this tuple is the fillType attribute value.
FILL_TYPES: tuple[str, ...] = (
    "standard",
    "hatch",
    "crosshatch",
    "chessboard",
    "dotted",
    "honeycomb",
    "brick",
    "weaving",
    "symbols",
    "image",
)

COLOR_SPACES: dict[str, str] = {"rgb": "0", "hsv": "1", "hsl": "2"}

EQN_STYLES = frozenset(
    {"implicit", "explicit", "parametric", "specific", "general", "vertex", "conic", "user"}
)
