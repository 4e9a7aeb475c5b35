"""Color and fill codec shared by objColor, bgColor, borderColor and barTag.

Syntax::

    objColor: #FF0000 fill=hatch angle=30 dist=8
    objColor: #FF000080
    objColor: hsv("a/10", 1, 1, 0.5) symbol="*" ~inverse
"""

from __future__ import annotations

import logging
import re
from typing import Mapping

from gpad.codecs.base import AttributeMap, PropertyCodec
from gpad.codecs.text import (
    is_number,
    is_true,
    key_value,
    quote,
    same_number,
    split_tokens,
    split_top_level,
    unquote,
)
from gpad.errors import ParseError
from gpad.maps import COLOR_SPACES, FILL_TYPES

__all__ = [
    "COLOR_DEFAULTS",
    "decode_color",
    "decode_color_tokens",
    "encode_color",
    "fill_type_index",
    "color_codec",
]

logger = logging.getLogger("gpad.codecs")

COLOR_DEFAULTS: dict[str, str] = {
    "alpha": "1.0",
    "fillType": "0",
    "hatchAngle": "45",
    "hatchDistance": "10",
    "inverseFill": "false",
}

_HEX_RE = re.compile(r"^#(?P<digits>[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")
# Anything that looks like an attempt at a hex color.
_HEXISH_RE = re.compile(r"^#?[0-9A-Fa-f]+$|^#")
_DYNAMIC_RE = re.compile(r"^(?P<space>rgb|hsv|hsl)\((?P<args>.*)\)$", re.DOTALL)

_SPACE_NAMES = {v: k for k, v in COLOR_SPACES.items()}


def fill_type_index(value: str) -> str | None:
    """Normalize a fill type given by name or index to its index."""
    value = value.strip()
    if value in FILL_TYPES:
        return str(FILL_TYPES.index(value))
    if value.isdigit() and int(value) < len(FILL_TYPES):
        return value
    return None


def _decode_dynamic(space: str, args_text: str) -> AttributeMap:
    args = [unquote(arg.strip()) for arg in split_top_level(args_text, ",")]
    if len(args) not in (3, 4) or any(arg == "" for arg in args):
        raise ParseError(f"Invalid {space}() color: expected 3 or 4 components")
    attrs: AttributeMap = {}
    for key, arg in zip(("dynamicr", "dynamicg", "dynamicb", "dynamica"), args):
        attrs[key] = arg
    attrs["colorSpace"] = COLOR_SPACES[space]
    return attrs


def decode_color_tokens(tokens: list[str]) -> AttributeMap | None:
    """Decode color and fill tokens; None when the hex color is malformed."""
    attrs: AttributeMap = {}
    for token in tokens:
        hex_match = _HEX_RE.match(token)
        if hex_match:
            digits = hex_match.group("digits")
            attrs["r"] = str(int(digits[0:2], 16))
            attrs["g"] = str(int(digits[2:4], 16))
            attrs["b"] = str(int(digits[4:6], 16))
            if len(digits) == 8:
                attrs["alpha"] = str(int(digits[6:8], 16) / 255)
            continue
        if _HEXISH_RE.match(token):
            logger.debug("Ignoring color with malformed hex value %r", token)
            return None
        dynamic = _DYNAMIC_RE.match(token)
        if dynamic:
            attrs.update(_decode_dynamic(dynamic.group("space"), dynamic.group("args")))
            continue
        if token in ("inverse", "~inverse"):
            attrs["inverseFill"] = "false" if token.startswith("~") else "true"
            continue

        key, value = key_value(token)
        if value is None:
            raise ParseError(f"Invalid color token: {token}")
        if key == "fill":
            index = fill_type_index(value)
            if index is None:
                raise ParseError(f"Unknown fill type: {value}")
            attrs["fillType"] = index
        elif key in ("angle", "dist"):
            if not is_number(value):
                raise ParseError(f"Invalid {key} value: {value}")
            attrs["hatchAngle" if key == "angle" else "hatchDistance"] = value
        elif key == "image":
            attrs["image"] = unquote(value)
        elif key == "symbol":
            attrs["fillSymbol"] = unquote(value)
        else:
            raise ParseError(f"Invalid color token: {token}")

    if "fillSymbol" in attrs and "fillType" not in attrs:
        attrs["fillType"] = str(FILL_TYPES.index("symbols"))
    return attrs or None


def decode_color(value: str) -> AttributeMap | None:
    return decode_color_tokens(split_tokens(value))


def _channel(attrs: Mapping[str, str], key: str) -> int:
    try:
        return max(0, min(255, int(float(attrs.get(key, "0")))))
    except ValueError:
        return 0


def _hex(attrs: Mapping[str, str]) -> str:
    text = "#{:02X}{:02X}{:02X}".format(
        _channel(attrs, "r"), _channel(attrs, "g"), _channel(attrs, "b")
    )
    alpha_text = attrs.get("alpha")
    if alpha_text is None:
        return text
    try:
        alpha = float(alpha_text)
    except ValueError:
        return text
    if abs(alpha - 1.0) > 1e-6:
        text += "{:02X}".format(max(0, min(255, round(alpha * 255))))
    return text


def encode_color(attrs: Mapping[str, str]) -> str | None:
    parts: list[str] = []
    if any(key in attrs for key in ("dynamicr", "dynamicg", "dynamicb")):
        space = _SPACE_NAMES.get(attrs.get("colorSpace", "0"), "rgb")
        args = [attrs.get(key, "0") for key in ("dynamicr", "dynamicg", "dynamicb")]
        if attrs.get("dynamica"):
            args.append(attrs["dynamica"])
        parts.append(f"{space}({', '.join(quote(arg) for arg in args)})")
    elif any(key in attrs for key in ("r", "g", "b")):
        parts.append(_hex(attrs))

    fill = fill_type_index(attrs.get("fillType", "0"))
    if fill is not None and fill != "0":
        parts.append(f"fill={FILL_TYPES[int(fill)]}")
    angle = attrs.get("hatchAngle")
    if angle is not None and not same_number(angle, 45):
        parts.append(f"angle={angle}")
    dist = attrs.get("hatchDistance")
    if dist is not None and not same_number(dist, 10):
        parts.append(f"dist={dist}")
    if attrs.get("image"):
        parts.append(f"image={quote(attrs['image'])}")
    symbol = attrs.get("fillSymbol")
    if symbol and symbol.strip():
        parts.append(f"symbol={quote(symbol)}")
    if is_true(attrs.get("inverseFill")):
        parts.append("inverse")
    return " ".join(parts) or None


def color_codec(element: str) -> PropertyCodec:
    return PropertyCodec(
        name=element,
        element=element,
        decode=decode_color,
        encode=encode_color,
        defaults=COLOR_DEFAULTS,
    )
