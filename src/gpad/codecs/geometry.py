"""Position and size codecs: labelOffset, @screen, boundingBox, contentSize,
cropBox, dimensions and checkbox."""

from __future__ import annotations

from typing import Mapping

from gpad.codecs.base import AttributeMap, PropertyCodec
from gpad.codecs.text import is_number, is_true, key_value, same_number, split_tokens, truncate_int
from gpad.errors import ParseError


def _numbers(name: str, tokens: list[str], count: int) -> list[str]:
    if len(tokens) != count or not all(is_number(t) for t in tokens):
        raise ParseError(f"{name} expects {count} numbers: {' '.join(tokens)}")
    return tokens


def _pair_codec(name: str, element: str, keys: tuple[str, str], *, integers: bool = False) -> PropertyCodec:
    def decode(value: str) -> AttributeMap | None:
        numbers = _numbers(name, split_tokens(value), 2)
        if integers:
            numbers = [truncate_int(n, name) for n in numbers]
        return dict(zip(keys, numbers))

    def encode(attrs: Mapping[str, str]) -> str | None:
        if not all(key in attrs for key in keys):
            return None
        return " ".join(attrs[key] for key in keys)

    return PropertyCodec(name=name, element=element, decode=decode, encode=encode)


def _flag_token(token: str, name: str) -> str | None:
    """``name`` -> "true", ``~name`` -> "false", anything else None."""
    if token == name:
        return "true"
    if token == "~" + name:
        return "false"
    return None


def decode_crop_box(value: str) -> AttributeMap | None:
    tokens = split_tokens(value)
    cropped = _flag_token(tokens[-1], "cropped") if tokens else None
    if cropped is not None:
        tokens = tokens[:-1]
    attrs = dict(zip(("x", "y", "width", "height"), _numbers("cropBox", tokens, 4)))
    if cropped is not None:
        attrs["cropped"] = cropped
    return attrs


def encode_crop_box(attrs: Mapping[str, str]) -> str | None:
    keys = ("x", "y", "width", "height")
    parts = [attrs[key] for key in keys if key in attrs]
    if len(parts) != len(keys):
        return None
    if is_true(attrs.get("cropped")):
        parts.append("cropped")
    return " ".join(parts)


def decode_dimensions(value: str) -> AttributeMap | None:
    sizes: list[str] = []
    attrs: AttributeMap = {}
    for token in split_tokens(value):
        scaled = _flag_token(token, "scaled")
        key, val = key_value(token)
        if scaled is not None:
            attrs["unscaled"] = "false" if scaled == "true" else "true"
        elif key == "angle" and val is not None:
            if not is_number(val):
                raise ParseError(f"Invalid dimensions angle: {val}")
            attrs["angle"] = val
        else:
            sizes.append(token)
    width, height = _numbers("dimensions", sizes, 2)
    return {"width": width, "height": height, **attrs}


def encode_dimensions(attrs: Mapping[str, str]) -> str | None:
    if "width" not in attrs or "height" not in attrs:
        return None
    parts = [attrs["width"], attrs["height"]]
    angle = attrs.get("angle")
    if angle is not None and not same_number(angle, 0):
        parts.append(f"angle={angle}")
    if attrs.get("unscaled", "true").strip().lower() == "false":
        parts.append("scaled")
    return " ".join(parts)


def decode_checkbox(value: str) -> AttributeMap | None:
    attrs: AttributeMap = {}
    for token in split_tokens(value):
        fixed = _flag_token(token, "fixed")
        if fixed is None:
            raise ParseError(f"Invalid checkbox token: {token}")
        attrs["fixed"] = fixed
    return attrs


def encode_checkbox(attrs: Mapping[str, str]) -> str | None:
    return "fixed" if is_true(attrs.get("fixed")) else ""


LABEL_OFFSET = _pair_codec("labelOffset", "labelOffset", ("x", "y"))
SCREEN_LOCATION = _pair_codec("@screen", "absoluteScreenLocation", ("x", "y"))
BOUNDING_BOX = _pair_codec("boundingBox", "boundingBox", ("width", "height"), integers=True)
CONTENT_SIZE = _pair_codec("contentSize", "contentSize", ("width", "height"))

CROP_BOX = PropertyCodec(
    name="cropBox",
    element="cropBox",
    decode=decode_crop_box,
    encode=encode_crop_box,
    defaults={"cropped": "false"},
)

DIMENSIONS = PropertyCodec(
    name="dimensions",
    element="dimensions",
    decode=decode_dimensions,
    encode=encode_dimensions,
    defaults={"angle": "0", "unscaled": "true"},
)

CHECKBOX = PropertyCodec(
    name="checkbox",
    element="checkbox",
    decode=decode_checkbox,
    encode=encode_checkbox,
    defaults={"fixed": "false"},
    flag=True,
)

POSITION_CODECS: list[PropertyCodec] = [
    LABEL_OFFSET,
    SCREEN_LOCATION,
    BOUNDING_BOX,
    CONTENT_SIZE,
    CROP_BOX,
    DIMENSIONS,
    CHECKBOX,
]
