"""slider codec.

``slider: min=-5 max=5 width=200 @screen x=40 y=60 vertical fixed``
"""

from __future__ import annotations

from typing import Mapping

from gpad.codecs.base import AttributeMap, PropertyCodec
from gpad.codecs.text import is_number, is_true, key_value, quote, split_tokens, unquote
from gpad.errors import ParseError

# flag token -> (attribute, value when the token is not negated)
_FLAGS: dict[str, tuple[str, str]] = {
    "vertical": ("horizontal", "false"),
    "algebra": ("showAlgebra", "true"),
    "constant": ("arbitraryConstant", "true"),
    "fixed": ("fixed", "true"),
}

_NEGATE = {"true": "false", "false": "true"}

_DEFAULTS = {
    "horizontal": "true",
    "showAlgebra": "false",
    "arbitraryConstant": "false",
    "fixed": "false",
    "absoluteScreenLocation": "false",
}


def decode_slider(value: str) -> AttributeMap | None:
    attrs: AttributeMap = {}
    for token in split_tokens(value):
        if token == "@screen":
            attrs["absoluteScreenLocation"] = "true"
            continue
        name = token.lstrip("~")
        if name in _FLAGS and len(token) - len(name) <= 1:
            attr, on = _FLAGS[name]
            attrs[attr] = _NEGATE[on] if token.startswith("~") else on
            continue
        key, val = key_value(token)
        if val is None or not val:
            raise ParseError(f"Invalid slider token: {token}")
        if key in ("min", "max"):
            attrs[key] = unquote(val)
        elif key in ("width", "x", "y"):
            if not is_number(val):
                raise ParseError(f"Invalid slider {key}: {val}")
            attrs[key] = val
        else:
            raise ParseError(f"Invalid slider token: {token}")
    return attrs or None


def encode_slider(attrs: Mapping[str, str]) -> str | None:
    parts: list[str] = []
    for key in ("min", "max"):
        if key in attrs:
            parts.append(f"{key}={quote(attrs[key])}")
    if "width" in attrs:
        parts.append(f"width={attrs['width']}")
    if is_true(attrs.get("absoluteScreenLocation")):
        parts.append("@screen")
    for key in ("x", "y"):
        if key in attrs:
            parts.append(f"{key}={attrs[key]}")
    for token, (attr, on) in _FLAGS.items():
        current = attrs.get(attr)
        if current is not None and current != _DEFAULTS[attr]:
            parts.append(token if current == on else "~" + token)
    return " ".join(parts) or None


SLIDER = PropertyCodec(
    name="slider",
    element="slider",
    decode=decode_slider,
    encode=encode_slider,
    defaults=_DEFAULTS,
)
