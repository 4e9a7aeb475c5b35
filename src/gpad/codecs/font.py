"""font codec: ``font: serif *1.5 bold italic``."""

from __future__ import annotations

from typing import Mapping

from gpad.codecs.base import AttributeMap, PropertyCodec
from gpad.codecs.text import is_number, is_true, split_tokens
from gpad.errors import ParseError

_BOLD = 1
_ITALIC = 2
_STYLE_BITS = {"plain": 0, "bold": _BOLD, "italic": _ITALIC}


def decode_font(value: str) -> AttributeMap | None:
    attrs: AttributeMap = {}
    style: int | None = None
    for token in split_tokens(value):
        if token in ("serif", "~serif"):
            attrs["serif"] = "false" if token.startswith("~") else "true"
        elif token.startswith("*") and is_number(token[1:]):
            attrs["sizeM"] = token[1:]
        elif token in _STYLE_BITS:
            style = (style or 0) | _STYLE_BITS[token]
        else:
            raise ParseError(f"Invalid font token: {token}")
    if style is not None:
        attrs["style"] = str(style)
    return attrs or None


def encode_font(attrs: Mapping[str, str]) -> str | None:
    parts: list[str] = []
    if is_true(attrs.get("serif")):
        parts.append("serif")
    size = attrs.get("sizeM")
    if size is not None and is_number(size) and float(size) != 1:
        parts.append(f"*{size}")
    style = attrs.get("style", "0")
    if style.isdigit() and int(style) <= _BOLD | _ITALIC:
        if int(style) & _ITALIC:
            parts.append("italic")
        if int(style) & _BOLD:
            parts.append("bold")
    return " ".join(parts) or None


FONT = PropertyCodec(
    name="font",
    element="font",
    decode=decode_font,
    encode=encode_font,
    defaults={"serif": "false", "sizeM": "1", "style": "0"},
)
