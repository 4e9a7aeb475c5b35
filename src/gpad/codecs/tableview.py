"""tableview codec: ``tableview: 2 points`` or ``tableview: ~points``."""

from __future__ import annotations

from typing import Mapping

from gpad.codecs.base import AttributeMap, PropertyCodec
from gpad.codecs.text import split_tokens
from gpad.errors import ParseError


def decode_tableview(value: str) -> AttributeMap | None:
    attrs: AttributeMap = {}
    for index, token in enumerate(split_tokens(value)):
        if token in ("points", "~points"):
            attrs["points"] = "false" if token.startswith("~") else "true"
        elif index == 0 and token.lstrip("-").isdigit():
            attrs["column"] = token
        else:
            raise ParseError(f"Invalid tableview token: {token}")
    return attrs or None


def encode_tableview(attrs: Mapping[str, str]) -> str | None:
    parts: list[str] = []
    column = attrs.get("column")
    if column is not None and column != "-1":
        parts.append(column)
    points = attrs.get("points")
    if points is not None:
        parts.append("points" if points == "true" else "~points")
    return " ".join(parts) or None


TABLEVIEW = PropertyCodec(
    name="tableview",
    element="tableview",
    decode=decode_tableview,
    encode=encode_tableview,
    defaults={"column": "-1"},
)
