"""startPoint codec.

Corners are separated by ``|``. Each corner is either a quoted reference to
a point (``"A"``) or coordinates, optionally marked ``absolute`` (screen
coordinates) or ``~absolute``::

    startPoint: "A" | absolute 100 200 | 1 2 0

Corner i is stored under the flat keys ``"i:exp"``, ``"i:x"``, ``"i:y"``,
``"i:z"`` and ``"i:absolute"``.
"""

from __future__ import annotations

from typing import Mapping

from gpad.codecs.base import AttributeMap, PropertyCodec
from gpad.codecs.text import is_number, is_true, quote_always, split_tokens, split_top_level, unquote
from gpad.errors import ParseError

MAX_CORNERS = 4


def corners(attrs: Mapping[str, str]) -> list[AttributeMap]:
    """Group the flat corner keys into one map per corner, by index."""
    grouped: dict[int, AttributeMap] = {}
    for key, value in attrs.items():
        index, sep, name = key.partition(":")
        if not sep or not index.isdigit():
            continue
        grouped.setdefault(int(index), {})[name] = value
    return [grouped[index] for index in sorted(grouped)]


def _decode_corner(text: str, index: int) -> AttributeMap:
    tokens = split_tokens(text)
    corner: AttributeMap = {}
    if tokens and tokens[0] in ("absolute", "~absolute"):
        corner["absolute"] = "false" if tokens[0].startswith("~") else "true"
        tokens = tokens[1:]
    if len(tokens) == 1 and tokens[0].startswith('"'):
        corner["exp"] = unquote(tokens[0])
    elif 2 <= len(tokens) <= 3 and all(is_number(t) for t in tokens):
        for key, number in zip(("x", "y", "z"), tokens):
            corner[key] = number
    else:
        raise ParseError(f"Invalid startPoint corner {index}: {text.strip()}")
    return {f"{index}:{key}": value for key, value in corner.items()}


def decode_start_point(value: str) -> AttributeMap | None:
    pieces = split_top_level(value, "|")
    if len(pieces) > MAX_CORNERS:
        raise ParseError(f"startPoint accepts at most {MAX_CORNERS} corners")
    attrs: AttributeMap = {}
    for index, piece in enumerate(pieces):
        attrs.update(_decode_corner(piece, index))
    return attrs


def encode_start_point(attrs: Mapping[str, str]) -> str | None:
    texts: list[str] = []
    for corner in corners(attrs):
        parts: list[str] = []
        if is_true(corner.get("absolute")):
            parts.append("absolute")
        if "exp" in corner:
            parts.append(quote_always(corner["exp"]))
        elif "x" in corner and "y" in corner:
            parts += [corner["x"], corner["y"]]
            if "z" in corner:
                parts.append(corner["z"])
        else:
            continue
        texts.append(" ".join(parts))
    return " | ".join(texts) or None


START_POINT = PropertyCodec(
    name="startPoint",
    element="startPoint",
    decode=decode_start_point,
    encode=encode_start_point,
    defaults={"absolute": "false"},
)
