"""show codec: object/label visibility plus the packed view bits ``ev``.

``ev1``/``ev2`` address the two graphics views, ``3d`` and ``plane`` the
3D view and the plane view. Each of ``3d`` and ``plane`` owns a pair of bits
(shown, explicitly hidden) and setting one clears the other.
"""

from __future__ import annotations

from typing import Mapping

from gpad.codecs.base import AttributeMap, PropertyCodec
from gpad.codecs.text import is_true, split_tokens
from gpad.errors import ParseError

# token -> (bits to set, bits to clear)
_EV_TOKENS: dict[str, tuple[int, int]] = {
    "ev1": (0, 1),
    "~ev1": (1, 0),
    "ev2": (2, 0),
    "~ev2": (0, 2),
    "3d": (4, 8),
    "~3d": (8, 4),
    "plane": (16, 32),
    "~plane": (32, 16),
}

# bit -> token emitted when that bit is set
_EV_BITS: tuple[tuple[int, str], ...] = (
    (1, "~ev1"),
    (2, "ev2"),
    (4, "3d"),
    (8, "~3d"),
    (16, "plane"),
    (32, "~plane"),
)


def decode_show(value: str) -> AttributeMap | None:
    attrs: AttributeMap = {}
    ev: int | None = None
    for token in split_tokens(value):
        if token in ("object", "~object", "label", "~label"):
            attrs[token.lstrip("~")] = "false" if token.startswith("~") else "true"
        elif token in _EV_TOKENS:
            set_bits, clear_bits = _EV_TOKENS[token]
            ev = ((ev or 0) & ~clear_bits) | set_bits
        else:
            raise ParseError(f"Invalid show token: {token}")
    if ev is not None:
        attrs["ev"] = str(ev)
    return attrs or None


def encode_show(attrs: Mapping[str, str]) -> str | None:
    parts: list[str] = []
    if is_true(attrs.get("object")):
        parts.append("object")
    if is_true(attrs.get("label")):
        parts.append("label")
    try:
        ev = int(attrs.get("ev", "0"))
    except ValueError:
        ev = 0
    parts.extend(token for bit, token in _EV_BITS if ev & bit)
    return " ".join(parts) or None


SHOW = PropertyCodec(
    name="show",
    element="show",
    decode=decode_show,
    encode=encode_show,
    defaults={"object": "false", "label": "false", "ev": "0"},
)
