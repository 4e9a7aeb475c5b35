"""lineStyle codec.

Tokens may come in any order::

    lineStyle: dashedlong thickness=7 hidden=dashed opacity=128 arrow
"""

from __future__ import annotations

from typing import Mapping

from gpad.codecs.base import AttributeMap, PropertyCodec
from gpad.codecs.text import is_true, key_value, split_tokens, truncate_int
from gpad.errors import ParseError
from gpad.maps import HIDDEN_MODE_NAMES, HIDDEN_MODES, LINE_TYPE_NAMES, LINE_TYPES

_ORDER = ("type", "thickness", "typeHidden", "opacity", "drawArrow")


def decode_line_style(value: str) -> AttributeMap | None:
    found: AttributeMap = {}
    for token in split_tokens(value):
        if token in LINE_TYPES:
            found["type"] = LINE_TYPES[token]
        elif token == "hidden":
            found["typeHidden"] = HIDDEN_MODES[""]
        elif token in ("arrow", "~arrow"):
            found["drawArrow"] = "false" if token.startswith("~") else "true"
        else:
            key, val = key_value(token)
            if key == "thickness" and val is not None:
                found["thickness"] = truncate_int(val, "thickness")
            elif key == "opacity" and val is not None:
                found["opacity"] = truncate_int(val, "opacity")
            elif key == "hidden" and val in ("dashed", "show"):
                found["typeHidden"] = HIDDEN_MODES[val]
            else:
                raise ParseError(f"Invalid lineStyle token: {token}")

    if not found:
        return None
    # type and thickness travel together
    if "type" in found and "thickness" not in found:
        found["thickness"] = "5"
    elif "thickness" in found and "type" not in found:
        found["type"] = "0"
    return {key: found[key] for key in _ORDER if key in found}


def encode_line_style(attrs: Mapping[str, str]) -> str | None:
    parts: list[str] = []
    line_type = attrs.get("type")
    if line_type is not None:
        parts.append(LINE_TYPE_NAMES.get(line_type, "full"))
    if attrs.get("thickness") is not None:
        parts.append(f"thickness={attrs['thickness']}")
    hidden = attrs.get("typeHidden")
    if hidden in HIDDEN_MODE_NAMES:
        mode = HIDDEN_MODE_NAMES[hidden]
        parts.append(f"hidden={mode}" if mode else "hidden")
    if attrs.get("opacity") is not None:
        parts.append(f"opacity={attrs['opacity']}")
    if is_true(attrs.get("drawArrow")):
        parts.append("arrow")
    return " ".join(parts) or None


LINE_STYLE = PropertyCodec(
    name="lineStyle",
    element="lineStyle",
    decode=decode_line_style,
    encode=encode_line_style,
    defaults={"drawArrow": "false"},
)
