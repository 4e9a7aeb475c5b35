"""coords codec: ``x y [z [w]] [v=vx vy vz [vw]] [w=wx wy wz]``."""

from __future__ import annotations

from typing import Mapping

from gpad.codecs.base import AttributeMap, PropertyCodec
from gpad.codecs.text import is_number, same_number, split_tokens
from gpad.errors import ParseError

_GROUPS = {
    "": (("x", "y", "z", "w"), 2, {"z": "1.0", "w": "1.0"}),
    "v": (("vx", "vy", "vz", "vw"), 3, {"vw": "0.0"}),
    "w": (("wx", "wy", "wz"), 3, {}),
}


def decode_coords(value: str) -> AttributeMap | None:
    numbers: dict[str, list[str]] = {"": []}
    group = ""
    for token in split_tokens(value):
        for name in ("v", "w"):
            if token.startswith(name + "="):
                group = name
                if group in numbers:
                    raise ParseError(f"Duplicate coords group: {name}=")
                numbers[group] = []
                token = token[2:]
                break
        if not token:
            continue
        if not is_number(token):
            raise ParseError(f"Invalid coords value: {token}")
        numbers[group].append(token)

    attrs: AttributeMap = {}
    for name, values in numbers.items():
        keys, required, defaults = _GROUPS[name]
        if not required <= len(values) <= len(keys):
            label = f"{name}= " if name else ""
            raise ParseError(
                f"coords {label}expects {required} to {len(keys)} numbers, got {len(values)}"
            )
        for key, number in zip(keys, values):
            attrs[key] = number
        for key, default in defaults.items():
            attrs.setdefault(key, default)
    return attrs


def encode_coords(attrs: Mapping[str, str]) -> str | None:
    if "x" not in attrs or "y" not in attrs:
        return None
    main = [attrs["x"], attrs["y"]]
    z = attrs.get("z", "1.0")
    w = attrs.get("w", "1.0")
    if not same_number(w, 1):
        main += [z, w]
    elif not same_number(z, 1):
        main.append(z)
    parts = [" ".join(main)]
    if "vx" in attrs:
        vector = [attrs["vx"], attrs.get("vy", "0"), attrs.get("vz", "0")]
        vw = attrs.get("vw")
        if vw is not None and not same_number(vw, 0):
            vector.append(vw)
        parts.append("v=" + " ".join(vector))
    if "wx" in attrs:
        parts.append("w=" + " ".join(attrs.get(key, "0") for key in ("wx", "wy", "wz")))
    return " ".join(parts)


COORDS = PropertyCodec(
    name="coords",
    element="coords",
    decode=decode_coords,
    encode=encode_coords,
    defaults={"z": "1.0", "w": "1.0", "vw": "0.0"},
)
