"""Script and value properties routed to script slots rather than XML."""

from __future__ import annotations

from typing import Mapping

from gpad.codecs.base import AttributeMap, PropertyCodec
from gpad.codecs.text import is_true, quote, read_string
from gpad.errors import ParseError

CLICK_SCRIPT = "click_script"
UPDATE_LISTENER = "update_listener"
CLICK_LISTENER = "click_listener"
RANDOM = "random"


def decode_script(value: str) -> AttributeMap | None:
    return {"val": read_string(value)}


def encode_script(attrs: Mapping[str, str]) -> str | None:
    text = attrs.get("val")
    if text is None:
        return None
    return quote(text)


def decode_random(value: str) -> AttributeMap | None:
    value = value.strip()
    if value in ("", "true"):
        return {"val": "true"}
    if value == "false":
        return {"val": "false"}
    raise ParseError(f"Invalid random value: {value}")


def encode_random(attrs: Mapping[str, str]) -> str | None:
    return "" if is_true(attrs.get("val")) else None


JS_CLICK = PropertyCodec(
    name="jsClick",
    element="javascript",
    decode=decode_script,
    encode=encode_script,
    slot=CLICK_SCRIPT,
    aliases=("javascript",),
)

JS_UPDATE_FUNCTION = PropertyCodec(
    name="jsUpdateFunction",
    element="jsUpdateFunction",
    decode=decode_script,
    encode=encode_script,
    slot=UPDATE_LISTENER,
)

JS_CLICK_FUNCTION = PropertyCodec(
    name="jsClickFunction",
    element="jsClickFunction",
    decode=decode_script,
    encode=encode_script,
    slot=CLICK_LISTENER,
)

RANDOM_CODEC = PropertyCodec(
    name="random",
    element="random",
    decode=decode_random,
    encode=encode_random,
    defaults={"val": "false"},
    flag=True,
    slot=RANDOM,
)
