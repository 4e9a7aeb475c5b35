"""animation codec.

``animation: play +0.5 speed=2`` plays an increasing animation with step
0.5 at double speed. The step prefix selects the animation type: ``+``
increasing, ``-`` decreasing, ``=`` increasing once, none oscillating.
Step and speed may be expressions written as quoted strings.
"""

from __future__ import annotations

from typing import Mapping

from gpad.codecs.base import AttributeMap, PropertyCodec
from gpad.codecs.text import is_number, is_true, key_value, quote_always, same_number, split_tokens, unquote
from gpad.errors import ParseError

_STEP_PREFIXES = {"+": "1", "-": "2", "=": "3"}
_TYPE_PREFIXES = {v: k for k, v in _STEP_PREFIXES.items()}


def _step_value(text: str, token: str) -> str:
    if text.startswith('"'):
        return unquote(text)
    if not is_number(text):
        raise ParseError(f"Invalid animation token: {token}")
    return text


def decode_animation(value: str) -> AttributeMap | None:
    attrs: AttributeMap = {}
    for token in split_tokens(value):
        if token in ("play", "~play"):
            attrs["playing"] = "false" if token.startswith("~") else "true"
            continue
        key, val = key_value(token)
        if key == "speed" and val is not None:
            if not val:
                raise ParseError("Missing animation speed")
            attrs["speed"] = unquote(val)
        elif token[0] in _STEP_PREFIXES:
            # a bare prefix keeps the default step
            if token[1:]:
                attrs["step"] = _step_value(token[1:], token)
            attrs["type"] = _STEP_PREFIXES[token[0]]
        else:
            attrs["step"] = _step_value(token, token)
            attrs["type"] = "0"
    return attrs or None


def _format(value: str) -> str:
    return value if is_number(value) else quote_always(value)


def encode_animation(attrs: Mapping[str, str]) -> str | None:
    parts: list[str] = []
    if is_true(attrs.get("playing")):
        parts.append("play")
    prefix = _TYPE_PREFIXES.get(attrs.get("type", "0"), "")
    step = attrs.get("step")
    step_text = ""
    if step is not None and not same_number(step, 0.1):
        step_text = _format(step)
    if prefix or step_text:
        parts.append(prefix + step_text)
    speed = attrs.get("speed")
    if speed is not None and not same_number(speed, 1):
        parts.append(f"speed={_format(speed)}")
    return " ".join(parts) or None


ANIMATION = PropertyCodec(
    name="animation",
    element="animation",
    decode=decode_animation,
    encode=encode_animation,
    defaults={"playing": "false", "step": "0.1", "type": "0", "speed": "1"},
)
