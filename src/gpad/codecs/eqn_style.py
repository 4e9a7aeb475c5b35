"""eqnStyle codec: ``eqnStyle: explicit`` or ``eqnStyle: parametric=t``."""

from __future__ import annotations

import logging
from typing import Mapping

from gpad.codecs.base import AttributeMap, PropertyCodec
from gpad.maps import EQN_STYLES

logger = logging.getLogger("gpad.codecs")


def decode_eqn_style(value: str) -> AttributeMap | None:
    style, _, parameter = value.strip().partition("=")
    style = style.strip()
    parameter = parameter.strip()
    if style not in EQN_STYLES:
        logger.warning("Ignoring unknown eqnStyle: %s", value.strip())
        return None
    attrs: AttributeMap = {"style": style}
    if style == "parametric" and len(parameter) == 1 and parameter.isalpha():
        attrs["parameter"] = parameter
    return attrs


def encode_eqn_style(attrs: Mapping[str, str]) -> str | None:
    style = attrs.get("style")
    if style not in EQN_STYLES:
        return None
    parameter = attrs.get("parameter")
    if style == "parametric" and parameter:
        return f"{style}={parameter}"
    return style


EQN_STYLE = PropertyCodec(
    name="eqnStyle",
    element="eqnStyle",
    decode=decode_eqn_style,
    encode=encode_eqn_style,
)
