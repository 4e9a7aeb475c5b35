"""Codecs for single-attribute properties, built from the tables in gpad.maps."""

from __future__ import annotations

import logging
from typing import Mapping

from gpad.codecs.base import AttributeMap, PropertyCodec
from gpad.codecs.text import is_number, quote, read_string, same_number, truncate_int
from gpad.errors import ParseError
from gpad.maps import (
    GPAD_TO_XML_ATTR,
    INVERTED_BOOLEANS,
    SIMPLE_DEFAULTS,
    SIMPLE_PROPERTIES,
    VALUE_MAPS,
    VALUE_MAPS_REVERSE,
    SimpleKind,
    xml_name,
)

logger = logging.getLogger("gpad.codecs")

_NEGATE = {"true": "false", "false": "true"}


def _bool_codec(name: str, element: str, attr: str) -> PropertyCodec:
    inverted = name in INVERTED_BOOLEANS

    def decode(value: str) -> AttributeMap | None:
        value = value.strip()
        if value == "":
            value = "true"
        if value not in _NEGATE:
            raise ParseError(f"Invalid boolean for {name}: {value}")
        return {attr: _NEGATE[value] if inverted else value}

    def encode(attrs: Mapping[str, str]) -> str | None:
        value = attrs.get(attr, "").strip().lower()
        if inverted:
            value = _NEGATE.get(value, "")
        return "" if value == "true" else None

    default = "true" if inverted else "false"
    return PropertyCodec(
        name=name,
        element=element,
        decode=decode,
        encode=encode,
        defaults={attr: default},
        flag=True,
    )


def _number_codec(name: str, element: str, attr: str, kind: SimpleKind) -> PropertyCodec:
    default = SIMPLE_DEFAULTS.get(name)

    def decode(value: str) -> AttributeMap | None:
        value = value.strip()
        if kind is SimpleKind.INT:
            return {attr: truncate_int(value, name)}
        if not is_number(value) and value != "NaN":
            raise ParseError(f"Invalid number for {name}: {value}")
        return {attr: value}

    def encode(attrs: Mapping[str, str]) -> str | None:
        value = attrs.get(attr)
        if value is None:
            return None
        if default is not None and (value == default or same_number(value, float(default))):
            return None
        return value

    return PropertyCodec(
        name=name,
        element=element,
        decode=decode,
        encode=encode,
        defaults={attr: default} if default is not None else {},
    )


def _string_codec(name: str, element: str, attr: str) -> PropertyCodec:
    default = SIMPLE_DEFAULTS.get(name)
    to_xml = VALUE_MAPS.get(name)
    from_xml = VALUE_MAPS_REVERSE.get(name)

    def decode(value: str) -> AttributeMap | None:
        text = read_string(value)
        if to_xml is not None:
            if text not in to_xml:
                logger.warning("Ignoring unknown %s value: %s", name, text)
                return None
            text = to_xml[text]
        return {attr: text}

    def encode(attrs: Mapping[str, str]) -> str | None:
        value = attrs.get(attr)
        if value is None or value == default:
            return None
        if from_xml is not None:
            if value not in from_xml:
                logger.debug("No Gpad name for %s value %s", name, value)
                return None
            return from_xml[value]
        return quote(value)

    return PropertyCodec(
        name=name,
        element=element,
        decode=decode,
        encode=encode,
        defaults={attr: default} if default is not None else {},
    )


def simple_codec(name: str) -> PropertyCodec:
    """Build the codec for one of the simple properties in SIMPLE_PROPERTIES."""
    kind = SIMPLE_PROPERTIES[name]
    element = xml_name(name)
    attr = GPAD_TO_XML_ATTR.get(name, "val")
    if kind is SimpleKind.BOOL:
        return _bool_codec(name, element, attr)
    if kind is SimpleKind.STR:
        return _string_codec(name, element, attr)
    return _number_codec(name, element, attr, kind)


SIMPLE_CODECS: list[PropertyCodec] = [simple_codec(name) for name in SIMPLE_PROPERTIES]
