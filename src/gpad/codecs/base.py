"""Codec record and registry.

A codec pairs the decoder for one Gpad property with the encoder that turns
the decoded attribute map back into Gpad text. Codecs are pure functions of
their input and hold no state, so one registry can serve any number of
parsers and converters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator, Mapping

from gpad.codecs.text import same_number

logger = logging.getLogger("gpad.codecs")

AttributeMap = dict[str, str]

Decoder = Callable[[str], "AttributeMap | None"]
Encoder = Callable[[Mapping[str, str]], "str | None"]


@dataclass(frozen=True)
class PropertyCodec:
    """Decode/encode pair for one Gpad property."""

    name: str
    """Property name as written in Gpad."""

    element: str
    """Element name in the object's style XML."""

    decode: Decoder
    """Value text to attribute map; None means the property is omitted."""

    encode: Encoder
    """Attribute map to value text; None omits it, "" writes the bare name."""

    defaults: Mapping[str, str] = field(default_factory=dict)
    """Attribute values the encoder never writes."""

    flag: bool = False
    """Whether the bare name (no colon, no value) is accepted."""

    slot: str | None = None
    """Script slot the applier routes this property to, if any."""

    aliases: tuple[str, ...] = ()


class CodecRegistry:
    """Lookup of codecs by Gpad name (or alias) and by element name."""

    def __init__(self) -> None:
        self._by_name: dict[str, PropertyCodec] = {}
        self._by_element: dict[str, PropertyCodec] = {}

    def register(self, codec: PropertyCodec) -> None:
        for name in (codec.name, *codec.aliases):
            if name in self._by_name:
                logger.debug("Replacing codec for %s", name)
            self._by_name[name] = codec
        self._by_element[codec.element] = codec

    def for_name(self, name: str) -> PropertyCodec | None:
        return self._by_name.get(name)

    def for_element(self, element: str) -> PropertyCodec | None:
        return self._by_element.get(element)

    def names(self) -> list[str]:
        return sorted(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[PropertyCodec]:
        return iter(self._by_element.values())

    def __len__(self) -> int:
        return len(self._by_element)


def strip_defaults(codec: PropertyCodec, attrs: Mapping[str, str]) -> AttributeMap:
    """Drop attributes equal to the codec's encode defaults.

    Numeric defaults compare by value so ``"5.0"`` matches ``"5"``. Indexed
    keys such as ``"2:alpha"`` use the default of their last segment.
    """
    out: AttributeMap = {}
    for key, value in attrs.items():
        default = codec.defaults.get(key.rpartition(":")[2])
        if default is not None and _equal(value, default):
            continue
        out[key] = value
    return out


def _equal(value: str, default: str) -> bool:
    if value == default:
        return True
    try:
        return same_number(value, float(default))
    except ValueError:
        return False
