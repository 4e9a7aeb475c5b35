"""StyleConverter: attribute maps back to Gpad sheet text."""

from __future__ import annotations

import logging
from typing import Mapping

from gpad.codecs import CodecRegistry, default_registry
from gpad.codecs.base import AttributeMap
from gpad.stylesheet.model import RESET_MARKER, StyleSheet

logger = logging.getLogger("gpad.converter")


class StyleConverter:
    """Encode a style map (element name -> AttributeMap) as Gpad text."""

    def __init__(self, registry: CodecRegistry | None = None) -> None:
        self._registry = registry or default_registry()

    def entries(self, style: Mapping[str, Mapping[str, str]]) -> list[str]:
        """One ``name: value`` (or bare ``name``) entry per non-default property."""
        out: list[str] = []
        for element, attrs in style.items():
            codec = self._registry.for_element(element)
            if codec is None:
                logger.debug("No codec for element %s", element)
                continue
            text = codec.encode({k: v for k, v in attrs.items() if k != RESET_MARKER})
            if RESET_MARKER in attrs:
                out.append(f"~{codec.name}")
            if text is None:
                continue
            out.append(codec.name if text == "" else f"{codec.name}: {text}")
        return out

    def convert(self, style: Mapping[str, Mapping[str, str]] | StyleSheet) -> str | None:
        """Render style as ``{ a: 1; b }``; None when nothing is left to write."""
        if isinstance(style, StyleSheet):
            style = style.properties
        entries = self.entries(style)
        if not entries:
            return None
        return "{ " + "; ".join(entries) + " }"

    def convert_named(self, name: str, style: Mapping[str, AttributeMap] | StyleSheet) -> str | None:
        """Render style as a named sheet definition ``@name = { ... }``."""
        body = self.convert(style)
        if body is None:
            return None
        return f"@{name} = {body}"


def convert_style(style: Mapping[str, Mapping[str, str]] | StyleSheet) -> str | None:
    return StyleConverter().convert(style)
