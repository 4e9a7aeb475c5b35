"""StyleSheet model: a named or inline bag of decoded properties."""

from __future__ import annotations

from typing import Iterator, Mapping

from gpad.codecs.base import AttributeMap

RESET_MARKER = "~"
"""Attribute key meaning "reset this property to its default first"."""


def has_reset(attrs: Mapping[str, str]) -> bool:
    return RESET_MARKER in attrs


class StyleSheet:
    """Ordered map of element name -> AttributeMap.

    An AttributeMap that carries RESET_MARKER replaces whatever the property
    held before; one without it merges key by key.
    """

    def __init__(self, name: str = "", properties: Mapping[str, Mapping[str, str]] | None = None):
        self.name = name
        self._properties: dict[str, AttributeMap] = {}
        for element, attrs in (properties or {}).items():
            self._properties[element] = dict(attrs)

    # ---- mutation ----

    def set_property(self, element: str, attrs: Mapping[str, str]) -> None:
        existing = self._properties.get(element)
        if existing is not None and has_reset(existing) and not has_reset(attrs):
            merged = dict(existing)
            merged.update(attrs)
            self._properties[element] = merged
        else:
            self._properties[element] = dict(attrs)

    def reset_property(self, element: str) -> None:
        attrs: AttributeMap = {RESET_MARKER: ""}
        attrs.update(self._properties.get(element, {}))
        self._properties[element] = attrs

    def remove_property(self, element: str) -> AttributeMap | None:
        return self._properties.pop(element, None)

    def merge_from(self, other: StyleSheet) -> None:
        """Apply other on top of this sheet, property by property."""
        for element, attrs in other.items():
            if has_reset(attrs) or element not in self._properties:
                self._properties[element] = dict(attrs)
            else:
                self._properties[element].update(attrs)

    # ---- queries ----

    def get_property(self, element: str) -> AttributeMap | None:
        attrs = self._properties.get(element)
        return dict(attrs) if attrs is not None else None

    def is_anonymous(self) -> bool:
        return not self.name

    def copy(self, name: str | None = None) -> StyleSheet:
        return StyleSheet(self.name if name is None else name, self._properties)

    def items(self) -> Iterator[tuple[str, AttributeMap]]:
        return iter(list(self._properties.items()))

    @property
    def properties(self) -> dict[str, AttributeMap]:
        return {element: dict(attrs) for element, attrs in self._properties.items()}

    def __contains__(self, element: object) -> bool:
        return element in self._properties

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._properties))

    def __len__(self) -> int:
        return len(self._properties)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StyleSheet):
            return NotImplemented
        return self.name == other.name and self._properties == other._properties

    def __repr__(self) -> str:
        return f"StyleSheet(name={self.name!r}, properties={self._properties!r})"
