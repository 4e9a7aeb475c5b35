"""Replay a StyleSheet onto a live object through the host's element handler.

Each property becomes one ``start_element`` call (several for startPoint and
barTag), in sheet order. Properties carrying the reset marker are first
cleared: directly for the handful of properties the host can clear, otherwise
by replaying the default value for the object's default type.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from gpad.codecs import CodecRegistry, bars, corners, default_registry
from gpad.codecs.base import AttributeMap
from gpad.errors import ParseError
from gpad.host import StyleHost
from gpad.stylesheet.model import RESET_MARKER, StyleSheet, has_reset
from gpad.xml import BAR_TAG_KEYS, parse_style_xml

logger = logging.getLogger("gpad.applier")

CURRENT_VALUE = object()
"""Placeholder in REQUIRED_ATTRIBUTES: fill with the object's current value."""

# Properties the host can clear without knowing a default.
RESETTABLE = frozenset(
    {
        "trace",
        "spreadsheetTrace",
        "condition",
        "dynamicCaption",
        "javascript",
        "ggbscript",
        "jsUpdateFunction",
        "jsClickFunction",
        "listener",
    }
)

# Attributes the element handler needs even when a sheet leaves them out.
REQUIRED_ATTRIBUTES: dict[str, dict[str, Any]] = {
    "value": {"val": CURRENT_VALUE},
    "slider": {
        "min": "-5",
        "max": "5",
        "width": "200",
        "fixed": "false",
        "horizontal": "true",
        "showAlgebra": "false",
    },
    "absoluteScreenLocation": {"x": "0", "y": "0"},
    "cropBox": {"x": "0", "y": "0", "width": "0", "height": "0", "cropped": "false"},
    "video": {"width": "0", "height": "0"},
    "spreadsheetTrace": {
        "val": "false",
        "traceColumn1": "-1",
        "traceRow1": "-1",
        "numRows": "10",
        "doRowLimit": "false",
        "doColumnReset": "false",
        "showLabel": "true",
        "showTraceList": "false",
        "doTraceGeoCopy": "false",
        "pause": "false",
    },
    "pointSize": {"val": "5"},
    "pointStyle": {"val": "-1"},
    "layer": {"val": "0"},
    "lineStyle": {"thickness": "5", "type": "0"},
    "decoration": {"type": "0"},
    "headStyle": {"val": "0"},
    "arcSize": {"val": "30"},
    "angleStyle": {"val": "0"},
    "slopeTriangleSize": {"val": "1"},
    "decimals": {"val": "-1"},
    "significantfigures": {"val": "-1"},
    "labelOffset": {"x": "0", "y": "0"},
    "labelMode": {"val": "0"},
    "tooltipMode": {"val": "0"},
    "ordering": {"val": "NaN"},
    "selectedIndex": {"val": "0"},
    "borderColor": {"r": "0", "g": "0", "b": "0", "alpha": "1.0"},
    "boundingBox": {"width": "0", "height": "0"},
    "embed": {"id": ""},
    "tag": {"key": "", "value": "", "barNumber": "1"},
    "length": {"val": "20"},
    "font": {"serif": "false", "sizeM": "1", "style": "0"},
    "contentSize": {"width": "0", "height": "0"},
    "javascript": {"val": ""},
}

_BAR_TAG_KEYS = {v: k for k, v in BAR_TAG_KEYS.items()}


class DefaultStyleCache:
    """Default style maps per default type, loaded on first use.

    Entries are computed once from the host's default-style XML and never
    invalidated; ``clear()`` exists for tests.
    """

    def __init__(self, loader: Callable[[str], str | None] | None = None) -> None:
        self._loader = loader
        self._entries: dict[str, dict[str, AttributeMap]] = {}

    def get(
        self, default_type: str, loader: Callable[[str], str | None] | None = None
    ) -> dict[str, AttributeMap]:
        if default_type not in self._entries:
            load = loader or self._loader
            text = load(default_type) if load is not None else None
            self._entries[default_type] = parse_style_xml(text) if text else {}
            logger.debug(
                "Cached %d default properties for type %s",
                len(self._entries[default_type]),
                default_type,
            )
        return self._entries[default_type]

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, default_type: object) -> bool:
        return default_type in self._entries


_default_cache = DefaultStyleCache()


def default_style_cache() -> DefaultStyleCache:
    """The process-wide cache used by appliers created without one."""
    return _default_cache


def backfill(element: str, attrs: Mapping[str, str], current_value: str | None) -> AttributeMap:
    """Add the attributes the element handler requires but attrs omits."""
    out = dict(attrs)
    for key, default in REQUIRED_ATTRIBUTES.get(element, {}).items():
        if key in out:
            continue
        if default is CURRENT_VALUE:
            out[key] = current_value if current_value is not None else "0"
        else:
            out[key] = default
    return out


class StyleApplier:
    """Apply style sheets to objects owned by a StyleHost."""

    def __init__(
        self,
        host: StyleHost,
        *,
        cache: DefaultStyleCache | None = None,
        registry: CodecRegistry | None = None,
    ) -> None:
        self._host = host
        self._cache = cache if cache is not None else default_style_cache()
        self._registry = registry or default_registry()

    def apply(self, sheet: StyleSheet, obj: Any) -> None:
        """Replay every property of sheet onto obj, then finish the object.

        Handler failures do not stop the replay; they are collected and
        raised together once the object has been finished.
        """
        errors: list[str] = []
        trace_touched = False
        for element, attrs in sheet.items():
            try:
                self._apply_property(obj, element, attrs)
            except Exception as exc:
                logger.debug("Applying %s failed: %s", element, exc)
                errors.append(f"{element}: {exc}")
            if element == "spreadsheetTrace":
                trace_touched = True

        self._host.finish(obj)
        if trace_touched:
            self._host.sync_trace(obj)
        if errors:
            raise ParseError("Failed to apply style sheet: " + "; ".join(errors))

    # ---- per property ----

    def _apply_property(self, obj: Any, element: str, attrs: Mapping[str, str]) -> None:
        normal = {k: v for k, v in attrs.items() if k != RESET_MARKER}
        if has_reset(attrs):
            if element in RESETTABLE and self._host.clear_property(obj, element):
                logger.debug("Cleared %s", element)
            else:
                default_type = self._host.default_type(obj)
                defaults = self._cache.get(default_type, self._host.default_style_xml)
                if element in defaults:
                    normal = {**defaults[element], **normal}
                else:
                    logger.debug("No default for %s on type %s", element, default_type)
            if not normal:
                return

        codec = self._registry.for_element(element)
        if codec is not None and codec.slot is not None:
            self._host.set_script_slot(obj, codec.slot, normal.get("val", ""))
        elif element == "startPoint":
            self._apply_start_point(obj, normal)
        elif element == "barTag":
            self._apply_bar_tag(obj, normal)
        else:
            self._start(obj, element, normal)

    def _start(self, obj: Any, element: str, attrs: Mapping[str, str]) -> None:
        value = self._host.current_value(obj) if element == "value" else None
        self._host.start_element(obj, element, backfill(element, attrs, value))

    def _apply_start_point(self, obj: Any, attrs: Mapping[str, str]) -> None:
        for number, corner in enumerate(corners(attrs)):
            self._start(obj, "startPoint", {"number": str(number), **corner})

    def _apply_bar_tag(self, obj: Any, attrs: Mapping[str, str]) -> None:
        for number, bar in bars(attrs).items():
            if all(key in bar for key in ("r", "g", "b")):
                color = f"rgba({bar['r']},{bar['g']},{bar['b']})"
                self._tag(obj, number, "barColor", color)
            for key, tag_key in _BAR_TAG_KEYS.items():
                if key in bar:
                    self._tag(obj, number, tag_key, bar[key])

    def _tag(self, obj: Any, number: int, key: str, value: str) -> None:
        self._start(obj, "tag", {"key": key, "value": value, "barNumber": str(number)})
