"""Tests for replaying style sheets onto host objects."""

import pytest

from gpad.applier import DefaultStyleCache, StyleApplier, backfill
from gpad.errors import ParseError
from gpad.host import StubConstruction, StubObject
from gpad.stylesheet import RESET_MARKER, StyleSheet

POINT_DEFAULTS = (
    '<element type="point">'
    '<pointSize val="3"/>'
    '<objColor r="0" g="0" b="255" alpha="1.0"/>'
    "</element>"
)


@pytest.fixture
def host():
    return StubConstruction(default_styles={"point": POINT_DEFAULTS})


@pytest.fixture
def applier(host):
    return StyleApplier(host, cache=DefaultStyleCache())


def _point(label="A"):
    return StubObject(label=label, rhs="(1, 1)")


# ---------------------------------------------------------------------------
# Plain properties
# ---------------------------------------------------------------------------


class TestApply:
    def test_one_event_per_property(self, applier):
        obj = _point()
        applier.apply(StyleSheet("", {"pointSize": {"val": "7"}, "layer": {"val": "2"}}), obj)
        assert obj.events == [("pointSize", {"val": "7"}), ("layer", {"val": "2"})]
        assert obj.finished == 1

    def test_required_attributes_backfilled(self, applier):
        obj = _point()
        applier.apply(StyleSheet("", {"lineStyle": {"type": "20"}}), obj)
        assert obj.style["lineStyle"] == {"type": "20", "thickness": "5"}

    def test_value_uses_current_value(self, applier):
        obj = StubObject(label="n", rhs="3", object_type="numeric", value="3")
        applier.apply(StyleSheet("", {"value": {}}), obj)
        assert obj.style["value"] == {"val": "3"}

    def test_start_point_one_event_per_corner(self, applier):
        obj = _point()
        applier.apply(StyleSheet("", {"startPoint": {"0:exp": "A", "1:x": "1", "1:y": "2"}}), obj)
        assert obj.events == [
            ("startPoint", {"number": "0", "exp": "A"}),
            ("startPoint", {"number": "1", "x": "1", "y": "2"}),
        ]

    def test_bar_tag_becomes_tags(self, applier):
        obj = _point()
        attrs = {"1:r": "255", "1:g": "0", "1:b": "0", "1:fillType": "1", "2:alpha": "0.5"}
        applier.apply(StyleSheet("", {"barTag": attrs}), obj)
        assert obj.events == [
            ("tag", {"key": "barColor", "value": "rgba(255,0,0)", "barNumber": "1"}),
            ("tag", {"key": "barFillType", "value": "1", "barNumber": "1"}),
            ("tag", {"key": "barAlpha", "value": "0.5", "barNumber": "2"}),
        ]

    def test_script_slots(self, applier):
        obj = _point()
        sheet = StyleSheet("", {"jsUpdateFunction": {"val": "f()"}, "random": {"val": "true"}})
        applier.apply(sheet, obj)
        assert obj.scripts == {"update_listener": "f()", "random": "true"}
        assert obj.events == []

    def test_trace_sync(self, applier):
        obj = _point()
        applier.apply(StyleSheet("", {"spreadsheetTrace": {"val": "true"}}), obj)
        assert obj.trace_syncs == 1
        assert obj.style["spreadsheetTrace"]["traceColumn1"] == "-1"

    def test_no_trace_sync_without_trace(self, applier):
        obj = _point()
        applier.apply(StyleSheet("", {"layer": {"val": "1"}}), obj)
        assert obj.trace_syncs == 0


# ---------------------------------------------------------------------------
# Reset marker
# ---------------------------------------------------------------------------


class TestReset:
    def test_resettable_property_cleared(self, applier):
        obj = _point()
        obj.style["condition"] = {"showObject": "a > 1"}
        applier.apply(StyleSheet("", {"condition": {RESET_MARKER: ""}}), obj)
        assert "condition" not in obj.style
        assert obj.events == []

    def test_resettable_script_cleared_then_set(self, applier):
        obj = _point()
        obj.scripts["click_script"] = "old()"
        applier.apply(StyleSheet("", {"javascript": {RESET_MARKER: "", "val": "new()"}}), obj)
        assert obj.scripts == {"click_script": "new()"}

    def test_default_replayed(self, applier):
        obj = _point()
        applier.apply(StyleSheet("", {"pointSize": {RESET_MARKER: ""}}), obj)
        assert obj.events == [("pointSize", {"val": "3"})]

    def test_default_merged_under_values(self, applier):
        obj = _point()
        applier.apply(StyleSheet("", {"objColor": {RESET_MARKER: "", "r": "255"}}), obj)
        assert obj.style["objColor"] == {"r": "255", "g": "0", "b": "255", "alpha": "1.0"}

    def test_no_default_known(self, applier):
        obj = _point()
        applier.apply(StyleSheet("", {"layer": {RESET_MARKER: ""}}), obj)
        assert obj.events == []

    def test_defaults_loaded_once_per_type(self, host, applier):
        for label in ("A", "B"):
            applier.apply(StyleSheet("", {"pointSize": {RESET_MARKER: ""}}), _point(label))
        assert host.default_style_requests == ["point"]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_failures_collected_after_finish(self):
        host = StubConstruction(failing_elements={"layer", "fixed"})
        applier = StyleApplier(host, cache=DefaultStyleCache())
        obj = _point()
        sheet = StyleSheet("", {"layer": {"val": "2"}, "pointSize": {"val": "7"}, "fixed": {"val": "true"}})
        with pytest.raises(ParseError) as exc_info:
            applier.apply(sheet, obj)
        assert str(exc_info.value) == (
            "Failed to apply style sheet: layer: Cannot apply element layer; "
            "fixed: Cannot apply element fixed"
        )
        assert obj.style == {"pointSize": {"val": "7"}}
        assert obj.finished == 1


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestDefaultStyleCache:
    def test_populated_on_miss(self):
        calls = []

        def loader(default_type):
            calls.append(default_type)
            return POINT_DEFAULTS

        cache = DefaultStyleCache(loader)
        assert cache.get("point")["pointSize"] == {"val": "3"}
        cache.get("point")
        assert calls == ["point"]
        assert "point" in cache

    def test_missing_xml_gives_empty_map(self):
        cache = DefaultStyleCache(lambda default_type: None)
        assert cache.get("text") == {}

    def test_clear(self):
        cache = DefaultStyleCache(lambda default_type: POINT_DEFAULTS)
        cache.get("point")
        cache.clear()
        assert "point" not in cache


class TestBackfill:
    def test_slider(self):
        attrs = backfill("slider", {"min": "0"}, None)
        assert attrs["min"] == "0"
        assert attrs["max"] == "5"
        assert attrs["width"] == "200"

    def test_value_without_current_value(self):
        assert backfill("value", {}, None) == {"val": "0"}

    def test_untouched_element(self):
        assert backfill("caption", {"val": "x"}, None) == {"val": "x"}
