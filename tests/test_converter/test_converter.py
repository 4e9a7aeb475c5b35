"""Tests for converting style maps back to Gpad text."""

import pytest

from gpad.codecs import create_default_registry
from gpad.converter import StyleConverter, convert_style
from gpad.stylesheet import RESET_MARKER, StyleSheet, parse_sheet_body

RED = {"r": "255", "g": "0", "b": "0", "alpha": "1.0"}


@pytest.fixture
def converter():
    return StyleConverter(create_default_registry())


class TestConvert:
    def test_values_and_flags(self, converter):
        style = {"objColor": RED, "pointSize": {"val": "7"}, "fixed": {"val": "true"}}
        assert converter.convert(style) == "{ objColor: #FF0000; pointSize: 7; fixed }"

    def test_defaults_dropped(self, converter):
        style = {"objColor": RED, "pointSize": {"val": "5"}, "layer": {"val": "0"}}
        assert converter.convert(style) == "{ objColor: #FF0000 }"

    def test_nothing_left(self, converter):
        assert converter.convert({"pointSize": {"val": "5"}}) is None
        assert converter.convert({}) is None

    def test_element_names_become_property_names(self, converter):
        style = {"condition": {"showObject": "a > 2"}, "emphasizeRightAngle": {"val": "false"}}
        assert converter.convert(style) == '{ showIf: "a > 2"; showGeneralAngle }'

    def test_unknown_element_skipped(self, converter):
        assert converter.convert({"video": {"width": "10"}, "layer": {"val": "3"}}) == "{ layer: 3 }"

    def test_reset_marker(self, converter):
        style = {"lineStyle": {RESET_MARKER: "", "type": "20", "thickness": "5"}}
        assert converter.convert(style) == "{ ~lineStyle; lineStyle: dotted thickness=5 }"

    def test_reset_marker_alone(self, converter):
        assert converter.convert({"lineStyle": {RESET_MARKER: ""}}) == "{ ~lineStyle }"

    def test_style_sheet_input(self, converter):
        sheet = StyleSheet("s", {"layer": {"val": "2"}})
        assert converter.convert(sheet) == "{ layer: 2 }"

    def test_url_is_quoted(self, converter):
        style = {"file": {"name": "http://example.com/a.png"}}
        assert converter.convert(style) == '{ filename: "http://example.com/a.png" }'

    def test_named(self, converter):
        assert converter.convert_named("pt", {"pointSize": {"val": "9"}}) == "@pt = { pointSize: 9 }"
        assert converter.convert_named("pt", {}) is None

    def test_module_function(self):
        assert convert_style({"layer": {"val": "4"}}) == "{ layer: 4 }"


class TestConvertThenParse:
    @pytest.mark.parametrize(
        "style",
        [
            {"objColor": {"r": "0", "g": "128", "b": "255", "alpha": "0.0", "fillType": "1"}},
            {"lineStyle": {"type": "15", "thickness": "3", "typeHidden": "1"}},
            {"show": {"object": "true", "label": "true", "ev": "24"}},
            {"caption": {"val": "Speed; in m/s"}, "fixed": {"val": "true"}},
            {"file": {"name": "http://example.com/a.png"}},
            {"caption": {"val": "see http://example.com"}},
            {"startPoint": {"0:exp": "A", "1:x": "1", "1:y": "2"}},
            {"barTag": {"1:r": "255", "1:g": "0", "1:b": "0", "2:fillType": "6"}},
        ],
    )
    def test_parses_back_to_same_style(self, converter, style):
        registry = create_default_registry()
        text = converter.convert(style)
        sheet = parse_sheet_body(text[1:-1], registry)
        assert sheet.properties == style
