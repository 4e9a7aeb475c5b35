"""Tests for the StyleSheet model and the sheet body parser."""

import logging

import pytest

from gpad.codecs import create_default_registry
from gpad.errors import ParseError
from gpad.stylesheet import RESET_MARKER, StyleSheet, has_reset, parse_sheet_body, split_entries


@pytest.fixture(scope="module")
def registry():
    return create_default_registry()


# ---------------------------------------------------------------------------
# Entry splitting
# ---------------------------------------------------------------------------


class TestSplitEntries:
    def test_semicolons_and_newlines(self):
        assert split_entries("pointSize: 6; fixed\nlayer: 2") == ["pointSize: 6", "fixed", "layer: 2"]

    def test_separators_inside_strings_kept(self):
        entries = split_entries('caption: "a; b\\" c"; fixed')
        assert entries == ['caption: "a; b\\" c"', "fixed"]

    def test_comments_dropped(self):
        body = """
            pointSize: 6 // large points
            // whole line comment
            caption: "http://example.org"
        """
        assert split_entries(body) == ["pointSize: 6", 'caption: "http://example.org"']

    def test_slashes_inside_bare_value_kept(self):
        entries = split_entries("filename: http://example.com/a.png; fixed// note")
        assert entries == ["filename: http://example.com/a.png", "fixed// note"]

    def test_comment_after_separator(self):
        assert split_entries("fixed;// note\nlayer: 2") == ["fixed", "layer: 2"]

    def test_empty_entries_dropped(self):
        assert split_entries(";;  ;\n") == []

    def test_unterminated_string(self):
        with pytest.raises(ParseError, match="Unterminated"):
            split_entries('caption: "oops')


# ---------------------------------------------------------------------------
# Body parsing
# ---------------------------------------------------------------------------


class TestParseSheetBody:
    def test_values_and_flags(self, registry):
        sheet = parse_sheet_body("pointSize: 6; objColor: #FF0000; fixed", registry, name="red")
        assert sheet.name == "red"
        assert sheet.get_property("pointSize") == {"val": "6"}
        assert sheet.get_property("objColor") == {"r": "255", "g": "0", "b": "0"}
        assert sheet.get_property("fixed") == {"val": "true"}

    def test_keyed_by_element_name(self, registry):
        sheet = parse_sheet_body('showIf: "a > 2"; showGeneralAngle', registry)
        assert list(sheet) == ["condition", "emphasizeRightAngle"]

    def test_quoted_separator_in_value(self, registry):
        sheet = parse_sheet_body('caption: "Point; with semicolon"', registry)
        assert sheet.get_property("caption") == {"val": "Point; with semicolon"}

    def test_reset_entry(self, registry):
        sheet = parse_sheet_body("~lineStyle", registry)
        assert sheet.get_property("lineStyle") == {RESET_MARKER: ""}

    def test_reset_then_value_keeps_marker(self, registry):
        sheet = parse_sheet_body("~lineStyle; lineStyle: dotted", registry)
        assert sheet.get_property("lineStyle") == {RESET_MARKER: "", "type": "20", "thickness": "5"}

    def test_value_then_reset_keeps_value(self, registry):
        sheet = parse_sheet_body("lineStyle: dotted; ~lineStyle", registry)
        attrs = sheet.get_property("lineStyle")
        assert has_reset(attrs)
        assert attrs["type"] == "20"

    def test_later_entry_replaces_earlier(self, registry):
        sheet = parse_sheet_body("pointSize: 6; pointSize: 8", registry)
        assert sheet.get_property("pointSize") == {"val": "8"}

    def test_omitted_value_is_skipped(self, registry):
        sheet = parse_sheet_body("pointStyle: zigzag; layer: 1", registry)
        assert "pointStyle" not in sheet
        assert len(sheet) == 1

    def test_unknown_property_strict(self, registry):
        with pytest.raises(ParseError, match="Unknown property: sparkle"):
            parse_sheet_body("sparkle: 3", registry)

    def test_unknown_property_lenient(self, registry, caplog):
        with caplog.at_level(logging.WARNING, logger="gpad.stylesheet"):
            sheet = parse_sheet_body("sparkle: 3; layer: 1", registry, strict=False)
        assert list(sheet) == ["layer"]
        assert "sparkle" in caplog.text

    def test_value_required(self, registry):
        with pytest.raises(ParseError, match="Property show requires a value"):
            parse_sheet_body("show", registry)

    def test_reset_takes_no_value(self, registry):
        with pytest.raises(ParseError, match="Reset marker"):
            parse_sheet_body("~objColor: #FF0000", registry)

    def test_invalid_entry(self, registry):
        with pytest.raises(ParseError, match="Invalid style entry"):
            parse_sheet_body("6: pointSize", registry)

    def test_codec_error_gets_line(self, registry):
        with pytest.raises(ParseError) as exc_info:
            parse_sheet_body("show: bogus", registry, line=7)
        assert exc_info.value.line == 7
        assert "(line 7)" in str(exc_info.value)


# ---------------------------------------------------------------------------
# StyleSheet model
# ---------------------------------------------------------------------------


class TestStyleSheetModel:
    def test_merge_updates_keys(self):
        base = StyleSheet("a", {"objColor": {"r": "255", "g": "0", "b": "0"}})
        base.merge_from(StyleSheet("b", {"objColor": {"alpha": "0.5"}, "layer": {"val": "2"}}))
        assert base.get_property("objColor") == {"r": "255", "g": "0", "b": "0", "alpha": "0.5"}
        assert base.get_property("layer") == {"val": "2"}

    def test_merge_with_reset_replaces(self):
        base = StyleSheet("a", {"objColor": {"r": "255", "g": "0", "b": "0"}})
        base.merge_from(StyleSheet("b", {"objColor": {RESET_MARKER: "", "alpha": "0.5"}}))
        assert base.get_property("objColor") == {RESET_MARKER: "", "alpha": "0.5"}

    def test_merge_does_not_alias(self):
        other = StyleSheet("b", {"layer": {"val": "2"}})
        base = StyleSheet()
        base.merge_from(other)
        base.set_property("layer", {"val": "3"})
        assert other.get_property("layer") == {"val": "2"}

    def test_get_property_returns_copy(self):
        sheet = StyleSheet("", {"layer": {"val": "1"}})
        sheet.get_property("layer")["val"] = "9"
        assert sheet.get_property("layer") == {"val": "1"}

    def test_remove_property(self):
        sheet = StyleSheet("", {"layer": {"val": "1"}})
        assert sheet.remove_property("layer") == {"val": "1"}
        assert sheet.remove_property("layer") is None
        assert len(sheet) == 0

    def test_copy_and_rename(self):
        sheet = StyleSheet("a", {"layer": {"val": "1"}})
        clone = sheet.copy(name="b")
        assert clone.name == "b"
        assert clone.properties == sheet.properties
        assert clone != sheet

    def test_anonymous(self):
        assert StyleSheet().is_anonymous()
        assert not StyleSheet("named").is_anonymous()

    def test_items_preserve_order(self):
        sheet = StyleSheet()
        sheet.set_property("show", {"object": "true"})
        sheet.set_property("layer", {"val": "1"})
        assert [element for element, _ in sheet.items()] == ["show", "layer"]
