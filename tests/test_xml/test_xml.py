"""Tests for reading style attributes from element XML."""

import pytest

from gpad.errors import ParseError
from gpad.xml import parse_elements_xml, parse_style_xml


class TestParseStyleXml:
    def test_plain_children(self):
        style = parse_style_xml(
            '<element type="point" label="A">'
            '<show object="true" label="false" ev="4"/>'
            '<objColor r="255" g="0" b="0" alpha="0.5"/>'
            '<pointSize val="5"/>'
            "</element>"
        )
        assert style == {
            "show": {"object": "true", "label": "false", "ev": "4"},
            "objColor": {"r": "255", "g": "0", "b": "0", "alpha": "0.5"},
            "pointSize": {"val": "5"},
        }

    def test_first_element_of_document(self):
        style = parse_style_xml(
            "<geogebra><construction>"
            '<element type="point" label="A"><layer val="2"/></element>'
            '<element type="point" label="B"><layer val="3"/></element>'
            "</construction></geogebra>"
        )
        assert style == {"layer": {"val": "2"}}

    def test_start_point_corners(self):
        style = parse_style_xml(
            "<element>"
            '<startPoint number="0" exp="A"/>'
            '<startPoint number="1" x="1" y="2" z="1"/>'
            "</element>"
        )
        assert style["startPoint"] == {"0:exp": "A", "1:x": "1", "1:y": "2", "1:z": "1"}

    def test_start_point_without_numbers(self):
        style = parse_style_xml('<element><startPoint exp="A"/><startPoint exp="B"/></element>')
        assert style["startPoint"] == {"0:exp": "A", "1:exp": "B"}

    def test_bar_tags(self):
        style = parse_style_xml(
            "<element><tags>"
            '<tag key="barColor" barNumber="1" value="rgba(255,0,0,1)"/>'
            '<tag key="barFillType" barNumber="1" value="HATCH"/>'
            '<tag key="barAlpha" barNumber="2" value="0.5"/>'
            "</tags></element>"
        )
        assert style["barTag"] == {
            "1:r": "255",
            "1:g": "0",
            "1:b": "0",
            "1:fillType": "1",
            "2:alpha": "0.5",
        }

    def test_listeners(self):
        style = parse_style_xml(
            "<element>"
            '<listener type="objectUpdate" val="update()"/>'
            '<listener type="objectClick" val="click()"/>'
            "</element>"
        )
        assert style == {
            "jsUpdateFunction": {"val": "update()"},
            "jsClickFunction": {"val": "click()"},
        }

    def test_invalid_xml(self):
        with pytest.raises(ParseError, match="Invalid style XML") as exc_info:
            parse_style_xml("<element><layer val='1'></element>")
        assert exc_info.value.line == 1


class TestParseElementsXml:
    def test_all_elements(self):
        elements = parse_elements_xml(
            "<construction>"
            '<element type="point" label="A"><layer val="2"/></element>'
            '<element type="numeric" label="n"><caption val="Speed"/></element>'
            "</construction>"
        )
        assert [(e.label, e.type) for e in elements] == [("A", "point"), ("n", "numeric")]
        assert elements[1].style == {"caption": {"val": "Speed"}}

    def test_single_element_root(self):
        (element,) = parse_elements_xml('<element type="text" label="t"/>')
        assert element.label == "t"
        assert element.style == {}
