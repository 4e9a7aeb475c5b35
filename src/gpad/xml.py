"""Read the style-attribute subset of element XML into attribute maps.

Only the children that describe an object's style are of interest here.
Repeated children that Gpad writes as one property are folded into the flat
indexed forms used by the codecs: ``startPoint`` corners become
``"<i>:<key>"`` entries of one ``startPoint`` map and bar ``tag`` children
become ``"<bar>:<key>"`` entries of one ``barTag`` map.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from xml.etree import ElementTree as ET

from gpad.codecs.base import AttributeMap
from gpad.codecs.color import fill_type_index
from gpad.codecs.start_point import corners
from gpad.errors import ParseError

__all__ = ["ElementStyle", "parse_style_xml", "parse_elements_xml", "BAR_TAG_KEYS"]

# tag key -> color attribute
BAR_TAG_KEYS: dict[str, str] = {
    "barAlpha": "alpha",
    "barFillType": "fillType",
    "barHatchAngle": "hatchAngle",
    "barHatchDistance": "hatchDistance",
    "barImage": "image",
    "barSymbol": "fillSymbol",
}

_RGBA_RE = re.compile(r"^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([\d.]+)\s*)?\)$")

_LISTENERS = {"objectUpdate": "jsUpdateFunction", "objectClick": "jsClickFunction"}


@dataclass
class ElementStyle:
    """Label, type and style map of one ``<element>``."""

    label: str
    type: str
    style: dict[str, AttributeMap] = field(default_factory=dict)


def _fold_tag(style: dict[str, AttributeMap], attrs: dict[str, str]) -> None:
    bar = attrs.get("barNumber")
    key = attrs.get("key", "")
    value = attrs.get("value", "")
    if bar is None:
        return
    target = style.setdefault("barTag", {})
    if key == "barColor":
        match = _RGBA_RE.match(value.strip())
        if match is None:
            return
        target[f"{bar}:r"], target[f"{bar}:g"], target[f"{bar}:b"] = match.group(1, 2, 3)
    elif key == "barFillType":
        index = fill_type_index(value.lower())
        if index is not None:
            target[f"{bar}:fillType"] = index
    elif key in BAR_TAG_KEYS:
        target[f"{bar}:{BAR_TAG_KEYS[key]}"] = value


def _collect(element: ET.Element) -> dict[str, AttributeMap]:
    style: dict[str, AttributeMap] = {}
    for child in element:
        attrs = dict(child.attrib)
        if child.tag == "startPoint":
            target = style.setdefault("startPoint", {})
            number = attrs.pop("number", None) or str(len(corners(target)))
            for key, value in attrs.items():
                target[f"{number}:{key}"] = value
        elif child.tag == "tags":
            for tag in child:
                _fold_tag(style, dict(tag.attrib))
        elif child.tag == "tag":
            _fold_tag(style, attrs)
        elif child.tag == "listener" and attrs.get("type") in _LISTENERS:
            style[_LISTENERS[attrs["type"]]] = {"val": attrs.get("val", "")}
        else:
            style[child.tag] = attrs
    return style


def _parse(text: str) -> ET.Element:
    try:
        return ET.fromstring(text)
    except ET.ParseError as exc:
        line, column = exc.position
        raise ParseError(f"Invalid style XML: {exc}", line=line, column=column) from exc


def parse_style_xml(text: str) -> dict[str, AttributeMap]:
    """Style map of the first ``<element>`` in text (or of the root itself)."""
    root = _parse(text)
    element = root if root.tag == "element" else root.find(".//element")
    return _collect(element if element is not None else root)


def parse_elements_xml(text: str) -> list[ElementStyle]:
    """Every ``<element>`` in text, with its label and style map."""
    root = _parse(text)
    elements = [root] if root.tag == "element" else root.iter("element")
    return [
        ElementStyle(
            label=element.get("label", ""),
            type=element.get("type", ""),
            style=_collect(element),
        )
        for element in elements
    ]
