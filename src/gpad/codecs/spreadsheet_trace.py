"""spreadsheetTrace codec.

``spreadsheetTrace: trace column=2 row=5/20 reset ~label list``
"""

from __future__ import annotations

import re
from typing import Mapping

from gpad.codecs.base import AttributeMap, PropertyCodec
from gpad.codecs.text import is_true, key_value, split_tokens
from gpad.errors import ParseError

_FLAGS: dict[str, str] = {
    "trace": "val",
    "reset": "doColumnReset",
    "label": "showLabel",
    "list": "showTraceList",
    "copy": "doTraceGeoCopy",
    "pause": "pause",
}

_ROW_RE = re.compile(r"^(?P<row>\d+)(?:/(?P<limit>\d+))?$")

_DEFAULTS = {
    "val": "false",
    "doRowLimit": "false",
    "doColumnReset": "false",
    "showLabel": "true",
    "showTraceList": "false",
    "doTraceGeoCopy": "false",
    "pause": "false",
}


def decode_spreadsheet_trace(value: str) -> AttributeMap | None:
    attrs: AttributeMap = {}
    for token in split_tokens(value):
        name = token[1:] if token.startswith("~") else token
        if name in _FLAGS:
            attrs[_FLAGS[name]] = "false" if token.startswith("~") else "true"
            continue
        key, val = key_value(token)
        if key == "column" and val is not None:
            if not val.isdigit():
                raise ParseError(f"Invalid trace column: {val}")
            attrs["traceColumn1"] = val
        elif key == "row" and val is not None:
            match = _ROW_RE.match(val)
            if match is None:
                raise ParseError(f"Invalid trace row: {val}")
            attrs["traceRow1"] = match.group("row")
            if match.group("limit") is not None:
                attrs["numRows"] = match.group("limit")
                attrs["doRowLimit"] = "true"
            else:
                attrs["doRowLimit"] = "false"
        else:
            raise ParseError(f"Invalid spreadsheetTrace token: {token}")
    return attrs or None


def encode_spreadsheet_trace(attrs: Mapping[str, str]) -> str | None:
    parts: list[str] = []
    if is_true(attrs.get("val")):
        parts.append("trace")
    if "traceColumn1" in attrs:
        parts.append(f"column={attrs['traceColumn1']}")
    if "traceRow1" in attrs:
        row = attrs["traceRow1"]
        if is_true(attrs.get("doRowLimit")) and "numRows" in attrs:
            row += "/" + attrs["numRows"]
        parts.append(f"row={row}")
    if is_true(attrs.get("doColumnReset")):
        parts.append("reset")
    if attrs.get("showLabel", "true").strip().lower() == "false":
        parts.append("~label")
    for token in ("list", "copy", "pause"):
        if is_true(attrs.get(_FLAGS[token])):
            parts.append(token)
    return " ".join(parts) or None


SPREADSHEET_TRACE = PropertyCodec(
    name="spreadsheetTrace",
    element="spreadsheetTrace",
    decode=decode_spreadsheet_trace,
    encode=encode_spreadsheet_trace,
    defaults=_DEFAULTS,
)
