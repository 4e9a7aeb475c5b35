"""Hand-written parser for Gpad sheet bodies.

Syntax example (the text between the braces of a sheet)::

    pointSize: 6; objColor: #FF0000
    ~lineStyle
    fixed                    // bare name: boolean shorthand
    caption: "Point; with semicolon"
"""

from __future__ import annotations

import logging
import re

from gpad.codecs.base import CodecRegistry
from gpad.errors import ParseError
from gpad.stylesheet.model import StyleSheet

__all__ = ["parse_sheet_body", "split_entries"]

logger = logging.getLogger("gpad.stylesheet")

# Matches one entry: [~]name[: value]
_ENTRY_RE = re.compile(
    r"""
    ^(?P<reset>~)?                      # reset marker
    (?P<name>@?[A-Za-z_][A-Za-z0-9_]*)  # property name
    \s*
    (?::(?P<value>.*))?$                # optional value
    """,
    re.VERBOSE | re.DOTALL,
)

# A "//" starts a comment only at the start of an entry or after whitespace,
# so values such as URLs keep their "//".
_COMMENT_AFTER = frozenset(" \t\r\n;")


def split_entries(body: str) -> list[str]:
    """Split a sheet body at ``;`` and newlines, dropping ``//`` comments.

    Separators and comment markers inside double-quoted strings are kept.
    """
    entries: list[str] = []
    buf: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == '"':
            end = i + 1
            while end < len(body) and body[end] != '"':
                end += 2 if body[end] == "\\" else 1
            if end >= len(body):
                raise ParseError(f"Unterminated string in style sheet: {body[i:].strip()}")
            buf.append(body[i : end + 1])
            i = end + 1
            continue
        if body.startswith("//", i) and (i == 0 or body[i - 1] in _COMMENT_AFTER):
            while i < len(body) and body[i] != "\n":
                i += 1
            continue
        if ch in ";\n":
            entries.append("".join(buf))
            buf = []
        else:
            buf.append(ch)
        i += 1
    entries.append("".join(buf))
    return [entry.strip() for entry in entries if entry.strip()]


def parse_sheet_body(
    body: str,
    registry: CodecRegistry,
    *,
    name: str = "",
    strict: bool = True,
    line: int | None = None,
) -> StyleSheet:
    """Parse the inside of a ``{ ... }`` sheet into a StyleSheet."""
    sheet = StyleSheet(name)
    for entry in split_entries(body):
        match = _ENTRY_RE.match(entry)
        if match is None:
            raise ParseError(f"Invalid style entry: {entry}", line=line)
        prop = match.group("name")
        value = match.group("value")
        codec = registry.for_name(prop)
        if codec is None:
            if strict:
                raise ParseError(f"Unknown property: {prop}", line=line)
            logger.warning("Skipping unknown property %s", prop)
            continue

        if match.group("reset"):
            if value is not None:
                raise ParseError(f"Reset marker takes no value: {entry}", line=line)
            sheet.reset_property(codec.element)
            continue

        if value is None:
            if not codec.flag:
                raise ParseError(f"Property {prop} requires a value", line=line)
            value = ""
        try:
            attrs = codec.decode(value.strip())
        except ParseError as exc:
            if exc.line is None:
                exc.line = line
            raise
        if attrs is None:
            logger.debug("Property %s omitted: %r", prop, value)
            continue
        sheet.set_property(codec.element, attrs)
    return sheet
