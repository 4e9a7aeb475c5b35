"""Scanning and quoting helpers shared by the property codecs."""

from __future__ import annotations

import math
import re

from gpad.errors import ParseError

__all__ = [
    "read_quoted",
    "split_tokens",
    "split_top_level",
    "unquote",
    "read_string",
    "quote",
    "quote_always",
    "key_value",
    "is_number",
    "truncate_int",
    "same_number",
    "is_true",
]

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "\\": "\\"}
_REVERSE_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}

# Characters (and the comment marker) that force a string leaf into quotes.
_NEEDS_QUOTES_RE = re.compile(r'[\s,;}"\\]|//')

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

_KEY_VALUE_RE = re.compile(r"^(?P<key>[A-Za-z_][A-Za-z0-9_]*)=(?P<value>.*)$", re.DOTALL)

_OPEN = "([{"
_CLOSE = ")]}"


def read_quoted(text: str, start: int) -> tuple[str, int]:
    """Read the double-quoted string that starts at ``text[start]``.

    Returns the unescaped value and the index just past the closing quote.
    """
    out: list[str] = []
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\" and i + 1 < len(text):
            nxt = text[i + 1]
            if nxt in _ESCAPES:
                out.append(_ESCAPES[nxt])
            else:
                out.append(ch + nxt)
            i += 2
            continue
        if ch == '"':
            return "".join(out), i + 1
        out.append(ch)
        i += 1
    raise ParseError(f"Unterminated string: {text[start:]}")


def _scan(text: str, stop) -> list[str]:
    """Split text at top-level positions where ``stop(ch)`` is true.

    Quoted strings and bracketed groups are never split.
    """
    pieces: list[str] = []
    buf: list[str] = []
    depth = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == '"':
            _, end = read_quoted(text, i)
            buf.append(text[i:end])
            i = end
            continue
        if ch in _OPEN:
            depth += 1
        elif ch in _CLOSE:
            depth = max(depth - 1, 0)
        elif depth == 0 and stop(ch):
            pieces.append("".join(buf))
            buf = []
            i += 1
            continue
        buf.append(ch)
        i += 1
    pieces.append("".join(buf))
    return pieces


def split_tokens(text: str) -> list[str]:
    """Split a property value into whitespace-separated raw tokens."""
    return [piece for piece in _scan(text, str.isspace) if piece]


def split_top_level(text: str, sep: str) -> list[str]:
    """Split text at every top-level occurrence of ``sep``."""
    return _scan(text, lambda ch: ch == sep)


def unquote(token: str) -> str:
    """Return the value of a token, removing quotes if it is quoted."""
    if not token.startswith('"'):
        return token
    value, end = read_quoted(token, 0)
    if end != len(token):
        raise ParseError(f"Unexpected text after string: {token}")
    return value


def read_string(text: str) -> str:
    """Read a string value made of quoted and bare segments.

    Segments are concatenated and the whitespace between them is dropped,
    so ``"a" "b"`` and ``"a"b`` both read as ``ab``.
    """
    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch.isspace():
            i += 1
        elif ch == '"':
            value, i = read_quoted(text, i)
            out.append(value)
        else:
            start = i
            while i < len(text) and not text[i].isspace() and text[i] != '"':
                i += 1
            out.append(text[start:i])
    return "".join(out)


def quote_always(value: str) -> str:
    return '"' + "".join(_REVERSE_ESCAPES.get(ch, ch) for ch in value) + '"'


def quote(value: str) -> str:
    """Quote a string leaf only when it cannot be written bare."""
    if value == "" or _NEEDS_QUOTES_RE.search(value):
        return quote_always(value)
    return value


def key_value(token: str) -> tuple[str, str | None]:
    """Split ``key=value``; returns ``(token, None)`` when there is no key."""
    match = _KEY_VALUE_RE.match(token)
    if match is None:
        return token, None
    return match.group("key"), match.group("value")


def is_number(text: str) -> bool:
    return bool(_NUMBER_RE.match(text.strip()))


def truncate_int(text: str, what: str) -> str:
    """Parse a number and truncate it toward zero."""
    if not is_number(text):
        raise ParseError(f"Invalid {what}: {text}")
    return str(int(float(text)))


def _as_float(text: str | None) -> float | None:
    if text is None:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def same_number(text: str | None, expected: float) -> bool:
    """True if text parses to ``expected`` (NaN equals NaN)."""
    value = _as_float(text)
    if value is None:
        return False
    if math.isnan(expected):
        return math.isnan(value)
    return abs(value - expected) < 1e-9


def is_true(text: str | None) -> bool:
    return text is not None and text.strip().lower() == "true"
