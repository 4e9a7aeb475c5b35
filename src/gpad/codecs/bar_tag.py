"""barTag codec: per-bar color and fill overrides for bar charts.

``barTag: bar=1 #FF0000 | bar=2 #00FF00 fill=hatch angle=30``

Each ``|`` block names its bar with ``bar=<n>`` (1-based) and otherwise uses
the color grammar. Bar n's attributes are stored under ``"n:<key>"``.
"""

from __future__ import annotations

import logging
from typing import Mapping

from gpad.codecs.base import AttributeMap, PropertyCodec
from gpad.codecs.color import COLOR_DEFAULTS, decode_color_tokens, encode_color
from gpad.codecs.text import key_value, split_tokens, split_top_level
from gpad.errors import ParseError

logger = logging.getLogger("gpad.codecs")


def bars(attrs: Mapping[str, str]) -> dict[int, AttributeMap]:
    """Per-bar attribute maps keyed by bar number, in ascending order."""
    grouped: dict[int, AttributeMap] = {}
    for key, value in attrs.items():
        index, sep, name = key.partition(":")
        if not sep or not index.isdigit():
            continue
        grouped.setdefault(int(index), {})[name] = value
    return dict(sorted(grouped.items()))


def decode_bar_tag(value: str) -> AttributeMap | None:
    attrs: AttributeMap = {}
    for block in split_top_level(value, "|"):
        bar: str | None = None
        rest: list[str] = []
        for token in split_tokens(block):
            key, val = key_value(token)
            if key == "bar" and val is not None:
                if not val.isdigit() or int(val) < 1:
                    raise ParseError(f"Invalid bar number: {val}")
                bar = str(int(val))
            else:
                rest.append(token)
        if bar is None:
            if block.strip():
                logger.warning("Skipping barTag block without bar=: %s", block.strip())
            continue
        color = decode_color_tokens(rest)
        if color is None:
            continue
        if "colorSpace" in color:
            raise ParseError(f"barTag does not accept dynamic colors: {block.strip()}")
        for key, val in color.items():
            attrs[f"{bar}:{key}"] = val
    return attrs or None


def encode_bar_tag(attrs: Mapping[str, str]) -> str | None:
    blocks: list[str] = []
    for number, block in bars(attrs).items():
        text = encode_color(block)
        blocks.append(f"bar={number} {text}" if text else f"bar={number}")
    return " | ".join(blocks) or None


BAR_TAG = PropertyCodec(
    name="barTag",
    element="barTag",
    decode=decode_bar_tag,
    encode=encode_bar_tag,
    defaults=COLOR_DEFAULTS,
)
