"""Gpad configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GpadConfig:
    """Configuration shared by the parser, generator and CLI."""

    merge_stylesheets: bool = True
    """Reuse one named sheet for objects whose styles are identical."""

    indent: str = "    "
    """Indentation of statements inside generated macro bodies."""

    empty_label_placeholder: str = "OriginalEmpty1459"
    """Label written for objects that have no label of their own."""

    strict_properties: bool = True
    """Unknown property names raise ParseError; otherwise they are skipped."""
