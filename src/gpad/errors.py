"""Error types shared by every Gpad component."""

from __future__ import annotations


class ParseError(Exception):
    """Raised when Gpad source cannot be parsed, resolved or applied."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.line is not None and self.column is not None:
            return f"{message} (line {self.line}, column {self.column})"
        if self.line is not None:
            return f"{message} (line {self.line})"
        return message
