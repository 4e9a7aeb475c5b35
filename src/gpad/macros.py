"""Macro definitions: validation and registration with the construction."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from gpad.errors import ParseError
from gpad.host import Construction
from gpad.model import CreationRequest
from gpad.stylesheet.model import StyleSheet

logger = logging.getLogger("gpad.macros")


@dataclass
class MacroDefinition:
    """A ``@@macro`` block after its body has been parsed and buffered."""

    name: str
    inputs: list[str]
    outputs: list[str]
    body: list[CreationRequest] = field(default_factory=list)
    sheets: dict[str, StyleSheet] = field(default_factory=dict)
    """Sheets defined inside the body; never visible outside it."""

    line: int | None = None

    def defined_labels(self) -> list[str]:
        """Labels assigned by the body, in statement order."""
        labels: list[str] = []
        for request in self.body:
            labels.extend(request.labels)
        return labels


def validate_macro(macro: MacroDefinition) -> None:
    """Check that every input is assigned and every output is defined."""
    defined = set(macro.defined_labels())
    for label in macro.inputs:
        if label not in defined:
            raise ParseError(
                f"Input object '{label}' not found in macro {macro.name}", line=macro.line
            )
    for label in macro.outputs:
        if label not in defined:
            raise ParseError(
                f"Output object '{label}' not found in macro {macro.name}", line=macro.line
            )


class MacroRegistry:
    """Registers the macros of one parse with the construction collaborator."""

    def __init__(self, construction: Construction) -> None:
        self._construction = construction
        self._names: set[str] = set()

    def register(self, macro: MacroDefinition) -> None:
        if macro.name in self._names:
            raise ParseError(f"Macro {macro.name} already exists", line=macro.line)
        validate_macro(macro)
        try:
            self._construction.register_macro(macro)
        except ParseError:
            raise
        except Exception as exc:
            raise ParseError(
                f"Failed to register macro {macro.name}: {exc}", line=macro.line
            ) from exc
        self._names.add(macro.name)
        logger.info(
            "Registered macro %s(%s) -> %s",
            macro.name,
            ", ".join(macro.inputs),
            ", ".join(macro.outputs),
        )

    @property
    def names(self) -> list[str]:
        return sorted(self._names)
