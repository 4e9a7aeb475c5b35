"""Statement records produced by the parser and consumed by the host."""

from __future__ import annotations

from dataclasses import dataclass, field

from gpad.stylesheet.model import StyleSheet


@dataclass(frozen=True)
class Target:
    """One label on the left-hand side of an object statement."""

    label: str
    show_object: bool = True
    show_label: bool = True
    style_refs: tuple[str | StyleSheet, ...] = ()
    """Named references (sheet names without ``@``) and inline sheets, in order."""
    variables: tuple[str, ...] = ()
    """Function variables written after the label, as in ``f(x, y)``."""

    @classmethod
    def from_flag(
        cls,
        label: str,
        flag: str | None,
        style_refs: tuple = (),
        variables: tuple[str, ...] = (),
    ) -> Target:
        """Build a target from its label flag: ``*`` hides the object, ``~`` the label."""
        return cls(
            label=label,
            show_object=flag != "*",
            show_label=flag != "~",
            style_refs=tuple(style_refs),
            variables=tuple(variables),
        )

    @property
    def head(self) -> str:
        """The label as written, with its variable list: ``f(x, y)``."""
        if not self.variables:
            return self.label
        return f"{self.label}({', '.join(self.variables)})"


@dataclass(frozen=True)
class ObjectStatement:
    """``target, target, ... = rhs`` with the RHS kept as opaque text."""

    targets: tuple[Target, ...]
    rhs: str
    line: int | None = None

    @property
    def labels(self) -> list[str]:
        return [t.label for t in self.targets]


@dataclass
class CreationRequest:
    """A resolved statement ready for the construction collaborator."""

    statement: ObjectStatement
    styles: dict[str, StyleSheet] = field(default_factory=dict)
    """Merged style sheet per target label; labels without styles are absent."""

    @property
    def labels(self) -> list[str]:
        return self.statement.labels

    @property
    def rhs(self) -> str:
        return self.statement.rhs

    @property
    def targets(self) -> tuple[Target, ...]:
        return self.statement.targets
