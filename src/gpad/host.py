"""Collaborator protocols and an in-memory host.

The Gpad core never evaluates the right-hand side of a statement or draws
anything. It talks to the surrounding application through two protocols:
``Construction`` creates objects and registers macros, ``StyleHost`` receives
style elements. ``StubConstruction`` implements both in memory and backs the
CLI and the tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, runtime_checkable

from gpad.codecs.base import AttributeMap
from gpad.model import CreationRequest

logger = logging.getLogger("gpad.host")


@runtime_checkable
class Construction(Protocol):
    def create(self, request: CreationRequest) -> list[Any]:
        """Create the objects for one statement, one handle per target.

        A function target carries its variables; ``target.head`` gives
        ``f(x, y)`` as written.
        """
        ...

    def register_macro(self, macro: Any) -> None:
        """Register a validated MacroDefinition; raise if the name exists."""
        ...


@runtime_checkable
class StyleHost(Protocol):
    def start_element(self, obj: Any, name: str, attrs: Mapping[str, str]) -> None: ...

    def finish(self, obj: Any) -> None: ...

    def clear_property(self, obj: Any, element: str) -> bool: ...

    def default_style_xml(self, default_type: str) -> str | None: ...

    def default_type(self, obj: Any) -> str: ...

    def current_value(self, obj: Any) -> str | None: ...

    def set_script_slot(self, obj: Any, slot: str, value: str) -> None: ...

    def sync_trace(self, obj: Any) -> None: ...


@dataclass
class StubObject:
    """An object created by StubConstruction."""

    label: str
    rhs: str
    show_object: bool = True
    show_label: bool = True
    object_type: str = "point"
    value: str | None = None
    style: dict[str, AttributeMap] = field(default_factory=dict)
    events: list[tuple[str, AttributeMap]] = field(default_factory=list)
    scripts: dict[str, str] = field(default_factory=dict)
    finished: int = 0
    trace_syncs: int = 0
    variables: tuple[str, ...] = ()

    @property
    def head(self) -> str:
        if not self.variables:
            return self.label
        return f"{self.label}({', '.join(self.variables)})"


class StubConstruction:
    """In-memory Construction and StyleHost.

    ``failing`` holds RHS texts whose creation raises ValueError, and
    ``default_styles`` maps a default type to its default-style XML.
    """

    def __init__(
        self,
        *,
        failing: set[str] | None = None,
        default_styles: Mapping[str, str] | None = None,
        failing_elements: set[str] | None = None,
    ) -> None:
        self.objects: dict[str, StubObject] = {}
        self.macros: dict[str, Any] = {}
        self.failing = set(failing or ())
        self.failing_elements = set(failing_elements or ())
        self.default_styles = dict(default_styles or {})
        self.default_style_requests: list[str] = []

    # ---- Construction ----

    def create(self, request: CreationRequest) -> list[StubObject]:
        if request.rhs in self.failing:
            raise ValueError(f"Invalid expression: {request.rhs}")
        created = []
        object_type = _guess_type(request.rhs)
        for target in request.targets:
            obj = StubObject(
                label=target.label,
                rhs=request.rhs,
                show_object=target.show_object,
                show_label=target.show_label,
                object_type=object_type,
                variables=target.variables,
                value=request.rhs.strip() if object_type in ("numeric", "boolean") else None,
            )
            self.objects[target.label] = obj
            created.append(obj)
        logger.debug("Created %s = %s", ", ".join(request.labels), request.rhs)
        return created

    def register_macro(self, macro: Any) -> None:
        if macro.name in self.macros:
            raise ValueError(f"Macro {macro.name} already exists")
        self.macros[macro.name] = macro

    # ---- StyleHost ----

    def start_element(self, obj: StubObject, name: str, attrs: Mapping[str, str]) -> None:
        if name in self.failing_elements:
            raise ValueError(f"Cannot apply element {name}")
        obj.events.append((name, dict(attrs)))
        obj.style[name] = dict(attrs)

    def finish(self, obj: StubObject) -> None:
        obj.finished += 1

    def clear_property(self, obj: StubObject, element: str) -> bool:
        obj.style.pop(element, None)
        if element == "javascript":
            obj.scripts.pop("click_script", None)
        elif element == "jsUpdateFunction":
            obj.scripts.pop("update_listener", None)
        elif element == "jsClickFunction":
            obj.scripts.pop("click_listener", None)
        return True

    def default_style_xml(self, default_type: str) -> str | None:
        self.default_style_requests.append(default_type)
        return self.default_styles.get(default_type)

    def default_type(self, obj: StubObject) -> str:
        return obj.object_type

    def current_value(self, obj: StubObject) -> str | None:
        return obj.value

    def set_script_slot(self, obj: StubObject, slot: str, value: str) -> None:
        obj.scripts[slot] = value

    def sync_trace(self, obj: StubObject) -> None:
        obj.trace_syncs += 1


def _guess_type(rhs: str) -> str:
    """Rough object type from the RHS text, enough for default-style lookup."""
    text = rhs.strip()
    head = text.split("(", 1)[0].split("[", 1)[0].strip().lower()
    if head in ("segment", "line", "ray", "vector", "polygon", "circle", "slider"):
        return head
    if text.startswith("(") or head in ("point", "midpoint", "intersect"):
        return "point"
    if text in ("true", "false"):
        return "boolean"
    if text.startswith('"'):
        return "text"
    if text.lstrip("+-").replace(".", "", 1).isdigit():
        return "numeric"
    return "function"
