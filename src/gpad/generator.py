"""GpadGenerator: render objects and their style maps as a Gpad script.

The generator collects one record per construction step (labels, RHS and a
style map per label), turns style maps into named sheets, and writes the
sheets first and the statements after them. Statements keep their collection
order unless a style attribute refers to a label defined later, in which
case the referenced statement is moved up.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from gpad.codecs import CodecRegistry, default_registry
from gpad.codecs.base import AttributeMap
from gpad.config import GpadConfig
from gpad.converter import StyleConverter

logger = logging.getLogger("gpad.generator")

# Style attributes that may hold expressions referring to other labels.
TAGS_MAYBE_EXPR: dict[str, tuple[str, ...]] = {
    "animation": ("speed", "step"),
    "condition": ("showObject",),
    "dynamicCaption": ("val",),
    "ggbscript": ("val", "onUpdate", "onDragEnd", "onChange"),
    "incrementY": ("val",),
    "javascript": ("val", "onUpdate", "onDragEnd", "onChange"),
    "linkedGeo": ("exp",),
    "objColor": ("dynamicr", "dynamicg", "dynamicb", "dynamica"),
    "parentLabel": ("val",),
    "slider": ("min", "max"),
}

# Styles that only matter for objects drawn in the graphics view.
EUCLIDIAN_DISPLAY_STYLES = frozenset(
    {"angleStyle", "animation", "arcSize", "bgColor", "labelMode", "layer", "lineStyle", "objColor"}
)

# Object types drawn only when they carry the given element.
_DRAWN_WITH = {"numeric": "slider", "angle": "slider", "boolean": "checkbox", "list": "combo"}

_LABEL_RE = re.compile(r"\$?[^\W\d][\w'$]*")


@dataclass
class GeneratedObject:
    """One construction step: output labels, RHS and per-label style.

    Function labels keep their variable list: ``f(x)``.
    """

    labels: list[str]
    rhs: str
    styles: list[dict[str, AttributeMap]] = field(default_factory=list)
    object_type: str = ""


def filter_style(style: dict[str, AttributeMap], object_type: str) -> tuple[dict[str, AttributeMap], str]:
    """Strip what the statement itself carries; returns (style, label flag).

    The ``object`` and ``label`` attributes of ``show`` become the ``*``/``~``
    flag, view-only styles are dropped for objects not in the graphics view,
    and ``file`` is dropped because the RHS already names the file.
    """
    style = {element: dict(attrs) for element, attrs in style.items()}
    show = style.get("show")
    drawn = show is not None
    flag = ""
    if show is not None:
        if show.pop("object", None) == "false":
            flag = "*"
        if show.pop("label", None) == "false" and not flag:
            flag = "~"
        if not show:
            del style["show"]
    if drawn and object_type in _DRAWN_WITH:
        drawn = _DRAWN_WITH[object_type] in style
    if not drawn:
        for element in EUCLIDIAN_DISPLAY_STYLES:
            style.pop(element, None)
    style.pop("file", None)
    return style, flag


def base_label(label: str) -> str:
    """The label without a function variable list: ``f(x, y)`` -> ``f``."""
    return label.split("(", 1)[0].strip()


def label_references(text: str, labels: set[str]) -> set[str]:
    """Known labels mentioned in an expression or script text."""
    return {match.group(0).lstrip("$") for match in _LABEL_RE.finditer(text)} & labels


def stable_topological_order(deps: dict[int, set[int]], count: int) -> list[int]:
    """Kahn's algorithm that keeps the original order among ready items.

    Items caught in a cycle are appended in their original order.
    """
    in_degree = [0] * count
    dependents: dict[int, list[int]] = {}
    for item, needs in deps.items():
        for dep in needs:
            dependents.setdefault(dep, []).append(item)
            in_degree[item] += 1

    ready = [i for i in range(count) if in_degree[i] == 0]
    order: list[int] = []
    while ready:
        current = ready.pop(0)
        order.append(current)
        newly_ready = []
        for item in dependents.get(current, []):
            in_degree[item] -= 1
            if in_degree[item] == 0:
                newly_ready.append(item)
        ready.extend(sorted(newly_ready))

    if len(order) < count:
        logger.warning("Circular dependency detected, using original order for remaining items")
        seen = set(order)
        order.extend(i for i in range(count) if i not in seen)
    return order


class GpadGenerator:
    """Collect objects and render them as a Gpad script."""

    def __init__(
        self,
        registry: CodecRegistry | None = None,
        config: GpadConfig | None = None,
        *,
        in_macro: bool = False,
    ) -> None:
        self._config = config or GpadConfig()
        self._converter = StyleConverter(registry or default_registry())
        self._in_macro = in_macro
        self._objects: list[GeneratedObject] = []
        self._sheets: dict[str, str] = {}  # body -> sheet name, in creation order
        self._names: set[str] = set()
        self._counter = 0

    def add(self, obj: GeneratedObject) -> None:
        self._objects.append(obj)

    def add_object(
        self,
        label: str,
        rhs: str,
        style: dict[str, AttributeMap] | None = None,
        object_type: str = "",
    ) -> None:
        self.add(GeneratedObject([label], rhs, [style or {}], object_type))

    # ---- rendering ----

    def _sheet_name(self, label: str, body: str) -> str:
        if self._config.merge_stylesheets and body in self._sheets:
            return self._sheets[body]
        base = base_label(label)
        name = f"{base}Style" if base and _LABEL_RE.fullmatch(base) else ""
        while not name or name in self._names:
            self._counter += 1
            name = f"style{self._counter}"
        self._names.add(name)
        if body not in self._sheets:
            self._sheets[body] = name
        return name

    def _dependencies(self) -> dict[int, set[int]]:
        index_of: dict[str, int] = {}
        for i, obj in enumerate(self._objects):
            for label in obj.labels:
                index_of.setdefault(base_label(label), i)
        labels = set(index_of)
        deps: dict[int, set[int]] = {}
        for i, obj in enumerate(self._objects):
            for style in obj.styles:
                for element, attrs in style.items():
                    for attr in TAGS_MAYBE_EXPR.get(element, ()):
                        value = attrs.get(attr)
                        if not value:
                            continue
                        for ref in label_references(value, labels):
                            if index_of[ref] != i:
                                deps.setdefault(i, set()).add(index_of[ref])
        return deps

    def _statement(self, obj: GeneratedObject, sheet_lines: list[str]) -> str:
        targets: list[str] = []
        for position, label in enumerate(obj.labels):
            style = obj.styles[position] if position < len(obj.styles) else {}
            style, flag = filter_style(style, obj.object_type)
            out_label = label or self._config.empty_label_placeholder
            text = out_label + flag
            body = self._converter.convert(style)
            if body is not None:
                known = body in self._sheets and self._config.merge_stylesheets
                name = self._sheet_name(label, body)
                if not known:
                    sheet_lines.append(f"@{name} = {body}")
                text += f" @{name}"
            targets.append(text)
        return f"{', '.join(targets)} = {obj.rhs};"

    def generate(self) -> str:
        """Render every collected object; sheets come before statements."""
        self._sheets.clear()
        self._names.clear()
        self._counter = 0
        sheet_lines: list[str] = []
        statements = [self._statement(obj, sheet_lines) for obj in self._objects]
        order = stable_topological_order(self._dependencies(), len(self._objects))
        indent = self._config.indent if self._in_macro else ""
        lines = sheet_lines + [statements[i] for i in order]
        return "".join(f"{indent}{line}\n" for line in lines)

    def render_macro(self, name: str, inputs: list[str], outputs: list[str]) -> str:
        """Render the collected objects as the body of a ``@@macro`` block."""
        body = self.generate() if self._in_macro else self._indented()
        return (
            f"@@macro {name}({', '.join(inputs)}) {{\n"
            f"{body}"
            f"{self._config.indent}@@return {', '.join(outputs)}\n"
            "}\n"
        )

    def _indented(self) -> str:
        self._in_macro = True
        try:
            return self.generate()
        finally:
            self._in_macro = False
