"""Lark Transformer that converts a Gpad parse tree into statement records."""

from __future__ import annotations

from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import VisitError

from gpad.codecs import CodecRegistry, default_registry
from gpad.errors import ParseError
from gpad.model import ObjectStatement, Target
from gpad.stylesheet.model import StyleSheet
from gpad.stylesheet.parser import parse_sheet_body

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_parser: Lark | None = None


class _Sentinel:
    """Marker objects returned by transformer rules."""


class SheetDecl(_Sentinel):
    def __init__(self, sheet: StyleSheet, line: int | None):
        self.sheet = sheet
        self.line = line


class MacroDecl(_Sentinel):
    def __init__(
        self,
        name: str,
        inputs: list[str],
        outputs: list[str],
        body: list[_Sentinel | ObjectStatement],
        line: int | None,
    ):
        self.name = name
        self.inputs = inputs
        self.outputs = outputs
        self.body = body
        self.line = line


class _Params(_Sentinel):
    def __init__(self, labels: list[str]):
        self.labels = labels


class _Return(_Sentinel):
    def __init__(self, labels: list[str]):
        self.labels = labels


class _Variables(_Sentinel):
    def __init__(self, names: list[str]):
        self.names = names


class NamedRef(_Sentinel):
    def __init__(self, name: str, line: int | None):
        self.name = name
        self.line = line


class GpadTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into sheet, object and macro records.

    Sheet bodies are decoded here, so property errors surface before any
    statement is executed.
    """

    def __init__(self, registry: CodecRegistry, strict: bool = True):
        super().__init__()
        self._registry = registry
        self._strict = strict

    def _sheet(self, token: Token, name: str = "") -> StyleSheet:
        return parse_sheet_body(
            str(token)[1:-1],
            self._registry,
            name=name,
            strict=self._strict,
            line=token.line,
        )

    # ---- style references ----

    def named_ref(self, items: list[Token]) -> NamedRef:
        token = items[0]
        return NamedRef(str(token)[1:], token.line)

    def inline_ref(self, items: list[Token]) -> StyleSheet:
        return self._sheet(items[0])

    # ---- statements ----

    def sheet_def(self, items: list[Token]) -> SheetDecl:
        name_token, body = items
        return SheetDecl(self._sheet(body, name=str(name_token)[1:]), name_token.line)

    def target(self, items: list[object]) -> tuple[Target, int | None]:
        label = items[0]
        flag: str | None = None
        variables: list[str] = []
        refs: list[object] = []
        for item in items[1:]:
            if isinstance(item, Token) and item.type == "FLAG":
                flag = str(item)
            elif isinstance(item, _Variables):
                variables = item.names
            elif isinstance(item, NamedRef):
                refs.append(item.name)
            else:
                refs.append(item)
        target = Target.from_flag(str(label), flag, tuple(refs), tuple(variables))
        return target, label.line  # type: ignore[union-attr]

    def object_stmt(self, items: list[object]) -> ObjectStatement:
        rhs = str(items[-1]).rstrip()
        targets = [t for t, _ in items[:-1]]  # type: ignore[misc]
        line = items[0][1]  # type: ignore[index]
        return ObjectStatement(targets=tuple(targets), rhs=rhs, line=line)

    def variables(self, items: list[Token]) -> _Variables:
        return _Variables([str(t) for t in items])

    def params(self, items: list[Token]) -> _Params:
        return _Params([str(t) for t in items])

    def macro_return(self, items: list[Token]) -> _Return:
        return _Return([str(t) for t in items[1:]])

    def macro_def(self, items: list[object]) -> MacroDecl:
        keyword, name = items[0], items[1]
        inputs: list[str] = []
        outputs: list[str] = []
        body: list = []
        for item in items[2:]:
            if isinstance(item, _Params):
                inputs = item.labels
            elif isinstance(item, _Return):
                outputs = item.labels
            else:
                body.append(item)
        return MacroDecl(str(name), inputs, outputs, body, keyword.line)  # type: ignore[union-attr]

    def start(self, items: list[object]) -> list[object]:
        return list(items)


def _get_parser() -> Lark:
    global _parser
    if _parser is None:
        _parser = Lark(
            GRAMMAR_PATH.read_text(),
            parser="lalr",
            start="start",
            propagate_positions=True,
        )
    return _parser


def parse_statements(
    source: str, registry: CodecRegistry | None = None, *, strict: bool = True
) -> list[object]:
    """Parse Gpad source into SheetDecl, ObjectStatement and MacroDecl records."""
    if not source.strip():
        return []
    try:
        tree = _get_parser().parse(source)
    except Exception as e:
        # Try to extract line/column from Lark exceptions.
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise ParseError(f"Parse error: {e}", line=line, column=column) from e
    transformer = GpadTransformer(registry or default_registry(), strict=strict)
    try:
        return transformer.transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ParseError):
            raise e.orig_exc from None
        raise ParseError(f"Parse error: {e.orig_exc}") from e.orig_exc
