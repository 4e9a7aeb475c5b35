"""GpadParser: run parsed statements against a construction.

Statements are executed in order. Object statements become creation
requests; at top level they are created and styled immediately, inside a
macro body they are buffered and handed to the construction when the macro
is registered. Each macro body gets its own sheet scope that is discarded
afterwards.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from gpad.applier import StyleApplier
from gpad.codecs import CodecRegistry, default_registry
from gpad.config import GpadConfig
from gpad.errors import ParseError
from gpad.host import Construction, StyleHost
from gpad.macros import MacroDefinition, MacroRegistry
from gpad.model import CreationRequest, ObjectStatement
from gpad.parser.transformer import MacroDecl, SheetDecl, parse_statements
from gpad.stylesheet.model import StyleSheet

logger = logging.getLogger("gpad.parser")


class _Scope:
    """Named sheets visible to the statements of one script or macro body."""

    def __init__(self, inherited: dict[str, StyleSheet] | None = None):
        self.sheets: dict[str, StyleSheet] = dict(inherited or {})
        self._defined: set[str] = set()

    def define(self, sheet: StyleSheet, line: int | None) -> None:
        if sheet.name in self._defined:
            raise ParseError(f"Style sheet @{sheet.name} is already defined", line=line)
        self._defined.add(sheet.name)
        self.sheets[sheet.name] = sheet

    def resolve(self, name: str, line: int | None) -> StyleSheet:
        sheet = self.sheets.get(name)
        if sheet is None:
            raise ParseError(f"Undefined style sheet: @{name}", line=line)
        return sheet


class _CommitStrategy(Protocol):
    def commit(self, request: CreationRequest) -> list[Any]: ...


class _ApplyImmediately:
    def __init__(self, construction: Construction, applier: StyleApplier):
        self._construction = construction
        self._applier = applier

    def commit(self, request: CreationRequest) -> list[Any]:
        line = request.statement.line
        try:
            handles = list(self._construction.create(request))
        except ParseError:
            raise
        except Exception as exc:
            raise ParseError(
                f"Failed to create {', '.join(request.labels)}: {exc}", line=line
            ) from exc

        for target, handle in zip(request.targets, handles):
            sheet = request.styles.get(target.label)
            if sheet is None or handle is None:
                continue
            try:
                self._applier.apply(sheet, handle)
            except ParseError as exc:
                if exc.line is None:
                    exc.line = line
                raise
        return handles


class _BufferForMacro:
    def __init__(self) -> None:
        self.requests: list[CreationRequest] = []

    def commit(self, request: CreationRequest) -> list[Any]:
        self.requests.append(request)
        return []


class GpadParser:
    """Parse Gpad scripts into objects of a construction.

    Named sheets defined at top level stay visible to later ``parse`` calls
    on the same parser. A failing parse leaves them as they were; objects
    created before the failing statement are kept.
    """

    def __init__(
        self,
        construction: Construction,
        *,
        host: StyleHost | None = None,
        applier: StyleApplier | None = None,
        registry: CodecRegistry | None = None,
        config: GpadConfig | None = None,
    ) -> None:
        self._construction = construction
        self._registry = registry or default_registry()
        self._config = config or GpadConfig()
        if applier is None:
            style_host = host if host is not None else construction
            if not isinstance(style_host, StyleHost):
                raise TypeError("construction does not implement StyleHost; pass host=")
            applier = StyleApplier(style_host, registry=self._registry)
        self._applier = applier
        self._global_sheets: dict[str, StyleSheet] = {}

    @property
    def global_style_sheets(self) -> dict[str, StyleSheet]:
        return dict(self._global_sheets)

    @property
    def construction(self) -> Construction:
        return self._construction

    def parse(self, source: str) -> list[Any]:
        """Parse and run source; returns the created object handles in order."""
        statements = parse_statements(
            source, self._registry, strict=self._config.strict_properties
        )
        scope = _Scope(self._global_sheets)
        strategy = _ApplyImmediately(self._construction, self._applier)
        macros = MacroRegistry(self._construction)
        created = self._run(statements, scope, strategy, macros)
        self._global_sheets = scope.sheets
        logger.debug(
            "Parsed %d statement(s): %d object(s), %d macro(s)",
            len(statements),
            len(created),
            len(macros.names),
        )
        return created

    # ---- statement execution ----

    def _run(
        self,
        statements: list[object],
        scope: _Scope,
        strategy: _CommitStrategy,
        macros: MacroRegistry,
    ) -> list[Any]:
        created: list[Any] = []
        for stmt in statements:
            if isinstance(stmt, SheetDecl):
                scope.define(stmt.sheet, stmt.line)
            elif isinstance(stmt, ObjectStatement):
                request = self._resolve(stmt, scope)
                logger.debug("Statement %s = %s", ", ".join(stmt.labels), stmt.rhs)
                created.extend(strategy.commit(request))
            elif isinstance(stmt, MacroDecl):
                self._define_macro(stmt, macros)
        return created

    def _resolve(self, stmt: ObjectStatement, scope: _Scope) -> CreationRequest:
        request = CreationRequest(statement=stmt)
        for target in stmt.targets:
            if not target.style_refs:
                continue
            merged = StyleSheet()
            for ref in target.style_refs:
                sheet = scope.resolve(ref, stmt.line) if isinstance(ref, str) else ref
                merged.merge_from(sheet)
            request.styles[target.label] = merged
        return request

    def _define_macro(self, decl: MacroDecl, macros: MacroRegistry) -> None:
        local = _Scope()
        buffer = _BufferForMacro()
        self._run(decl.body, local, buffer, macros)
        macros.register(
            MacroDefinition(
                name=decl.name,
                inputs=decl.inputs,
                outputs=decl.outputs,
                body=buffer.requests,
                sheets=local.sheets,
                line=decl.line,
            )
        )
