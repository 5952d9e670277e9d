"""Item classification: resolved symbols to snapshot items."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .models import (
    EngineConfig,
    Item,
    Snapshot,
    WarningCode,
    WarningEntry,
)
from .normalizer import normalize_type_list
from .symbols import ResolvedSymbol, SymbolKind, SymbolTable, TypeShape


@dataclass
class ClassificationResult:
    """Snapshot built from one symbol table plus the diagnostics raised."""
    snapshot: Snapshot = field(default_factory=dict)
    warnings: list[WarningEntry] = field(default_factory=list)


class Classifier:
    """
    Walks a module's exported symbols once and produces one Item per name.

    Dispatch:
    - func  -> Func item (methods keep their receiver)
    - var   -> Var item
    - const -> Const item
    - type  -> Struct or Interface item, by underlying shape
    Anything else is skipped with a warning; a single bad symbol never
    aborts the run.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.warnings: list[WarningEntry] = []

    def classify(self, symbols: SymbolTable | Iterable[ResolvedSymbol]) -> ClassificationResult:
        """Classify every exported symbol into a fresh snapshot."""
        self.warnings = []
        if isinstance(symbols, SymbolTable):
            symbols = symbols.symbols

        snapshot: Snapshot = {}
        for symbol in symbols:
            if not symbol.is_exported:
                continue
            item = self.classify_symbol(symbol)
            if item is not None:
                snapshot[symbol.name] = item

        return ClassificationResult(snapshot=snapshot, warnings=self.warnings)

    def classify_symbol(self, symbol: ResolvedSymbol) -> Optional[Item]:
        """Classify one symbol, or return None and record a warning."""
        if symbol.kind == SymbolKind.FUNC:
            return self._handle_func(symbol)
        elif symbol.kind == SymbolKind.VAR:
            return self._handle_var(symbol)
        elif symbol.kind == SymbolKind.CONST:
            return Item.constant(symbol.type)
        elif symbol.kind == SymbolKind.TYPE:
            return self._handle_type_name(symbol)

        self._add_warning(
            symbol.name,
            WarningCode.UNSUPPORTED_SYMBOL,
            f"{symbol.kind_name or symbol.kind.value} symbols are not supported"
        )
        return None

    def _handle_func(self, symbol: ResolvedSymbol) -> Item:
        sig = symbol.signature
        if sig is None:
            return Item.function()
        return Item.function(
            arg_types=normalize_type_list(sig.params),
            res_types=normalize_type_list(sig.results),
            variadic=sig.variadic,
            receiver=sig.receiver,
        )

    def _handle_var(self, symbol: ResolvedSymbol) -> Item:
        return Item.variable(symbol.type)

    def _handle_type_name(self, symbol: ResolvedSymbol) -> Optional[Item]:
        underlying = symbol.underlying
        if underlying is not None and underlying.shape == TypeShape.STRUCT:
            return self._handle_struct(symbol)
        if underlying is not None and underlying.shape == TypeShape.INTERFACE:
            return self._handle_interface(symbol)

        description = underlying.description if underlying is not None else "unknown"
        self._add_warning(
            symbol.name,
            WarningCode.UNSUPPORTED_TYPE,
            f"named type with underlying '{description}' is not implemented"
        )
        return None

    def _handle_struct(self, symbol: ResolvedSymbol) -> Item:
        fields = {}
        for f in symbol.underlying.fields:
            if self._keep_member(symbol.name, f):
                fields[f.name] = self._handle_var(f)

        return Item.struct(
            type_name=symbol.type,
            fields=fields,
            methods=self._method_set(symbol),
        )

    def _handle_interface(self, symbol: ResolvedSymbol) -> Item:
        return Item.interface(
            type_name=symbol.type,
            methods=self._method_set(symbol),
        )

    def _method_set(self, symbol: ResolvedSymbol) -> dict[str, Item]:
        methods = {}
        for m in symbol.underlying.methods:
            if self._keep_member(symbol.name, m):
                methods[m.name] = self._handle_func(m)
        return methods

    def _keep_member(self, owner: str, member: ResolvedSymbol) -> bool:
        if member.is_exported:
            return True
        if self.config.warn_unexported_members:
            self._add_warning(
                f"{owner}.{member.name}",
                WarningCode.UNEXPORTED_MEMBER,
                "unexported member left out of the snapshot"
            )
        return False

    def _add_warning(self, name: str, code: WarningCode, message: str):
        self.warnings.append(WarningEntry(name=name, code=code, message=message))


def classify(
    symbols: SymbolTable | Iterable[ResolvedSymbol],
    config: Optional[EngineConfig] = None
) -> ClassificationResult:
    """Convenience function to classify a symbol table."""
    return Classifier(config).classify(symbols)
