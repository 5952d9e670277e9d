"""Resolved symbol table handed over by a language front-end.

apibump never parses source code. A resolver (compiler front-end or type
checker) dumps the exported scope of a module as YAML or JSON and this
module reads that dump into plain dataclasses the classifier walks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .exceptions import SymbolTableError
from .utils import load_document


class SymbolKind(Enum):
    FUNC = "func"
    VAR = "var"
    CONST = "const"
    TYPE = "type"
    LABEL = "label"
    PKGNAME = "pkgname"
    BUILTIN = "builtin"
    NIL = "nil"
    UNKNOWN = "unknown"


class TypeShape(Enum):
    STRUCT = "struct"
    INTERFACE = "interface"
    OTHER = "other"


@dataclass
class Param:
    """A parameter or result descriptor.

    The textual form (``"ctx context.Context"``) lands in ``type_expr``. The
    structured form ``{name, type}`` keeps ``type`` separate, since the
    resolver has already split off the name.
    """
    type_expr: str = ""
    name: str = ""
    type: Optional[str] = None

    def __str__(self) -> str:
        if self.type is not None:
            return f"{self.name} {self.type}".strip()
        return self.type_expr


@dataclass
class Signature:
    params: list[Param] = field(default_factory=list)
    results: list[Param] = field(default_factory=list)
    variadic: bool = False
    receiver: Optional[str] = None


@dataclass
class UnderlyingType:
    """Structure behind a named type.

    ``methods`` is the full method set as computed by the resolver, so it
    already includes methods promoted through embedding.
    """
    shape: TypeShape
    description: str = ""
    fields: list[ResolvedSymbol] = field(default_factory=list)
    methods: list[ResolvedSymbol] = field(default_factory=list)


@dataclass
class ResolvedSymbol:
    name: str
    kind: SymbolKind
    type: str = ""
    signature: Optional[Signature] = None
    underlying: Optional[UnderlyingType] = None
    exported: Optional[bool] = None
    kind_name: str = ""

    @property
    def is_exported(self) -> bool:
        if self.exported is not None:
            return self.exported
        return is_exported_name(self.name)


@dataclass
class SymbolTable:
    module: str = ""
    symbols: list[ResolvedSymbol] = field(default_factory=list)

    def exported(self) -> list[ResolvedSymbol]:
        return [s for s in self.symbols if s.is_exported]


def is_exported_name(name: str) -> bool:
    """An identifier is exported when it starts with an upper-case letter."""
    return bool(name) and name[0].isupper()


def load_symbol_table(data: Any) -> SymbolTable:
    """Build a SymbolTable from a parsed resolver dump."""
    if not isinstance(data, dict):
        raise SymbolTableError(
            f"Resolver dump must be a mapping, got {type(data).__name__}"
        )

    symbols = data.get('symbols', [])
    if not isinstance(symbols, list):
        raise SymbolTableError("'symbols' must be a list")

    return SymbolTable(
        module=str(data.get('module', '')),
        symbols=[_parse_symbol(s) for s in symbols],
    )


def load_symbol_table_file(path: str) -> SymbolTable:
    """Read a resolver dump (YAML or JSON) from disk."""
    try:
        data = load_document(path)
    except ValueError as e:
        raise SymbolTableError(str(e))
    return load_symbol_table(data)


def _parse_symbol(raw: Any) -> ResolvedSymbol:
    if not isinstance(raw, dict):
        raise SymbolTableError(f"Symbol entry must be a mapping, got {raw!r}")

    name = raw.get('name')
    if not name or not isinstance(name, str):
        raise SymbolTableError(f"Symbol entry without a name: {raw!r}")

    kind_name = str(raw.get('kind', '')).lower()
    try:
        kind = SymbolKind(kind_name)
    except ValueError:
        kind = SymbolKind.UNKNOWN

    symbol = ResolvedSymbol(
        name=name,
        kind=kind,
        type=str(raw.get('type') or ''),
        exported=raw.get('exported'),
        kind_name=kind_name,
    )

    if kind == SymbolKind.FUNC:
        symbol.signature = _parse_signature(raw.get('signature') or {}, name)
    elif kind == SymbolKind.TYPE:
        underlying = raw.get('underlying')
        if not isinstance(underlying, dict):
            raise SymbolTableError("named type without 'underlying'", symbol=name)
        symbol.underlying = _parse_underlying(underlying, name)

    return symbol


def _parse_signature(raw: Any, name: str) -> Signature:
    if not isinstance(raw, dict):
        raise SymbolTableError("'signature' must be a mapping", symbol=name)

    return Signature(
        params=[_parse_param(p, name) for p in raw.get('params') or []],
        results=[_parse_param(p, name) for p in raw.get('results') or []],
        variadic=bool(raw.get('variadic', False)),
        receiver=raw.get('receiver') or None,
    )


def _parse_param(raw: Any, name: str) -> Param:
    if isinstance(raw, str):
        return Param(type_expr=raw)
    if isinstance(raw, dict) and 'type' in raw:
        return Param(name=str(raw.get('name') or ''), type=str(raw['type']))
    raise SymbolTableError(f"Invalid parameter descriptor: {raw!r}", symbol=name)


def _parse_underlying(raw: dict, name: str) -> UnderlyingType:
    shape_name = str(raw.get('shape', '')).lower()
    try:
        shape = TypeShape(shape_name)
    except ValueError:
        shape = TypeShape.OTHER

    underlying = UnderlyingType(shape=shape, description=shape_name)

    for f in raw.get('fields') or []:
        if not isinstance(f, dict) or not _is_member_name(f.get('name')):
            raise SymbolTableError(f"Invalid field entry: {f!r}", symbol=name)
        underlying.fields.append(ResolvedSymbol(
            name=f['name'],
            kind=SymbolKind.VAR,
            type=str(f.get('type') or ''),
            exported=f.get('exported'),
            kind_name='var',
        ))

    for m in raw.get('methods') or []:
        if not isinstance(m, dict) or not _is_member_name(m.get('name')):
            raise SymbolTableError(f"Invalid method entry: {m!r}", symbol=name)
        underlying.methods.append(ResolvedSymbol(
            name=m['name'],
            kind=SymbolKind.FUNC,
            signature=_parse_signature(m.get('signature') or {}, f"{name}.{m['name']}"),
            exported=m.get('exported'),
            kind_name='func',
        ))

    return underlying


def _is_member_name(name: Any) -> bool:
    # YAML reads unquoted On/Off/Yes/No as booleans
    return isinstance(name, str) and bool(name)
