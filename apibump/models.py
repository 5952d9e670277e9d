"""Data models for the apibump engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional

from .exceptions import ConfigError
from .utils import item_path


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class RequiredBump(Enum):
    """Semantic-versioning increment, ordered PATCH < MINOR < MAJOR."""
    PATCH = "Patch"
    MINOR = "Minor"
    MAJOR = "Major"

    @property
    def rank(self) -> int:
        return _BUMP_RANK[self]

    def join(self, other: RequiredBump) -> RequiredBump:
        """Return the more severe of the two bumps."""
        return self if self.rank >= other.rank else other

    @classmethod
    def join_all(cls, bumps: Iterable[RequiredBump]) -> RequiredBump:
        result = cls.PATCH
        for bump in bumps:
            result = result.join(bump)
        return result

    def __lt__(self, other):
        if not isinstance(other, RequiredBump):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, RequiredBump):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, RequiredBump):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, RequiredBump):
            return NotImplemented
        return self.rank >= other.rank


_BUMP_RANK = {
    RequiredBump.PATCH: 0,
    RequiredBump.MINOR: 1,
    RequiredBump.MAJOR: 2,
}


class ItemKind(Enum):
    FUNC = "Func"
    VAR = "Var"
    CONST = "Const"
    STRUCT = "Struct"
    INTERFACE = "Interface"


class ChangeType(Enum):
    ADDED = "ADDED"
    REMOVED = "REMOVED"
    CHANGED = "CHANGED"
    KIND_CHANGED = "KIND_CHANGED"


class WarningCode(Enum):
    UNSUPPORTED_SYMBOL = "UNSUPPORTED_SYMBOL"
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    UNEXPORTED_MEMBER = "UNEXPORTED_MEMBER"


@dataclass
class Func:
    """Signature of an exported function or method."""
    arg_types: list[str] = field(default_factory=list)
    res_types: list[str] = field(default_factory=list)
    variadic: bool = False
    receiver: Optional[str] = None

    def __str__(self) -> str:
        return (
            f"{{ArgTypes:{self.arg_types}, ResTypes:{self.res_types}, "
            f"Variadic:{str(self.variadic).lower()}, Recv:{self.receiver or ''}}}"
        )


@dataclass
class Composite:
    """Fields and methods of a named record type (methods only for interfaces)."""
    fields: dict[str, Item] = field(default_factory=dict)
    methods: dict[str, Item] = field(default_factory=dict)

    def __str__(self) -> str:
        return (
            f"{{Fields:{sorted(self.fields)}, Methods:{sorted(self.methods)}}}"
        )


@dataclass
class Item:
    """One exported name in a snapshot."""
    kind: ItemKind
    type: str = ""
    func: Optional[Func] = None
    composite: Optional[Composite] = None

    @classmethod
    def function(
        cls,
        arg_types: Optional[list[str]] = None,
        res_types: Optional[list[str]] = None,
        variadic: bool = False,
        receiver: Optional[str] = None
    ) -> Item:
        return cls(
            kind=ItemKind.FUNC,
            func=Func(
                arg_types=list(arg_types or []),
                res_types=list(res_types or []),
                variadic=variadic,
                receiver=receiver or None,
            ),
        )

    @classmethod
    def variable(cls, type_name: str) -> Item:
        return cls(kind=ItemKind.VAR, type=type_name)

    @classmethod
    def constant(cls, type_name: str) -> Item:
        return cls(kind=ItemKind.CONST, type=type_name)

    @classmethod
    def struct(
        cls,
        type_name: str = "",
        fields: Optional[dict[str, Item]] = None,
        methods: Optional[dict[str, Item]] = None
    ) -> Item:
        return cls(
            kind=ItemKind.STRUCT,
            type=type_name,
            composite=Composite(fields=dict(fields or {}), methods=dict(methods or {})),
        )

    @classmethod
    def interface(
        cls,
        type_name: str = "",
        methods: Optional[dict[str, Item]] = None
    ) -> Item:
        return cls(
            kind=ItemKind.INTERFACE,
            type=type_name,
            composite=Composite(methods=dict(methods or {})),
        )

    @property
    def signature(self) -> Func:
        """Function payload, empty when absent."""
        return self.func or Func()

    @property
    def members(self) -> Composite:
        """Composite payload, empty when absent."""
        return self.composite or Composite()

    def __str__(self) -> str:
        return (
            f"{{Kind:{self.kind.value}, Type:{self.type}, "
            f"Func:{self.signature}, Struct:{self.members}}}"
        )


Snapshot = dict[str, Item]


@dataclass
class EngineConfig:
    """Global configuration for the comparison engine."""
    fail_fast: bool = False
    trace_rule_application: bool = False
    collect_statistics: bool = True
    max_snapshot_size_mb: float = 50
    ignore_paths: list[str] = field(default_factory=list)
    warn_unexported_members: bool = False
    log_level: LogLevel = LogLevel.INFO

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> EngineConfig:
        """Build a config from a mapping such as a parsed YAML file."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

        known = set(cls.__dataclass_fields__)
        values = {}
        for key, value in data.items():
            name = key.replace('-', '_')
            if name not in known:
                raise ConfigError(f"Unknown config option: {key}")
            values[name] = value

        if 'log_level' in values:
            try:
                values['log_level'] = LogLevel(str(values['log_level']).upper())
            except ValueError:
                raise ConfigError(f"Invalid log_level: {values['log_level']}")

        if 'ignore_paths' in values:
            paths = values['ignore_paths'] or []
            if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
                raise ConfigError("ignore_paths must be a list of strings")
            values['ignore_paths'] = list(paths)

        return cls(**values)


@dataclass
class ItemFinding:
    """A single exported item whose comparison was not a plain Patch."""
    name: str
    change: ChangeType
    bump: RequiredBump
    message: str
    path: str = ""

    def __post_init__(self):
        if not self.path:
            self.path = item_path(self.name)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": self.path,
            "change": self.change.value,
            "bump": self.bump.value,
            "message": self.message,
        }


@dataclass
class WarningEntry:
    """A diagnostic recorded while classifying symbols."""
    name: str
    code: WarningCode
    message: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "code": self.code.value,
            "message": self.message,
        }


@dataclass
class TraceEntry:
    """Trace entry for rule application (when trace_rule_application=true)."""
    path: str
    rule: str
    action: str
    details: Optional[dict] = None

    def to_dict(self) -> dict:
        result = {
            "path": self.path,
            "rule": self.rule,
            "action": self.action,
        }
        if self.details:
            result["details"] = self.details
        return result


@dataclass
class ExecutionInfo:
    """Execution metadata."""
    duration_ms: int
    timestamp: str
    engine_version: str = "1.0.0"

    def to_dict(self) -> dict:
        return {
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
            "engine_version": self.engine_version,
        }


@dataclass
class Summary:
    """Summary statistics of a comparison."""
    items_checked: int = 0
    items_added: int = 0
    items_removed: int = 0
    items_changed: int = 0
    items_ignored: int = 0

    def to_dict(self) -> dict:
        return {
            "items_checked": self.items_checked,
            "items_added": self.items_added,
            "items_removed": self.items_removed,
            "items_changed": self.items_changed,
            "items_ignored": self.items_ignored,
        }


@dataclass
class DiffReport:
    """Complete comparison report."""
    bump: RequiredBump
    execution: ExecutionInfo
    summary: Summary
    findings: list[ItemFinding] = field(default_factory=list)
    warnings: list[WarningEntry] = field(default_factory=list)
    trace: list[TraceEntry] = field(default_factory=list)

    @property
    def is_compatible(self) -> bool:
        return self.bump != RequiredBump.MAJOR

    @property
    def changed_items(self) -> list[str]:
        return [f.name for f in self.findings if f.bump != RequiredBump.PATCH]

    def to_dict(self) -> dict:
        result = {
            "bump": self.bump.value,
            "is_compatible": self.is_compatible,
            "execution": self.execution.to_dict(),
            "summary": self.summary.to_dict(),
            "findings": [f.to_dict() for f in self.findings],
            "warnings": [w.to_dict() for w in self.warnings],
        }
        if self.trace:
            result["trace"] = [t.to_dict() for t in self.trace]
        return result

    def print_summary(self, log_level: LogLevel = LogLevel.INFO):
        print(f"\nRequired bump: {self.bump.value}")
        print(f"  Items checked: {self.summary.items_checked}")
        if self.summary.items_added:
            print(f"  Added: {self.summary.items_added}")
        if self.summary.items_removed:
            print(f"  Removed: {self.summary.items_removed}")
        if self.summary.items_changed:
            print(f"  Changed: {self.summary.items_changed}")
        if self.summary.items_ignored:
            print(f"  Ignored: {self.summary.items_ignored}")

        # WARN and ERROR print the totals only
        if self.findings and log_level in (LogLevel.DEBUG, LogLevel.INFO):
            print("\nFindings:")
            for finding in self.findings:
                print(f"  - [{finding.bump.value}] {finding.name}: {finding.message}")

        # ERROR hides warnings too
        if self.warnings and log_level != LogLevel.ERROR:
            print("\nWarnings:")
            for w in self.warnings:
                print(f"  - {w.name}: {w.message}")

        if self.trace and log_level == LogLevel.DEBUG:
            print("\nTrace:")
            for t in self.trace:
                print(f"  - {t.path} [{t.rule}] {t.action}")


@dataclass
class ErrorResponse:
    """Error response structure."""
    success: bool = False
    error: Optional[dict] = None
    partial_result: Optional[DiffReport] = None

    def to_dict(self) -> dict:
        result: dict[str, Any] = {"success": self.success}
        if self.error:
            result["error"] = self.error
        if self.partial_result:
            result["partial_result"] = self.partial_result.to_dict()
        return result
