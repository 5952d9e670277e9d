"""
apibump - API Compatibility Checker for Semantic Versioning

Compares two snapshots of a module's exported surface (functions,
variables, constants, composite and interface types) and classifies the
smallest version increment the change requires: Patch, Minor or Major.
"""

from .engine import ApiBumpEngine, compare
from .models import (
    EngineConfig,
    DiffReport,
    ErrorResponse,
    ItemFinding,
    ChangeType,
    RequiredBump,
    Item,
    ItemKind,
    Func,
    Composite,
    Snapshot,
    WarningEntry,
    WarningCode,
)
from .classifier import (
    Classifier,
    ClassificationResult,
    classify,
)
from .differ import Differ, diff_snapshots
from .symbols import (
    SymbolTable,
    ResolvedSymbol,
    load_symbol_table,
    load_symbol_table_file,
)
from .serializer import (
    snapshot_to_dict,
    snapshot_from_dict,
    dump_snapshot,
    load_snapshot,
)
from .runner import (
    BumpRunner,
    BumpResult,
    load_config,
    run_check,
)

__version__ = "1.0.0"
__all__ = [
    # Engine
    "ApiBumpEngine",
    "EngineConfig",
    "compare",
    # Snapshot model
    "RequiredBump",
    "Item",
    "ItemKind",
    "Func",
    "Composite",
    "Snapshot",
    # Reports
    "DiffReport",
    "ErrorResponse",
    "ItemFinding",
    "ChangeType",
    "WarningEntry",
    "WarningCode",
    # Classification
    "Classifier",
    "ClassificationResult",
    "classify",
    "SymbolTable",
    "ResolvedSymbol",
    "load_symbol_table",
    "load_symbol_table_file",
    # Diffing
    "Differ",
    "diff_snapshots",
    # Serialization
    "snapshot_to_dict",
    "snapshot_from_dict",
    "dump_snapshot",
    "load_snapshot",
    # Runner
    "BumpRunner",
    "BumpResult",
    "load_config",
    "run_check",
]
