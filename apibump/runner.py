"""File-based runner: old snapshot + resolver dump in, bump report out."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .classifier import Classifier
from .engine import ApiBumpEngine
from .exceptions import ConfigError
from .models import DiffReport, EngineConfig, ErrorResponse, Snapshot
from .serializer import dump_snapshot, load_snapshot
from .symbols import SymbolTable, load_symbol_table_file
from .utils import load_document


@dataclass
class BumpResult:
    """Outcome of one run: the report and the freshly built snapshot."""
    report: DiffReport | ErrorResponse
    snapshot: Snapshot

    @property
    def succeeded(self) -> bool:
        return isinstance(self.report, DiffReport)


def load_config(path: str | Path) -> EngineConfig:
    """Load an EngineConfig from a YAML/JSON file."""
    try:
        data = load_document(path)
    except ValueError as e:
        raise ConfigError(str(e))
    return EngineConfig.from_dict(data)


class BumpRunner:
    """
    Runner that loads the released snapshot and the resolver dump from disk.

    Usage:
        runner = BumpRunner("v1.json", "symbols.yaml")
        result = runner.run()
        result.report.print_summary()

    Or as a one-liner:
        result = BumpRunner.run_check("v1.json", "symbols.yaml")
    """

    def __init__(
        self,
        old_snapshot_path: str,
        symbols_path: str,
        engine_config: Optional[EngineConfig] = None
    ):
        """
        Initialize the runner.

        Args:
            old_snapshot_path: Snapshot file of the released version
            symbols_path: Resolver dump (YAML/JSON) of the candidate version
            engine_config: Optional engine configuration
        """
        self.old_snapshot_path = Path(old_snapshot_path)
        self.symbols_path = Path(symbols_path)
        self.engine_config = engine_config or EngineConfig()
        self._old_snapshot: Optional[Snapshot] = None
        self._symbols: Optional[SymbolTable] = None

    @property
    def old_snapshot(self) -> Snapshot:
        """Load and cache the released snapshot."""
        if self._old_snapshot is None:
            self._old_snapshot = load_snapshot(self.old_snapshot_path)
        return self._old_snapshot

    @property
    def symbols(self) -> SymbolTable:
        """Load and cache the resolver dump."""
        if self._symbols is None:
            self._symbols = load_symbol_table_file(self.symbols_path)
        return self._symbols

    def run(
        self,
        new_snapshot_path: Optional[str] = None,
        print_report: bool = True
    ) -> BumpResult:
        """
        Classify the new symbols, diff against the old snapshot and report.

        Args:
            new_snapshot_path: Where to write the new snapshot, if anywhere
            print_report: Whether to print the summary report

        Returns:
            BumpResult with the report and the new snapshot
        """
        classification = Classifier(self.engine_config).classify(self.symbols)
        new_snapshot = classification.snapshot

        if new_snapshot_path:
            dump_snapshot(new_snapshot, new_snapshot_path)

        engine = ApiBumpEngine(self.engine_config)
        report = engine.compare(self.old_snapshot, new_snapshot, classification.warnings)

        if print_report:
            if isinstance(report, DiffReport):
                if self.symbols.module:
                    print(f"Module: {self.symbols.module}")
                report.print_summary(self.engine_config.log_level)
            else:
                print(f"Error: {report.error}")

        return BumpResult(report=report, snapshot=new_snapshot)

    @classmethod
    def run_check(
        cls,
        old_snapshot_path: str,
        symbols_path: str,
        new_snapshot_path: Optional[str] = None,
        print_report: bool = True,
        engine_config: Optional[EngineConfig] = None
    ) -> BumpResult:
        """
        Convenience class method to run a check in one call.

        Example:
            result = BumpRunner.run_check("v1.json", "symbols.yaml", "v2.json")
        """
        runner = cls(old_snapshot_path, symbols_path, engine_config)
        return runner.run(new_snapshot_path=new_snapshot_path, print_report=print_report)


def run_check(
    old_snapshot_path: str,
    symbols_path: str,
    new_snapshot_path: Optional[str] = None,
    print_report: bool = True,
    config_path: Optional[str] = None
) -> BumpResult:
    """
    Run a compatibility check from files.

        from apibump.runner import run_check
        result = run_check("v1.json", "symbols.yaml")

    Args:
        old_snapshot_path: Snapshot file of the released version
        symbols_path: Resolver dump of the candidate version
        new_snapshot_path: Where to write the new snapshot, if anywhere
        print_report: Whether to print the summary report
        config_path: Optional YAML engine config

    Returns:
        BumpResult with the report and the new snapshot
    """
    config = load_config(config_path) if config_path else None
    return BumpRunner.run_check(
        old_snapshot_path,
        symbols_path,
        new_snapshot_path=new_snapshot_path,
        print_report=print_report,
        engine_config=config,
    )
