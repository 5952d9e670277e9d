"""Main comparison engine for apibump."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Optional

from .models import (
    ChangeType,
    DiffReport,
    EngineConfig,
    ErrorResponse,
    ExecutionInfo,
    Item,
    Snapshot,
    Summary,
    WarningEntry,
)
from .masker import Masker
from .differ import Differ
from .serializer import snapshot_to_dict
from .exceptions import (
    ValidationError,
    SnapshotFormatError,
    SnapshotSizeError,
    RuleError,
)
from .utils import get_json_size_mb


class ApiBumpEngine:
    """
    Main comparison engine that orchestrates the pipeline:

    1. Validation: both sides must be snapshots within the size limit
    2. Masking: drop items and members matched by ignore rules
    3. Diffing: per-item comparison folded into one required bump
    """

    VERSION = "1.0.0"

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or EngineConfig()

    def compare(
        self,
        old: Snapshot,
        new: Snapshot,
        warnings: Optional[list[WarningEntry]] = None
    ) -> DiffReport | ErrorResponse:
        """
        Compare an old snapshot against a new one.

        Args:
            old: Snapshot of the released module
            new: Snapshot of the candidate module
            warnings: Diagnostics from classification, copied into the report

        Returns:
            DiffReport on success, ErrorResponse on validation/processing errors
        """
        start_time = time.time()

        try:
            self._validate_inputs(old, new)

            masker = Masker(self.config.ignore_paths)
            old_masked, new_masked, ignored_count = masker.mask(old, new)

            differ = Differ(
                fail_fast=self.config.fail_fast,
                trace_rules=self.config.trace_rule_application
            )
            bump = differ.diff(old_masked, new_masked)

            duration_ms = int((time.time() - start_time) * 1000)

            summary = Summary(items_checked=differ.items_checked)
            if self.config.collect_statistics:
                summary = self._build_summary(differ, ignored_count)

            return DiffReport(
                bump=bump,
                execution=ExecutionInfo(
                    duration_ms=duration_ms,
                    timestamp=datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
                    engine_version=self.VERSION
                ),
                summary=summary,
                findings=differ.findings,
                warnings=list(warnings or []),
                trace=differ.traces if self.config.trace_rule_application else []
            )

        except ValidationError as e:
            return self._create_error_response("VALIDATION_ERROR", e.message, e.details)
        except SnapshotSizeError as e:
            return self._create_error_response(
                "SNAPSHOT_SIZE_ERROR",
                str(e),
                {"size_mb": e.size_mb, "limit_mb": e.limit_mb}
            )
        except RuleError as e:
            return self._create_error_response("RULE_ERROR", str(e), {"rule": e.rule})
        except SnapshotFormatError as e:
            return self._create_error_response(
                "SNAPSHOT_FORMAT_ERROR", e.message, {"path": e.path}
            )
        except Exception as e:
            return self._create_error_response(
                "PROCESSING_ERROR",
                str(e),
                {"type": type(e).__name__}
            )

    def _validate_inputs(self, old: Any, new: Any):
        """Validate input parameters."""
        for label, snapshot in (("old", old), ("new", new)):
            if snapshot is None:
                raise ValidationError(f"{label} snapshot is required")
            if not isinstance(snapshot, dict):
                raise ValidationError(
                    f"{label} snapshot must be a mapping of name to Item",
                    {"type": type(snapshot).__name__}
                )
            bad = sorted(str(k) for k, v in snapshot.items() if not isinstance(v, Item))
            if bad:
                raise ValidationError(
                    f"{label} snapshot contains entries that are not Items",
                    {"names": bad[:10]}
                )

            size = get_json_size_mb(snapshot_to_dict(snapshot))
            if size > self.config.max_snapshot_size_mb:
                raise SnapshotSizeError(size, self.config.max_snapshot_size_mb)

    def _build_summary(self, differ: Differ, ignored_count: int) -> Summary:
        counts = {change: 0 for change in ChangeType}
        for finding in differ.findings:
            counts[finding.change] += 1

        return Summary(
            items_checked=differ.items_checked,
            items_added=counts[ChangeType.ADDED],
            items_removed=counts[ChangeType.REMOVED],
            items_changed=counts[ChangeType.CHANGED] + counts[ChangeType.KIND_CHANGED],
            items_ignored=ignored_count,
        )

    def _create_error_response(self, code: str, message: str, details: dict) -> ErrorResponse:
        """Create an error response."""
        return ErrorResponse(
            success=False,
            error={
                "code": code,
                "message": message,
                "details": details
            },
            partial_result=None
        )


def compare(
    old: Snapshot,
    new: Snapshot,
    config: Optional[EngineConfig] = None
) -> DiffReport | ErrorResponse:
    """
    Convenience function to compare two snapshots.

    Args:
        old: Snapshot of the released module
        new: Snapshot of the candidate module
        config: Optional engine configuration

    Returns:
        DiffReport on success, ErrorResponse on errors
    """
    engine = ApiBumpEngine(config)
    return engine.compare(old, new)
