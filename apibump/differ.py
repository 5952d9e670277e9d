"""Module-level aggregation of item comparisons."""

from __future__ import annotations

from typing import Optional

from .models import (
    ChangeType,
    ItemFinding,
    RequiredBump,
    Snapshot,
    TraceEntry,
)
from .comparators import compare_items
from .utils import item_path


class Differ:
    """
    Compares two snapshots and folds per-item results into one bump.

    Every name is classified three ways:
    - only in old  -> REMOVED, MAJOR
    - only in new  -> ADDED, MINOR
    - in both      -> structural comparison by kind

    The running bump starts at PATCH and only moves up. With fail_fast the
    walk stops at the first MAJOR. Each diff() call starts from a clean
    state, so one instance can be reused.
    """

    def __init__(self, fail_fast: bool = False, trace_rules: bool = False):
        self.fail_fast = fail_fast
        self.trace_rules = trace_rules
        self._reset()

    def _reset(self):
        self.bump = RequiredBump.PATCH
        self.findings: list[ItemFinding] = []
        self.traces: list[TraceEntry] = []
        self.items_checked = 0
        self._aborted = False

    def diff(self, old: Snapshot, new: Snapshot) -> RequiredBump:
        """
        Compare the old snapshot against the new one.

        Args:
            old: Snapshot of the previous release
            new: Snapshot of the candidate release

        Returns:
            The aggregated required bump
        """
        self._reset()

        for name in sorted(set(old) | set(new)):
            if self._aborted:
                break

            if name not in new:
                self._record(
                    name, ChangeType.REMOVED, RequiredBump.MAJOR,
                    f"{old[name].kind.value} removed"
                )
                continue

            if name not in old:
                self._record(
                    name, ChangeType.ADDED, RequiredBump.MINOR,
                    f"{new[name].kind.value} added"
                )
                continue

            self.items_checked += 1
            bump, message = compare_items(old[name], new[name])
            self._add_trace(name, old[name].kind.value, bump, message)

            if bump != RequiredBump.PATCH:
                change = (
                    ChangeType.KIND_CHANGED
                    if old[name].kind != new[name].kind
                    else ChangeType.CHANGED
                )
                self._record(name, change, bump, message)

        return self.bump

    def _record(self, name: str, change: ChangeType, bump: RequiredBump, message: str):
        self.findings.append(ItemFinding(
            name=name,
            change=change,
            bump=bump,
            message=message,
        ))
        self.bump = self.bump.join(bump)

        if self.fail_fast and self.bump == RequiredBump.MAJOR:
            self._aborted = True
            self._add_trace_entry(item_path(name), 'fail-fast', 'stopped')

    def _add_trace(self, name: str, kind: str, bump: RequiredBump, message: str):
        details = {"bump": bump.value}
        if message:
            details["reason"] = message
        self._add_trace_entry(item_path(name), f"compare-{kind.lower()}", 'compared', details)

    def _add_trace_entry(self, path: str, rule: str, action: str, details: Optional[dict] = None):
        if self.trace_rules:
            self.traces.append(TraceEntry(path=path, rule=rule, action=action, details=details))


def diff_snapshots(old: Snapshot, new: Snapshot) -> tuple[RequiredBump, list[ItemFinding]]:
    """Convenience function returning the aggregate bump and the findings."""
    differ = Differ()
    bump = differ.diff(old, new)
    return bump, differ.findings
