"""Ignore rules ("The Filter") for the apibump engine."""

from __future__ import annotations

from .models import Snapshot
from .jsonpath_utils import JSONPathMatcher
from .serializer import snapshot_from_dict, snapshot_to_dict


class Masker:
    """
    Removes ignored items and members before diffing.

    Rules are JSONPath expressions over the serialized snapshot, e.g.
    ``$.items.Debug`` or ``$.items.Server.composite.methods.Debug``.
    """

    def __init__(self, ignore_paths: list[str]):
        self.ignore_paths = list(ignore_paths)
        self.ignored_count = 0

    def mask(self, old: Snapshot, new: Snapshot) -> tuple[Snapshot, Snapshot, int]:
        """
        Apply ignore rules to both snapshots.

        Args:
            old: The old/baseline snapshot
            new: The new snapshot

        Returns:
            Tuple of (masked_old, masked_new, ignored_count)
        """
        if not self.ignore_paths:
            self.ignored_count = 0
            return old, new, 0

        old_data, old_deleted = JSONPathMatcher.delete_paths(
            snapshot_to_dict(old), self.ignore_paths
        )
        new_data, new_deleted = JSONPathMatcher.delete_paths(
            snapshot_to_dict(new), self.ignore_paths
        )

        # A node ignored on both sides counts once
        self.ignored_count = len(set(old_deleted) | set(new_deleted))

        return snapshot_from_dict(old_data), snapshot_from_dict(new_data), self.ignored_count
