"""Retention selection for managed snapshot groups."""

from __future__ import annotations

from typing import Sequence

from core.errors import AutosnapConfigError
from core.snapshot_naming import matches_group
from core.types import Dataset, RetentionSelection, Snapshot


def retention_group(dataset: Dataset, prefix: str, label: str) -> tuple[Snapshot, ...]:
    """Return the dataset's snapshots created for ``prefix`` and ``label``.

    Snapshots from other labels or other tools are left out, oldest first.
    """
    return tuple(
        snapshot
        for snapshot in dataset.snapshots
        if matches_group(snapshot.short_name, prefix, label)
    )


def select_retention(snapshots: Sequence[Snapshot], keep: int) -> RetentionSelection:
    """Split a retention group into snapshots to keep and to destroy.

    Args:
        snapshots: Group members ordered oldest to newest.
        keep: Number of newest snapshots to keep, 0 keeps none.

    Returns:
        Newest ``min(keep, len(snapshots))`` kept, the rest destroyed.

    Raises:
        AutosnapConfigError: If ``keep`` is negative.
    """
    if keep < 0:
        raise AutosnapConfigError(f"Invalid keep count {keep}: must be 0 or greater.")
    split_index = max(len(snapshots) - keep, 0)
    return RetentionSelection(
        to_keep=tuple(snapshots[split_index:]),
        to_destroy=tuple(snapshots[:split_index]),
    )
