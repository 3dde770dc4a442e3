"""Per-dataset action planning.

This module orders at most one create action ahead of the destroy
actions selected for a dataset, oldest destroy first.
"""

from __future__ import annotations

from core.snapshot_naming import build_snapshot_name
from core.types import (
    AutosnapOptions,
    CreateDecision,
    Dataset,
    DatasetPlan,
    RetentionSelection,
    SnapshotAction,
)


def planned_snapshot_name(dataset: Dataset, options: AutosnapOptions, stamp: str) -> str:
    """Return the full name a new snapshot of ``dataset`` would get."""
    return build_snapshot_name(dataset.name, options.prefix, options.label, stamp)


def snapshot_name_taken(dataset: Dataset, snapshot_name: str) -> bool:
    """Return whether ``dataset`` already has a snapshot called ``snapshot_name``."""
    return any(snapshot.full_name == snapshot_name for snapshot in dataset.snapshots)


def build_dataset_plan(
    dataset: Dataset,
    decision: CreateDecision,
    selection: RetentionSelection,
    options: AutosnapOptions,
    stamp: str,
) -> DatasetPlan:
    """Build the ordered action list for one dataset.

    Args:
        dataset: Dataset being planned.
        decision: Creation decision from the policy evaluator.
        selection: Retention split from the retention selector.
        options: Active run options.
        stamp: Timestamp suffix shared by every snapshot of this run.

    Returns:
        Plan with an optional create followed by destroys.
    """
    actions: list[SnapshotAction] = []
    if decision.should_create:
        snapshot_name = planned_snapshot_name(dataset, options, stamp)
        if not snapshot_name_taken(dataset, snapshot_name):
            actions.append(SnapshotAction("create", dataset.name, snapshot_name))
    actions.extend(
        SnapshotAction("destroy", dataset.name, snapshot.full_name)
        for snapshot in selection.to_destroy
    )
    return DatasetPlan(dataset_name=dataset.name, actions=tuple(actions))
