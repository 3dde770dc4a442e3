"""Shared typed models.

This module defines immutable data models used by inventory parsing,
policy evaluation, retention selection, and plan execution to keep
interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Literal, Mapping, Protocol

from core.constants import DEFAULT_KEEP_COUNT, DEFAULT_MIN_SIZE_KB, DEFAULT_SNAPSHOT_PREFIX

ActionKind = Literal["create", "destroy"]
EventSeverity = Literal["debug", "info", "warning", "error"]


@dataclass(frozen=True)
class Snapshot:
    """One existing snapshot of a dataset.

    Attributes:
        dataset_name: Parent dataset identifier.
        full_name: ``dataset@short_name`` as reported by zfs.
        short_name: Part of the name after the snapshot separator.
        size: Bytes written between the previous snapshot and this one.
        created_at: Creation time as reported by zfs.
    """

    dataset_name: str
    full_name: str
    short_name: str
    size: int
    created_at: datetime


@dataclass(frozen=True)
class Dataset:
    """A filesystem or volume that can own snapshots.

    Attributes:
        name: Hierarchical dataset identifier, e.g. ``tank/data``.
        opt_in: Value of the opt-in property, ``None`` when unset.
        label_opt_in: Value of the label-specific opt-in property.
        size: Bytes written since the most recent snapshot.
        created_at: Creation time as reported by zfs.
        snapshots: Snapshots ordered oldest to newest.
    """

    name: str
    opt_in: str | None
    label_opt_in: str | None
    size: int
    created_at: datetime
    snapshots: tuple[Snapshot, ...] = ()


@dataclass(frozen=True)
class SnapshotNameParts:
    """Decomposed short name of an autosnap-managed snapshot.

    Attributes:
        prefix: Configured name prefix.
        label: Retention label, e.g. ``daily``.
        stamp: Creation timestamp suffix.
    """

    prefix: str
    label: str
    stamp: str


@dataclass(frozen=True)
class AutosnapOptions:
    """Options for one autosnap run.

    Attributes:
        label: Active retention label.
        prefix: Snapshot name prefix.
        keep: Number of matching snapshots to keep per dataset.
        min_size_kb: Minimum-size threshold in kilobytes, 0 disables it.
        dry_run: Report actions without submitting them.
    """

    label: str
    prefix: str = DEFAULT_SNAPSHOT_PREFIX
    keep: int = DEFAULT_KEEP_COUNT
    min_size_kb: int = DEFAULT_MIN_SIZE_KB
    dry_run: bool = False


@dataclass(frozen=True)
class CreateDecision:
    """Outcome of evaluating one dataset for snapshot creation.

    Attributes:
        dataset_name: Evaluated dataset.
        should_create: Whether a new snapshot is due.
        reason: Short machine-readable reason code.
        last_snapshot: Most recent snapshot of the retention group.
    """

    dataset_name: str
    should_create: bool
    reason: str
    last_snapshot: Snapshot | None = None


@dataclass(frozen=True)
class RetentionSelection:
    """Partition of a retention group.

    Attributes:
        to_keep: Newest snapshots, oldest first.
        to_destroy: Expendable snapshots, oldest first.
    """

    to_keep: tuple[Snapshot, ...]
    to_destroy: tuple[Snapshot, ...]


@dataclass(frozen=True)
class SnapshotAction:
    """One mutating action against the volume manager.

    Attributes:
        kind: ``create`` or ``destroy``.
        dataset_name: Dataset the action applies to.
        snapshot_name: Full ``dataset@name`` snapshot name.
    """

    kind: ActionKind
    dataset_name: str
    snapshot_name: str


@dataclass(frozen=True)
class DatasetPlan:
    """Ordered actions for one dataset.

    Attributes:
        dataset_name: Dataset the plan applies to.
        actions: At most one create followed by destroys, oldest first.
    """

    dataset_name: str
    actions: tuple[SnapshotAction, ...]


@dataclass(frozen=True)
class ActionFailure:
    """A failed action and the reason reported by the volume manager."""

    action: SnapshotAction
    reason: str


@dataclass(frozen=True)
class PlanResult:
    """Aggregate outcome of executing plans.

    Attributes:
        creates_succeeded: Snapshots created (or reported in dry-run).
        creates_failed: Create actions that failed.
        destroys_succeeded: Snapshots destroyed (or reported in dry-run).
        destroys_failed: Destroy actions that failed.
        destroys_missing: Destroy targets that were already gone.
        failures: Failed actions with reasons, in execution order.
    """

    creates_succeeded: int = 0
    creates_failed: int = 0
    destroys_succeeded: int = 0
    destroys_failed: int = 0
    destroys_missing: int = 0
    failures: tuple[ActionFailure, ...] = ()

    @property
    def has_failures(self) -> bool:
        """Return whether any action failed."""
        return bool(self.failures)


@dataclass(frozen=True)
class ReportEvent:
    """One structured observability event.

    Attributes:
        severity: Log severity of the event.
        event: Snake-case event name.
        fields: Event context fields.
    """

    severity: EventSeverity
    event: str
    fields: Mapping[str, object] = field(default_factory=dict)


EventSink = Callable[[ReportEvent], None]
Clock = Callable[[], datetime]


class VolumeManager(Protocol):
    """Narrow interface onto the external volume manager."""

    def list_inventory(self, label: str) -> list[str]:
        """Return raw inventory rows for datasets and snapshots."""

    def create_snapshot(self, dataset_name: str, snapshot_name: str) -> None:
        """Create one snapshot or raise ``AutosnapCommandError``."""

    def destroy_snapshot(self, snapshot_name: str) -> None:
        """Destroy one snapshot or raise ``AutosnapCommandError``."""
