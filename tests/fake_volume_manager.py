"""Scripted volume manager and event sink used in place of zfs."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Mapping

from core.errors import AutosnapCommandError, AutosnapSnapshotMissingError
from core.types import ReportEvent

FIXED_NOW = datetime(2024, 1, 11, 12, 30, 5, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    """Return a constant run time for deterministic snapshot names."""
    return FIXED_NOW


def inventory_row(
    name: str,
    size: str = "0",
    opt_in: str = "-",
    label_opt_in: str = "-",
    creation: str = "1704067200",
) -> str:
    """Build one tab-separated inventory row."""
    return "\t".join((name, size, opt_in, label_opt_in, creation))


class FakeVolumeManager:
    """In-memory volume manager returning scripted outcomes."""

    def __init__(
        self,
        rows: Iterable[str] = (),
        failures: Mapping[str, str] | None = None,
        missing: Iterable[str] = (),
        list_error: str | None = None,
    ) -> None:
        self.rows = list(rows)
        self.failures = dict(failures or {})
        self.missing = set(missing)
        self.list_error = list_error
        self.created: list[str] = []
        self.destroyed: list[str] = []
        self.mutation_calls = 0

    def list_inventory(self, label: str) -> list[str]:
        if self.list_error is not None:
            raise AutosnapCommandError(self.list_error)
        return list(self.rows)

    def create_snapshot(self, dataset_name: str, snapshot_name: str) -> None:
        self.mutation_calls += 1
        if snapshot_name in self.failures:
            raise AutosnapCommandError(self.failures[snapshot_name])
        self.created.append(snapshot_name)

    def destroy_snapshot(self, snapshot_name: str) -> None:
        self.mutation_calls += 1
        if snapshot_name in self.missing:
            raise AutosnapSnapshotMissingError("could not find any snapshots to destroy")
        if snapshot_name in self.failures:
            raise AutosnapCommandError(self.failures[snapshot_name])
        self.destroyed.append(snapshot_name)


class RecordingSink:
    """Event sink that keeps every report event."""

    def __init__(self) -> None:
        self.events: list[ReportEvent] = []

    def __call__(self, event: ReportEvent) -> None:
        self.events.append(event)

    def names(self) -> list[str]:
        """Return event names in emission order."""
        return [event.event for event in self.events]
