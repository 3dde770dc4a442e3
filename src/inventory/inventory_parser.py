"""Inventory row parsing.

This module converts tab-separated ``zfs list -H -p`` rows into typed
datasets with their snapshots attached, oldest first.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Iterable

from core.constants import INVENTORY_COLUMN_COUNT, SNAPSHOT_SEPARATOR, UNSET_PROPERTY_VALUE
from core.errors import AutosnapInventoryError
from core.snapshot_naming import split_snapshot_name
from core.types import Dataset, Snapshot


@dataclass(frozen=True)
class InventoryRow:
    """One validated inventory row before grouping."""

    line_number: int
    name: str
    size: int
    opt_in: str | None
    label_opt_in: str | None
    created_at: datetime

    @property
    def is_snapshot(self) -> bool:
        """Return whether this row describes a snapshot."""
        return SNAPSHOT_SEPARATOR in self.name


def parse_inventory(lines: Iterable[str]) -> dict[str, Dataset]:
    """Parse inventory rows into datasets keyed by name.

    Args:
        lines: Raw rows with name, size, opt-in, label opt-in, creation.

    Returns:
        Mapping of dataset name to dataset, in listing order.

    Raises:
        AutosnapInventoryError: If any row is malformed or inconsistent.
    """
    rows = [
        parse_inventory_row(line, line_number)
        for line_number, line in enumerate(lines, 1)
        if line.strip()
    ]
    datasets = _collect_datasets(row for row in rows if not row.is_snapshot)
    snapshots = _collect_snapshots(
        (row for row in rows if row.is_snapshot),
        datasets,
    )
    return {
        name: replace(dataset, snapshots=_ordered(snapshots.get(name, [])))
        for name, dataset in datasets.items()
    }


def parse_inventory_row(line: str, line_number: int) -> InventoryRow:
    """Parse and validate one tab-separated inventory row.

    Args:
        line: Raw row text.
        line_number: One-based row index used in error messages.

    Returns:
        Validated row.

    Raises:
        AutosnapInventoryError: If the row cannot be parsed.
    """
    columns = line.rstrip("\r\n").split("\t")
    if len(columns) != INVENTORY_COLUMN_COUNT:
        raise AutosnapInventoryError(
            f"Invalid inventory row {line_number}: expected {INVENTORY_COLUMN_COUNT} "
            f"tab-separated columns, got {len(columns)} in '{line.strip()}'."
        )
    name, raw_size, raw_opt_in, raw_label_opt_in, raw_creation = columns
    _validate_name(name, line_number)
    return InventoryRow(
        line_number=line_number,
        name=name,
        size=_parse_size(raw_size, line_number),
        opt_in=_parse_property(raw_opt_in),
        label_opt_in=_parse_property(raw_label_opt_in),
        created_at=_parse_creation(raw_creation, line_number),
    )


def _collect_datasets(rows: Iterable[InventoryRow]) -> dict[str, Dataset]:
    datasets: dict[str, Dataset] = {}
    for row in rows:
        if row.name in datasets:
            raise AutosnapInventoryError(
                f"Duplicate dataset '{row.name}' at inventory row {row.line_number}."
            )
        datasets[row.name] = Dataset(
            name=row.name,
            opt_in=row.opt_in,
            label_opt_in=row.label_opt_in,
            size=row.size,
            created_at=row.created_at,
        )
    return datasets


def _collect_snapshots(
    rows: Iterable[InventoryRow],
    datasets: dict[str, Dataset],
) -> dict[str, list[Snapshot]]:
    snapshots: dict[str, list[Snapshot]] = {}
    seen_names: set[str] = set()
    for row in rows:
        dataset_name, short_name = split_snapshot_name(row.name)
        if dataset_name not in datasets:
            raise AutosnapInventoryError(
                f"Snapshot '{row.name}' at inventory row {row.line_number} belongs to "
                f"dataset '{dataset_name}', which is not in the inventory."
            )
        if row.name in seen_names:
            raise AutosnapInventoryError(
                f"Duplicate snapshot '{row.name}' at inventory row {row.line_number}."
            )
        seen_names.add(row.name)
        snapshots.setdefault(dataset_name, []).append(
            Snapshot(
                dataset_name=dataset_name,
                full_name=row.name,
                short_name=short_name,
                size=row.size,
                created_at=row.created_at,
            )
        )
    return snapshots


def _ordered(snapshots: list[Snapshot]) -> tuple[Snapshot, ...]:
    # sorted() is stable, so listing order decides between equal creation times.
    return tuple(sorted(snapshots, key=lambda snapshot: snapshot.created_at))


def _validate_name(name: str, line_number: int) -> None:
    dataset_name, separator, short_name = name.partition(SNAPSHOT_SEPARATOR)
    if not dataset_name or (separator and not short_name) or SNAPSHOT_SEPARATOR in short_name:
        raise AutosnapInventoryError(
            f"Invalid name '{name}' at inventory row {line_number}: expected 'pool/dataset' "
            "or 'pool/dataset@snapshot'."
        )


def _parse_size(raw_size: str, line_number: int) -> int:
    if raw_size == UNSET_PROPERTY_VALUE:
        return 0
    try:
        size = int(raw_size)
    except ValueError as error:
        raise AutosnapInventoryError(
            f"Invalid size '{raw_size}' at inventory row {line_number}: expected bytes as "
            "an integer. List with 'zfs list -p' to get exact values."
        ) from error
    if size < 0:
        raise AutosnapInventoryError(
            f"Invalid size {size} at inventory row {line_number}: must be 0 or greater."
        )
    return size


def _parse_property(raw_value: str) -> str | None:
    if raw_value == UNSET_PROPERTY_VALUE:
        return None
    return raw_value


def _parse_creation(raw_creation: str, line_number: int) -> datetime:
    try:
        return datetime.fromtimestamp(int(raw_creation), tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as error:
        raise AutosnapInventoryError(
            f"Invalid creation time '{raw_creation}' at inventory row {line_number}: "
            "expected epoch seconds."
        ) from error
