"""Unit tests for retention selection."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from core.errors import AutosnapConfigError
from core.snapshot_naming import format_timestamp
from core.types import Dataset, Snapshot
from policy.retention_selector import retention_group, select_retention

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _stamp(index: int) -> str:
    return format_timestamp(_EPOCH + timedelta(days=index))


def _snapshots(count: int, label: str = "daily") -> tuple[Snapshot, ...]:
    return tuple(
        Snapshot(
            dataset_name="tank/data",
            full_name=f"tank/data@zfs-snapshot-{label}-{_stamp(index)}",
            short_name=f"zfs-snapshot-{label}-{_stamp(index)}",
            size=index,
            created_at=_EPOCH + timedelta(days=index),
        )
        for index in range(count)
    )


@pytest.mark.parametrize("count", [0, 1, 5, 8, 9, 10])
@pytest.mark.parametrize("keep", [0, 1, 8, 20])
def test_select_retention_partitions_exactly(count: int, keep: int) -> None:
    """Keep the newest min(keep, count) and destroy the rest without loss."""
    snapshots = _snapshots(count)

    selection = select_retention(snapshots, keep)

    assert len(selection.to_keep) == min(keep, count)
    assert selection.to_destroy + selection.to_keep == snapshots


def test_select_retention_destroys_two_oldest_of_ten() -> None:
    """Ten snapshots with keep 8 should destroy the two oldest, oldest first."""
    snapshots = _snapshots(10)

    selection = select_retention(snapshots, 8)

    assert selection.to_destroy == snapshots[:2]


def test_select_retention_keep_zero_destroys_all() -> None:
    """Keep 0 should mark every group member as expendable."""
    snapshots = _snapshots(3)

    assert select_retention(snapshots, 0).to_destroy == snapshots


def test_select_retention_keeps_list_order_for_identical_names() -> None:
    """Duplicated timestamps should not reorder the list."""
    first, second = _snapshots(1)[0], _snapshots(1)[0]

    selection = select_retention([first, second], 1)

    assert selection.to_destroy[0] is first


def test_select_retention_rejects_negative_keep() -> None:
    """A negative keep count should be a configuration error."""
    with pytest.raises(AutosnapConfigError):
        select_retention(_snapshots(2), -1)


def test_retention_group_ignores_other_labels_and_tools() -> None:
    """Only snapshots of the active prefix and label belong to the group."""
    daily = _snapshots(2)
    manual = Snapshot("tank/data", "tank/data@manual", "manual", 0, _EPOCH)
    dataset = Dataset(
        name="tank/data",
        opt_in="daily",
        label_opt_in=None,
        size=0,
        created_at=_EPOCH,
        snapshots=(daily[0], manual, *_snapshots(2, label="hourly"), daily[1]),
    )

    assert retention_group(dataset, "zfs-snapshot", "daily") == daily
