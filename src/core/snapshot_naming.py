"""Snapshot name composition and decomposition.

Managed snapshots are named ``{dataset}@{prefix}-{label}-{timestamp}``.
The timestamp is fixed width so lexical order equals creation order.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core.constants import (
    LEGACY_LABEL_SEPARATOR,
    LEGACY_SNAPSHOT_TIMESTAMP_FORMAT,
    NAME_FIELD_SEPARATOR,
    SNAPSHOT_SEPARATOR,
    SNAPSHOT_TIMESTAMP_FORMAT,
)
from core.types import SnapshotNameParts


def format_timestamp(moment: datetime) -> str:
    """Render a sortable UTC timestamp for snapshot names.

    Args:
        moment: Time of the run, naive values are treated as UTC.

    Returns:
        Fixed-width timestamp string.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime(SNAPSHOT_TIMESTAMP_FORMAT)


def build_short_name(prefix: str, label: str, stamp: str) -> str:
    """Build the part of a snapshot name after ``@``."""
    return NAME_FIELD_SEPARATOR.join((prefix, label, stamp))


def build_snapshot_name(dataset_name: str, prefix: str, label: str, stamp: str) -> str:
    """Build a full ``dataset@prefix-label-stamp`` snapshot name.

    Args:
        dataset_name: Parent dataset identifier.
        prefix: Snapshot name prefix.
        label: Retention label.
        stamp: Timestamp suffix from ``format_timestamp``.

    Returns:
        Full snapshot name accepted by ``zfs snapshot``.
    """
    return f"{dataset_name}{SNAPSHOT_SEPARATOR}{build_short_name(prefix, label, stamp)}"


def split_snapshot_name(full_name: str) -> tuple[str, str]:
    """Split ``dataset@short`` into its two parts.

    Returns:
        Dataset name and short name; the short name is empty when the
        input carries no separator.
    """
    dataset_name, _, short_name = full_name.partition(SNAPSHOT_SEPARATOR)
    return dataset_name, short_name


def parse_short_name(short_name: str, prefix: str) -> SnapshotNameParts | None:
    """Decompose a short name created with ``prefix``.

    Both ``prefix-label-stamp`` and the older ``prefix_label-stamp`` forms
    are recognised. The stamp must be a timestamp in the current or the
    older minute-resolution format.

    Args:
        short_name: Snapshot name after ``@``.
        prefix: Expected prefix.

    Returns:
        Name parts, or ``None`` for snapshots not created with ``prefix``.
    """
    if not short_name.startswith(prefix):
        return None
    remainder = short_name[len(prefix) :]
    if remainder[:1] not in (NAME_FIELD_SEPARATOR, LEGACY_LABEL_SEPARATOR):
        return None
    label, separator, stamp = remainder[1:].partition(NAME_FIELD_SEPARATOR)
    if not label or not separator or not is_snapshot_timestamp(stamp):
        return None
    return SnapshotNameParts(prefix=prefix, label=label, stamp=stamp)


def is_snapshot_timestamp(stamp: str) -> bool:
    """Return whether ``stamp`` was rendered by this tool or its predecessor."""
    for stamp_format in (SNAPSHOT_TIMESTAMP_FORMAT, LEGACY_SNAPSHOT_TIMESTAMP_FORMAT):
        try:
            datetime.strptime(stamp, stamp_format)
        except ValueError:
            continue
        return True
    return False


def matches_group(short_name: str, prefix: str, label: str) -> bool:
    """Return whether a snapshot belongs to the ``prefix``/``label`` group."""
    parts = parse_short_name(short_name, prefix)
    return parts is not None and parts.label == label
