"""Snapshot creation policy.

A dataset gets a new snapshot when it opts into the active label and
its last managed snapshot passes the minimum-size gate.
"""

from __future__ import annotations

from core.constants import BYTES_PER_KB, OPT_IN_SENTINELS
from core.types import AutosnapOptions, CreateDecision, Dataset
from policy.retention_selector import retention_group


def is_opted_in(dataset: Dataset, label: str) -> bool:
    """Return whether a dataset accepts new snapshots for ``label``.

    Either property opts the dataset in: the generic one when it equals the
    label or one of the ``true``/``on`` sentinels, the label-specific one
    when it is a sentinel. An unset property never opts a dataset in.

    Args:
        dataset: Dataset to check.
        label: Active retention label.

    Returns:
        True when the dataset is eligible for creation.
    """
    if dataset.label_opt_in in OPT_IN_SENTINELS:
        return True
    return dataset.opt_in is not None and (
        dataset.opt_in == label or dataset.opt_in in OPT_IN_SENTINELS
    )


def evaluate_dataset(dataset: Dataset, options: AutosnapOptions) -> CreateDecision:
    """Decide whether ``dataset`` needs a new snapshot this run.

    Args:
        dataset: Parsed dataset with its snapshots.
        options: Active run options.

    Returns:
        Creation decision with a reason code.
    """
    if not is_opted_in(dataset, options.label):
        return CreateDecision(dataset.name, should_create=False, reason="not_opted_in")
    group = retention_group(dataset, options.prefix, options.label)
    if not group:
        return CreateDecision(dataset.name, should_create=True, reason="bootstrap")
    last_snapshot = group[-1]
    if options.min_size_kb == 0:
        return CreateDecision(
            dataset.name, should_create=True, reason="no_threshold", last_snapshot=last_snapshot
        )
    below_threshold = last_snapshot.size < options.min_size_kb * BYTES_PER_KB
    return CreateDecision(
        dataset.name,
        should_create=below_threshold,
        reason="below_threshold" if below_threshold else "above_threshold",
        last_snapshot=last_snapshot,
    )
