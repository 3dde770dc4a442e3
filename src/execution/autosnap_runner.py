"""Autosnap run orchestration.

This module wires inventory listing, parsing, policy evaluation,
retention selection, and plan execution for one invocation.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core.logging_config import get_logger
from core.options import validate_options
from core.snapshot_naming import format_timestamp
from core.types import (
    AutosnapOptions,
    Clock,
    Dataset,
    DatasetPlan,
    EventSink,
    PlanResult,
    VolumeManager,
)
from execution.event_sink import emit, log_event_sink
from execution.plan_builder import build_dataset_plan, planned_snapshot_name, snapshot_name_taken
from execution.plan_executor import PlanExecutor
from inventory.inventory_parser import parse_inventory
from policy.policy_evaluator import evaluate_dataset
from policy.retention_selector import retention_group, select_retention

_LOGGER = get_logger(__name__)


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(timezone.utc)


def plan_datasets(
    datasets: dict[str, Dataset],
    options: AutosnapOptions,
    stamp: str,
    sink: EventSink,
) -> list[DatasetPlan]:
    """Evaluate and plan every dataset in name order.

    Args:
        datasets: Parsed inventory.
        options: Validated run options.
        stamp: Timestamp suffix for snapshots created this run.
        sink: Destination for decision events.

    Returns:
        One plan per dataset that has at least one action.
    """
    plans: list[DatasetPlan] = []
    for name in sorted(datasets):
        dataset = datasets[name]
        decision = evaluate_dataset(dataset, options)
        emit(
            sink,
            "info" if decision.should_create else "debug",
            "create_decision",
            dataset=name,
            should_create=decision.should_create,
            reason=decision.reason,
            last_snapshot=decision.last_snapshot.full_name if decision.last_snapshot else None,
        )
        if decision.should_create:
            snapshot_name = planned_snapshot_name(dataset, options, stamp)
            if snapshot_name_taken(dataset, snapshot_name):
                emit(sink, "warning", "snapshot_name_taken", dataset=name, snapshot=snapshot_name)
        selection = select_retention(
            retention_group(dataset, options.prefix, options.label),
            options.keep,
        )
        emit(
            sink,
            "debug",
            "retention_selected",
            dataset=name,
            keep_count=len(selection.to_keep),
            destroy_count=len(selection.to_destroy),
        )
        plan = build_dataset_plan(dataset, decision, selection, options, stamp)
        if plan.actions:
            plans.append(plan)
    return plans


def run_autosnap(
    options: AutosnapOptions,
    volume_manager: VolumeManager,
    clock: Clock = utc_now,
    sink: EventSink = log_event_sink,
) -> PlanResult:
    """Run one snapshot/prune pass over every dataset.

    Args:
        options: Run options, validated before anything is listed.
        volume_manager: Collaborator that lists, creates, and destroys.
        clock: Time source for the snapshot timestamp.
        sink: Destination for decision and action events.

    Returns:
        Aggregate execution result.

    Raises:
        AutosnapConfigError: If options are invalid.
        AutosnapCommandError: If the inventory cannot be listed.
        AutosnapInventoryError: If the inventory cannot be parsed.
    """
    validate_options(options)
    rows = volume_manager.list_inventory(options.label)
    datasets = parse_inventory(rows)
    stamp = format_timestamp(clock())
    plans = plan_datasets(datasets, options, stamp, sink)
    executor = PlanExecutor(volume_manager, sink, dry_run=options.dry_run)
    result = executor.execute(plans)
    _LOGGER.info(
        "autosnap_run_completed",
        label=options.label,
        prefix=options.prefix,
        dry_run=options.dry_run,
        dataset_count=len(datasets),
        creates_succeeded=result.creates_succeeded,
        creates_failed=result.creates_failed,
        destroys_succeeded=result.destroys_succeeded,
        destroys_failed=result.destroys_failed,
        destroys_missing=result.destroys_missing,
    )
    return result
