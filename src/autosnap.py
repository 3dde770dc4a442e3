"""Public SDK surface for autosnap.

This module provides a stable import path for library users.
It re-exports the run entry point, collaborators, and typed models.
"""

from __future__ import annotations

from core.config import AutosnapConfig
from core.policy_file import PolicyFile, load_policy_file, resolve_options
from core.types import (
    AutosnapOptions,
    CreateDecision,
    Dataset,
    DatasetPlan,
    PlanResult,
    ReportEvent,
    RetentionSelection,
    Snapshot,
    SnapshotAction,
    VolumeManager,
)
from execution.autosnap_runner import plan_datasets, run_autosnap
from execution.plan_executor import PlanExecutor
from inventory.inventory_parser import parse_inventory
from inventory.zfs_command import ZfsCommandRunner
from policy.policy_evaluator import evaluate_dataset, is_opted_in
from policy.retention_selector import retention_group, select_retention

__all__ = [
    "AutosnapConfig",
    "AutosnapOptions",
    "CreateDecision",
    "Dataset",
    "DatasetPlan",
    "PlanExecutor",
    "PlanResult",
    "PolicyFile",
    "ReportEvent",
    "RetentionSelection",
    "Snapshot",
    "SnapshotAction",
    "VolumeManager",
    "ZfsCommandRunner",
    "evaluate_dataset",
    "is_opted_in",
    "load_policy_file",
    "parse_inventory",
    "plan_datasets",
    "resolve_options",
    "retention_group",
    "run_autosnap",
    "select_retention",
]
