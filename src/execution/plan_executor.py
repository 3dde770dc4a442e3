"""Action submission with per-action failure isolation.

Each action is submitted on its own. A failing action is reported and
recorded, and the remaining actions still run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from core.constants import SNAPSHOT_SEPARATOR
from core.errors import AutosnapCommandError, AutosnapSnapshotMissingError
from core.types import (
    ActionFailure,
    DatasetPlan,
    EventSink,
    PlanResult,
    SnapshotAction,
    VolumeManager,
)
from execution.event_sink import emit


@dataclass
class _ResultTally:
    """Mutable counters folded into a frozen ``PlanResult`` at the end."""

    creates_succeeded: int = 0
    creates_failed: int = 0
    destroys_succeeded: int = 0
    destroys_failed: int = 0
    destroys_missing: int = 0
    failures: list[ActionFailure] = field(default_factory=list)

    def to_result(self) -> PlanResult:
        return PlanResult(
            creates_succeeded=self.creates_succeeded,
            creates_failed=self.creates_failed,
            destroys_succeeded=self.destroys_succeeded,
            destroys_failed=self.destroys_failed,
            destroys_missing=self.destroys_missing,
            failures=tuple(self.failures),
        )


class PlanExecutor:
    """Submit planned actions to a volume manager, or only report them."""

    def __init__(self, volume_manager: VolumeManager, sink: EventSink, dry_run: bool) -> None:
        self._volume_manager = volume_manager
        self._sink = sink
        self._dry_run = dry_run

    def execute(self, plans: Iterable[DatasetPlan]) -> PlanResult:
        """Run every action of every plan in order.

        Args:
            plans: Dataset plans in processing order.

        Returns:
            Aggregate counts and failures.
        """
        tally = _ResultTally()
        for plan in plans:
            for action in plan.actions:
                if self._dry_run:
                    self._report_dry_run(action, tally)
                elif action.kind == "create":
                    self._create(action, tally)
                else:
                    self._destroy(action, tally)
        return tally.to_result()

    def _report_dry_run(self, action: SnapshotAction, tally: _ResultTally) -> None:
        emit(
            self._sink,
            "info",
            f"would_{action.kind}",
            dataset=action.dataset_name,
            snapshot=action.snapshot_name,
        )
        if action.kind == "create":
            tally.creates_succeeded += 1
        else:
            tally.destroys_succeeded += 1

    def _create(self, action: SnapshotAction, tally: _ResultTally) -> None:
        try:
            self._volume_manager.create_snapshot(action.dataset_name, action.snapshot_name)
        except AutosnapCommandError as error:
            tally.creates_failed += 1
            self._record_failure(action, str(error), tally)
            return
        tally.creates_succeeded += 1
        emit(self._sink, "info", "snapshot_created", snapshot=action.snapshot_name)

    def _destroy(self, action: SnapshotAction, tally: _ResultTally) -> None:
        if SNAPSHOT_SEPARATOR not in action.snapshot_name:
            tally.destroys_failed += 1
            self._record_failure(action, "not a snapshot name", tally)
            return
        try:
            self._volume_manager.destroy_snapshot(action.snapshot_name)
        except AutosnapSnapshotMissingError as error:
            tally.destroys_missing += 1
            emit(
                self._sink,
                "warning",
                "snapshot_already_absent",
                snapshot=action.snapshot_name,
                reason=str(error),
            )
            return
        except AutosnapCommandError as error:
            tally.destroys_failed += 1
            self._record_failure(action, str(error), tally)
            return
        tally.destroys_succeeded += 1
        emit(self._sink, "info", "snapshot_destroyed", snapshot=action.snapshot_name)

    def _record_failure(self, action: SnapshotAction, reason: str, tally: _ResultTally) -> None:
        tally.failures.append(ActionFailure(action=action, reason=reason))
        emit(
            self._sink,
            "error",
            f"snapshot_{action.kind}_failed",
            dataset=action.dataset_name,
            snapshot=action.snapshot_name,
            reason=reason,
        )
