"""Unit tests for the zfs command collaborator."""

from __future__ import annotations

import subprocess
from typing import Any

import pytest

from core.config import AutosnapConfig
from core.errors import AutosnapCommandError, AutosnapSnapshotMissingError
from inventory.zfs_command import ZfsCommandRunner


def _config() -> AutosnapConfig:
    return AutosnapConfig(
        zfs_command="zfs",
        opt_in_property="com.sun:auto-snapshot",
        command_timeout=5.0,
    )


class _FakeRun:
    """Stand-in for subprocess.run recording invocations."""

    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.calls: list[list[str]] = []
        self._returncode = returncode
        self._stdout = stdout
        self._stderr = stderr

    def __call__(self, command: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        self.calls.append(command)
        return subprocess.CompletedProcess(command, self._returncode, self._stdout, self._stderr)


def test_list_inventory_requests_label_property(monkeypatch: pytest.MonkeyPatch) -> None:
    """Listing should ask zfs for the generic and label-specific properties."""
    fake_run = _FakeRun(stdout="tank\t0\t-\t-\t1\n\n")
    monkeypatch.setattr(subprocess, "run", fake_run)

    rows = ZfsCommandRunner(_config()).list_inventory("daily")

    assert rows == ["tank\t0\t-\t-\t1"]
    assert "name,written,com.sun:auto-snapshot,com.sun:auto-snapshot:daily,creation" in (
        fake_run.calls[0]
    )


def test_create_snapshot_runs_zfs_snapshot(monkeypatch: pytest.MonkeyPatch) -> None:
    """Create should invoke 'zfs snapshot' with the full name."""
    fake_run = _FakeRun()
    monkeypatch.setattr(subprocess, "run", fake_run)

    ZfsCommandRunner(_config()).create_snapshot("tank/data", "tank/data@auto-daily-1")

    assert fake_run.calls == [["zfs", "snapshot", "tank/data@auto-daily-1"]]


def test_create_snapshot_rejects_foreign_name(monkeypatch: pytest.MonkeyPatch) -> None:
    """Create should refuse names that belong to another dataset."""
    fake_run = _FakeRun()
    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(AutosnapCommandError):
        ZfsCommandRunner(_config()).create_snapshot("tank/data", "tank/home@auto-daily-1")

    assert fake_run.calls == []


def test_destroy_snapshot_refuses_datasets(monkeypatch: pytest.MonkeyPatch) -> None:
    """Destroy should never be issued for a name without '@'."""
    fake_run = _FakeRun()
    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(AutosnapCommandError):
        ZfsCommandRunner(_config()).destroy_snapshot("tank/data")

    assert fake_run.calls == []


def test_destroy_snapshot_maps_missing_target(monkeypatch: pytest.MonkeyPatch) -> None:
    """An already destroyed snapshot should raise the missing-snapshot error."""
    fake_run = _FakeRun(
        returncode=1,
        stderr="could not find any snapshots to destroy; check snapshot names.",
    )
    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(AutosnapSnapshotMissingError):
        ZfsCommandRunner(_config()).destroy_snapshot("tank/data@auto-daily-1")


def test_destroy_snapshot_raises_command_error_when_busy(monkeypatch: pytest.MonkeyPatch) -> None:
    """Other zfs failures should carry the stderr reason."""
    fake_run = _FakeRun(returncode=1, stderr="cannot destroy snapshot: dataset is busy")
    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(AutosnapCommandError, match="dataset is busy") as error_info:
        ZfsCommandRunner(_config()).destroy_snapshot("tank/data@auto-daily-1")

    assert not isinstance(error_info.value, AutosnapSnapshotMissingError)


def test_run_raises_when_executable_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    """A missing zfs binary should surface as a command error."""

    def _missing(command: list[str], **kwargs: Any) -> None:
        raise FileNotFoundError(command[0])

    monkeypatch.setattr(subprocess, "run", _missing)

    with pytest.raises(AutosnapCommandError, match="ZFS_CMD"):
        ZfsCommandRunner(_config()).list_inventory("daily")


def test_run_raises_on_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    """A hung zfs call should surface as a command error."""

    def _timeout(command: list[str], **kwargs: Any) -> None:
        raise subprocess.TimeoutExpired(command, kwargs["timeout"])

    monkeypatch.setattr(subprocess, "run", _timeout)

    with pytest.raises(AutosnapCommandError):
        ZfsCommandRunner(_config()).create_snapshot("tank", "tank@auto-daily-1")
