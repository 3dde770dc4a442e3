"""zfs(8) command collaborator.

This module is the only place that spawns ``zfs`` processes. It lists
the inventory and submits create/destroy requests as blocking calls.
"""

from __future__ import annotations

import subprocess
from typing import Sequence

from core.config import AutosnapConfig
from core.constants import INVENTORY_DATASET_TYPES, SNAPSHOT_SEPARATOR
from core.errors import AutosnapCommandError, AutosnapSnapshotMissingError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)
_MISSING_SNAPSHOT_MARKERS = (
    "could not find any snapshots to destroy",
    "dataset does not exist",
)


class ZfsCommandRunner:
    """Volume manager backed by the local ``zfs`` executable."""

    def __init__(self, config: AutosnapConfig) -> None:
        self._config = config

    def list_inventory(self, label: str) -> list[str]:
        """Return tab-separated rows for every dataset and snapshot.

        Args:
            label: Active label, used for the label-specific opt-in column.

        Returns:
            Raw inventory rows ordered by creation time.

        Raises:
            AutosnapCommandError: If zfs is missing or the listing fails.
        """
        opt_in_property = self._config.opt_in_property
        columns = f"name,written,{opt_in_property},{opt_in_property}:{label},creation"
        output = self._run(
            ["list", "-H", "-p", "-o", columns, "-t", INVENTORY_DATASET_TYPES, "-s", "creation"]
        )
        return [line for line in output.splitlines() if line.strip()]

    def create_snapshot(self, dataset_name: str, snapshot_name: str) -> None:
        """Create one snapshot.

        Args:
            dataset_name: Dataset the snapshot belongs to.
            snapshot_name: Full ``dataset@name`` snapshot name.

        Raises:
            AutosnapCommandError: If the name does not belong to the dataset or zfs fails.
        """
        if not snapshot_name.startswith(f"{dataset_name}{SNAPSHOT_SEPARATOR}"):
            raise AutosnapCommandError(
                f"Refusing to create '{snapshot_name}': name does not belong to '{dataset_name}'."
            )
        self._run(["snapshot", snapshot_name])

    def destroy_snapshot(self, snapshot_name: str) -> None:
        """Destroy one snapshot.

        Args:
            snapshot_name: Full ``dataset@name`` snapshot name.

        Raises:
            AutosnapSnapshotMissingError: If the snapshot is already gone.
            AutosnapCommandError: If the name is not a snapshot or zfs fails.
        """
        if SNAPSHOT_SEPARATOR not in snapshot_name:
            raise AutosnapCommandError(
                f"Refusing to destroy '{snapshot_name}': only snapshots can be destroyed."
            )
        try:
            self._run(["destroy", snapshot_name])
        except AutosnapCommandError as error:
            if any(marker in str(error) for marker in _MISSING_SNAPSHOT_MARKERS):
                raise AutosnapSnapshotMissingError(str(error)) from error
            raise

    def _run(self, args: Sequence[str]) -> str:
        command = [self._config.zfs_command, *args]
        _LOGGER.debug("zfs_command_started", command=" ".join(command))
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                check=False,
                encoding="utf-8",
                errors="surrogateescape",
                timeout=self._config.command_timeout,
            )
        except FileNotFoundError as error:
            raise AutosnapCommandError(
                f"zfs executable '{self._config.zfs_command}' was not found. "
                "Install zfs utilities or point ZFS_CMD at the binary."
            ) from error
        except subprocess.TimeoutExpired as error:
            raise AutosnapCommandError(
                f"'{' '.join(command)}' did not finish within {self._config.command_timeout}s. "
                "Raise AUTOSNAP_COMMAND_TIMEOUT if the pool is busy."
            ) from error
        except OSError as error:
            raise AutosnapCommandError(f"Failed to run '{' '.join(command)}': {error}.") from error
        if completed.returncode != 0:
            reason = completed.stderr.strip() or f"exit status {completed.returncode}"
            raise AutosnapCommandError(f"'{' '.join(command)}' failed: {reason}")
        _LOGGER.debug("zfs_command_finished", command=" ".join(command))
        return completed.stdout
