"""Runtime configuration model for autosnap.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_COMMAND_TIMEOUT_SECONDS,
    DEFAULT_OPT_IN_PROPERTY,
    DEFAULT_ZFS_COMMAND,
)
from core.errors import AutosnapConfigError


@dataclass(frozen=True)
class AutosnapConfig:
    """Validated runtime configuration.

    Attributes:
        zfs_command: Executable used for every zfs invocation.
        opt_in_property: User property that opts datasets into snapshots.
        command_timeout: Seconds to wait for a single zfs invocation.
    """

    zfs_command: str
    opt_in_property: str
    command_timeout: float

    @classmethod
    def from_env(cls) -> "AutosnapConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            AutosnapConfigError: If environment values are invalid.
        """
        zfs_command = os.getenv("ZFS_CMD", DEFAULT_ZFS_COMMAND).strip()
        opt_in_property = os.getenv("AUTOSNAP_PROPERTY", DEFAULT_OPT_IN_PROPERTY).strip()
        timeout_value = os.getenv("AUTOSNAP_COMMAND_TIMEOUT", str(DEFAULT_COMMAND_TIMEOUT_SECONDS))
        if not zfs_command:
            raise AutosnapConfigError(
                "Invalid ZFS_CMD value: expected an executable name or path, got ''. "
                "Unset ZFS_CMD to use 'zfs' from PATH."
            )
        if not opt_in_property or ":" not in opt_in_property:
            raise AutosnapConfigError(
                f"Invalid AUTOSNAP_PROPERTY value '{opt_in_property}': zfs user properties "
                "need a module prefix such as 'com.sun:auto-snapshot'."
            )
        return cls(
            zfs_command=zfs_command,
            opt_in_property=opt_in_property,
            command_timeout=_parse_command_timeout(timeout_value),
        )


def _parse_command_timeout(raw_value: str) -> float:
    """Parse the command timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive timeout in seconds.

    Raises:
        AutosnapConfigError: If value is not a positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise AutosnapConfigError(
            "Invalid AUTOSNAP_COMMAND_TIMEOUT value: "
            f"expected number of seconds, got '{raw_value}'. "
            "Set AUTOSNAP_COMMAND_TIMEOUT to a numeric value."
        ) from error
    if timeout <= 0:
        raise AutosnapConfigError(
            f"Invalid AUTOSNAP_COMMAND_TIMEOUT value {raw_value}: must be greater than 0."
        )
    return timeout
