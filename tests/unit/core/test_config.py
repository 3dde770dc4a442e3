"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import AutosnapConfig
from core.errors import AutosnapConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to zfs and the standard opt-in property."""
    monkeypatch.delenv("ZFS_CMD", raising=False)
    monkeypatch.delenv("AUTOSNAP_PROPERTY", raising=False)
    monkeypatch.delenv("AUTOSNAP_COMMAND_TIMEOUT", raising=False)

    config = AutosnapConfig.from_env()

    assert (config.zfs_command, config.opt_in_property) == ("zfs", "com.sun:auto-snapshot")


def test_from_env_reads_zfs_command(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should take the zfs executable from ZFS_CMD."""
    monkeypatch.setenv("ZFS_CMD", "/sbin/zfs")

    config = AutosnapConfig.from_env()

    assert config.zfs_command == "/sbin/zfs"


def test_from_env_raises_for_invalid_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for a non-numeric command timeout."""
    monkeypatch.setenv("AUTOSNAP_COMMAND_TIMEOUT", "soon")

    with pytest.raises(AutosnapConfigError):
        AutosnapConfig.from_env()

    assert os.getenv("AUTOSNAP_COMMAND_TIMEOUT") == "soon"


def test_from_env_raises_for_non_positive_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject a zero timeout."""
    monkeypatch.setenv("AUTOSNAP_COMMAND_TIMEOUT", "0")

    with pytest.raises(AutosnapConfigError):
        AutosnapConfig.from_env()


def test_from_env_raises_for_property_without_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject user properties that lack a module prefix."""
    monkeypatch.setenv("AUTOSNAP_PROPERTY", "autosnapshot")

    with pytest.raises(AutosnapConfigError):
        AutosnapConfig.from_env()
