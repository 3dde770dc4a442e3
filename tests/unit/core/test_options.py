"""Unit tests for run option validation."""

from __future__ import annotations

import pytest

from core.errors import AutosnapConfigError
from core.options import validate_options
from core.types import AutosnapOptions


def test_validate_options_accepts_defaults() -> None:
    """Default options with a plain label should be valid."""
    options = AutosnapOptions(label="daily")

    assert validate_options(options) is options


def test_validate_options_accepts_zero_keep() -> None:
    """Keeping zero snapshots is a legal policy."""
    options = AutosnapOptions(label="daily", keep=0)

    assert validate_options(options).keep == 0


@pytest.mark.parametrize(
    "options",
    [
        AutosnapOptions(label="daily", keep=-1),
        AutosnapOptions(label="daily", min_size_kb=-5),
        AutosnapOptions(label=""),
        AutosnapOptions(label="dai ly"),
        AutosnapOptions(label="daily-2"),
        AutosnapOptions(label="daily", prefix=""),
        AutosnapOptions(label="daily", prefix="bad@prefix"),
        AutosnapOptions(label="daily", prefix="tank/prefix"),
    ],
)
def test_validate_options_rejects_invalid_values(options: AutosnapOptions) -> None:
    """Invalid keep, size, label, or prefix should raise config errors."""
    with pytest.raises(AutosnapConfigError):
        validate_options(options)
