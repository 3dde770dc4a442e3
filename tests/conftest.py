"""Pytest configuration for repository test runs."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def quiet_structlog() -> Iterator[None]:
    """Keep structlog output to errors and restore defaults after each test."""
    import structlog

    from core.logging_config import configure_logging

    configure_logging(logging.ERROR)
    yield
    structlog.reset_defaults()
