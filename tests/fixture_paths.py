"""Shared fixture helpers for tests."""

from __future__ import annotations

from pathlib import Path


def fixture_path(relative_path: str) -> Path:
    """Resolve a fixture path relative to tests/fixtures.

    Args:
        relative_path: Path under fixtures root.

    Returns:
        Absolute fixture path.
    """
    tests_root = Path(__file__).resolve().parent
    return tests_root / "fixtures" / relative_path


def inventory_lines(file_name: str) -> list[str]:
    """Read a recorded ``zfs list`` inventory from tests/fixtures/inventory."""
    return fixture_path(f"inventory/{file_name}").read_text(encoding="utf-8").splitlines()
