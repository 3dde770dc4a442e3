"""Autosnap exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class AutosnapError(Exception):
    """Base exception for all autosnap failures."""


class AutosnapConfigError(AutosnapError):
    """Raised for invalid runtime configuration or policy options."""


class AutosnapInventoryError(AutosnapError):
    """Raised when the dataset inventory cannot be parsed."""


class AutosnapCommandError(AutosnapError):
    """Raised when a zfs command invocation fails."""


class AutosnapSnapshotMissingError(AutosnapCommandError):
    """Raised when a destroy target no longer exists."""


class AutosnapDependencyError(AutosnapError):
    """Raised when an optional runtime dependency is missing."""
