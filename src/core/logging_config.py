"""Structured logging configuration.

This module initializes structlog with a stable JSON event format.
The CLI picks the level once; modules only call ``get_logger``.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_logging(level: int = logging.ERROR) -> None:
    """Configure structlog output for this process.

    Args:
        level: Minimum stdlib level number to emit.
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def resolve_log_level(verbose: bool, debug: bool) -> int:
    """Map CLI verbosity flags onto a log level.

    Args:
        verbose: Emit info messages.
        debug: Emit debug messages, wins over ``verbose``.

    Returns:
        Stdlib level number.
    """
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.ERROR


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    return structlog.get_logger(name)
