"""Report event helpers and the default structlog-backed sink."""

from __future__ import annotations

from core.logging_config import get_logger
from core.types import EventSeverity, EventSink, ReportEvent

_LOGGER = get_logger("autosnap.events")


def log_event_sink(event: ReportEvent) -> None:
    """Forward a report event to the structured logger at its severity."""
    log_method = getattr(_LOGGER, event.severity)
    log_method(event.event, **dict(event.fields))


def emit(sink: EventSink, severity: EventSeverity, event: str, **fields: object) -> None:
    """Build a report event and hand it to ``sink``.

    Args:
        sink: Destination for the event.
        severity: Event severity.
        event: Snake-case event name.
        **fields: Event context fields.
    """
    sink(ReportEvent(severity=severity, event=event, fields=fields))
