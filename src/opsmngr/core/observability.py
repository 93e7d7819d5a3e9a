"""Structured log events emitted by the client."""

from __future__ import annotations

import logging
from typing import Any

# attributes every LogRecord already carries; extras must not shadow them
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """
    Log event with fields attached as LogRecord extras.
    A field named like a LogRecord attribute is kept under a ``field_`` prefix.
    """
    log = logger or logging.getLogger("opsmngr.events")
    extra = {"event": event}
    for key, value in fields.items():
        extra[f"field_{key}" if key in _RECORD_ATTRS else key] = value
    log.log(level, event, extra=extra)


__all__ = ["log_event"]
