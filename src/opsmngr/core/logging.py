import logging
from typing import IO, Any, Iterable, Optional

LOG_EXTRA_FIELDS = (
    "method",
    "endpoint",
    "status",
    "duration_ms",
    "error_type",
)


class LogfmtFormatter(logging.Formatter):
    """Render op_call records as logfmt; extras that are absent are left out."""

    def __init__(self, fields: Iterable[str] = LOG_EXTRA_FIELDS):
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        pairs = [
            ("level", record.levelname.lower()),
            ("logger", record.name),
            ("event", record.getMessage()),
        ]
        pairs.extend((key, getattr(record, key, None)) for key in self.fields)
        if record.exc_info and record.exc_info[0] is not None:
            pairs.append(("exc_type", record.exc_info[0].__name__))

        return " ".join(
            f"{key}={_quote(val)}" for key, val in pairs if val is not None and val != ""
        )


def _quote(val: Any) -> str:
    if isinstance(val, (bool, int, float)):
        return str(val).lower() if isinstance(val, bool) else str(val)
    s = str(val)
    if any(c in s for c in ' ="\\'):
        s = '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return s


def setup_logging(level: str = "INFO", stream: Optional[IO[str]] = None) -> logging.Handler:
    """Send opsmngr logs to stream (stderr by default) in logfmt; safe to call twice."""

    log = logging.getLogger("opsmngr")
    for h in list(log.handlers):
        if isinstance(h.formatter, LogfmtFormatter):
            log.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(LogfmtFormatter())
    log.addHandler(handler)
    log.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]
