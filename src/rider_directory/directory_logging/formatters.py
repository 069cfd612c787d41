"""Log formatters for JSON and human-readable output.

Both formatters surface the rider context attached by ``log_rider_context``
and by bus/repository ``extra`` fields, so a record about one rider can be
found in either output.
"""

import json
import logging
from datetime import UTC, datetime

SERVICE_NAME = "rider-directory"

CONTEXT_FIELDS = ("rider_id", "event", "topic", "correlation_id")


def record_context(record: logging.LogRecord) -> dict[str, object]:
    """Context fields set on ``record``, skipping unset and empty ones."""
    context = {}
    for field in CONTEXT_FIELDS:
        value = getattr(record, field, None)
        if value not in (None, ""):
            context[field] = value
    return context


class JSONFormatter(logging.Formatter):
    """One JSON object per record for log shipping."""

    def __init__(self, environment: str = "development"):
        super().__init__()
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "env": self.environment,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
            **record_context(record),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class DevFormatter(logging.Formatter):
    """Human-readable lines, prefixed with the rider a record is about."""

    def __init__(self) -> None:
        super().__init__(
            fmt=(
                "%(asctime)s [%(levelname)8s] %(name)s: "
                "%(rider_prefix)s%(message)s%(context_suffix)s"
            ),
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        context = record_context(record)
        rider_id = context.pop("rider_id", None)
        context.pop("correlation_id", None)
        record.rider_prefix = f"[rider {rider_id}] " if rider_id is not None else ""
        record.context_suffix = (
            " (" + " ".join(f"{k}={v}" for k, v in context.items()) + ")" if context else ""
        )
        return super().format(record)
