"""Root logger configuration for the rider directory."""

import logging
import sys
from typing import TextIO

from .context import ContextFilter
from .filters import DefaultCorrelationFilter, PIIFilter
from .formatters import DevFormatter, JSONFormatter

# SQL echo and redis reconnect chatter
NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "redis")


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    environment: str = "development",
    stream: TextIO | None = None,
) -> logging.Handler:
    """Install a single handler on the root logger and return it."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter(environment) if json_output else DevFormatter())
    for log_filter in (PIIFilter(), DefaultCorrelationFilter(), ContextFilter()):
        handler.addFilter(log_filter)

    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return handler
