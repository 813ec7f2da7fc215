"""
redact-data - Logging Setup

Every module logs through ``logging.getLogger(__name__)`` under the
``redact_data`` logger. Applications that want the library's output
formatted call configure_logging() once at startup.
"""

import json
import logging
from datetime import UTC, datetime

from ..config import get_config

PACKAGE_LOGGER = "redact_data"

_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Standard LogRecord attributes; anything else on a record came from extra={...}
_RESERVED_ATTRS = frozenset(
    {
        "args",
        "msg",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
        "message",
    }
)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def __init__(self, environment: str | None = None) -> None:
        super().__init__()
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if self.environment:
            log_data["environment"] = self.environment

        for key, value in record.__dict__.items():
            if key not in log_data and not key.startswith("_") and key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def configure_logging(level: str | None = None, fmt: str | None = None) -> logging.Logger:
    """
    Install a single stream handler on the package logger.

    Settings not passed explicitly come from the loaded configuration
    (LOG_LEVEL, LOG_FORMAT, ENVIRONMENT).

    Args:
        level: Log level name (DEBUG, INFO, ...)
        fmt: "text" for human-readable lines, "json" for structured output

    Returns:
        The configured package logger
    """
    config = get_config()
    level = level or config.log_level
    fmt = fmt or config.log_format

    logger = logging.getLogger(PACKAGE_LOGGER)

    # Remove existing handlers so repeated calls don't duplicate output
    logger.handlers.clear()

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter(environment=config.environment))
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False

    return logger
