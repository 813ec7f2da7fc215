"""
redact-data - Observability Module

Logging setup for applications embedding the library.

Usage:
    from redact_data.observability import configure_logging

    configure_logging(level="DEBUG", fmt="json")

Level and format default to LOG_LEVEL and LOG_FORMAT from the loaded
configuration; JSON output also carries ENVIRONMENT.
"""

from .logs import PACKAGE_LOGGER, JSONFormatter, configure_logging

__all__ = [
    "PACKAGE_LOGGER",
    "JSONFormatter",
    "configure_logging",
]
