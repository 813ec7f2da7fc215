"""
redact-data - Logging Setup Tests
"""

import json
import logging
import sys
from collections.abc import Generator

import pytest

from redact_data.observability import PACKAGE_LOGGER, JSONFormatter, configure_logging


@pytest.fixture
def package_logger() -> Generator[logging.Logger, None, None]:
    """Restore the package logger after each test."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestJSONFormatter:
    """Test suite for JSONFormatter."""

    def test_includes_extra_fields(self) -> None:
        record = logging.LogRecord("redact_data.storage", logging.INFO, __file__, 10, "Stored %s", ("x",), None)
        record.path = ".a."

        payload = json.loads(JSONFormatter().format(record))

        assert payload["message"] == "Stored x"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "redact_data.storage"
        assert payload["path"] == ".a."
        assert payload["timestamp"].endswith("Z")
        assert "args" not in payload

    def test_includes_exception(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

        payload = json.loads(JSONFormatter().format(record))

        assert "RuntimeError: boom" in payload["exception"]

    def test_non_serializable_extra_is_stringified(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "m", None, None)
        record.error = OSError("disk")

        assert json.loads(JSONFormatter().format(record))["error"] == "disk"

    def test_environment_field_only_when_set(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "m", None, None)

        assert "environment" not in json.loads(JSONFormatter().format(record))
        assert json.loads(JSONFormatter(environment="test").format(record))["environment"] == "test"


class TestConfigureLogging:
    """Test suite for configure_logging."""

    def test_json_handler(self, clean_env: None, package_logger: logging.Logger) -> None:
        logger = configure_logging(level="debug", fmt="json")

        assert logger is package_logger
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logger.propagate is False

    def test_repeated_calls_do_not_duplicate_handlers(self, clean_env: None, package_logger: logging.Logger) -> None:
        configure_logging()
        configure_logging(fmt="text")

        assert len(package_logger.handlers) == 1
        assert not isinstance(package_logger.handlers[0].formatter, JSONFormatter)

    def test_defaults_come_from_config(self, clean_env: None, package_logger: logging.Logger) -> None:
        logger = configure_logging()

        assert logger.level == logging.INFO
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_reads_log_settings_from_env(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch, package_logger: logging.Logger
    ) -> None:
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        monkeypatch.setenv("LOG_FORMAT", "json")
        monkeypatch.setenv("ENVIRONMENT", "production")

        logger = configure_logging()

        assert logger.level == logging.WARNING
        formatter = logger.handlers[0].formatter
        assert isinstance(formatter, JSONFormatter)

        record = logging.LogRecord("redact_data", logging.WARNING, __file__, 1, "m", None, None)
        assert json.loads(formatter.format(record))["environment"] == "production"

    def test_explicit_arguments_override_config(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch, package_logger: logging.Logger
    ) -> None:
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        monkeypatch.setenv("LOG_FORMAT", "json")

        logger = configure_logging(level="DEBUG", fmt="text")

        assert logger.level == logging.DEBUG
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)
