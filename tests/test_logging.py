"""Tests for logging configuration."""

import json
import logging
import sys
from unittest.mock import patch

from genai_samples.config import Environment, Settings
from genai_samples.logging_config import (
    DevFormatter,
    JSONFormatter,
    get_logger,
    setup_logging,
)


def _record(msg: str = "Test message", level: int = logging.INFO, **kwargs) -> logging.LogRecord:
    return logging.LogRecord(
        name=kwargs.pop("name", "test"),
        level=level,
        pathname=kwargs.pop("pathname", "test.py"),
        lineno=kwargs.pop("lineno", 10),
        msg=msg,
        args=(),
        exc_info=kwargs.pop("exc_info", None),
    )


class TestJSONFormatter:
    """Tests for JSON log formatter."""

    def test_format_basic_message(self) -> None:
        """Basic log message is formatted as JSON."""
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test"
        assert data["message"] == "Test message"
        assert "timestamp" in data
        assert "extra" not in data

    def test_format_includes_file_info(self) -> None:
        """Log includes file and line information."""
        record = _record(level=logging.ERROR, pathname="/app/module.py", lineno=42)
        data = json.loads(JSONFormatter().format(record))

        assert data["file"] == "/app/module.py:42"

    def test_format_includes_extra_fields(self) -> None:
        """Fields passed through extra= are collected."""
        record = _record()
        record.collection = "documents"
        record.top_k = 3

        data = json.loads(JSONFormatter().format(record))

        assert data["extra"] == {"collection": "documents", "top_k": 3}

    def test_format_keeps_non_ascii(self) -> None:
        """Korean text is written as-is."""
        output = JSONFormatter().format(_record("서울에 대해 알려줘"))
        assert "서울에 대해 알려줘" in output

    def test_format_with_exception(self) -> None:
        """Exception info is included in output."""
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(
            JSONFormatter().format(_record("Error", level=logging.ERROR, exc_info=exc_info))
        )

        assert "exception" in data
        assert "ValueError" in data["exception"]


class TestDevFormatter:
    """Tests for development formatter."""

    def test_format_includes_level(self) -> None:
        """Development format includes level."""
        record = _record("Warning message", level=logging.WARNING, name="test.module")
        output = DevFormatter().format(record)

        assert "WARNING" in output
        assert "test.module" in output
        assert "Warning message" in output


class TestSetupLogging:
    """Tests for logging setup."""

    def test_returns_root_logger(self) -> None:
        """setup_logging returns root logger."""
        logger = setup_logging(level="INFO", json_output=False)
        assert logger is logging.getLogger()

    def test_uses_json_in_production(self) -> None:
        """JSON output is used in production environment."""
        mock_settings = Settings(environment=Environment.PRODUCTION)

        with patch("genai_samples.logging_config.get_settings", return_value=mock_settings):
            setup_logging()

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_uses_dev_formatter_in_development(self) -> None:
        """Dev formatter is used in development environment."""
        mock_settings = Settings(environment=Environment.DEVELOPMENT)

        with patch("genai_samples.logging_config.get_settings", return_value=mock_settings):
            setup_logging()

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, DevFormatter)

    def test_level_override(self) -> None:
        """Log level can be overridden."""
        setup_logging(level="DEBUG", json_output=False)
        assert logging.getLogger().level == logging.DEBUG

    def test_quiets_sdk_loggers(self) -> None:
        """Transport loggers are raised to WARNING."""
        setup_logging(level="DEBUG", json_output=False)
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("google_genai").level == logging.WARNING


class TestGetLogger:
    """Tests for named logger retrieval."""

    def test_returns_named_logger(self) -> None:
        """get_logger returns a logger with the given name."""
        assert get_logger("genai_samples.module").name == "genai_samples.module"

    def test_logger_hierarchy(self) -> None:
        """Child loggers inherit the root level."""
        setup_logging(level="WARNING", json_output=False)
        child = get_logger("genai_samples.sub")
        assert child.getEffectiveLevel() == logging.WARNING
