"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from habitloop.config import TestConfig
from habitloop.logging_config import (
    JSONFormatter,
    SessionBufferHandler,
    get_logger,
    session_log_path,
    setup_logging,
)


def _record(level=logging.INFO, msg="Test message", exc_info=None, **extra):
    record = logging.LogRecord(
        name="habitloop.test",
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    record.module = "test_module"
    record.funcName = "test_function"
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter():
    """JSONFormatter emits the standard fields as one JSON object."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "habitloop.test"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_with_extra_fields():
    log_data = json.loads(JSONFormatter().format(_record(habit_id="habit-1")))
    assert log_data["extra"] == {"habit_id": "habit-1"}


def test_json_formatter_with_exception():
    """JSONFormatter includes exception type, message and traceback."""
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record(logging.ERROR, exc_info=exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"]


def test_setup_logging(tmp_path):
    """Logging setup creates the JSON log file and registers all handlers."""
    config = TestConfig(data_dir=tmp_path)

    logger = setup_logging(config)

    assert logger.name == "habitloop"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 3  # console, file, session buffer
    assert any(isinstance(h, SessionBufferHandler) for h in logger.handlers)

    log_file = tmp_path / "logs" / "habitloop.log"
    assert log_file.exists()

    get_logger("tracker").warning("Test warning message")
    for handler in logger.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    assert len(lines) >= 2
    entries = [json.loads(line) for line in lines]
    assert entries[0]["message"] == "Logging initialized"
    assert entries[-1]["logger"] == "habitloop.tracker"
    assert session_log_path().parent == tmp_path / "logs"


def test_get_logger():
    """get_logger returns loggers namespaced under habitloop."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")

    assert logger1.name == "habitloop.module1"
    assert logger2.name == "habitloop.module2"
    assert logger1 is not logger2


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(tmp_path, dev_mode):
    """Console logging level adjusts based on dev mode."""
    config = TestConfig(data_dir=tmp_path)
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)

    console_handlers = [
        handler
        for handler in logger.handlers
        if type(handler) is logging.StreamHandler
    ]
    assert len(console_handlers) == 1
    expected_level = logging.INFO if dev_mode else logging.WARNING
    assert console_handlers[0].level == expected_level
