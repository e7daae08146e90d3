"""Tests for structured logging setup."""

from __future__ import annotations

import io
import json
import logging

import pytest
import structlog

from projector_core.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_handlers():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_json_format(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logger = get_logger("test_json")
        logger.info("signal_generated", symbol="AAPL")

        captured = capsys.readouterr()
        line = json.loads(captured.err.strip())
        assert line["event"] == "signal_generated"
        assert line["symbol"] == "AAPL"
        assert line["level"] == "info"
        assert "timestamp" in line

    def test_console_format(self, capsys):
        setup_logging(level="INFO", log_format="console")
        logger = get_logger("test_console")
        logger.info("hello console", provider="claude")

        captured = capsys.readouterr()
        assert "hello console" in captured.err
        assert "claude" in captured.err

    def test_stdout_stays_clean(self, capsys):
        setup_logging(level="INFO", log_format="console")
        get_logger("test_stdout").warning("only on stderr")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "only on stderr" in captured.err

    def test_explicit_stream(self):
        stream = io.StringIO()
        setup_logging(level="INFO", log_format="json", stream=stream)
        get_logger("test_stream").info("to the buffer")

        line = json.loads(stream.getvalue().strip())
        assert line["event"] == "to the buffer"

    def test_log_level_filtering(self, capsys):
        setup_logging(level="WARNING", log_format="json")
        logger = get_logger("test_level")
        logger.info("should be hidden")
        logger.warning("should appear")

        captured = capsys.readouterr()
        assert "should be hidden" not in captured.err
        assert "should appear" in captured.err

    def test_noisy_http_loggers_quieted(self):
        setup_logging(level="DEBUG", log_format="json")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_get_logger_with_context(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logger = get_logger("test_ctx", symbol="BTC-USD", provider="openai")
        logger.info("context test")

        captured = capsys.readouterr()
        line = json.loads(captured.err.strip())
        assert line["symbol"] == "BTC-USD"
        assert line["provider"] == "openai"

    def test_contextvars_binding(self, capsys):
        setup_logging(level="INFO", log_format="json")
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(symbol="MSFT")

        logger = get_logger("test_ctxvars")
        logger.info("with context var")

        captured = capsys.readouterr()
        line = json.loads(captured.err.strip())
        assert line["symbol"] == "MSFT"

        structlog.contextvars.clear_contextvars()
