"""Tests for the logging configuration."""

import json
import logging
import os
import sys
from io import StringIO
from unittest.mock import patch

from pythonjsonlogger.json import JsonFormatter

from better_thinking.logging_config import build_formatter, configure_logging


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def setup_method(self):
        """Save root logger state before each test."""
        root = logging.getLogger()
        self._handlers = root.handlers[:]
        self._level = root.level

    def teardown_method(self):
        """Restore root logger state after each test."""
        root = logging.getLogger()
        root.handlers[:] = self._handlers
        root.setLevel(self._level)

    def _capture_log_output(self, level: str = "INFO", log_format: str = "text"):
        """Helper: configure logging and capture output."""
        env = {"LOG_LEVEL": level, "LOG_FORMAT": log_format}
        with patch.dict(os.environ, env, clear=False):
            configure_logging()

        root = logging.getLogger()
        buf = StringIO()
        for handler in root.handlers:
            handler.stream = buf
        return root, buf

    def test_writes_to_stderr(self):
        configure_logging()
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stderr

    def test_text_mode_formatting(self):
        root, buf = self._capture_log_output(log_format="text")
        logging.getLogger("test.text").info("hello world")
        output = buf.getvalue()
        assert "hello world" in output
        assert "test.text" in output
        assert "INFO" in output

    def test_json_mode_formatting(self):
        root, buf = self._capture_log_output(log_format="json")
        logging.getLogger("test.json").info("structured log")
        parsed = json.loads(buf.getvalue().strip())
        assert parsed["message"] == "structured log"
        assert parsed["level"] == "INFO"
        assert "timestamp" in parsed

    def test_log_level_respected(self):
        root, buf = self._capture_log_output(level="WARNING")
        logging.getLogger("test.level").info("hidden")
        logging.getLogger("test.level").warning("shown")
        output = buf.getvalue()
        assert "hidden" not in output
        assert "shown" in output

    def test_repeated_calls_do_not_duplicate_handlers(self):
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_explicit_arguments_override_environment(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "DEBUG", "LOG_FORMAT": "text"}, clear=False):
            handler = configure_logging(level="error", log_format="json")

        assert logging.getLogger().level == logging.ERROR
        assert isinstance(handler.formatter, JsonFormatter)

    def test_sdk_request_logging_quietened(self):
        configure_logging(level="DEBUG")
        assert logging.getLogger("mcp.server.lowlevel").level == logging.WARNING


class TestBuildFormatter:
    """Tests for build_formatter()."""

    def test_json(self):
        assert isinstance(build_formatter("JSON"), JsonFormatter)

    def test_text_is_default(self):
        formatter = build_formatter("anything")
        assert not isinstance(formatter, JsonFormatter)
        assert "%(levelname)s" in formatter._fmt
