"""
Tests for foundation_console.logging_config module.
"""

import io
import json
import logging
import os
from unittest import mock

import pytest


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLogContext:
    def test_set_and_get(self):
        """Test setting and reading context fields."""
        from foundation_console.logging_config import LogContext

        LogContext.set(page="voting", user_id="u1")

        assert LogContext.get("page") == "voting"
        assert LogContext.get_all() == {"page": "voting", "user_id": "u1", "session_id": None}

    def test_unknown_field_rejected(self):
        """Test that unknown context fields are rejected."""
        from foundation_console.logging_config import LogContext

        with pytest.raises(KeyError):
            LogContext.set(tenant="x")

    def test_clear(self):
        """Test clearing the context."""
        from foundation_console.logging_config import LogContext

        LogContext.set(session_id="s1")
        LogContext.clear()

        assert LogContext.get("session_id") is None


class TestStructuredFormatter:
    def _record(self, **extra):
        record = logging.LogRecord("foundation_console.test", logging.INFO, __file__, 10, "hello %s", ("world",), None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_formats_json_with_context_and_extra(self):
        """Test JSON output with context and extra fields."""
        from foundation_console.logging_config import LogContext, StructuredFormatter

        LogContext.set(page="dashboard")
        entry = json.loads(StructuredFormatter().format(self._record(contest_id="c1")))

        assert entry["message"] == "hello world"
        assert entry["level"] == "INFO"
        assert entry["service"] == "foundation-console"
        assert entry["page"] == "dashboard"
        assert entry["contest_id"] == "c1"
        assert entry["timestamp"].endswith("Z")

    def test_extra_fields_can_be_disabled(self):
        """Test that extra fields can be left out."""
        from foundation_console.logging_config import StructuredFormatter

        entry = json.loads(StructuredFormatter(include_extra_fields=False).format(self._record(contest_id="c1")))

        assert "contest_id" not in entry


class TestConfigureLogging:
    def test_json_output(self, restore_root_logger):
        """Test configuring JSON output."""
        from foundation_console.logging_config import configure_logging, is_configured, log_event

        stream = io.StringIO()
        configure_logging(level="INFO", log_format="json", stream=stream)
        log_event("vote_cast", contest_id="c1", contestant_id="p1")

        entry = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert is_configured()
        assert entry["message"] == "vote_cast"
        assert entry["logger"] == "foundation_console.event"
        assert entry["contestant_id"] == "p1"

    def test_console_output(self, restore_root_logger):
        """Test configuring console output."""
        from foundation_console.logging_config import LogContext, configure_logging

        stream = io.StringIO()
        configure_logging(level=logging.DEBUG, log_format="console", stream=stream)
        LogContext.set(page="home")
        logging.getLogger("foundation_console.test").info("rendered")

        assert "[home] foundation_console.test: rendered" in stream.getvalue()

    def test_level_from_env(self, restore_root_logger):
        """Test that LOG_LEVEL sets the level."""
        from foundation_console.logging_config import configure_logging

        with mock.patch.dict(os.environ, {"LOG_LEVEL": "warning", "LOG_FORMAT": "console"}, clear=True):
            configure_logging(stream=io.StringIO())

        assert logging.getLogger().level == logging.WARNING


class TestPerformanceTracker:
    def test_records_duration(self, caplog):
        """Test that the tracker logs a duration."""
        from foundation_console.logging_config import PerformanceTracker

        with caplog.at_level(logging.DEBUG, logger="foundation_console.performance"):
            with PerformanceTracker("api_request", method="GET", path="/schools") as tracker:
                tracker.extra["status"] = 200

        record = caplog.records[-1]
        assert record.getMessage() == "api_request_completed"
        assert record.status == 200
        assert record.duration_ms >= 0

    def test_logs_failure(self, caplog):
        """Test that the tracker logs failures."""
        from foundation_console.logging_config import PerformanceTracker

        with caplog.at_level(logging.DEBUG, logger="foundation_console.performance"):
            with pytest.raises(RuntimeError):
                with PerformanceTracker("api_request"):
                    raise RuntimeError("boom")

        record = caplog.records[-1]
        assert record.getMessage() == "api_request_failed"
        assert record.error == "boom"
