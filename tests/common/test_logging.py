"""Tests for structured logging setup."""

from __future__ import annotations

import logging

from pricestream.common.logging import MODULE_TAGS, StructuredFormatter, get_logger


def _record(msg: str, **attrs) -> logging.LogRecord:
    record = logging.LogRecord("pricestream.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


class TestGetLogger:
    """Test logger creation and configuration."""

    def test_returns_logger_adapter(self):
        """get_logger returns a ModuleTagLogger adapter."""
        assert get_logger("TEST") is not None

    def test_same_tag_returns_same_logger(self):
        """Calling get_logger twice with same tag returns the same instance."""
        assert get_logger("INGEST") is get_logger("INGEST")

    def test_different_tags_return_different_loggers(self):
        """Different tags produce different logger instances."""
        assert get_logger("INGEST") is not get_logger("STREAM")

    def test_single_handler_per_logger(self):
        """Repeated get_logger calls don't stack stdout handlers."""
        get_logger("SYSTEM")
        get_logger("SYSTEM")
        assert len(get_logger("SYSTEM").logger.handlers) == 1

    def test_does_not_propagate(self):
        assert get_logger("STREAM").logger.propagate is False

    def test_known_tags(self):
        assert {"INGEST", "STREAM", "BACKTEST"} <= MODULE_TAGS

    def test_output_contains_tag_level_and_message(self, log_output):
        get_logger("STREAM").warning("Window gap detected")
        output = log_output.getvalue()
        assert "STREAM" in output
        assert "WARNING" in output
        assert "Window gap detected" in output

    def test_structured_data_in_output(self, log_output):
        """Structured data dict appears in log output."""
        get_logger("INGEST").info("Series loaded", extra={"data": {"records": 42}})
        assert '{"records": 42}' in log_output.getvalue()


class TestStructuredFormatter:
    """Test the line format."""

    def test_pipe_separated_fields(self):
        line = StructuredFormatter().format(_record("hello", module_tag="INGEST"))
        parts = line.split(" | ")
        assert parts[1:] == ["INFO", "INGEST", "hello"]
        assert parts[0].endswith("Z")

    def test_defaults_tag_to_system(self):
        line = StructuredFormatter().format(_record("hello"))
        assert " | SYSTEM | " in line

    def test_unserializable_data_falls_back_to_str(self):
        line = StructuredFormatter().format(_record("hi", data={"path": object()}))
        assert "object object" in line

    def test_non_dict_data(self):
        line = StructuredFormatter().format(_record("hi", data=[1, 2]))
        assert line.endswith("[1, 2]")
