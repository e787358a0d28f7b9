"""Tests for configuration parsing and the JSON logger."""

import json
import logging
import sys
import os
from logging.handlers import RotatingFileHandler

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from telekit.config import _parse_float, _parse_int, _parse_log_level
from telekit.logger import JsonLineFormatter, TelekitLogger, _build_handlers


# ── Config helpers ───────────────────────────────────────────────────────────


class TestParseInt:
    """Invalid or negative values fall back to the default."""

    def test_valid(self) -> None:
        assert _parse_int("30", 60) == 30
        assert _parse_int(" 0 ", 60) == 0

    def test_fallbacks(self) -> None:
        assert _parse_int(None, 60) == 60
        assert _parse_int("", 60) == 60
        assert _parse_int("abc", 60) == 60
        assert _parse_int("-5", 60) == 60


class TestParseFloat:
    def test_valid(self) -> None:
        assert _parse_float("0.5", 0.0) == 0.5

    def test_fallbacks(self) -> None:
        assert _parse_float("soon", 1.0) == 1.0
        assert _parse_float("-1", 1.0) == 1.0


class TestParseLogLevel:
    def test_names_and_numbers(self) -> None:
        assert _parse_log_level("debug") == logging.DEBUG
        assert _parse_log_level("WARNING") == logging.WARNING
        assert _parse_log_level("15") == 15

    def test_unknown_defaults_to_info(self) -> None:
        assert _parse_log_level("chatty") == logging.INFO
        assert _parse_log_level(None) == logging.INFO


# ── Logger ───────────────────────────────────────────────────────────────────


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="telekit", level=logging.WARNING, pathname=__file__, lineno=1,
        msg="Lost connection to %s", args=("Bot API",), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    """Every record is one JSON object, extras merged in."""

    def test_standard_fields(self) -> None:
        entry = json.loads(JsonLineFormatter().format(_record()))
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "telekit"
        assert entry["message"] == "Lost connection to Bot API"
        assert "timestamp" in entry

    def test_extra_fields_merged(self) -> None:
        entry = json.loads(JsonLineFormatter().format(_record(api_endpoint="getUpdates", poll_timeout=10)))
        assert entry["api_endpoint"] == "getUpdates"
        assert entry["poll_timeout"] == 10
        assert "args" not in entry

    def test_non_serialisable_extra(self) -> None:
        entry = json.loads(JsonLineFormatter().format(_record(error=ValueError("boom"))))
        assert entry["error"] == "boom"


class TestTelekitLogger:
    def test_singleton(self) -> None:
        assert TelekitLogger() is TelekitLogger()
        assert TelekitLogger.get_logger() is logging.getLogger("telekit")

    def test_log_file_adds_rotating_handler(self, tmp_path) -> None:
        handlers = _build_handlers(logging.DEBUG, str(tmp_path / "logs" / "telekit.log"))
        try:
            assert [type(h) for h in handlers] == [logging.StreamHandler, RotatingFileHandler]
            assert all(isinstance(h.formatter, JsonLineFormatter) for h in handlers)
            assert all(h.level == logging.DEBUG for h in handlers)
            assert (tmp_path / "logs").is_dir()
        finally:
            for handler in handlers:
                handler.close()

    def test_console_only_without_log_file(self) -> None:
        handlers = _build_handlers(logging.INFO, None)
        assert [type(h) for h in handlers] == [logging.StreamHandler]
