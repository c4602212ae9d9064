"""
Tests for structured logging.
"""
import json
import logging
import os
import tempfile

from taxi_doormax.actions import Actions
from taxi_doormax.logging_config import (
    HumanFormatter,
    JSONFormatter,
    StructuredLogger,
    configure_logging,
    get_logger,
)


def make_record(msg="hello", level=logging.INFO, **extra):
    record = logging.LogRecord("taxi_doormax.test", level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """JSON log lines."""

    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "taxi_doormax.test"
        assert data["message"] == "hello"
        assert "ts" in data
        assert "event" not in data

    def test_structured_fields(self):
        record = make_record(
            subsystem="doormax",
            action=Actions.EAST,
            attribute="taxi_column",
            event_type="rule_conflict",
            extra_data={"discarded": 3},
        )
        data = json.loads(JSONFormatter().format(record))

        assert data["subsystem"] == "doormax"
        assert data["action"] == "east"
        assert data["attribute"] == "taxi_column"
        assert data["event"] == "rule_conflict"
        assert data["discarded"] == 3


class TestHumanFormatter:
    """Console log lines."""

    def test_plain_message(self):
        line = HumanFormatter(use_colors=False).format(make_record(level=logging.WARNING))
        assert "WARN" in line
        assert line.endswith(": hello")

    def test_context_prefix(self):
        record = make_record(subsystem="doormax", action=Actions.PICK_UP, attribute="passenger")
        line = HumanFormatter(use_colors=False).format(record)

        assert "[doormax]" in line
        assert "action=pick_up" in line
        assert "attr=passenger" in line


class TestConfigureLogging:
    """Handler setup."""

    def test_console_only(self, restore_logging):
        configure_logging(level="DEBUG")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, HumanFormatter)

    def test_log_files(self, restore_logging):
        with tempfile.TemporaryDirectory() as d:
            log_dir = os.path.join(d, "logs")
            configure_logging(level="INFO", log_dir=log_dir)

            logger = get_logger("taxi_doormax.test_log_files")
            assert isinstance(logger, StructuredLogger)
            logger.event("trial_end", "trial done", subsystem="explorer", steps=12)

            for handler in logging.getLogger().handlers:
                handler.flush()

            with open(os.path.join(log_dir, "doormax.json.log"), encoding="utf-8") as f:
                data = json.loads(f.readline())
            assert data["event"] == "trial_end"
            assert data["subsystem"] == "explorer"
            assert data["steps"] == 12

            with open(os.path.join(log_dir, "doormax.log"), encoding="utf-8") as f:
                assert "[explorer]" in f.read()

            for handler in logging.getLogger().handlers:
                handler.close()

    def test_event_respects_level(self, restore_logging):
        with tempfile.TemporaryDirectory() as d:
            configure_logging(level="WARNING", log_dir=d, json_file="events.json")

            get_logger("taxi_doormax.test_event_level").event("quiet", "not written")
            for handler in logging.getLogger().handlers:
                handler.flush()

            assert os.path.getsize(os.path.join(d, "events.json")) == 0

            for handler in logging.getLogger().handlers:
                handler.close()
