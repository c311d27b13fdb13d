"""Tests for logging configuration and formatters."""

import io
import json
import logging

import pytest

from jobcloud.logging import ComponentLoggerAdapter, get_logger
from jobcloud.logging.config import (
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from jobcloud.logging.context import log_context


def make_record(message="Retrieval started", **extra):
    return logging.getLogger("jobcloud.test").makeRecord(
        "jobcloud.test", logging.INFO, "service.py", 1, message, (), None, extra=extra or None
    )


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJSONFormatter:
    def test_mandatory_fields(self):
        log_obj = json.loads(JSONFormatter().format(make_record()))

        assert log_obj["level"] == "INFO"
        assert log_obj["message"] == "Retrieval started"
        assert "name" not in log_obj

    def test_timestamp_is_iso_utc_millis(self):
        timestamp = json.loads(JSONFormatter().format(make_record()))["timestamp"]

        # 2024-03-05T10:30:00.123Z
        assert len(timestamp) == 24
        assert timestamp.endswith("Z")

    def test_extra_fields(self):
        record = make_record(event="retrieval.completed", count=5, applied=True, error=None)

        log_obj = json.loads(JSONFormatter().format(record))

        assert log_obj["event"] == "retrieval.completed"
        assert log_obj["count"] == 5
        assert log_obj["applied"] is True
        assert log_obj["error"] is None

    def test_unserializable_extra_is_stringified(self):
        record = make_record(dates=frozenset({"2024-03-05"}))

        log_obj = json.loads(JSONFormatter().format(record))

        assert log_obj["dates"] == "frozenset({'2024-03-05'})"


class TestKeyValueFormatter:
    def test_pairs_are_sorted_and_quoted(self):
        formatter = KeyValueFormatter("[%(levelname)s] %(name)s: %(message)s")
        record = make_record(event="retrieval.failed", error_type="StoreHTTPError", reason="HTTP 503: down")

        output = formatter.format(record)

        assert output.startswith("[INFO] jobcloud.test: Retrieval started")
        assert output.endswith('error_type=StoreHTTPError event=retrieval.failed reason="HTTP 503: down"')

    def test_value_formatting(self):
        assert KeyValueFormatter._format_value(True) == "true"
        assert KeyValueFormatter._format_value(None) == "null"
        assert KeyValueFormatter._format_value(0.25) == "0.25"

    def test_service_fields_are_skipped(self):
        formatter = KeyValueFormatter("%(message)s")
        record = make_record()
        ContextualFilter(environment="test").filter(record)

        assert formatter.format(record) == "Retrieval started"


class TestContextualFilter:
    def test_adds_service_and_environment(self):
        record = make_record()

        assert ContextualFilter(service="job-cloud", environment="test").filter(record)
        assert record.service == "job-cloud"
        assert record.environment == "test"

    def test_adds_context_fields(self):
        record = make_record()

        with log_context(request_id=4, date_key="2024-03-05"):
            ContextualFilter().filter(record)

        assert record.request_id == 4
        assert record.date_key == "2024-03-05"

    def test_explicit_extra_wins_over_context(self):
        record = make_record(date_key="2024-03-04")

        with log_context(date_key="2024-03-05"):
            ContextualFilter().filter(record)

        assert record.date_key == "2024-03-04"


class TestGetLogger:
    def test_plain_logger(self):
        assert isinstance(get_logger("jobcloud.test"), logging.Logger)

    def test_component_adapter_merges_extras(self):
        adapter = get_logger("jobcloud.test", component="catalog")

        assert isinstance(adapter, ComponentLoggerAdapter)
        _, kwargs = adapter.process("msg", {"extra": {"event": "retrieval.started"}})
        assert kwargs["extra"] == {"component": "catalog", "event": "retrieval.started"}

    def test_call_extra_overrides_component(self):
        adapter = get_logger("jobcloud.test", component="catalog")

        _, kwargs = adapter.process("msg", {"extra": {"component": "logging"}})

        assert kwargs["extra"]["component"] == "logging"


class TestConfigureLogging:
    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging(level="LOUD")

    def test_invalid_format(self):
        with pytest.raises(ValueError, match="Invalid log format"):
            configure_logging(format_type="xml")

    def test_json_output_end_to_end(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging(level="INFO", format_type="json", environment="test", stream=stream)

        with log_context(request_id=9):
            get_logger("jobcloud.test", component="catalog").info(
                "Retrieval completed", extra={"event": "retrieval.completed"}
            )

        last = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert last["event"] == "retrieval.completed"
        assert last["component"] == "catalog"
        assert last["request_id"] == 9
        assert last["service"] == "job-cloud"
        assert last["environment"] == "test"

    def test_key_value_is_default(self, restore_root_logger):
        configure_logging(stream=io.StringIO())

        handler = restore_root_logger.handlers[0]
        assert isinstance(handler.formatter, KeyValueFormatter)
        assert len(restore_root_logger.handlers) == 1

    def test_level_filters_records(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging(level="WARNING", stream=stream)

        logging.getLogger("jobcloud.test").info("hidden")

        assert "hidden" not in stream.getvalue()
