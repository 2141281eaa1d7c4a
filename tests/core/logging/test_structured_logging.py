"""Tests for structured logging with trace propagation."""

from __future__ import annotations

import io
import json

from mcflation.core.logging import LogConfig, StructuredLogger, bind, current_trace_id, get_logger


def _read_records(stream: io.StringIO) -> list[dict[str, object]]:
    stream.seek(0)
    lines = [line for line in stream.getvalue().splitlines() if line.strip()]
    return [json.loads(line) for line in lines]


def test_structured_log_contains_trace_and_context() -> None:
    buffer = io.StringIO()
    config = LogConfig(console_stream=buffer, console_output=True, file_output=False)
    logger = StructuredLogger(config)

    with logger.context(trace_id="trace-123", source="csv", error_code="SOURCE_UNAVAILABLE", request_id="req-42"):
        logger.logger.info("dataset loaded", rows=13)

    records = _read_records(buffer)
    assert len(records) == 1
    record = records[0]
    assert record["trace_id"] == "trace-123"
    assert record["source"] == "csv"
    assert record["error_code"] == "SOURCE_UNAVAILABLE"
    assert record["context"]["request_id"] == "req-42"
    assert record["context"]["rows"] == 13


def test_bound_fields_win_over_context() -> None:
    buffer = io.StringIO()
    logger = StructuredLogger(LogConfig(console_stream=buffer, console_output=True, file_output=False))

    with logger.context(source="memory"):
        logger.logger.bind(source="csv").warning("fell back to next path")

    record = _read_records(buffer)[0]
    assert record["source"] == "csv"
    assert record["level"] == "WARNING"


def test_trace_id_propagates_within_context() -> None:
    buffer = io.StringIO()
    logger = StructuredLogger(LogConfig(console_stream=buffer, console_output=True, file_output=False))

    with logger.context() as trace_id:
        logger.logger.info("first event")
        logger.logger.info("second event")

    logger.logger.info("outside context")

    records = _read_records(buffer)
    assert len(records) == 3
    assert records[0]["trace_id"] == records[1]["trace_id"]
    assert records[0]["trace_id"] == trace_id
    assert records[2]["trace_id"] != records[0]["trace_id"]


def test_trace_id_generated_when_missing() -> None:
    buffer = io.StringIO()
    logger = StructuredLogger(LogConfig(console_stream=buffer, console_output=True, file_output=False))

    logger.logger.info("single message")

    records = _read_records(buffer)
    assert len(records) == 1
    trace_id = records[0]["trace_id"]
    assert isinstance(trace_id, str)
    assert len(trace_id) == 32
    assert all(character in "0123456789abcdef" for character in trace_id)


def test_level_filters_records() -> None:
    buffer = io.StringIO()
    logger = StructuredLogger(LogConfig(level="WARNING", console_stream=buffer))

    logger.logger.info("hidden")
    logger.logger.warning("shown")

    assert [record["message"] for record in _read_records(buffer)] == ["shown"]


def test_records_outside_context_get_distinct_trace_ids() -> None:
    buffer = io.StringIO()
    logger = StructuredLogger(LogConfig(console_stream=buffer))

    logger.logger.info("first")
    logger.logger.info("second")

    first, second = _read_records(buffer)
    assert first["trace_id"] != second["trace_id"]
    assert current_trace_id() is None


def test_bound_trace_id_does_not_replace_context_trace() -> None:
    buffer = io.StringIO()
    logger = StructuredLogger(LogConfig(console_stream=buffer))

    with logger.context(trace_id="request-1"):
        logger.logger.bind(trace_id="job-7").info("background job")
        logger.logger.info("request work")
        assert current_trace_id() == "request-1"

    records = _read_records(buffer)
    assert [record["trace_id"] for record in records] == ["job-7", "request-1"]


def test_configure_changes_level_at_runtime() -> None:
    buffer = io.StringIO()
    logger = StructuredLogger(LogConfig(console_stream=buffer))

    logger.configure(level="ERROR")
    logger.logger.warning("dropped")
    logger.logger.error("kept")

    assert logger.config.level == "ERROR"
    assert [record["message"] for record in _read_records(buffer)] == ["kept"]


def test_get_logger_binds_name_and_bind_adds_fields() -> None:
    buffer = io.StringIO()
    StructuredLogger(LogConfig(console_stream=buffer))

    get_logger("mcflation.tests").info("named")
    bind(source="csv", path="/srv/prices.csv").info("bound")
    get_logger().info("plain")

    named, bound, plain = _read_records(buffer)
    assert named["context"]["logger_name"] == "mcflation.tests"
    assert bound["source"] == "csv"
    assert bound["context"]["path"] == "/srv/prices.csv"
    assert "context" not in plain


def test_file_sink_writes_json_lines(tmp_path) -> None:
    log_file = tmp_path / "logs" / "mcflation.jsonl"
    logger = StructuredLogger(LogConfig(console_output=False, file_output=True, file_path=str(log_file)))

    logger.logger.error("persisted")

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[0])["message"] == "persisted"
