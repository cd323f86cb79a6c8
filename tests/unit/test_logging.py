"""Unit tests for logging configuration."""

from __future__ import annotations

import json
import logging
import logging.handlers
from io import StringIO
from pathlib import Path
from typing import Any

import pytest
import structlog

from reviewpool.config import LoggingConfig
from reviewpool.logging import (
    add_correlation_id,
    get_correlation_id,
    get_logger,
    operation_context,
    set_correlation_id,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_logging() -> None:
    """Reset logging configuration before each test."""
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    set_correlation_id(None)


@pytest.fixture
def capture_stream() -> StringIO:
    return StringIO()


@pytest.fixture
def json_logger(capture_stream: StringIO) -> Any:
    """Configure JSON logging to stdout, then redirect the handler to a buffer."""
    setup_logging(LoggingConfig(level="INFO", format="json", file=None))
    logging.getLogger().handlers[0].stream = capture_stream  # type: ignore[attr-defined]
    return get_logger("test.module")


def read_entries(stream: StringIO) -> list[dict[str, Any]]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


def test_json_output_format(json_logger: Any, capture_stream: StringIO) -> None:
    json_logger.info("team_created", team_name="backend", member_count=3)

    (entry,) = read_entries(capture_stream)
    assert entry["event"] == "team_created"
    assert entry["team_name"] == "backend"
    assert entry["member_count"] == 3
    assert entry["level"] == "info"
    assert entry["logger"] == "test.module"
    assert "timestamp" in entry


def test_console_output_format(capture_stream: StringIO) -> None:
    setup_logging(LoggingConfig(level="DEBUG", format="console", file=None))
    logging.getLogger().handlers[0].stream = capture_stream  # type: ignore[attr-defined]

    get_logger("test.module").debug("reviewers_selected", team_name="backend")

    output = capture_stream.getvalue()
    assert "reviewers_selected" in output
    assert "backend" in output
    with pytest.raises(json.JSONDecodeError):
        json.loads(output.strip())


def test_log_level_filtering(json_logger: Any, capture_stream: StringIO) -> None:
    json_logger.debug("debug_message")
    assert capture_stream.getvalue() == ""

    json_logger.warning("warning_message")
    assert "warning_message" in capture_stream.getvalue()


def test_correlation_id_binding(json_logger: Any, capture_stream: StringIO) -> None:
    set_correlation_id("corr-12345")
    assert get_correlation_id() == "corr-12345"
    json_logger.info("with_correlation")

    set_correlation_id(None)
    json_logger.info("without_correlation")

    first, second = read_entries(capture_stream)
    assert first["correlation_id"] == "corr-12345"
    assert "correlation_id" not in second


def test_correlation_id_processor() -> None:
    assert "correlation_id" not in add_correlation_id(None, "", {"event": "test"})

    set_correlation_id("test-id")
    assert add_correlation_id(None, "", {"event": "test"})["correlation_id"] == "test-id"


def test_operation_context_is_scoped_to_block(json_logger: Any, capture_stream: StringIO) -> None:
    with operation_context("reassign_reviewer", pull_request_id="pr-1"):
        json_logger.info("inside")
    json_logger.info("outside")

    inside, outside = read_entries(capture_stream)
    assert inside["operation"] == "reassign_reviewer"
    assert inside["pull_request_id"] == "pr-1"
    assert "operation" not in outside
    assert "pull_request_id" not in outside


def test_nested_operation_context_restores_outer_binding(
    json_logger: Any, capture_stream: StringIO
) -> None:
    with operation_context("outer", team_name="backend"):
        with operation_context("inner"):
            json_logger.info("nested")
        json_logger.info("after_inner")

    nested, after_inner = read_entries(capture_stream)
    assert nested["operation"] == "inner"
    assert nested["team_name"] == "backend"
    assert after_inner["operation"] == "outer"


def test_file_rotation_handler_configuration(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "reviewpool.log"
    setup_logging(
        LoggingConfig(
            level="INFO",
            format="json",
            file=log_file,
            rotation_size_mb=10,
            retention_count=3,
        )
    )

    handler = logging.getLogger().handlers[0]
    assert isinstance(handler, logging.handlers.RotatingFileHandler)
    assert handler.maxBytes == 10 * 1024 * 1024
    assert handler.backupCount == 3

    get_logger("test.module").info("file_write", data="test")
    handler.flush()

    entry = json.loads(log_file.read_text().strip())
    assert entry["event"] == "file_write"


def test_exception_formatting(json_logger: Any, capture_stream: StringIO) -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        json_logger.exception("operation_failed")

    (entry,) = read_entries(capture_stream)
    assert entry["event"] == "operation_failed"
    assert "ValueError: boom" in entry["exception"]


def test_error_with_exception_instance_is_one_json_line(
    json_logger: Any, capture_stream: StringIO
) -> None:
    try:
        raise RuntimeError("database unavailable")
    except RuntimeError as exc:
        json_logger.error("unhandled_error", path="/team/add", exc_info=exc)

    lines = [line for line in capture_stream.getvalue().splitlines() if line.strip()]
    assert len(lines) == 1
    entry = json.loads(lines[0])
    assert entry["path"] == "/team/add"
    assert "Traceback" in entry["exception"]
    assert "RuntimeError: database unavailable" in entry["exception"]


def test_stdlib_records_are_rendered_as_json(json_logger: Any, capture_stream: StringIO) -> None:
    set_correlation_id("corr-1")
    logging.getLogger("thirdparty.client").warning("connection reset")

    (entry,) = read_entries(capture_stream)
    assert entry["event"] == "connection reset"
    assert entry["logger"] == "thirdparty.client"
    assert entry["level"] == "warning"
    assert entry["correlation_id"] == "corr-1"
