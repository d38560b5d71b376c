"""Tests for structured JSON logging and error code mapping."""

import io
import json
import logging

import pytest

from livecomment.core.errors import http_error_code
from livecomment.core.logging import (
    CorrelationIdFilter,
    StructuredFormatter,
    clear_correlation_id,
    log_error,
    log_info,
    set_correlation_id,
)


@pytest.fixture
def captured():
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(StructuredFormatter(service="livecomment-test"))

    logger = logging.getLogger("tests.structured_logging")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(handler)
    set_correlation_id("req-1")
    yield logger, stream
    clear_correlation_id()
    logger.removeHandler(handler)


def read_lines(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


class TestStructuredFormatter:
    """Tests for StructuredFormatter and the log helpers."""

    def test_entity_ids_are_lifted_into_context(self, captured) -> None:
        logger, stream = captured

        log_info(logger, "NG word registered", livestream_id=3, word_id=9, purged_count=2)

        [line] = read_lines(stream)
        assert line["message"] == "NG word registered"
        assert line["service"] == "livecomment-test"
        assert line["correlation_id"] == "req-1"
        assert line["context"] == {"livestream_id": 3, "word_id": 9}
        assert line["extra"] == {"purged_count": 2}

    def test_reserved_field_names_do_not_break_logging(self, captured) -> None:
        logger, stream = captured

        log_info(logger, "Fallback avatar loaded", name="NoImage.jpg", message="shadow")

        [line] = read_lines(stream)
        assert line["message"] == "Fallback avatar loaded"
        assert line["extra"]["field_name"] == "NoImage.jpg"
        assert line["extra"]["field_message"] == "shadow"

    def test_error_carries_exception_and_source(self, captured) -> None:
        logger, stream = captured

        try:
            raise ValueError("bad row")
        except ValueError as e:
            log_error(logger, "Store operation failed", exception=e)

        [line] = read_lines(stream)
        assert line["level"] == "ERROR"
        assert line["exception"]["type"] == "ValueError"
        assert line["exception"]["message"] == "bad row"
        assert line["exception"]["stack_trace"]
        assert "test_structured_logging.py" in line["source"]

    def test_non_serializable_extras_are_stringified(self, captured) -> None:
        logger, stream = captured

        log_info(logger, "odd value", payload={1, 2})

        [line] = read_lines(stream)
        assert line["extra"]["payload"] == "{1, 2}"


class TestHttpErrorCode:
    """Tests for mapping framework HTTP errors to error codes."""

    @pytest.mark.parametrize(
        ("status_code", "code"),
        [
            (400, "INVALID_ARGUMENT"),
            (401, "UNAUTHENTICATED"),
            (403, "FORBIDDEN"),
            (404, "NOT_FOUND"),
            (405, "METHOD_NOT_ALLOWED"),
            (409, "CONSTRAINT_VIOLATION"),
            (422, "INVALID_ARGUMENT"),
            (500, "INTERNAL"),
            (503, "INTERNAL"),
        ],
    )
    def test_status_maps_to_code(self, status_code: int, code: str) -> None:
        assert http_error_code(status_code) == code
