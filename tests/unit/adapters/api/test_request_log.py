"""
Tests for RequestLog - structured REQUEST / RESPONSE / ERROR entries.

Verifies:
- Truncation marker and limits per entry kind
- Error entries prefer the response body over the request body
- Entries reach loguru with the api_event extra
- A disabled log records nothing
"""

import pytest
from loguru import logger

from kassistant.adapters.api.errors import HttpStatusError
from kassistant.adapters.api.request_log import (
    LogEntryKind,
    RequestLog,
    truncate_for_log,
)
from kassistant.logging_config import API_EVENT_KEY


@pytest.fixture
def captured_records():
    """Collect loguru records emitted during the test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


class TestTruncateForLog:
    """Tests for truncate_for_log()."""

    def test_short_content_unchanged(self):
        assert truncate_for_log("hello", 10) == "hello"

    def test_exact_length_unchanged(self):
        assert truncate_for_log("x" * 300, 300) == "x" * 300

    def test_long_content_gets_marker(self):
        result = truncate_for_log("x" * 301, 300)
        assert result == "x" * 300 + "... [truncated, total length: 301]"

    def test_none_and_empty_give_empty_string(self):
        assert truncate_for_log(None, 10) == ""
        assert truncate_for_log("", 10) == ""


class TestRequestLogEntries:
    """Tests for record_request / record_response / record_error."""

    def test_request_body_capped_at_500(self):
        log = RequestLog()
        entry = log.record_request("POST", "/api/Account/login", "a" * 600)

        assert entry.kind == LogEntryKind.REQUEST
        assert entry.body.startswith("a" * 500)
        assert entry.body.endswith("[truncated, total length: 600]")

    def test_response_body_capped_at_300(self):
        log = RequestLog()
        entry = log.record_response("GET", "/api/Library/libraries", 200, "b" * 1000, 12.0)

        assert entry.kind == LogEntryKind.RESPONSE
        assert entry.status_code == 200
        assert entry.body == "b" * 300 + "... [truncated, total length: 1000]"

    def test_request_without_body(self):
        entry = RequestLog().record_request("GET", "/api/Library/libraries")
        assert entry.body is None

    def test_error_prefers_response_body(self):
        log = RequestLog()
        error = HttpStatusError("GET", "/api/Users", 403, "Forbidden")
        entry = log.record_error(
            "GET", "/api/Users", error, request_body="{}", response_body="Forbidden", status_code=403
        )

        assert entry.kind == LogEntryKind.ERROR
        assert entry.body == "Forbidden"
        assert entry.error_type == "HttpStatusError"
        assert entry.message == "API Error: /api/Users returned 403"

    def test_error_falls_back_to_request_body(self):
        log = RequestLog()
        entry = log.record_error("POST", "/api/Account/login", RuntimeError("boom"), request_body='{"a":1}')
        assert entry.body == '{"a":1}'

    def test_error_body_capped_at_2000(self):
        log = RequestLog()
        entry = log.record_error("GET", "/x", RuntimeError("boom"), response_body="c" * 2500)
        assert entry.body.startswith("c" * 2000)
        assert "total length: 2500" in entry.body

    def test_custom_limits(self):
        log = RequestLog(request_preview_limit=5)
        entry = log.record_request("POST", "/x", "abcdefgh")
        assert entry.body == "abcde... [truncated, total length: 8]"

    def test_history_keeps_order_and_is_bounded(self):
        log = RequestLog(history_size=2)
        log.record_request("GET", "/a")
        log.record_request("GET", "/b")
        log.record_request("GET", "/c")

        assert [e.path for e in log.entries] == ["/b", "/c"]
        log.clear()
        assert log.entries == []

    def test_disabled_log_records_nothing(self, captured_records):
        log = RequestLog(enabled=False)

        assert log.record_request("GET", "/a") is None
        assert log.record_response("GET", "/a", 200, "", 1.0) is None
        assert log.record_error("GET", "/a", RuntimeError("x")) is None
        assert log.entries == []
        assert captured_records == []


class TestRequestLogLoguru:
    """Entries are forwarded to loguru with structured extras."""

    def test_request_emitted_with_api_event(self, captured_records):
        RequestLog().record_request("GET", "/api/Library/libraries")

        record = captured_records[-1]
        assert record["extra"][API_EVENT_KEY] == "REQUEST"
        assert record["extra"]["path"] == "/api/Library/libraries"
        assert record["level"].name == "DEBUG"
        assert "[REQUEST] GET /api/Library/libraries" in record["message"]

    def test_response_message_contains_status_and_time(self, captured_records):
        RequestLog().record_response("GET", "/api/Health", 200, "Ok", 42.4)

        record = captured_records[-1]
        assert record["extra"]["status_code"] == 200
        assert "Status: 200" in record["message"]
        assert "Time: 42ms" in record["message"]

    def test_error_emitted_at_error_level(self, captured_records):
        RequestLog().record_error("GET", "/api/Users", RuntimeError("boom"))

        record = captured_records[-1]
        assert record["level"].name == "ERROR"
        assert record["extra"]["error_type"] == "RuntimeError"
