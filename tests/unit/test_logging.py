"""Unit tests for structured logging helpers."""

import json
import logging

import pytest
from libs.common.logging import (
    JsonFormatter,
    RequestContextFilter,
    clear_request_context,
    get_request_id,
    set_request_context,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="orders",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Order %s created",
        args=("plink_1",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
def test_json_formatter_includes_context_and_extra_fields():
    set_request_context(request_id="req-1", path="/api/v1/orders", method="POST")
    try:
        record = _record(extra_fields={"order_id": "plink_1", "amount": 500.0})
        RequestContextFilter().filter(record)
        payload = json.loads(JsonFormatter().format(record))
    finally:
        clear_request_context()

    assert payload["message"] == "Order plink_1 created"
    assert payload["request_id"] == "req-1"
    assert payload["path"] == "/api/v1/orders"
    assert payload["method"] == "POST"
    assert payload["order_id"] == "plink_1"
    assert payload["amount"] == 500.0


@pytest.mark.unit
def test_request_context_generates_and_clears_id():
    request_id = set_request_context()
    assert request_id and get_request_id() == request_id

    clear_request_context()
    record = _record()
    RequestContextFilter().filter(record)
    assert record.request_id == "-"
