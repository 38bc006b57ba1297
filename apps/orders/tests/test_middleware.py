"""Tests for the gateway middleware and the request-id log filter."""

import logging

from gateway.logging_filters import RequestIdFilter
from gateway.middleware import REQUEST_ID_CTX


def test_request_id_is_generated_and_echoed(client):
    r = client.get("/api/orders/health/")
    assert r["X-Request-ID"]


def test_incoming_request_id_is_kept(client):
    r = client.get("/api/orders/health/", HTTP_X_REQUEST_ID="abc-123")
    assert r["X-Request-ID"] == "abc-123"


def test_oversized_payload_is_rejected(client, settings):
    settings.API_MAX_BYTES = 10
    r = client.post("/api/orders/", data={"items": [{"sku": "SKU-001", "unitPrice": "1.00", "quantity": 1}]}, content_type="application/json")
    assert r.status_code == 413
    assert r.json()["error"]["code"] == "PAYLOAD_TOO_LARGE"


def test_filter_stamps_records_from_context():
    token = REQUEST_ID_CTX.set("ctx-1")
    try:
        record = logging.LogRecord("orders", logging.INFO, __file__, 1, "msg", None, None)
        assert RequestIdFilter().filter(record)
        assert record.request_id == "ctx-1"
    finally:
        REQUEST_ID_CTX.reset(token)


def test_filter_keeps_explicit_request_id():
    record = logging.LogRecord("orders", logging.INFO, __file__, 1, "msg", None, None)
    record.request_id = "explicit"
    RequestIdFilter().filter(record)
    assert record.request_id == "explicit"
