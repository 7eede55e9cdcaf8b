"""Provider payloads used across tests."""

from __future__ import annotations

from typing import Any


def submit_body(request_id: str = "req-1") -> dict[str, Any]:
    return {"status": "0", "request_id": request_id}


def verified_body(request_id: str = "req-1", **overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "status": "0",
        "request_id": request_id,
        "event_id": "evt-1",
        "price": "0.10000000",
        "currency": "EUR",
    }
    body.update(overrides)
    return body


def error_body(status: str, error_text: str = "error", **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"status": status, "error_text": error_text}
    body.update(extra)
    return body


def mismatch_body(request_id: str = "req-1") -> dict[str, Any]:
    return error_body(
        "16", "The code provided does not match the expected value", request_id=request_id
    )


def verify_info_record(request_id: str = "req-1", **overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "request_id": request_id,
        "account_id": "abcdef01",
        "status": "SUCCESS",
        "number": "447700900000",
        "price": "0.10000000",
        "currency": "EUR",
        "sender_id": "verify",
        "date_submitted": "2020-01-01 12:00:00",
        "date_finalized": "2020-01-01 12:00:40",
        "first_event_date": "2020-01-01 12:00:01",
        "last_event_date": "2020-01-01 12:00:01",
        "checks": [
            {
                "date_received": "2020-01-01 12:00:30",
                "code": "1111",
                "status": "INVALID",
                "ip_address": "",
            },
            {
                "date_received": "2020-01-01 12:00:40",
                "code": "1234",
                "status": "VALID",
                "ip_address": "203.0.113.7",
            },
        ],
        "events": [{"type": "sms", "id": "evt-1"}],
        "estimated_price_messages_sent": "0.03330000",
    }
    record.update(overrides)
    return record
