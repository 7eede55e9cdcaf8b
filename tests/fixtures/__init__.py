"""Test fixtures: scripted transport and provider payloads."""

from .records import (
    error_body,
    mismatch_body,
    submit_body,
    verified_body,
    verify_info_record,
)
from .scripted_transport import ScriptedTransport, json_response

__all__ = [
    "ScriptedTransport",
    "error_body",
    "json_response",
    "mismatch_body",
    "submit_body",
    "verified_body",
    "verify_info_record",
]
