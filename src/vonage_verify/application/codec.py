"""Encoding of Verify requests and decoding of the status-discriminated envelope.

Every Verify endpoint answers HTTP 200 with a JSON object whose ``status``
field tells success (``"0"``) from failure (any other numeric code, together
with ``error_text``). Anything else is a contract violation.
"""

from __future__ import annotations

import logging
from typing import Any, Final, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..domain.errors import (
    ErrorCode,
    MalformedResponseError,
    StatusError,
    VerifyError,
)
from .dtos import ErrorEnvelopeDTO, WireDTO

logger = logging.getLogger(__name__)

VONAGE_URL_BASE: Final[str] = "https://api.nexmo.com"
SUCCESS_STATUS: Final[str] = "0"
FORM_CONTENT_TYPE: Final[str] = "application/x-www-form-urlencoded"

T = TypeVar("T", bound=BaseModel)


def build_url(base_url: str, path: str) -> str:
    """Join base URL and endpoint path, appending the ``/json`` format suffix."""
    return f"{base_url.rstrip('/')}/{path.strip('/')}/json"


def encode_request(
    method: str,
    path: str,
    body: WireDTO,
    *,
    base_url: str = VONAGE_URL_BASE,
) -> httpx.Request:
    """Encode ``body`` as a form-encoded POST or a query-encoded GET."""
    method = method.upper()
    url = build_url(base_url, path)
    fields = body.form_fields()
    if method == "GET":
        return httpx.Request(method, url, params=fields)
    return httpx.Request(
        method,
        url,
        data=fields,
        headers={"Content-Type": FORM_CONTENT_TYPE},
    )


def read_json_body(response: httpx.Response) -> Any:
    """Return the parsed JSON of a 200 response; other statuses raise ``StatusError``."""
    if response.status_code != 200:
        raise StatusError(response.status_code)
    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponseError(f"response body is not JSON: {e}") from e


def error_from_envelope(status: str, fields: dict[str, Any]) -> VerifyError:
    """Build the error described by a failed envelope (``status`` already removed)."""
    try:
        envelope = ErrorEnvelopeDTO.model_validate(fields)
    except ValidationError as e:
        return MalformedResponseError(f"unexpected error envelope (status {status}): {e}")
    try:
        code = ErrorCode(int(status))
    except ValueError:
        logger.warning("Provider returned unknown status %s", status)
        return VerifyError(None, envelope.error_text, raw_status=status)
    return VerifyError(code, envelope.error_text)


def decode_envelope(body: Any, model: Type[T]) -> T:
    """Decode an already-parsed envelope into ``model`` or raise its error."""
    if not isinstance(body, dict):
        raise MalformedResponseError("response envelope is not a JSON object")
    fields = dict(body)
    raw_status = fields.pop("status", None)
    if raw_status is None:
        raise MalformedResponseError("response envelope has no status field")

    status = str(raw_status)
    if status != SUCCESS_STATUS:
        raise error_from_envelope(status, fields)
    try:
        return model.model_validate(fields)
    except ValidationError as e:
        raise MalformedResponseError(f"unexpected success payload: {e}") from e


def decode_response(response: httpx.Response, model: Type[T]) -> T:
    """Decode a Verify response into ``model``.

    Raises:
        StatusError: HTTP status other than 200 (body is not inspected)
        VerifyError: provider reported a non-zero status
        MalformedResponseError: body does not match the envelope contract
    """
    return decode_envelope(read_json_body(response), model)
