"""Lookup of past or current verify requests (``/verify/search``)."""

from __future__ import annotations

import logging
from typing import Any, Final, Iterable, Optional

from pydantic import ValidationError

from ...domain.entities import RequestId, VerifyInfo
from ...domain.errors import MalformedResponseError
from ..codec import encode_request, error_from_envelope, read_json_body
from ..dtos import SearchRequestDTO
from .pending import PendingVerify

logger = logging.getLogger(__name__)

SEARCH_PATH: Final[str] = "/verify/search"
DOES_NOT_EXIST_STATUS: Final[str] = "101"


def _is_error_status(status: Any) -> bool:
    # Record statuses are words ("SUCCESS", "IN PROGRESS"); provider errors are numeric
    return status is not None and str(status).isdigit()


def _records(body: Any) -> list[Any]:
    """Return the individual records of a search response."""
    if isinstance(body, list):
        return body
    if not isinstance(body, dict):
        raise MalformedResponseError("search response is neither a list nor an object")
    if "verification_requests" in body:
        records = body["verification_requests"]
        if not isinstance(records, list):
            raise MalformedResponseError("verification_requests is not a list")
        return records

    status = body.get("status")
    if _is_error_status(status) and str(status) != DOES_NOT_EXIST_STATUS:
        # A lone error object describes the whole call, e.g. bad credentials
        raise error_from_envelope(
            str(status), {k: v for k, v in body.items() if k != "status"}
        )
    return [body]


def _decode_record(record: Any) -> Optional[VerifyInfo]:
    if not isinstance(record, dict):
        raise MalformedResponseError("search record is not a JSON object")
    status = record.get("status")
    if _is_error_status(status):
        logger.warning(
            "Search record %s unavailable: status %s (%s)",
            record.get("request_id", "<unknown>"),
            status,
            record.get("error_text", ""),
        )
        return None
    try:
        return VerifyInfo.model_validate(record)
    except ValidationError as e:
        raise MalformedResponseError(f"unexpected search record: {e}") from e


async def search(handles: Iterable[PendingVerify]) -> list[Optional[VerifyInfo]]:
    """Retrieve details of past or current verify requests.

    Returns one slot per input handle, in input order; a slot is ``None`` when
    the provider has no record for that request. All handles are looked up in
    a single call made with the first handle's credentials and transport.
    """
    handles = list(handles)
    if not handles:
        return []

    first = handles[0]
    request_ids: list[RequestId] = [h.request_id for h in handles]
    body = SearchRequestDTO(
        api_key=first.credentials.api_key,
        api_secret=first.credentials.api_secret,
        request_ids=list(dict.fromkeys(request_ids)),
    )
    request = encode_request("GET", SEARCH_PATH, body, base_url=first.base_url)
    response = await first.transport.send(request)

    found: dict[str, VerifyInfo] = {}
    for record in _records(read_json_body(response)):
        info = _decode_record(record)
        if info is not None:
            found[info.request_id] = info

    results = [found.get(request_id) for request_id in request_ids]
    logger.debug(
        "Search resolved %d of %d verify request(s)",
        sum(r is not None for r in results),
        len(results),
    )
    return results
