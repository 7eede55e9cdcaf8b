"""Scripted in-memory implementation of the Transport protocol for testing."""

from __future__ import annotations

from collections import deque
from typing import Any, Optional, Union
from urllib.parse import parse_qs

import httpx

Scripted = Union[httpx.Response, BaseException]


def json_response(body: Any, status_code: int = 200) -> httpx.Response:
    """Build a provider response carrying ``body`` as JSON."""
    return httpx.Response(status_code, json=body)


class ScriptedTransport:
    """Transport that replays queued responses and records every request.

    Each queued item is either an ``httpx.Response`` to return or an exception
    to raise. Sending with an empty script fails the test.
    """

    def __init__(self, *script: Scripted) -> None:
        self._script: deque[Scripted] = deque(script)
        self.requests: list[httpx.Request] = []
        self.closed = False

    def queue(self, *items: Scripted) -> "ScriptedTransport":
        self._script.extend(items)
        return self

    def queue_json(self, body: Any, status_code: int = 200) -> "ScriptedTransport":
        return self.queue(json_response(body, status_code))

    @property
    def pending_responses(self) -> int:
        return len(self._script)

    async def send(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._script:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        item = self._script.popleft()
        if isinstance(item, BaseException):
            raise item
        return item

    async def aclose(self) -> None:
        self.closed = True

    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def form(self, index: int = -1) -> dict[str, str]:
        """Decode the form body of a recorded request (single-valued fields)."""
        request = self.requests[index]
        parsed = parse_qs(request.content.decode("utf-8"), keep_blank_values=True)
        return {key: values[-1] for key, values in parsed.items()}

    def query(self, index: int = -1) -> dict[str, list[str]]:
        """Decode the query string of a recorded request."""
        request = self.requests[index]
        return parse_qs(request.url.query.decode("utf-8"), keep_blank_values=True)

    def path(self, index: int = -1) -> Optional[str]:
        return self.requests[index].url.path
