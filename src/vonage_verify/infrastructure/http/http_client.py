from __future__ import annotations

import logging
from typing import Optional, Type
from types import TracebackType

import httpx

from ...domain.errors import TransportError
from ..instrumentation import log_timing

logger = logging.getLogger(__name__)


class AsyncHttpTransport:
    """Thin asynchronous transport around httpx.AsyncClient.

    - Applies a default timeout to requests that carry none.
    - Maps connection-level failures to ``TransportError``.
    - Returns every HTTP response; status handling belongs to the codec.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._timeout = httpx.Timeout(timeout)
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=self._timeout)

    @log_timing("verify_http_send")
    async def send(self, request: httpx.Request) -> httpx.Response:
        request.extensions.setdefault("timeout", self._timeout.as_dict())
        try:
            resp = await self._client.send(request)
        except httpx.RequestError as e:
            raise TransportError(f"{request.method} {request.url.path} failed: {e}") from e
        logger.debug(
            "%s %s -> %s", request.method, request.url.path, resp.status_code
        )
        return resp

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpTransport":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.aclose()
