"""Protocol interface for HTTP transport implementations.

This protocol defines the contract every transport handed to the client must
satisfy. It enables dependency injection and makes the verify flow testable by
allowing scripted in-memory implementations.
"""

from __future__ import annotations

from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class Transport(Protocol):
    """Send one request and return its response.

    Implementations own connection pooling, timeouts and cancellation. They
    must raise ``TransportError`` when no HTTP response could be obtained and
    must return non-2xx responses instead of raising for them.
    """

    async def send(self, request: "httpx.Request") -> "httpx.Response":
        """Perform a single round trip.

        Args:
            request: Fully encoded request (method, absolute URL, headers, body)

        Returns:
            The provider's response, whatever its status code
        """
        ...

    async def aclose(self) -> None:
        """Release any resources held by the transport."""
        ...
