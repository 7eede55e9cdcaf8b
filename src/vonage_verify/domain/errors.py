"""Domain-specific exceptions."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ErrorCode(IntEnum):
    """Closed list of provider status codes returned by the Verify API."""

    THROTTLED = 1
    MISSING_PARAM = 2
    INVALID_PARAM = 3
    INVALID_CREDENTIALS = 4
    INTERNAL_ERROR = 5
    ROUTE_ERROR = 6
    BLACKLISTED_PHONE = 7
    BARRED_API_KEY = 8
    EXCEEDED_PARTNER_QUOTA = 9
    CONCURRENT = 10
    UNSUPPORTED_NETWORK = 15
    CODE_MISMATCH = 16
    TOO_MANY_ATTEMPTS = 17
    CANCEL_OR_TRIGGER_NEXT_FAILED = 19
    PIN_CODE_NOT_SUPPORTED = 20


class VonageError(Exception):
    """Base class for every error raised by this library."""


class AuthError(VonageError):
    """Raised when the credential kind an operation needs was never configured."""


class StatusError(VonageError):
    """Raised when the provider answers with a non-200 HTTP status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"received unexpected status code: {status_code}")
        self.status_code = status_code


class VerifyError(VonageError):
    """Provider-level failure carried inside a Verify response envelope."""

    def __init__(
        self,
        code: Optional[ErrorCode],
        error_text: str,
        *,
        raw_status: Optional[str] = None,
    ) -> None:
        if code is not None:
            message = f"{error_text} (error {code.value})"
        else:
            message = error_text
        super().__init__(message)
        self.code = code
        self.error_text = error_text
        self.raw_status = raw_status if raw_status is not None else (
            str(code.value) if code is not None else None
        )

    @property
    def is_code_mismatch(self) -> bool:
        return self.code is ErrorCode.CODE_MISMATCH


class MalformedResponseError(VerifyError):
    """Raised when a response body does not match the expected envelope."""

    def __init__(self, error_text: str) -> None:
        super().__init__(None, error_text)


class TransportError(VonageError):
    """Raised when the request never produced an HTTP response."""


class HandleConsumedError(VonageError, RuntimeError):
    """Raised when a spent builder or a terminal/in-flight handle is reused."""
