"""Typed asynchronous client for the Vonage Verify API."""

from .application.auth import ApiCredentials, Auth, AuthBuilder, JwtCredentials
from .application.verify import (
    MAX_CHECK_ATTEMPTS,
    CheckResult,
    Match,
    Mismatch,
    PendingVerify,
    Psd2Verify,
    Verify,
    search,
)
from .client import Client, ClientBuilder
from .crypto.signature import Signature, SignatureMethod
from .domain.entities import (
    Check,
    CheckStatus,
    CodeLength,
    EventType,
    Language,
    Psd2Language,
    RequestId,
    Verified,
    VerifyInfo,
    VerifyState,
    VerifyStatus,
    Workflow,
)
from .domain.errors import (
    AuthError,
    ErrorCode,
    HandleConsumedError,
    MalformedResponseError,
    StatusError,
    TransportError,
    VerifyError,
    VonageError,
)
from .domain.transport import Transport

__all__ = [
    "ApiCredentials",
    "Auth",
    "AuthBuilder",
    "AuthError",
    "Check",
    "CheckResult",
    "CheckStatus",
    "Client",
    "ClientBuilder",
    "CodeLength",
    "ErrorCode",
    "EventType",
    "HandleConsumedError",
    "JwtCredentials",
    "Language",
    "MAX_CHECK_ATTEMPTS",
    "MalformedResponseError",
    "Match",
    "Mismatch",
    "PendingVerify",
    "Psd2Language",
    "Psd2Verify",
    "RequestId",
    "Signature",
    "SignatureMethod",
    "StatusError",
    "Transport",
    "TransportError",
    "Verified",
    "Verify",
    "VerifyError",
    "VerifyInfo",
    "VerifyState",
    "VerifyStatus",
    "VonageError",
    "Workflow",
    "search",
]
