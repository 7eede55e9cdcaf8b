"""Domain layer: values, errors and collaborator protocols.

This package should not depend on application or infrastructure code.
"""

from .errors import (
    AuthError,
    ErrorCode,
    HandleConsumedError,
    MalformedResponseError,
    StatusError,
    TransportError,
    VerifyError,
    VonageError,
)
from .transport import Transport

__all__ = [
    "AuthError",
    "ErrorCode",
    "HandleConsumedError",
    "MalformedResponseError",
    "StatusError",
    "Transport",
    "TransportError",
    "VerifyError",
    "VonageError",
]
