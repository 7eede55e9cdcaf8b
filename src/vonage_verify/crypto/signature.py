"""Keyed-hash signatures for SMS-related request parameters."""

from __future__ import annotations

import hashlib
import hmac
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final, Mapping, Optional

SIGNATURE_FIELD: Final[str] = "sig"
TIMESTAMP_FIELD: Final[str] = "timestamp"


class SignatureMethod(str, Enum):
    """Signature methods selectable in the provider dashboard."""

    # MD5 over the canonical string with the secret appended (default)
    MD5_HASH = "md5hash"
    MD5_HMAC = "md5"
    SHA1_HMAC = "sha1"
    SHA256_HMAC = "sha256"
    SHA512_HMAC = "sha512"


_HMAC_DIGESTS: Final[dict[SignatureMethod, str]] = {
    SignatureMethod.MD5_HMAC: "md5",
    SignatureMethod.SHA1_HMAC: "sha1",
    SignatureMethod.SHA256_HMAC: "sha256",
    SignatureMethod.SHA512_HMAC: "sha512",
}


def _value_to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def canonical_payload(params: Mapping[str, Any]) -> str:
    """Build the canonical parameter string that gets signed.

    The ``sig`` field and ``None`` values are dropped, keys are sorted
    ascending, ``&`` and ``=`` inside values become ``_`` and each pair is
    rendered as ``&key=value``.

    Examples:
      {}                                 -> ""
      {"from": "VONAGE", "to": "4477"}   -> "&from=VONAGE&to=4477"
      {"text": "a=b&c"}                  -> "&text=a_b_c"
    """
    pairs = sorted(
        (str(key), _value_to_str(value))
        for key, value in params.items()
        if key != SIGNATURE_FIELD and value is not None
    )
    return "".join(
        f"&{key}={value.replace('&', '_').replace('=', '_')}" for key, value in pairs
    )


def compute_signature(secret: str, method: SignatureMethod, params: Mapping[str, Any]) -> str:
    """Return the lowercase hex signature of ``params`` under ``method``."""
    payload = canonical_payload(params)
    if method is SignatureMethod.MD5_HASH:
        return hashlib.md5((payload + secret).encode("utf-8")).hexdigest()
    digest = _HMAC_DIGESTS[method]
    return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), digest).hexdigest()


@dataclass(frozen=True)
class Signature:
    """A signature secret plus the method configured for it in the dashboard.

    Both values must match the dashboard settings, otherwise the provider
    silently computes a different hash.
    """

    secret: str = field(repr=False)
    method: SignatureMethod = SignatureMethod.MD5_HASH

    def sign(self, params: Optional[Mapping[str, Any]] = None) -> str:
        return compute_signature(self.secret, self.method, params or {})

    def signed(
        self, params: Mapping[str, Any], *, add_timestamp: bool = False
    ) -> dict[str, Any]:
        """Return a copy of ``params`` carrying its ``sig`` field."""
        out = {k: v for k, v in params.items() if k != SIGNATURE_FIELD}
        if add_timestamp and TIMESTAMP_FIELD not in out:
            out[TIMESTAMP_FIELD] = int(time.time())
        out[SIGNATURE_FIELD] = self.sign(out)
        return out

    def verify(self, params: Mapping[str, Any]) -> bool:
        """Check the ``sig`` carried by inbound parameters (e.g. a webhook)."""
        received = params.get(SIGNATURE_FIELD)
        if not isinstance(received, str):
            return False
        return hmac.compare_digest(received.lower(), self.sign(params))
