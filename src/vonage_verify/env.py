from __future__ import annotations

import os
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, SecretStr, field_validator, model_validator

from .application.codec import VONAGE_URL_BASE
from .crypto.signature import SignatureMethod


class Settings(BaseModel):
    """Typed client settings built from environment variables."""

    # API key credentials
    api_key: Optional[str] = None
    api_secret: Optional[SecretStr] = None

    # JWT credentials
    application_id: Optional[str] = None
    private_key: Optional[SecretStr] = None

    # SMS signing
    signature_secret: Optional[SecretStr] = None
    signature_method: SignatureMethod = SignatureMethod.MD5_HASH

    # Transport
    base_url: str = VONAGE_URL_BASE
    timeout: float = Field(10.0, gt=0)

    log_level: str = "INFO"

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v:
            raise ValueError("Base URL cannot be empty")
        parsed = urlparse(v)
        if parsed.scheme not in {"http", "https"}:
            raise ValueError("Base URL must start with http:// or https://")
        if not parsed.netloc:
            raise ValueError("Base URL must include a host")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def validate_credential_pairs(self) -> "Settings":
        if (self.api_key is None) != (self.api_secret is None):
            raise ValueError("VONAGE_API_KEY and VONAGE_API_SECRET must be set together")
        if (self.application_id is None) != (self.private_key is None):
            raise ValueError(
                "VONAGE_APPLICATION_ID and a private key must be set together"
            )
        return self


def _read_private_key() -> Optional[str]:
    private_key = os.environ.get("VONAGE_PRIVATE_KEY")
    if private_key:
        return private_key
    key_path = os.environ.get("VONAGE_PRIVATE_KEY_PATH")
    if key_path:
        return Path(key_path).read_text()
    return None


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    api_secret = os.environ.get("VONAGE_API_SECRET")
    private_key = _read_private_key()
    signature_secret = os.environ.get("VONAGE_SIGNATURE_SECRET")
    return Settings(
        api_key=os.environ.get("VONAGE_API_KEY") or None,
        api_secret=SecretStr(api_secret) if api_secret else None,
        application_id=os.environ.get("VONAGE_APPLICATION_ID") or None,
        private_key=SecretStr(private_key) if private_key else None,
        signature_secret=SecretStr(signature_secret) if signature_secret else None,
        signature_method=SignatureMethod(
            os.environ.get("VONAGE_SIGNATURE_METHOD", SignatureMethod.MD5_HASH.value)
        ),
        base_url=os.environ.get("VONAGE_BASE_URL", VONAGE_URL_BASE),
        timeout=float(os.environ.get("VONAGE_TIMEOUT", "10.0")),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
    )
