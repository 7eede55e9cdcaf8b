"""Credential storage and selection: API key pairs and JWT signing material."""

from __future__ import annotations

import base64
import logging
import time
from typing import Any, Mapping, Optional

import jwt
from pydantic import BaseModel, ConfigDict, Field, SecretStr

from ..crypto.identifiers import IdGenerator, default_id_generator
from ..domain.errors import AuthError

logger = logging.getLogger(__name__)


class ApiCredentials(BaseModel):
    """API key and secret, sent with every Verify request."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1)
    api_secret: SecretStr

    def form_fields(self) -> dict[str, str]:
        """Return the credential fields as they go on the wire."""
        return {
            "api_key": self.api_key,
            "api_secret": self.api_secret.get_secret_value(),
        }


class JwtCredentials(BaseModel):
    """Application id and private key used to sign JWTs."""

    model_config = ConfigDict(frozen=True)

    application_id: str = Field(..., min_length=1)
    private_key: SecretStr
    algorithm: str = "RS256"


class Auth:
    """Immutable set of credentials a client was built with."""

    def __init__(
        self,
        api_key: Optional[ApiCredentials] = None,
        jwt_credentials: Optional[JwtCredentials] = None,
        *,
        id_generator: Optional[IdGenerator] = None,
    ) -> None:
        self._api_key = api_key
        self._jwt = jwt_credentials
        self._id_generator = id_generator or default_id_generator()

    @staticmethod
    def builder() -> "AuthBuilder":
        return AuthBuilder()

    @property
    def has_api_key(self) -> bool:
        return self._api_key is not None

    @property
    def has_jwt(self) -> bool:
        return self._jwt is not None

    def api_key_pair(self) -> ApiCredentials:
        if self._api_key is None:
            raise AuthError("product requires an API key to authenticate")
        return self._api_key

    def to_auth_header(self) -> tuple[str, str]:
        """Return an ``Authorization`` header built from the API key pair."""
        creds = self.api_key_pair()
        raw = f"{creds.api_key}:{creds.api_secret.get_secret_value()}"
        token = base64.b64encode(raw.encode("utf-8")).decode("utf-8")
        return "Authorization", f"Basic {token}"

    def generate_jwt(self, claims: Optional[Mapping[str, Any]] = None) -> str:
        """Sign ``claims`` as a JWT for the configured application.

        ``application_id`` is always set to the configured application. ``iat``
        and ``jti`` are only filled in when the caller did not provide them.
        """
        if self._jwt is None:
            raise AuthError(
                "product requires an application ID and private key to generate JWTs"
            )

        payload: dict[str, Any] = dict(claims or {})
        payload["application_id"] = self._jwt.application_id
        payload.setdefault("iat", int(time.time()))
        payload.setdefault("jti", self._id_generator())

        try:
            token = jwt.encode(
                payload,
                self._jwt.private_key.get_secret_value(),
                algorithm=self._jwt.algorithm,
            )
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            raise AuthError(f"could not sign JWT: {e}") from e
        logger.debug("Generated JWT for application %s", self._jwt.application_id)
        return token

    def __repr__(self) -> str:
        api_key = self._api_key.api_key if self._api_key else None
        app_id = self._jwt.application_id if self._jwt else None
        return f"Auth(api_key={api_key!r}, application_id={app_id!r})"


class AuthBuilder:
    """Collects credentials; ``build()`` fails when none were supplied."""

    def __init__(self) -> None:
        self._api_key: Optional[ApiCredentials] = None
        self._jwt: Optional[JwtCredentials] = None
        self._id_generator: Optional[IdGenerator] = None

    def api_key(self, api_key: str, secret: str) -> "AuthBuilder":
        self._api_key = ApiCredentials(api_key=api_key, api_secret=SecretStr(secret))
        return self

    def jwt(
        self, application_id: str, private_key: str, *, algorithm: str = "RS256"
    ) -> "AuthBuilder":
        self._jwt = JwtCredentials(
            application_id=application_id,
            private_key=SecretStr(private_key),
            algorithm=algorithm,
        )
        return self

    def id_generator(self, generator: IdGenerator) -> "AuthBuilder":
        self._id_generator = generator
        return self

    def build(self) -> Auth:
        if self._api_key is None and self._jwt is None:
            raise AuthError("no credentials specified")
        return Auth(self._api_key, self._jwt, id_generator=self._id_generator)

    def __repr__(self) -> str:
        return (
            f"AuthBuilder(api_key={self._api_key is not None}, "
            f"jwt={self._jwt is not None})"
        )
