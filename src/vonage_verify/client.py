from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Type
from types import TracebackType

from .application.auth import Auth, AuthBuilder
from .application.codec import VONAGE_URL_BASE
from .application.verify.pending import PendingVerify
from .application.verify.request import Verify
from .application.verify.search import search
from .crypto.identifiers import IdGenerator
from .crypto.signature import Signature
from .domain.entities import VerifyInfo
from .domain.errors import AuthError
from .domain.transport import Transport
from .env import Settings
from .infrastructure.http.http_client import AsyncHttpTransport

logger = logging.getLogger(__name__)


class Client:
    """Entry point to the Verify API.

    The transport is shared by every builder and handle the client creates.
    """

    def __init__(
        self,
        transport: Transport,
        auth: Auth,
        *,
        sms_signature: Optional[Signature] = None,
        base_url: str = VONAGE_URL_BASE,
        owns_transport: bool = False,
    ) -> None:
        self._transport = transport
        self._auth = auth
        self._sms_signature = sms_signature
        self._base_url = base_url.rstrip("/")
        self._owns_transport = owns_transport

    @classmethod
    def new(cls, api_key: str, secret: str) -> "Client":
        """Client authenticated with an API key pair over the default transport."""
        return cls.builder().auth_api_key(api_key, secret).build()

    @staticmethod
    def builder() -> "ClientBuilder":
        return ClientBuilder()

    @classmethod
    def from_settings(cls, settings: Settings) -> "Client":
        builder = cls.builder().base_url(settings.base_url).timeout(settings.timeout)
        if settings.api_key is not None and settings.api_secret is not None:
            builder.auth_api_key(
                settings.api_key, settings.api_secret.get_secret_value()
            )
        if settings.application_id is not None and settings.private_key is not None:
            builder.auth_jwt(
                settings.application_id, settings.private_key.get_secret_value()
            )
        if settings.signature_secret is not None:
            builder.sms_signature(
                Signature(
                    settings.signature_secret.get_secret_value(),
                    settings.signature_method,
                )
            )
        return builder.build()

    @property
    def auth(self) -> Auth:
        return self._auth

    @property
    def sms_signature(self) -> Optional[Signature]:
        return self._sms_signature

    @property
    def transport(self) -> Transport:
        return self._transport

    def verify(self, phone: str, brand: str) -> Verify:
        """Start building a verify request for ``phone`` on behalf of ``brand``."""
        return Verify.new(
            self._transport, self._auth, phone, brand, base_url=self._base_url
        )

    async def search(
        self, handles: Iterable[PendingVerify]
    ) -> list[Optional[VerifyInfo]]:
        return await search(handles)

    def sign_sms(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """Return ``params`` with the SMS signature added."""
        if self._sms_signature is None:
            raise AuthError("no SMS signature secret configured")
        return self._sms_signature.signed(params, add_timestamp=True)

    async def aclose(self) -> None:
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"Client(auth={self._auth!r}, sms_signature={self._sms_signature!r})"


class ClientBuilder:
    """Collects credentials and options; ``build()`` fails without credentials."""

    def __init__(self) -> None:
        self._auth_builder = AuthBuilder()
        self._sms_signature: Optional[Signature] = None
        self._transport: Optional[Transport] = None
        self._base_url = VONAGE_URL_BASE
        self._timeout = 10.0

    def auth_api_key(self, api_key: str, secret: str) -> "ClientBuilder":
        self._auth_builder.api_key(api_key, secret)
        return self

    def auth_jwt(
        self, application_id: str, private_key: str, *, algorithm: str = "RS256"
    ) -> "ClientBuilder":
        self._auth_builder.jwt(application_id, private_key, algorithm=algorithm)
        return self

    def id_generator(self, generator: IdGenerator) -> "ClientBuilder":
        self._auth_builder.id_generator(generator)
        return self

    def sms_signature(self, sig: Signature) -> "ClientBuilder":
        self._sms_signature = sig
        return self

    def transport(self, transport: Transport) -> "ClientBuilder":
        self._transport = transport
        return self

    def base_url(self, base_url: str) -> "ClientBuilder":
        self._base_url = base_url
        return self

    def timeout(self, timeout: float) -> "ClientBuilder":
        self._timeout = timeout
        return self

    def build(self) -> Client:
        auth = self._auth_builder.build()
        owns_transport = self._transport is None
        transport = self._transport or AsyncHttpTransport(self._timeout)
        logger.debug("Built client with %r", auth)
        return Client(
            transport,
            auth,
            sms_signature=self._sms_signature,
            base_url=self._base_url,
            owns_transport=owns_transport,
        )
