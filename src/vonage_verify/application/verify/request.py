"""Builders for the ``/verify`` and ``/verify/psd2`` requests."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import ClassVar, Final, Generic, TypeVar, Union

from ...domain.entities import CodeLength, Language, Psd2Language, Workflow
from ...domain.errors import HandleConsumedError
from ...domain.transport import Transport
from ..auth import ApiCredentials, Auth
from ..codec import VONAGE_URL_BASE, decode_response, encode_request
from ..dtos import (
    BaseVerifyRequestDTO,
    Psd2VerifyRequestDTO,
    SubmitResponseDTO,
    VerifyRequestDTO,
)
from .pending import MAX_CHECK_ATTEMPTS, PendingVerify

logger = logging.getLogger(__name__)

VERIFY_PATH: Final[str] = "/verify"
PSD2_PATH: Final[str] = "/verify/psd2"

D = TypeVar("D", bound=BaseVerifyRequestDTO)
B = TypeVar("B", bound="BaseVerify")

Seconds = Union[int, timedelta]


def _to_seconds(value: Seconds) -> int:
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    return int(value)


class BaseVerify(Generic[D]):
    """Setters shared by both request variants, plus submission.

    Setters mutate the request body in place and return the builder. A
    builder is spent once it is sent or converted to another variant.
    """

    PATH: ClassVar[str]

    def __init__(
        self, transport: Transport, body: D, *, base_url: str = VONAGE_URL_BASE
    ) -> None:
        self._transport = transport
        self._body = body
        self._base_url = base_url
        self._spent = False

    def _config(self) -> D:
        if self._spent:
            raise HandleConsumedError("verify builder has already been used")
        return self._body

    @property
    def request_body(self) -> D:
        """A copy of the body that ``send()`` would submit."""
        return self._body.model_copy()

    def country(self: B, country: str) -> B:
        """Override the country (ISO 3166 alpha-2) inferred from the number."""
        self._config().country = country.upper()
        return self

    def code_length(self: B, length: Union[CodeLength, int]) -> B:
        self._config().code_length = CodeLength(length)
        return self

    def pin_expiry(self: B, valid_for: Seconds) -> B:
        """Set how long the generated code stays valid (60 to 3600 seconds).

        When both ``pin_expiry`` and ``next_event_wait`` are set, ``pin_expiry``
        should be an integer multiple of ``next_event_wait``; otherwise the
        provider makes it equal to ``next_event_wait``. Values are sent as given.
        """
        self._config().pin_expiry = _to_seconds(valid_for)
        return self

    def next_event_wait(self: B, wait: Seconds) -> B:
        """Set the wait between delivery attempts (60 to 900 seconds)."""
        self._config().next_event_wait = _to_seconds(wait)
        return self

    def workflow(self: B, workflow: Union[Workflow, int]) -> B:
        """Set the SMS/TTS delivery sequence; the provider default is ``SMS_TTS_TTS``."""
        self._config().workflow_id = Workflow(workflow)
        return self

    async def send(self) -> PendingVerify:
        """Submit the request and return a handle to control it."""
        body = self._config()
        self._spent = True
        request = encode_request("POST", self.PATH, body, base_url=self._base_url)
        response = await self._transport.send(request)
        submitted = decode_response(response, SubmitResponseDTO)
        logger.info("Submitted verify request %s via %s", submitted.request_id, self.PATH)
        return PendingVerify(
            self._transport,
            _credentials_of(body),
            submitted.request_id,
            attempts_remaining=MAX_CHECK_ATTEMPTS,
            base_url=self._base_url,
        )

    def __repr__(self) -> str:
        fields = self._body.model_dump(exclude={"api_secret"}, exclude_none=True)
        return f"{type(self).__name__}({fields!r}, spent={self._spent})"


class Verify(BaseVerify[VerifyRequestDTO]):
    """Builder for a standard verify request (identified by a brand)."""

    PATH = VERIFY_PATH

    @classmethod
    def new(
        cls,
        transport: Transport,
        auth: Auth,
        phone: str,
        brand: str,
        *,
        base_url: str = VONAGE_URL_BASE,
    ) -> "Verify":
        creds = auth.api_key_pair()
        body = VerifyRequestDTO(
            api_key=creds.api_key,
            api_secret=creds.api_secret,
            number=phone,
            brand=brand,
        )
        return cls(transport, body, base_url=base_url)

    def sender_id(self, sender_id: str) -> "Verify":
        """Set the alphanumeric sender identity (at most 11 characters).

        Depending on the destination, restrictions might apply.
        """
        self._config().sender_id = sender_id
        return self

    def language(self, lang: Language) -> "Verify":
        """Force the SMS/TTS language instead of the number's locale."""
        self._config().language = Language(lang)
        return self

    def psd2(self, payee: str, amount_eur: float) -> "Psd2Verify":
        """Turn this into a PSD2 payment-authorization request.

        Shared settings are carried over; brand, sender id and language are
        dropped. This builder is spent afterwards.
        """
        body = Psd2VerifyRequestDTO(
            **self._config().shared_fields(),
            payee=payee,
            amount=amount_eur,
        )
        self._spent = True
        return Psd2Verify(self._transport, body, base_url=self._base_url)


class Psd2Verify(BaseVerify[Psd2VerifyRequestDTO]):
    """Builder for a PSD2 verify request (identified by payee and amount)."""

    PATH = PSD2_PATH

    def language(self, lang: Psd2Language) -> "Psd2Verify":
        self._config().language = Psd2Language(lang)
        return self


def _credentials_of(body: BaseVerifyRequestDTO) -> ApiCredentials:
    return ApiCredentials(api_key=body.api_key, api_secret=body.api_secret)
