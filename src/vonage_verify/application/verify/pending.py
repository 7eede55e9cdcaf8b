"""Pending verify handle: code checks with a fixed retry budget, cancel and trigger-next."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, Type, TypeVar, Union

from pydantic import BaseModel

from ...domain.entities import RequestId, Verified, VerifyState
from ...domain.errors import HandleConsumedError, VerifyError, VonageError
from ...domain.transport import Transport
from ..auth import ApiCredentials
from ..codec import VONAGE_URL_BASE, decode_response, encode_request
from ..dtos import (
    CheckRequestDTO,
    ControlCommand,
    ControlRequestDTO,
    ControlResponseDTO,
    WireDTO,
)

logger = logging.getLogger(__name__)

MAX_CHECK_ATTEMPTS: Final[int] = 3
CHECK_PATH: Final[str] = "/verify/check"
CONTROL_PATH: Final[str] = "/verify/control"

T = TypeVar("T", bound=BaseModel)


class PendingVerify:
    """
    Handle to a submitted verify request.

    The handle starts ``PENDING`` with 3 check attempts. Each code mismatch
    spends one attempt and hands the same handle back; a mismatch with no
    attempts left, any other failure, a match or a successful cancel end the
    lifecycle. Using a terminal handle, or a handle whose previous call is
    still in flight, raises ``HandleConsumedError`` without touching the
    network.
    """

    def __init__(
        self,
        transport: Transport,
        credentials: ApiCredentials,
        request_id: RequestId,
        *,
        attempts_remaining: int = MAX_CHECK_ATTEMPTS,
        base_url: str = VONAGE_URL_BASE,
    ) -> None:
        if not 0 <= attempts_remaining <= MAX_CHECK_ATTEMPTS:
            raise ValueError(
                f"attempts_remaining must be between 0 and {MAX_CHECK_ATTEMPTS}"
            )
        self._transport = transport
        self._credentials = credentials
        self._request_id = request_id
        self._attempts_remaining = attempts_remaining
        self._base_url = base_url
        self._state = VerifyState.PENDING
        self._in_flight = False

    @property
    def request_id(self) -> RequestId:
        return self._request_id

    @property
    def attempts_remaining(self) -> int:
        """Number of check attempts left (maximum 3)."""
        return self._attempts_remaining

    @property
    def state(self) -> VerifyState:
        return self._state

    @property
    def is_terminal(self) -> bool:
        return self._state.is_terminal

    @property
    def credentials(self) -> ApiCredentials:
        return self._credentials

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def base_url(self) -> str:
        return self._base_url

    def _begin(self, operation: str) -> None:
        if self._state.is_terminal:
            raise HandleConsumedError(
                f"cannot {operation}: verify request {self._request_id} is {self._state.value}"
            )
        if self._in_flight:
            raise HandleConsumedError(
                f"cannot {operation}: a call on verify request {self._request_id} is still in flight"
            )
        self._in_flight = True

    async def _post(self, path: str, body: WireDTO, model: Type[T]) -> T:
        request = encode_request("POST", path, body, base_url=self._base_url)
        response = await self._transport.send(request)
        return decode_response(response, model)

    async def check(self, code: str) -> "CheckResult":
        """Check a user-provided code against this request.

        Returns ``Match`` when the code is correct and ``Mismatch`` (carrying
        this same handle, one attempt poorer) when it is not and attempts
        remain. Raises when attempts are exhausted, the request expired or was
        cancelled, or any other error occurred.
        """
        body = CheckRequestDTO(
            api_key=self._credentials.api_key,
            api_secret=self._credentials.api_secret,
            request_id=self._request_id,
            code=code,
        )
        self._begin("check")
        try:
            verified = await self._post(CHECK_PATH, body, Verified)
        except VerifyError as e:
            if e.is_code_mismatch and self._attempts_remaining > 0:
                self._attempts_remaining -= 1
                logger.info(
                    "Code mismatch for verify request %s, %d attempt(s) remaining",
                    self._request_id,
                    self._attempts_remaining,
                )
                return Mismatch(self)
            self._state = (
                VerifyState.EXHAUSTED if e.is_code_mismatch else VerifyState.ERRORED
            )
            logger.info("Verify request %s ended: %s", self._request_id, self._state.value)
            raise
        except VonageError:
            self._state = VerifyState.ERRORED
            logger.info("Verify request %s ended: %s", self._request_id, self._state.value)
            raise
        finally:
            self._in_flight = False

        self._state = VerifyState.MATCHED
        logger.info("Verify request %s matched", self._request_id)
        return Match(verified)

    async def cancel(self) -> None:
        """Cancel this verify request; the handle is spent on success."""
        await self._control(ControlCommand.CANCEL)
        # A cancelled request ends the handle lifecycle, so cancel is the one
        # control command that changes state; trigger_next_event never does.
        self._state = VerifyState.CANCELLED
        logger.info("Verify request %s cancelled", self._request_id)

    async def trigger_next_event(self) -> None:
        """Skip ahead to the next delivery step of the request's workflow."""
        await self._control(ControlCommand.TRIGGER_NEXT_EVENT)

    async def _control(self, cmd: ControlCommand) -> None:
        body = ControlRequestDTO(
            api_key=self._credentials.api_key,
            api_secret=self._credentials.api_secret,
            request_id=self._request_id,
            cmd=cmd,
        )
        self._begin(cmd.value)
        try:
            await self._post(CONTROL_PATH, body, ControlResponseDTO)
        finally:
            self._in_flight = False
        logger.debug("Sent %s for verify request %s", cmd.value, self._request_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PendingVerify):
            return NotImplemented
        return self._request_id == other._request_id

    def __hash__(self) -> int:
        return hash(self._request_id)

    def __repr__(self) -> str:
        return (
            f"PendingVerify(request_id={self._request_id!r}, "
            f"api_key={self._credentials.api_key!r}, "
            f"attempts_remaining={self._attempts_remaining}, "
            f"state={self._state.value!r})"
        )


@dataclass(frozen=True)
class Match:
    """The submitted code matched; the verification is complete."""

    verified: Verified


@dataclass(frozen=True)
class Mismatch:
    """The submitted code did not match; ``pending`` may be checked again."""

    pending: PendingVerify

    @property
    def attempts_remaining(self) -> int:
        return self.pending.attempts_remaining


CheckResult = Union[Match, Mismatch]
