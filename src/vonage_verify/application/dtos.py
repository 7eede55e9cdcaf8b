"""Data Transfer Objects for the Verify wire format."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from ..domain.entities import (
    CodeLength,
    Language,
    PhoneNumber,
    Psd2Language,
    RequestId,
    Workflow,
)


class WireDTO(BaseModel):
    """Request body whose fields are sent form- or query-encoded."""

    model_config = ConfigDict(
        extra="forbid", validate_assignment=True, populate_by_name=True
    )

    def form_fields(self) -> dict[str, Any]:
        """Dump the body for the wire, revealing secrets and dropping unset fields."""
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        for name, value in self:
            if isinstance(value, SecretStr):
                data[name] = value.get_secret_value()
        return data


class AuthenticatedDTO(WireDTO):
    api_key: str
    api_secret: SecretStr


# Verify request DTOs
class BaseVerifyRequestDTO(AuthenticatedDTO):
    """Fields shared by the standard and PSD2 verify requests."""

    number: PhoneNumber
    country: Optional[str] = Field(None, pattern=r"^[A-Z]{2}$")
    code_length: Optional[CodeLength] = None
    # When both are set, pin_expiry should be a multiple of next_event_wait;
    # otherwise the provider makes pin_expiry equal to next_event_wait.
    pin_expiry: Optional[int] = Field(None, ge=60, le=3600)
    next_event_wait: Optional[int] = Field(None, ge=60, le=900)
    workflow_id: Optional[Workflow] = None

    def shared_fields(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in BaseVerifyRequestDTO.model_fields}


class VerifyRequestDTO(BaseVerifyRequestDTO):
    """Body of a standard ``/verify`` request."""

    brand: str = Field(..., min_length=1)
    sender_id: Optional[str] = Field(None, min_length=1, max_length=11)
    language: Optional[Language] = Field(None, alias="lg")


class Psd2VerifyRequestDTO(BaseVerifyRequestDTO):
    """Body of a ``/verify/psd2`` payment-authorization request."""

    payee: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0, description="Amount in EUR")
    language: Optional[Psd2Language] = Field(None, alias="lg")


class CheckRequestDTO(AuthenticatedDTO):
    request_id: RequestId
    code: str = Field(..., min_length=1)


class ControlCommand(str, Enum):
    CANCEL = "cancel"
    TRIGGER_NEXT_EVENT = "trigger_next_event"


class ControlRequestDTO(AuthenticatedDTO):
    request_id: RequestId
    cmd: ControlCommand


class SearchRequestDTO(AuthenticatedDTO):
    request_ids: list[RequestId] = Field(..., min_length=1)


# Response DTOs
class ResponseDTO(BaseModel):
    model_config = ConfigDict(extra="forbid")


class SubmitResponseDTO(ResponseDTO):
    """Successful answer to a verify submission."""

    request_id: RequestId


class ControlResponseDTO(ResponseDTO):
    """Successful answer to a control command."""

    command: Optional[ControlCommand] = None


class ErrorEnvelopeDTO(ResponseDTO):
    """Fields that accompany a non-zero ``status``."""

    error_text: str
    request_id: Optional[RequestId] = None
