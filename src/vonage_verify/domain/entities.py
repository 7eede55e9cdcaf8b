"""Verify domain values: identifiers, enumerations, results and search records."""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum, IntEnum
from typing import Annotated, Any, NewType, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    AfterValidator,
    ConfigDict,
    IPvAnyAddress,
    field_validator,
)

# Opaque provider-issued identifier of one verify request
RequestId = NewType("RequestId", str)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_PHONE_SEPARATORS = re.compile(r"[\s\-.()]")
_CANONICAL_PHONE = re.compile(r"^[1-9]\d{6,14}$")
# National trunk prefix written after the country code, as in "+44 (0)7700 ..."
_TRUNK_PREFIX = re.compile(r"(?<=\d)\s*\(0\)")


def normalize_phone_number(value: str) -> str:
    """Return the canonical international form (E.164 digits without ``+``).

    A ``(0)`` trunk prefix following the country code is dropped.
    """
    if not isinstance(value, str):
        raise ValueError("phone number must be a string")
    digits = _PHONE_SEPARATORS.sub("", _TRUNK_PREFIX.sub("", value))
    if digits.startswith("+"):
        digits = digits[1:]
    elif digits.startswith("00"):
        digits = digits[2:]
    if not _CANONICAL_PHONE.match(digits):
        raise ValueError(f"not an international phone number: {value!r}")
    return digits


PhoneNumber = Annotated[str, AfterValidator(normalize_phone_number)]


def _parse_date(value: Any) -> Any:
    if isinstance(value, str):
        return datetime.strptime(value, DATE_FORMAT)
    return value


def _parse_optional_date(value: Any) -> Any:
    if value is None or value == "":
        return None
    return _parse_date(value)


ProviderDate = Annotated[datetime, BeforeValidator(_parse_date)]
OptionalProviderDate = Annotated[Optional[datetime], BeforeValidator(_parse_optional_date)]


class CodeLength(IntEnum):
    """The number of digits in a verification code."""

    FOUR = 4
    SIX = 6


class Workflow(IntEnum):
    """Predefined SMS/TTS delivery sequences, encoded by their ordinal."""

    SMS_TTS_TTS = 1  # default
    SMS_SMS_TTS = 2
    TTS_TTS = 3
    SMS_SMS = 4
    SMS_TTS = 5
    SMS = 6
    TTS = 7


class Language(str, Enum):
    """Languages supported by standard verify SMS/TTS messages."""

    ARABIC = "ar-xa"
    CZECH = "cs-cz"
    WELSH = "cy-cy"
    WELSH_UK = "cy-gb"
    DANISH = "da-dk"
    GERMAN = "de-de"
    GREEK = "el-gr"
    ENGLISH_AU = "en-au"
    ENGLISH_UK = "en-gb"
    ENGLISH_INDIA = "en-in"
    ENGLISH_US = "en-us"
    SPANISH = "es-es"
    SPANISH_MEXICO = "es-mx"
    SPANISH_US = "es-us"
    FINNISH = "fi-fi"
    FILIPINO = "fil-ph"
    FRENCH_CANADA = "fr-ca"
    FRENCH = "fr-fr"
    HINDI = "hi-in"
    HUNGARIAN = "hu-hu"
    INDONESIAN = "id-id"
    ICELANDIC = "is-is"
    ITALIAN = "it-it"
    JAPANESE = "ja-jp"
    KOREAN = "ko-kr"
    NORWEGIAN = "nb-no"
    DUTCH = "nl-nl"
    POLISH = "pl-pl"
    PORTUGUESE_BRAZIL = "pt-br"
    PORTUGUESE = "pt-pt"
    ROMANIAN = "ro-ro"
    SWEDISH = "sv-se"
    THAI = "th-th"
    VIETNAMESE = "vi-vn"
    CANTONESE = "yue-cn"
    CHINESE_MAINLAND = "zh-cn"
    CHINESE_TAIWAN = "zh-tw"


class Psd2Language(str, Enum):
    """Languages supported by PSD2 verify SMS/TTS messages."""

    BULGARIAN = "bg-bg"
    CZECH = "cs-cz"
    DANISH = "da-dk"
    GERMAN = "de-de"
    ENGLISH_UK = "en-gb"
    ESTONIAN = "ee-et"
    GREEK = "el-gr"
    SPANISH = "es-es"
    FINNISH = "fi-fi"
    FRENCH = "fr-fr"
    GAELIC = "ga-ie"
    HUNGARIAN = "hu-hu"
    ITALIAN = "it-it"
    LATVIAN = "lv-lv"
    LITHUANIAN = "lt-lt"
    MALTESE = "mt-mt"
    DUTCH = "nl-nl"
    POLISH = "pl-pl"
    SLOVAK = "sk-sk"
    SLOVENIAN = "sl-si"
    SWEDISH = "sv-se"


class VerifyState(str, Enum):
    """Lifecycle state of a pending verify handle."""

    PENDING = "pending"
    MATCHED = "matched"
    EXHAUSTED = "exhausted"
    ERRORED = "errored"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not VerifyState.PENDING


class VerifyStatus(str, Enum):
    """Provider-side status of a verify request, as reported by search."""

    IN_PROGRESS = "IN PROGRESS"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"


class CheckStatus(str, Enum):
    VALID = "VALID"
    INVALID = "INVALID"


class EventType(str, Enum):
    SMS = "sms"
    TTS = "tts"


class Verified(BaseModel):
    """Details returned when a submitted code matched."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    request_id: RequestId
    event_id: str
    price: str
    currency: str
    # Cost (EUR) of calls and messages sent; absent on some pricing models
    estimated_price_messages_sent: Optional[str] = None


class Check(BaseModel):
    """One attempted code check recorded against a verify request."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    date_received: ProviderDate
    code: str
    status: CheckStatus
    ip_address: Optional[IPvAnyAddress] = None

    @field_validator("ip_address", mode="before")
    @classmethod
    def blank_ip_is_none(cls, v: Any) -> Any:
        return v or None


class VerifyInfo(BaseModel):
    """A search result describing a past or current verify request."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    request_id: RequestId
    account_id: str
    status: VerifyStatus
    number: PhoneNumber
    price: str
    currency: str
    sender_id: str
    date_submitted: ProviderDate
    date_finalized: OptionalProviderDate = None
    first_event_date: OptionalProviderDate = None
    last_event_date: OptionalProviderDate = None
    checks: list[Check] = []
    events: list[tuple[EventType, str]] = []
    estimated_price_messages_sent: Optional[str] = None

    @field_validator("events", mode="before")
    @classmethod
    def events_from_objects(cls, v: Any) -> Any:
        """Accept the provider's ``{"type": ..., "id": ...}`` event objects."""
        if not isinstance(v, list):
            return v
        out = []
        for item in v:
            if isinstance(item, dict):
                if set(item) != {"type", "id"}:
                    raise ValueError(f"unexpected event fields: {sorted(item)}")
                out.append((item["type"], item["id"]))
            else:
                out.append(item)
        return out
