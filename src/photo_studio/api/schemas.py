"""Pydantic request models and form parsers for the HTTP API."""

import json
import re
from datetime import date
from typing import Annotated
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel

from photo_studio.domain.bookings import BookingStatus, BookingType
from photo_studio.domain.errors import InvalidInputError
from photo_studio.domain.invoices import InvoiceStatus

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

_RECIPIENT_IDS = TypeAdapter(list[UUID])

MAX_EXPIRY_HOURS = 24 * 365 * 100
_MAX_EXPIRY_DIGITS = len(str(MAX_EXPIRY_HOURS)) + 1
_LEADING_INTEGER = re.compile(r"[+-]?\d+")


class CamelModel(BaseModel):
    """Accepts camelCase keys from the web client and snake_case internally."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    name: RequiredText
    email: EmailStr
    password: str = Field(min_length=1)
    phone: str | None = None


class LoginRequest(CamelModel):
    email: str
    password: str


class ForgotPasswordRequest(CamelModel):
    email: RequiredText


class ResetPasswordRequest(CamelModel):
    token: RequiredText
    new_password: str = Field(min_length=1)


class VerifyOtpRequest(CamelModel):
    otp: RequiredText


class ProfileUpdateRequest(CamelModel):
    name: RequiredText
    phone: str | None = None


class BookingCreateRequest(CamelModel):
    """Booking form payload; a client-supplied status is ignored."""

    customer_name: RequiredText
    email: EmailStr
    phone: RequiredText
    service_type: RequiredText
    date: date
    location: RequiredText
    time: str | None = None
    special_instructions: str | None = None
    booking_type: BookingType = BookingType.SHOOT
    user_id: str | None = None


class BookingStatusRequest(CamelModel):
    status: BookingStatus


class InvoiceItemRequest(CamelModel):
    description: RequiredText
    quantity: float = Field(gt=0)
    unit_price: float = Field(ge=0)


class InvoiceCreateRequest(CamelModel):
    user_id: UUID
    description: RequiredText
    due_date: date
    amount: float | None = Field(default=None, ge=0)
    items: list[InvoiceItemRequest] = Field(default_factory=list)
    booking_id: UUID | None = None
    admin_name: str | None = None
    status: InvoiceStatus = InvoiceStatus.SENT


class InvoiceStatusRequest(CamelModel):
    status: InvoiceStatus


def parse_recipient_ids(raw: str | None) -> list[UUID]:
    """Parse the ``userIds`` form field: a JSON array or a single id."""
    if raw is None or not raw.strip():
        return []
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        parsed = raw.strip()
    if isinstance(parsed, str):
        parsed = [parsed]
    try:
        return _RECIPIENT_IDS.validate_python(parsed)
    except ValidationError as exc:
        raise InvalidInputError("Invalid userIds") from exc


def parse_expiry_hours(raw: str | None) -> int | None:
    """Parse the optional ``expiryHours`` form field.

    As with ``parseInt``, only the leading integer counts, so
    ``"24.5"`` means 24 hours.
    """
    if raw is None or not raw.strip():
        return None
    match = _LEADING_INTEGER.match(raw.strip())
    if match is None:
        raise InvalidInputError("Invalid expiryHours")
    digits = match.group()
    if len(digits) > _MAX_EXPIRY_DIGITS or int(digits) > MAX_EXPIRY_HOURS:
        raise InvalidInputError("Invalid expiryHours")
    return int(digits)
