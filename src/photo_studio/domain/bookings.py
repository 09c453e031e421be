"""Domain models for booking requests."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

GUEST_USER_ID = "guest"


class BookingStatus(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BookingType(StrEnum):
    SHOOT = "shoot"
    STUDIO = "studio"


BOOKING_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.CONFIRMED, BookingStatus.CANCELLED}
    ),
    BookingStatus.CONFIRMED: frozenset(
        {BookingStatus.COMPLETED, BookingStatus.CANCELLED}
    ),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    """Return True when the booking graph allows moving to ``target``."""
    if current == target:
        return True
    return target in BOOKING_TRANSITIONS[current]


@dataclass(frozen=True)
class BookingDraft:
    """Validated booking fields ready to be persisted."""

    user_id: str
    customer_name: str
    email: str
    phone: str
    service_type: str
    date: date
    location: str
    time: str | None = None
    special_instructions: str | None = None
    booking_type: BookingType = BookingType.SHOOT


@dataclass(frozen=True)
class BookingRecord:
    """Represents a persisted booking."""

    id: UUID
    user_id: str
    customer_name: str
    email: str
    phone: str
    service_type: str
    date: date
    time: str | None
    location: str
    special_instructions: str | None
    booking_type: BookingType
    status: BookingStatus
    created_at: datetime
