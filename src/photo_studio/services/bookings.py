"""Booking requests and their status workflow."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from photo_studio.domain.bookings import (
    BookingDraft,
    BookingRecord,
    BookingStatus,
    can_transition,
)
from photo_studio.domain.errors import InvalidTransitionError, NotFoundError
from photo_studio.domain.sessions import AuthContext

logger = logging.getLogger(__name__)


class BookingRepository(Protocol):
    """Persistence interface for bookings."""

    def create_booking(self, draft: BookingDraft) -> BookingRecord:
        """Create a pending booking and return it."""

    def get_booking(self, booking_id: UUID) -> BookingRecord | None:
        """Return a booking by id, if present."""

    def list_bookings(self, user_id: str | None) -> list[BookingRecord]:
        """Return bookings newest first, optionally for one owner."""

    def update_status(
        self,
        booking_id: UUID,
        status: BookingStatus,
        expected: BookingStatus | None = None,
    ) -> BookingRecord | None:
        """Set the status, only if it still equals ``expected`` when given.

        Return the updated row, or None when no row matched.
        """


@dataclass
class BookingService:
    """Application service for booking operations."""

    repository: BookingRepository
    enforce_transitions: bool = True

    def create_booking(self, draft: BookingDraft) -> BookingRecord:
        """Persist a booking; new bookings always start as pending."""
        booking = self.repository.create_booking(draft)
        logger.info(
            "Booking created",
            extra={"booking_id": str(booking.id), "owner": booking.user_id},
        )
        return booking

    def list_bookings(self, caller: AuthContext) -> list[BookingRecord]:
        """Admins see every booking; clients see their own."""
        if caller.is_admin:
            return self.repository.list_bookings(None)
        return self.repository.list_bookings(str(caller.user_id))

    def list_bookings_by_query(
        self, user_id: str | None, role: str | None
    ) -> list[BookingRecord]:
        """Listing driven by client-supplied query parameters."""
        if role != "admin" and user_id:
            return self.repository.list_bookings(user_id)
        return self.repository.list_bookings(None)

    def update_status(self, booking_id: UUID, status: BookingStatus) -> BookingRecord:
        """Move a booking to a new status."""
        booking = self.repository.get_booking(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        if self.enforce_transitions and not can_transition(booking.status, status):
            raise InvalidTransitionError(
                f"Cannot change booking from {booking.status} to {status}"
            )
        if booking.status == status:
            return booking
        expected = booking.status if self.enforce_transitions else None
        updated = self.repository.update_status(booking_id, status, expected)
        if updated is not None:
            return updated
        if expected is not None and self.repository.get_booking(booking_id):
            # Another update changed the status after it was checked.
            raise InvalidTransitionError(
                f"Booking is no longer {expected}; reload and try again"
            )
        raise NotFoundError("Booking not found")
