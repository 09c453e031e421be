"""Supabase-backed booking repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from photo_studio.adapters.supabase_rows import parse_date, parse_required_timestamp
from photo_studio.domain.bookings import (
    BookingDraft,
    BookingRecord,
    BookingStatus,
    BookingType,
)
from photo_studio.services.bookings import BookingRepository

_TABLE = "bookings"


@dataclass
class SupabaseBookingRepository(BookingRepository):
    """Supabase implementation for bookings."""

    client: Client

    def create_booking(self, draft: BookingDraft) -> BookingRecord:
        """Create a pending booking row and return it."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "user_id": draft.user_id,
                    "customer_name": draft.customer_name,
                    "email": draft.email,
                    "phone": draft.phone,
                    "service_type": draft.service_type,
                    "date": draft.date.isoformat(),
                    "time": draft.time,
                    "location": draft.location,
                    "special_instructions": draft.special_instructions,
                    "booking_type": str(draft.booking_type),
                    "status": str(BookingStatus.PENDING),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create booking")
        return _parse_booking(response.data[0])

    def get_booking(self, booking_id: UUID) -> BookingRecord | None:
        """Return a booking by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(booking_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_booking(response.data[0])

    def list_bookings(self, user_id: str | None) -> list[BookingRecord]:
        """Return bookings newest first, optionally for one owner."""
        query = self.client.table(_TABLE).select("*")
        if user_id is not None:
            query = query.eq("user_id", user_id)
        response = query.order("created_at", desc=True).execute()
        return [_parse_booking(row) for row in response.data or []]

    def update_status(
        self,
        booking_id: UUID,
        status: BookingStatus,
        expected: BookingStatus | None = None,
    ) -> BookingRecord | None:
        """Set the booking status, guarded on the current status when given."""
        query = (
            self.client.table(_TABLE)
            .update({"status": str(status)})
            .eq("id", str(booking_id))
        )
        if expected is not None:
            query = query.eq("status", str(expected))
        response = query.execute()
        if not response.data:
            return None
        return _parse_booking(response.data[0])


def _parse_booking(row: dict[str, object]) -> BookingRecord:
    return BookingRecord(
        id=UUID(str(row["id"])),
        user_id=str(row["user_id"]),
        customer_name=str(row["customer_name"]),
        email=str(row["email"]),
        phone=str(row["phone"]),
        service_type=str(row["service_type"]),
        date=parse_date(row["date"]),
        time=row.get("time"),
        location=str(row["location"]),
        special_instructions=row.get("special_instructions"),
        booking_type=BookingType(row.get("booking_type") or BookingType.SHOOT),
        status=BookingStatus(row.get("status") or BookingStatus.PENDING),
        created_at=parse_required_timestamp(row.get("created_at")),
    )
