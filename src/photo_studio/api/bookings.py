"""Booking endpoints for clients, guests and administrators."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from photo_studio.api.dependencies import get_container, optional_auth
from photo_studio.api.schemas import BookingCreateRequest, BookingStatusRequest
from photo_studio.api.serializers import serialize_booking
from photo_studio.containers import AppContainer
from photo_studio.domain.bookings import GUEST_USER_ID, BookingDraft
from photo_studio.domain.errors import ForbiddenError, UnauthorizedError
from photo_studio.domain.sessions import AuthContext

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreateRequest,
    caller: AuthContext | None = Depends(optional_auth),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create a pending booking owned by the caller or by the guest sentinel."""
    owner = GUEST_USER_ID
    if caller is not None:
        owner = str(caller.user_id)
    elif container.settings.legacy_booking_query_access and payload.user_id:
        owner = payload.user_id
    booking = container.booking_service.create_booking(
        BookingDraft(
            user_id=owner,
            customer_name=payload.customer_name,
            email=payload.email,
            phone=payload.phone,
            service_type=payload.service_type,
            date=payload.date,
            location=payload.location,
            time=payload.time,
            special_instructions=payload.special_instructions,
            booking_type=payload.booking_type,
        )
    )
    return {"message": "Booking created", "booking": serialize_booking(booking)}


@router.get("")
async def list_bookings(
    user_id: str | None = Query(default=None, alias="userId"),
    role: str | None = None,
    caller: AuthContext | None = Depends(optional_auth),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Admins see every booking; clients see their own."""
    if caller is not None:
        bookings = container.booking_service.list_bookings(caller)
    elif container.settings.legacy_booking_query_access:
        bookings = container.booking_service.list_bookings_by_query(user_id, role)
    else:
        raise UnauthorizedError
    return [serialize_booking(booking) for booking in bookings]


@router.put("/{booking_id}/status")
async def update_booking_status(
    booking_id: UUID,
    payload: BookingStatusRequest,
    caller: AuthContext | None = Depends(optional_auth),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Move a booking along its status workflow."""
    if caller is None:
        if not container.settings.legacy_booking_query_access:
            raise UnauthorizedError
    elif not caller.is_admin:
        raise ForbiddenError("Admin only")
    booking = container.booking_service.update_status(booking_id, payload.status)
    return {"message": "Status updated", "booking": serialize_booking(booking)}
