"""Tests for booking creation, listing and the status workflow."""

from datetime import date, timedelta
from uuid import uuid4

import pytest

from photo_studio.domain.bookings import (
    GUEST_USER_ID,
    BookingDraft,
    BookingStatus,
    can_transition,
)
from photo_studio.domain.errors import InvalidTransitionError, NotFoundError
from photo_studio.domain.models import Role
from photo_studio.domain.sessions import AuthContext
from photo_studio.services.bookings import BookingService
from tests.conftest import FakeClock, InMemoryBookingRepository


def _draft(user_id: str = GUEST_USER_ID) -> BookingDraft:
    return BookingDraft(
        user_id=user_id,
        customer_name="Ada",
        email="ada@example.com",
        phone="555-0100",
        service_type="Wedding",
        date=date(2026, 6, 1),
        location="Lagos",
    )


def _caller(role: Role = Role.CLIENT) -> AuthContext:
    return AuthContext(user_id=uuid4(), role=role, session_id=uuid4(), token="t")


def test_created_bookings_start_pending() -> None:
    service = BookingService(InMemoryBookingRepository())

    booking = service.create_booking(_draft())

    assert booking.status == BookingStatus.PENDING
    assert booking.user_id == GUEST_USER_ID


def test_clients_see_own_bookings_and_admins_see_all() -> None:
    clock = FakeClock()
    service = BookingService(InMemoryBookingRepository(clock=clock))
    alice = _caller()
    bob = _caller()
    service.create_booking(_draft(str(alice.user_id)))
    clock.advance(timedelta(minutes=1))
    service.create_booking(_draft(str(bob.user_id)))
    clock.advance(timedelta(minutes=1))
    newest = service.create_booking(_draft(str(alice.user_id)))
    service.create_booking(_draft())

    own = service.list_bookings(alice)
    everything = service.list_bookings(_caller(Role.ADMIN))

    assert {booking.user_id for booking in own} == {str(alice.user_id)}
    assert own[0].id == newest.id
    assert len(everything) == 4


def test_legacy_query_listing() -> None:
    service = BookingService(InMemoryBookingRepository())
    service.create_booking(_draft("user-1"))
    service.create_booking(_draft("user-2"))

    assert len(service.list_bookings_by_query("user-1", "client")) == 1
    assert len(service.list_bookings_by_query("user-1", "admin")) == 2
    assert len(service.list_bookings_by_query(None, None)) == 2


def test_transition_graph() -> None:
    assert can_transition(BookingStatus.PENDING, BookingStatus.CONFIRMED)
    assert can_transition(BookingStatus.PENDING, BookingStatus.CANCELLED)
    assert can_transition(BookingStatus.CONFIRMED, BookingStatus.COMPLETED)
    assert not can_transition(BookingStatus.PENDING, BookingStatus.COMPLETED)
    assert not can_transition(BookingStatus.COMPLETED, BookingStatus.PENDING)
    assert not can_transition(BookingStatus.CANCELLED, BookingStatus.CONFIRMED)


def test_update_status_follows_workflow() -> None:
    service = BookingService(InMemoryBookingRepository())
    booking = service.create_booking(_draft())

    confirmed = service.update_status(booking.id, BookingStatus.CONFIRMED)
    again = service.update_status(booking.id, BookingStatus.CONFIRMED)
    completed = service.update_status(booking.id, BookingStatus.COMPLETED)

    assert confirmed.status == BookingStatus.CONFIRMED
    assert again.status == BookingStatus.CONFIRMED
    assert completed.status == BookingStatus.COMPLETED
    with pytest.raises(InvalidTransitionError):
        service.update_status(booking.id, BookingStatus.CANCELLED)


def test_update_status_without_enforcement_allows_any_change() -> None:
    service = BookingService(InMemoryBookingRepository(), enforce_transitions=False)
    booking = service.create_booking(_draft())
    service.update_status(booking.id, BookingStatus.COMPLETED)

    reopened = service.update_status(booking.id, BookingStatus.PENDING)

    assert reopened.status == BookingStatus.PENDING


def test_update_status_unknown_booking() -> None:
    service = BookingService(InMemoryBookingRepository())

    with pytest.raises(NotFoundError, match="Booking not found"):
        service.update_status(uuid4(), BookingStatus.CONFIRMED)


def test_status_change_is_rejected_when_booking_changed_meanwhile(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    repository = InMemoryBookingRepository()
    service = BookingService(repository)
    pending = service.create_booking(_draft())
    # Both admins loaded the booking while it was still pending.
    monkeypatch.setattr(repository, "get_booking", lambda booking_id: pending)

    service.update_status(pending.id, BookingStatus.CONFIRMED)
    with pytest.raises(InvalidTransitionError, match="no longer pending"):
        service.update_status(pending.id, BookingStatus.CANCELLED)

    assert repository.bookings[pending.id].status == BookingStatus.CONFIRMED
