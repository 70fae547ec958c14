"""
Service-level tests for the booking lifecycle and its policy rules.

These call booking_service directly with an explicit Actor and inspect the
returned Result, without going through HTTP.
"""

from datetime import date, timedelta

import pytest
from sqlalchemy import func, select
from structlog.testing import capture_logs

from hotel_booking.core.security import Actor
from hotel_booking.models.booking import Booking, BookingStatus, RoomType, BOOKING_STATUSES
from hotel_booking.schemas.booking import BookingCreate
from hotel_booking.services import booking_policy, booking_service
from hotel_booking.services.results import ErrorKind


def _create_data(hotel_id: int, **overrides) -> BookingCreate:
    check_in = date.today() + timedelta(days=3)
    fields = dict(
        hotel_id=hotel_id,
        check_in=check_in,
        check_out=check_in + timedelta(days=2),
        guests=2,
        room_type=RoomType.SUITE,
        price=800,
    )
    fields.update(overrides)
    return BookingCreate(**fields)


@pytest.mark.parametrize(
    "room_type, nights, expected",
    [
        (RoomType.STANDARD, 3, 300.0),
        (RoomType.DELUXE, 2, 300.0),
        (RoomType.SUITE, 1, 200.0),
        ("suite", 0, 200.0),
    ],
)
def test_quote_price(room_type, nights, expected):
    assert booking_service.quote_price(100, room_type, nights) == expected


def test_booking_create_nights():
    data = _create_data(1)
    assert data.nights == 2


def test_booking_create_rejects_inverted_dates():
    with pytest.raises(ValueError):
        _create_data(1, check_out=date.today())


def test_check_cancellable():
    booking = Booking(status=BookingStatus.PENDING.value)
    assert booking_policy.check_cancellable(booking) is None

    booking.status = BookingStatus.CONFIRMED.value
    assert booking_policy.check_cancellable(booking) is None

    booking.status = BookingStatus.CANCELLED.value
    error = booking_policy.check_cancellable(booking)
    assert error.kind == ErrorKind.BAD_REQUEST
    assert error.message == "Booking is already cancelled"

    booking.status = BookingStatus.COMPLETED.value
    assert booking_policy.check_cancellable(booking).message == "Cannot cancel a completed booking"


def test_every_status_is_cancellable_or_has_refusal():
    cancellable = booking_policy.CANCELLABLE_STATUSES
    refused = set(booking_policy.CANCEL_REFUSALS)
    assert cancellable.isdisjoint(refused)
    assert cancellable | refused == set(BOOKING_STATUSES)


def test_ownership_rules():
    booking = Booking(user_id=1, status=BookingStatus.PENDING.value)
    owner = Actor(id=1)
    stranger = Actor(id=2)
    admin = Actor(id=3, is_admin=True)

    assert booking_policy.can_view(owner, booking)
    assert booking_policy.can_cancel(owner, booking)
    assert not booking_policy.can_view(stranger, booking)
    assert not booking_policy.can_cancel(stranger, booking)
    assert booking_policy.can_view(admin, booking)
    assert booking_policy.can_cancel(admin, booking)

    assert booking_policy.require_admin(owner, "do this").kind == ErrorKind.FORBIDDEN
    assert booking_policy.require_admin(admin, "do this") is None
    assert admin.role == "admin" and owner.role == "user"


@pytest.mark.asyncio
async def test_create_booking_is_owned_by_actor(db_session, user_actor, test_hotel):
    result = await booking_service.create_booking(db_session, user_actor, _create_data(test_hotel.id))

    assert result.ok
    view = result.value
    assert view.user_id == user_actor.id
    assert view.status == BookingStatus.PENDING.value
    assert view.room_type == "suite"
    assert view.price == 800


@pytest.mark.asyncio
async def test_create_booking_logs_quote_but_stores_supplied_price(
    db_session, user_actor, test_hotel
):
    """Suite, 2 nights at 200/night quotes 800; the client's 123 is what gets stored."""
    with capture_logs() as logs:
        result = await booking_service.create_booking(
            db_session, user_actor, _create_data(test_hotel.id, price=123)
        )

    assert result.value.price == 123
    created = [entry for entry in logs if entry["event"] == "booking_created"]
    assert len(created) == 1
    assert created[0]["price"] == 123
    assert created[0]["quoted_price"] == 800


@pytest.mark.asyncio
async def test_access_denied_logs_actor_role(db_session, other_actor, admin_actor, test_booking):
    with capture_logs() as logs:
        await booking_service.get_by_id(db_session, other_actor, test_booking.id)
        await booking_service.get_by_id(db_session, admin_actor, test_booking.id)

    denied = [entry for entry in logs if entry["event"] == "booking_access_denied"]
    assert len(denied) == 1
    assert denied[0]["role"] == "user"
    assert denied[0]["user_id"] == other_actor.id
    assert denied[0]["log_level"] == "warning"


@pytest.mark.asyncio
async def test_create_booking_missing_hotel_persists_nothing(db_session, user_actor):
    result = await booking_service.create_booking(db_session, user_actor, _create_data(4242))

    assert not result.ok
    assert result.error.kind == ErrorKind.NOT_FOUND

    count = await db_session.execute(select(func.count(Booking.id)))
    assert count.scalar_one() == 0


@pytest.mark.asyncio
async def test_list_all_forbidden_for_users(db_session, user_actor, test_booking):
    result = await booking_service.list_all(db_session, user_actor)
    assert result.error.kind == ErrorKind.FORBIDDEN


@pytest.mark.asyncio
async def test_list_for_user_only_returns_own(
    db_session, user_actor, other_actor, test_booking
):
    mine = await booking_service.list_for_user(db_session, user_actor)
    theirs = await booking_service.list_for_user(db_session, other_actor)

    assert [b.id for b in mine.value] == [test_booking.id]
    assert theirs.value == []


@pytest.mark.asyncio
async def test_update_status_can_reopen_cancelled_booking(db_session, admin_actor, test_booking):
    await booking_service.update_status(
        db_session, admin_actor, test_booking.id, BookingStatus.CANCELLED.value
    )
    result = await booking_service.update_status(
        db_session, admin_actor, test_booking.id, BookingStatus.CONFIRMED.value
    )

    assert result.ok
    assert result.value.status == "confirmed"


@pytest.mark.asyncio
async def test_update_status_rejects_unknown_status(db_session, admin_actor, test_booking):
    result = await booking_service.update_status(db_session, admin_actor, test_booking.id, "lost")

    assert result.error.kind == ErrorKind.BAD_REQUEST
    await db_session.refresh(test_booking)
    assert test_booking.status == BookingStatus.PENDING.value


@pytest.mark.asyncio
async def test_update_status_forbidden_for_owner(db_session, user_actor, test_booking):
    result = await booking_service.update_status(
        db_session, user_actor, test_booking.id, BookingStatus.CONFIRMED.value
    )
    assert result.error.kind == ErrorKind.FORBIDDEN


@pytest.mark.asyncio
async def test_cancel_by_stranger_leaves_booking_untouched(db_session, other_actor, test_booking):
    result = await booking_service.cancel(db_session, other_actor, test_booking.id)

    assert result.error.kind == ErrorKind.FORBIDDEN
    await db_session.refresh(test_booking)
    assert test_booking.status == BookingStatus.PENDING.value


@pytest.mark.asyncio
async def test_cancel_twice(db_session, user_actor, test_booking):
    first = await booking_service.cancel(db_session, user_actor, test_booking.id)
    second = await booking_service.cancel(db_session, user_actor, test_booking.id)

    assert first.ok
    assert first.value.status == BookingStatus.CANCELLED.value
    assert second.error.kind == ErrorKind.BAD_REQUEST


@pytest.mark.asyncio
async def test_stats_revenue_counts_confirmed_and_completed(
    db_session, user_actor, admin_actor, test_hotel
):
    prices = {"confirmed": 100, "completed": 250, "cancelled": 400, "pending": 50}
    for status, price in prices.items():
        created = await booking_service.create_booking(
            db_session, user_actor, _create_data(test_hotel.id, price=price)
        )
        await booking_service.update_status(db_session, admin_actor, created.value.id, status)

    result = await booking_service.stats(db_session, admin_actor)

    stats = result.value
    assert stats.total_bookings == 4
    assert stats.pending_bookings == 1
    assert stats.confirmed_bookings == 1
    assert stats.cancelled_bookings == 1
    assert stats.completed_bookings == 1
    assert stats.total_revenue == 350
    assert len(stats.recent_bookings) == 4


@pytest.mark.asyncio
async def test_stats_recent_bookings_capped(db_session, user_actor, admin_actor, test_hotel):
    for _ in range(booking_service.RECENT_BOOKINGS_LIMIT + 2):
        await booking_service.create_booking(db_session, user_actor, _create_data(test_hotel.id))

    stats = (await booking_service.stats(db_session, admin_actor)).value

    assert stats.total_bookings == booking_service.RECENT_BOOKINGS_LIMIT + 2
    assert len(stats.recent_bookings) == booking_service.RECENT_BOOKINGS_LIMIT
    ids = [b.id for b in stats.recent_bookings]
    assert ids == sorted(ids, reverse=True)
