"""
Booking lifecycle service.

Creates bookings, enforces who may read, cancel or re-status them, and builds
the listing and statistics views.

STATUS LIFECYCLE
================

    pending ──(admin update_status)──> any of pending/confirmed/cancelled/completed
    pending, confirmed ──(owner or admin cancel)──> cancelled

  - `pending` is the only initial state.
  - `cancel` refuses cancelled and completed bookings.
  - `update_status` only checks that the target is a known status. Moving a
    cancelled booking back to confirmed is allowed.

Every operation receives the caller as an explicit Actor and returns a
Result instead of raising; the HTTP layer maps the error kind to a status
code. Concurrent writes to one booking are last-write-wins.
"""

from typing import Iterable, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel_booking.core.logging import get_logger
from hotel_booking.core.security import Actor
from hotel_booking.models.booking import Booking, BookingStatus, RoomType, BOOKING_STATUSES
from hotel_booking.models.hotel import Hotel
from hotel_booking.schemas.booking import (
    BookingCreate,
    BookingResponse,
    BookingStats,
    HotelSummary,
    UserSummary,
)
from hotel_booking.services import booking_policy
from hotel_booking.services.results import Result, bad_request, forbidden, not_found

logger = get_logger(__name__)

RECENT_BOOKINGS_LIMIT = 5

ROOM_TYPE_MULTIPLIERS = {
    RoomType.STANDARD: 1.0,
    RoomType.DELUXE: 1.5,
    RoomType.SUITE: 2.0,
}

# Hotel fields embedded in each view
LIST_HOTEL_FIELDS = ("location", "image")
USER_LIST_HOTEL_FIELDS = ("location", "image", "rating")
DETAIL_HOTEL_FIELDS = ("location", "image", "price")
STATS_HOTEL_FIELDS = ()


def quote_price(nightly_price: float, room_type: RoomType, nights: int) -> float:
    """
    Price of a stay as the booking form computes it: the nightly rate scaled
    by the room type, for at least one night.
    """
    return nightly_price * ROOM_TYPE_MULTIPLIERS[RoomType(room_type)] * max(1, nights)


def _user_summary(booking: Booking) -> UserSummary:
    return UserSummary(id=booking.user.id, name=booking.user.name, email=booking.user.email)


def _hotel_summary(booking: Booking, fields: Iterable[str]) -> HotelSummary:
    hotel = booking.hotel
    extra = {field: getattr(hotel, field) for field in fields}
    return HotelSummary(id=hotel.id, name=hotel.name, **extra)


def to_view(
    booking: Booking,
    hotel_fields: Iterable[str] = LIST_HOTEL_FIELDS,
    include_user: bool = True,
) -> BookingResponse:
    """Booking plus denormalized user/hotel summaries; only set fields are serialized."""
    view = dict(
        id=booking.id,
        user_id=booking.user_id,
        hotel_id=booking.hotel_id,
        hotel=_hotel_summary(booking, hotel_fields),
        check_in=booking.check_in,
        check_out=booking.check_out,
        guests=booking.guests,
        room_type=booking.room_type,
        price=booking.price,
        status=booking.status,
        special_requests=booking.special_requests,
        created_at=booking.created_at,
    )
    if include_user:
        view["user"] = _user_summary(booking)
    return BookingResponse(**view)


def _with_summaries(query):
    return query.options(
        selectinload(Booking.user),
        selectinload(Booking.hotel),
    ).execution_options(populate_existing=True)


def _newest_first(query):
    return query.order_by(Booking.created_at.desc(), Booking.id.desc())


async def _load_booking(db: AsyncSession, booking_id: int) -> Optional[Booking]:
    result = await db.execute(_with_summaries(select(Booking).where(Booking.id == booking_id)))
    return result.scalar_one_or_none()


async def create_booking(
    db: AsyncSession,
    actor: Actor,
    data: BookingCreate,
) -> Result[BookingResponse]:
    """
    Create a pending booking for the actor.
    The supplied price is stored as-is and logged next to the server's quote;
    the hotel must exist.
    """
    nightly = await db.execute(select(Hotel.price).where(Hotel.id == data.hotel_id))
    nightly_price = nightly.scalar_one_or_none()
    if nightly_price is None:
        logger.warning("booking_rejected", reason="hotel_not_found", hotel_id=data.hotel_id)
        return not_found("Hotel not found")

    booking = Booking(
        user_id=actor.id,
        hotel_id=data.hotel_id,
        check_in=data.check_in,
        check_out=data.check_out,
        guests=data.guests,
        room_type=RoomType(data.room_type).value,
        price=data.price,
        special_requests=data.special_requests,
        status=BookingStatus.PENDING.value,
    )
    db.add(booking)
    await db.flush()

    booking = await _load_booking(db, booking.id)
    logger.info(
        "booking_created",
        booking_id=booking.id,
        user_id=actor.id,
        hotel_id=booking.hotel_id,
        room_type=booking.room_type,
        nights=data.nights,
        price=booking.price,
        quoted_price=quote_price(nightly_price, data.room_type, data.nights),
    )
    return Result.success(to_view(booking))


async def list_all(db: AsyncSession, actor: Actor) -> Result[list[BookingResponse]]:
    """All bookings, newest first. Admin only."""
    error = booking_policy.require_admin(actor, "list all bookings")
    if error:
        logger.warning(
            "booking_access_denied", action="list_all", user_id=actor.id, role=actor.role
        )
        return Result.from_error(error)

    result = await db.execute(_newest_first(_with_summaries(select(Booking))))
    bookings = result.scalars().all()
    return Result.success([to_view(b) for b in bookings])


async def list_for_user(db: AsyncSession, actor: Actor) -> Result[list[BookingResponse]]:
    """The actor's own bookings, newest first."""
    result = await db.execute(
        _newest_first(_with_summaries(select(Booking).where(Booking.user_id == actor.id)))
    )
    bookings = result.scalars().all()
    return Result.success(
        [to_view(b, hotel_fields=USER_LIST_HOTEL_FIELDS, include_user=False) for b in bookings]
    )


async def get_by_id(db: AsyncSession, actor: Actor, booking_id: int) -> Result[BookingResponse]:
    booking = await _load_booking(db, booking_id)
    if booking is None:
        return not_found("Booking not found")

    if not booking_policy.can_view(actor, booking):
        logger.warning(
            "booking_access_denied",
            action="read",
            booking_id=booking_id,
            user_id=actor.id,
            role=actor.role,
        )
        return forbidden("Not authorized to access this booking")

    return Result.success(to_view(booking, hotel_fields=DETAIL_HOTEL_FIELDS))


async def update_status(
    db: AsyncSession,
    actor: Actor,
    booking_id: int,
    new_status: str,
) -> Result[BookingResponse]:
    """
    Overwrite a booking's status. Admin only.
    Any known status may follow any other.
    """
    error = booking_policy.require_admin(actor, "update booking status")
    if error:
        logger.warning(
            "booking_access_denied", action="update_status", user_id=actor.id, role=actor.role
        )
        return Result.from_error(error)

    if not booking_policy.is_valid_status(new_status):
        return bad_request("Invalid status")

    booking = await _load_booking(db, booking_id)
    if booking is None:
        return not_found("Booking not found")

    previous = booking.status
    booking.status = new_status
    await db.flush()

    logger.info(
        "booking_status_updated",
        booking_id=booking.id,
        previous_status=previous,
        status=new_status,
        admin_id=actor.id,
    )
    return Result.success(to_view(booking))


async def cancel(db: AsyncSession, actor: Actor, booking_id: int) -> Result[Booking]:
    """Cancel a pending or confirmed booking as its owner or an admin."""
    booking = await _load_booking(db, booking_id)
    if booking is None:
        return not_found("Booking not found")

    if not booking_policy.can_cancel(actor, booking):
        logger.warning(
            "booking_access_denied",
            action="cancel",
            booking_id=booking_id,
            user_id=actor.id,
            role=actor.role,
        )
        return forbidden("Not authorized to cancel this booking")

    error = booking_policy.check_cancellable(booking)
    if error:
        logger.info("booking_cancel_refused", booking_id=booking_id, status=booking.status)
        return Result.from_error(error)

    booking.status = BookingStatus.CANCELLED.value
    await db.flush()

    logger.info(
        "booking_cancelled",
        booking_id=booking.id,
        user_id=actor.id,
        by_admin=actor.is_admin and not booking_policy.is_owner(actor, booking),
    )
    return Result.success(booking)


async def stats(db: AsyncSession, actor: Actor) -> Result[BookingStats]:
    """Per-status counts, revenue over confirmed+completed, and the latest bookings."""
    error = booking_policy.require_admin(actor, "view booking statistics")
    if error:
        logger.warning(
            "booking_access_denied", action="stats", user_id=actor.id, role=actor.role
        )
        return Result.from_error(error)

    rows = await db.execute(select(Booking.status, func.count(Booking.id)).group_by(Booking.status))
    counts = {status: 0 for status in BOOKING_STATUSES}
    counts.update({status: count for status, count in rows.all()})

    revenue = await db.execute(
        select(func.coalesce(func.sum(Booking.price), 0)).where(
            Booking.status.in_(booking_policy.REVENUE_STATUSES)
        )
    )

    recent = await db.execute(
        _newest_first(_with_summaries(select(Booking))).limit(RECENT_BOOKINGS_LIMIT)
    )

    return Result.success(
        BookingStats(
            total_bookings=sum(counts.values()),
            pending_bookings=counts[BookingStatus.PENDING.value],
            confirmed_bookings=counts[BookingStatus.CONFIRMED.value],
            cancelled_bookings=counts[BookingStatus.CANCELLED.value],
            completed_bookings=counts[BookingStatus.COMPLETED.value],
            total_revenue=float(revenue.scalar_one()),
            recent_bookings=[
                to_view(b, hotel_fields=STATS_HOTEL_FIELDS) for b in recent.scalars().all()
            ],
        )
    )
