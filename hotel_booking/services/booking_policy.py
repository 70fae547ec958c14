"""
Authorization and status-transition rules for bookings.

Pure functions over an Actor and a Booking; the lifecycle service consults
them and turns a returned ServiceError into a failed Result.

    Operation        owner   other user   admin
    create           allow   n/a          allow
    read             allow   deny         allow
    list all         deny    deny         allow
    update status    deny    deny         allow
    cancel           allow   deny         allow
    stats            deny    deny         allow
"""

from typing import Optional

from hotel_booking.core.security import Actor
from hotel_booking.models.booking import Booking, BookingStatus, BOOKING_STATUSES
from hotel_booking.services.results import ErrorKind, ServiceError

# Statuses from which a cancel is still allowed
CANCELLABLE_STATUSES = frozenset({BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value})

# Refusal message for every status outside CANCELLABLE_STATUSES
CANCEL_REFUSALS = {
    BookingStatus.CANCELLED.value: "Booking is already cancelled",
    BookingStatus.COMPLETED.value: "Cannot cancel a completed booking",
}

# Statuses that count towards revenue
REVENUE_STATUSES = (BookingStatus.CONFIRMED.value, BookingStatus.COMPLETED.value)


def is_owner(actor: Actor, booking: Booking) -> bool:
    return booking.user_id == actor.id


def can_view(actor: Actor, booking: Booking) -> bool:
    return actor.is_admin or is_owner(actor, booking)


def can_cancel(actor: Actor, booking: Booking) -> bool:
    return actor.is_admin or is_owner(actor, booking)


def require_admin(actor: Actor, action: str) -> Optional[ServiceError]:
    if actor.is_admin:
        return None
    return ServiceError(ErrorKind.FORBIDDEN, f"Not authorized to {action}")


def is_valid_status(value: str) -> bool:
    return value in BOOKING_STATUSES


def check_cancellable(booking: Booking) -> Optional[ServiceError]:
    if booking.status in CANCELLABLE_STATUSES:
        return None
    return ServiceError(ErrorKind.BAD_REQUEST, CANCEL_REFUSALS[booking.status])
