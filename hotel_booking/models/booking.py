"""
Booking model: a user's stay at a hotel.

Key design decisions:
- `price` is a snapshot taken at creation; it is never recomputed from the hotel
- Status field allows cancellation without deleting records
- Allowed status and room type values are also enforced by CHECK constraints
"""

import enum

from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    Date,
    Text,
    ForeignKey,
    CheckConstraint,
    Index,
)
from sqlalchemy.orm import relationship

from hotel_booking.db.base import Base, TimestampMixin


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class RoomType(str, enum.Enum):
    STANDARD = "standard"
    DELUXE = "deluxe"
    SUITE = "suite"


BOOKING_STATUSES = tuple(s.value for s in BookingStatus)
ROOM_TYPES = tuple(r.value for r in RoomType)


def _in_clause(values: tuple) -> str:
    return ", ".join(f"'{v}'" for v in values)


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id"), nullable=False, index=True)
    check_in = Column(Date, nullable=False)
    check_out = Column(Date, nullable=False)
    guests = Column(Integer, nullable=False, default=1)
    room_type = Column(String(20), nullable=False, default=RoomType.STANDARD.value)
    price = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value)
    special_requests = Column(Text, nullable=True)

    user = relationship("User", back_populates="bookings")
    hotel = relationship("Hotel", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("guests >= 1", name="check_booking_guests_positive"),
        CheckConstraint("price >= 0", name="check_booking_price_non_negative"),
        CheckConstraint(f"status IN ({_in_clause(BOOKING_STATUSES)})", name="check_booking_status"),
        CheckConstraint(f"room_type IN ({_in_clause(ROOM_TYPES)})", name="check_booking_room_type"),
        Index("ix_bookings_status", "status"),
        Index("ix_bookings_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, user={self.user_id}, hotel={self.hotel_id}, status={self.status})>"
