"""
Hotel catalog entry.

Gallery images, amenities and the policy block are stored as JSON columns;
they are always read and written as a whole with the hotel.
"""

from sqlalchemy import Column, Integer, String, Float, Text, JSON, CheckConstraint, Index
from sqlalchemy.orm import relationship

from hotel_booking.db.base import Base, TimestampMixin

DEFAULT_POLICIES = {
    "checkIn": "2:00 PM",
    "checkOut": "12:00 PM",
    "cancellation": "Free cancellation up to 24 hours before check-in",
    "pets": "Pets not allowed",
    "children": "Children of all ages are welcome",
}


class Hotel(Base, TimestampMixin):
    __tablename__ = "hotels"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    rating = Column(Float, nullable=False, default=4)
    image = Column(String(1024), nullable=False)
    images = Column(JSON, nullable=False, default=list)
    amenities = Column(JSON, nullable=False, default=list)
    policies = Column(JSON, nullable=False, default=lambda: dict(DEFAULT_POLICIES))

    bookings = relationship("Booking", back_populates="hotel", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="check_hotel_price_non_negative"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="check_hotel_rating_range"),
        Index("ix_hotels_price", "price"),
    )

    def __repr__(self) -> str:
        return f"<Hotel(id={self.id}, name={self.name}, location={self.location})>"
