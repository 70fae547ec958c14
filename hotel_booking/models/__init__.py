from hotel_booking.models.user import User
from hotel_booking.models.hotel import Hotel
from hotel_booking.models.booking import Booking, BookingStatus, RoomType

__all__ = ["User", "Hotel", "Booking", "BookingStatus", "RoomType"]
