from hotel_booking.schemas.user import (
    UserCreate, AdminCreate, UserLogin, UserUpdate, UserResponse, Token, AuthResponse,
)
from hotel_booking.schemas.hotel import (
    HotelCreate, HotelUpdate, HotelFilter, HotelResponse, HotelPolicies, HotelDeleteResponse,
)
from hotel_booking.schemas.booking import (
    BookingCreate, BookingStatusUpdate, BookingResponse, BookingCancelResponse, BookingStats,
)

__all__ = [
    "UserCreate", "AdminCreate", "UserLogin", "UserUpdate", "UserResponse", "Token", "AuthResponse",
    "HotelCreate", "HotelUpdate", "HotelFilter", "HotelResponse", "HotelPolicies", "HotelDeleteResponse",
    "BookingCreate", "BookingStatusUpdate", "BookingResponse", "BookingCancelResponse", "BookingStats",
]
