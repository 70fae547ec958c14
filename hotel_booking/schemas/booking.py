"""
Pydantic schemas for booking-related request/response validation.

JSON field names are camelCase (the SPA's contract); snake_case is accepted
on input too.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from hotel_booking.models.booking import RoomType


class BookingCreate(BaseModel):
    hotel_id: int = Field(..., alias="hotel")
    check_in: date = Field(..., alias="checkIn")
    check_out: date = Field(..., alias="checkOut")
    guests: int = Field(..., ge=1)
    room_type: RoomType = Field(RoomType.STANDARD, alias="roomType")
    price: float = Field(..., ge=0)
    special_requests: Optional[str] = Field(None, alias="specialRequests", max_length=1000)

    model_config = {"extra": "forbid", "populate_by_name": True}

    @model_validator(mode="after")
    def check_out_after_check_in(self) -> "BookingCreate":
        if self.check_out <= self.check_in:
            raise ValueError("checkOut must be after checkIn")
        return self

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days


class BookingStatusUpdate(BaseModel):
    # Plain str: unknown values are a 400 from the booking service, not a 422
    status: str

    model_config = {"extra": "forbid"}


class UserSummary(BaseModel):
    id: int
    name: str
    email: str


class HotelSummary(BaseModel):
    id: int
    name: str
    location: Optional[str] = None
    image: Optional[str] = None
    rating: Optional[float] = None
    price: Optional[float] = None


class BookingResponse(BaseModel):
    id: int
    user_id: int = Field(..., alias="userId")
    hotel_id: int = Field(..., alias="hotelId")
    user: Optional[UserSummary] = None
    hotel: Optional[HotelSummary] = None
    check_in: date = Field(..., alias="checkIn")
    check_out: date = Field(..., alias="checkOut")
    guests: int
    room_type: str = Field(..., alias="roomType")
    price: float
    status: str
    special_requests: Optional[str] = Field(None, alias="specialRequests")
    created_at: datetime = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}


class BookingCancelResponse(BaseModel):
    message: str
    booking_id: int = Field(..., alias="bookingId")
    status: str

    model_config = {"populate_by_name": True}


class BookingStats(BaseModel):
    total_bookings: int = Field(..., alias="totalBookings")
    pending_bookings: int = Field(..., alias="pendingBookings")
    confirmed_bookings: int = Field(..., alias="confirmedBookings")
    cancelled_bookings: int = Field(..., alias="cancelledBookings")
    completed_bookings: int = Field(..., alias="completedBookings")
    total_revenue: float = Field(..., alias="totalRevenue")
    recent_bookings: list[BookingResponse] = Field(..., alias="recentBookings")

    model_config = {"populate_by_name": True}
