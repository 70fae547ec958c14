"""
Pydantic schemas for the hotel catalog.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class HotelPolicies(BaseModel):
    check_in: str = Field("2:00 PM", alias="checkIn")
    check_out: str = Field("12:00 PM", alias="checkOut")
    cancellation: str = "Free cancellation up to 24 hours before check-in"
    pets: str = "Pets not allowed"
    children: str = "Children of all ages are welcome"

    model_config = {"populate_by_name": True, "extra": "forbid"}


class HotelCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    price: float = Field(..., ge=0)
    rating: float = Field(4, ge=1, le=5)
    image: str = Field(..., min_length=1, max_length=1024)
    images: list[str] = Field(default_factory=list)
    amenities: list[str] = Field(default_factory=list)
    policies: HotelPolicies = Field(default_factory=HotelPolicies)

    model_config = {"extra": "forbid", "str_strip_whitespace": True}


class HotelUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    price: Optional[float] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=1, le=5)
    image: Optional[str] = Field(None, min_length=1, max_length=1024)
    images: Optional[list[str]] = None
    amenities: Optional[list[str]] = None
    policies: Optional[HotelPolicies] = None

    model_config = {"extra": "forbid", "str_strip_whitespace": True}


class HotelFilter(BaseModel):
    """Query filters for the catalog listing; also the cache key material."""

    location: Optional[str] = None
    price_min: Optional[float] = Field(None, ge=0)
    price_max: Optional[float] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=1, le=5)
    amenities: list[str] = Field(default_factory=list)


class HotelResponse(BaseModel):
    id: int
    name: str
    location: str
    description: Optional[str]
    price: float
    rating: float
    image: str
    images: list[str]
    amenities: list[str]
    policies: HotelPolicies
    created_at: datetime = Field(..., alias="createdAt")

    model_config = {"from_attributes": True, "populate_by_name": True}


class HotelDeleteResponse(BaseModel):
    message: str
    hotel_id: int = Field(..., alias="hotelId")

    model_config = {"populate_by_name": True}
