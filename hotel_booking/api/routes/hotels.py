"""
Hotel catalog endpoints with Redis caching on the listing.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.db.session import get_db
from hotel_booking.schemas.hotel import (
    HotelCreate,
    HotelUpdate,
    HotelFilter,
    HotelResponse,
    HotelDeleteResponse,
)
from hotel_booking.services.hotel_service import (
    create_hotel,
    get_hotel,
    list_hotels,
    update_hotel,
    delete_hotel,
)
from hotel_booking.services.cache_service import (
    get_cached_hotels,
    set_cached_hotels,
    invalidate_hotel_cache,
)
from hotel_booking.core.security import Actor, require_admin
from hotel_booking.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/hotels", tags=["Hotels"])


def hotel_filters(
    location: Optional[str] = Query(None, max_length=255),
    price_min: Optional[float] = Query(None, alias="priceMin", ge=0),
    price_max: Optional[float] = Query(None, alias="priceMax", ge=0),
    rating: Optional[float] = Query(None, ge=1, le=5),
    amenities: Optional[list[str]] = Query(None),
) -> HotelFilter:
    return HotelFilter(
        location=location,
        price_min=price_min,
        price_max=price_max,
        rating=rating,
        amenities=amenities or [],
    )


@router.get("", response_model=list[HotelResponse])
async def list_hotels_endpoint(
    filters: HotelFilter = Depends(hotel_filters),
    db: AsyncSession = Depends(get_db),
):
    """
    List hotels, optionally filtered by location, price range, minimum rating
    and required amenities. Results are cached per filter set.
    """
    cached = await get_cached_hotels(filters)
    if cached is not None:
        logger.info("hotels_list_cache_hit", count=len(cached))
        return cached

    hotels = await list_hotels(db, filters)
    response_data = [
        HotelResponse.model_validate(h).model_dump(by_alias=True, mode="json") for h in hotels
    ]
    await set_cached_hotels(filters, response_data)
    return response_data


@router.get("/{hotel_id}", response_model=HotelResponse)
async def get_hotel_endpoint(hotel_id: int, db: AsyncSession = Depends(get_db)):
    return await get_hotel(db, hotel_id)


@router.post("", response_model=HotelResponse, status_code=status.HTTP_201_CREATED)
async def create_hotel_endpoint(
    hotel_data: HotelCreate,
    _: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Add a hotel to the catalog. Admin only."""
    hotel = await create_hotel(db, hotel_data)
    await invalidate_hotel_cache()
    return hotel


@router.put("/{hotel_id}", response_model=HotelResponse)
async def update_hotel_endpoint(
    hotel_id: int,
    changes: HotelUpdate,
    _: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Partially update a hotel. Admin only."""
    hotel = await update_hotel(db, hotel_id, changes)
    await invalidate_hotel_cache()
    return hotel


@router.delete("/{hotel_id}", response_model=HotelDeleteResponse)
async def delete_hotel_endpoint(
    hotel_id: int,
    _: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete a hotel that has no bookings. Admin only."""
    await delete_hotel(db, hotel_id)
    await invalidate_hotel_cache()
    return HotelDeleteResponse(message="Hotel deleted successfully", hotel_id=hotel_id)
