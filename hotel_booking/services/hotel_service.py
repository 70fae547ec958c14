"""
Hotel catalog service handling CRUD and filtered listing.
"""

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from hotel_booking.models.booking import Booking
from hotel_booking.models.hotel import Hotel
from hotel_booking.schemas.hotel import HotelCreate, HotelUpdate, HotelFilter
from hotel_booking.core.logging import get_logger

logger = get_logger(__name__)


async def create_hotel(db: AsyncSession, hotel_data: HotelCreate) -> Hotel:
    hotel = Hotel(
        name=hotel_data.name,
        location=hotel_data.location,
        description=hotel_data.description,
        price=hotel_data.price,
        rating=hotel_data.rating,
        image=hotel_data.image,
        images=list(hotel_data.images),
        amenities=list(hotel_data.amenities),
        policies=hotel_data.policies.model_dump(by_alias=True),
    )
    db.add(hotel)
    await db.flush()
    await db.refresh(hotel)

    logger.info("hotel_created", hotel_id=hotel.id, name=hotel.name, location=hotel.location)
    return hotel


async def get_hotel(db: AsyncSession, hotel_id: int) -> Hotel:
    """Get a single hotel by ID."""
    result = await db.execute(select(Hotel).where(Hotel.id == hotel_id))
    hotel = result.scalar_one_or_none()

    if not hotel:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Hotel not found",
        )
    return hotel


async def list_hotels(db: AsyncSession, filters: HotelFilter) -> list[Hotel]:
    """
    List hotels matching every given filter.
    Location is a case-insensitive substring match; amenities must all be present.
    """
    query = select(Hotel)

    if filters.location:
        query = query.where(Hotel.location.ilike(f"%{filters.location.strip()}%"))
    if filters.price_min is not None:
        query = query.where(Hotel.price >= filters.price_min)
    if filters.price_max is not None:
        query = query.where(Hotel.price <= filters.price_max)
    if filters.rating is not None:
        query = query.where(Hotel.rating >= filters.rating)

    result = await db.execute(query.order_by(Hotel.created_at.desc(), Hotel.id.desc()))
    hotels = list(result.scalars().all())

    # JSON containment differs per backend, so amenities are matched here
    if filters.amenities:
        wanted = set(filters.amenities)
        hotels = [h for h in hotels if wanted.issubset(h.amenities or [])]

    return hotels


async def update_hotel(db: AsyncSession, hotel_id: int, changes: HotelUpdate) -> Hotel:
    """Apply a partial update; fields left out of the request are kept."""
    hotel = await get_hotel(db, hotel_id)

    updates = changes.model_dump(exclude_unset=True, by_alias=True)
    for field, value in updates.items():
        if value is None and field != "description":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{field} cannot be null",
            )
        setattr(hotel, field, value)

    await db.flush()
    await db.refresh(hotel)

    logger.info("hotel_updated", hotel_id=hotel.id, fields=sorted(updates.keys()))
    return hotel


async def delete_hotel(db: AsyncSession, hotel_id: int) -> None:
    """
    Delete a hotel. Refused while any booking references it, whatever the
    booking's status.
    """
    hotel = await get_hotel(db, hotel_id)

    count = await db.execute(select(func.count(Booking.id)).where(Booking.hotel_id == hotel_id))
    if count.scalar_one() > 0:
        logger.warning("hotel_delete_refused", hotel_id=hotel_id, reason="has_bookings")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete hotel with existing bookings",
        )

    await db.delete(hotel)
    await db.flush()
    logger.info("hotel_deleted", hotel_id=hotel_id)
