"""
Booking lifecycle endpoints.

Each handler passes the authenticated Actor to the booking service and
unwraps the returned Result; role and ownership checks live in the service.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.api.errors import unwrap
from hotel_booking.db.session import get_db
from hotel_booking.schemas.booking import (
    BookingCreate,
    BookingResponse,
    BookingCancelResponse,
    BookingStatusUpdate,
    BookingStats,
)
from hotel_booking.services import booking_service
from hotel_booking.core.security import Actor, get_current_actor

router = APIRouter(prefix="/bookings", tags=["Bookings"])

# Views leave out summary fields they do not carry
VIEW_OPTIONS = {"response_model_exclude_unset": True}


@router.post(
    "", response_model=BookingResponse, status_code=status.HTTP_201_CREATED, **VIEW_OPTIONS
)
async def create_booking(
    booking_data: BookingCreate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    """Book a stay at a hotel. The booking starts out pending."""
    return await unwrap("create", booking_service.create_booking(db, actor, booking_data))


@router.get("", response_model=list[BookingResponse], **VIEW_OPTIONS)
async def list_all_bookings(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    """All bookings, newest first. Admin only."""
    return await unwrap("list_all", booking_service.list_all(db, actor))


@router.get("/user", response_model=list[BookingResponse], **VIEW_OPTIONS)
async def list_user_bookings(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    """Get all bookings for the authenticated user."""
    return await unwrap("list_for_user", booking_service.list_for_user(db, actor))


@router.get("/stats", response_model=BookingStats, **VIEW_OPTIONS)
async def booking_stats(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    """Counts per status, revenue and the latest bookings. Admin only."""
    return await unwrap("stats", booking_service.stats(db, actor))


@router.get("/{booking_id}", response_model=BookingResponse, **VIEW_OPTIONS)
async def get_booking(
    booking_id: int,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    return await unwrap("get", booking_service.get_by_id(db, actor, booking_id))


@router.put("/{booking_id}/status", response_model=BookingResponse, **VIEW_OPTIONS)
async def update_booking_status(
    booking_id: int,
    payload: BookingStatusUpdate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    """Set a booking's status. Admin only."""
    return await unwrap(
        "update_status", booking_service.update_status(db, actor, booking_id, payload.status)
    )


@router.put("/{booking_id}/cancel", response_model=BookingCancelResponse)
async def cancel_booking(
    booking_id: int,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    """Cancel a pending or confirmed booking. Owner or admin."""
    booking = await unwrap("cancel", booking_service.cancel(db, actor, booking_id))
    return BookingCancelResponse(
        message="Booking cancelled successfully",
        booking_id=booking.id,
        status=booking.status,
    )
