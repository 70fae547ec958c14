"""
User profile endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.db.session import get_db
from hotel_booking.models.user import User
from hotel_booking.schemas.user import UserResponse, UserUpdate
from hotel_booking.services.user_service import update_profile, list_users
from hotel_booking.core.security import Actor, get_current_user, require_admin

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserResponse)
async def read_current_user(user: User = Depends(get_current_user)):
    return user


@router.put("/profile", response_model=UserResponse)
async def update_profile_endpoint(
    changes: UserUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update name, email and/or password of the authenticated user."""
    return await update_profile(db, user, changes)


@router.get("", response_model=list[UserResponse])
async def list_users_endpoint(
    _: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """List all users. Admin only."""
    return await list_users(db)
