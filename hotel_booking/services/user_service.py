"""
User profile operations.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from hotel_booking.models.user import User
from hotel_booking.schemas.user import UserUpdate
from hotel_booking.core.security import hash_password
from hotel_booking.core.logging import get_logger

logger = get_logger(__name__)


async def update_profile(db: AsyncSession, user: User, changes: UserUpdate) -> User:
    """Apply a partial profile update. Fields left out are kept."""
    if changes.email and changes.email != user.email:
        taken = await db.execute(
            select(User.id).where(User.email == changes.email, User.id != user.id)
        )
        if taken.scalar_one_or_none() is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already registered",
            )
        user.email = changes.email

    if changes.name:
        user.name = changes.name
    if changes.password:
        user.hashed_password = hash_password(changes.password)

    await db.flush()
    await db.refresh(user)

    logger.info(
        "profile_updated",
        user_id=user.id,
        fields=sorted(changes.model_dump(exclude_none=True).keys()),
    )
    return user


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.created_at.desc(), User.id.desc()))
    return list(result.scalars().all())
