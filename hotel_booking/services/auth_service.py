"""
Authentication service handling user/admin registration and login.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from hotel_booking.models.user import User
from hotel_booking.schemas.user import UserCreate, AdminCreate, UserLogin
from hotel_booking.core.config import get_settings
from hotel_booking.core.security import hash_password, verify_password, token_for_user
from hotel_booking.core.logging import get_logger

logger = get_logger(__name__)


async def _ensure_email_free(db: AsyncSession, email: str) -> None:
    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none():
        logger.warning("registration_failed", reason="email_exists", email=email)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )


async def _create_user(db: AsyncSession, user_data: UserCreate, is_admin: bool) -> User:
    await _ensure_email_free(db, user_data.email)

    user = User(
        name=user_data.name,
        email=user_data.email,
        hashed_password=hash_password(user_data.password),
        is_admin=is_admin,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)

    logger.info("user_registered", user_id=user.id, email=user.email, admin=is_admin)
    return user


async def register_user(db: AsyncSession, user_data: UserCreate) -> tuple[User, str]:
    """
    Register a new user with hashed password.
    Raises 409 if the email already exists.
    """
    user = await _create_user(db, user_data, is_admin=False)
    return user, token_for_user(user)


async def register_admin(db: AsyncSession, admin_data: AdminCreate) -> tuple[User, str]:
    """
    Register an admin account. Requires the configured admin registration code.
    """
    if admin_data.admin_code != get_settings().ADMIN_CODE:
        logger.warning("admin_registration_failed", reason="bad_admin_code", email=admin_data.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin registration code",
        )

    user = await _create_user(db, admin_data, is_admin=True)
    return user, token_for_user(user)


async def authenticate_user(
    db: AsyncSession,
    login_data: UserLogin,
    admin_only: bool = False,
) -> tuple[User, str]:
    """
    Authenticate user and return it with a JWT access token.
    Raises 401 if credentials are invalid (or, for admin login, the account
    is not an admin).
    """
    query = select(User).where(User.email == login_data.email)
    if admin_only:
        query = query.where(User.is_admin.is_(True))
    result = await db.execute(query)
    user = result.scalar_one_or_none()

    if not user or not verify_password(login_data.password, user.hashed_password):
        logger.warning("login_failed", email=login_data.email, admin=admin_only)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials" if admin_only else "Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated",
        )

    logger.info("user_logged_in", user_id=user.id, admin=user.is_admin)
    return user, token_for_user(user)
