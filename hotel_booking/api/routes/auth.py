"""
Authentication endpoints: user and admin registration and login.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.db.session import get_db
from hotel_booking.schemas.user import UserCreate, AdminCreate, UserLogin, UserResponse, AuthResponse
from hotel_booking.services.auth_service import register_user, register_admin, authenticate_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _auth_response(user, token: str) -> AuthResponse:
    return AuthResponse(access_token=token, user=UserResponse.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: AsyncSession = Depends(get_db)):
    """Register a new user account and receive an access token."""
    user, token = await register_user(db, user_data)
    return _auth_response(user, token)


@router.post("/admin/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register_admin_endpoint(admin_data: AdminCreate, db: AsyncSession = Depends(get_db)):
    """Register an admin account. Requires the admin registration code."""
    user, token = await register_admin(db, admin_data)
    return _auth_response(user, token)


@router.post("/login", response_model=AuthResponse)
async def login(login_data: UserLogin, db: AsyncSession = Depends(get_db)):
    """Authenticate and receive a JWT access token."""
    user, token = await authenticate_user(db, login_data)
    return _auth_response(user, token)


@router.post("/admin/login", response_model=AuthResponse)
async def admin_login(login_data: UserLogin, db: AsyncSession = Depends(get_db)):
    """Authenticate an admin account."""
    user, token = await authenticate_user(db, login_data, admin_only=True)
    return _auth_response(user, token)
