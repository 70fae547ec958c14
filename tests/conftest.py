"""
Pytest fixtures for test database, client, and authentication.

Each test gets a fresh in-memory SQLite database (aiosqlite + StaticPool so
every session shares the one connection); tables are created before and
dropped after the test. Redis is disabled so the catalog cache is a no-op.
"""

import os

os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import date, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from hotel_booking.main import app
from hotel_booking.db.base import Base
from hotel_booking.db.session import get_db
from hotel_booking.core.security import Actor, hash_password, token_for_user
from hotel_booking.models.user import User
from hotel_booking.models.hotel import Hotel, DEFAULT_POLICIES
from hotel_booking.models.booking import Booking, BookingStatus

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "testpassword123"


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _add_user(db_session: AsyncSession, name: str, email: str, is_admin: bool = False) -> User:
    user = User(
        name=name,
        email=email,
        hashed_password=hash_password(TEST_PASSWORD),
        is_admin=is_admin,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    return await _add_user(db_session, "Test User", "test@example.com")


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await _add_user(db_session, "Other User", "other@example.com")


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await _add_user(db_session, "Admin", "admin@example.com", is_admin=True)


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict:
    return {"Authorization": f"Bearer {token_for_user(test_user)}"}


@pytest_asyncio.fixture
async def other_headers(other_user: User) -> dict:
    return {"Authorization": f"Bearer {token_for_user(other_user)}"}


@pytest_asyncio.fixture
async def admin_headers(admin_user: User) -> dict:
    return {"Authorization": f"Bearer {token_for_user(admin_user)}"}


@pytest_asyncio.fixture
async def user_actor(test_user: User) -> Actor:
    return Actor.from_user(test_user)


@pytest_asyncio.fixture
async def other_actor(other_user: User) -> Actor:
    return Actor.from_user(other_user)


@pytest_asyncio.fixture
async def admin_actor(admin_user: User) -> Actor:
    return Actor.from_user(admin_user)


@pytest_asyncio.fixture
async def test_hotel(db_session: AsyncSession) -> Hotel:
    hotel = Hotel(
        name="Seaside Resort",
        location="Goa, India",
        description="Beachfront rooms",
        price=200,
        rating=4.5,
        image="https://img.example.com/seaside.jpg",
        images=["https://img.example.com/seaside-1.jpg"],
        amenities=["wifi", "pool", "spa"],
        policies=dict(DEFAULT_POLICIES),
    )
    db_session.add(hotel)
    await db_session.commit()
    await db_session.refresh(hotel)
    return hotel


@pytest_asyncio.fixture
async def mountain_hotel(db_session: AsyncSession) -> Hotel:
    hotel = Hotel(
        name="Alpine Lodge",
        location="Manali",
        price=80,
        rating=3,
        image="https://img.example.com/alpine.jpg",
        images=[],
        amenities=["wifi", "fireplace"],
        policies=dict(DEFAULT_POLICIES),
    )
    db_session.add(hotel)
    await db_session.commit()
    await db_session.refresh(hotel)
    return hotel


@pytest.fixture
def booking_payload():
    """Builds a valid POST /bookings body: deluxe, 2 guests, 2 nights, price 300."""

    def build(hotel_id: int, **overrides) -> dict:
        check_in = date.today() + timedelta(days=10)
        payload = {
            "hotel": hotel_id,
            "checkIn": check_in.isoformat(),
            "checkOut": (check_in + timedelta(days=2)).isoformat(),
            "guests": 2,
            "roomType": "deluxe",
            "price": 300,
            "specialRequests": "Late check-in",
        }
        payload.update(overrides)
        return payload

    return build


@pytest_asyncio.fixture
async def test_booking(db_session: AsyncSession, test_user: User, test_hotel: Hotel) -> Booking:
    """A pending booking owned by test_user."""
    check_in = date.today() + timedelta(days=5)
    booking = Booking(
        user_id=test_user.id,
        hotel_id=test_hotel.id,
        check_in=check_in,
        check_out=check_in + timedelta(days=3),
        guests=2,
        room_type="standard",
        price=600,
        status=BookingStatus.PENDING.value,
    )
    db_session.add(booking)
    await db_session.commit()
    await db_session.refresh(booking)
    return booking
