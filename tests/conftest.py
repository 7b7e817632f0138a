"""Shared test fixtures."""

import os
from collections.abc import AsyncIterator
from datetime import UTC, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Point the application at an in-memory database before it is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from sleep_cycle_server.domain.profile import Gender, SleepProfile  # noqa: E402
from sleep_cycle_server.models import Base  # noqa: E402


@pytest.fixture
async def async_engine():
    """Create async SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def async_session(async_engine) -> AsyncIterator[AsyncSession]:
    """Create async session for testing."""
    async_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest.fixture
def reference_profile() -> SleepProfile:
    """30 year old, 70 kg, 170 cm male (normal BMI)."""
    return SleepProfile(age=30, weight_kg=70.0, height_cm=170.0, gender=Gender.MALE)


@pytest.fixture
def overweight_profile() -> SleepProfile:
    """45 year old, 78 kg, 170 cm female (overweight BMI)."""
    return SleepProfile(age=45, weight_kg=78.0, height_cm=170.0, gender=Gender.FEMALE)


@pytest.fixture
def bedtime() -> datetime:
    """Fixed bedtime anchor."""
    return datetime(2026, 1, 20, 23, 0, tzinfo=UTC)


@pytest.fixture
def wake_time() -> datetime:
    """Fixed wake time anchor."""
    return datetime(2026, 1, 21, 7, 0, tzinfo=UTC)
