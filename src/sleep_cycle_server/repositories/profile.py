"""Profile storage.

The recommendation layer only depends on the ``ProfileRepository``
protocol; callers choose the backing implementation and pass it in.
"""

from typing import Protocol

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sleep_cycle_server.domain.profile import Gender, SleepProfile
from sleep_cycle_server.models.profile import SleepProfileRecord

logger = structlog.get_logger()


class ProfileRepository(Protocol):
    """Read and write a user's sleep profile and onboarding flag."""

    async def get(self, user_id: str) -> SleepProfile | None: ...

    async def save(self, user_id: str, profile: SleepProfile) -> None: ...

    async def has_seen_onboarding(self, user_id: str) -> bool: ...

    async def mark_onboarding_seen(self, user_id: str) -> None: ...


class SQLAlchemyProfileRepository:
    """Profile repository backed by the ``sleep_profiles`` table."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository.

        Args:
            session: Database session
        """
        self.session = session
        self.logger = logger.bind(repository="profile")

    async def _get_record(self, user_id: str) -> SleepProfileRecord | None:
        stmt = select(SleepProfileRecord).where(SleepProfileRecord.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, user_id: str) -> SleepProfile | None:
        """Load a user's profile.

        Args:
            user_id: User identifier

        Returns:
            Stored profile, or None if the user never saved one
        """
        record = await self._get_record(user_id)
        return record.to_profile() if record else None

    async def save(self, user_id: str, profile: SleepProfile) -> None:
        """Create or replace a user's profile.

        Args:
            user_id: User identifier
            profile: Validated profile to store
        """
        record = await self._get_record(user_id)
        if record is None:
            record = SleepProfileRecord(user_id=user_id)
            self.session.add(record)

        record.age = profile.age
        record.weight_kg = profile.weight_kg
        record.height_cm = profile.height_cm
        record.gender = Gender(profile.gender).value

        await self.session.commit()
        self.logger.info("Profile saved", user_id=user_id)

    async def has_seen_onboarding(self, user_id: str) -> bool:
        """Check whether the user has completed onboarding."""
        record = await self._get_record(user_id)
        return bool(record and record.has_seen_onboarding)

    async def mark_onboarding_seen(self, user_id: str) -> None:
        """Record that the user has completed onboarding.

        Users without a stored profile get a row holding only the flag;
        ``get`` keeps returning None for them until they save a profile.
        """
        record = await self._get_record(user_id)
        if record is None:
            record = SleepProfileRecord(user_id=user_id)
            self.session.add(record)

        record.has_seen_onboarding = True
        await self.session.commit()
        self.logger.info("Onboarding marked as seen", user_id=user_id)


class InMemoryProfileRepository:
    """Process-local profile repository for the CLI and tests."""

    def __init__(self) -> None:
        """Initialize an empty repository."""
        self._profiles: dict[str, SleepProfile] = {}
        self._onboarded: set[str] = set()

    async def get(self, user_id: str) -> SleepProfile | None:
        """Load a user's profile."""
        return self._profiles.get(user_id)

    async def save(self, user_id: str, profile: SleepProfile) -> None:
        """Create or replace a user's profile."""
        self._profiles[user_id] = profile

    async def has_seen_onboarding(self, user_id: str) -> bool:
        """Check whether the user has completed onboarding."""
        return user_id in self._onboarded

    async def mark_onboarding_seen(self, user_id: str) -> None:
        """Record that the user has completed onboarding."""
        self._onboarded.add(user_id)
