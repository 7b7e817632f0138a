"""Recommendation service: load a user's profile and run the engine."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from sleep_cycle_server.core.config import settings
from sleep_cycle_server.domain.engine import (
    RecommendationMode,
    SleepRecommendation,
    build_recommendations,
    rank_recommendations,
)
from sleep_cycle_server.domain.profile import (
    DEFAULT_PROFILE,
    DerivedProfile,
    SleepProfile,
    build_derived_profile,
)
from sleep_cycle_server.repositories.profile import ProfileRepository

logger = structlog.get_logger()


@dataclass(frozen=True)
class RecommendationResult:
    """Output of one calculation."""

    user_id: str
    mode: RecommendationMode
    anchor: datetime
    profile: SleepProfile
    derived: DerivedProfile
    recommendations: list[SleepRecommendation]

    @property
    def recommended(self) -> list[SleepRecommendation]:
        """The best-scoring recommendation(s)."""
        return [r for r in self.recommendations if r.is_recommended]


class RecommendationService:
    """Compute sleep/wake recommendations for stored user profiles.

    Users without a saved profile are served the default profile.
    """

    def __init__(self, repository: ProfileRepository) -> None:
        """Initialize recommendation service.

        Args:
            repository: Profile storage
        """
        self.repository = repository
        self.logger = logger.bind(service="recommendations")

    async def get_profile(self, user_id: str) -> tuple[SleepProfile, bool]:
        """Load a user's profile, falling back to the default.

        Args:
            user_id: User identifier

        Returns:
            Tuple of (profile, is_default)
        """
        profile = await self.repository.get(user_id)
        if profile is None:
            return DEFAULT_PROFILE, True
        return profile, False

    async def sleep_now(
        self,
        user_id: str,
        now: datetime | None = None,
        cycles: Sequence[int] | None = None,
    ) -> RecommendationResult:
        """Wake times for a user going to bed now.

        Args:
            user_id: User identifier
            now: Bedtime (defaults to the current time)
            cycles: Candidate cycle counts (defaults to settings.sleep_now_cycles)

        Returns:
            Ranked recommendations
        """
        return await self.calculate(
            user_id,
            RecommendationMode.SLEEP_NOW,
            now or datetime.now(UTC),
            cycles or settings.sleep_now_cycles,
        )

    async def wake_at(
        self,
        user_id: str,
        wake_at: datetime,
        cycles: Sequence[int] | None = None,
    ) -> RecommendationResult:
        """Bedtimes for a user who must wake at ``wake_at``.

        Args:
            user_id: User identifier
            wake_at: Target wake time
            cycles: Candidate cycle counts (defaults to settings.wake_at_cycles)

        Returns:
            Ranked recommendations
        """
        return await self.calculate(
            user_id,
            RecommendationMode.WAKE_AT,
            wake_at,
            cycles or settings.wake_at_cycles,
        )

    async def calculate(
        self,
        user_id: str,
        mode: RecommendationMode,
        anchor: datetime,
        cycles: Sequence[int],
    ) -> RecommendationResult:
        """Run the engine for a user.

        Args:
            user_id: User identifier
            mode: Which endpoint the anchor fixes
            anchor: Bedtime or wake time
            cycles: Candidate cycle counts

        Returns:
            Ranked recommendations
        """
        profile, is_default = await self.get_profile(user_id)
        derived = build_derived_profile(profile)
        recommendations = rank_recommendations(
            build_recommendations(derived, anchor, mode, cycles)
        )

        self.logger.info(
            "Recommendations calculated",
            user_id=user_id,
            mode=RecommendationMode(mode).value,
            default_profile=is_default,
            candidates=len(recommendations),
            recommended_cycles=[r.cycles for r in recommendations if r.is_recommended],
        )

        return RecommendationResult(
            user_id=user_id,
            mode=RecommendationMode(mode),
            anchor=anchor,
            profile=profile,
            derived=derived,
            recommendations=recommendations,
        )
