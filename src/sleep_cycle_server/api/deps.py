"""Shared request validation and dependency providers."""

import re

from litestar.datastructures import State
from litestar.exceptions import ValidationException
from sqlalchemy.ext.asyncio import AsyncSession

from sleep_cycle_server.domain.engine import MAX_CYCLES
from sleep_cycle_server.repositories.profile import SQLAlchemyProfileRepository
from sleep_cycle_server.services.alarms import AlarmScheduler
from sleep_cycle_server.services.recommendations import RecommendationService

# Regex for valid user_id format (alphanumeric, underscores, hyphens)
USER_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


def validate_user_id(user_id: str) -> str:
    """Validate user_id format.

    Args:
        user_id: The user identifier to validate

    Returns:
        The validated user_id

    Raises:
        ValidationException: If user_id format is invalid
    """
    if not user_id or len(user_id) > 100:
        raise ValidationException("Invalid user_id: must be 1-100 characters")
    if not USER_ID_PATTERN.match(user_id):
        raise ValidationException("Invalid user_id: must be alphanumeric with _ or - only")
    return user_id


def validate_cycles(cycles: list[int] | None) -> list[int] | None:
    """Validate candidate cycle counts from the query string.

    Raises:
        ValidationException: If any cycle count is outside 1-MAX_CYCLES
    """
    if cycles and any(not 1 <= c <= MAX_CYCLES for c in cycles):
        raise ValidationException(
            f"Invalid cycles: every value must be between 1 and {MAX_CYCLES}"
        )
    return cycles


async def provide_profile_repository(session: AsyncSession) -> SQLAlchemyProfileRepository:
    """Profile repository bound to the request's database session."""
    return SQLAlchemyProfileRepository(session)


async def provide_recommendation_service(
    repository: SQLAlchemyProfileRepository,
) -> RecommendationService:
    """Recommendation service over the request's profile repository."""
    return RecommendationService(repository)


async def provide_alarm_scheduler(state: State) -> AlarmScheduler:
    """Alarm scheduler created during application startup."""
    scheduler: AlarmScheduler = state.alarm_scheduler
    return scheduler
