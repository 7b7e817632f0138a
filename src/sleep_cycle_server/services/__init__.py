"""Application services."""

from sleep_cycle_server.services.alarms import AlarmScheduler
from sleep_cycle_server.services.recommendations import (
    RecommendationResult,
    RecommendationService,
)

__all__ = [
    "AlarmScheduler",
    "RecommendationResult",
    "RecommendationService",
]
