"""Pydantic schemas for API requests and responses."""

from sleep_cycle_server.schemas.alarms import AlarmRequest, ScheduledAlarm
from sleep_cycle_server.schemas.profile import (
    DerivedProfileOut,
    OnboardingStatus,
    ProfileResponse,
    SleepProfileIn,
)
from sleep_cycle_server.schemas.recommendations import (
    RecommendationOut,
    RecommendationsResponse,
    SleepTimeOption,
    WakeTimeOption,
)

__all__ = [
    "AlarmRequest",
    "DerivedProfileOut",
    "OnboardingStatus",
    "ProfileResponse",
    "RecommendationOut",
    "RecommendationsResponse",
    "ScheduledAlarm",
    "SleepProfileIn",
    "SleepTimeOption",
    "WakeTimeOption",
]
