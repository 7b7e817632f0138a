"""Pure sleep-cycle domain logic: profile derivation and recommendations."""

from sleep_cycle_server.domain.engine import (
    DEFAULT_CYCLES,
    MAX_CYCLES,
    RecommendationMode,
    SleepRecommendation,
    compute_score,
    compute_sleep_now_recommendations,
    compute_wake_at_recommendations,
)
from sleep_cycle_server.domain.profile import (
    DEFAULT_PROFILE,
    BMICategory,
    DerivedProfile,
    Gender,
    SleepProfile,
    build_derived_profile,
)

__all__ = [
    "DEFAULT_CYCLES",
    "DEFAULT_PROFILE",
    "MAX_CYCLES",
    "BMICategory",
    "DerivedProfile",
    "Gender",
    "RecommendationMode",
    "SleepProfile",
    "SleepRecommendation",
    "build_derived_profile",
    "compute_score",
    "compute_sleep_now_recommendations",
    "compute_wake_at_recommendations",
]
