"""Sleep/wake recommendation engine.

Given derived sleep parameters and an anchor instant, produce one scored
recommendation per candidate cycle count and mark the best one(s).

Modes:
    sleepNow: the anchor is the bedtime, wake times are computed forward.
    wakeAt: the anchor is the wake time, bedtimes are computed backward.

Each recommendation carries a tolerance window centered on the computed
(non-anchor) endpoint, which callers use to schedule alarms.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum

from sleep_cycle_server.domain.profile import DerivedProfile, SleepProfile, build_derived_profile

DEFAULT_CYCLES: tuple[int, ...] = (3, 4, 5, 6)
WINDOW_MINUTES = 15
# Upper bound on cycle counts accepted from API callers
MAX_CYCLES = 20

# Ideal total sleep band (hours, inclusive)
IDEAL_MIN_HOURS = 7
IDEAL_MAX_HOURS = 9
SHORT_SLEEP_HOURS = 6


class RecommendationMode(str, Enum):
    """Which endpoint of the sleep period is fixed."""

    SLEEP_NOW = "sleepNow"
    WAKE_AT = "wakeAt"


@dataclass(frozen=True)
class SleepRecommendation:
    """A single candidate sleep period.

    Timestamps are None only when the time in bed is not representable
    (non-finite or out of datetime range), which happens for degenerate
    efficiency values.
    """

    mode: RecommendationMode
    cycles: int
    sleep_date: datetime | None
    wake_date: datetime | None
    total_sleep_minutes: int
    tib_minutes: float
    efficiency: float
    latency_minutes: int
    score: float
    window_start: datetime | None
    window_end: datetime | None
    is_recommended: bool = False

    @property
    def window_midpoint(self) -> datetime | None:
        """Center of the tolerance window."""
        if self.window_start is None or self.window_end is None:
            return None
        return self.window_start + (self.window_end - self.window_start) / 2


def _divide(numerator: float, denominator: float) -> float:
    """Float division with IEEE-754 semantics for a zero denominator."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _shift(date: datetime | None, minutes: float) -> datetime | None:
    if date is None or not math.isfinite(minutes):
        return None
    try:
        return date + timedelta(minutes=minutes)
    except OverflowError:
        return None


def compute_score(total_sleep_minutes: float, efficiency: float) -> float:
    """Score a candidate by total sleep duration and sleep efficiency.

    +20 inside the 7-9 hour band, -10 below 6 hours, plus a linear
    efficiency term centered at 0.8.
    """
    hours = total_sleep_minutes / 60
    score = 0.0

    if IDEAL_MIN_HOURS <= hours <= IDEAL_MAX_HOURS:
        score += 20
    elif hours < SHORT_SLEEP_HOURS:
        score -= 10

    score += (efficiency - 0.8) * 50

    return score


def make_window(
    center: datetime | None, window_minutes: float = WINDOW_MINUTES
) -> tuple[datetime | None, datetime | None]:
    """Return (start, end) spanning window_minutes either side of center."""
    return _shift(center, -window_minutes), _shift(center, window_minutes)


def build_recommendations(
    derived: DerivedProfile,
    anchor: datetime,
    mode: RecommendationMode,
    cycles_list: Sequence[int] = DEFAULT_CYCLES,
) -> list[SleepRecommendation]:
    """Build one unranked recommendation per candidate cycle count.

    Args:
        derived: Derived sleep parameters
        anchor: Bedtime (sleepNow) or wake time (wakeAt)
        mode: Which endpoint the anchor fixes
        cycles_list: Candidate cycle counts, in output order

    Returns:
        Recommendations with is_recommended left False
    """
    mode = RecommendationMode(mode)
    recommendations = []

    for cycles in cycles_list:
        total_sleep_minutes = cycles * derived.adjusted_cycle_minutes
        tib_minutes = (
            _divide(total_sleep_minutes, derived.sleep_efficiency) + derived.latency_minutes
        )

        if mode == RecommendationMode.SLEEP_NOW:
            sleep_date: datetime | None = anchor
            wake_date = _shift(anchor, tib_minutes)
            window_start, window_end = make_window(wake_date)
        else:
            wake_date = anchor
            sleep_date = _shift(anchor, -tib_minutes)
            window_start, window_end = make_window(sleep_date)

        recommendations.append(
            SleepRecommendation(
                mode=mode,
                cycles=cycles,
                sleep_date=sleep_date,
                wake_date=wake_date,
                total_sleep_minutes=total_sleep_minutes,
                tib_minutes=tib_minutes,
                efficiency=derived.sleep_efficiency,
                latency_minutes=derived.latency_minutes,
                score=compute_score(total_sleep_minutes, derived.sleep_efficiency),
                window_start=window_start,
                window_end=window_end,
            )
        )

    return recommendations


def rank_recommendations(
    recommendations: Sequence[SleepRecommendation],
) -> list[SleepRecommendation]:
    """Mark every recommendation whose score equals the best score.

    Scores are compared with exact float equality, so ties are all marked.
    """
    if not recommendations:
        return []

    best_score = max(r.score for r in recommendations)
    return [replace(r, is_recommended=r.score == best_score) for r in recommendations]


def compute_sleep_now_recommendations(
    profile: SleepProfile,
    now: datetime,
    cycles_list: Sequence[int] = DEFAULT_CYCLES,
) -> list[SleepRecommendation]:
    """Wake-time recommendations for going to bed at ``now``."""
    derived = build_derived_profile(profile)
    return rank_recommendations(
        build_recommendations(derived, now, RecommendationMode.SLEEP_NOW, cycles_list)
    )


def compute_wake_at_recommendations(
    profile: SleepProfile,
    wake_date: datetime,
    cycles_list: Sequence[int] = DEFAULT_CYCLES,
) -> list[SleepRecommendation]:
    """Bedtime recommendations for waking up at ``wake_date``."""
    derived = build_derived_profile(profile)
    return rank_recommendations(
        build_recommendations(derived, wake_date, RecommendationMode.WAKE_AT, cycles_list)
    )
