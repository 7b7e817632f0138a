"""Pydantic schemas for recommendation responses and display options."""

from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel, Field

from sleep_cycle_server.domain.engine import RecommendationMode, SleepRecommendation
from sleep_cycle_server.schemas.profile import DerivedProfileOut


class RecommendationOut(BaseModel):
    """A scored candidate sleep period."""

    mode: RecommendationMode
    cycles: int = Field(description="Number of sleep cycles")
    sleep_date: datetime | None = Field(description="Bedtime")
    wake_date: datetime | None = Field(description="Wake time")
    total_sleep_minutes: int = Field(description="Time asleep (minutes)")
    tib_minutes: float = Field(description="Time in bed, including latency (minutes)")
    efficiency: float = Field(description="Sleep efficiency used")
    latency_minutes: int = Field(description="Sleep latency used (minutes)")
    score: float = Field(description="Recommendation score")
    window_start: datetime | None = Field(description="Start of the tolerance window")
    window_end: datetime | None = Field(description="End of the tolerance window")
    is_recommended: bool = Field(description="True for the best-scoring candidate(s)")

    @classmethod
    def from_domain(cls, rec: SleepRecommendation) -> "RecommendationOut":
        """Build from a domain recommendation."""
        return cls(
            mode=rec.mode,
            cycles=rec.cycles,
            sleep_date=rec.sleep_date,
            wake_date=rec.wake_date,
            total_sleep_minutes=rec.total_sleep_minutes,
            tib_minutes=rec.tib_minutes,
            efficiency=rec.efficiency,
            latency_minutes=rec.latency_minutes,
            score=rec.score,
            window_start=rec.window_start,
            window_end=rec.window_end,
            is_recommended=rec.is_recommended,
        )


class WakeTimeOption(BaseModel):
    """Display option for going to bed now."""

    cycles: int
    wake_date: datetime | None
    total_minutes: int
    tib_minutes: float
    efficiency: float
    is_recommended: bool
    window_start: datetime | None
    window_end: datetime | None


class SleepTimeOption(BaseModel):
    """Display option for a fixed wake time."""

    cycles: int
    sleep_date: datetime | None
    total_minutes: int
    tib_minutes: float
    efficiency: float
    is_recommended: bool
    window_start: datetime | None
    window_end: datetime | None


class RecommendationsResponse(BaseModel):
    """Ranked recommendations for one calculation."""

    user_id: str
    mode: RecommendationMode
    anchor: datetime = Field(description="Fixed instant: bedtime or wake time")
    derived: DerivedProfileOut
    recommendations: list[RecommendationOut]


def get_wake_times_from_now(recs: Sequence[SleepRecommendation]) -> list[WakeTimeOption]:
    """Project ranked sleep-now recommendations to wake time options."""
    return [
        WakeTimeOption(
            cycles=r.cycles,
            wake_date=r.wake_date,
            total_minutes=r.total_sleep_minutes,
            tib_minutes=r.tib_minutes,
            efficiency=r.efficiency,
            is_recommended=r.is_recommended,
            window_start=r.window_start,
            window_end=r.window_end,
        )
        for r in recs
    ]


def get_sleep_times_for_wake_date(recs: Sequence[SleepRecommendation]) -> list[SleepTimeOption]:
    """Project ranked wake-at recommendations to bedtime options."""
    return [
        SleepTimeOption(
            cycles=r.cycles,
            sleep_date=r.sleep_date,
            total_minutes=r.total_sleep_minutes,
            tib_minutes=r.tib_minutes,
            efficiency=r.efficiency,
            is_recommended=r.is_recommended,
            window_start=r.window_start,
            window_end=r.window_end,
        )
        for r in recs
    ]
