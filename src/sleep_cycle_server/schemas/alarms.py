"""Pydantic schemas for wake alarms."""

from datetime import datetime

from pydantic import BaseModel, Field

from sleep_cycle_server.domain.engine import MAX_CYCLES, RecommendationMode


class AlarmRequest(BaseModel):
    """Schedule an alarm for one of a user's recommendations.

    The recommendation is recomputed server-side from the stored profile,
    so the alarm always matches what the user was shown.
    """

    user_id: str = Field(min_length=1, max_length=100)
    mode: RecommendationMode
    cycles: int = Field(ge=1, le=MAX_CYCLES, description="Chosen cycle count")
    anchor: datetime = Field(description="Bedtime (sleepNow) or wake time (wakeAt)")


class ScheduledAlarm(BaseModel):
    """An alarm waiting to fire."""

    id: str
    title: str
    body: str
    fire_at: datetime | None = Field(description="When the alarm fires")
