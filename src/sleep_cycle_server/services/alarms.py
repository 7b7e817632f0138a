"""Wake alarm scheduler using APScheduler.

Schedules one-shot alarms at the midpoint of a recommendation's tolerance
window. When an alarm fires it is logged; delivering it to a device is up
to whatever consumes the logs.

Every public method reports failure through its return value and the log,
never by raising, so callers can treat scheduling as best-effort.

Usage:
    # In app startup
    alarms = AlarmScheduler()
    await alarms.start()

    alarm_id = alarms.schedule_for_recommendation(recommendation)

    # In app shutdown
    await alarms.stop()
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger

from sleep_cycle_server.core.config import settings
from sleep_cycle_server.domain.engine import RecommendationMode, SleepRecommendation
from sleep_cycle_server.formatting import format_time_range
from sleep_cycle_server.schemas.alarms import ScheduledAlarm

if TYPE_CHECKING:
    from apscheduler.job import Job

logger = structlog.get_logger()

WAKE_TITLE = "Time to wake up!"
BED_TITLE = "Time to go to bed!"


def _as_aware(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


async def fire_alarm(alarm_id: str, title: str, body: str) -> None:
    """Job body run by APScheduler when an alarm is due."""
    logger.info("Alarm fired", alarm_id=alarm_id, title=title, body=body)


class AlarmScheduler:
    """Background scheduler for one-shot wake and bedtime alarms.

    Attributes:
        scheduler: APScheduler instance
        is_running: Whether scheduler is currently running
    """

    def __init__(self) -> None:
        """Initialize alarm scheduler."""
        self.scheduler = AsyncIOScheduler(timezone=UTC)
        self.is_running = False
        self.logger = logger.bind(component="alarm_scheduler")

    async def start(self) -> None:
        """Start the background scheduler."""
        if not settings.alarms_enabled:
            self.logger.info("Alarm scheduler disabled by configuration")
            return

        if self.is_running:
            self.logger.warning("Scheduler already running")
            return

        self.scheduler.start()
        self.is_running = True

        self.logger.info("Alarm scheduler started")

    async def stop(self) -> None:
        """Stop the background scheduler, discarding pending alarms."""
        if not self.is_running:
            return

        self.logger.info("Stopping alarm scheduler")

        self.scheduler.shutdown(wait=True)
        self.is_running = False

        self.logger.info("Alarm scheduler stopped")

    def schedule_at(self, title: str, body: str, fire_at: datetime) -> str | None:
        """Schedule an alarm at a point in time.

        Args:
            title: Alarm title
            body: Alarm body text
            fire_at: When to fire (naive values are taken as UTC)

        Returns:
            Alarm id, or None if the alarm could not be scheduled
        """
        if not self.is_running:
            self.logger.warning("Cannot schedule alarm, scheduler not running")
            return None

        fire_at = _as_aware(fire_at)
        if fire_at <= datetime.now(UTC):
            self.logger.warning("Alarm time is in the past", fire_at=fire_at.isoformat())
            return None

        alarm_id = str(uuid4())
        try:
            self.scheduler.add_job(
                fire_alarm,
                trigger=DateTrigger(run_date=fire_at),
                id=alarm_id,
                name=title,
                kwargs={"alarm_id": alarm_id, "title": title, "body": body},
            )
        except Exception as e:
            self.logger.warning("Error scheduling alarm", error=str(e))
            return None

        self.logger.info("Alarm scheduled", alarm_id=alarm_id, fire_at=fire_at.isoformat())
        return alarm_id

    def schedule_for_recommendation(self, recommendation: SleepRecommendation) -> str | None:
        """Schedule an alarm at the middle of a recommendation's window.

        Sleep-now recommendations get a wake-up alarm; wake-at
        recommendations get a bedtime reminder.

        Args:
            recommendation: The recommendation the user picked

        Returns:
            Alarm id, or None if the alarm could not be scheduled
        """
        fire_at = recommendation.window_midpoint
        if fire_at is None:
            self.logger.warning("Recommendation has no window", cycles=recommendation.cycles)
            return None

        window = format_time_range(recommendation.window_start, recommendation.window_end)
        if recommendation.mode == RecommendationMode.SLEEP_NOW:
            title, body = WAKE_TITLE, f"Ideal wake window: {window}"
        else:
            title, body = BED_TITLE, f"Ideal bedtime window: {window}"

        return self.schedule_at(title=title, body=body, fire_at=fire_at)

    def cancel(self, alarm_id: str) -> bool:
        """Cancel one alarm.

        Args:
            alarm_id: Alarm to cancel

        Returns:
            True if the alarm existed and was removed
        """
        try:
            self.scheduler.remove_job(alarm_id)
        except JobLookupError:
            self.logger.warning("Alarm not found", alarm_id=alarm_id)
            return False

        self.logger.info("Alarm cancelled", alarm_id=alarm_id)
        return True

    def cancel_all(self) -> int:
        """Cancel every pending alarm.

        Returns:
            Number of alarms removed
        """
        count = len(self.scheduler.get_jobs())
        self.scheduler.remove_all_jobs()

        self.logger.info("All alarms cancelled", count=count)
        return count

    def get(self, alarm_id: str) -> ScheduledAlarm | None:
        """Look up a pending alarm by id."""
        if not self.is_running:
            return None

        job = self.scheduler.get_job(alarm_id)
        return self._to_alarm(job) if job else None

    def list_scheduled(self) -> list[ScheduledAlarm]:
        """List pending alarms, soonest first."""
        if not self.is_running:
            return []

        return [self._to_alarm(job) for job in self.scheduler.get_jobs()]

    @staticmethod
    def _to_alarm(job: Job) -> ScheduledAlarm:
        return ScheduledAlarm(
            id=job.id,
            title=job.kwargs.get("title", ""),
            body=job.kwargs.get("body", ""),
            fire_at=job.next_run_time,
        )
