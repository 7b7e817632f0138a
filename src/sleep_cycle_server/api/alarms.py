"""Wake alarm endpoints."""

from typing import Any

from litestar import Router, delete, get, post
from litestar.di import Provide
from litestar.exceptions import HTTPException, NotFoundException
from litestar.status_codes import HTTP_200_OK, HTTP_201_CREATED, HTTP_409_CONFLICT

from sleep_cycle_server.api.deps import (
    provide_alarm_scheduler,
    provide_profile_repository,
    provide_recommendation_service,
    validate_user_id,
)
from sleep_cycle_server.schemas.alarms import AlarmRequest
from sleep_cycle_server.services.alarms import AlarmScheduler
from sleep_cycle_server.services.recommendations import RecommendationService


@post("/alarms", status_code=HTTP_201_CREATED)
async def create_alarm(
    data: AlarmRequest,
    recommendation_service: RecommendationService,
    alarm_scheduler: AlarmScheduler,
) -> dict[str, Any]:
    """Schedule an alarm for the recommendation the user picked.

    The alarm fires at the middle of the recommendation's window: a wake-up
    alarm for sleep-now, a bedtime reminder for wake-at.

    Example:
        POST /api/v1/alarms
        {"user_id": "12345", "mode": "sleepNow", "cycles": 5,
         "anchor": "2026-01-20T23:00:00Z"}
    """
    validate_user_id(data.user_id)
    result = await recommendation_service.calculate(
        data.user_id, data.mode, data.anchor, [data.cycles]
    )

    alarm_id = alarm_scheduler.schedule_for_recommendation(result.recommendations[0])
    alarm = alarm_scheduler.get(alarm_id) if alarm_id else None
    if alarm is None:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="Alarm could not be scheduled")

    return alarm.model_dump(mode="json")


@get("/alarms", status_code=HTTP_200_OK, sync_to_thread=False)
def list_alarms(alarm_scheduler: AlarmScheduler) -> list[dict[str, Any]]:
    """List pending alarms, soonest first."""
    return [alarm.model_dump(mode="json") for alarm in alarm_scheduler.list_scheduled()]


@delete("/alarms/{alarm_id:str}", sync_to_thread=False)
def cancel_alarm(alarm_id: str, alarm_scheduler: AlarmScheduler) -> None:
    """Cancel one alarm.

    Raises:
        NotFoundException: If no pending alarm has this id
    """
    if not alarm_scheduler.cancel(alarm_id):
        raise NotFoundException(f"Alarm {alarm_id} not found")


@delete("/alarms", sync_to_thread=False)
def cancel_all_alarms(alarm_scheduler: AlarmScheduler) -> None:
    """Cancel every pending alarm."""
    alarm_scheduler.cancel_all()


alarms_router = Router(
    path="/",
    route_handlers=[create_alarm, list_alarms, cancel_alarm, cancel_all_alarms],
    dependencies={
        "repository": Provide(provide_profile_repository),
        "recommendation_service": Provide(provide_recommendation_service),
        "alarm_scheduler": Provide(provide_alarm_scheduler),
    },
    tags=["Alarms"],
)
