"""Health check endpoint."""

from typing import Any

from litestar import Router, get
from litestar.datastructures import State
from litestar.status_codes import HTTP_200_OK

from sleep_cycle_server import __version__


@get("/health", status_code=HTTP_200_OK, sync_to_thread=False)
def health_check(state: State) -> dict[str, Any]:
    """Health check endpoint.

    Returns:
        Status, version and whether wake alarms can be scheduled
    """
    scheduler = state.get("alarm_scheduler")
    return {
        "status": "ok",
        "version": __version__,
        "alarms_running": bool(scheduler and scheduler.is_running),
    }


health_router = Router(path="/", route_handlers=[health_check])
