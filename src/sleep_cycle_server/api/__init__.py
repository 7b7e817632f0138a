"""API routes."""

from litestar import Router

from sleep_cycle_server.api.alarms import alarms_router
from sleep_cycle_server.api.health import health_router
from sleep_cycle_server.api.profile import profile_router
from sleep_cycle_server.api.recommendations import recommendations_router
from sleep_cycle_server.core.config import settings

# Versioned API routers
_v1_routers = [
    profile_router,
    recommendations_router,
    alarms_router,
]

api_v1_router = Router(path=settings.api_prefix, route_handlers=_v1_routers)

# - health_router: /health - no version prefix
# - api_v1_router: /api/v1/* - profile, recommendation and alarm endpoints
api_routers = [health_router, api_v1_router]

__all__ = ["api_routers"]
