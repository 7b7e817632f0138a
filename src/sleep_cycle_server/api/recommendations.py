"""Sleep-now and wake-at recommendation endpoints."""

from datetime import datetime
from typing import Annotated, Any

from litestar import Router, get
from litestar.di import Provide
from litestar.params import Parameter
from litestar.status_codes import HTTP_200_OK

from sleep_cycle_server.api.deps import (
    provide_profile_repository,
    provide_recommendation_service,
    validate_cycles,
    validate_user_id,
)
from sleep_cycle_server.schemas.profile import DerivedProfileOut
from sleep_cycle_server.schemas.recommendations import RecommendationOut, RecommendationsResponse
from sleep_cycle_server.services.recommendations import RecommendationResult, RecommendationService


def _to_response(result: RecommendationResult) -> dict[str, Any]:
    response = RecommendationsResponse(
        user_id=result.user_id,
        mode=result.mode,
        anchor=result.anchor,
        derived=DerivedProfileOut.from_domain(result.derived),
        recommendations=[RecommendationOut.from_domain(r) for r in result.recommendations],
    )
    return response.model_dump(mode="json")


@get("/users/{user_id:str}/recommendations/sleep-now", status_code=HTTP_200_OK)
async def get_sleep_now(
    user_id: str,
    recommendation_service: RecommendationService,
    at: Annotated[
        datetime | None,
        Parameter(query="at", description="Bedtime (defaults to now)"),
    ] = None,
    cycles: Annotated[
        list[int] | None,
        Parameter(query="cycles", description="Candidate cycle counts"),
    ] = None,
) -> dict[str, Any]:
    """Get wake times for going to bed now.

    Each candidate carries its score and a +-15 minute wake window;
    the best-scoring candidate(s) have ``is_recommended`` set.

    Example:
        GET /api/v1/users/12345/recommendations/sleep-now?cycles=4&cycles=5
    """
    validate_user_id(user_id)
    validate_cycles(cycles)
    result = await recommendation_service.sleep_now(user_id, now=at, cycles=cycles)
    return _to_response(result)


@get("/users/{user_id:str}/recommendations/wake-at", status_code=HTTP_200_OK)
async def get_wake_at(
    user_id: str,
    recommendation_service: RecommendationService,
    wake_at: Annotated[
        datetime,
        Parameter(query="wake_at", description="Target wake time (ISO 8601)"),
    ],
    cycles: Annotated[
        list[int] | None,
        Parameter(query="cycles", description="Candidate cycle counts"),
    ] = None,
) -> dict[str, Any]:
    """Get bedtimes for a target wake time.

    Each candidate carries its score and a +-15 minute bedtime window.

    Example:
        GET /api/v1/users/12345/recommendations/wake-at?wake_at=2026-01-20T07:00:00Z
    """
    validate_user_id(user_id)
    validate_cycles(cycles)
    result = await recommendation_service.wake_at(user_id, wake_at, cycles=cycles)
    return _to_response(result)


recommendations_router = Router(
    path="/",
    route_handlers=[get_sleep_now, get_wake_at],
    dependencies={
        "repository": Provide(provide_profile_repository),
        "recommendation_service": Provide(provide_recommendation_service),
    },
    tags=["Recommendations"],
)
