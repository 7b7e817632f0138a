"""Sleep profile and onboarding endpoints."""

from typing import Any

from litestar import Router, get, post, put
from litestar.di import Provide
from litestar.status_codes import HTTP_200_OK

from sleep_cycle_server.api.deps import (
    provide_profile_repository,
    provide_recommendation_service,
    validate_user_id,
)
from sleep_cycle_server.domain.profile import build_derived_profile
from sleep_cycle_server.repositories.profile import SQLAlchemyProfileRepository
from sleep_cycle_server.schemas.profile import (
    DerivedProfileOut,
    OnboardingStatus,
    ProfileResponse,
    SleepProfileIn,
)
from sleep_cycle_server.services.recommendations import RecommendationService


@get("/users/{user_id:str}/profile", status_code=HTTP_200_OK)
async def get_profile(
    user_id: str,
    recommendation_service: RecommendationService,
) -> dict[str, Any]:
    """Get a user's sleep profile with its derived parameters.

    Users who never saved a profile get the default profile
    (30 years, 70 kg, 170 cm, male) with ``is_default`` set.

    Example:
        GET /api/v1/users/12345/profile
    """
    validate_user_id(user_id)
    profile, is_default = await recommendation_service.get_profile(user_id)

    response = ProfileResponse(
        user_id=user_id,
        is_default=is_default,
        profile=SleepProfileIn.from_domain(profile),
        derived=DerivedProfileOut.from_domain(build_derived_profile(profile)),
    )
    return response.model_dump(mode="json")


@put("/users/{user_id:str}/profile", status_code=HTTP_200_OK)
async def save_profile(
    user_id: str,
    data: SleepProfileIn,
    repository: SQLAlchemyProfileRepository,
) -> dict[str, Any]:
    """Create or replace a user's sleep profile.

    The body is validated before saving: age 1-120, weight and height
    strictly positive, gender one of male/female/other.

    Example:
        PUT /api/v1/users/12345/profile
        {"age": 30, "weight_kg": 70, "height_cm": 170, "gender": "male"}
    """
    validate_user_id(user_id)
    profile = data.to_domain()
    await repository.save(user_id, profile)

    response = ProfileResponse(
        user_id=user_id,
        is_default=False,
        profile=data,
        derived=DerivedProfileOut.from_domain(build_derived_profile(profile)),
    )
    return response.model_dump(mode="json")


@get("/users/{user_id:str}/onboarding", status_code=HTTP_200_OK)
async def get_onboarding(
    user_id: str,
    repository: SQLAlchemyProfileRepository,
) -> dict[str, Any]:
    """Check whether a user has completed onboarding."""
    validate_user_id(user_id)
    seen = await repository.has_seen_onboarding(user_id)
    return OnboardingStatus(user_id=user_id, has_seen_onboarding=seen).model_dump(mode="json")


@post("/users/{user_id:str}/onboarding", status_code=HTTP_200_OK)
async def mark_onboarding_seen(
    user_id: str,
    repository: SQLAlchemyProfileRepository,
) -> dict[str, Any]:
    """Mark onboarding as completed for a user."""
    validate_user_id(user_id)
    await repository.mark_onboarding_seen(user_id)
    return OnboardingStatus(user_id=user_id, has_seen_onboarding=True).model_dump(mode="json")


profile_router = Router(
    path="/",
    route_handlers=[get_profile, save_profile, get_onboarding, mark_onboarding_seen],
    dependencies={
        "repository": Provide(provide_profile_repository),
        "recommendation_service": Provide(provide_recommendation_service),
    },
    tags=["Profile"],
)
