"""API endpoint tests."""

from collections.abc import AsyncIterator
from datetime import UTC, datetime, timedelta

import pytest
from litestar.status_codes import (
    HTTP_200_OK,
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
)
from litestar.testing import AsyncTestClient

from sleep_cycle_server.app import create_app

OVERWEIGHT_BODY = {"age": 45, "weight_kg": 78, "height_cm": 170, "gender": "female"}


@pytest.fixture
async def client() -> AsyncIterator[AsyncTestClient]:
    """Create test client with the application lifespan running."""
    async with AsyncTestClient(app=create_app()) as client:
        yield client


async def test_health_check(client: AsyncTestClient) -> None:
    """Test health check endpoint."""
    response = await client.get("/health")

    assert response.status_code == HTTP_200_OK
    data = response.json()
    assert data["status"] == "ok"
    assert "version" in data
    assert data["alarms_running"] is True


class TestProfileEndpoints:
    """Tests for profile and onboarding endpoints."""

    async def test_default_profile(self, client: AsyncTestClient) -> None:
        """Test a new user gets the default profile with derived values."""
        response = await client.get("/api/v1/users/new-user/profile")

        assert response.status_code == HTTP_200_OK
        data = response.json()
        assert data["is_default"] is True
        assert data["profile"]["age"] == 30
        assert data["derived"]["bmi_category"] == "normal"
        assert data["derived"]["adjusted_cycle_minutes"] == 90
        assert data["derived"]["latency_minutes"] == 15

    async def test_save_and_get_profile(self, client: AsyncTestClient) -> None:
        """Test a saved profile is returned with recomputed derived values."""
        response = await client.put("/api/v1/users/user-1/profile", json=OVERWEIGHT_BODY)

        assert response.status_code == HTTP_200_OK
        assert response.json()["derived"]["bmi_category"] == "overweight"

        response = await client.get("/api/v1/users/user-1/profile")
        data = response.json()
        assert data["is_default"] is False
        assert data["profile"]["gender"] == "female"
        assert data["derived"]["sleep_efficiency"] == pytest.approx(0.83)
        assert data["derived"]["latency_minutes"] == 17

    @pytest.mark.parametrize(
        "body",
        [
            {**OVERWEIGHT_BODY, "age": 0},
            {**OVERWEIGHT_BODY, "age": 121},
            {**OVERWEIGHT_BODY, "weight_kg": 0},
            {**OVERWEIGHT_BODY, "height_cm": -170},
            {**OVERWEIGHT_BODY, "gender": "unknown"},
        ],
    )
    async def test_invalid_profile_rejected(self, client: AsyncTestClient, body: dict) -> None:
        """Test out-of-range profile input is rejected before saving."""
        response = await client.put("/api/v1/users/user-1/profile", json=body)

        assert response.status_code == HTTP_400_BAD_REQUEST

        response = await client.get("/api/v1/users/user-1/profile")
        assert response.json()["is_default"] is True

    async def test_invalid_user_id(self, client: AsyncTestClient) -> None:
        """Test user ids with unexpected characters are rejected."""
        response = await client.get("/api/v1/users/bad.user/profile")

        assert response.status_code == HTTP_400_BAD_REQUEST

    async def test_onboarding_flag(self, client: AsyncTestClient) -> None:
        """Test onboarding starts unseen and can be marked as seen."""
        response = await client.get("/api/v1/users/user-1/onboarding")
        assert response.json()["has_seen_onboarding"] is False

        response = await client.post("/api/v1/users/user-1/onboarding")
        assert response.status_code == HTTP_200_OK

        response = await client.get("/api/v1/users/user-1/onboarding")
        assert response.json()["has_seen_onboarding"] is True

    async def test_onboarding_leaves_profile_default(self, client: AsyncTestClient) -> None:
        """Test finishing onboarding does not count as saving a profile."""
        await client.post("/api/v1/users/user-1/onboarding")

        response = await client.get("/api/v1/users/user-1/profile")

        assert response.status_code == HTTP_200_OK
        assert response.json()["is_default"] is True


class TestRecommendationEndpoints:
    """Tests for sleep-now and wake-at endpoints."""

    async def test_sleep_now(self, client: AsyncTestClient) -> None:
        """Test sleep-now returns ranked wake times for the given bedtime."""
        response = await client.get(
            "/api/v1/users/user-1/recommendations/sleep-now",
            params={"at": "2026-01-20T23:00:00+00:00", "cycles": [3, 4, 5, 6]},
        )

        assert response.status_code == HTTP_200_OK
        data = response.json()
        assert data["mode"] == "sleepNow"
        recs = data["recommendations"]
        assert [r["cycles"] for r in recs] == [3, 4, 5, 6]
        assert [r["cycles"] for r in recs if r["is_recommended"]] == [5, 6]

        five = recs[2]
        assert five["total_sleep_minutes"] == 450
        assert five["tib_minutes"] == pytest.approx(450 / 0.88 + 15)
        assert five["score"] == pytest.approx(24)
        wake = datetime.fromisoformat(five["wake_date"])
        expected = datetime(2026, 1, 20, 23, 0, tzinfo=UTC) + timedelta(minutes=450 / 0.88 + 15)
        assert abs(wake - expected) < timedelta(milliseconds=1)

    async def test_sleep_now_defaults(self, client: AsyncTestClient) -> None:
        """Test sleep-now defaults to the current time and 3 to 7 cycles."""
        response = await client.get("/api/v1/users/user-1/recommendations/sleep-now")

        assert response.status_code == HTTP_200_OK
        recs = response.json()["recommendations"]
        assert [r["cycles"] for r in recs] == [3, 4, 5, 6, 7]

    async def test_wake_at_uses_saved_profile(self, client: AsyncTestClient) -> None:
        """Test wake-at bedtimes reflect the stored profile."""
        await client.put("/api/v1/users/user-1/profile", json=OVERWEIGHT_BODY)

        response = await client.get(
            "/api/v1/users/user-1/recommendations/wake-at",
            params={"wake_at": "2026-01-21T07:00:00+00:00"},
        )

        assert response.status_code == HTTP_200_OK
        data = response.json()
        assert data["mode"] == "wakeAt"
        assert data["derived"]["latency_minutes"] == 17
        recs = data["recommendations"]
        assert [r["cycles"] for r in recs] == [3, 4, 5, 6]
        assert all(r["latency_minutes"] == 17 for r in recs)
        assert all(
            datetime.fromisoformat(r["wake_date"]) == datetime(2026, 1, 21, 7, 0, tzinfo=UTC)
            for r in recs
        )

    async def test_wake_at_requires_time(self, client: AsyncTestClient) -> None:
        """Test wake-at without a wake time is a bad request."""
        response = await client.get("/api/v1/users/user-1/recommendations/wake-at")

        assert response.status_code == HTTP_400_BAD_REQUEST

    @pytest.mark.parametrize("cycles", [[0, 5], [5, 21], [10**400]])
    async def test_invalid_cycles(self, client: AsyncTestClient, cycles: list[int]) -> None:
        """Test cycle counts outside 1-20 are rejected."""
        response = await client.get(
            "/api/v1/users/user-1/recommendations/sleep-now", params={"cycles": cycles}
        )

        assert response.status_code == HTTP_400_BAD_REQUEST


class TestAlarmEndpoints:
    """Tests for wake alarm endpoints."""

    async def test_alarm_lifecycle(self, client: AsyncTestClient) -> None:
        """Test scheduling, listing and cancelling an alarm."""
        anchor = datetime.now(UTC) + timedelta(minutes=5)
        response = await client.post(
            "/api/v1/alarms",
            json={
                "user_id": "user-1",
                "mode": "sleepNow",
                "cycles": 5,
                "anchor": anchor.isoformat(),
            },
        )

        assert response.status_code == HTTP_201_CREATED
        alarm = response.json()
        assert alarm["title"] == "Time to wake up!"
        fire_at = datetime.fromisoformat(alarm["fire_at"])
        expected = anchor + timedelta(minutes=450 / 0.88 + 15)
        assert abs(fire_at - expected) < timedelta(seconds=1)

        response = await client.get("/api/v1/alarms")
        assert [a["id"] for a in response.json()] == [alarm["id"]]

        response = await client.delete(f"/api/v1/alarms/{alarm['id']}")
        assert response.status_code == HTTP_204_NO_CONTENT

        response = await client.delete(f"/api/v1/alarms/{alarm['id']}")
        assert response.status_code == HTTP_404_NOT_FOUND

    async def test_bedtime_in_past_conflicts(self, client: AsyncTestClient) -> None:
        """Test an alarm whose bedtime has passed cannot be scheduled."""
        response = await client.post(
            "/api/v1/alarms",
            json={
                "user_id": "user-1",
                "mode": "wakeAt",
                "cycles": 5,
                "anchor": (datetime.now(UTC) + timedelta(hours=1)).isoformat(),
            },
        )

        assert response.status_code == HTTP_409_CONFLICT

    async def test_cancel_all(self, client: AsyncTestClient) -> None:
        """Test cancelling every alarm empties the list."""
        anchor = datetime.now(UTC) + timedelta(minutes=5)
        for cycles in (4, 5):
            await client.post(
                "/api/v1/alarms",
                json={
                    "user_id": "user-1",
                    "mode": "sleepNow",
                    "cycles": cycles,
                    "anchor": anchor.isoformat(),
                },
            )

        response = await client.get("/api/v1/alarms")
        assert len(response.json()) == 2

        response = await client.delete("/api/v1/alarms")
        assert response.status_code == HTTP_204_NO_CONTENT

        response = await client.get("/api/v1/alarms")
        assert response.json() == []

    async def test_cycles_out_of_range_rejected(self, client: AsyncTestClient) -> None:
        """Test alarm cycle counts above the limit are rejected."""
        response = await client.post(
            "/api/v1/alarms",
            json={
                "user_id": "user-1",
                "mode": "sleepNow",
                "cycles": 10**400,
                "anchor": (datetime.now(UTC) + timedelta(minutes=5)).isoformat(),
            },
        )

        assert response.status_code == HTTP_400_BAD_REQUEST
