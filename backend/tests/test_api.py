"""Tests for API Endpoints."""
from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient

from app.models import User


def today() -> str:
    return datetime.utcnow().date().isoformat()


@pytest.mark.asyncio
class TestHealthCheck:
    """Tests for the health endpoint."""

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
class TestUserAPI:
    """Tests for User endpoints."""

    async def test_create_user(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/users",
            json={"email": "newuser@example.com", "username": "newuser"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "newuser@example.com"
        assert data["username"] == "newuser"

    async def test_create_user_duplicate_email(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/users",
            json={"email": test_user.email, "username": "someone"},
        )
        assert response.status_code == 400
        assert "already registered" in response.json()["detail"]

    async def test_create_user_invalid_email(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/users",
            json={"email": "not-an-email", "username": "someone"},
        )
        assert response.status_code == 422

    async def test_get_user(self, client: AsyncClient, test_user: User):
        response = await client.get(f"/api/v1/users/{test_user.id}")
        assert response.status_code == 200
        assert response.json()["email"] == test_user.email

    async def test_get_current_user(self, client: AsyncClient, test_user: User):
        response = await client.get("/api/v1/users/me")
        assert response.status_code == 200
        assert response.json()["id"] == test_user.id

    async def test_unknown_current_user(self, client: AsyncClient):
        response = await client.get("/api/v1/users/me")
        assert response.status_code == 401


@pytest.mark.asyncio
class TestProfileAPI:
    """Tests for Profile endpoints."""

    async def test_default_profile_on_first_access(self, client: AsyncClient, test_user: User):
        response = await client.get("/api/v1/profile")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "User"
        assert data["age"] == 25
        assert data["gender"] == "male"
        assert data["height_cm"] == 170
        assert data["activity_level"] == "moderate"
        assert data["email"] == test_user.email
        assert data["username"] == test_user.username

    async def test_partial_update(self, client: AsyncClient, test_user: User):
        response = await client.put("/api/v1/profile", json={"name": "Alex", "age": 31})
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Alex"
        assert data["age"] == 31
        # Untouched fields keep their defaults
        assert data["activity_level"] == "moderate"

        response = await client.get("/api/v1/profile")
        assert response.json()["name"] == "Alex"

    async def test_invalid_profile_values(self, client: AsyncClient, test_user: User):
        response = await client.put("/api/v1/profile", json={"age": 200})
        assert response.status_code == 422

        response = await client.put("/api/v1/profile", json={"gender": "unknown"})
        assert response.status_code == 422


@pytest.mark.asyncio
class TestDietAPI:
    """Tests for Diet endpoints."""

    async def _create(self, client: AsyncClient, **overrides) -> dict:
        payload = {
            "meal": "breakfast",
            "food": "Oatmeal",
            "calories": 350,
            "date": today(),
            "time": "08:00",
        }
        payload.update(overrides)
        response = await client.post("/api/v1/diet", json=payload)
        assert response.status_code == 201
        return response.json()

    async def test_create_diet_entry(self, client: AsyncClient, test_user: User):
        data = await self._create(client)
        assert data["food"] == "Oatmeal"
        assert data["calories"] == 350
        assert data["user_id"] == test_user.id

    async def test_create_diet_entry_validation(self, client: AsyncClient, test_user: User):
        base = {"meal": "lunch", "food": "Soup", "calories": 200, "date": today(), "time": "12:00"}

        for bad in ({"meal": "brunch"}, {"calories": -1}, {"calories": 10001}, {"time": "noon"}, {"food": ""}):
            response = await client.post("/api/v1/diet", json={**base, **bad})
            assert response.status_code == 422, bad

    async def test_list_diet_entries(self, client: AsyncClient, test_user: User):
        await self._create(client, date="2024-01-01")
        await self._create(client, date="2024-01-03")
        await self._create(client, date="2024-01-05")

        response = await client.get("/api/v1/diet")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert [e["date"] for e in data["entries"]] == ["2024-01-05", "2024-01-03", "2024-01-01"]

        response = await client.get(
            "/api/v1/diet", params={"start_date": "2024-01-02", "end_date": "2024-01-04"}
        )
        data = response.json()
        assert data["total"] == 1
        assert data["entries"][0]["date"] == "2024-01-03"

    async def test_update_diet_entry(self, client: AsyncClient, test_user: User):
        entry = await self._create(client)

        response = await client.put(f"/api/v1/diet/{entry['id']}", json={"calories": 420})
        assert response.status_code == 200
        data = response.json()
        assert data["calories"] == 420
        assert data["food"] == "Oatmeal"

    async def test_delete_diet_entry(self, client: AsyncClient, test_user: User):
        entry = await self._create(client)

        response = await client.delete(f"/api/v1/diet/{entry['id']}")
        assert response.status_code == 204

        response = await client.get(f"/api/v1/diet/{entry['id']}")
        assert response.status_code == 404

    async def test_entry_of_other_user_not_found(self, client: AsyncClient, db_session, test_user: User):
        other = User(email="other@example.com", username="other")
        db_session.add(other)
        await db_session.commit()
        await db_session.refresh(other)

        response = await client.post(
            "/api/v1/diet",
            params={"user_id": other.id},
            json={"meal": "snack", "food": "Apple", "calories": 80, "date": today(), "time": "15:00"},
        )
        assert response.status_code == 201
        entry_id = response.json()["id"]

        response = await client.get(f"/api/v1/diet/{entry_id}")
        assert response.status_code == 404

        response = await client.delete(f"/api/v1/diet/{entry_id}")
        assert response.status_code == 404


@pytest.mark.asyncio
class TestExerciseAPI:
    """Tests for Exercise endpoints."""

    async def test_exercise_crud(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/exercise",
            json={
                "exercise_type": "running",
                "duration_minutes": 45,
                "intensity": "high",
                "date": today(),
                "time": "07:30",
            },
        )
        assert response.status_code == 201
        entry_id = response.json()["id"]

        response = await client.put(f"/api/v1/exercise/{entry_id}", json={"intensity": "medium"})
        assert response.status_code == 200
        assert response.json()["intensity"] == "medium"
        assert response.json()["duration_minutes"] == 45

        response = await client.get("/api/v1/exercise")
        assert response.json()["total"] == 1

        response = await client.delete(f"/api/v1/exercise/{entry_id}")
        assert response.status_code == 204

    async def test_exercise_validation(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/exercise",
            json={
                "exercise_type": "running",
                "duration_minutes": 0,
                "intensity": "high",
                "date": today(),
                "time": "07:30",
            },
        )
        assert response.status_code == 422


@pytest.mark.asyncio
class TestSleepAPI:
    """Tests for Sleep endpoints."""

    async def test_create_sleep_entry(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/sleep",
            json={
                "bedtime": "2024-01-04T22:30:00",
                "waketime": "2024-01-05T06:00:00",
                "quality": "good",
                "date": "2024-01-05",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["duration_hours"] == 7.5
        assert data["notes"] == ""

    async def test_waketime_must_follow_bedtime(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/sleep",
            json={
                "bedtime": "2024-01-05T06:00:00",
                "waketime": "2024-01-05T05:00:00",
                "quality": "poor",
                "date": "2024-01-05",
            },
        )
        assert response.status_code == 422

    async def test_timezone_aware_instants_are_stored_as_utc(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/sleep",
            json={
                "bedtime": "2024-01-04T23:00:00+01:00",
                "waketime": "2024-01-05T07:00:00+01:00",
                "quality": "excellent",
                "date": "2024-01-05",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["bedtime"].startswith("2024-01-04T22:00:00")
        assert data["duration_hours"] == 8.0

    async def test_update_rejects_inverted_interval(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/sleep",
            json={
                "bedtime": "2024-01-04T23:00:00",
                "waketime": "2024-01-05T07:00:00",
                "quality": "fair",
                "date": "2024-01-05",
            },
        )
        entry_id = response.json()["id"]

        response = await client.put(
            f"/api/v1/sleep/{entry_id}", json={"waketime": "2024-01-04T22:00:00"}
        )
        assert response.status_code == 400

        response = await client.put(
            f"/api/v1/sleep/{entry_id}", json={"waketime": "2024-01-05T06:00:00"}
        )
        assert response.status_code == 200
        assert response.json()["duration_hours"] == 7.0


@pytest.mark.asyncio
class TestWeightAPI:
    """Tests for Weight endpoints."""

    async def test_weight_crud(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/weight",
            json={"weight_kg": 72.4, "date": today(), "time": "07:00"},
        )
        assert response.status_code == 201
        entry_id = response.json()["id"]

        response = await client.get(f"/api/v1/weight/{entry_id}")
        assert response.json()["weight_kg"] == 72.4

        response = await client.put(f"/api/v1/weight/{entry_id}", json={"weight_kg": 71.9})
        assert response.json()["weight_kg"] == 71.9

        response = await client.delete(f"/api/v1/weight/{entry_id}")
        assert response.status_code == 204

    async def test_weight_must_be_positive(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/weight",
            json={"weight_kg": 0, "date": today(), "time": "07:00"},
        )
        assert response.status_code == 422


@pytest.mark.asyncio
class TestGoalAPI:
    """Tests for Goal endpoints."""

    async def test_create_goal_with_progress(self, client: AsyncClient, test_user: User):
        await client.post(
            "/api/v1/diet",
            json={"meal": "lunch", "food": "Pasta", "calories": 250, "date": today(), "time": "12:30"},
        )

        deadline = (datetime.utcnow() + timedelta(days=30)).date().isoformat()
        response = await client.post(
            "/api/v1/goals",
            json={"goal_type": "calories", "target": 1000, "deadline": deadline},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["progress"] == 25
        assert data["unit"] == "kcal"
        assert data["completed"] is False

    async def test_goal_without_records(self, client: AsyncClient, test_user: User):
        deadline = (datetime.utcnow() + timedelta(days=30)).date().isoformat()
        response = await client.post(
            "/api/v1/goals",
            json={"goal_type": "weight", "target": 70, "deadline": deadline},
        )
        assert response.json()["progress"] == 0

    async def test_list_goals_ordered_by_deadline(self, client: AsyncClient, test_user: User):
        later = (datetime.utcnow() + timedelta(days=60)).date().isoformat()
        sooner = (datetime.utcnow() + timedelta(days=10)).date().isoformat()
        await client.post("/api/v1/goals", json={"goal_type": "sleep", "target": 8, "deadline": later})
        await client.post("/api/v1/goals", json={"goal_type": "exercise", "target": 300, "deadline": sooner})

        response = await client.get("/api/v1/goals")
        data = response.json()
        assert data["total"] == 2
        assert [g["goal_type"] for g in data["goals"]] == ["exercise", "sleep"]

    async def test_complete_and_filter_goals(self, client: AsyncClient, test_user: User):
        deadline = (datetime.utcnow() + timedelta(days=30)).date().isoformat()
        response = await client.post(
            "/api/v1/goals",
            json={"goal_type": "exercise", "target": 150, "deadline": deadline},
        )
        goal_id = response.json()["id"]

        response = await client.put(f"/api/v1/goals/{goal_id}", json={"completed": True})
        assert response.json()["completed"] is True

        response = await client.get("/api/v1/goals", params={"completed": "false"})
        assert response.json()["total"] == 0

        response = await client.get("/api/v1/goals", params={"completed": "true"})
        assert response.json()["total"] == 1

    async def test_invalid_goal(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/goals",
            json={"goal_type": "steps", "target": 10000, "deadline": "2030-01-01"},
        )
        assert response.status_code == 422

        response = await client.post(
            "/api/v1/goals",
            json={"goal_type": "weight", "target": 0, "deadline": "2030-01-01"},
        )
        assert response.status_code == 422

    async def test_delete_goal(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/goals",
            json={"goal_type": "weight", "target": 70, "deadline": "2030-01-01"},
        )
        goal_id = response.json()["id"]

        response = await client.delete(f"/api/v1/goals/{goal_id}")
        assert response.status_code == 204

        response = await client.get(f"/api/v1/goals/{goal_id}")
        assert response.status_code == 404
