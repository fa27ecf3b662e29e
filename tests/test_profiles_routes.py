"""Tests for profile, progress, redemption and leaderboard routes."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from mwanafrika.api import profiles
from mwanafrika.storage import user_profile as up_storage


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(up_storage, "get_profiles_dir", lambda: tmp_path)
    app = FastAPI()
    app.include_router(profiles.router)
    with TestClient(app) as c:
        yield c


def sign_in(client, uid: str, **body) -> dict:
    response = client.post(f"/api/profiles/{uid}", json=body)
    assert response.status_code == 200
    return response.json()


class TestSignIn:
    def test_creates_profile_with_streak(self, client):
        data = sign_in(client, "amani", email="amani@example.org", display_name="Amani")
        assert data["uid"] == "amani"
        assert data["display_name"] == "Amani"
        assert data["streak"] == 1
        assert len(data["daily_quests"]) == 3

    def test_get_unknown_profile(self, client):
        response = client.get("/api/profiles/ghost")
        assert response.status_code == 404
        assert response.json() == {"error": "Profile not found"}

    def test_invalid_uid(self, client):
        response = client.get("/api/profiles/bad.uid")
        assert response.status_code == 400
        assert "Invalid user id" in response.json()["error"]

    def test_preferences(self, client):
        sign_in(client, "amani")
        response = client.patch(
            "/api/profiles/amani/preferences", json={"country": "Ghana", "grade": "Grade 8"}
        )
        assert response.status_code == 200
        assert response.json()["country"] == "Ghana"
        assert client.get("/api/profiles/amani").json()["grade"] == "Grade 8"


class TestLessonsAndQuests:
    def test_lesson_completion(self, client):
        sign_in(client, "amani")
        response = client.post(
            "/api/profiles/amani/lessons",
            json={"lesson_id": "m1", "subject": "Mathematics", "coins": 20, "xp": 1200},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["profile"]["skill_coins"] == 20
        assert data["profile"]["level"] == 2
        assert data["newBadges"] == []

    def test_negative_coins_rejected(self, client):
        sign_in(client, "amani")
        response = client.post(
            "/api/profiles/amani/lessons",
            json={"lesson_id": "m1", "subject": "Mathematics", "coins": -5},
        )
        assert response.status_code == 422

    def test_quest_progress_and_reset(self, client):
        quest = sign_in(client, "amani")["daily_quests"][0]
        response = client.post(
            f"/api/profiles/amani/quests/{quest['id']}", json={"progress": quest["total"]}
        )
        assert response.json()["skill_coins"] == quest["reward"]

        reset = client.post("/api/profiles/amani/quests/reset").json()
        assert not any(q["completed"] for q in reset["daily_quests"])

    def test_unknown_quest(self, client):
        sign_in(client, "amani")
        response = client.post("/api/profiles/amani/quests/nope", json={"progress": 1})
        assert response.status_code == 404
        assert response.json() == {"error": "Quest not found"}


class TestRedemptions:
    def test_insufficient_coins_is_conflict(self, client):
        sign_in(client, "amani")
        response = client.post("/api/profiles/amani/redemptions", json={"reward_id": "1"})
        assert response.status_code == 409
        assert response.json() == {"error": "Insufficient coins"}

    def test_unknown_reward(self, client):
        sign_in(client, "amani")
        response = client.post("/api/profiles/amani/redemptions", json={"reward_id": "99"})
        assert response.status_code == 404
        assert response.json() == {"error": "Reward not found"}

    def test_redeem_and_collect(self, client):
        sign_in(client, "amani")
        client.post(
            "/api/profiles/amani/lessons",
            json={"lesson_id": "m1", "subject": "Mathematics", "coins": 100},
        )
        response = client.post("/api/profiles/amani/redemptions", json={"reward_id": "4"})
        assert response.status_code == 200
        data = response.json()
        assert data["skillCoins"] == 20
        assert data["redemption"]["status"] == "pending"
        assert data["redemption"]["code"].startswith("SO")

        collected = client.patch(
            "/api/profiles/amani/redemptions/4", json={"status": "collected"}
        ).json()
        assert collected["rewards_redeemed"][0]["status"] == "collected"


class TestLeaderboard:
    def test_ranked_by_xp_then_coins(self, client):
        for uid, xp, coins in [("a", 100, 0), ("b", 500, 0), ("c", 100, 50)]:
            sign_in(client, uid)
            client.post(
                f"/api/profiles/{uid}/lessons",
                json={"lesson_id": "l1", "subject": "Science", "coins": coins, "xp": xp},
            )

        board = client.get("/api/leaderboard").json()
        assert [row["uid"] for row in board] == ["b", "c", "a"]
        assert [row["rank"] for row in board] == [1, 2, 3]

    def test_limit(self, client):
        for uid in ("a", "b", "c"):
            sign_in(client, uid)
        assert len(client.get("/api/leaderboard", params={"limit": 2}).json()) == 2
