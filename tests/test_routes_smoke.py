"""Smoke tests for API routes."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from mwanafrika.api import locations, routes, wellness
from mwanafrika.errors import ContentParseError, MissingCredentialsError, UpstreamError


@pytest.fixture
def mock_tutor():
    tutor = MagicMock()
    tutor.generate_reply = AsyncMock(return_value="Photosynthesis turns light into food.")
    tutor.generate_json = AsyncMock(return_value=[{"id": "fractions", "title": "Fractions"}])
    return tutor


@pytest.fixture
def client(mock_tutor):
    app = FastAPI()
    app.include_router(routes.router)
    app.include_router(locations.router)
    app.include_router(wellness.router)
    with patch("mwanafrika.api.routes.get_tutor_client", return_value=mock_tutor):
        with TestClient(app) as c:
            yield c


class TestHealthCheck:
    def test_health_returns_ok(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestChat:
    def test_chat_returns_text(self, client, mock_tutor):
        payload = {
            "messages": [{"sender": "user", "content": "What is photosynthesis?"}],
            "subject": "Science",
        }
        response = client.post("/api/chat", json=payload)
        assert response.status_code == 200
        assert response.json() == {"text": "Photosynthesis turns light into food."}
        assert mock_tutor.generate_reply.call_args.kwargs["subject"] == "Science"

    def test_chat_missing_key(self, client):
        with patch(
            "mwanafrika.api.routes.get_tutor_client",
            side_effect=MissingCredentialsError("Missing GOOGLE_API_KEY"),
        ):
            response = client.post("/api/chat", json={"messages": []})
        assert response.status_code == 500
        assert "GOOGLE_API_KEY" in response.json()["error"]

    def test_chat_provider_failure(self, client, mock_tutor):
        mock_tutor.generate_reply.side_effect = UpstreamError("boom", status=503)
        response = client.post("/api/chat", json={"messages": []})
        assert response.status_code == 500
        assert response.json()["error"] == "Failed to fetch response from the tutor model."

    def test_unexpected_error_is_json(self, client, mock_tutor):
        mock_tutor.generate_reply.side_effect = IndexError("list index out of range")
        response = client.post("/api/chat", json={"messages": []})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch response from the tutor model."}


class TestCurriculum:
    def test_topics_require_subject(self, client):
        response = client.get("/api/curriculum")
        assert response.status_code == 400
        assert response.json() == {"error": "Subject parameter required"}

    def test_topics_listed(self, client):
        response = client.get("/api/curriculum", params={"subject": "Mathematics"})
        assert response.status_code == 200
        data = response.json()
        assert data["subject"] == "Mathematics"
        assert data["level"] == "primary"
        assert data["topics"][0]["id"] == "fractions"

    def test_lesson_parse_error_includes_raw_response(self, client, mock_tutor):
        mock_tutor.generate_json.side_effect = ContentParseError("bad", raw_response="not json")
        response = client.post("/api/curriculum", json={"subject": "Science", "topic": "Plants"})
        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to generate structured lesson content",
            "rawResponse": "not json",
        }

    def test_lesson_unexpected_error_is_json(self, client, mock_tutor):
        mock_tutor.generate_json.side_effect = IndexError("list index out of range")
        response = client.post("/api/curriculum", json={"subject": "Science"})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate curriculum content"}

    def test_topics_unexpected_error_is_json(self, client, mock_tutor):
        mock_tutor.generate_json.side_effect = KeyError("choices")
        response = client.get("/api/curriculum", params={"subject": "Science"})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate topics"}


class TestLocations:
    def test_missing_address(self, client):
        with patch("mwanafrika.api.locations.get_places_client", return_value=MagicMock()):
            response = client.post("/api/locations", json={"rewardType": "food"})
        assert response.status_code == 400
        assert response.json() == {"error": "Address is required"}

    def test_missing_maps_key(self, client):
        with patch(
            "mwanafrika.api.locations.get_places_client",
            side_effect=MissingCredentialsError("Google Maps API key not configured"),
        ):
            response = client.post("/api/locations", json={"address": "Soweto"})
        assert response.status_code == 500
        body = response.json()
        assert "setup" in body
        assert "GOOGLE_MAPS_API_KEY" in body["details"]

    def test_unexpected_search_error_is_json(self, client):
        with (
            patch("mwanafrika.api.locations.get_places_client", return_value=MagicMock()),
            patch(
                "mwanafrika.api.locations.find_nearby_stores",
                AsyncMock(side_effect=ValueError("Expecting value")),
            ),
        ):
            response = client.post("/api/locations", json={"address": "Soweto"})
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to search nearby stores"
        assert "timestamp" in body

    def test_unexpected_details_error_is_json(self, client):
        places = MagicMock()
        places.details = AsyncMock(side_effect=ValueError("Expecting value"))
        with patch("mwanafrika.api.locations.get_places_client", return_value=places):
            response = client.get("/api/locations", params={"placeId": "abc"})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch place details"}

    def test_place_details_require_id(self, client):
        response = client.get("/api/locations")
        assert response.status_code == 400

    def test_error_details_hint(self):
        assert "quota" in locations.maps_error_details("quota exceeded")
        assert locations.maps_error_details("something else") == ""


class TestRewardsAndWellness:
    def test_rewards_catalog(self, client):
        response = client.get("/api/rewards")
        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == ["food", "hygiene", "connectivity"]

    def test_wellness_chat_first_turn_greets(self, client):
        response = client.post(
            "/api/wellness/chat", json={"sessionId": "smoke-greet", "message": "hi"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["category"] == "neutral"
        assert data["showBanner"] is False
        assert data["showCrisisAlert"] is False
        assert "volunteers" not in data

    def test_wellness_chat_crisis_shows_volunteers(self, client):
        response = client.post(
            "/api/wellness/chat",
            json={"sessionId": "smoke-crisis", "message": "I want to die"},
        )
        data = response.json()
        assert data["level"] == 10
        assert data["showBanner"] is True
        assert data["showCrisisAlert"] is True
        assert len(data["volunteers"]) == 4
        client.delete("/api/wellness/chat/smoke-crisis")

    def test_mood_pattern_opens_support(self, client):
        response = client.post(
            "/api/wellness/mood", json={"mood": "sad", "recentMoods": ["sad", "stressed"]}
        )
        data = response.json()
        assert data == {"distressLevel": 3, "openSupport": True, "reply": data["reply"]}

    def test_volunteer_directory(self, client):
        response = client.get("/api/wellness/volunteers")
        assert response.status_code == 200
        assert len(response.json()) == 4
