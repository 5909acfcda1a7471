"""Integration tests for Calendar API endpoints"""

import json
import httpx
import pytest
from httpx import AsyncClient

from src.adapter.services.calendar_service import GoogleCalendarService
from src.depends import get_calendar_service

BASE_URL = "https://calendar.example.test/v3"

EVENT = {
    "title": "Consulta Maria Silva",
    "description": "Primeira consulta",
    "start": "2024-05-02T14:00:00",
    "end": "2024-05-02T15:00:00",
}


@pytest.fixture
def provider_requests():
    return []


@pytest.fixture
def provider_status():
    """Status code the fake calendar provider answers with"""
    return {"code": 200}


@pytest.fixture
def calendar_app(app, provider_requests, provider_status):
    def handler(request: httpx.Request) -> httpx.Response:
        provider_requests.append(request)
        code = provider_status["code"]
        if code != 200:
            return httpx.Response(code, json={"error": {"code": code}})
        if request.method == "POST":
            return httpx.Response(200, json={"id": "evt_123"})
        if request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(
            200,
            json={
                "items": [
                    {"id": "evt_1", "summary": "Consulta", "start": {"dateTime": "2024-05-02T14:00:00-03:00"}},
                    {"id": "evt_2", "start": {"dateTime": "2024-05-02T16:00:00-03:00"}},
                ]
            },
        )

    service = GoogleCalendarService(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_calendar_service] = lambda: service
    return app


AUTH = {"Authorization": "Bearer token-abc"}


@pytest.mark.usefixtures("calendar_app")
class TestCalendarAPIIntegration:
    """Integration test suite for Calendar API endpoints"""

    @pytest.mark.asyncio
    async def test_create_event(self, client: AsyncClient, provider_requests):
        response = await client.post("/api/calendar/events", json=EVENT, headers=AUTH)

        assert response.status_code == 201
        assert response.json() == {"id": "evt_123"}
        assert provider_requests[0].headers["Authorization"] == "Bearer token-abc"
        body = json.loads(provider_requests[0].content)
        assert body["summary"] == "Consulta Maria Silva"

    @pytest.mark.asyncio
    async def test_list_events(self, client: AsyncClient):
        response = await client.get("/api/calendar/events", headers=AUTH)

        assert response.status_code == 200
        assert response.json() == [
            {"id": "evt_1", "title": "Consulta", "start": "2024-05-02T14:00:00-03:00"}
        ]

    @pytest.mark.asyncio
    async def test_delete_event(self, client: AsyncClient, provider_requests):
        response = await client.delete("/api/calendar/events/evt_1", headers=AUTH)

        assert response.status_code == 204
        assert provider_requests[0].method == "DELETE"
        assert provider_requests[0].url.path.endswith("/events/evt_1")

    @pytest.mark.asyncio
    async def test_missing_token_returns_401(self, client: AsyncClient, provider_requests):
        response = await client.get("/api/calendar/events")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHENTICATED"
        assert provider_requests == []

    @pytest.mark.asyncio
    async def test_expired_token_returns_401(self, client: AsyncClient, provider_status):
        provider_status["code"] = 401

        response = await client.get("/api/calendar/events", headers=AUTH)

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHENTICATED"

    @pytest.mark.asyncio
    async def test_provider_failure_returns_502(self, client: AsyncClient, provider_status):
        provider_status["code"] = 500

        response = await client.post("/api/calendar/events", json=EVENT, headers=AUTH)

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "CALENDAR_REQUEST_FAILED"

    @pytest.mark.asyncio
    async def test_event_ending_before_start_is_rejected(self, client: AsyncClient, provider_requests):
        payload = {**EVENT, "end": "2024-05-02T13:00:00"}

        response = await client.post("/api/calendar/events", json=payload, headers=AUTH)

        assert response.status_code == 422
        assert provider_requests == []
