"""Google Calendar Service Implementation

Implements CalendarService over the Google Calendar v3 REST API.
"""

from datetime import datetime, timezone
from typing import List, Optional
import httpx
from src.app.services.calendar_service import CalendarService, CalendarAuthError
from src.app.use_cases.calendar.dtos import CalendarEventDTO, CalendarEventSummaryDTO


class GoogleCalendarService(CalendarService):
    """
    CalendarService using the caller's OAuth access token as a Bearer token
    """

    def __init__(
        self,
        base_url: str = "https://www.googleapis.com/calendar/v3",
        calendar_id: str = "primary",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.calendar_id = calendar_id
        self.timeout = timeout
        self.transport = transport

    @property
    def events_url(self) -> str:
        return f"{self.base_url}/calendars/{self.calendar_id}/events"

    async def create_event(self, access_token: str, event: CalendarEventDTO) -> str:
        body = {
            "summary": event.title,
            "description": event.description,
            "start": {"dateTime": event.start.isoformat(), "timeZone": event.time_zone},
            "end": {"dateTime": event.end.isoformat(), "timeZone": event.time_zone},
        }
        response = await self._request("POST", self.events_url, access_token, json=body)
        return response.json()["id"]

    async def delete_event(self, access_token: str, event_id: str) -> None:
        await self._request("DELETE", f"{self.events_url}/{event_id}", access_token)

    async def list_upcoming_events(
        self, access_token: str, max_results: int = 10
    ) -> List[CalendarEventSummaryDTO]:
        params = {
            "timeMin": datetime.now(timezone.utc).isoformat(),
            "maxResults": max_results,
            "singleEvents": "true",
            "orderBy": "startTime",
        }
        response = await self._request("GET", self.events_url, access_token, params=params)

        events = []
        for item in response.json().get("items", []):
            if not item.get("summary"):
                continue
            start = item.get("start", {})
            events.append(
                CalendarEventSummaryDTO(
                    id=item["id"],
                    title=item["summary"],
                    # All-day events only carry a date
                    start=start.get("dateTime") or start.get("date", ""),
                )
            )
        return events

    async def _request(self, method: str, url: str, access_token: str, **kwargs) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.request(
                method,
                url,
                headers={"Authorization": f"Bearer {access_token}"},
                **kwargs,
            )
        if response.status_code == 401:
            raise CalendarAuthError("Calendar provider returned 401 Unauthorized")
        response.raise_for_status()
        return response
