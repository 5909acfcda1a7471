"""Calendar API Routes

Create, list and delete events in the signed-in user's calendar. The OAuth
access token is taken from the `Authorization: Bearer` header.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, status

from src.api.schemas.calendar_request import CreateEventRequestSchema
from src.app.services.calendar_service import CalendarService
from src.app.use_cases.calendar.dtos import CalendarEventDTO, CalendarEventSummaryDTO, CreatedEventDTO
from src.app.use_cases.calendar.events import (
    CreateCalendarEvent,
    DeleteCalendarEvent,
    ListUpcomingEvents,
)
from src.depends import get_access_token, get_calendar_service
from src.api.error import ClientError

router = APIRouter(prefix="/calendar", tags=["Calendar"])

ERROR_STATUS = {
    "UNAUTHENTICATED": status.HTTP_401_UNAUTHORIZED,
    "CALENDAR_REQUEST_FAILED": status.HTTP_502_BAD_GATEWAY,
}

UNAUTHENTICATED_RESPONSE = {
    401: {
        "description": "No access token, or the token has expired",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "UNAUTHENTICATED",
                        "message": "You are not logged in or your session has expired. "
                                   "Sign in again to use the calendar."
                    }
                }
            }
        }
    }
}


def raise_for_error(result) -> None:
    if result.is_err():
        raise ClientError(
            result.error,
            status_code=ERROR_STATUS.get(result.error.code, status.HTTP_400_BAD_REQUEST),
        )


@router.post(
    "/events",
    response_model=CreatedEventDTO,
    status_code=status.HTTP_201_CREATED,
    responses=UNAUTHENTICATED_RESPONSE,
)
async def create_event(
    request: CreateEventRequestSchema,
    access_token: Optional[str] = Depends(get_access_token),
    calendar_service: CalendarService = Depends(get_calendar_service),
):
    """
    Create an event in the user's calendar.

    **Returns:**
    - 201: Event created, with its provider ID
    - 401: Not signed in / token expired
    - 502: Calendar provider failed
    """
    event = CalendarEventDTO(
        title=request.title,
        description=request.description,
        start=request.start,
        end=request.end,
        time_zone=request.time_zone,
    )

    result = await CreateCalendarEvent(calendar_service).execute(access_token, event)

    raise_for_error(result)
    return result.value


@router.get(
    "/events",
    response_model=List[CalendarEventSummaryDTO],
    responses=UNAUTHENTICATED_RESPONSE,
)
async def list_upcoming_events(
    access_token: Optional[str] = Depends(get_access_token),
    calendar_service: CalendarService = Depends(get_calendar_service),
):
    """
    List the user's upcoming events, soonest first.

    **Returns:**
    - 200: `[{"id", "title", "start"}]`
    - 401: Not signed in / token expired
    - 502: Calendar provider failed
    """
    result = await ListUpcomingEvents(calendar_service).execute(access_token)

    raise_for_error(result)
    return result.value


@router.delete(
    "/events/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=UNAUTHENTICATED_RESPONSE,
)
async def delete_event(
    event_id: str,
    access_token: Optional[str] = Depends(get_access_token),
    calendar_service: CalendarService = Depends(get_calendar_service),
):
    """
    Delete an event from the user's calendar.

    **Returns:**
    - 204: Event removed
    - 401: Not signed in / token expired
    - 502: Calendar provider failed
    """
    result = await DeleteCalendarEvent(calendar_service).execute(access_token, event_id)

    raise_for_error(result)
