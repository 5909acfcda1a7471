"""Calendar Event Use Cases

Thin wrappers over the external calendar provider. Each use case checks the
caller's access token and maps provider failures onto error codes.
"""

import logging
from typing import Awaitable, Callable, List, Optional, TypeVar
from libs.result import Result, Return, Error
from src.app.services.calendar_service import CalendarService, CalendarAuthError
from .dtos import CalendarEventDTO, CalendarEventSummaryDTO, CreatedEventDTO

T = TypeVar("T")

logger = logging.getLogger(__name__)

UNAUTHENTICATED_MESSAGE = (
    "You are not logged in or your session has expired. Sign in again to use the calendar."
)


def _unauthenticated(reason: str) -> Error:
    return Error(code="UNAUTHENTICATED", message=UNAUTHENTICATED_MESSAGE, reason=reason)


async def _call_provider(
    access_token: Optional[str],
    action: str,
    call: Callable[[str], Awaitable[T]],
) -> Result[T]:
    if not access_token:
        return Return.err(_unauthenticated("No access token supplied"))

    try:
        return Return.ok(await call(access_token))
    except CalendarAuthError as e:
        logger.info(f"Calendar provider rejected access token while trying to {action}: {e}")
        return Return.err(_unauthenticated(str(e)))
    except Exception as e:
        logger.error(f"Calendar provider failed to {action}: {e}")
        return Return.err(
            Error(
                code="CALENDAR_REQUEST_FAILED",
                message=f"Failed to {action}",
                reason=str(e),
            )
        )


class CreateCalendarEvent:
    """Use Case: Create an event in the caller's calendar"""

    def __init__(self, calendar_service: CalendarService):
        self.calendar_service = calendar_service

    async def execute(
        self, access_token: Optional[str], event: CalendarEventDTO
    ) -> Result[CreatedEventDTO]:
        result = await _call_provider(
            access_token,
            "create event",
            lambda token: self.calendar_service.create_event(token, event),
        )
        if result.is_err():
            return result
        return Return.ok(CreatedEventDTO(id=result.value))


class DeleteCalendarEvent:
    """Use Case: Delete an event from the caller's calendar"""

    def __init__(self, calendar_service: CalendarService):
        self.calendar_service = calendar_service

    async def execute(self, access_token: Optional[str], event_id: str) -> Result[None]:
        return await _call_provider(
            access_token,
            f"delete event {event_id}",
            lambda token: self.calendar_service.delete_event(token, event_id),
        )


class ListUpcomingEvents:
    """Use Case: List the caller's upcoming events, soonest first"""

    def __init__(self, calendar_service: CalendarService, max_results: int = 10):
        self.calendar_service = calendar_service
        self.max_results = max_results

    async def execute(self, access_token: Optional[str]) -> Result[List[CalendarEventSummaryDTO]]:
        return await _call_provider(
            access_token,
            "list upcoming events",
            lambda token: self.calendar_service.list_upcoming_events(token, self.max_results),
        )
