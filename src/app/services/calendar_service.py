"""Calendar Service Interface

Defines the contract for the external calendar provider.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from src.app.use_cases.calendar.dtos import CalendarEventDTO, CalendarEventSummaryDTO


class CalendarAuthError(Exception):
    """The provider rejected the access token (absent, invalid or expired)"""


class CalendarService(ABC):
    """
    Service interface for calendar event operations

    Every call is made on behalf of the user owning access_token.
    Implementations raise CalendarAuthError when the provider rejects the
    token and any other exception for remaining failures.
    """

    @abstractmethod
    async def create_event(self, access_token: str, event: "CalendarEventDTO") -> str:
        """
        Create an event

        Args:
            access_token: OAuth access token of the user
            event: Event details

        Returns:
            Provider-assigned event ID
        """
        pass

    @abstractmethod
    async def delete_event(self, access_token: str, event_id: str) -> None:
        """
        Delete an event

        Args:
            access_token: OAuth access token of the user
            event_id: Provider event ID
        """
        pass

    @abstractmethod
    async def list_upcoming_events(
        self, access_token: str, max_results: int = 10
    ) -> List["CalendarEventSummaryDTO"]:
        """
        List upcoming events, soonest first

        Args:
            access_token: OAuth access token of the user
            max_results: Maximum number of events to return

        Returns:
            Titled events only, as summaries
        """
        pass
