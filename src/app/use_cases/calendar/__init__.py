"""Calendar use cases"""
from .events import CreateCalendarEvent, DeleteCalendarEvent, ListUpcomingEvents
from .dtos import CalendarEventDTO, CalendarEventSummaryDTO, CreatedEventDTO

__all__ = [
    "CreateCalendarEvent",
    "DeleteCalendarEvent",
    "ListUpcomingEvents",
    "CalendarEventDTO",
    "CalendarEventSummaryDTO",
    "CreatedEventDTO",
]
