"""Data Transfer Objects for Calendar Use Cases"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class CalendarEventDTO(BaseModel):
    """
    Command DTO for creating a calendar event

    Used as input to CreateCalendarEvent.
    """

    title: str = Field(..., description="Event title")
    description: Optional[str] = Field(default=None, description="Event details")
    start: datetime = Field(..., description="Start date-time")
    end: datetime = Field(..., description="End date-time")
    time_zone: str = Field(default="America/Sao_Paulo", description="IANA time zone")


class CalendarEventSummaryDTO(BaseModel):
    """Upcoming event as listed to the caller"""

    id: str
    title: str
    start: str = Field(..., description="ISO date-time, or ISO date for all-day events")


class CreatedEventDTO(BaseModel):
    id: str
