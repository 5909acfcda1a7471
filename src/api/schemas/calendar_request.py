"""Request schemas for Calendar API"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class CreateEventRequestSchema(BaseModel):
    """
    Request schema for creating a calendar event

    Used for POST /calendar/events endpoint.
    """

    title: str = Field(..., min_length=1, description="Event title")
    description: Optional[str] = Field(default=None, description="Event details")
    start: datetime = Field(..., description="Start date-time")
    end: datetime = Field(..., description="End date-time")
    time_zone: str = Field(default="America/Sao_Paulo", description="IANA time zone")

    @model_validator(mode="after")
    def validate_period(self):
        """Ensure the event does not end before it starts"""
        if self.end < self.start:
            raise ValueError("Event end must not be before its start")
        return self
