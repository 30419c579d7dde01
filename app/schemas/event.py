"""
Pydantic schemas for Event-related operations.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from ..models.event import Event, EventStatus
from .common import ApiModel


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class EventRequest(ApiModel):
    """Schema for creating or fully replacing an event."""
    title: str = Field(..., min_length=1, max_length=200, description="Event title")
    description: Optional[str] = Field(None, max_length=2000, description="Event description")
    event_date: datetime = Field(..., description="Event date and time, must be in the future")
    location: str = Field(..., min_length=1, max_length=200, description="Event location")
    status: Optional[EventStatus] = Field(EventStatus.DRAFT, description="Event status")

    @field_validator('title', 'location')
    @classmethod
    def validate_not_blank(cls, v):
        """Reject values made only of whitespace."""
        if not v.strip():
            raise ValueError('Value must not be blank')
        return v

    @field_validator('event_date')
    @classmethod
    def validate_event_date(cls, v):
        """Event date must lie in the future."""
        v = to_local_naive(v)
        if v <= datetime.now():
            raise ValueError('Event date must be in the future')
        return v


class EventResponse(ApiModel):
    """Schema for event response."""
    id: int
    title: str
    description: Optional[str] = None
    event_date: datetime
    location: str
    status: EventStatus
    created_by_id: int
    created_by_username: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_event(cls, event: Event) -> "EventResponse":
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            event_date=event.event_date,
            location=event.location,
            status=event.status,
            created_by_id=event.created_by,
            created_by_username=event.owner.username if event.owner is not None else None,
            created_at=event.created_at,
            updated_at=event.updated_at,
        )
