"""
Event model for the Event Manager Service.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin


class EventStatus(str, Enum):
    """Event status enumeration."""
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class Event(TimestampMixin, Base):
    """
    Event model. Each event belongs to exactly one user, its creator.
    """
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    event_date = Column(DateTime, nullable=False, index=True)
    location = Column(String(200), nullable=False)
    status = Column(String(20), nullable=False, default=EventStatus.DRAFT.value, index=True)
    created_by = Column("user_id", Integer, ForeignKey("users.id"), nullable=False, index=True)

    owner = relationship("User", lazy="joined")

    @classmethod
    def build(
        cls,
        title: str,
        description: Optional[str],
        event_date: datetime,
        location: str,
        status: Optional[EventStatus],
        created_by: int,
        now: datetime,
    ) -> "Event":
        """Create a new, not yet persisted event. Missing status means DRAFT."""
        event = cls(
            title=title,
            description=description,
            event_date=event_date,
            location=location,
            status=EventStatus(status or EventStatus.DRAFT).value,
            created_by=created_by,
        )
        event.stamp_created(now)
        return event

    def apply_changes(
        self,
        title: str,
        description: Optional[str],
        event_date: datetime,
        location: str,
        status: Optional[EventStatus],
        now: datetime,
    ):
        """Replace the editable fields. The owner is never changed here."""
        self.title = title
        self.description = description
        self.event_date = event_date
        self.location = location
        self.status = EventStatus(status or EventStatus.DRAFT).value
        self.touch(now)

    def change_status(self, status: EventStatus, now: datetime):
        """Set a new status. Any status may follow any other."""
        self.status = EventStatus(status).value
        self.touch(now)

    def is_owned_by(self, user_id: int) -> bool:
        return self.created_by == user_id

    def __repr__(self):
        return f"<Event(id={self.id}, title='{self.title}', location='{self.location}')>"
