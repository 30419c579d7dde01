"""
Declarative base shared by all Event Manager models.
"""

from datetime import datetime
from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class TimestampMixin:
    """
    Creation and modification timestamps.

    Timestamps are never filled in by the ORM; the service layer passes the
    current instant explicitly when it builds or changes an entity.
    """
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def stamp_created(self, now: datetime):
        """Set both timestamps for a freshly built entity."""
        self.created_at = now
        self.updated_at = now

    def touch(self, now: datetime):
        """Refresh the modification timestamp."""
        self.updated_at = now
