"""
Event management service.
Creation, ownership-gated mutation and the event listings.
"""

from datetime import datetime
from typing import Callable
import logging

from ..core.exceptions import NotFoundError
from ..db.database import EventRepository, UserRepository
from ..db.event_query import EventFilter, Page, PageRequest
from ..models.event import Event, EventStatus
from ..schemas.event import EventRequest
from .ownership import ensure_owner

logger = logging.getLogger(__name__)


class EventService:
    """
    Event management service.

    Every mutation resolves the event first (NotFoundError), then checks
    ownership (UnauthorizedError), and only then changes and persists fields.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock

    def create_event(
        self,
        event_data: EventRequest,
        user_id: int,
        event_repo: EventRepository,
        user_repo: UserRepository
    ) -> Event:
        """
        Create a new event owned by ``user_id``.

        Args:
            event_data: Event creation data
            user_id: ID of the creating user
            event_repo: Event repository
            user_repo: User repository

        Returns:
            Created event

        Raises:
            NotFoundError: If the user does not exist
        """
        owner = user_repo.get_by_id(user_id)
        if owner is None:
            logger.warning(f"Event creation failed: user {user_id} not found")
            raise NotFoundError(f"User with id {user_id} not found")

        event = Event.build(
            title=event_data.title,
            description=event_data.description,
            event_date=event_data.event_date,
            location=event_data.location,
            status=event_data.status,
            created_by=owner.id,
            now=self.clock(),
        )
        event = event_repo.add(event)

        logger.info(f"Event created successfully: {event.id} by user {user_id}")
        return event

    def find_by_id(self, event_id: int, event_repo: EventRepository) -> Event:
        """Get event by ID or raise NotFoundError."""
        event = event_repo.get_by_id(event_id)
        if event is None:
            raise NotFoundError(f"Event with id {event_id} not found")
        return event

    def find_all(self, filters: EventFilter, page_request: PageRequest, event_repo: EventRepository) -> Page:
        """Get a filtered, sorted page of events."""
        return event_repo.find_page(filters, page_request)

    def find_by_user_id(self, user_id: int, page: int, size: int, event_repo: EventRepository) -> Page:
        """Get a page of events created by a user."""
        return event_repo.find_by_owner(user_id, PageRequest(page=page, size=size))

    def find_by_status(self, status: EventStatus, page: int, size: int, event_repo: EventRepository) -> Page:
        """Get a page of events with the given status."""
        return event_repo.find_by_status(status, PageRequest(page=page, size=size))

    def find_upcoming_published_events(self, page: int, size: int, event_repo: EventRepository) -> Page:
        """Get a page of published events that have not started yet, soonest first."""
        return event_repo.find_published_after(self.clock(), PageRequest(page=page, size=size))

    def update_event(
        self,
        event_id: int,
        event_data: EventRequest,
        user_id: int,
        event_repo: EventRepository
    ) -> Event:
        """
        Replace the editable fields of an event.

        Raises:
            NotFoundError: If the event does not exist
            UnauthorizedError: If ``user_id`` is not the creator
        """
        event = self.find_by_id(event_id, event_repo)
        ensure_owner(event, user_id, "update")

        event.apply_changes(
            title=event_data.title,
            description=event_data.description,
            event_date=event_data.event_date,
            location=event_data.location,
            status=event_data.status,
            now=self.clock(),
        )
        event = event_repo.save(event)

        logger.info(f"Event {event_id} updated by user {user_id}")
        return event

    def update_status(
        self,
        event_id: int,
        status: EventStatus,
        user_id: int,
        event_repo: EventRepository
    ) -> Event:
        """
        Change only the status of an event.

        Raises:
            NotFoundError: If the event does not exist
            UnauthorizedError: If ``user_id`` is not the creator
        """
        event = self.find_by_id(event_id, event_repo)
        ensure_owner(event, user_id, "change the status of")

        old_status = event.status
        event.change_status(status, self.clock())
        event = event_repo.save(event)

        logger.info(f"Event {event_id} status changed from {old_status} to {event.status} by user {user_id}")
        return event

    def delete_event(self, event_id: int, user_id: int, event_repo: EventRepository):
        """
        Delete an event.

        Raises:
            NotFoundError: If the event does not exist
            UnauthorizedError: If ``user_id`` is not the creator
        """
        event = self.find_by_id(event_id, event_repo)
        ensure_owner(event, user_id, "delete")

        event_repo.delete(event)
        logger.info(f"Event {event_id} deleted by user {user_id}")
