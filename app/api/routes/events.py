"""
Event endpoints for the Event Manager Service.

Mutations take the acting user's id as the ``userId`` query parameter; only
the event's creator may update, re-status or delete it.
"""

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status

from ...db.database import EventRepository, UserRepository
from ...db.event_query import EventFilter, PageRequest
from ...models.event import EventStatus
from ...schemas.common import PageResponse
from ...schemas.event import EventRequest, EventResponse, to_local_naive
from ...services.event_service import EventService
from ..dependencies import get_event_repository, get_event_service, get_user_repository

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("", response_model=PageResponse[EventResponse])
def list_events(
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int = Query(10, ge=1, description="Page size"),
    sort_by: str = Query("id", alias="sortBy", description="Field to sort by"),
    sort_dir: str = Query("asc", alias="sortDir", description="Sort direction, asc or desc"),
    title: Optional[str] = Query(None, description="Case-insensitive title substring"),
    location: Optional[str] = Query(None, description="Case-insensitive location substring"),
    event_status: Optional[EventStatus] = Query(None, alias="status", description="Exact status"),
    from_date: Optional[datetime] = Query(None, alias="fromDate", description="Earliest event date, inclusive"),
    to_date: Optional[datetime] = Query(None, alias="toDate", description="Latest event date, inclusive"),
    event_service: EventService = Depends(get_event_service),
    event_repo: EventRepository = Depends(get_event_repository)
):
    """
    List events with pagination, sorting and optional filters.

    Returns:
        Page descriptor of events
    """
    filters = EventFilter(
        title=title,
        location=location,
        status=event_status,
        from_date=to_local_naive(from_date) if from_date else None,
        to_date=to_local_naive(to_date) if to_date else None,
    )
    page_request = PageRequest(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)

    result = event_service.find_all(filters, page_request, event_repo)
    return PageResponse.from_page(result, EventResponse.from_event)


@router.get("/upcoming", response_model=PageResponse[EventResponse])
def list_upcoming_events(
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int = Query(10, ge=1, description="Page size"),
    event_service: EventService = Depends(get_event_service),
    event_repo: EventRepository = Depends(get_event_repository)
):
    """List published events that have not started yet, soonest first."""
    result = event_service.find_upcoming_published_events(page, size, event_repo)
    return PageResponse.from_page(result, EventResponse.from_event)


@router.get("/user/{user_id}", response_model=PageResponse[EventResponse])
def list_events_by_user(
    user_id: int,
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int = Query(10, ge=1, description="Page size"),
    event_service: EventService = Depends(get_event_service),
    event_repo: EventRepository = Depends(get_event_repository)
):
    """List events created by a user."""
    result = event_service.find_by_user_id(user_id, page, size, event_repo)
    return PageResponse.from_page(result, EventResponse.from_event)


@router.get("/status/{event_status}", response_model=PageResponse[EventResponse])
def list_events_by_status(
    event_status: EventStatus,
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int = Query(10, ge=1, description="Page size"),
    event_service: EventService = Depends(get_event_service),
    event_repo: EventRepository = Depends(get_event_repository)
):
    """List events with the given status."""
    result = event_service.find_by_status(event_status, page, size, event_repo)
    return PageResponse.from_page(result, EventResponse.from_event)


@router.get("/{event_id}", response_model=EventResponse)
def get_event(
    event_id: int,
    event_service: EventService = Depends(get_event_service),
    event_repo: EventRepository = Depends(get_event_repository)
):
    """
    Get event by ID.

    Raises:
        NotFoundError: If event not found
    """
    event = event_service.find_by_id(event_id, event_repo)
    return EventResponse.from_event(event)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    event_data: EventRequest,
    user_id: int = Query(..., alias="userId", description="ID of the creating user"),
    event_service: EventService = Depends(get_event_service),
    event_repo: EventRepository = Depends(get_event_repository),
    user_repo: UserRepository = Depends(get_user_repository)
):
    """
    Create a new event owned by ``userId``.

    Raises:
        NotFoundError: If the user does not exist
    """
    event = event_service.create_event(event_data, user_id, event_repo, user_repo)
    return EventResponse.from_event(event)


@router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: int,
    event_data: EventRequest,
    user_id: int = Query(..., alias="userId", description="ID of the acting user"),
    event_service: EventService = Depends(get_event_service),
    event_repo: EventRepository = Depends(get_event_repository)
):
    """
    Replace an event's editable fields (creator only).

    Raises:
        NotFoundError: If event not found
        UnauthorizedError: If the acting user is not the creator
    """
    event = event_service.update_event(event_id, event_data, user_id, event_repo)
    return EventResponse.from_event(event)


@router.patch("/{event_id}/status", response_model=EventResponse)
def update_event_status(
    event_id: int,
    event_status: EventStatus = Query(..., alias="status", description="New status"),
    user_id: int = Query(..., alias="userId", description="ID of the acting user"),
    event_service: EventService = Depends(get_event_service),
    event_repo: EventRepository = Depends(get_event_repository)
):
    """Change an event's status (creator only)."""
    event = event_service.update_status(event_id, event_status, user_id, event_repo)
    return EventResponse.from_event(event)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: int,
    user_id: int = Query(..., alias="userId", description="ID of the acting user"),
    event_service: EventService = Depends(get_event_service),
    event_repo: EventRepository = Depends(get_event_repository)
):
    """Delete an event (creator only)."""
    event_service.delete_event(event_id, user_id, event_repo)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
