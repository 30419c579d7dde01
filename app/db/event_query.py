"""
Filtered, paginated queries over events.

The listing endpoint accepts any combination of free-text, status and date
range filters. With no filter at all the plain sorted listing is used and no
predicate is built.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from sqlalchemy.orm import Query, Session

from ..core.exceptions import InvalidQueryError
from ..models.event import Event, EventStatus

T = TypeVar("T")

# Accepts the attribute name and its camelCase wire spelling
SORTABLE_FIELDS = {
    "id": Event.id,
    "title": Event.title,
    "description": Event.description,
    "event_date": Event.event_date,
    "eventDate": Event.event_date,
    "location": Event.location,
    "status": Event.status,
    "created_at": Event.created_at,
    "createdAt": Event.created_at,
    "updated_at": Event.updated_at,
    "updatedAt": Event.updated_at,
}

SORT_DIRECTIONS = ("asc", "desc")

# Largest row position a signed 64-bit OFFSET/LIMIT can address
MAX_ROW_POSITION = 2 ** 63 - 1


@dataclass
class PageRequest:
    """Zero-based page coordinates plus ordering."""
    page: int = 0
    size: int = 10
    sort_by: str = "id"
    sort_dir: str = "asc"

    def __post_init__(self):
        if self.page < 0:
            raise InvalidQueryError("Page index must not be negative")
        if self.size < 1:
            raise InvalidQueryError("Page size must be at least 1")
        if (self.page + 1) * self.size > MAX_ROW_POSITION:
            raise InvalidQueryError(f"Page {self.page} of size {self.size} is out of range")

    @property
    def offset(self) -> int:
        return self.page * self.size

    def order_by(self):
        """Resolve the sort column and direction, failing on unknown names."""
        column = SORTABLE_FIELDS.get(self.sort_by)
        if column is None:
            raise InvalidQueryError(f"Cannot sort events by '{self.sort_by}'")

        direction = (self.sort_dir or "asc").lower()
        if direction not in SORT_DIRECTIONS:
            raise InvalidQueryError(f"Sort direction must be 'asc' or 'desc', got '{self.sort_dir}'")

        return column.desc() if direction == "desc" else column.asc()


@dataclass
class EventFilter:
    """Optional criteria for the event listing."""
    title: Optional[str] = None
    location: Optional[str] = None
    status: Optional[EventStatus] = None
    from_date: Optional[datetime] = None
    to_date: Optional[datetime] = None

    def is_empty(self) -> bool:
        return (
            _is_blank(self.title)
            and _is_blank(self.location)
            and self.status is None
            and self.from_date is None
            and self.to_date is None
        )


@dataclass
class Page(Generic[T]):
    """A slice of an ordered result set with pagination metadata."""
    content: List[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0

    @property
    def first(self) -> bool:
        return self.page == 0

    @property
    def last(self) -> bool:
        return self.page + 1 >= self.total_pages


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def apply_filters(query: Query, filters: EventFilter) -> Query:
    """
    Narrow an event query by every criterion in ``filters``.

    Title and location always take part in the predicate; when absent they are
    matched against an empty pattern, which every row satisfies.
    """
    title = filters.title.strip() if filters.title else ""
    location = filters.location.strip() if filters.location else ""

    query = query.filter(
        Event.title.ilike(f"%{title}%"),
        Event.location.ilike(f"%{location}%"),
    )

    if filters.status is not None:
        query = query.filter(Event.status == EventStatus(filters.status).value)
    if filters.from_date is not None:
        query = query.filter(Event.event_date >= filters.from_date)
    if filters.to_date is not None:
        query = query.filter(Event.event_date <= filters.to_date)

    return query


def paginate(query: Query, page_request: PageRequest, order_by=None) -> Page:
    """
    Run ``query`` for one page.

    Args:
        query: Unordered query over events
        page_request: Page coordinates; its sort settings are used unless
            ``order_by`` is given
        order_by: Explicit ordering clause

    Returns:
        Page of entities with the total count of the unpaged query
    """
    ordering = order_by if order_by is not None else page_request.order_by()

    total = query.order_by(None).count()
    items = (
        query.order_by(ordering)
        .offset(page_request.offset)
        .limit(page_request.size)
        .all()
    )

    return Page(
        content=items,
        page=page_request.page,
        size=page_request.size,
        total_elements=total,
    )


def find_events(session: Session, filters: EventFilter, page_request: PageRequest) -> Page:
    """Return one page of events matching ``filters``."""
    # Resolve ordering first so bad sort input fails before touching the store
    ordering = page_request.order_by()

    query = session.query(Event)
    if not filters.is_empty():
        query = apply_filters(query, filters)

    return paginate(query, page_request, order_by=ordering)
