"""
Shared Pydantic schemas: wire conventions, page descriptor and error body.
"""

from datetime import datetime
from typing import Callable, Generic, List, Optional, TypeVar
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..db.event_query import Page

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base schema. Fields are snake_case in Python and camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PageResponse(ApiModel, Generic[T]):
    """Page descriptor returned by every paginated listing."""
    content: List[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool

    @classmethod
    def from_page(cls, page: Page, mapper: Callable) -> "PageResponse":
        """Build the descriptor from a query page, converting each entity."""
        return cls(
            content=[mapper(item) for item in page.content],
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            first=page.first,
            last=page.last,
        )


class ErrorResponse(BaseModel):
    """Schema for error responses."""
    timestamp: datetime
    status: int
    error: str
    message: str
    exception: Optional[str] = None
    cause: Optional[str] = None
