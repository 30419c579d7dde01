"""
Dependency injection for the Event Manager Service.
Provides database sessions, repositories and services from the service container.
"""

from typing import Generator
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..db.database import EventRepository, UserRepository
from ..services.container import ServiceContainer
from ..services.event_service import EventService
from ..services.user_service import UserService


def get_container(request: Request) -> ServiceContainer:
    """
    Get the service container built at startup.

    Raises:
        RuntimeError: If the application has not been started
    """
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("Service container not initialized")
    return container


def get_database_session(
    container: ServiceContainer = Depends(get_container)
) -> Generator[Session, None, None]:
    """
    Get database session dependency. One session per request.

    Yields:
        SQLAlchemy database session
    """
    yield from container.database.get_session()


def get_user_repository(session: Session = Depends(get_database_session)) -> UserRepository:
    return UserRepository(session)


def get_event_repository(session: Session = Depends(get_database_session)) -> EventRepository:
    return EventRepository(session)


def get_user_service(container: ServiceContainer = Depends(get_container)) -> UserService:
    return container.user_service


def get_event_service(container: ServiceContainer = Depends(get_container)) -> EventService:
    return container.event_service
