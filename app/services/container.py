"""
Service container.

Holds every long-lived collaborator of the application. It is built once
during startup and attached to ``app.state``; request handlers obtain it
through the dependencies in ``app.api.dependencies``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional
import logging

from ..core.config import AppConfig
from ..db.database import DatabaseConnection
from .event_service import EventService
from .user_service import UserService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Explicit dependency set for request handlers."""
    database: DatabaseConnection
    user_service: UserService
    event_service: EventService
    cors_origins: List[str] = field(default_factory=list)
    config: Optional[AppConfig] = None


def create_container(
    database_url: str,
    clock: Callable[[], datetime] = datetime.now,
    cors_origins: Optional[List[str]] = None,
    config: Optional[AppConfig] = None,
) -> ServiceContainer:
    """
    Connect to the database, create tables and wire the services.

    Args:
        database_url: SQLAlchemy database URL
        clock: Source of the current instant for timestamps and "upcoming"
        cors_origins: Origins allowed by the CORS middleware
        config: Application configuration, kept for shutdown

    Returns:
        Ready-to-use service container
    """
    database = DatabaseConnection()
    database.initialize(database_url)
    database.create_tables()

    container = ServiceContainer(
        database=database,
        user_service=UserService(clock),
        event_service=EventService(clock),
        cors_origins=list(cors_origins or []),
        config=config,
    )
    logger.info("Service container created")
    return container


async def create_container_from_config(config: AppConfig) -> ServiceContainer:
    """Build the container from the values held in ``config``."""
    database_url = await config.get_database_url()
    cors_origins = await config.get_cors_origins()
    return create_container(database_url, cors_origins=cors_origins, config=config)
