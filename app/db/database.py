"""
Database connection and repositories for the Event Manager Service.
"""

import logging
from datetime import datetime
from typing import Generator, Optional
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..models.base import Base
from ..models.user import User
from ..models.event import Event, EventStatus
from .event_query import EventFilter, Page, PageRequest, find_events, paginate

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """
    Database connection manager.
    Owns the engine and the session factory; one instance per process.
    """

    def __init__(self):
        self.engine = None
        self.SessionLocal = None
        self._initialized = False

    def initialize(self, database_url: str):
        """
        Create the engine and the session factory.

        Args:
            database_url: SQLAlchemy URL; SQLite URLs get a single shared connection
        """
        try:
            engine_options = {"pool_pre_ping": True, "echo": False}
            if database_url.startswith("sqlite"):
                engine_options["connect_args"] = {"check_same_thread": False}
                engine_options["poolclass"] = StaticPool
            else:
                engine_options["pool_recycle"] = 300

            self.engine = create_engine(database_url, **engine_options)

            self.SessionLocal = sessionmaker(
                autocommit=False,
                autoflush=False,
                bind=self.engine
            )

            self._initialized = True
            logger.info(f"Database engine ready ({self.engine.dialect.name})")

        except Exception as e:
            logger.error(f"Could not create database engine: {e}")
            raise

    def get_session(self) -> Generator[Session, None, None]:
        """
        Get database session. Rolls back on any error raised while in use.

        Yields:
            SQLAlchemy database session
        """
        if not self._initialized:
            raise RuntimeError("Database not initialized")

        session = self.SessionLocal()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_tables(self):
        """Create the users and events tables if they do not exist."""
        if not self._initialized:
            raise RuntimeError("Database not initialized")

        try:
            Base.metadata.create_all(bind=self.engine)
            logger.info("Schema ready: users, events")
        except Exception as e:
            logger.error(f"Schema creation failed: {e}")
            raise

    def health_check(self) -> bool:
        """
        Check database health.

        Returns:
            True if a trivial query succeeds
        """
        if not self._initialized:
            return False

        try:
            session = self.SessionLocal()
            try:
                session.execute(text("SELECT 1"))
                return True
            finally:
                session.close()
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    def dispose(self):
        """Release pooled connections."""
        if self.engine is not None:
            self.engine.dispose()


class BaseRepository:
    """
    Base repository with common persistence operations.
    Every write commits; a failed commit is rolled back before re-raising.
    """

    def __init__(self, session: Session, model_class):
        self.session = session
        self.model_class = model_class

    def add(self, entity):
        """Persist a new entity."""
        self.session.add(entity)
        return self.save(entity)

    def save(self, entity):
        """Commit pending changes of an entity and reload it."""
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(entity)
        return entity

    def get_by_id(self, entity_id: int):
        """Get entity by ID."""
        return self.session.get(self.model_class, entity_id)

    def get_all(self) -> list:
        """Get all entities ordered by ID."""
        return self.session.query(self.model_class).order_by(self.model_class.id).all()

    def delete(self, entity):
        """Delete an entity."""
        self.session.delete(entity)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def count(self) -> int:
        """Number of stored rows."""
        return self.session.query(self.model_class).count()


class UserRepository(BaseRepository):
    """
    Lookups by the unique user columns.
    """

    def __init__(self, session: Session):
        super().__init__(session, User)

    def get_by_email(self, email: str) -> Optional[User]:
        """User with this exact email, or None."""
        return self.session.query(User).filter(User.email == email).first()

    def get_by_username(self, username: str) -> Optional[User]:
        """User with this exact username, or None."""
        return self.session.query(User).filter(User.username == username).first()

    def exists_by_username(self, username: str) -> bool:
        return self.session.query(
            self.session.query(User).filter(User.username == username).exists()
        ).scalar()

    def exists_by_email(self, email: str) -> bool:
        return self.session.query(
            self.session.query(User).filter(User.email == email).exists()
        ).scalar()


class EventRepository(BaseRepository):
    """
    Event listings. Every listing returns a Page.
    """

    def __init__(self, session: Session):
        super().__init__(session, Event)

    def find_page(self, filters: EventFilter, page_request: PageRequest) -> Page:
        """Get a filtered, sorted page of events."""
        return find_events(self.session, filters, page_request)

    def find_by_owner(self, user_id: int, page_request: PageRequest) -> Page:
        """Get a page of events created by a user."""
        query = self.session.query(Event).filter(Event.created_by == user_id)
        return paginate(query, page_request, order_by=Event.id.asc())

    def find_by_status(self, status: EventStatus, page_request: PageRequest) -> Page:
        """Get a page of events with the given status."""
        query = self.session.query(Event).filter(Event.status == EventStatus(status).value)
        return paginate(query, page_request, order_by=Event.id.asc())

    def find_published_after(self, moment: datetime, page_request: PageRequest) -> Page:
        """Get a page of published events taking place after ``moment``, soonest first."""
        query = self.session.query(Event).filter(
            Event.status == EventStatus.PUBLISHED.value,
            Event.event_date > moment
        )
        return paginate(query, page_request, order_by=Event.event_date.asc())

    def count_by_owner(self, user_id: int) -> int:
        """Count events created by a user."""
        return self.session.query(Event).filter(Event.created_by == user_id).count()
