"""
Test configuration and fixtures for the Event Manager Service.
"""

import os
import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient

# Set test environment variables before importing app
os.environ.setdefault("ZERO_TOKEN", "test_zero_token")

from app.main import app
from app.db.database import EventRepository, UserRepository
from app.models.base import Base
from app.models.event import Event, EventStatus
from app.models.user import User, UserRole
from app.services.container import create_container

# In-memory SQLite shared through a StaticPool
TEST_DATABASE_URL = "sqlite:///:memory:"


class FixedClock:
    """Clock that returns a settable instant."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    """Clock frozen at the current instant."""
    return FixedClock(datetime.now().replace(microsecond=0))


@pytest.fixture
def container(clock):
    """Service container over a fresh in-memory database."""
    test_container = create_container(TEST_DATABASE_URL, clock=clock, cors_origins=["http://localhost:3000"])
    yield test_container
    Base.metadata.drop_all(bind=test_container.database.engine)
    test_container.database.dispose()


@pytest.fixture
def db_session(container):
    """Create a database session for testing."""
    session = container.database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_repo(db_session) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def event_repo(db_session) -> EventRepository:
    return EventRepository(db_session)


@pytest.fixture
def client(container):
    """Create test client with the test container installed."""
    app.state.container = container
    yield TestClient(app)
    app.state.container = None
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(user_repo, clock):
    """Persist a user directly through the repository."""
    def _make_user(username="alice", email=None, password="secret1", role=UserRole.USER):
        user = User.build(
            username=username,
            email=email or f"{username}@example.com",
            password=password,
            role=role,
            now=clock(),
        )
        return user_repo.add(user)
    return _make_user


@pytest.fixture
def make_event(event_repo, clock):
    """Persist an event directly through the repository."""
    def _make_event(owner, title="Launch", location="HQ", days_ahead=1,
                    status=EventStatus.DRAFT, description=None):
        event = Event.build(
            title=title,
            description=description,
            event_date=clock() + timedelta(days=days_ahead),
            location=location,
            status=status,
            created_by=owner.id,
            now=clock(),
        )
        return event_repo.add(event)
    return _make_event


@pytest.fixture
def sample_user_data():
    """Sample user payload for API tests."""
    return {
        "username": "alice",
        "email": "a@x.com",
        "password": "secret1",
        "role": "USER"
    }


@pytest.fixture
def sample_event_data():
    """Sample event payload for API tests."""
    return {
        "title": "Launch",
        "description": "Product launch party",
        "eventDate": (datetime.now() + timedelta(days=1)).replace(microsecond=0).isoformat(),
        "location": "HQ"
    }
