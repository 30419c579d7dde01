"""
Tests for EventService: creation, ownership-gated mutation and listings.
"""

import pytest
from datetime import datetime, timedelta

from app.core.exceptions import NotFoundError, UnauthorizedError
from app.db.event_query import EventFilter, PageRequest
from app.models.event import EventStatus
from app.schemas.event import EventRequest
from app.services.event_service import EventService


@pytest.fixture
def event_service(clock):
    return EventService(clock)


@pytest.fixture
def owner(make_user):
    return make_user("alice")


@pytest.fixture
def intruder(make_user):
    return make_user("mallory")


@pytest.fixture
def existing_event(owner, make_event):
    return make_event(owner, title="Launch", location="HQ", description="Original")


def event_request(**overrides):
    data = {
        "title": "Launch",
        "description": None,
        "event_date": datetime.now() + timedelta(days=1),
        "location": "HQ",
    }
    data.update(overrides)
    return EventRequest(**data)


def snapshot(event):
    return (event.title, event.description, event.location, event.status, event.event_date, event.updated_at)


class TestCreateEvent:
    """Test cases for event creation."""

    def test_create_defaults_to_draft(self, event_service, event_repo, user_repo, owner, clock):
        event = event_service.create_event(event_request(), owner.id, event_repo, user_repo)

        assert event.id is not None
        assert event.status == EventStatus.DRAFT
        assert event.created_by == owner.id
        assert event.owner.username == "alice"
        assert event.created_at == clock()

    def test_create_with_explicit_status(self, event_service, event_repo, user_repo, owner):
        request = event_request(status=EventStatus.PUBLISHED)

        event = event_service.create_event(request, owner.id, event_repo, user_repo)

        assert event.status == EventStatus.PUBLISHED

    def test_create_with_null_status(self, event_service, event_repo, user_repo, owner):
        event = event_service.create_event(event_request(status=None), owner.id, event_repo, user_repo)

        assert event.status == EventStatus.DRAFT

    def test_create_for_missing_user(self, event_service, event_repo, user_repo):
        with pytest.raises(NotFoundError):
            event_service.create_event(event_request(), 999, event_repo, user_repo)

        assert event_repo.count() == 0


class TestOwnershipGatedMutations:
    """Mutations check existence first, then ownership, then write."""

    def test_update_by_owner(self, event_service, event_repo, owner, existing_event, clock):
        clock.advance(hours=1)
        new_date = datetime.now() + timedelta(days=7)
        request = event_request(
            title="Relaunch", description="New", event_date=new_date,
            location="Annex", status=EventStatus.PUBLISHED
        )

        event = event_service.update_event(existing_event.id, request, owner.id, event_repo)

        assert event.title == "Relaunch"
        assert event.description == "New"
        assert event.location == "Annex"
        assert event.status == EventStatus.PUBLISHED
        assert event.created_by == owner.id
        assert event.updated_at == clock()
        assert event.created_at < event.updated_at

    def test_update_by_other_user(self, event_service, event_repo, intruder, existing_event):
        before = snapshot(existing_event)

        with pytest.raises(UnauthorizedError):
            event_service.update_event(existing_event.id, event_request(title="Hacked"), intruder.id, event_repo)

        event_repo.session.expire_all()
        assert snapshot(event_repo.get_by_id(existing_event.id)) == before

    def test_update_missing_event(self, event_service, event_repo, intruder):
        """A missing event is reported as not found, whoever asks."""
        with pytest.raises(NotFoundError):
            event_service.update_event(999, event_request(), intruder.id, event_repo)

    def test_status_change_by_owner(self, event_service, event_repo, owner, existing_event):
        event = event_service.update_status(existing_event.id, EventStatus.PUBLISHED, owner.id, event_repo)

        assert event.status == EventStatus.PUBLISHED
        assert event.title == "Launch"

    def test_status_change_any_to_any(self, event_service, event_repo, owner, existing_event):
        for status in (EventStatus.COMPLETED, EventStatus.DRAFT, EventStatus.CANCELLED, EventStatus.PUBLISHED):
            event = event_service.update_status(existing_event.id, status, owner.id, event_repo)
            assert event.status == status

    def test_status_change_by_other_user(self, event_service, event_repo, intruder, existing_event):
        with pytest.raises(UnauthorizedError):
            event_service.update_status(existing_event.id, EventStatus.CANCELLED, intruder.id, event_repo)

        event_repo.session.expire_all()
        assert event_repo.get_by_id(existing_event.id).status == EventStatus.DRAFT

    def test_status_change_missing_event(self, event_service, event_repo, owner):
        with pytest.raises(NotFoundError):
            event_service.update_status(999, EventStatus.PUBLISHED, owner.id, event_repo)

    def test_delete_by_owner(self, event_service, event_repo, owner, existing_event):
        event_id = existing_event.id

        event_service.delete_event(event_id, owner.id, event_repo)

        with pytest.raises(NotFoundError):
            event_service.find_by_id(event_id, event_repo)

    def test_delete_by_other_user(self, event_service, event_repo, intruder, existing_event):
        with pytest.raises(UnauthorizedError):
            event_service.delete_event(existing_event.id, intruder.id, event_repo)

        assert event_repo.get_by_id(existing_event.id) is not None

    def test_delete_missing_event(self, event_service, event_repo, intruder):
        with pytest.raises(NotFoundError):
            event_service.delete_event(999, intruder.id, event_repo)


class TestEventListings:
    """Test cases for the read paths."""

    def test_find_all_delegates_filters(self, event_service, event_repo, owner, make_event):
        make_event(owner, title="Python Meetup")
        make_event(owner, title="Go Night")

        page = event_service.find_all(EventFilter(title="python"), PageRequest(), event_repo)

        assert [e.title for e in page.content] == ["Python Meetup"]

    def test_find_by_user_id(self, event_service, event_repo, owner, intruder, make_event):
        make_event(owner)
        make_event(intruder)

        page = event_service.find_by_user_id(owner.id, 0, 10, event_repo)

        assert page.total_elements == 1
        assert page.content[0].created_by == owner.id

    def test_find_by_status(self, event_service, event_repo, owner, make_event):
        make_event(owner, status=EventStatus.CANCELLED)
        make_event(owner, status=EventStatus.DRAFT)

        page = event_service.find_by_status(EventStatus.CANCELLED, 0, 10, event_repo)

        assert [e.status for e in page.content] == [EventStatus.CANCELLED]

    def test_upcoming_uses_service_clock(self, event_service, event_repo, owner, make_event, clock):
        soon = make_event(owner, title="Soon", days_ahead=1, status=EventStatus.PUBLISHED)
        later = make_event(owner, title="Later", days_ahead=4, status=EventStatus.PUBLISHED)

        page = event_service.find_upcoming_published_events(0, 10, event_repo)
        assert [e.id for e in page.content] == [soon.id, later.id]

        clock.advance(days=2)
        page = event_service.find_upcoming_published_events(0, 10, event_repo)
        assert [e.id for e in page.content] == [later.id]
