"""
Tests for the filtered, paginated event queries.
"""

import pytest
from datetime import timedelta

from app.core.exceptions import InvalidQueryError
from app.db.event_query import EventFilter, Page, PageRequest, find_events
from app.models.event import EventStatus


@pytest.fixture
def seeded_events(make_user, make_event):
    """Five events owned by two users."""
    alice = make_user("alice")
    bob = make_user("bob")
    return [
        make_event(alice, title="Python Meetup", location="Belgrade", days_ahead=3, status=EventStatus.PUBLISHED),
        make_event(alice, title="Rust Workshop", location="Novi Sad", days_ahead=10),
        make_event(bob, title="python sprint", location="BELGRADE Hub", days_ahead=5, status=EventStatus.PUBLISHED),
        make_event(bob, title="Board Meeting", location="Nis", days_ahead=1, status=EventStatus.CANCELLED),
        make_event(bob, title="Retro", location="Belgrade", days_ahead=20, status=EventStatus.COMPLETED),
    ]


class TestPageRequest:
    """Test cases for page coordinates and sorting."""

    def test_negative_page_rejected(self):
        with pytest.raises(InvalidQueryError):
            PageRequest(page=-1, size=10)

    def test_zero_size_rejected(self):
        with pytest.raises(InvalidQueryError):
            PageRequest(page=0, size=0)

    def test_unknown_sort_field_rejected(self):
        with pytest.raises(InvalidQueryError):
            PageRequest(sort_by="password").order_by()

    def test_unknown_sort_direction_rejected(self):
        with pytest.raises(InvalidQueryError):
            PageRequest(sort_dir="sideways").order_by()

    def test_offset(self):
        assert PageRequest(page=3, size=7).offset == 21

    def test_page_beyond_addressable_rows_rejected(self):
        with pytest.raises(InvalidQueryError):
            PageRequest(page=10 ** 18, size=10)

    def test_size_beyond_addressable_rows_rejected(self):
        with pytest.raises(InvalidQueryError):
            PageRequest(page=0, size=2 ** 63)

    def test_largest_addressable_page_accepted(self):
        assert PageRequest(page=2 ** 62 - 1, size=2).offset == 2 ** 63 - 4


class TestPageMetadata:
    """Test cases for page descriptor flags."""

    def test_middle_page(self):
        page = Page(content=[1, 2], page=1, size=2, total_elements=5)

        assert page.total_pages == 3
        assert page.first is False
        assert page.last is False

    def test_last_page(self):
        page = Page(content=[5], page=2, size=2, total_elements=5)

        assert page.last is True

    def test_empty_result_is_first_and_last(self):
        page = Page(content=[], page=0, size=10, total_elements=0)

        assert page.total_pages == 0
        assert page.first is True
        assert page.last is True


class TestFindEvents:
    """Test cases for find_events."""

    def test_no_filters_lists_everything(self, db_session, seeded_events):
        page = find_events(db_session, EventFilter(), PageRequest(page=0, size=10))

        assert page.total_elements == 5
        assert [e.id for e in page.content] == sorted(e.id for e in seeded_events)

    def test_blank_filters_count_as_absent(self, db_session, seeded_events):
        page = find_events(db_session, EventFilter(title="   ", location=""), PageRequest())

        assert page.total_elements == 5

    def test_title_is_case_insensitive_substring(self, db_session, seeded_events):
        page = find_events(db_session, EventFilter(title="PYTHON"), PageRequest())

        assert {e.title for e in page.content} == {"Python Meetup", "python sprint"}

    def test_title_is_trimmed(self, db_session, seeded_events):
        page = find_events(db_session, EventFilter(title="  meetup "), PageRequest())

        assert [e.title for e in page.content] == ["Python Meetup"]

    def test_filters_are_conjunctive(self, db_session, seeded_events):
        filters = EventFilter(location="belgrade", status=EventStatus.PUBLISHED)
        page = find_events(db_session, filters, PageRequest())

        assert {e.title for e in page.content} == {"Python Meetup", "python sprint"}

    def test_status_only_filter(self, db_session, seeded_events):
        page = find_events(db_session, EventFilter(status=EventStatus.CANCELLED), PageRequest())

        assert [e.title for e in page.content] == ["Board Meeting"]

    def test_date_bounds_are_inclusive(self, db_session, seeded_events):
        target = seeded_events[2]
        filters = EventFilter(from_date=target.event_date, to_date=target.event_date)
        page = find_events(db_session, filters, PageRequest())

        assert [e.id for e in page.content] == [target.id]

    def test_from_date_only(self, db_session, seeded_events, clock):
        filters = EventFilter(from_date=clock() + timedelta(days=6))
        page = find_events(db_session, filters, PageRequest())

        assert {e.title for e in page.content} == {"Rust Workshop", "Retro"}

    def test_inverted_date_range_yields_empty_page(self, db_session, seeded_events, clock):
        filters = EventFilter(
            from_date=clock() + timedelta(days=30),
            to_date=clock() + timedelta(days=2)
        )
        page = find_events(db_session, filters, PageRequest())

        assert page.content == []
        assert page.total_elements == 0
        assert page.total_pages == 0

    def test_sort_by_event_date_descending(self, db_session, seeded_events):
        page = find_events(db_session, EventFilter(), PageRequest(sort_by="eventDate", sort_dir="DESC"))

        dates = [e.event_date for e in page.content]
        assert dates == sorted(dates, reverse=True)

    def test_sort_by_snake_case_name(self, db_session, seeded_events):
        page = find_events(db_session, EventFilter(), PageRequest(sort_by="title"))

        titles = [e.title for e in page.content]
        assert titles == sorted(titles)

    def test_bad_sort_field_fails_with_filters_too(self, db_session, seeded_events):
        with pytest.raises(InvalidQueryError):
            find_events(db_session, EventFilter(title="python"), PageRequest(sort_by="nope"))

    @pytest.mark.parametrize("page_index,size", [(0, 1), (0, 2), (1, 2), (2, 2), (0, 5), (1, 3), (4, 1)])
    def test_pagination_page_flags(self, db_session, seeded_events, page_index, size):
        page = find_events(db_session, EventFilter(), PageRequest(page=page_index, size=size))

        assert len(page.content) <= size
        assert page.total_elements == 5
        assert page.first == (page_index == 0)
        assert page.last == (page_index == page.total_pages - 1)

    def test_page_past_the_end(self, db_session, seeded_events):
        page = find_events(db_session, EventFilter(), PageRequest(page=10, size=2))

        assert page.content == []
        assert page.total_elements == 5
        assert page.last is True
