"""
Tests for EventRepository listing queries.
"""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal

from eventful.db.database import EventRepository


@pytest.fixture
def event_repo(db_session):
    return EventRepository(db_session)


@pytest.fixture
def timeline(event_repo, event_attributes):
    """Three past and three upcoming events, roughly a month apart."""
    now = datetime.now()
    events = {}
    for months in (-3, -2, -1, 1, 2, 3):
        events[months] = event_repo.create(event_attributes(
            name=f"Event {months}",
            starts_at=now + timedelta(days=30 * months),
        ))
    return events


class TestUpcomingEvents:
    """Test cases for EventRepository.upcoming."""

    def test_returns_upcoming_events_ordered_by_start(self, event_repo, timeline):
        """Test that only future events are listed, soonest first."""
        assert event_repo.upcoming() == [timeline[1], timeline[2], timeline[3]]

    def test_excludes_events_without_a_start(self, event_repo, event_attributes, timeline):
        event_repo.create(event_attributes(name="Unscheduled", starts_at=None))

        assert [event.name for event in event_repo.upcoming()] == ["Event 1", "Event 2", "Event 3"]

    def test_empty_when_there_are_no_events(self, event_repo):
        assert event_repo.upcoming() == []


class TestPastEvents:
    """Test cases for EventRepository.past."""

    def test_returns_past_events_ordered_by_start(self, event_repo, timeline):
        """Test that only started events are listed, earliest first."""
        assert event_repo.past() == [timeline[-3], timeline[-2], timeline[-1]]

    def test_past_and_upcoming_partition_scheduled_events(self, event_repo, timeline):
        past = event_repo.past()
        upcoming = event_repo.upcoming()

        assert not set(event.id for event in past) & set(event.id for event in upcoming)
        assert len(past) + len(upcoming) == event_repo.count()


class TestFreeEvents:
    """Test cases for EventRepository.free."""

    def test_returns_upcoming_free_events(self, event_repo, event_attributes):
        """Test that free events are upcoming and priced at zero."""
        now = datetime.now()
        later_free = event_repo.create(event_attributes(name="Later", price=0, starts_at=now + timedelta(days=20)))
        sooner_free = event_repo.create(event_attributes(name="Sooner", price=Decimal("0.00"), starts_at=now + timedelta(days=5)))
        event_repo.create(event_attributes(name="Paid", price=Decimal("15.00"), starts_at=now + timedelta(days=1)))
        event_repo.create(event_attributes(name="Past free", price=0, starts_at=now - timedelta(days=1)))

        assert event_repo.free() == [sooner_free, later_free]

    def test_every_free_event_is_free(self, event_repo, event_attributes, timeline):
        event_repo.create(event_attributes(name="Free", price=0))

        free = event_repo.free()

        assert len(free) == 1
        assert all(event.is_free and event.is_upcoming for event in free)


class TestNextStart:
    """Test cases for EventRepository.next_start."""

    def test_returns_the_soonest_upcoming_start(self, event_repo, timeline):
        assert event_repo.next_start() == timeline[1].starts_at

    def test_none_without_upcoming_events(self, event_repo, event_attributes):
        event_repo.create(event_attributes(starts_at=datetime.now() - timedelta(days=1)))

        assert event_repo.next_start() is None


class TestRecentEvents:
    """Test cases for EventRepository.recent."""

    def test_returns_the_given_number_of_recent_events(self, event_repo, timeline):
        """Test that the most recently started events come first."""
        assert event_repo.recent(2) == [timeline[-1], timeline[-2]]

    def test_defaults_to_three_events(self, event_repo, timeline):
        assert event_repo.recent() == [timeline[-1], timeline[-2], timeline[-3]]

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_returns_nothing(self, event_repo, timeline, limit):
        assert event_repo.recent(limit) == []

    def test_never_includes_upcoming_events(self, event_repo, timeline):
        recent = event_repo.recent(10)

        assert len(recent) == 3
        assert all(event.starts_at < datetime.now() for event in recent)
