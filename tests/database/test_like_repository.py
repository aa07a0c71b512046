"""
Tests for LikeRepository.
"""

import pytest

from eventful.db.database import LikeRepository


@pytest.fixture
def like_repo(db_session):
    return LikeRepository(db_session)


class TestLikeRepository:
    """Test cases for liking and unliking events."""

    def test_like_creates_a_like(self, like_repo, event, user):
        like = like_repo.like(event, user)

        assert like.id is not None
        assert like.event_id == event.id
        assert like.user_id == user.id
        assert like_repo.count_for_event(event.id) == 1

    def test_liking_twice_returns_the_existing_like(self, like_repo, event, user):
        """Test that a user likes an event at most once."""
        first = like_repo.like(event, user)
        second = like_repo.like(event, user)

        assert second.id == first.id
        assert like_repo.count_for_event(event.id) == 1

    def test_likes_are_visible_through_the_associations(self, db_session, like_repo, event, user):
        like_repo.like(event, user)
        db_session.expire_all()

        assert user in event.likers
        assert event in user.liked_events

    def test_get_owned_requires_matching_user_and_event(self, like_repo, event, user, admin):
        """Test that a like is only found by its owner under its event."""
        like = like_repo.like(event, user)

        assert like_repo.get_owned(like.id, event.id, user.id) is like
        assert like_repo.get_owned(like.id, event.id, admin.id) is None
        assert like_repo.get_owned(like.id, event.id + 1, user.id) is None

    def test_unlike_removes_the_like(self, like_repo, event, user):
        like = like_repo.like(event, user)

        like_repo.unlike(like)

        assert like_repo.get_for_user(event.id, user.id) is None
        assert like_repo.count_for_event(event.id) == 0
