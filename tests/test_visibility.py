from datetime import datetime, timedelta, timezone
from uuid import uuid4

from blog_api.models.post import Post
from blog_api.services.visibility import is_publicly_visible, is_visible

NOW = datetime(2026, 10, 18, 12, 0, 0)
OWNER = uuid4()
STRANGER = uuid4()


def _post(is_draft: bool, published_at: datetime | None) -> Post:
    return Post(id=1, user_id=OWNER, title="T", content="C", is_draft=is_draft, published_at=published_at)


ALL_STATES = [
    _post(True, None),
    _post(True, NOW - timedelta(hours=1)),
    _post(True, NOW + timedelta(days=1)),
    _post(False, None),
    _post(False, NOW - timedelta(hours=1)),
    _post(False, NOW + timedelta(days=1)),
]


def test_owner_always_sees_their_post():
    for post in ALL_STATES:
        assert is_visible(post, OWNER, NOW) is True


def test_drafts_hidden_from_everyone_else():
    for post in ALL_STATES:
        if post.is_draft:
            assert is_visible(post, STRANGER, NOW) is False
            assert is_visible(post, None, NOW) is False


def test_published_post_without_date_is_public():
    post = _post(False, None)
    assert is_visible(post, None, NOW) is True
    assert is_visible(post, STRANGER, NOW) is True


def test_published_post_in_the_past_is_public():
    post = _post(False, NOW - timedelta(minutes=1))
    assert is_visible(post, STRANGER, NOW) is True
    assert is_visible(post, None, NOW) is True


def test_published_at_exactly_now_is_public():
    assert is_publicly_visible(_post(False, NOW), NOW) is True


def test_future_post_hidden_from_non_owner():
    post = _post(False, NOW + timedelta(seconds=1))
    assert is_visible(post, STRANGER, NOW) is False
    assert is_visible(post, None, NOW) is False


def test_visibility_follows_the_clock():
    post = _post(False, NOW + timedelta(hours=1))
    assert is_publicly_visible(post, NOW) is False
    assert is_publicly_visible(post, NOW + timedelta(hours=2)) is True


def test_aware_timestamps_are_compared_in_utc():
    # 13:30 at UTC+2 is 11:30 UTC, before NOW
    tz = timezone(timedelta(hours=2))
    post = _post(False, datetime(2026, 10, 18, 13, 30, tzinfo=tz))
    assert is_publicly_visible(post, NOW) is True
    assert is_publicly_visible(post, datetime(2026, 10, 18, 13, 0, tzinfo=tz)) is False
