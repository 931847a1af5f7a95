"""Post visibility policy.

The owner always sees their own post. Everyone else sees it only when it is
not a draft and its ``published_at`` is unset or not in the future. The
result depends on the clock, so it is evaluated on every read and never
cached.
"""
from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement

from blog_api.core.clock import as_utc_naive, utc_now
from blog_api.models.post import Post


def is_publicly_visible(post: Post, now: datetime | None = None) -> bool:
    if post.is_draft:
        return False
    published_at = as_utc_naive(post.published_at)
    if published_at is None:
        return True
    return published_at <= (as_utc_naive(now) or utc_now())


def is_visible(post: Post, viewer_id: UUID | None, now: datetime | None = None) -> bool:
    if viewer_id is not None and post.user_id == viewer_id:
        return True
    return is_publicly_visible(post, now)


def published_clause(now: datetime | None = None) -> ColumnElement[bool]:
    """SQL form of :func:`is_publicly_visible`, for listing queries."""
    now = as_utc_naive(now) or utc_now()
    return and_(
        Post.is_draft.is_(False),
        or_(Post.published_at.is_(None), Post.published_at <= now),
    )


def due_for_publication_clause(now: datetime | None = None) -> ColumnElement[bool]:
    """Scheduled drafts whose publication time has arrived."""
    now = as_utc_naive(now) or utc_now()
    return and_(
        Post.is_draft.is_(True),
        Post.published_at.is_not(None),
        Post.published_at <= now,
    )
