"""Post business logic: listing, lookup with visibility, and owner-only mutations."""
import logging
import math
from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from blog_api.core.clock import as_utc_naive, utc_now
from blog_api.core.exceptions import PostForbiddenError, PostNotFoundError
from blog_api.models.post import Post
from blog_api.schemas.post import PostCreate, PostResponse, PostUpdate
from blog_api.schemas.user import UserPublic
from blog_api.services.visibility import is_visible, published_clause

logger = logging.getLogger(__name__)


async def list_published(
    db: AsyncSession,
    page: int = 1,
    per_page: int = 20,
    now: datetime | None = None,
) -> tuple[list[Post], int]:
    """Return one page of publicly visible posts in creation order, plus the total count."""
    now = now or utc_now()
    visible = published_clause(now)
    total = (await db.execute(select(func.count(Post.id)).where(visible))).scalar_one()
    if (page - 1) * per_page >= total:
        return [], total
    result = await db.execute(
        select(Post)
        .where(visible)
        .order_by(Post.id)
        .offset((page - 1) * per_page)
        .limit(per_page)
        .options(selectinload(Post.user))
    )
    return list(result.scalars().all()), total


def last_page_for(total: int, per_page: int) -> int:
    return max(1, math.ceil(total / per_page))


async def _load_post(db: AsyncSession, post_id: int) -> Post | None:
    result = await db.execute(
        select(Post).where(Post.id == post_id).options(selectinload(Post.user))
    )
    return result.scalar_one_or_none()


async def get_visible_post(db: AsyncSession, post_id: int, viewer_id: UUID | None) -> Post:
    # Hidden posts raise the same error as missing ones.
    post = await _load_post(db, post_id)
    if post is None or not is_visible(post, viewer_id):
        raise PostNotFoundError()
    return post


async def get_owned_post(db: AsyncSession, post_id: int, viewer_id: UUID) -> Post:
    post = await _load_post(db, post_id)
    if post is None:
        raise PostNotFoundError()
    if post.user_id != viewer_id:
        logger.info("User %s denied access to post %s", viewer_id, post_id)
        raise PostForbiddenError()
    return post


async def create_post(db: AsyncSession, owner_id: UUID, data: PostCreate) -> Post:
    post = Post(
        user_id=owner_id,
        title=data.title,
        content=data.content,
        is_draft=data.is_draft,
        published_at=as_utc_naive(data.published_at),
    )
    db.add(post)
    await db.flush()
    logger.info("Post %s created by %s (draft=%s)", post.id, owner_id, post.is_draft)
    return post


async def update_post(db: AsyncSession, post_id: int, viewer_id: UUID, data: PostUpdate) -> Post:
    post = await get_owned_post(db, post_id, viewer_id)
    supplied = data.model_fields_set
    if data.title is not None:
        post.title = data.title
    if data.content is not None:
        post.content = data.content
    if data.is_draft is not None:
        post.is_draft = data.is_draft
    if "published_at" in supplied:
        post.published_at = as_utc_naive(data.published_at)
    await db.flush()
    logger.info("Post %s updated (%s)", post.id, ", ".join(sorted(supplied)) or "no fields")
    return post


async def delete_post(db: AsyncSession, post_id: int, viewer_id: UUID) -> None:
    post = await get_owned_post(db, post_id, viewer_id)
    await db.delete(post)
    await db.flush()
    logger.info("Post %s deleted by %s", post_id, viewer_id)


def post_to_response(post: Post) -> PostResponse:
    user = post.user
    return PostResponse(
        id=post.id,
        user_id=post.user_id,
        title=post.title,
        content=post.content,
        is_draft=post.is_draft,
        published_at=post.published_at,
        created_at=post.created_at,
        updated_at=post.updated_at,
        user=UserPublic(id=user.id, name=user.name, email=user.email) if user else None,
    )
