"""Promotion of scheduled drafts to published posts."""
import logging
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.core.clock import utc_now
from blog_api.core.config import settings
from blog_api.db.session import display_url, make_engine, make_session_maker
from blog_api.models.post import Post
from blog_api.services.visibility import due_for_publication_clause

logger = logging.getLogger(__name__)


async def publish_due(db: AsyncSession, now: datetime | None = None) -> int:
    """Flip every due scheduled draft to published in one UPDATE and return how many changed.

    Drafts without ``published_at`` and posts that are already published are
    left alone, so a second run with no newly due posts returns 0.
    """
    now = now or utc_now()
    result = await db.execute(
        update(Post)
        .where(due_for_publication_clause(now))
        .values(is_draft=False, updated_at=utc_now())
        .execution_options(synchronize_session=False)
    )
    count = result.rowcount or 0
    logger.debug("publish_due(now=%s) updated %d row(s)", now.isoformat(), count)
    return count


async def run_publish_job(database_url: str | None = None) -> int:
    """Run one publish pass in its own engine and transaction.

    Used by the CLI and the Celery worker, which call it through
    ``asyncio.run`` and therefore need connections bound to a fresh loop.
    """
    url = database_url or settings.DATABASE_URL
    engine = make_engine(url, pooled=False)
    session_maker = make_session_maker(engine)
    try:
        async with session_maker() as session:
            count = await publish_due(session)
            await session.commit()
    finally:
        await engine.dispose()
    logger.info("Published %d scheduled post(s) on %s", count, display_url(url))
    return count
