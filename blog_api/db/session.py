"""Async database session and engine."""
import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool, StaticPool

from blog_api.core.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def display_url(url: str) -> str:
    """Mask credentials (show only host/db part)."""
    return "...@" + url.split("@")[-1].split("?")[0] if "@" in url else url


def make_engine(url: str, *, pooled: bool = True) -> AsyncEngine:
    """Build an async engine for PostgreSQL (asyncpg) or SQLite (aiosqlite).

    In-memory SQLite gets a StaticPool so every session sees the same database.
    Non-pooled engines are for short-lived processes such as the publish job,
    which runs each invocation on a fresh event loop.
    """
    kwargs: dict = {"echo": settings.DEBUG}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.endswith("://") or ":memory:" in url:
            kwargs["poolclass"] = StaticPool
        elif not pooled:
            kwargs["poolclass"] = NullPool
    elif pooled:
        kwargs.update(pool_pre_ping=True, pool_size=10, max_overflow=20, connect_args={"timeout": 10})
    else:
        kwargs.update(poolclass=NullPool, connect_args={"timeout": 10})
    return create_async_engine(url, **kwargs)


def make_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = make_engine(settings.DATABASE_URL)
async_session_maker = make_session_maker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
