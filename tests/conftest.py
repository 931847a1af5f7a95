import os

# Point the application at an in-memory database before anything imports settings.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from blog_api.core.security import get_password_hash  # noqa: E402
from blog_api.db.base import Base  # noqa: E402
from blog_api.db.session import get_db, make_engine, make_session_maker  # noqa: E402
from blog_api.main import app  # noqa: E402
from blog_api.models.post import Post  # noqa: E402
from blog_api.models.user import User  # noqa: E402

# Hashing is slow; every test user shares one password hash.
PASSWORD = "password123"
PASSWORD_HASH = get_password_hash(PASSWORD)


@pytest.fixture
async def engine():
    engine = make_engine("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return make_session_maker(engine)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker):
    async def _get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    async def _make_user(name: str | None = None, email: str | None = None) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(
            name=name or f"User {n}",
            email=email or f"user{n}@example.com",
            password_hash=PASSWORD_HASH,
        )
        db.add(user)
        await db.commit()
        return user

    return _make_user


@pytest.fixture
def make_post(db):
    async def _make_post(owner: User, **fields) -> Post:
        fields.setdefault("title", "A post")
        fields.setdefault("content", "Some content.")
        fields.setdefault("is_draft", False)
        post = Post(user_id=owner.id, **fields)
        db.add(post)
        await db.commit()
        return post

    return _make_post


@pytest.fixture
async def author(make_user):
    return await make_user(name="Author", email="author@example.com")


@pytest.fixture
async def other_user(make_user):
    return await make_user(name="Other", email="other@example.com")


