import asyncio

import pytest
from sqlalchemy import select

from blog_api import cli
from blog_api.core.config import settings
from blog_api.db.base import Base
from blog_api.db.session import make_engine, make_session_maker
from blog_api.models.post import Post
from blog_api.models.user import User
from tests.helpers import hours_ago, hours_ahead


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setattr(settings, "DATABASE_URL", url)
    return url


def _run(url, work):
    async def _inner():
        engine = make_engine(url, pooled=False)
        try:
            async with make_session_maker(engine)() as session:
                return await work(session)
        finally:
            await engine.dispose()

    return asyncio.run(_inner())


def _seed(url, *schedules):
    async def create(session):
        async with session.bind.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        user = User(name="Author", email="author@example.com", password_hash="x")
        session.add(user)
        await session.flush()
        for is_draft, published_at in schedules:
            session.add(Post(user_id=user.id, title="T", content="C", is_draft=is_draft, published_at=published_at))
        await session.commit()

    _run(url, create)


def _drafts(url):
    async def query(session):
        return list((await session.execute(select(Post.is_draft).order_by(Post.id))).scalars())

    return _run(url, query)


def test_publish_command_reports_count(database_url, capsys):
    _seed(database_url, (True, hours_ago(1)), (True, hours_ahead(24)), (True, None), (False, hours_ago(24)))

    exit_code = cli.main(["posts:publish"])

    assert exit_code == 0
    assert "Published 1 scheduled post(s)." in capsys.readouterr().out
    assert _drafts(database_url) == [False, True, True, False]


def test_publish_command_with_nothing_due(database_url, capsys):
    _seed(database_url, (True, hours_ahead(24)))

    assert cli.main(["posts:publish"]) == 0
    assert "Published 0 scheduled post(s)." in capsys.readouterr().out


def test_publish_command_publishes_several_posts(database_url, capsys):
    _seed(database_url, *[(True, hours_ago(2))] * 3, (True, hours_ahead(24)))

    assert cli.main(["posts:publish"]) == 0
    assert "Published 3 scheduled post(s)." in capsys.readouterr().out
    assert cli.main(["posts:publish"]) == 0
    assert "Published 0 scheduled post(s)." in capsys.readouterr().out


def test_publish_command_fails_without_schema(database_url, capsys):
    # No tables: the UPDATE fails and the command exits non-zero.
    assert cli.main(["posts:publish"]) == 1
    assert "Published" not in capsys.readouterr().out


def test_unknown_command_exits_with_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["posts:unpublish"])
    assert excinfo.value.code == 2
