"""Shared fixtures: file-backed SQLite database, PostStore and HTTP client."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from blog_api.main import app
from blog_api.routes.posts import get_post_store
from blog_api.stores.postgres import create_tables
from blog_api.stores.posts import PostStore


@pytest.fixture
async def engine(tmp_path):
    """Fresh file-backed database per test, with a real connection pool."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def store(engine) -> PostStore:
    return PostStore(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))


@pytest.fixture
async def client(store: PostStore):
    """Create test client wired to the test store."""
    app.dependency_overrides[get_post_store] = lambda: store
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


def make_post_fields(first: str = "Ann", last: str = "Lee", title: str = "Hi", content: str = "Body") -> dict:
    return {"author": {"firstName": first, "lastName": last}, "title": title, "content": content}
