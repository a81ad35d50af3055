#!/usr/bin/env python3
"""Seed database with sample blog posts.

Creates a fixed set of posts through PostStore, so ids and creation
times are assigned exactly as they are for API-created posts.

Usage:
    python -m scripts.seed
"""

import asyncio
import logging
import os
import sys

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from blog_api.models import BlogPost
from blog_api.stores.postgres import close_db, create_tables, get_session_factory, init_db
from blog_api.stores.posts import PostStore

load_dotenv()

logger = logging.getLogger(__name__)

# ============================================================
# Sample posts
# ============================================================

SAMPLE_POSTS = [
    {
        "author": {"firstName": "Ann", "lastName": "Lee"},
        "title": "Hello world",
        "content": "First post on the new blog. More soon.",
    },
    {
        "author": {"firstName": "Marcus", "lastName": "Okafor"},
        "title": "Indexing JSON columns",
        "content": "GIN indexes make containment queries on JSONB cheap enough for hot paths.",
    },
    {
        "author": {"firstName": "Priya", "lastName": "Raman"},
        "title": "Async sessions",
        "content": "One session per request, committed before the response goes out.",
    },
    {
        "author": {"firstName": "Tomás", "lastName": "Vidal"},
        "title": "Migrations",
        "content": "Every schema change ships as an Alembic revision, never as ad-hoc DDL.",
    },
    {
        "author": {"firstName": "Hana", "lastName": ""},
        "title": "Single names",
        "content": "Not everyone has a last name; the display name handles that.",
    },
]


async def seed_posts(store: PostStore, posts: list[dict] | None = None) -> list[BlogPost]:
    """Insert sample posts and return them."""
    created = []
    for fields in posts if posts is not None else SAMPLE_POSTS:
        created.append(await store.create(fields))
    return created


async def main() -> None:
    """Create tables if missing and insert the sample posts."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    await init_db()
    try:
        await create_tables()
        store = PostStore(get_session_factory())
        posts = await seed_posts(store)
        logger.info(f"Seeded {len(posts)} posts ({await store.count()} total)")
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
