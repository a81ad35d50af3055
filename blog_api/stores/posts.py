"""Post store: durable CRUD over blog posts.

The store is the only place that assigns a post's ``id`` and ``created``
timestamp. Every operation runs in its own session and commits before
returning; nothing is cached or buffered.

Update and delete are single UPDATE/DELETE statements keyed by id, so
concurrent writers to the same post are serialized by the database.
"""

from collections.abc import AsyncGenerator, Mapping, Sequence
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
from typing import Any
from uuid import uuid4

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blog_api.errors import NotFoundError, StorageError, ValidationError
from blog_api.models import BlogPost
from blog_api.stores.postgres import get_session_factory

logger = logging.getLogger("uvicorn.error")

# Fields callers may set; id and created are owned by the store
MUTABLE_FIELDS = ("author", "title", "content")


def _check_fields(fields: Mapping[str, Any], required: bool) -> dict[str, Any]:
    """Pick the mutable fields and check their shape.

    Name parts may be empty strings but must be present.
    """
    values: dict[str, Any] = {}
    for name in MUTABLE_FIELDS:
        if name not in fields:
            if required:
                raise ValidationError(f"Missing field: {name}", detail={"field": name})
            continue
        value = fields[name]
        if name == "author":
            if not isinstance(value, Mapping) or not all(
                isinstance(value.get(part), str) for part in ("firstName", "lastName")
            ):
                raise ValidationError(
                    "author must have string firstName and lastName",
                    detail={"field": "author"},
                )
            value = {"firstName": value["firstName"], "lastName": value["lastName"]}
        elif not isinstance(value, str):
            raise ValidationError(f"{name} must be a string", detail={"field": name})
        values[name] = value
    return values


class PostStore:
    """CRUD over the ``blog_posts`` table.

    Args:
        session_factory: Session factory bound to the target database. It must
            be built with ``expire_on_commit=False`` so returned posts stay
            readable after their session closes. Defaults to the factory built
            by ``init_db()``, looked up on first use.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        self._session_factory = session_factory

    def _get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            try:
                self._session_factory = get_session_factory()
            except RuntimeError as exc:
                logger.error("Post store used before the database was initialized")
                raise StorageError("Database not initialized") from exc
        return self._session_factory

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        session_factory = self._get_session_factory()
        try:
            async with session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
        except SQLAlchemyError as exc:
            logger.exception("Post store operation failed")
            raise StorageError("Storage operation failed", detail={"reason": type(exc).__name__}) from exc

    async def list(self) -> Sequence[BlogPost]:
        """Return all posts, newest first."""
        async with self._session() as session:
            result = await session.execute(select(BlogPost).order_by(BlogPost.created.desc()))
            return result.scalars().all()

    async def get(self, post_id: str) -> BlogPost:
        """Return the post with ``post_id``.

        Raises:
            NotFoundError: If no post has that id.
        """
        async with self._session() as session:
            post = await session.get(BlogPost, post_id)
        if post is None:
            raise NotFoundError(post_id)
        return post

    async def create(self, fields: Mapping[str, Any], *, created: datetime | None = None) -> BlogPost:
        """Persist a new post and return it with its generated fields.

        Args:
            fields: ``author`` ({"firstName", "lastName"}), ``title`` and ``content``.
                Any ``id`` or ``created`` key is ignored.
            created: Creation time for seeding; defaults to now (UTC).

        Raises:
            ValidationError: If a field is missing or has the wrong shape.
        """
        values = _check_fields(fields, required=True)
        post = BlogPost(
            id=uuid4().hex,
            **values,
            created=created or datetime.now(timezone.utc),
        )
        async with self._session() as session:
            session.add(post)
        logger.info(f"Post created: {post.id}")
        return post

    async def update(self, post_id: str, fields: Mapping[str, Any]) -> None:
        """Replace the mutable fields present in ``fields`` on one post.

        ``id`` and ``created`` are never written, even if present.

        Raises:
            NotFoundError: If no post has that id.
            ValidationError: If a field has the wrong shape.
        """
        values = _check_fields(fields, required=False)

        if not values:
            # Nothing to write, but an unknown id is still an error
            await self.get(post_id)
            return

        async with self._session() as session:
            result = await session.execute(
                update(BlogPost)
                .where(BlogPost.id == post_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError(post_id)
        logger.info(f"Post updated: {post_id} ({', '.join(sorted(values))})")

    async def delete(self, post_id: str) -> None:
        """Remove one post.

        Raises:
            NotFoundError: If no post has that id (including a repeated delete).
        """
        async with self._session() as session:
            result = await session.execute(
                delete(BlogPost)
                .where(BlogPost.id == post_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError(post_id)
        logger.info(f"Post deleted: {post_id}")

    async def count(self) -> int:
        """Number of posts currently stored."""
        async with self._session() as session:
            result = await session.execute(select(func.count()).select_from(BlogPost))
            return result.scalar_one()
