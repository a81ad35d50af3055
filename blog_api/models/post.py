"""Blog post model.

One row per post. ``author`` is kept as a small JSON document
({"firstName": ..., "lastName": ...}) so the composite shape is stored as-is;
the display name shown on the wire is derived from it on every response.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from blog_api.stores.postgres import Base


class UTCDateTime(TypeDecorator):
    """Timezone-aware DateTime that always loads as UTC.

    SQLite drops tzinfo on the way back; PostgreSQL keeps it.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Any) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: datetime | None, dialect: Any) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


AuthorDocument = JSON().with_variant(JSONB(), "postgresql")


class BlogPost(Base):
    """A blog post with its author name parts."""

    __tablename__ = "blog_posts"

    # 32-char uuid4 hex, assigned by PostStore
    id: Mapped[str] = mapped_column(String(32), primary_key=True)

    author: Mapped[dict[str, str]] = mapped_column(AuthorDocument)
    title: Mapped[str] = mapped_column(Text)
    content: Mapped[str] = mapped_column(Text)

    # Set once at creation; updates never touch it
    created: Mapped[datetime] = mapped_column(UTCDateTime, index=True)

    def __repr__(self) -> str:
        return f"<BlogPost {self.id} {self.title!r}>"
