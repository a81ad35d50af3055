"""Schemas for the posts endpoints (/posts).

Requests carry the author as name parts; responses carry a single
display string built by ``author_display_name`` at response time.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, StrictStr, field_validator, model_validator

from blog_api.models import BlogPost


def author_display_name(author: Mapping[str, str]) -> str:
    """Join first and last name with one space, trimming only the ends.

    >>> author_display_name({"firstName": "Ann", "lastName": ""})
    'Ann'
    """
    return f"{author.get('firstName', '')} {author.get('lastName', '')}".strip()


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class AuthorName(BaseModel):
    """Author name parts as stored."""

    first_name: StrictStr = Field(alias="firstName")
    last_name: StrictStr = Field(alias="lastName")

    model_config = {"populate_by_name": True}

    @field_validator("first_name", "last_name")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        return _require_text(v)


class PostCreate(BaseModel):
    """Body of POST /posts. Client-sent ``id``/``created`` are ignored."""

    author: AuthorName
    title: StrictStr
    content: StrictStr

    @field_validator("title", "content")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        return _require_text(v)

    def to_store_fields(self) -> dict[str, Any]:
        return {
            "author": self.author.model_dump(by_alias=True),
            "title": self.title,
            "content": self.content,
        }


class PostUpdate(BaseModel):
    """Body of PUT /posts/{id}.

    Any subset of author/title/content may be sent; absent fields keep their
    stored value. ``id`` is optional but must match the path when present.
    """

    id: StrictStr | None = None
    author: AuthorName | None = None
    title: StrictStr | None = None
    content: StrictStr | None = None

    @field_validator("title", "content")
    @classmethod
    def _not_blank(cls, v: str | None) -> str | None:
        return v if v is None else _require_text(v)

    @model_validator(mode="after")
    def _no_explicit_nulls(self) -> "PostUpdate":
        for name in ("author", "title", "content"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} must not be null")
        return self

    def to_store_fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        if self.author is not None:
            fields["author"] = self.author.model_dump(by_alias=True)
        if self.title is not None:
            fields["title"] = self.title
        if self.content is not None:
            fields["content"] = self.content
        return fields


class PostPublic(BaseModel):
    """A post as returned to clients."""

    id: str
    title: str
    author: str
    content: str
    created: datetime

    @classmethod
    def from_post(cls, post: BlogPost) -> "PostPublic":
        return cls(
            id=post.id,
            title=post.title,
            author=author_display_name(post.author),
            content=post.content,
            created=post.created,
        )
