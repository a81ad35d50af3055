"""Pydantic schemas for API request/response validation."""

from blog_api.schemas.common import ErrorDetail, ErrorResponse
from blog_api.schemas.posts import (
    AuthorName,
    PostCreate,
    PostPublic,
    PostUpdate,
    author_display_name,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "AuthorName",
    "PostCreate",
    "PostPublic",
    "PostUpdate",
    "author_display_name",
]
