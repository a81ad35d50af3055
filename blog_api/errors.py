"""Error taxonomy for the posts API.

Each error carries the HTTP status and machine-readable code it maps to.
Handlers in ``blog_api.main`` render them as:
    { "error": { "code": str, "message": str, "detail": object } }
"""

from typing import Any


class BlogApiError(RuntimeError):
    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, detail: dict[str, Any] | list[Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(BlogApiError):
    """Missing or malformed field, or path/body id mismatch."""

    status_code = 400
    code = "VALIDATION_ERROR"


class NotFoundError(BlogApiError):
    """No post with the requested id."""

    status_code = 404
    code = "POST_NOT_FOUND"

    def __init__(self, post_id: str) -> None:
        super().__init__(f"Post {post_id} not found", detail={"id": post_id})
        self.post_id = post_id


class StorageError(BlogApiError):
    """Underlying persistence failure. Never retried here."""

    status_code = 500
    code = "STORAGE_ERROR"
