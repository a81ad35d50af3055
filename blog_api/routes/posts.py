"""Blog post endpoints.

GET    /posts       -> 200, all posts
GET    /posts/{id}  -> 200, one post (404 if unknown)
POST   /posts       -> 201, created post
PUT    /posts/{id}  -> 204 (404 if unknown, 400 on id mismatch)
DELETE /posts/{id}  -> 204 (404 if unknown)

Routers are thin: validation lives in the schemas, persistence in PostStore.
Store errors (NotFoundError, StorageError) propagate to the app's handlers.
"""

from fastapi import APIRouter, Depends, Response

from blog_api.errors import ValidationError
from blog_api.schemas import PostCreate, PostPublic, PostUpdate
from blog_api.stores.posts import PostStore

router = APIRouter()


def get_post_store() -> PostStore:
    """Store bound to the process-wide session factory (overridden in tests).

    The factory is looked up on first store call, so request validation
    still answers 400 when the database is down.
    """
    return PostStore()


@router.get("", response_model=list[PostPublic])
async def list_posts(store: PostStore = Depends(get_post_store)) -> list[PostPublic]:
    """List every post."""
    posts = await store.list()
    return [PostPublic.from_post(post) for post in posts]


@router.get("/{post_id}", response_model=PostPublic)
async def get_post(post_id: str, store: PostStore = Depends(get_post_store)) -> PostPublic:
    """Get one post by id."""
    post = await store.get(post_id)
    return PostPublic.from_post(post)


@router.post("", response_model=PostPublic, status_code=201)
async def create_post(payload: PostCreate, store: PostStore = Depends(get_post_store)) -> PostPublic:
    """Create a post. ``id`` and ``created`` are assigned by the store."""
    post = await store.create(payload.to_store_fields())
    return PostPublic.from_post(post)


@router.put("/{post_id}", status_code=204, response_class=Response)
async def update_post(
    post_id: str,
    payload: PostUpdate,
    store: PostStore = Depends(get_post_store),
) -> Response:
    """Replace the author/title/content fields sent in the body."""
    if payload.id is not None and payload.id != post_id:
        raise ValidationError(
            f"Request path id ({post_id}) and request body id ({payload.id}) must match",
            detail={"path_id": post_id, "body_id": payload.id},
        )

    await store.update(post_id, payload.to_store_fields())
    return Response(status_code=204)


@router.delete("/{post_id}", status_code=204, response_class=Response)
async def delete_post(post_id: str, store: PostStore = Depends(get_post_store)) -> Response:
    """Delete a post."""
    await store.delete(post_id)
    return Response(status_code=204)
