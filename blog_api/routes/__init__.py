"""API routes."""

from fastapi import APIRouter

from blog_api.routes import posts

api_router = APIRouter()

# Blog post CRUD
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
