"""SQLAlchemy ORM models.

Models represent database tables:
- blog_posts: Blog posts with author document, title, content, creation time
"""

from blog_api.models.post import BlogPost

__all__ = ["BlogPost"]
