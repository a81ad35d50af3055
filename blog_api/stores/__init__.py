"""Data stores for persistence.

Stores handle:
- PostgreSQL: engine, session factory, connection lifecycle
- Posts: CRUD over blog posts, id and creation-time assignment

No request/response shaping in stores - that belongs in routes and schemas.
"""
