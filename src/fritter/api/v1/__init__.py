# src/fritter/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    feed_router,
    freets_router,
    moderation_router,
    votes_router,
)

__all__ = [
    "feed_router",
    "freets_router",
    "moderation_router",
    "votes_router",
]
