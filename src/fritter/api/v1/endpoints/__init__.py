# src/fritter/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .feed import router as feed_router
from .freets import router as freets_router
from .moderation import router as moderation_router
from .votes import router as votes_router

__all__ = [
    "feed_router",
    "freets_router",
    "moderation_router",
    "votes_router",
]
