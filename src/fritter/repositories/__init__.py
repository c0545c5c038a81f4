"""Repositories wrapping SQLAlchemy session access."""

from .freet_repo import FreetFilter, FreetRepository
from .user_repo import UserRepository

__all__ = ["FreetFilter", "FreetRepository", "UserRepository"]
