"""Data access helpers for users and their vote/report ledgers."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from fritter.core.errors import NotFoundError
from fritter.models.report import FreetReport
from fritter.models.user import Follow, User
from fritter.models.vote import FreetVote

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for users."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int, *, for_update: bool = False) -> User:
        """Return a user by identifier or raise :class:`NotFoundError`."""
        user = self.session.get(User, user_id, with_for_update=for_update)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def get_by_username(self, username: str) -> User:
        """Return a user by username or raise :class:`NotFoundError`."""
        result = self.session.execute(select(User).where(User.username == username))
        user = result.scalars().first()
        if user is None:
            raise NotFoundError(f"User {username!r} not found")
        return user

    def save(self, user: User) -> User:
        self.session.add(user)
        self.session.flush()
        return user

    def followed_ids(self, user_id: int) -> set[int]:
        """Return the ids of the authors ``user_id`` follows."""
        result = self.session.execute(
            select(Follow.followee_id).where(Follow.follower_id == user_id)
        )
        return set(result.scalars())

    def get_vote(self, user_id: int, freet_id: int) -> FreetVote | None:
        """Return the user's current vote on a freet, if any."""
        return self.session.get(FreetVote, (freet_id, user_id))

    def get_report(self, user_id: int, freet_id: int) -> FreetReport | None:
        """Return the user's open report on a freet, if any."""
        return self.session.get(FreetReport, (freet_id, user_id))
