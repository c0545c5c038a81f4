"""Data access helpers for working with freets."""
from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from fritter.core.errors import NotFoundError
from fritter.models.freet import AuditState, Freet
from fritter.models.user import User

__all__ = ["FreetFilter", "FreetRepository"]


@dataclass(frozen=True)
class FreetFilter:
    """Audience and recency constraints for a feed query.

    ``None`` leaves a constraint off. An empty ``author_ids`` matches nothing.
    """

    author_ids: Collection[int] | None = None
    exclude_author_ids: Collection[int] | None = None
    modified_since: datetime | None = None
    author_verified: bool | None = None


class FreetRepository:
    """Thin wrapper around database access for freet entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get(self, freet_id: int, *, for_update: bool = False) -> Freet:
        """Return a freet by identifier.

        Args:
            freet_id: Primary key of the freet.
            for_update: Lock the row until the surrounding transaction ends.

        Raises:
            NotFoundError: If no such freet exists.
        """
        freet = self.session.get(Freet, freet_id, with_for_update=for_update)
        if freet is None:
            raise NotFoundError(f"Freet {freet_id} not found")
        return freet

    def save(self, freet: Freet) -> Freet:
        """Stage a new or modified freet and flush it."""
        self.session.add(freet)
        self.session.flush()
        return freet

    def increment(self, freet: Freet, **deltas: int) -> Freet:
        """Add ``deltas`` to counter columns in SQL and reload ``freet``.

        Each counter is written as ``column = column + delta`` so concurrent
        writers add to each other's counts instead of overwriting them.
        Pending changes are flushed first so the reload does not drop them.

        Args:
            freet: Freet whose counters change.
            **deltas: Column name to amount, e.g. ``upvotes=1, downvotes=-1``.
        """
        values = {
            name: func.coalesce(getattr(Freet, name), 0) + delta
            for name, delta in deltas.items()
            if delta
        }
        self.session.flush()
        if values:
            self.session.execute(
                update(Freet)
                .where(Freet.id == freet.id)
                .values(values)
                .execution_options(synchronize_session=False)
            )
        self.session.refresh(freet)
        return freet

    def delete(self, freet: Freet) -> None:
        """Delete a freet together with its vote and report ledger rows."""
        self.session.delete(freet)
        self.session.flush()

    def delete_by_author(self, author_id: int) -> int:
        """Delete every freet by ``author_id`` and return how many were removed."""
        freets = self.list_by_author(author_id)
        for freet in freets:
            self.session.delete(freet)
        self.session.flush()
        return len(freets)

    def list_all(self) -> list[Freet]:
        """Return every freet, most recently modified first."""
        return self.query(FreetFilter())

    def list_by_author(self, author_id: int) -> list[Freet]:
        """Return the freets written by one author, most recently modified first."""
        return self.query(FreetFilter(author_ids=[author_id]))

    def list_in_audit(self) -> list[Freet]:
        """Return freets whose audit is still collecting votes."""
        result = self.session.execute(
            select(Freet)
            .where(Freet.audit_state == AuditState.TESTING)
            .order_by(Freet.audit_started_at)
        )
        return list(result.scalars())

    def query(self, freet_filter: FreetFilter) -> list[Freet]:
        """Return freets matching ``freet_filter``, most recently modified first.

        All rows come from one SELECT so a feed never mixes tallies from
        before and after a concurrent write.
        """
        stmt = select(Freet)
        if freet_filter.author_ids is not None:
            stmt = stmt.where(Freet.author_id.in_(list(freet_filter.author_ids)))
        if freet_filter.exclude_author_ids:
            stmt = stmt.where(Freet.author_id.not_in(list(freet_filter.exclude_author_ids)))
        if freet_filter.modified_since is not None:
            stmt = stmt.where(Freet.modified_at >= freet_filter.modified_since)
        if freet_filter.author_verified is not None:
            stmt = stmt.join(User, User.id == Freet.author_id).where(
                User.verified == freet_filter.author_verified
            )
        stmt = stmt.order_by(Freet.modified_at.desc(), Freet.id.desc())
        result = self.session.execute(stmt)
        return list(result.scalars())

