# src/fritter/models/vote.py
"""Models capturing voting interactions on freets."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fritter.db.session import Base
from fritter.db.types import enum_column_type

if TYPE_CHECKING:
    from .freet import Freet
    from .user import User


class VoteKind(StrEnum):
    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


class FreetVote(Base):
    """Per-user vote on a freet.

    A row exists only while the vote is counted in the freet's tally; un-voting
    deletes it.
    """

    __tablename__ = "freet_vote"
    __table_args__ = (Index("ix_freet_vote_freet_id", "freet_id"),)

    # Composite primary key prevents duplicate votes from the same user.
    freet_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("freet.id", ondelete="CASCADE"),
        primary_key=True,
    )
    voter_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    kind: Mapped[VoteKind] = mapped_column(enum_column_type(VoteKind), nullable=False)

    freet: Mapped[Freet] = relationship("Freet", back_populates="votes")
    voter: Mapped[User] = relationship("User", back_populates="votes")
