# src/fritter/models/user.py
"""SQLAlchemy models for user accounts and follow edges."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fritter.db.session import Base
from fritter.db.time import utcnow

if TYPE_CHECKING:
    from .report import FreetReport
    from .vote import FreetVote


class User(Base):
    """Account record; only the fields the feed and ledgers read are kept here."""

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    date_joined: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Ledgers: at most one vote and one open report per (user, freet).
    votes: Mapped[list[FreetVote]] = relationship(
        "FreetVote",
        back_populates="voter",
        passive_deletes=True,
    )
    reports: Mapped[list[FreetReport]] = relationship(
        "FreetReport",
        back_populates="reporter",
        passive_deletes=True,
    )


class Follow(Base):
    """Directed follow edge. Maintained outside the core; read by feeds only."""

    __tablename__ = "follow"

    follower_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    followee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
