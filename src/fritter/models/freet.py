# src/fritter/models/freet.py
"""SQLAlchemy model for freets and the enums describing their moderation state."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fritter.db.session import Base
from fritter.db.time import utcnow
from fritter.db.types import enum_column_type

from .report import ReportCategory

if TYPE_CHECKING:
    from .report import FreetReport
    from .vote import FreetVote


class Cover(StrEnum):
    """Display hint shown instead of the freet body. ``none`` means display normally."""

    NONE = "none"
    CONTROVERSIAL = "controversial"
    SPAM = "spam"
    MISINFORMATION = "misinformation"
    OFFENSIVE = "offensive"
    TRIGGERING = "triggering"

    @classmethod
    def for_category(cls, category: ReportCategory) -> Cover:
        return cls(category.value)


class AuditState(StrEnum):
    """Audit state machine: none -> testing -> {passed, failed}."""

    NONE = "none"
    TESTING = "testing"
    PASSED = "passed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (AuditState.PASSED, AuditState.FAILED)


# Fixed report tally columns, one per category.
REPORT_COLUMNS: dict[ReportCategory, str] = {
    ReportCategory.SPAM: "spam_reports",
    ReportCategory.MISINFORMATION: "misinformation_reports",
    ReportCategory.OFFENSIVE: "offensive_reports",
}


class Freet(Base):
    """A short post together with its vote, report and audit tallies."""

    __tablename__ = "freet"
    __table_args__ = (
        CheckConstraint("upvotes >= 0 AND downvotes >= 0", name="ck_freet_votes_non_negative"),
        CheckConstraint(
            "spam_reports >= 0 AND misinformation_reports >= 0 AND offensive_reports >= 0",
            name="ck_freet_reports_non_negative",
        ),
        Index("ix_freet_modified_at", "modified_at"),
        Index("ix_freet_author_id", "author_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(String(280), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    modified_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    upvotes: Mapped[int] = mapped_column(default=0, nullable=False)
    downvotes: Mapped[int] = mapped_column(default=0, nullable=False)

    spam_reports: Mapped[int] = mapped_column(default=0, nullable=False)
    misinformation_reports: Mapped[int] = mapped_column(default=0, nullable=False)
    offensive_reports: Mapped[int] = mapped_column(default=0, nullable=False)

    flagged: Mapped[bool] = mapped_column(default=False, nullable=False)
    cover: Mapped[Cover] = mapped_column(
        enum_column_type(Cover), nullable=False, default=Cover.NONE
    )

    # Audit bookkeeping; the nullable columns are set iff audit_state != none.
    audit_state: Mapped[AuditState] = mapped_column(
        enum_column_type(AuditState), nullable=False, default=AuditState.NONE
    )
    audit_category: Mapped[ReportCategory | None] = mapped_column(
        enum_column_type(ReportCategory), nullable=True
    )
    audit_yes: Mapped[int | None] = mapped_column(nullable=True)
    audit_no: Mapped[int | None] = mapped_column(nullable=True)
    audit_started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    votes: Mapped[list[FreetVote]] = relationship(
        "FreetVote",
        back_populates="freet",
        cascade="all, delete-orphan",
    )
    reports: Mapped[list[FreetReport]] = relationship(
        "FreetReport",
        back_populates="freet",
        cascade="all, delete-orphan",
    )

    def report_count(self, category: ReportCategory) -> int:
        """Return the tally for one report category."""
        return getattr(self, REPORT_COLUMNS[category]) or 0

    @property
    def report_tally(self) -> dict[ReportCategory, int]:
        """Return all category tallies in enumeration order."""
        return {category: self.report_count(category) for category in ReportCategory}

    @property
    def total_reports(self) -> int:
        return sum(self.report_tally.values())

    @property
    def net_votes(self) -> int:
        return self.upvotes - self.downvotes
