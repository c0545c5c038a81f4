# src/fritter/models/report.py
"""Models tracking user reports against freets."""

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


class ReportCategory(StrEnum):
    """Report categories. Declaration order breaks ties when picking a cover."""

    SPAM = "spam"
    MISINFORMATION = "misinformation"
    OFFENSIVE = "offensive"


class FreetReport(Base):
    """An open report. One per (freet, reporter); withdrawing deletes the row."""

    __tablename__ = "freet_report"
    __table_args__ = (Index("ix_freet_report_freet_id", "freet_id"),)

    freet_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("freet.id", ondelete="CASCADE"),
        primary_key=True,
    )
    reporter_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    category: Mapped[ReportCategory] = mapped_column(
        enum_column_type(ReportCategory), nullable=False
    )

    freet: Mapped[Freet] = relationship("Freet", back_populates="reports")
    reporter: Mapped[User] = relationship("User", back_populates="reports")
