# src/fritter/models/__init__.py
"""SQLAlchemy models for the Fritter application."""

from .freet import AuditState, Cover, Freet
from .report import FreetReport, ReportCategory
from .user import Follow, User
from .vote import FreetVote, VoteKind

__all__ = [
    "AuditState", "Cover", "Freet",
    "FreetReport", "ReportCategory",
    "Follow", "User",
    "FreetVote", "VoteKind",
]
