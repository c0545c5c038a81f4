# src/fritter/services/__init__.py
"""Business logic services for the Fritter application."""

from .audit import AuditOutcome, AuditService
from .feed import FeedService, TabType
from .freets import FreetService
from .ranking import SortMethod, sort_freets
from .reports import ReportService
from .votes import VoteService

__all__ = [
    "AuditOutcome",
    "AuditService",
    "FeedService",
    "FreetService",
    "ReportService",
    "SortMethod",
    "TabType",
    "VoteService",
    "sort_freets",
]
