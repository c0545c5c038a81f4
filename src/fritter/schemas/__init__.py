"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .freet import AuditInfo, FreetActionResponse, FreetCreate, FreetResponse, FreetUpdate, ReportTally
from .moderation import AuditVoteCreate, AuditVoteResponse, ReportCreate
from .vote import MyVoteResponse, VoteCreate

__all__ = [
    "AuditInfo", "FreetActionResponse", "FreetCreate", "FreetResponse", "FreetUpdate", "ReportTally",
    "AuditVoteCreate", "AuditVoteResponse", "ReportCreate",
    "MyVoteResponse", "VoteCreate",
]
