"""Freet-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fritter.models import AuditState, Cover, ReportCategory


class FreetCreate(BaseModel):
    """Schema for creating a new freet."""

    content: str = Field(..., description="Freet text, 1 to 140 characters after trimming")


class FreetUpdate(BaseModel):
    """Schema for replacing the content of an existing freet."""

    content: str = Field(..., description="New freet text, 1 to 140 characters after trimming")


class ReportTally(BaseModel):
    """Open report counts per category."""

    spam: int = 0
    misinformation: int = 0
    offensive: int = 0


class AuditInfo(BaseModel):
    """Audit progress; only present once an audit has been opened."""

    state: AuditState
    category: ReportCategory | None
    yes: int
    no: int
    started_at: datetime


class FreetResponse(BaseModel):
    """Schema for freet information returned by the API."""

    id: int
    author_id: int
    content: str
    created_at: datetime
    modified_at: datetime
    upvotes: int
    downvotes: int
    reports: ReportTally
    flagged: bool
    cover: Cover
    audit: AuditInfo | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_orm_freet(cls, data: object) -> object:
        if isinstance(data, dict):
            return data

        audit = None
        if getattr(data, "audit_state", AuditState.NONE) != AuditState.NONE:
            audit = {
                "state": data.audit_state,
                "category": data.audit_category,
                "yes": data.audit_yes or 0,
                "no": data.audit_no or 0,
                "started_at": data.audit_started_at,
            }
        return {
            "id": data.id,
            "author_id": data.author_id,
            "content": data.content,
            "created_at": data.created_at,
            "modified_at": data.modified_at,
            "upvotes": data.upvotes,
            "downvotes": data.downvotes,
            "reports": {
                category.value: count for category, count in data.report_tally.items()
            },
            "flagged": data.flagged,
            "cover": data.cover,
            "audit": audit,
        }

    model_config = ConfigDict(from_attributes=True)


class FreetActionResponse(BaseModel):
    """Confirmation message plus the freet as it stands after the action."""

    message: str
    freet: FreetResponse | None = None
