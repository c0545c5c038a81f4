"""Report and audit Pydantic schemas."""

from pydantic import BaseModel, Field

from fritter.models import AuditState

from .freet import FreetResponse


class ReportCreate(BaseModel):
    """Schema for filing (or withdrawing) a report."""

    category: str = Field(
        ...,
        description="'spam', 'misinformation' or 'offensive'; reporting again withdraws",
    )


class AuditVoteCreate(BaseModel):
    """Schema for an audit vote on a freet under review."""

    confirm: bool = Field(..., description="True if the freet should be moderated")


class AuditVoteResponse(BaseModel):
    """Outcome of an audit vote."""

    message: str
    freet_id: int
    state: AuditState
    deleted: bool
    freet: FreetResponse | None = None
