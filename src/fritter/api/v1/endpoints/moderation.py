"""Report and audit endpoints for the Fritter API."""

from __future__ import annotations

from fastapi import APIRouter

from fritter.api.v1.dependencies import ClockDep, CurrentUserDep, SessionDep
from fritter.models import AuditState
from fritter.schemas.freet import FreetActionResponse, FreetResponse
from fritter.schemas.moderation import AuditVoteCreate, AuditVoteResponse, ReportCreate
from fritter.services.audit import AuditService
from fritter.services.reports import ReportService

router = APIRouter(prefix="/freets", tags=["moderation"])

_AUDIT_MESSAGES = {
    AuditState.TESTING: "Your audit vote has been recorded.",
    AuditState.PASSED: "Your audit vote has been recorded. The freet passed its audit.",
    AuditState.FAILED: "Your audit vote has been recorded. The freet failed its audit.",
}


@router.put("/{freet_id}/report", response_model=FreetActionResponse)
async def report_freet(
    freet_id: int,
    report_data: ReportCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    clock: ClockDep,
) -> FreetActionResponse:
    """Report a freet, or withdraw the caller's open report on it."""
    freet = ReportService(db, clock=clock).report(
        freet_id, current_user.id, report_data.category
    )
    return FreetActionResponse(
        message="Your report has been recorded.",
        freet=FreetResponse.model_validate(freet),
    )


@router.put("/{freet_id}/audit-vote", response_model=AuditVoteResponse)
async def audit_vote(
    freet_id: int,
    vote_data: AuditVoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    clock: ClockDep,
) -> AuditVoteResponse:
    """Vote on whether a freet under audit should be moderated."""
    outcome = AuditService(db, clock=clock).audit_vote(freet_id, vote_data.confirm)
    return AuditVoteResponse(
        message=_AUDIT_MESSAGES[outcome.state],
        freet_id=outcome.freet_id,
        state=outcome.state,
        deleted=outcome.deleted,
        freet=FreetResponse.model_validate(outcome.freet) if outcome.freet else None,
    )
