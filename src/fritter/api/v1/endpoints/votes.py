"""Vote-related endpoints for the Fritter API."""

from fastapi import APIRouter

from fritter.api.v1.dependencies import CurrentUserDep, SessionDep
from fritter.schemas.freet import FreetActionResponse, FreetResponse
from fritter.schemas.vote import MyVoteResponse, VoteCreate
from fritter.services.votes import VoteService

router = APIRouter(prefix="/freets", tags=["votes"])


@router.put("/{freet_id}/vote", response_model=FreetActionResponse)
async def cast_vote(
    freet_id: int,
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> FreetActionResponse:
    """Upvote or downvote a freet; repeating the same vote withdraws it."""
    freet = VoteService(db).vote(freet_id, current_user.id, vote_data.kind)
    return FreetActionResponse(
        message="Your vote has been recorded.",
        freet=FreetResponse.model_validate(freet),
    )


@router.get("/{freet_id}/my-vote", response_model=MyVoteResponse)
async def get_my_vote(
    freet_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MyVoteResponse:
    """Get current user's vote on a specific freet."""
    kind = VoteService(db).current_vote(freet_id, current_user.id)
    return MyVoteResponse(freet_id=freet_id, kind=kind)
