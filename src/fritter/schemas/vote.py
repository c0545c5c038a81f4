"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field

from fritter.models import VoteKind


class VoteCreate(BaseModel):
    """Schema for casting, flipping or withdrawing a vote.

    ``kind`` is validated by the vote service so that an unknown kind is
    reported the same way from every entry point.
    """

    kind: str = Field(..., description="'upvote' or 'downvote'; repeating a vote withdraws it")


class MyVoteResponse(BaseModel):
    """The caller's counted vote on a freet."""

    freet_id: int
    kind: VoteKind | None = None
