"""Vote ledger: per-user up/down votes and the freet tallies they drive."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from fritter.db.session import transaction
from fritter.models import AuditState, Cover, Freet, FreetVote, VoteKind
from fritter.repositories import FreetRepository, UserRepository
from fritter.utils.enums import parse_enum

logger = logging.getLogger(__name__)

__all__ = ["VoteService", "apply_vote_cover"]

# (current vote, requested vote) -> (upvote delta, downvote delta, new ledger entry)
_TRANSITIONS: dict[tuple[VoteKind | None, VoteKind], tuple[int, int, VoteKind | None]] = {
    (None, VoteKind.UPVOTE): (1, 0, VoteKind.UPVOTE),
    (None, VoteKind.DOWNVOTE): (0, 1, VoteKind.DOWNVOTE),
    (VoteKind.UPVOTE, VoteKind.UPVOTE): (-1, 0, None),
    (VoteKind.DOWNVOTE, VoteKind.DOWNVOTE): (0, -1, None),
    (VoteKind.UPVOTE, VoteKind.DOWNVOTE): (-1, 1, VoteKind.DOWNVOTE),
    (VoteKind.DOWNVOTE, VoteKind.UPVOTE): (1, -1, VoteKind.UPVOTE),
}

# Audit states whose cover outranks the vote-derived one.
_AUDIT_COVER_STATES = (AuditState.TESTING, AuditState.FAILED)


def apply_vote_cover(freet: Freet, *, clear_on_tie: bool = False) -> None:
    """Recompute ``flagged`` and the vote-derived cover.

    ``flagged`` always mirrors ``downvotes > upvotes``. The cover turns
    controversial on a net-negative tally and clears on a net-positive one; a
    tie keeps the previous cover unless ``clear_on_tie`` is set. Covers placed
    by a running or failed audit are left alone.
    """
    freet.flagged = freet.downvotes > freet.upvotes
    if freet.audit_state in _AUDIT_COVER_STATES:
        return
    if freet.downvotes > freet.upvotes:
        freet.cover = Cover.CONTROVERSIAL
    elif freet.upvotes > freet.downvotes or clear_on_tie:
        freet.cover = Cover.NONE


class VoteService:
    """Applies vote transitions to a freet and the voter's ledger atomically."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.freets = FreetRepository(db)
        self.users = UserRepository(db)

    def vote(self, freet_id: int, user_id: int, kind: str | VoteKind) -> Freet:
        """Cast, flip or withdraw a vote.

        Voting the same kind twice toggles the vote off; voting the opposite
        kind moves the vote across.

        Args:
            freet_id: Freet being voted on.
            user_id: Acting user.
            kind: ``"upvote"`` or ``"downvote"``.

        Returns:
            The freet with updated tallies.

        Raises:
            NotFoundError: If the freet or user does not exist.
            InvalidArgumentError: If ``kind`` is not a vote kind.
        """
        requested = parse_enum(VoteKind, kind, "vote kind")
        with transaction(self.db):
            freet = self.freets.get(freet_id, for_update=True)
            user = self.users.get(user_id, for_update=True)
            ledger_entry = self.users.get_vote(user.id, freet.id)
            current = ledger_entry.kind if ledger_entry is not None else None

            up_delta, down_delta, new_kind = _TRANSITIONS[(current, requested)]
            if new_kind is None:
                freet.votes.remove(ledger_entry)
            elif ledger_entry is None:
                freet.votes.append(FreetVote(voter=user, kind=new_kind))
            else:
                ledger_entry.kind = new_kind

            self.freets.increment(freet, upvotes=up_delta, downvotes=down_delta)
            apply_vote_cover(freet)
            logger.debug(
                "Vote on freet %s by user %s: %s -> %s (up=%d, down=%d)",
                freet.id,
                user.id,
                current,
                new_kind,
                freet.upvotes,
                freet.downvotes,
            )
        return freet

    def current_vote(self, freet_id: int, user_id: int) -> VoteKind | None:
        """Return the user's counted vote on a freet, or ``None``."""
        self.freets.get(freet_id)
        ledger_entry = self.users.get_vote(user_id, freet_id)
        return ledger_entry.kind if ledger_entry is not None else None
