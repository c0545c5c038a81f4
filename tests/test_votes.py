"""Tests for the vote ledger and the freet tallies it maintains."""

import pytest
from sqlalchemy import func, select

from fritter.core.errors import InvalidArgumentError, NotFoundError
from fritter.models import AuditState, Cover, FreetVote, VoteKind
from fritter.services.votes import VoteService, apply_vote_cover


def _ledger_size(db_session, freet_id: int) -> int:
    return db_session.execute(
        select(func.count()).select_from(FreetVote).where(FreetVote.freet_id == freet_id)
    ).scalar_one()


@pytest.mark.parametrize(
    ("first", "second", "expected_up", "expected_down", "expected_vote"),
    [
        (None, "upvote", 1, 0, VoteKind.UPVOTE),
        (None, "downvote", 0, 1, VoteKind.DOWNVOTE),
        ("upvote", "upvote", 0, 0, None),
        ("downvote", "downvote", 0, 0, None),
        ("upvote", "downvote", 0, 1, VoteKind.DOWNVOTE),
        ("downvote", "upvote", 1, 0, VoteKind.UPVOTE),
    ],
)
def test_vote_transitions(
    db_session, test_user, test_freet, first, second, expected_up, expected_down, expected_vote
):
    """Every (current, requested) pair lands on the documented tallies and ledger entry."""
    service = VoteService(db_session)
    if first is not None:
        service.vote(test_freet.id, test_user.id, first)

    freet = service.vote(test_freet.id, test_user.id, second)

    assert freet.upvotes == expected_up
    assert freet.downvotes == expected_down
    assert service.current_vote(test_freet.id, test_user.id) == expected_vote
    assert _ledger_size(db_session, test_freet.id) == (0 if expected_vote is None else 1)


def test_double_vote_restores_original_state(db_session, test_user, make_freet, other_user):
    freet = make_freet(other_user, upvotes=3, downvotes=1)
    service = VoteService(db_session)

    service.vote(freet.id, test_user.id, VoteKind.DOWNVOTE)
    service.vote(freet.id, test_user.id, VoteKind.DOWNVOTE)

    assert (freet.upvotes, freet.downvotes) == (3, 1)
    assert service.current_vote(freet.id, test_user.id) is None


def test_flip_moves_one_vote(db_session, test_user, test_freet):
    service = VoteService(db_session)
    service.vote(test_freet.id, test_user.id, "upvote")
    freet = service.vote(test_freet.id, test_user.id, "downvote")

    assert freet.upvotes + freet.downvotes == 1
    assert _ledger_size(db_session, test_freet.id) == 1


def test_tallies_match_ledger_after_many_voters(db_session, make_user, test_freet):
    service = VoteService(db_session)
    voters = [make_user() for _ in range(5)]
    for voter in voters:
        service.vote(test_freet.id, voter.id, "upvote")
    service.vote(test_freet.id, voters[0].id, "downvote")
    service.vote(test_freet.id, voters[1].id, "upvote")

    counts = dict(
        db_session.execute(
            select(FreetVote.kind, func.count())
            .where(FreetVote.freet_id == test_freet.id)
            .group_by(FreetVote.kind)
        ).all()
    )
    assert test_freet.upvotes == counts.get(VoteKind.UPVOTE, 0) == 3
    assert test_freet.downvotes == counts.get(VoteKind.DOWNVOTE, 0) == 1


def test_downvote_majority_flags_and_covers(db_session, test_user, test_freet):
    freet = VoteService(db_session).vote(test_freet.id, test_user.id, "downvote")

    assert freet.flagged is True
    assert freet.cover == Cover.CONTROVERSIAL


def test_upvote_majority_clears_controversial_cover(db_session, test_user, make_freet, other_user):
    freet = make_freet(other_user, upvotes=0, downvotes=1)
    assert freet.cover == Cover.CONTROVERSIAL

    VoteService(db_session).vote(freet.id, test_user.id, "upvote")
    VoteService(db_session).vote(freet.id, other_user.id, "upvote")

    assert freet.flagged is False
    assert freet.cover == Cover.NONE


def test_tie_keeps_previous_cover(db_session, test_user, make_freet, other_user):
    freet = make_freet(other_user, upvotes=1, downvotes=2)

    VoteService(db_session).vote(freet.id, test_user.id, "upvote")

    assert (freet.upvotes, freet.downvotes) == (2, 2)
    assert freet.flagged is False
    assert freet.cover == Cover.CONTROVERSIAL


def test_vote_keeps_audit_cover(db_session, test_user, make_freet, other_user):
    freet = make_freet(other_user, upvotes=0, downvotes=1)
    freet.audit_state = AuditState.TESTING
    freet.cover = Cover.SPAM
    db_session.commit()

    VoteService(db_session).vote(freet.id, test_user.id, "upvote")
    VoteService(db_session).vote(freet.id, other_user.id, "upvote")

    assert freet.cover == Cover.SPAM
    assert freet.flagged is False


def test_apply_vote_cover_clear_on_tie(make_freet, other_user):
    freet = make_freet(other_user, upvotes=2, downvotes=3)
    freet.downvotes = 2

    apply_vote_cover(freet, clear_on_tie=True)

    assert freet.cover == Cover.NONE
    assert freet.flagged is False


def test_vote_unknown_kind(db_session, test_user, test_freet):
    with pytest.raises(InvalidArgumentError):
        VoteService(db_session).vote(test_freet.id, test_user.id, "sideways")


def test_vote_missing_freet(db_session, test_user):
    with pytest.raises(NotFoundError):
        VoteService(db_session).vote(999, test_user.id, "upvote")


def test_vote_missing_user_leaves_tallies_untouched(db_session, test_freet):
    with pytest.raises(NotFoundError):
        VoteService(db_session).vote(test_freet.id, 999, "upvote")

    db_session.refresh(test_freet)
    assert test_freet.upvotes == 0
