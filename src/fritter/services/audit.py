"""Audit process: timed community review of a heavily reported freet.

State machine::

    none --(report threshold)--> testing --(window elapsed, on next vote)--> passed
                                                                         \\-> failed

Resolution is lazy. A testing audit is only evaluated when an audit vote
arrives (or when :meth:`AuditService.resolve_expired` is run explicitly),
never from an in-process timer.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from fritter.core.clock import Clock, system_clock
from fritter.core.errors import ConflictError, NotFoundError
from fritter.core.settings import Settings, settings as default_settings
from fritter.db.session import transaction
from fritter.db.time import as_utc
from fritter.models import AuditState, Cover, Freet, ReportCategory
from fritter.repositories import FreetRepository
from fritter.services.votes import apply_vote_cover

logger = logging.getLogger(__name__)

__all__ = ["AuditOutcome", "AuditService", "audit_ratio"]

# Categories whose failed audit removes the freet outright.
_DELETE_ON_FAILURE = frozenset({ReportCategory.SPAM, ReportCategory.MISINFORMATION})


@dataclass(frozen=True)
class AuditOutcome:
    """Result of an audit vote or an explicit resolution pass.

    Attributes:
        freet_id: Audited freet.
        state: Audit state after the operation.
        deleted: True when a failed audit removed the freet.
        freet: The freet, or ``None`` once deleted.
    """

    freet_id: int
    state: AuditState
    deleted: bool = False
    freet: Freet | None = None

    @property
    def resolved(self) -> bool:
        return self.state.is_terminal


def audit_ratio(yes: int, no: int) -> float:
    """Return confirming votes per rejecting vote, counting zero rejections as one."""
    return yes / max(no, 1)


class AuditService:
    """Opens, tallies and resolves audits."""

    def __init__(
        self,
        db: Session,
        *,
        clock: Clock = system_clock,
        config: Settings = default_settings,
    ) -> None:
        self.db = db
        self.clock = clock
        self.config = config
        self.freets = FreetRepository(db)

    def open_audit(self, freet: Freet, category: ReportCategory) -> Freet:
        """Move ``freet`` from none to testing inside the caller's transaction.

        Raises:
            ConflictError: If the freet already went through an audit.
        """
        if freet.audit_state != AuditState.NONE:
            raise ConflictError(f"Freet {freet.id} is already audited ({freet.audit_state})")
        freet.audit_state = AuditState.TESTING
        freet.audit_category = category
        freet.audit_yes = 0
        freet.audit_no = 0
        freet.audit_started_at = self.clock.now()
        freet.cover = Cover.for_category(category)
        logger.info(
            "Audit opened on freet %s for %s (down=%d, reports=%d)",
            freet.id,
            category,
            freet.downvotes,
            freet.total_reports,
        )
        return freet

    def audit_vote(self, freet_id: int, confirm: bool) -> AuditOutcome:
        """Record one audit vote and resolve the audit if its window has elapsed.

        Args:
            freet_id: Freet under audit.
            confirm: True agrees the freet should be moderated.

        Raises:
            NotFoundError: If the freet does not exist.
            ConflictError: If the freet is not in the testing state.
        """
        with transaction(self.db):
            freet = self.freets.get(freet_id, for_update=True)
            if freet.audit_state != AuditState.TESTING:
                raise ConflictError(
                    f"Freet {freet.id} is not accepting audit votes ({freet.audit_state})"
                )
            self.freets.increment(freet, **{"audit_yes" if confirm else "audit_no": 1})

            if self.window_elapsed(freet):
                return self._resolve(freet)
        return AuditOutcome(freet_id=freet_id, state=AuditState.TESTING, freet=freet)

    def window_elapsed(self, freet: Freet, now: datetime | None = None) -> bool:
        """Return True once the audit has been open for the full audit window."""
        if freet.audit_started_at is None:
            return False
        now = now or self.clock.now()
        return now - as_utc(freet.audit_started_at) >= self.config.audit_window

    def resolve_expired(self) -> list[AuditOutcome]:
        """Resolve every testing audit whose window has elapsed.

        Each freet resolves in its own transaction. Nothing calls this
        automatically; it exists for operators and cron (see
        ``fritter.scripts.resolve_audits``).
        """
        outcomes: list[AuditOutcome] = []
        now = self.clock.now()
        for candidate in self.freets.list_in_audit():
            if not self.window_elapsed(candidate, now):
                continue
            candidate_id = candidate.id
            try:
                with transaction(self.db):
                    freet = self.freets.get(candidate_id, for_update=True)
                    if freet.audit_state != AuditState.TESTING:
                        continue
                    outcomes.append(self._resolve(freet))
            except NotFoundError:
                logger.info("Freet %s was deleted before its audit resolved", candidate_id)
        return outcomes

    def _resolve(self, freet: Freet) -> AuditOutcome:
        freet_id = freet.id
        ratio = audit_ratio(freet.audit_yes or 0, freet.audit_no or 0)
        if ratio >= self.config.audit_fail_ratio:
            freet.audit_state = AuditState.FAILED
        else:
            freet.audit_state = AuditState.PASSED
        logger.info(
            "Audit on freet %s resolved %s (yes=%s, no=%s, ratio=%.2f)",
            freet_id,
            freet.audit_state,
            freet.audit_yes,
            freet.audit_no,
            ratio,
        )

        if freet.audit_state == AuditState.PASSED:
            apply_vote_cover(freet, clear_on_tie=True)
            return AuditOutcome(freet_id=freet_id, state=AuditState.PASSED, freet=freet)

        category = freet.audit_category
        if category in _DELETE_ON_FAILURE:
            self.freets.delete(freet)
            logger.info("Deleted freet %s after failed %s audit", freet_id, category)
            return AuditOutcome(freet_id=freet_id, state=AuditState.FAILED, deleted=True)

        freet.cover = Cover.TRIGGERING
        return AuditOutcome(freet_id=freet_id, state=AuditState.FAILED, freet=freet)
