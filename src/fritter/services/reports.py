"""Report ledger: per-user reports against freets and the audit trigger."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from fritter.core.clock import Clock, system_clock
from fritter.core.errors import ConflictError
from fritter.core.settings import Settings, settings as default_settings
from fritter.db.session import transaction
from fritter.models import AuditState, Freet, FreetReport, ReportCategory
from fritter.models.freet import REPORT_COLUMNS
from fritter.repositories import FreetRepository, UserRepository
from fritter.services.audit import AuditService
from fritter.utils.enums import parse_enum

logger = logging.getLogger(__name__)

__all__ = ["ReportService", "dominant_category", "should_open_audit"]


def dominant_category(freet: Freet) -> ReportCategory:
    """Return the most reported category.

    Ties go to the category declared first (spam, misinformation, offensive).
    """
    tally = freet.report_tally
    # max() keeps the first of equal keys and tally iterates in declaration order.
    return max(tally, key=tally.__getitem__)


def should_open_audit(freet: Freet, config: Settings = default_settings) -> bool:
    """Return True when reports outweigh a sufficiently downvoted freet.

    The trigger needs more than ``audit_min_downvotes`` downvotes and more
    reports than ``audit_report_ratio`` times the downvote count.
    """
    if freet.audit_state != AuditState.NONE:
        return False
    if freet.downvotes <= config.audit_min_downvotes:
        return False
    return freet.total_reports > freet.downvotes * config.audit_report_ratio


class ReportService:
    """Files and withdraws reports; opens an audit when the threshold is met."""

    def __init__(
        self,
        db: Session,
        *,
        clock: Clock = system_clock,
        config: Settings = default_settings,
    ) -> None:
        self.db = db
        self.config = config
        self.freets = FreetRepository(db)
        self.users = UserRepository(db)
        self.audits = AuditService(db, clock=clock, config=config)

    def report(self, freet_id: int, user_id: int, category: str | ReportCategory) -> Freet:
        """File a report, or withdraw the user's open report on this freet.

        A user holds at most one open report per freet. Reporting again while
        one is open withdraws it (the originally filed category is decremented)
        whatever category is passed the second time.

        Raises:
            NotFoundError: If the freet or user does not exist.
            InvalidArgumentError: If ``category`` is not a report category.
            ConflictError: If the freet is or has been under audit.
        """
        requested = parse_enum(ReportCategory, category, "report category")
        with transaction(self.db):
            freet = self.freets.get(freet_id, for_update=True)
            user = self.users.get(user_id, for_update=True)
            if freet.audit_state != AuditState.NONE:
                raise ConflictError(
                    f"Freet {freet.id} cannot be reported while audit is {freet.audit_state}"
                )

            open_report = self.users.get_report(user.id, freet.id)
            if open_report is not None:
                withdrawn = open_report.category
                freet.reports.remove(open_report)
                self.freets.increment(freet, **{REPORT_COLUMNS[withdrawn]: -1})
                logger.debug(
                    "User %s withdrew %s report on freet %s",
                    user.id,
                    withdrawn,
                    freet.id,
                )
                return freet

            freet.reports.append(FreetReport(reporter=user, category=requested))
            self.freets.increment(freet, **{REPORT_COLUMNS[requested]: 1})
            logger.debug("User %s reported freet %s as %s", user.id, freet.id, requested)

            if should_open_audit(freet, self.config):
                self.audits.open_audit(freet, dominant_category(freet))
        return freet

    def open_report(self, freet_id: int, user_id: int) -> ReportCategory | None:
        """Return the category of the user's open report on a freet, if any."""
        self.freets.get(freet_id)
        open_report = self.users.get_report(user_id, freet_id)
        return open_report.category if open_report is not None else None
