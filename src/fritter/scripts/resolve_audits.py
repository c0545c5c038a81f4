# src/fritter/scripts/resolve_audits.py
"""Resolve audits whose voting window has elapsed.

Audit votes resolve an audit lazily, so a freet that stops receiving audit
votes stays in ``testing``. Run this from cron to close those out::

    python -m fritter.scripts.resolve_audits --dry-run
"""
from __future__ import annotations

import argparse
import logging
import sys

from fritter.core.clock import system_clock
from fritter.db.session import SessionLocal
from fritter.repositories import FreetRepository
from fritter.services.audit import AuditService

logger = logging.getLogger("fritter.scripts.resolve_audits")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List expired audits without resolving them",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    db = SessionLocal()
    try:
        service = AuditService(db, clock=system_clock)
        if args.dry_run:
            expired = [
                freet for freet in FreetRepository(db).list_in_audit()
                if service.window_elapsed(freet)
            ]
            for freet in expired:
                print(f"freet {freet.id}: yes={freet.audit_yes} no={freet.audit_no}")
            print(f"{len(expired)} audit(s) ready to resolve")
            return 0

        outcomes = service.resolve_expired()
        for outcome in outcomes:
            suffix = " (deleted)" if outcome.deleted else ""
            print(f"freet {outcome.freet_id}: {outcome.state}{suffix}")
        logger.info("Resolved %d audit(s)", len(outcomes))
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
