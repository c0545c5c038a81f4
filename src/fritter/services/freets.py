"""Service-level helpers for creating, editing and deleting freets."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from fritter.core.clock import Clock, system_clock
from fritter.core.errors import ContentTooLongError, InvalidArgumentError, PermissionDeniedError
from fritter.core.settings import Settings, settings as default_settings
from fritter.db.session import transaction
from fritter.db.time import as_utc
from fritter.models import AuditState, Cover, Freet
from fritter.repositories import FreetRepository, UserRepository

logger = logging.getLogger(__name__)

__all__ = ["FreetService", "clean_content"]


def clean_content(content: str, max_length: int = default_settings.freet_max_length) -> str:
    """Return trimmed freet content.

    Raises:
        InvalidArgumentError: If the content is empty or only whitespace.
        ContentTooLongError: If the trimmed content exceeds ``max_length``.
    """
    text = (content or "").strip()
    if not text:
        raise InvalidArgumentError("Freet content must be at least one character long.")
    if len(text) > max_length:
        raise ContentTooLongError(
            f"Freet content must be no more than {max_length} characters."
        )
    return text


class FreetService:
    """Author-facing freet lifecycle: create, update, delete and list."""

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
        self.users = UserRepository(db)

    def create_freet(self, author_id: int, content: str) -> Freet:
        """Create a freet with empty tallies and no cover.

        Raises:
            NotFoundError: If the author does not exist.
            InvalidArgumentError: If the content is empty or too long.
        """
        text = clean_content(content, self.config.freet_max_length)
        with transaction(self.db):
            author = self.users.get(author_id)
            now = self.clock.now()
            freet = Freet(
                author_id=author.id,
                content=text,
                created_at=now,
                modified_at=now,
                upvotes=0,
                downvotes=0,
                spam_reports=0,
                misinformation_reports=0,
                offensive_reports=0,
                flagged=False,
                cover=Cover.NONE,
                audit_state=AuditState.NONE,
            )
            self.freets.save(freet)
            logger.info("User %s created freet %s", author.id, freet.id)
        return freet

    def update_freet(self, freet_id: int, editor_id: int, content: str) -> Freet:
        """Replace the content of a freet and bump ``modified_at``.

        Raises:
            NotFoundError: If the freet does not exist.
            PermissionDeniedError: If ``editor_id`` is not the author.
            InvalidArgumentError: If the content is empty or too long.
        """
        text = clean_content(content, self.config.freet_max_length)
        with transaction(self.db):
            freet = self._get_owned(freet_id, editor_id)
            freet.content = text
            freet.modified_at = max(self.clock.now(), as_utc(freet.created_at))
        return freet

    def delete_freet(self, freet_id: int, editor_id: int) -> None:
        """Delete a freet owned by ``editor_id`` along with its ledger rows."""
        with transaction(self.db):
            freet = self._get_owned(freet_id, editor_id)
            self.freets.delete(freet)
            logger.info("User %s deleted freet %s", editor_id, freet_id)

    def delete_freets_by_author(self, author_id: int) -> int:
        """Delete every freet written by ``author_id``; return how many went."""
        with transaction(self.db):
            removed = self.freets.delete_by_author(author_id)
        logger.info("Deleted %d freets by user %s", removed, author_id)
        return removed

    def get_freet(self, freet_id: int) -> Freet:
        return self.freets.get(freet_id)

    def list_freets(self) -> list[Freet]:
        """Return every freet, most recently modified first."""
        return self.freets.list_all()

    def list_freets_by_username(self, username: str) -> list[Freet]:
        """Return the freets of the named author.

        Raises:
            NotFoundError: If no user has that username.
        """
        author = self.users.get_by_username(username)
        return self.freets.list_by_author(author.id)

    def _get_owned(self, freet_id: int, editor_id: int) -> Freet:
        freet = self.freets.get(freet_id, for_update=True)
        if freet.author_id != editor_id:
            raise PermissionDeniedError("Cannot modify other users' freets.")
        return freet
