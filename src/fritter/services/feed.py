"""Feed selection: audience filters composed with the ranking helpers."""
from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from datetime import datetime
from enum import StrEnum

from sqlalchemy.orm import Session

from fritter.core.clock import Clock, system_clock
from fritter.core.settings import Settings, settings as default_settings
from fritter.db.time import as_utc
from fritter.models import Freet
from fritter.repositories import FreetFilter, FreetRepository, UserRepository
from fritter.services.ranking import SortMethod, sort_freets
from fritter.utils.enums import parse_enum

logger = logging.getLogger(__name__)

__all__ = ["FeedService", "TabType", "interleave_discovery"]


class TabType(StrEnum):
    HOME = "home"
    VERIFIED = "verified"
    DISCOVERY = "discovery"


def interleave_discovery(
    followed: Sequence[Freet],
    not_followed: Sequence[Freet],
    rng: random.Random,
    *,
    stride: int = 4,
) -> list[Freet]:
    """Mix freets from followed and non-followed authors.

    One slot is produced per non-followed freet. Slots at indexes divisible by
    ``stride`` draw from the non-followed pool, the others from the followed
    pool. Draws are uniform and with replacement, so a freet can repeat and
    another can be left out. When the user follows nobody with recent freets,
    every slot draws from the non-followed pool.
    """
    mixed: list[Freet] = []
    for index in range(len(not_followed)):
        pool = not_followed if index % stride == 0 or not followed else followed
        mixed.append(rng.choice(pool))
    return mixed


class FeedService:
    """Builds the named feed tabs for a user. Read-only."""

    def __init__(
        self,
        db: Session,
        *,
        clock: Clock = system_clock,
        rng: random.Random | None = None,
        config: Settings = default_settings,
    ) -> None:
        self.clock = clock
        self.rng = rng or random.Random()
        self.config = config
        self.freets = FreetRepository(db)
        self.users = UserRepository(db)

    def choose_tab(
        self,
        user_id: int,
        tab: str | TabType,
        sort: str | SortMethod | None = None,
        since: datetime | None = None,
    ) -> list[Freet]:
        """Return the ranked freets for one feed tab.

        Args:
            user_id: Viewer whose follow list defines the audience.
            tab: ``home``, ``verified`` or ``discovery``.
            sort: Ranking method; defaults to ``settings.default_sort``.
            since: Oldest ``modified_at`` to include; defaults to one feed
                window (seven days) before now.

        Raises:
            NotFoundError: If the user does not exist.
            InvalidArgumentError: For an unknown tab or sort type.
        """
        tab_type = parse_enum(TabType, tab, "tab type")
        method = parse_enum(SortMethod, sort or self.config.default_sort, "sort type")
        now = self.clock.now()
        since = as_utc(since) if since is not None else now - self.config.feed_window

        user = self.users.get(user_id)
        follows = self.users.followed_ids(user.id)

        if tab_type is TabType.HOME:
            candidates = self.freets.query(
                FreetFilter(author_ids=follows, modified_since=since)
            )
        elif tab_type is TabType.VERIFIED:
            candidates = self.freets.query(
                FreetFilter(modified_since=since, author_verified=True)
            )
        else:
            followed = self.freets.query(FreetFilter(author_ids=follows, modified_since=since))
            not_followed = self.freets.query(
                FreetFilter(exclude_author_ids=follows, modified_since=since)
            )
            candidates = interleave_discovery(
                followed,
                not_followed,
                self.rng,
                stride=self.config.discovery_stride,
            )

        logger.debug(
            "Feed %s/%s for user %s: %d candidates since %s",
            tab_type,
            method,
            user.id,
            len(candidates),
            since.isoformat(),
        )
        return sort_freets(candidates, method, now=now)
