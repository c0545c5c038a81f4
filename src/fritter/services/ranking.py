"""Ranking helpers for freet feeds.

Every function here is pure: scores are computed from the vote tallies and
timestamps already loaded on the freets, and nothing is written back.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime, timedelta
from enum import StrEnum

from fritter.db.time import as_utc, utcnow
from fritter.models import Freet
from fritter.utils.enums import parse_enum

__all__ = ["SortMethod", "rising_score", "score", "sort_freets"]

ONE_DAY = timedelta(days=1)


class SortMethod(StrEnum):
    BEST = "best"
    HOT = "hot"
    RISING = "rising"
    NEW = "new"


def best_score(freet: Freet) -> float:
    return freet.upvotes - freet.downvotes


def hot_score(freet: Freet) -> float:
    # Downvotes still count as engagement, at half weight.
    return freet.upvotes + freet.downvotes / 2


def rising_score(freet: Freet, *, now: datetime | None = None) -> float:
    """Score net votes with a boost that fades over the freet's first day.

    A brand new freet scores ``3 * net``; from one day old onwards the score
    settles at ``net``, the same as ``best``.
    """
    current_time = now or utcnow()
    age_days = (current_time - as_utc(freet.created_at)) / ONE_DAY
    boost = 0.5 + max(0.0, 1.0 - age_days)
    return 2 * boost * (freet.upvotes - freet.downvotes)


def _new_key(freet: Freet) -> datetime:
    return as_utc(freet.modified_at)


def score(
    freet: Freet,
    method: str | SortMethod,
    *,
    now: datetime | None = None,
) -> float | datetime:
    """Return the sort key of ``freet`` under ``method``; larger ranks higher.

    Raises:
        InvalidArgumentError: If ``method`` is not a sort method.
    """
    return _key_for(parse_enum(SortMethod, method, "sort type"), now)(freet)


def sort_freets(
    freets: Iterable[Freet],
    method: str | SortMethod,
    *,
    now: datetime | None = None,
) -> list[Freet]:
    """Return ``freets`` reordered by descending score.

    The sort is stable, so freets with equal scores keep their input order.
    The input is not modified and nothing is added or dropped.

    Raises:
        InvalidArgumentError: If ``method`` is not a sort method.
    """
    key = _key_for(parse_enum(SortMethod, method, "sort type"), now or utcnow())
    return sorted(freets, key=key, reverse=True)


def _key_for(
    method: SortMethod,
    now: datetime | None,
) -> Callable[[Freet], float | datetime]:
    if method is SortMethod.BEST:
        return best_score
    if method is SortMethod.HOT:
        return hot_score
    if method is SortMethod.RISING:
        return lambda freet: rising_score(freet, now=now)
    return _new_key
