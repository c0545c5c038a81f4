"""Feed endpoints for listing freets by tab and sort order."""
from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Query

from fritter.api.v1.dependencies import ClockDep, CurrentUserDep, RngDep, SessionDep
from fritter.schemas.freet import FreetResponse
from fritter.services.feed import FeedService, TabType
from fritter.services.ranking import SortMethod

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("/", response_model=list[FreetResponse])
async def get_default_feed(
    current_user: CurrentUserDep,
    db: SessionDep,
    clock: ClockDep,
    rng: RngDep,
) -> list[FreetResponse]:
    """Return the home tab ranked by best, the feed shown when no tab is chosen."""
    freets = FeedService(db, clock=clock, rng=rng).choose_tab(
        current_user.id, TabType.HOME, SortMethod.BEST
    )
    return [FreetResponse.model_validate(freet) for freet in freets]


@router.get("/{tab}", response_model=list[FreetResponse])
async def get_feed(
    tab: str,
    current_user: CurrentUserDep,
    db: SessionDep,
    clock: ClockDep,
    rng: RngDep,
    sort: str | None = Query(None, description="best, hot, rising or new"),
    since: datetime | None = Query(None, description="Oldest modification time to include"),
) -> list[FreetResponse]:
    """Return one feed tab (home, verified or discovery) for the caller."""
    freets = FeedService(db, clock=clock, rng=rng).choose_tab(
        current_user.id, tab, sort, since
    )
    return [FreetResponse.model_validate(freet) for freet in freets]
