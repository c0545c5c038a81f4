"""Freet-related endpoints for the Fritter API."""

from fastapi import APIRouter, Query, status

from fritter.api.v1.dependencies import ClockDep, CurrentUserDep, SessionDep
from fritter.schemas.freet import FreetActionResponse, FreetCreate, FreetResponse, FreetUpdate
from fritter.services.freets import FreetService

router = APIRouter(prefix="/freets", tags=["freets"])


@router.get("/", response_model=list[FreetResponse])
async def list_freets(
    db: SessionDep,
    author: str | None = Query(None, description="Only return freets by this username"),
) -> list[FreetResponse]:
    """List freets, most recently modified first.

    Args:
        db: Database session
        author: Optional username to filter by

    Returns:
        List of freets

    Raises:
        NotFoundError: If ``author`` names no user (mapped to 404)
    """
    service = FreetService(db)
    freets = service.list_freets_by_username(author) if author else service.list_freets()
    return [FreetResponse.model_validate(freet) for freet in freets]


@router.get("/{freet_id}", response_model=FreetResponse)
async def get_freet(freet_id: int, db: SessionDep) -> FreetResponse:
    """Get a specific freet by ID."""
    return FreetResponse.model_validate(FreetService(db).get_freet(freet_id))


@router.post("/", response_model=FreetActionResponse, status_code=status.HTTP_201_CREATED)
async def create_freet(
    freet_data: FreetCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    clock: ClockDep,
) -> FreetActionResponse:
    """Create a new freet authored by the caller."""
    freet = FreetService(db, clock=clock).create_freet(current_user.id, freet_data.content)
    return FreetActionResponse(
        message="Your freet was created successfully.",
        freet=FreetResponse.model_validate(freet),
    )


@router.put("/{freet_id}", response_model=FreetActionResponse)
async def update_freet(
    freet_id: int,
    freet_data: FreetUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
    clock: ClockDep,
) -> FreetActionResponse:
    """Replace the content of one of the caller's freets."""
    freet = FreetService(db, clock=clock).update_freet(
        freet_id, current_user.id, freet_data.content
    )
    return FreetActionResponse(
        message="Your freet was updated successfully.",
        freet=FreetResponse.model_validate(freet),
    )


@router.delete("/{freet_id}", response_model=FreetActionResponse)
async def delete_freet(
    freet_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> FreetActionResponse:
    """Delete one of the caller's freets."""
    FreetService(db).delete_freet(freet_id, current_user.id)
    return FreetActionResponse(message="Your freet was deleted successfully.")
