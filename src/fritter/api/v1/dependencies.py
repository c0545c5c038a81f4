"""Shared API dependencies for authentication and service construction."""

import random
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from fritter.core.clock import Clock, system_clock
from fritter.core.errors import NotFoundError
from fritter.core.security import decode_access_token
from fritter.db.session import get_db
from fritter.models import User
from fritter.repositories import UserRepository

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_clock() -> Clock:
    """Return the clock used by request handlers; overridden in tests."""
    return system_clock


ClockDep = Annotated[Clock, Depends(get_clock)]

_feed_rng = random.Random()


def get_rng() -> random.Random:
    """Return the random source used to sample the discovery feed."""
    return _feed_rng


RngDep = Annotated[random.Random, Depends(get_rng)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If token is invalid or user not found
    """
    try:
        user_id = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    try:
        return UserRepository(db).get(user_id)
    except NotFoundError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        ) from err


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
