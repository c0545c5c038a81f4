# tests/conftest.py
from __future__ import annotations

import os
import random
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count
from typing import Any

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fritter.api.v1.dependencies import get_clock, get_rng
from fritter.core.clock import FrozenClock
from fritter.core.security import create_access_token
from fritter.db.session import Base
from fritter.db.session import get_db as app_get_session
from fritter.main import app as fastapi_app
from fritter.models import AuditState, Cover, Follow, Freet, User

TEST_DB_URL = "sqlite://"
NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)

_USERNAME_COUNTER = count(1)


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def clock() -> FrozenClock:
    """Clock pinned to ``NOW``; tests move it with ``advance``."""
    return FrozenClock(NOW)


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users."""

    def _make_user(username: str | None = None, *, verified: bool = False) -> User:
        user = User(
            username=username or f"user{next(_USERNAME_COUNTER)}",
            verified=verified,
            date_joined=NOW - timedelta(days=30),
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def follow(db_session: Session) -> Callable[[User, User], None]:
    """Return a helper that records ``follower`` following ``followee``."""

    def _follow(follower: User, followee: User) -> None:
        db_session.add(Follow(follower_id=follower.id, followee_id=followee.id))
        db_session.commit()

    return _follow


@pytest.fixture()
def make_freet(db_session: Session) -> Callable[..., Freet]:
    """Return a factory that persists freets with preset tallies and timestamps."""

    def _make_freet(
        author: User,
        content: str = "Test freet content",
        *,
        upvotes: int = 0,
        downvotes: int = 0,
        created_at: datetime | None = None,
        modified_at: datetime | None = None,
    ) -> Freet:
        created = created_at or NOW - timedelta(hours=1)
        freet = Freet(
            author_id=author.id,
            content=content,
            created_at=created,
            modified_at=modified_at or created,
            upvotes=upvotes,
            downvotes=downvotes,
            spam_reports=0,
            misinformation_reports=0,
            offensive_reports=0,
            flagged=downvotes > upvotes,
            cover=Cover.CONTROVERSIAL if downvotes > upvotes else Cover.NONE,
            audit_state=AuditState.NONE,
        )
        db_session.add(freet)
        db_session.commit()
        return freet

    return _make_freet


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary test user."""
    return make_user("alice")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second user."""
    return make_user("bob")


@pytest.fixture()
def test_freet(make_freet: Callable[..., Freet], other_user: User) -> Freet:
    """A freet written by ``other_user``."""
    return make_freet(other_user)


@pytest.fixture()
def app(db_session: Session, clock: FrozenClock, rng: random.Random) -> Iterator[FastAPI]:
    def _get_session_override() -> Iterator[Session]:
        yield db_session

    fastapi_app.dependency_overrides[app_get_session] = _get_session_override
    fastapi_app.dependency_overrides[get_clock] = lambda: clock
    fastapi_app.dependency_overrides[get_rng] = lambda: rng
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Return a helper building bearer headers for a user."""

    def _auth_headers(user: User) -> dict[str, Any]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _auth_headers
