from fritter.core.errors import (
    ConflictError,
    ContentTooLongError,
    FritterError,
    InvalidArgumentError,
    NotFoundError,
    PermissionDeniedError,
)
from fritter.main import status_for_error


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root_lists_docs(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


def test_status_for_error():
    assert status_for_error(NotFoundError("x")) == 404
    assert status_for_error(ContentTooLongError("x")) == 413
    assert status_for_error(InvalidArgumentError("x")) == 400
    assert status_for_error(ConflictError("x")) == 409
    assert status_for_error(PermissionDeniedError("x")) == 403
    assert status_for_error(FritterError("x")) == 500
