import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from main import app
from models.comment import Comment
from services import idea as idea_service


@pytest.fixture
def lenient_client(client):
    # Shares the get_db override installed by `client`.
    return TestClient(app, raise_server_exceptions=False)


def raising(exc):
    def _raise(*args, **kwargs):
        raise exc

    return _raise


def test_missing_table_returns_setup_instructions(client, db):
    Comment.__table__.drop(bind=db.get_bind())

    response = client.get("/api/ideas")

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Database tables not found"
    assert body["setupInstructions"]


def test_unexpected_error_is_reported_generically(lenient_client, monkeypatch):
    monkeypatch.setattr(idea_service, "list_public_ideas", raising(ZeroDivisionError("division by zero")))

    response = lenient_client.get("/api/ideas")

    assert response.status_code == 500
    assert response.json() == {
        "error": "Internal server error",
        "message": "An unexpected error occurred. Please try again.",
    }


def test_unique_violation_is_a_conflict(lenient_client, monkeypatch):
    orig = Exception("UNIQUE constraint failed: ideas.slug")
    monkeypatch.setattr(idea_service, "list_public_ideas", raising(IntegrityError("INSERT", {}, orig)))

    response = lenient_client.get("/api/ideas")

    assert response.status_code == 400
    assert response.json()["error"] == "Duplicate entry"


def test_other_integrity_errors_are_persistence_errors(lenient_client, monkeypatch):
    orig = Exception("FOREIGN KEY constraint failed")
    monkeypatch.setattr(idea_service, "list_public_ideas", raising(IntegrityError("INSERT", {}, orig)))

    response = lenient_client.get("/api/ideas")

    assert response.status_code == 500
    assert response.json()["error"] == "Database error"
