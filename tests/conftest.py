import os

# Configure before any application module reads the environment.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["CLIENT_URL"] = "http://client.test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Register a user and return `(user, headers)`."""

    def _register(username: str, **overrides):
        payload = {
            "email": f"{username}@example.com",
            "username": username,
            "firstName": "Test",
            "lastName": "User",
            "password": "secret123",
        }
        payload.update(overrides)
        response = client.post("/api/auth/register", json=payload)
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], auth_headers(body["token"])

    return _register


@pytest.fixture
def create_idea(client):
    def _create_idea(headers: dict, **overrides):
        payload = {
            "title": "My Big Idea",
            "description": "A short pitch",
            "problem": "Things are hard",
            "solution": "Make them easy",
        }
        payload.update(overrides)
        response = client.post("/api/ideas", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create_idea
