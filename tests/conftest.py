"""
Shared pytest fixtures for the puzzle backend tests.

Every test gets a fresh app bound to an in-memory SQLite database.
"""

import pytest
from fastapi.testclient import TestClient

from puzzle_backend.config import Settings
from puzzle_backend.database import seed_questions
from puzzle_backend.main import create_app


TEST_SECRET = "test-secret"

SAMPLE_QUESTIONS = [
    {"kind": "question", "content": "What is 7 * 6?", "answer": "42"},
    {"kind": "puzzle", "content": "What has keys but can't open locks?", "answer": "A piano"},
]


@pytest.fixture
def settings():
    return Settings(database_url_override="sqlite://", jwt_secret=TEST_SECRET)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app, client):
    """Session on the same database the client talks to (tables already created)."""
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded(db):
    return seed_questions(db, SAMPLE_QUESTIONS)


@pytest.fixture
def register_user(client):
    def _register(username="alice", password="secret1"):
        return client.post("/register", json={"username": username, "password": password})
    return _register


@pytest.fixture
def token(client, register_user):
    register_user()
    response = client.post("/login", json={"username": "alice", "password": "secret1"})
    return response.json()["token"]
