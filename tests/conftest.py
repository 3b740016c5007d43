"""Shared fixtures: the app wired to an in-memory mongomock database."""

import mongomock
import pytest
from fastapi.testclient import TestClient

from config import Settings, get_settings
from database import get_db
from main import app

TEST_SECRET = "test-secret"


@pytest.fixture
def db():
    return mongomock.MongoClient()["InflectiveDB"]


@pytest.fixture
def settings():
    return Settings(access_token_secret=TEST_SECRET, environment="development")


@pytest.fixture
def client(db, settings):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Return a helper that obtains a token cookie for ``email`` on the shared client."""

    def _login(email: str):
        response = client.post("/jwt", json={"email": email})
        assert response.status_code == 200
        return response

    return _login
