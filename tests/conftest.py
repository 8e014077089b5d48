"""Shared test fixtures for accounts-core."""

import os
import sqlite3
import tempfile
from datetime import date

import pytest

from accounts_core.main import app
from accounts_core.config import settings
from accounts_core.db import Core, SCHEMA_PATH, init_db
from accounts_core.auth.schemas import RegisterRequest
from accounts_core.auth.service import AuthService
from accounts_core.users.service import UserService

TEST_SECRET = "test-signing-key-that-is-at-least-32-bytes"
PASSWORD = "Secret#123"


def _registration(email: str = "ada@example.com", password: str = PASSWORD, **overrides) -> RegisterRequest:
    """Build a valid RegisterRequest, overriding any field."""
    fields = {
        "email": email,
        "password": password,
        "first_name": "Ada",
        "last_name": "Lovelace",
        "dob": date(1815, 12, 10),
    }
    fields.update(overrides)
    return RegisterRequest(**fields)


@pytest.fixture(autouse=True)
def signing_key():
    """Configure the JWT signing key for every test."""
    original = settings.auth_private_key
    settings.auth_private_key = TEST_SECRET
    yield TEST_SECRET
    settings.auth_private_key = original


@pytest.fixture
def test_db():
    """Create in-memory test database with schema."""
    db = sqlite3.connect(":memory:")
    db.row_factory = sqlite3.Row
    db.execute("PRAGMA foreign_keys = ON")
    db.executescript(SCHEMA_PATH.read_text())
    db.commit()

    yield db

    db.close()


@pytest.fixture
def core(test_db):
    """Non-atomic Core around the in-memory database."""
    return Core(test_db, atomic=False)


@pytest.fixture
def auth_service(core):
    """AuthService wired to the in-memory database and test secret."""
    return AuthService(core, secret=TEST_SECRET)


@pytest.fixture
def user_service(core, auth_service):
    """UserService wired to the in-memory database."""
    return UserService(core, auth_service)


@pytest.fixture
def registered_user(user_service):
    """Register a user through the service.

    Returns a tuple of (user, tokens) where user is the UserResponse and
    tokens is the AuthToken issued at registration. The password is PASSWORD.
    """
    tokens = user_service.register(_registration())
    user = user_service.confirm_by_email("ada@example.com")
    return user, tokens


@pytest.fixture
def client():
    """Create test client for API testing.

    Uses a temp file database so every request's connection sees the same
    data. Each test gets a fresh database.
    """
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    os.unlink(db_path)

    original_db_path = settings.database_path
    settings.database_path = db_path
    try:
        init_db()

        app.config["TESTING"] = True
        with app.test_client() as client:
            yield client

    finally:
        settings.database_path = original_db_path
        if os.path.exists(db_path):
            os.unlink(db_path)


@pytest.fixture
def registered_client(client):
    """Register a user over HTTP.

    Returns a tuple of (client, tokens, auth_headers) where tokens is the
    response data dict with bearer_token and refresh_token.
    """
    response = client.post("/user", json=_registration().model_dump(mode="json"))
    assert response.status_code == 201
    tokens = response.get_json()["data"]
    auth_headers = {"Authorization": f"Bearer {tokens['bearer_token']}"}
    return client, tokens, auth_headers


@pytest.fixture
def make_registration():
    """Factory for valid RegisterRequest objects; keyword overrides replace fields."""
    return _registration
