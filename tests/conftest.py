"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from bookshelf.config import Settings
from bookshelf.database import Base
from bookshelf.main import create_app

TEST_PASSWORD = "testpass123"  # noqa: S105


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite in memory locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/bookshelf", "/bookshelf_test")
    engine = create_engine(SQLALCHEMY_DATABASE_URL)
else:
    # Running locally - one shared in-memory SQLite connection
    SQLALCHEMY_DATABASE_URL = "sqlite://"
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

test_settings = Settings(
    database_url=SQLALCHEMY_DATABASE_URL,
    jwt_secret="test-secret",  # noqa: S106
    bcrypt_rounds=4,
    environment="test",
)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from bookshelf import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="session")
def app():
    """Application wired to the test engine."""
    return create_app(test_settings, engine=engine)


@pytest.fixture(scope="function", autouse=True)
def db(app):
    """Create a fresh database session for each test with cleanup."""
    session = app.state.session_factory()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(app):
    """Create a test client."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_service(app, db):
    """Auth service bound to the test session."""
    from bookshelf.services.auth import AuthService
    from bookshelf.services.users import UserRepository

    return AuthService(UserRepository(db), app.state.password_hasher, app.state.token_codec)


@pytest.fixture
def auth_headers(client):
    """Register and log in a user and return auth headers with user info."""
    email = "test@example.com"
    response = client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": TEST_PASSWORD, "name": "Test User"},
    )
    assert response.status_code == 201
    user_id = response.json()["data"]["id"]

    response = client.post("/api/v1/auth/login", json={"email": email, "password": TEST_PASSWORD})
    assert response.status_code == 200
    token = response.json()["accessToken"]

    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user_id, email=email)
