"""Shared test fixtures."""

import os
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-0123456789abcdef0123456789abcdef0123456789abcdef")

from todo_api.database import Base, get_db  # noqa: E402
from todo_api.dependencies.services import get_email_service  # noqa: E402
from todo_api.main import app  # noqa: E402
from todo_api.models import User, UserRole  # noqa: E402
from todo_api.rate_limiter import limiter  # noqa: E402
from todo_api.services.auth_service import TokenService  # noqa: E402
from todo_api.services.email_service import EmailService  # noqa: E402

TEST_SECRET = "another-test-secret-0123456789abcdef0123456789abcdef0123456789ab"


def register_user(test_client: TestClient, username: str, email: str, password: str):
    """Register a user through the API and return the response."""
    return test_client.post(
        "/api/register",
        json={"username": username, "email": email, "password": password},
    )


def login_user(test_client: TestClient, email: str, password: str) -> dict:
    """Login through the API and return the JSON body."""
    response = test_client.post("/api/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def promote_to_admin(db_session_maker, email: str) -> None:
    db = db_session_maker()
    user = db.query(User).filter(User.email == email).first()
    user.role = UserRole.ADMIN.value
    db.commit()
    db.close()


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across threads."""
    # Use StaticPool to share same connection across all threads
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session_maker(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(db_session_maker):
    """A database session for repository and service tests."""
    session = db_session_maker()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def token_service():
    return TokenService(secret_key=TEST_SECRET, algorithm="HS256")


@pytest.fixture
def email_service():
    """Email service double recording sends."""
    service = MagicMock(spec=EmailService)
    service.send_password_reset_email.return_value = True
    return service


@pytest.fixture
def client(db_session_maker, email_service):
    """Create test client with in-memory database.

    Yields a tuple of (TestClient, SessionMaker, EmailService mock).
    """
    # Clear rate limiter storage between tests
    limiter.reset()

    def override_get_db():
        db = db_session_maker()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: email_service

    with TestClient(app) as test_client:
        yield test_client, db_session_maker, email_service

    app.dependency_overrides.clear()


@pytest.fixture
def alice(client):
    """Registered and logged-in regular user."""
    test_client, _, _ = client
    register_user(test_client, "alice", "alice@example.com", "Passw0rd!")
    return login_user(test_client, "alice@example.com", "Passw0rd!")


@pytest.fixture
def bob(client):
    """A second regular user."""
    test_client, _, _ = client
    register_user(test_client, "bob", "bob@example.com", "B0bPassword")
    return login_user(test_client, "bob@example.com", "B0bPassword")


@pytest.fixture
def admin(client):
    """User promoted to admin before logging in, so the token carries the role."""
    test_client, db_session_maker, _ = client
    register_user(test_client, "admin", "admin@example.com", "Adm1nPassword")
    promote_to_admin(db_session_maker, "admin@example.com")
    return login_user(test_client, "admin@example.com", "Adm1nPassword")
