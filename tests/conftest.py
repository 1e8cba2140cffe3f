"""Pytest configuration and fixtures."""

import os

# Settings are cached on first import, so point them at the test database first.
# Tests wipe every table, so never reuse the application DATABASE_URL.
os.environ["DATABASE_URL"] = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ["ENVIRONMENT"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from microblog.database import Base, SessionLocal, engine, get_db, init_db  # noqa: E402
from microblog.main import app  # noqa: E402
from microblog.services.auth import create_user  # noqa: E402

DEFAULT_PASSWORD = "foobar"


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    init_db(engine)
    yield
    # Don't drop tables - each test cleans up after itself


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = SessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def user_attrs():
    """Valid attributes for a new user."""
    return {
        "name": "Christian",
        "email": "christian@example.com",
        "password": DEFAULT_PASSWORD,
        "password_confirmation": DEFAULT_PASSWORD,
    }


@pytest.fixture
def make_user(db):
    """Factory creating persisted users with unique emails."""
    counter = {"n": 0}

    def _make_user(name: str | None = None, email: str | None = None, admin: bool = False):
        counter["n"] += 1
        n = counter["n"]
        user = create_user(
            db,
            name or f"Person {n}",
            email or f"person-{n}@example.com",
            DEFAULT_PASSWORD,
            DEFAULT_PASSWORD,
        )
        if admin:
            user.admin = True
            db.commit()
        return user

    return _make_user


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Log an existing user in and return their auth headers."""

    def _login(email: str, password: str = DEFAULT_PASSWORD) -> AuthHeaders:
        response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200
        data = response.json()
        return AuthHeaders(
            {"Authorization": f"Bearer {data['access_token']}"},
            user_id=data["user"]["id"],
            email=data["user"]["email"],
        )

    return _login


@pytest.fixture
def auth_headers(client):
    """Register a user and return auth headers with user info."""
    response = client.post(
        "/api/v1/auth/register",
        json={
            "name": "Test User",
            "email": "test@example.com",
            "password": "testpass123",
            "password_confirmation": "testpass123",
        },
    )
    assert response.status_code == 201
    data = response.json()
    token = data["access_token"]

    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )
