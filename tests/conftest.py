"""Pytest fixtures and configuration for hydrotrack tests."""

import os

# Must be set before hydrotrack modules read their configuration at import time.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from hydrotrack.database.database import Base
from hydrotrack.database import models  # noqa: F401
from hydrotrack.database.user_repository import UserRepository
from hydrotrack.database.intake_repository import IntakeRepository


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

DEFAULT_PASSWORD = "secret1"


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    Foreign keys are enabled by the engine-wide connect listener.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def user_repository(db_session: Session):
    """Create a UserRepository instance for testing."""
    return UserRepository(db_session)


@pytest.fixture
def intake_repository(db_session: Session):
    """Create an IntakeRepository instance for testing."""
    return IntakeRepository(db_session)


@pytest.fixture
def sample_user_data():
    """Registration data in the repository's (snake_case) shape."""
    return {
        "username": "alice",
        "email": "alice@x.com",
        "password": DEFAULT_PASSWORD,
        "first_name": "Alice",
        "last_name": "Liddell",
        "gender": "female",
    }


@pytest.fixture
def sample_user(user_repository, sample_user_data):
    """A persisted plain user."""
    return user_repository.create(**sample_user_data)


@pytest.fixture
def registration_body():
    """Registration body in the API's (camelCase) shape."""
    return {
        "username": "alice",
        "email": "alice@x.com",
        "password": DEFAULT_PASSWORD,
        "firstName": "Alice",
        "lastName": "Liddell",
        "gender": "female",
    }


@pytest.fixture
def test_client(db_session: Session):
    """Create a FastAPI test client bound to the test database session."""
    from hydrotrack.api.app import app
    from hydrotrack.database.database import get_db

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def register(test_client, registration_body):
    """Register a user through the API and return its token.

    Call with keyword overrides for any body field.
    """
    def _register(**overrides) -> str:
        body = {**registration_body, **overrides}
        response = test_client.post("/auth/register", json=body)
        assert response.status_code == 200, response.text
        return response.json()["token"]
    return _register


@pytest.fixture
def user_token(register):
    """Token for the default registered user (alice)."""
    return register()


@pytest.fixture
def admin_token(test_client, db_session):
    """Token for an admin created through the bootstrap command."""
    from hydrotrack.database.create_admin import create_admin

    create_admin(db_session, "root", "root@x.com", "adminpass")
    response = test_client.post("/auth/login", json={"username": "root", "password": "adminpass"})
    assert response.status_code == 200, response.text
    return response.json()["token"]
