"""
Test configuration and fixtures for Eventful.
"""

import os

# Configure before importing the app so no test reaches Zero
os.environ.pop("ZERO_TOKEN", None)
os.environ["JWT_SECRET"] = "test-super-secret-jwt-key-for-testing-only"
os.environ["JWT_ALGORITHM"] = "HS256"

import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from eventful.main import app
from eventful.api.dependencies import get_database_session, get_cache_manager
from eventful.db.database import EventRepository, UserRepository
from eventful.db.redis_client import CacheManager
from eventful.models import Base, User
from eventful.services.password_manager import PasswordManager

SQLALCHEMY_DATABASE_URL = "sqlite://"
TEST_PASSWORD = "abracadabra"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Create a database session backed by a fresh schema."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """Create a test client sharing the test database session."""

    def override_get_db():
        yield db_session

    def override_get_cache_manager():
        return CacheManager(None)

    app.dependency_overrides[get_database_session] = override_get_db
    app.dependency_overrides[get_cache_manager] = override_get_cache_manager

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def password_hash():
    """bcrypt hash of TEST_PASSWORD, computed once."""
    return PasswordManager().hash_password(TEST_PASSWORD)


@pytest.fixture
def event_attributes():
    """Factory for valid event attributes."""

    def build(**overrides):
        attributes = {
            "name": "BugSmash",
            "location": "Denver",
            "price": Decimal("10.00"),
            "description": "A fun evening of bug smashing!",
            "starts_at": datetime.now() + timedelta(days=10),
            "image_file_name": "bugsmash.png",
            "capacity": 75,
        }
        attributes.update(overrides)
        return attributes

    return build


@pytest.fixture
def user_attributes(password_hash):
    """Factory for valid user attributes."""

    def build(**overrides):
        attributes = {
            "name": "Example User",
            "username": "exampleuser",
            "email": "user@example.com",
            "password_hash": password_hash,
        }
        attributes.update(overrides)
        return attributes

    return build


@pytest.fixture
def registration_attributes():
    """Factory for valid registration attributes."""

    def build(**overrides):
        attributes = {"how_heard": "Twitter"}
        attributes.update(overrides)
        return attributes

    return build


@pytest.fixture
def event(db_session, event_attributes):
    """A persisted upcoming event."""
    return EventRepository(db_session).create(event_attributes())


@pytest.fixture
def user(db_session, user_attributes) -> User:
    """A persisted regular user."""
    return UserRepository(db_session).create(user_attributes())


@pytest.fixture
def admin(db_session, user_attributes) -> User:
    """A persisted admin user."""
    return UserRepository(db_session).create(
        user_attributes(name="Admin", username="admin", email="admin@example.com", admin=True)
    )


def _sign_in(test_client: TestClient, user: User):
    """Sign a user in through the API and send their token on later requests."""
    response = test_client.post(
        "/session",
        json={"email_or_username": user.email, "password": TEST_PASSWORD}
    )
    assert response.status_code == 200, response.text
    data = response.json()
    test_client.headers["Authorization"] = f"Bearer {data['access_token']}"
    return data


@pytest.fixture
def sign_in():
    """Sign a user in through the API."""
    return _sign_in


@pytest.fixture
def user_client(client, user):
    """A test client signed in as a regular user."""
    _sign_in(client, user)
    return client


@pytest.fixture
def admin_client(client, admin):
    """A test client signed in as an admin."""
    _sign_in(client, admin)
    return client
