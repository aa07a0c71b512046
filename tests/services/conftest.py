"""
Fixtures for service tests.
"""

import pytest

from eventful.db.database import UserRepository, UserSessionRepository
from eventful.services.jwt_manager import JWTManager
from eventful.services.password_manager import PasswordManager
from eventful.services.session_manager import SessionManager


@pytest.fixture
def jwt_manager() -> JWTManager:
    """Create a JWT manager for testing."""
    return JWTManager(
        secret_key="test-secret-key-for-testing-only",
        algorithm="HS256",
        access_token_expire_minutes=30
    )


@pytest.fixture
def session_manager(jwt_manager) -> SessionManager:
    """Create a session manager for testing."""
    return SessionManager(jwt_manager, PasswordManager(), session_expiry_days=14)


@pytest.fixture
def user_repo(db_session) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def session_repo(db_session) -> UserSessionRepository:
    return UserSessionRepository(db_session)
