"""
Dependency injection for Eventful.
Provides database sessions, repositories, caching and authentication.
"""

from fastapi import Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from typing import Generator, Optional

from ..core.config import config
from ..db.database import (
    DatabaseConnection, EventRepository, RegistrationRepository,
    LikeRepository, UserRepository, UserSessionRepository
)
from ..db.redis_client import RedisConnection, CacheManager
from ..models.user import User
from ..services.session_manager import SessionManager

SESSION_COOKIE = "eventful_session"

# Global instances
db_connection = DatabaseConnection()
redis_connection = RedisConnection()
session_manager = SessionManager()


class SignInRequired(Exception):
    """Raised when a route needs a signed-in user and there is none."""


def get_database_session() -> Generator[Session, None, None]:
    """
    Get database session dependency.

    Yields:
        SQLAlchemy database session
    """
    yield from db_connection.get_session()


def get_event_repository(session: Session = Depends(get_database_session)) -> EventRepository:
    return EventRepository(session)


def get_registration_repository(session: Session = Depends(get_database_session)) -> RegistrationRepository:
    return RegistrationRepository(session)


def get_like_repository(session: Session = Depends(get_database_session)) -> LikeRepository:
    return LikeRepository(session)


def get_user_repository(session: Session = Depends(get_database_session)) -> UserRepository:
    return UserRepository(session)


def get_session_repository(session: Session = Depends(get_database_session)) -> UserSessionRepository:
    return UserSessionRepository(session)


async def get_cache_manager() -> CacheManager:
    """
    Get cache manager dependency.

    Returns a cache manager without a client when Redis was never
    initialized, which behaves as an always-empty cache.
    """
    redis_client = redis_connection.redis_client if redis_connection._initialized else None
    return CacheManager(redis_client, await config.get_cache_config())


async def get_session_manager() -> SessionManager:
    """
    Get session manager dependency.

    Returns:
        Initialized session manager
    """
    if not session_manager._initialized:
        await session_manager.initialize()
    return session_manager


def get_session_token(request: Request) -> Optional[str]:
    """
    Read the session token from the Authorization header or the session
    cookie, in that order.
    """
    authorization = request.headers.get("Authorization")
    if authorization and authorization.startswith("Bearer "):
        return authorization.split(" ", 1)[1].strip() or None

    return request.cookies.get(SESSION_COOKIE)


async def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    session_repo: UserSessionRepository = Depends(get_session_repository),
    user_repo: UserRepository = Depends(get_user_repository),
    manager: SessionManager = Depends(get_session_manager)
) -> Optional[User]:
    """
    Get the signed-in user, or None for anonymous requests.
    """
    if not token:
        return None
    return await manager.resolve(token, session_repo, user_repo)


async def require_signin(current_user: Optional[User] = Depends(get_current_user)) -> User:
    """
    Get the signed-in user.

    Raises:
        SignInRequired: If nobody is signed in
    """
    if current_user is None:
        raise SignInRequired()
    return current_user


async def require_admin(current_user: User = Depends(require_signin)) -> User:
    """
    Get the signed-in admin user.

    Raises:
        HTTPException: If the user is not an admin
    """
    if not current_user.admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )
    return current_user


def get_client_ip(request: Request) -> str:
    """
    Get client IP address from request.

    Args:
        request: FastAPI request object

    Returns:
        Client IP address
    """
    # Proxies put the original client first
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return "unknown"
