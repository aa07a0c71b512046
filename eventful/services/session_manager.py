"""
Sign-in session service.
Handles authentication, session creation, lookup and sign-out.
"""

from datetime import datetime, timedelta
from typing import Optional
import logging

from ..core.config import config
from ..db.database import UserRepository, UserSessionRepository
from ..models.user import User, UserSession
from .jwt_manager import JWTManager
from .password_manager import PasswordManager

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Session management service.

    A session token is a signed JWT that also has a ``UserSession`` row, so
    signing out invalidates it before it expires.
    """

    def __init__(
        self,
        jwt_manager: Optional[JWTManager] = None,
        password_manager: Optional[PasswordManager] = None,
        session_expiry_days: Optional[int] = None,
    ):
        self.jwt_manager = jwt_manager or JWTManager()
        self.password_manager = password_manager or PasswordManager()
        self.session_expiry_days = session_expiry_days
        self._initialized = False

    async def initialize(self):
        """Load token and session settings."""
        if not self._initialized:
            await self.jwt_manager.initialize()
            if self.session_expiry_days is None:
                self.session_expiry_days = await config.get_session_expiry_days()
            self._initialized = True

    async def authenticate(self, identifier: str, password: str, user_repo: UserRepository) -> Optional[User]:
        """
        Find the user by email or username and check the password.

        Returns:
            The user, or None when the combination is invalid
        """
        user = user_repo.get_by_email_or_username(identifier.strip())
        if user is None:
            logger.warning("Sign-in failed: unknown user")
            return None

        if not self.password_manager.verify_password(password, user.password_hash):
            logger.warning(f"Sign-in failed: wrong password for user {user.id}")
            return None

        return user

    async def sign_in(
        self,
        user: User,
        session_repo: UserSessionRepository,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> UserSession:
        """
        Issue a session token for an authenticated user.

        Args:
            user: Authenticated user
            session_repo: Session repository instance
            ip_address: Client IP address
            user_agent: Client user agent

        Returns:
            The created session
        """
        token = self.jwt_manager.create_access_token({
            "user_id": user.id,
            "email": user.email,
            "role": user.role.value
        })
        expires_at = datetime.now() + timedelta(days=self.session_expiry_days or 14)

        user_session = session_repo.create(
            user_id=user.id,
            session_token=token,
            expires_at=expires_at,
            ip_address=ip_address,
            user_agent=user_agent[:500] if user_agent else None
        )

        logger.info(f"Session created for user {user.id}")
        return user_session

    async def resolve(
        self,
        token: str,
        session_repo: UserSessionRepository,
        user_repo: UserRepository
    ) -> Optional[User]:
        """
        Return the user a session token belongs to.

        The token must verify, and its session must be active and unexpired.
        """
        payload = self.jwt_manager.verify_token(token)
        if payload is None:
            return None

        user_session = session_repo.get_by_token(token)
        if user_session is None or not user_session.is_active:
            return None

        if user_session.is_expired:
            user_session.is_active = False
            session_repo.session.commit()
            return None

        if user_session.user_id != payload["user_id"]:
            logger.warning(f"Session {user_session.id} does not match its token")
            return None

        return user_repo.get_by_id(user_session.user_id)

    async def sign_out(self, token: str, session_repo: UserSessionRepository) -> bool:
        """
        Deactivate the session a token belongs to.

        Returns:
            True if a session was signed out
        """
        user_session = session_repo.get_by_token(token)
        if user_session is None or not user_session.is_active:
            return False

        user_session.is_active = False
        session_repo.session.commit()
        logger.info(f"User {user_session.user_id} signed out (session {user_session.id})")
        return True

    async def end_all(self, user_id: int, session_repo: UserSessionRepository) -> int:
        """Deactivate every session of a user."""
        count = session_repo.deactivate_user_sessions(user_id)
        logger.info(f"Deactivated {count} sessions for user {user_id}")
        return count
