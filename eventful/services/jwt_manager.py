"""
JWT token management service.
Handles session token creation and validation.
"""

from datetime import datetime, timedelta, timezone
import uuid
from typing import Optional, Dict, Any
from jose import JWTError, jwt
import logging

from ..core.config import config

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("user_id", "email", "role")


class JWTManager:
    """
    JWT token management service.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        access_token_expire_minutes: Optional[int] = None,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes
        self._initialized = secret_key is not None

    async def initialize(self):
        """Initialize JWT configuration from config."""
        self.secret_key = self.secret_key or await config.get_jwt_secret()
        self.algorithm = self.algorithm or await config.get_jwt_algorithm()
        self.access_token_expire_minutes = (
            self.access_token_expire_minutes or await config.get_jwt_expiry_minutes()
        )
        self._initialized = True

    def create_access_token(self, data: Dict[str, Any]) -> str:
        """Create a JWT access token."""
        to_encode = data.copy()
        expire = datetime.now(timezone.utc) + timedelta(minutes=self.access_token_expire_minutes)
        to_encode.update({"exp": expire, "type": "access", "jti": uuid.uuid4().hex})

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm or "HS256")

    def verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Verify and decode a JWT token.

        Args:
            token: JWT token to verify

        Returns:
            Token payload if valid, None otherwise
        """
        if not self._initialized:
            logger.error("JWT manager not initialized")
            return None

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm or "HS256"])
        except JWTError as e:
            logger.warning(f"JWT verification failed: {e}")
            return None

        if payload.get("type") != "access":
            return None
        if not all(key in payload for key in REQUIRED_CLAIMS):
            return None

        return payload

    def get_token_expiry(self) -> int:
        """Get access token expiry time in seconds."""
        return self.access_token_expire_minutes * 60
