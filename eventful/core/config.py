"""
Configuration management for the Eventful service.
Reads environment variables first and falls back to Zero secrets.
"""

import os
import asyncio
import concurrent.futures
from urllib.parse import quote_plus
from typing import Dict, Any, Optional
import logging
from zero_python_sdk import zero

logger = logging.getLogger(__name__)


class ZeroSecretsManager:
    """
    Zero secrets client using the official Zero Python SDK.
    """

    def __init__(self, zero_token: str, caller_name: str = "eventful"):
        self.zero_token = zero_token
        self.caller_name = caller_name
        self._cache: Dict[str, Any] = {}
        self._secrets = None

    async def _fetch_secrets(self):
        """Fetch secrets from Zero if not already cached."""
        if self._secrets is None:
            try:
                loop = asyncio.get_running_loop()
                with concurrent.futures.ThreadPoolExecutor() as executor:
                    self._secrets = await loop.run_in_executor(
                        executor,
                        lambda: zero(
                            token=self.zero_token,
                            pick=["eventful"],
                            caller_name=self.caller_name
                        ).fetch()
                    )
                logger.info("Successfully fetched secrets from Zero")
            except Exception as e:
                logger.error(f"Failed to fetch secrets from Zero: {e}")
                self._secrets = {}

    def _normalize_key(self, key: str) -> str:
        """Normalize a key to lowercase and replace underscores with hyphens."""
        return key.lower().replace("_", "-")

    async def get_secret(self, key: str) -> Optional[str]:
        """
        Get a secret value by key.

        Args:
            key: The secret key to retrieve

        Returns:
            Secret value or None if not found
        """
        key = self._normalize_key(key)
        if key in self._cache:
            return self._cache[key]

        await self._fetch_secrets()
        secret_value = self._secrets.get("eventful", {}).get(key)

        if secret_value:
            self._cache[key] = secret_value

        return secret_value


class EventfulConfig:
    """
    Service configuration.

    Each getter checks the process environment, then Zero (when a
    ``ZERO_TOKEN`` is present), then a development default.
    """

    def __init__(self, zero_token: Optional[str] = None):
        self.zero_token = zero_token or os.getenv("ZERO_TOKEN")
        self.secrets_manager = ZeroSecretsManager(self.zero_token) if self.zero_token else None

    async def get_value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Resolve a single configuration value.

        Args:
            key: Environment-style key, e.g. ``DB_HOST``
            default: Value returned when no source defines the key

        Returns:
            Configured value or the default
        """
        value = os.getenv(key)
        if value:
            return value

        if self.secrets_manager is not None:
            value = await self.secrets_manager.get_secret(key)
            if value:
                return value

        return default

    async def get_database_url(self) -> str:
        """Get the database connection URL."""
        url = await self.get_value("DATABASE_URL")
        if url:
            return url

        host = await self.get_value("DB_HOST", "localhost")
        port = await self.get_value("DB_PORT", "5432")
        name = await self.get_value("DB_NAME", "eventful")
        user = await self.get_value("DB_USER", "eventful")
        password = await self.get_value("DB_PASSWORD", "eventful123")

        return f"postgresql://{user}:{quote_plus(password)}@{host}:{port}/{name}"

    async def get_redis_url(self) -> str:
        """Get the Redis connection URL."""
        host = await self.get_value("REDIS_HOST", "localhost")
        port = await self.get_value("REDIS_PORT", "6379")
        password = await self.get_value("REDIS_PASSWORD")
        use_tls = await self.get_value("REDIS_USE_TLS", "false")

        protocol = "rediss://" if use_tls.lower() == "true" else "redis://"

        if password:
            return f"{protocol}:{quote_plus(password)}@{host}:{port}"
        return f"{protocol}{host}:{port}"

    async def get_jwt_secret(self) -> str:
        """Get JWT secret key."""
        return await self.get_value("JWT_SECRET", "your-secret-key-change-in-production")

    async def get_jwt_algorithm(self) -> str:
        """Get JWT algorithm."""
        return await self.get_value("JWT_ALGORITHM", "HS256")

    async def get_jwt_expiry_minutes(self) -> int:
        """Get access token expiry time in minutes."""
        return int(await self.get_value("JWT_EXPIRY_MINUTES", "720"))

    async def get_session_expiry_days(self) -> int:
        """Get sign-in session lifetime in days."""
        return int(await self.get_value("SESSION_EXPIRY_DAYS", "14"))

    async def get_cors_origins(self) -> list:
        """Get CORS allowed origins."""
        origins = await self.get_value("CORS_ORIGINS")
        if origins:
            return origins.split(",")
        return ["http://localhost:3000", "http://localhost:8080"]

    async def get_cache_config(self) -> Dict[str, int]:
        """Get cache TTL configuration."""
        return {
            "events_ttl": int(await self.get_value("CACHE_TTL_EVENTS", "300")),
        }


# Global config instance
config = EventfulConfig()
