"""
Redis client for caching event listings.
"""

import json
import logging
from typing import Any, Optional
import redis.asyncio as redis
from redis.asyncio import Redis

logger = logging.getLogger(__name__)

EVENTS_LIST_PATTERN = "events:list:*"


class RedisConnection:
    """
    Redis connection manager.
    """

    def __init__(self):
        self.redis_client: Optional[Redis] = None
        self._initialized = False

    def initialize(self, redis_url: str):
        """
        Initialize Redis connection.

        Args:
            redis_url: Redis connection URL
        """
        try:
            self.redis_client = redis.from_url(
                redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
                health_check_interval=30
            )
            self._initialized = True
            logger.info("Redis connection initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize Redis connection: {e}")
            raise

    def get_manager(self):
        """Get Redis manager instance."""
        if not self._initialized:
            raise RuntimeError("Redis not initialized")
        return self

    async def close(self):
        """Close Redis connection."""
        if self.redis_client:
            await self.redis_client.close()
            logger.info("Redis connection closed")
        self.redis_client = None
        self._initialized = False


class CacheManager:
    """
    Cache manager for event listings.

    Every Redis failure is logged and treated as a cache miss, so a Redis
    outage degrades to uncached reads.
    """

    def __init__(self, redis_client: Optional[Redis], cache_config: Optional[dict] = None):
        self.redis = redis_client
        self.cache_config = cache_config or {}

    def _serialize(self, data: Any) -> str:
        return json.dumps(data, default=str)

    def _deserialize(self, data: str) -> Any:
        return json.loads(data)

    async def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None
        """
        if self.redis is None:
            return None
        try:
            value = await self.redis.get(key)
            if value:
                return self._deserialize(value)
            return None
        except Exception as e:
            logger.error(f"Failed to get cache key {key}: {e}")
            return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Set value in cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds

        Returns:
            True if successful
        """
        if self.redis is None:
            return False
        try:
            await self.redis.set(key, self._serialize(value), ex=ttl)
            return True
        except Exception as e:
            logger.error(f"Failed to set cache key {key}: {e}")
            return False

    async def delete_pattern(self, pattern: str) -> int:
        """
        Delete keys matching pattern.

        Args:
            pattern: Key pattern to match

        Returns:
            Number of keys deleted
        """
        if self.redis is None:
            return 0
        try:
            keys = await self.redis.keys(pattern)
            if keys:
                return await self.redis.delete(*keys)
            return 0
        except Exception as e:
            logger.error(f"Failed to delete cache pattern {pattern}: {e}")
            return 0

    def events_cache_key(self, listing: str, limit: Optional[int] = None) -> str:
        """Cache key for an event listing."""
        if limit is not None:
            return f"events:list:{listing}:{limit}"
        return f"events:list:{listing}"

    async def cache_events_list(
        self, events: list, listing: str, limit: Optional[int] = None, expires_by: Optional[int] = None
    ):
        """
        Cache an event listing.

        Args:
            events: Serialized listing
            listing: Listing name
            limit: Listing size, for limited listings
            expires_by: Seconds until the listing goes stale, capping the TTL
        """
        ttl = self.cache_config.get("events_ttl", 300)
        if expires_by is not None:
            ttl = max(1, min(ttl, expires_by))
        await self.set(self.events_cache_key(listing, limit), events, ttl)

    async def get_cached_events_list(self, listing: str, limit: Optional[int] = None) -> Optional[list]:
        """Get a cached event listing."""
        return await self.get(self.events_cache_key(listing, limit))

    async def invalidate_events(self) -> int:
        """Drop every cached event listing."""
        return await self.delete_pattern(EVENTS_LIST_PATTERN)
