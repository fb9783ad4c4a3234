"""
Redis Cache Service
Read-through cache for user profiles with evict-on-write
"""
import json
from typing import Any, Optional
from uuid import UUID

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.exceptions import RedisError

from core.config import settings
from core.logging_config import logger


def profile_key(user_id: UUID) -> str:
    return f"profile:{user_id}"


class RedisCacheService:
    """
    Redis cache service

    A cache that is disabled or unreachable behaves as permanently empty;
    cache errors never fail a request.
    """

    def __init__(self, client: Optional[Redis] = None):
        self._redis: Optional[Redis] = client

    @property
    def connected(self) -> bool:
        return self._redis is not None

    async def connect(self):
        """Connect to Redis"""
        if not settings.CACHE_ENABLED:
            logger.info("Cache disabled by configuration")
            return

        try:
            client = redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)
            await client.ping()
            self._redis = client
            logger.info(f"Connected to Redis: {settings.REDIS_URL}")
        except (RedisError, OSError) as e:
            logger.error(f"Failed to connect to Redis, running without cache: {e}")
            self._redis = None

    async def disconnect(self):
        """Disconnect from Redis"""
        if self._redis:
            await self._redis.aclose()
            self._redis = None
            logger.info("Disconnected from Redis")

    async def get_json(self, key: str) -> Optional[Any]:
        """Cached JSON value or None"""
        if not self._redis:
            return None

        try:
            value = await self._redis.get(key)
        except RedisError as e:
            logger.error(f"Redis GET error for key {key}: {e}")
            return None

        if not value:
            return None
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            logger.error(f"JSON decode error for key {key}: {e}")
            return None

    async def set_json(self, key: str, value: Any, ttl: Optional[int] = None):
        """Serialize and cache with a TTL (default from settings)"""
        if not self._redis:
            return

        try:
            await self._redis.setex(key, ttl or settings.CACHE_TTL_SECONDS, json.dumps(value))
            logger.debug(f"Cached key {key}")
        except (TypeError, ValueError) as e:
            logger.error(f"JSON encode error for key {key}: {e}")
        except RedisError as e:
            logger.error(f"Redis SET error for key {key}: {e}")

    async def delete(self, key: str):
        """Evict a key"""
        if not self._redis:
            return

        try:
            await self._redis.delete(key)
            logger.debug(f"Evicted key {key}")
        except RedisError as e:
            logger.error(f"Redis DELETE error for key {key}: {e}")


# Global cache instance
cache_service = RedisCacheService()
