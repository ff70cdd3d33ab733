"""
Redis-backed response cache

Use when several price service processes should share fetched Wiki data.
Keys are namespaced with REDIS_KEY_PREFIX from cache.yaml.
"""

import logging
from datetime import timedelta

from redis.asyncio import Redis

from config.settings import get_settings
from core.interfaces.cache import BaseCacheClient

logger = logging.getLogger(__name__)


class RedisClient(BaseCacheClient):
    """
    Cache on redis.asyncio

    TTLs are enforced by Redis itself (SET ... EX), rounded up to whole seconds.
    """

    def __init__(self):
        self.settings = get_settings()
        self.prefix = self.settings.REDIS_KEY_PREFIX
        self.client: Redis | None = None

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def _require_client(self) -> Redis:
        if self.client is None:
            raise RuntimeError("Redis client not connected, call connect() first")
        return self.client

    async def connect(self) -> None:
        """Open the connection and verify it with PING"""
        address = f"{self.settings.REDIS_HOST}:{self.settings.REDIS_PORT}"
        self.client = Redis.from_url(self.settings.redis_url, decode_responses=True)

        try:
            await self.client.ping()
        except Exception as e:
            logger.error(f"✗ Redis unreachable at {address}: {e}")
            raise

        logger.info(f"✓ Redis cache ready at {address} (prefix {self.prefix!r})")

    async def get(self, key: str) -> str | None:
        client = self._require_client()
        try:
            return await client.get(self._key(key))
        except Exception as e:
            logger.error(f"✗ Redis GET {key} failed: {e}")
            raise

    async def set(self, key: str, value: str, ttl: timedelta | None = None) -> bool:
        client = self._require_client()
        seconds = ttl.total_seconds() if ttl else 0

        try:
            if seconds > 0:
                stored = await client.set(self._key(key), value, ex=max(1, int(seconds)))
            else:
                stored = await client.set(self._key(key), value)
        except Exception as e:
            logger.error(f"✗ Redis SET {key} failed: {e}")
            raise

        return bool(stored)

    async def delete(self, *keys: str) -> int:
        client = self._require_client()
        try:
            return await client.delete(*(self._key(k) for k in keys))
        except Exception as e:
            logger.error(f"✗ Redis DEL {', '.join(keys)} failed: {e}")
            raise

    async def close(self) -> None:
        if self.client is not None:
            await self.client.aclose()
            self.client = None
            logger.info("✓ Redis cache connection closed")
