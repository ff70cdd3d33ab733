"""
In-memory implementation of cache client

Process-local expiring key-value store, the default cache for a single
price service process.
"""

import logging
import time
from datetime import timedelta

from core.interfaces.cache import BaseCacheClient

logger = logging.getLogger(__name__)


class InMemoryTTLCache(BaseCacheClient):
    """
    Dict-backed cache with per-key expiry

    Features:
    - Monotonic clock expiry (immune to wall-clock changes)
    - Lazy eviction on read
    - Periodic sweep on write, so keys that are never read again do not pile up
    - ttl=None or a zero TTL keeps the key until deleted
    """

    def __init__(self, clock=time.monotonic, purge_interval: float | None = 120.0):
        """
        Args:
            clock: Returns the current time in seconds
            purge_interval: Minimum seconds between sweeps on set(); None disables them
        """
        self._clock = clock
        self._purge_interval = purge_interval
        self._last_purge = clock()
        self._store: dict[str, tuple[str, float | None]] = {}

    async def connect(self) -> None:
        """Nothing to connect to"""
        logger.info("✓ Using in-memory cache")

    async def get(self, key: str) -> str | None:
        """Get value by key, evicting it if expired"""
        entry = self._store.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at is not None and expires_at <= self._clock():
            del self._store[key]
            return None

        return value

    async def set(self, key: str, value: str, ttl: timedelta | None = None) -> bool:
        """Set key-value with optional TTL"""
        now = self._clock()
        if self._purge_interval is not None and now - self._last_purge >= self._purge_interval:
            self.purge_expired()

        expires_at = None
        if ttl and ttl.total_seconds() > 0:
            expires_at = now + ttl.total_seconds()

        self._store[key] = (value, expires_at)
        return True

    async def delete(self, *keys: str) -> int:
        """Delete one or more keys"""
        removed = 0
        for key in keys:
            if self._store.pop(key, None) is not None:
                removed += 1
        return removed

    def purge_expired(self) -> int:
        """Drop every expired key, returns how many were dropped"""
        now = self._clock()
        self._last_purge = now
        expired = [
            key
            for key, (_, expires_at) in self._store.items()
            if expires_at is not None and expires_at <= now
        ]
        for key in expired:
            del self._store[key]

        if expired:
            logger.debug(f"Purged {len(expired)} expired cache keys")
        return len(expired)

    @property
    def size(self) -> int:
        """Number of stored keys, including expired ones not yet evicted"""
        return len(self._store)

    async def close(self) -> None:
        """Clear all keys"""
        self._store.clear()
        logger.info("✓ In-memory cache cleared")
