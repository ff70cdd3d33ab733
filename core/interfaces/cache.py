"""
Abstract interface for the response cache in front of the price source

Keys used by the price and market services:
    timeseries:{item_id}:{interval}  → JSON list of raw buckets
    latest:{item_id}                 → JSON latest quote
    latest:all                       → JSON quotes for every item
    volumes:24h, mapping, indices    → JSON market views
"""

from abc import ABC, abstractmethod
from datetime import timedelta


class BaseCacheClient(ABC):
    """
    Expiring string key-value store

    Implementations:
    - InMemoryTTLCache (providers/memory/ttl_cache.py), one process
    - RedisClient (providers/opensource/redis_client.py), shared
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the backend (no-op for in-memory)"""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Stored value, or None when absent or past its TTL"""

    @abstractmethod
    async def set(self, key: str, value: str, ttl: timedelta | None = None) -> bool:
        """
        Store a value

        Args:
            key: e.g. "timeseries:2:5m"
            value: JSON string
            ttl: Lifetime; None or zero keeps the key until deleted

        Returns:
            True once stored
        """

    @abstractmethod
    async def delete(self, *keys: str) -> int:
        """Remove keys, returns how many existed"""

    @abstractmethod
    async def close(self) -> None:
        """Release the backend"""
