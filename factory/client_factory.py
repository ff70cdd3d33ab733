"""
Client factory - Auto-create clients based on configuration

Dependency injection pattern: services depend on interfaces, the factory
picks the implementation
"""

import logging

from config.settings import get_settings
from core.interfaces.cache import BaseCacheClient
from core.interfaces.price_source import BasePriceHistorySource

logger = logging.getLogger(__name__)


def create_cache_client() -> BaseCacheClient:
    """
    Create cache client based on CACHE_BACKEND config

    Returns:
        BaseCacheClient: InMemoryTTLCache (memory) or RedisClient (redis)

    Examples:
        >>> # .env: CACHE_BACKEND=memory
        >>> cache = create_cache_client()  # Returns InMemoryTTLCache
        >>>
        >>> # .env: CACHE_BACKEND=redis
        >>> cache = create_cache_client()  # Returns RedisClient
    """
    settings = get_settings()
    backend = settings.CACHE_BACKEND.lower()

    if backend == "memory":
        from providers.memory.ttl_cache import InMemoryTTLCache

        logger.info("✓ Creating InMemoryTTLCache (memory)")
        return InMemoryTTLCache(purge_interval=settings.CACHE_PURGE_INTERVAL_SECONDS)

    elif backend == "redis":
        from providers.opensource.redis_client import RedisClient

        logger.info("✓ Creating RedisClient (redis)")
        return RedisClient()

    else:
        raise ValueError(f"Unsupported cache backend: {backend}. Supported: memory, redis")


def create_price_source() -> BasePriceHistorySource:
    """
    Create price history source

    Currently always returns OSRSWikiPriceSource

    Returns:
        BasePriceHistorySource: OSRS Wiki API client
    """
    from providers.osrs_wiki.rest_api import OSRSWikiPriceSource

    logger.info("Creating OSRSWikiPriceSource")
    return OSRSWikiPriceSource()
