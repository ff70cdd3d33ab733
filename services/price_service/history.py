"""
Price History Service - Core orchestration

Clean separation of concerns:
- Fetch raw buckets / latest quote (via BasePriceHistorySource)
- Cache raw responses (via BaseCacheClient)
- Resample and gap-fill (via GapHandler)
- Calculate indicators (via compute_indicators)

Architecture:
    BasePriceHistorySource → OSRS Wiki API
    BaseCacheClient → TTL cache in front of the source
    GapHandler → Dense 365-bucket window
    compute_indicators → Enriched points
"""

import json
import logging
from datetime import datetime, timedelta

from config.settings import get_settings
from core.interfaces.cache import BaseCacheClient
from core.interfaces.price_source import BasePriceHistorySource
from core.models.prices import EnrichedPoint, LatestPrice, PriceBucket, PriceHistory
from core.utils.gap_handling import parse_interval
from domain.indicators.engine import compute_indicators
from services.price_service.gap_handler import GapHandler, gap_ratio

logger = logging.getLogger(__name__)


def percent_change(points: list[EnrichedPoint]) -> float | None:
    """
    Change from the first to the last price of a series, in percent

    Returns:
        Rounded to 2 decimals, or None when either end has no price

    Example:
        >>> percent_change(points)  # 100 → 110
        10.0
    """
    if len(points) < 2:
        return None

    first, last = points[0].price, points[-1].price
    if not first or last is None:
        return None

    return round((last - first) / first * 100, 2)


class PriceHistoryService:
    """Serve dense, indicator-enriched price history for OSRS items"""

    def __init__(
        self,
        source: BasePriceHistorySource,
        cache: BaseCacheClient,
        gap_handler: GapHandler | None = None,
    ):
        self.source = source
        self.cache = cache
        self.settings = get_settings()
        self.gap_handler = gap_handler or GapHandler()

    async def get_sparse_buckets(self, item_id: int, interval: str) -> list[PriceBucket]:
        """
        Raw buckets for an item, served from cache when fresh

        Raises:
            ValueError: If interval is not supported
            PriceSourceError: If the source fails on a cache miss
        """
        parse_interval(interval)
        key = f"timeseries:{item_id}:{interval}"

        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return [PriceBucket.model_validate(row) for row in json.loads(cached)]

        buckets = await self.source.fetch_timeseries(item_id, interval)
        await self.cache.set(
            key,
            json.dumps([b.model_dump() for b in buckets]),
            ttl=timedelta(seconds=self.settings.CACHE_TTL_TIMESERIES_SECONDS),
        )
        return buckets

    async def get_dense_series(
        self,
        item_id: int,
        interval: str,
        now: datetime | int | float | None = None,
    ) -> list[PriceBucket]:
        """Dense, gap-filled window for an item"""
        buckets = await self.get_sparse_buckets(item_id, interval)
        return self.gap_handler.process(buckets, interval, item_id, now=now)

    async def get_latest(self, item_id: int) -> LatestPrice | None:
        """Latest quote for an item, served from cache when fresh"""
        key = f"latest:{item_id}"

        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return LatestPrice.model_validate_json(cached)

        latest = await self.source.fetch_latest(item_id)
        if latest is None:
            return None

        is_valid, error = self.gap_handler.validator.validate_latest(latest)
        if not is_valid:
            logger.warning(f"✗ Ignoring latest price for item {item_id}: {error}")
            return None

        await self.cache.set(
            key,
            latest.model_dump_json(include={"high", "highTime", "low", "lowTime"}),
            ttl=timedelta(seconds=self.settings.CACHE_TTL_LATEST_SECONDS),
        )
        return latest

    async def get_price_history(
        self,
        item_id: int,
        interval: str,
        now: datetime | int | float | None = None,
        include_latest: bool = True,
    ) -> PriceHistory:
        """
        Full price history for an item - main entry point

        Steps:
        1. Fetch (or reuse cached) raw buckets
        2. Resample into a dense window
        3. Calculate indicators
        4. Attach latest quote

        Args:
            item_id: OSRS item id
            interval: 5m, 1h, 6h or 24h
            now: Reference time for the window end (default: current time)
            include_latest: Also fetch the latest quote

        Returns:
            PriceHistory with one EnrichedPoint per bucket
        """
        dense = await self.get_dense_series(item_id, interval, now=now)
        points = compute_indicators(dense)

        latest = await self.get_latest(item_id) if include_latest else None

        synthetic_count = sum(1 for b in dense if b.is_synthetic)
        history = PriceHistory(
            item_id=item_id,
            interval=interval,
            points=points,
            synthetic_count=synthetic_count,
            gap_ratio=gap_ratio(dense),
            percent_change=percent_change(points),
            latest=latest,
        )

        logger.info(
            f"✅ Built {len(points)} points for item {item_id}/{interval} "
            f"({synthetic_count} synthesized)"
        )
        return history
