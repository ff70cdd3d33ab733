"""
Market Service - Market-wide views built on the bulk Wiki endpoints

- Latest quotes for every item, with missing sides filled
- Quotes for a chosen set of items
- 24-hour volumes, cached until the next 00:00 UTC
- Item metadata
- Category indices (average price and change per item category)
- High Level Alchemy rune cost

Every view reads through the cache; cache keys:
    latest:all   → JSON {item_id: raw quote}
    volumes:24h  → JSON {item_id: volumes}
    mapping      → JSON list of item metadata
    indices      → JSON {category: index}
"""

import logging
from datetime import datetime, timedelta
from statistics import mean

from pydantic import TypeAdapter

from config.settings import get_settings
from core.interfaces.cache import BaseCacheClient
from core.interfaces.price_source import BasePriceHistorySource
from core.models.market import AlchCost, CategoryIndex, ItemMapping
from core.models.prices import ItemVolume, LatestPrice
from core.utils.gap_handling import to_millis

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000

FIRE_RUNE_ID = 554
NATURE_RUNE_ID = 561
FIRE_RUNES_PER_CAST = 5

_quotes_adapter = TypeAdapter(dict[int, LatestPrice])
_volumes_adapter = TypeAdapter(dict[int, ItemVolume])
_mapping_adapter = TypeAdapter(list[ItemMapping])
_indices_adapter = TypeAdapter(dict[str, CategoryIndex])


def seconds_until_utc_midnight(now: datetime | int | float | None = None) -> float:
    """
    Seconds from now until the next 00:00 UTC

    Example:
        >>> seconds_until_utc_midnight(86400 - 90)
        90.0
    """
    now_ms = to_millis(now)
    return (DAY_MS - now_ms % DAY_MS) / 1000


class MarketService:
    """Serve market-wide price data for every OSRS item"""

    def __init__(self, source: BasePriceHistorySource, cache: BaseCacheClient):
        self.source = source
        self.cache = cache
        self.settings = get_settings()

    async def _get_raw_quotes(self) -> dict[int, LatestPrice]:
        key = "latest:all"

        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return _quotes_adapter.validate_json(cached)

        quotes = await self.source.fetch_latest_all()
        await self.cache.set(
            key,
            _quotes_adapter.dump_json(quotes).decode(),
            ttl=timedelta(seconds=self.settings.CACHE_TTL_LATEST_SECONDS),
        )
        return quotes

    async def get_latest_all(self) -> dict[int, LatestPrice]:
        """
        Latest quotes for every traded item

        A side that never traded is priced from the other side, so
        spread_percent is 0.0 for one-sided quotes.
        """
        quotes = await self._get_raw_quotes()
        return {item_id: quote.filled() for item_id, quote in quotes.items()}

    async def get_multiple_items(self, item_ids: list[int]) -> dict[int, LatestPrice]:
        """
        Filled quotes for the requested items

        Items without a quote are left out.
        """
        quotes = await self._get_raw_quotes()
        return {
            item_id: quotes[item_id].filled() for item_id in item_ids if item_id in quotes
        }

    async def get_volumes(
        self, now: datetime | int | float | None = None
    ) -> dict[int, ItemVolume]:
        """24-hour volumes for every item, cached until the next 00:00 UTC"""
        key = "volumes:24h"

        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return _volumes_adapter.validate_json(cached)

        volumes = await self.source.fetch_volumes()
        await self.cache.set(
            key,
            _volumes_adapter.dump_json(volumes).decode(),
            ttl=timedelta(seconds=seconds_until_utc_midnight(now)),
        )
        return volumes

    async def get_mapping(self) -> list[ItemMapping]:
        """Metadata for every item"""
        key = "mapping"

        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return _mapping_adapter.validate_json(cached)

        mapping = await self.source.fetch_mapping()
        await self.cache.set(
            key,
            _mapping_adapter.dump_json(mapping).decode(),
            ttl=timedelta(seconds=self.settings.CACHE_TTL_MAPPING_SECONDS),
        )
        return mapping

    async def get_indices(
        self, now: datetime | int | float | None = None
    ) -> dict[str, CategoryIndex]:
        """
        Average price and percent change per item category

        Uses the unfilled quotes. Categories where no item has a quote are
        left out.

        Returns:
            Indices keyed by category name (ORE, FISH, ...)
        """
        key = "indices"

        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return _indices_adapter.validate_json(cached)

        quotes = await self._get_raw_quotes()
        timestamp = to_millis(now)

        indices = {}
        for category, config in self.settings.ITEM_CATEGORIES.items():
            index = self._build_index(category, config, quotes, timestamp)
            if index is None:
                logger.debug(f"No quotes for category {category}, skipping index")
                continue
            indices[category] = index

        await self.cache.set(
            key,
            _indices_adapter.dump_json(indices).decode(),
            ttl=timedelta(seconds=self.settings.CACHE_TTL_INDICES_SECONDS),
        )
        logger.info(f"✓ Computed {len(indices)} category indices")
        return indices

    @staticmethod
    def _build_index(
        category: str,
        config: dict,
        quotes: dict[int, LatestPrice],
        timestamp: int,
    ) -> CategoryIndex | None:
        item_ids = [int(i) for i in config.get("ids", [])]
        items = {i: quotes[i] for i in item_ids if i in quotes}
        if not items:
            return None

        prices = [q.last_price for q in items.values() if q.last_price is not None]
        changes = [q.percent_change for q in items.values() if q.percent_change is not None]
        average_change = round(mean(changes), 2) if changes else None

        return CategoryIndex(
            category=category,
            description=config.get("description", ""),
            item_ids=item_ids,
            items=items,
            average_price=round(mean(prices)) if prices else 0,
            average_percent_change=average_change,
            is_down=average_change < 0 if average_change is not None else None,
            timestamp=timestamp,
        )

    async def get_alch_cost(self, now: datetime | int | float | None = None) -> AlchCost | None:
        """
        Rune cost of one High Level Alchemy cast

        Priced at the instant-sell (low) price of fire and nature runes.

        Returns:
            AlchCost, or None when either rune has no low price
        """
        quotes = await self._get_raw_quotes()
        fire = quotes.get(FIRE_RUNE_ID)
        nature = quotes.get(NATURE_RUNE_ID)

        if fire is None or nature is None or not fire.low or not nature.low:
            logger.warning("⚠️ Rune prices unavailable, cannot compute alch cost")
            return None

        return AlchCost(
            alch_cost=FIRE_RUNES_PER_CAST * fire.low + nature.low,
            fire_rune_price=fire.low,
            nature_rune_price=nature.low,
            timestamp=to_millis(now),
        )
