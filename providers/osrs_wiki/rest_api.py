"""
OSRS Wiki real-time prices API client.

Endpoints used:
- /timeseries?timestep={interval}&id={item_id}  → up to 365 sparse buckets
- /latest?id={item_id}                          → latest high/low quote
- /latest                                       → latest quotes for every item
- /24h                                          → 24-hour volumes for every item
- /mapping                                      → item metadata

The Wiki API requires a descriptive User-Agent on every request.
"""

import asyncio
import logging

import aiohttp

from config.settings import get_settings
from core.interfaces.price_source import BasePriceHistorySource, PriceSourceError
from core.models.market import ItemMapping
from core.models.prices import ItemVolume, LatestPrice, PriceBucket
from core.utils.gap_handling import parse_interval

logger = logging.getLogger(__name__)


class OSRSWikiPriceSource(BasePriceHistorySource):
    """
    OSRS Wiki prices API client

    One aiohttp session per client, opened lazily on the first request so the
    client can be constructed outside an event loop.
    """

    def __init__(self):
        super().__init__(source_name="osrs_wiki")
        settings = get_settings()

        self.base_url = settings.PRICE_API_BASE_URL
        self.headers = {"User-Agent": settings.PRICE_API_USER_AGENT}
        self.timeout = aiohttp.ClientTimeout(total=settings.PRICE_API_TIMEOUT_SECONDS)
        self.session: aiohttp.ClientSession | None = None
        logger.info(f"OSRSWikiPriceSource initialized ({self.base_url})")

    def _get_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(headers=self.headers, timeout=self.timeout)
        return self.session

    async def _get_json(self, path: str, params: dict | None = None) -> dict | list:
        """
        GET {base_url}/{path} and decode the JSON body

        Raises:
            PriceSourceError: On non-200 status, timeout or transport failure
        """
        url = f"{self.base_url}/{path}"
        session = self._get_session()

        try:
            async with session.get(url, params=params) as response:
                if response.status != 200:
                    logger.error(f"✗ Wiki API returned HTTP {response.status}: {url} {params}")
                    raise PriceSourceError(f"{url} returned HTTP {response.status} ({params})")
                return await response.json()

        except asyncio.TimeoutError as e:
            logger.error(f"✗ Wiki API request timed out: {url} {params}")
            raise PriceSourceError(
                f"Request to {url} timed out after {self.timeout.total}s"
            ) from e

        except aiohttp.ClientError as e:
            logger.error(f"✗ Wiki API request failed: {url} {params}: {e}")
            raise PriceSourceError(f"Request to {url} failed: {e}") from e

    async def fetch_timeseries(self, item_id: int, interval: str) -> list[PriceBucket]:
        """
        Fetch sparse timeseries buckets for one item.

        Args:
            item_id: OSRS item id (e.g. 2 = Cannonball)
            interval: 5m, 1h, 6h or 24h (the API's "timestep")

        Returns:
            List of PriceBucket objects, as returned by the API
        """
        parse_interval(interval)

        payload = await self._get_json(
            "timeseries", {"timestep": interval, "id": item_id}
        )
        buckets = [PriceBucket(**row) for row in payload.get("data", [])]

        logger.info(f"Fetched {len(buckets)} buckets for item {item_id} ({interval})")
        return buckets

    async def fetch_latest(self, item_id: int) -> LatestPrice | None:
        """
        Fetch latest instant-buy/instant-sell quote for one item.

        Returns:
            LatestPrice, or None if the item has never traded
        """
        payload = await self._get_json("latest", {"id": item_id})
        row = payload.get("data", {}).get(str(item_id))

        if row is None:
            logger.warning(f"No latest price for item {item_id}")
            return None

        logger.debug(f"Fetched latest price for item {item_id}")
        return LatestPrice(**row)

    async def fetch_latest_all(self) -> dict[int, LatestPrice]:
        """Fetch latest quotes for every item that has traded"""
        payload = await self._get_json("latest")
        quotes = {
            int(item_id): LatestPrice(**row) for item_id, row in payload.get("data", {}).items()
        }

        logger.info(f"Fetched latest prices for {len(quotes)} items")
        return quotes

    async def fetch_volumes(self) -> dict[int, ItemVolume]:
        """Fetch 24-hour average prices and volumes for every item"""
        payload = await self._get_json("24h")
        volumes = {
            int(item_id): ItemVolume(**row) for item_id, row in payload.get("data", {}).items()
        }

        logger.info(f"Fetched 24h volumes for {len(volumes)} items")
        return volumes

    async def fetch_mapping(self) -> list[ItemMapping]:
        """Fetch item metadata; the endpoint returns a bare JSON list"""
        payload = await self._get_json("mapping")
        mapping = [ItemMapping(**row) for row in payload]

        logger.info(f"Fetched mapping for {len(mapping)} items")
        return mapping

    async def close(self) -> None:
        """Close aiohttp session"""
        if self.session and not self.session.closed:
            await self.session.close()
            logger.info("OSRSWikiPriceSource closed")
