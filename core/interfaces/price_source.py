"""
Abstract base class for price history sources

Anything that can return sparse timeseries buckets, latest quotes, 24-hour
volumes and item metadata: the OSRS Wiki API, a fixture file, a database.
"""

from abc import ABC, abstractmethod

from core.models.market import ItemMapping
from core.models.prices import ItemVolume, LatestPrice, PriceBucket
from core.utils.gap_handling import INTERVAL_MS


class PriceSourceError(RuntimeError):
    """Raised when a price source cannot deliver data"""


class BasePriceHistorySource(ABC):
    """
    Price history source interface

    Implementations:
    - OSRSWikiPriceSource (providers/osrs_wiki/rest_api.py)

    Example:
        >>> source = OSRSWikiPriceSource()
        >>> buckets = await source.fetch_timeseries(item_id=2, interval="1h")
        >>> latest = await source.fetch_latest(item_id=2)
        >>> await source.close()
    """

    def __init__(self, source_name: str):
        self.source_name = source_name

    @abstractmethod
    async def fetch_timeseries(self, item_id: int, interval: str) -> list[PriceBucket]:
        """
        Fetch sparse timeseries buckets for one item

        Args:
            item_id: OSRS item id
            interval: 5m, 1h, 6h or 24h

        Returns:
            Buckets in source order (may have gaps)

        Raises:
            ValueError: If interval is not supported
            PriceSourceError: If the source fails
        """

    @abstractmethod
    async def fetch_latest(self, item_id: int) -> LatestPrice | None:
        """
        Fetch latest quote for one item

        Returns:
            LatestPrice, or None if the source has no quote for the item

        Raises:
            PriceSourceError: If the source fails
        """

    @abstractmethod
    async def fetch_latest_all(self) -> dict[int, LatestPrice]:
        """
        Fetch latest quotes for every traded item

        Returns:
            Quotes keyed by item id

        Raises:
            PriceSourceError: If the source fails
        """

    @abstractmethod
    async def fetch_volumes(self) -> dict[int, ItemVolume]:
        """
        Fetch 24-hour trade volumes for every traded item

        Raises:
            PriceSourceError: If the source fails
        """

    @abstractmethod
    async def fetch_mapping(self) -> list[ItemMapping]:
        """
        Fetch metadata (name, alch values, buy limit) for every item

        Raises:
            PriceSourceError: If the source fails
        """

    def get_supported_intervals(self) -> list[str]:
        """Bucket intervals this source can serve"""
        return list(INTERVAL_MS)

    async def close(self) -> None:
        """Release network resources"""
