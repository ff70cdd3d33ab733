"""
Price Service - OSRS price history with technical indicators

Request-driven service that:
1. Fetches sparse timeseries from the OSRS Wiki prices API
2. Caches raw responses with short TTLs
3. Resamples into a dense 365-bucket window (gap-filling)
4. Calculates RSI, volatility, SMA, EMA and MACD

MarketService adds market-wide views (bulk quotes, volumes, item metadata,
category indices, alch cost).
"""

from services.price_service.gap_handler import GapHandler
from services.price_service.history import PriceHistoryService, percent_change
from services.price_service.market import MarketService, seconds_until_utc_midnight

__all__ = [
    "GapHandler",
    "MarketService",
    "PriceHistoryService",
    "percent_change",
    "seconds_until_utc_midnight",
]
