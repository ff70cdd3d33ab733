"""Models module - Pydantic data models"""

from .market import AlchCost, CategoryIndex, ItemMapping
from .prices import (
    EnrichedPoint,
    Interval,
    ItemVolume,
    LatestPrice,
    PriceBucket,
    PriceHistory,
    TradeStats,
)

__all__ = [
    "Interval",
    "TradeStats",
    "PriceBucket",
    "ItemVolume",
    "EnrichedPoint",
    "LatestPrice",
    "PriceHistory",
    "ItemMapping",
    "CategoryIndex",
    "AlchCost",
]
