"""Interfaces module - Abstract base classes for pluggable collaborators"""

from .cache import BaseCacheClient
from .indicators import BaseIndicator
from .price_source import BasePriceHistorySource, PriceSourceError

__all__ = [
    "BaseCacheClient",
    "BaseIndicator",
    "BasePriceHistorySource",
    "PriceSourceError",
]
