"""
Technical indicators module

Exports:
- BaseIndicator (core/interfaces/indicators.py)
- Moving averages: SMA, EMA
- Momentum: RSI, MACD
- Volatility: Volatility
- Registry: IndicatorRegistry
- Engine: compute_indicators
"""

from core.interfaces.indicators import BaseIndicator
from domain.indicators.engine import compute_indicators
from domain.indicators.momentum import MACD, RSI
from domain.indicators.moving_averages import EMA, SMA
from domain.indicators.registry import IndicatorRegistry
from domain.indicators.volatility import Volatility

__all__ = [
    "BaseIndicator",
    "SMA",
    "EMA",
    "RSI",
    "MACD",
    "Volatility",
    "IndicatorRegistry",
    "compute_indicators",
]
