"""
Moving average indicators

Implementations:
- SMA: Simple Moving Average
- EMA: Exponential Moving Average (SMA-seeded)
"""

import logging

import numpy as np
import talib

from core.interfaces.indicators import BaseIndicator

logger = logging.getLogger(__name__)


class SMA(BaseIndicator):
    """
    Simple Moving Average

    Formula: SMA = SUM(Price) / N

    Defined from index N-1 onwards.

    Example:
        >>> SMA(period=14, name="sma14").calculate(prices)
    """

    def __init__(self, period: int, name: str = None):
        super().__init__(period=period, name=name)

    def _calculate(self, values: np.ndarray) -> np.ndarray:
        return talib.SMA(values, timeperiod=self.period)


class EMA(BaseIndicator):
    """
    Exponential Moving Average

    Formula: EMA = α × Price + (1-α) × EMA_prev
    where α = 2 / (period + 1)

    Seeded with the SMA of the first N prices at index N-1, so the first
    value equals SMA(N).

    Note:
        MACD does not use this class; its EMAs are seeded with the first
        price instead (see domain/indicators/momentum.py).
    """

    def __init__(self, period: int, name: str = None):
        super().__init__(period=period, name=name)

    def _calculate(self, values: np.ndarray) -> np.ndarray:
        # Warn if insufficient warm-up data
        if len(values) < self.period * 4:
            logger.debug(
                f"EMA({self.period}): Only {len(values)} prices, "
                f"recommend {self.period * 4} for convergence"
            )

        return talib.EMA(values, timeperiod=self.period)
