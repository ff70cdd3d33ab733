"""
Abstract interface for technical indicators

Indicators work on a price series that may contain None (no price in that
bucket). They are computed over the valid prices only and the results are
placed back at the positions those prices came from.
"""

import math
from abc import ABC, abstractmethod
from collections.abc import Callable

import numpy as np


class BaseIndicator(ABC):
    """
    Indicator interface

    Design principle:
    - Pure calculation logic (no I/O, no state kept between calls)
    - Never raises on short input: every output is None instead
    - Rounding applies to the output only, never to running state

    Implementations:
    - SMA, EMA (domain/indicators/moving_averages.py)
    - RSI, MACD (domain/indicators/momentum.py)
    - Volatility (domain/indicators/volatility.py)
    """

    decimals: int = 2

    def __init__(self, period: int, name: str | None = None, **kwargs):
        """
        Initialize indicator

        Args:
            period: Look-back period for calculation
            name: Output key (e.g. "sma14"). Defaults to the class name
            **kwargs: Additional indicator-specific parameters
        """
        self.period = period
        self.name = name or self.__class__.__name__
        self.params = {"period": period, **kwargs}

    @property
    def min_periods(self) -> int:
        """Valid prices needed before any value can be produced"""
        return self.period

    @abstractmethod
    def _calculate(self, values: np.ndarray) -> np.ndarray:
        """
        Calculate indicator over valid prices

        Args:
            values: float64 array of prices, no gaps, oldest first

        Returns:
            Array of the same length; NaN where the indicator is undefined
        """

    def calculate(self, prices: list[float | None]) -> list[float | None]:
        """
        Calculate indicator for every point of a price series

        Args:
            prices: Prices oldest first; None marks a point without a price

        Returns:
            One value per input point (None where undefined)

        Example:
            >>> SMA(period=3).calculate([1, 2, 3, None, 4])
            [None, None, 2.0, None, 3.0]
        """
        return self._apply(prices, self._calculate)

    def _apply(
        self, prices: list[float | None], func: Callable[[np.ndarray], np.ndarray]
    ) -> list[float | None]:
        """Run func over the valid prices and scatter rounded results back"""
        positions = [i for i, p in enumerate(prices) if p is not None]
        output: list[float | None] = [None] * len(prices)

        if len(positions) < self.min_periods:
            return output

        values = np.array([prices[i] for i in positions], dtype=np.float64)
        for position, value in zip(positions, func(values)):
            output[position] = self._round(value)

        return output

    def get_results(self, prices: list[float | None]) -> dict[str, list[float | None]]:
        """
        Get indicator results as dict (for polymorphic calculation)

        Default implementation returns a single series: {self.name: values}.
        Override for multi-series indicators (MACD returns macd, signal, histogram)
        """
        return {self.name: self.calculate(prices)}

    def _round(self, value: float) -> float | None:
        if value is None or math.isnan(value):
            return None
        return round(float(value), self.decimals)

    def __repr__(self) -> str:
        """String representation"""
        params_str = ", ".join(f"{k}={v}" for k, v in self.params.items())
        return f"{self.name}({params_str})"
