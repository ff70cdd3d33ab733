"""
Volatility indicators

Implementations:
- Volatility: Annualized standard deviation of log returns
"""

import math

import numpy as np

from core.interfaces.indicators import BaseIndicator

TRADING_PERIODS_PER_YEAR = 252


class Volatility(BaseIndicator):
    """
    Annualized historical volatility

    Formula:
        r_i = ln(P_i / P_(i-1))
        σ = sample stdev of the last N returns (ddof=1)
        Volatility = σ × √252

    Returned as a fraction (0.25 = 25%), first defined once N returns exist.
    """

    decimals = 4

    def __init__(self, period: int = 14, name: str = None):
        super().__init__(period=period, name=name)

    @property
    def min_periods(self) -> int:
        return self.period + 1

    def _calculate(self, values: np.ndarray) -> np.ndarray:
        result = np.full(len(values), np.nan)
        log_returns = np.log(values[1:] / values[:-1])
        annualize = math.sqrt(TRADING_PERIODS_PER_YEAR)

        # Return j spans prices j → j+1, so the window ending at price i is [i-N, i)
        for i in range(self.period, len(values)):
            window = log_returns[i - self.period : i]
            result[i] = np.std(window, ddof=1) * annualize

        return result
