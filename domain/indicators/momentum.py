"""
Momentum indicators

Implementations:
- RSI: Relative Strength Index (Wilder smoothing)
- MACD: Moving Average Convergence Divergence
"""

import numpy as np

from core.interfaces.indicators import BaseIndicator


class RSI(BaseIndicator):
    """
    Relative Strength Index

    Formula:
        RS = Average Gain / Average Loss (over N periods)
        RSI = 100 - (100 / (1 + RS))

    Averages start as plain means of the first N changes, then Wilder
    smoothing avg = (avg × (N-1) + current) / N is applied at every index
    from N on, including the first output (index N).
    When the average loss is 0, RS is taken as 100 (RSI ≈ 99.01).

    Interpretation:
        - RSI > 70: Overbought
        - RSI < 30: Oversold
    """

    def __init__(self, period: int = 14, name: str = None):
        super().__init__(period=period, name=name)

    @property
    def min_periods(self) -> int:
        # N changes need N + 1 prices
        return self.period + 1

    def _calculate(self, values: np.ndarray) -> np.ndarray:
        period = self.period
        result = np.full(len(values), np.nan)

        changes = np.diff(values)
        gains = np.where(changes > 0, changes, 0.0)
        losses = np.where(changes < 0, -changes, 0.0)

        avg_gain = gains[:period].mean()
        avg_loss = losses[:period].mean()

        for i in range(period, len(values)):
            avg_gain = (avg_gain * (period - 1) + gains[i - 1]) / period
            avg_loss = (avg_loss * (period - 1) + losses[i - 1]) / period
            result[i] = self._rsi(avg_gain, avg_loss)

        return result

    @staticmethod
    def _rsi(avg_gain: float, avg_loss: float) -> float:
        rs = 100.0 if avg_loss == 0 else avg_gain / avg_loss
        return 100.0 - 100.0 / (1.0 + rs)


def running_ema(values: np.ndarray, period: int) -> np.ndarray:
    """
    EMA seeded with the first value (defined from index 0)

    Example:
        >>> running_ema(np.array([10.0, 20.0]), period=3)
        array([10., 15.])
    """
    k = 2 / (period + 1)
    result = np.empty(len(values))
    ema = values[0]
    for i, value in enumerate(values):
        if i > 0:
            ema = (value - ema) * k + ema
        result[i] = ema
    return result


class MACD(BaseIndicator):
    """
    Moving Average Convergence Divergence

    Components:
        - MACD Line = EMA(12) - EMA(26)
        - Signal Line = EMA(9) of MACD Line (undefined at the first point)
        - Histogram = MACD Line - Signal Line, with the undefined first
          signal counted as 0

    Quirk kept for chart compatibility: all three EMAs here are seeded with
    the first value, unlike the SMA-seeded EMA indicator, so MACD is defined
    from the first price instead of after a warm-up period.

    Interpretation:
        - MACD crosses above Signal: Bullish
        - Histogram < 0: Downward momentum
    """

    decimals = 4

    def __init__(
        self,
        fast_period: int = 12,
        slow_period: int = 26,
        signal_period: int = 9,
        name: str = None,
    ):
        super().__init__(
            period=slow_period, name=name, fast=fast_period, signal=signal_period
        )
        self.fast_period = fast_period
        self.slow_period = slow_period
        self.signal_period = signal_period

    @property
    def min_periods(self) -> int:
        return 1

    def _macd_line(self, values: np.ndarray) -> np.ndarray:
        return running_ema(values, self.fast_period) - running_ema(values, self.slow_period)

    def _signal_line(self, values: np.ndarray) -> np.ndarray:
        signal = running_ema(self._macd_line(values), self.signal_period)
        signal[0] = np.nan
        return signal

    def _histogram(self, values: np.ndarray) -> np.ndarray:
        return self._macd_line(values) - np.nan_to_num(self._signal_line(values))

    def _calculate(self, values: np.ndarray) -> np.ndarray:
        return self._macd_line(values)

    def get_results(self, prices: list[float | None]) -> dict[str, list[float | None]]:
        """
        Override to return all MACD components

        Returns:
            Dict with macd, signal, histogram series
        """
        return {
            "macd": self._apply(prices, self._macd_line),
            "signal": self._apply(prices, self._signal_line),
            "histogram": self._apply(prices, self._histogram),
        }
