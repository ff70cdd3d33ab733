"""
Indicator registry - look up indicator classes by short type name

Lets the engine describe its indicator set as plain (type, params) data.
"""

from core.interfaces.indicators import BaseIndicator
from domain.indicators.momentum import MACD, RSI
from domain.indicators.moving_averages import EMA, SMA
from domain.indicators.volatility import Volatility


class IndicatorRegistry:
    """Maps type names (sma, ema, rsi, macd, volatility) to indicator classes"""

    _indicators: dict[str, type[BaseIndicator]] = {
        "sma": SMA,
        "ema": EMA,
        "rsi": RSI,
        "macd": MACD,
        "volatility": Volatility,
    }

    @classmethod
    def create(cls, indicator_type: str, **params) -> BaseIndicator:
        """
        Instantiate one indicator

        Args:
            indicator_type: Registered type name, case-insensitive
            **params: Constructor arguments; `name` sets the output key

        Raises:
            ValueError: For an unregistered type

        Example:
            >>> IndicatorRegistry.create("sma", period=50, name="sma50")
            sma50(period=50)
        """
        try:
            indicator_class = cls._indicators[indicator_type.lower()]
        except KeyError:
            known = ", ".join(sorted(cls._indicators))
            raise ValueError(f"Unknown indicator: {indicator_type}. Available: {known}") from None

        return indicator_class(**params)

    @classmethod
    def create_many(cls, specs: list[tuple[str, dict]]) -> list[BaseIndicator]:
        """Instantiate a list of (type, params) pairs, preserving order"""
        return [cls.create(indicator_type, **params) for indicator_type, params in specs]

    @classmethod
    def register(cls, indicator_type: str, indicator_class: type[BaseIndicator]) -> None:
        """Add (or replace) an indicator type"""
        cls._indicators[indicator_type.lower()] = indicator_class

    @classmethod
    def list_indicators(cls) -> list[str]:
        """
        Registered type names, sorted

        Example:
            >>> IndicatorRegistry.list_indicators()
            ['ema', 'macd', 'rsi', 'sma', 'volatility']
        """
        return sorted(cls._indicators)
