"""
Price data models

Pydantic models for OSRS Grand Exchange price data:
- TradeStats: Average prices and volumes for both market sides
- PriceBucket: One interval of aggregated trades (Wiki /timeseries row)
- ItemVolume: Last 24 hours of trades (Wiki /24h row)
- EnrichedPoint: PriceBucket plus derived indicators
- LatestPrice: Most recent instant-buy/instant-sell quote (Wiki /latest row)
- PriceHistory: Dense, enriched series returned by the price service

Field names follow the Wiki API (camelCase) so raw JSON validates directly.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

Interval = Literal["5m", "1h", "6h", "24h"]


class TradeStats(BaseModel):
    """
    Average prices and volumes for the two sides of the market

    A price of 0 means "no trade on that side", never a real price (item
    prices are always positive).
    """

    model_config = ConfigDict(frozen=True)

    avgHighPrice: int = Field(default=0, ge=0, description="Mean instant-buy price (0 = none)")
    highPriceVolume: int = Field(default=0, ge=0, description="Instant-buy volume")
    avgLowPrice: int = Field(default=0, ge=0, description="Mean instant-sell price (0 = none)")
    lowPriceVolume: int = Field(default=0, ge=0, description="Instant-sell volume")

    @field_validator(
        "avgHighPrice", "highPriceVolume", "avgLowPrice", "lowPriceVolume", mode="before"
    )
    @classmethod
    def null_as_zero(cls, v):
        # The Wiki API sends null for sides with no trades
        return 0 if v is None else v

    @property
    def has_high(self) -> bool:
        return self.avgHighPrice > 0

    @property
    def has_low(self) -> bool:
        return self.avgLowPrice > 0

    @property
    def total_volume(self) -> int:
        return self.highPriceVolume + self.lowPriceVolume


class PriceBucket(TradeStats):
    """Aggregated trade data for one interval (Wiki /timeseries row)"""

    timestamp: int = Field(description="Bucket start, seconds since epoch")
    is_synthetic: bool = Field(default=False, description="Inserted by the resampler")


class ItemVolume(TradeStats):
    """Trade data for one item over the last 24 hours (Wiki /24h row)"""


class EnrichedPoint(PriceBucket):
    """
    PriceBucket with a single derived price and technical indicators

    Every derived field is None until enough history exists to compute it.
    """

    price: int | None = Field(default=None, description="avgLowPrice, falling back to avgHighPrice")
    rsi: float | None = None
    volatility: float | None = Field(default=None, description="Annualized, as a fraction")
    sma14: float | None = None
    sma50: float | None = None
    ema12: float | None = None
    ema26: float | None = None
    macd: float | None = None
    signal: float | None = None
    histogram: float | None = None


class LatestPrice(BaseModel):
    """
    Latest instant-buy (high) and instant-sell (low) quotes for one item

    The side that traded most recently determines last_price; percent_change
    compares it against the other side.
    """

    high: int | None = Field(default=None, description="Latest instant-buy price")
    highTime: int | None = Field(default=None, description="Seconds since epoch")
    low: int | None = Field(default=None, description="Latest instant-sell price")
    lowTime: int | None = Field(default=None, description="Seconds since epoch")

    @computed_field
    @property
    def is_down(self) -> bool:
        """True when the most recent trade was on the low side"""
        return (self.lowTime or 0) > (self.highTime or 0)

    @computed_field
    @property
    def last_price(self) -> int | None:
        return self.low if self.is_down else self.high

    @computed_field
    @property
    def last_trade_time(self) -> int | None:
        times = [t for t in (self.highTime, self.lowTime) if t is not None]
        return max(times) if times else None

    @computed_field
    @property
    def percent_change(self) -> float | None:
        """Change from the other side's price to last_price, in percent"""
        previous = self.high if self.is_down else self.low
        if not previous or self.last_price is None:
            return None
        return round((self.last_price - previous) / previous * 100, 2)

    @computed_field
    @property
    def spread_percent(self) -> float | None:
        """(high - low) / low in percent, None unless both sides have a price"""
        if not self.high or not self.low:
            return None
        return round((self.high - self.low) / self.low * 100, 2)

    def filled(self) -> "LatestPrice":
        """
        Copy with a missing side priced from the other side

        Example:
            >>> LatestPrice(high=200, highTime=10).filled().low
            200
        """
        if self.high and self.low:
            return self
        price = self.high or self.low
        if not price:
            return self
        return self.model_copy(update={"high": self.high or price, "low": self.low or price})


class PriceHistory(BaseModel):
    """Dense, indicator-enriched price series for one item and interval"""

    item_id: int
    interval: Interval
    points: list[EnrichedPoint]
    synthetic_count: int = Field(default=0, description="Buckets inserted by the resampler")
    gap_ratio: float = Field(default=0.0, description="synthetic_count / len(points)")
    percent_change: float | None = Field(
        default=None, description="First to last price over the window, in percent"
    )
    latest: LatestPrice | None = None
