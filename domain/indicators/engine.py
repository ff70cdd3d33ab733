"""
Indicator engine - enrich a dense price series with every chart indicator

Fixed indicator set:
    rsi (14), volatility (14, annualized), sma14, sma50, ema12, ema26,
    macd / signal / histogram (12, 26, 9)
"""

import logging

from core.interfaces.indicators import BaseIndicator
from core.models.prices import EnrichedPoint, PriceBucket
from domain.indicators.registry import IndicatorRegistry

logger = logging.getLogger(__name__)

INDICATOR_SPECS: list[tuple[str, dict]] = [
    ("rsi", {"period": 14, "name": "rsi"}),
    ("volatility", {"period": 14, "name": "volatility"}),
    ("sma", {"period": 14, "name": "sma14"}),
    ("sma", {"period": 50, "name": "sma50"}),
    ("ema", {"period": 12, "name": "ema12"}),
    ("ema", {"period": 26, "name": "ema26"}),
    ("macd", {"fast_period": 12, "slow_period": 26, "signal_period": 9, "name": "macd"}),
]


def build_indicators() -> list[BaseIndicator]:
    """Create the fixed indicator set from the registry"""
    return IndicatorRegistry.create_many(INDICATOR_SPECS)


def bucket_price(bucket: PriceBucket) -> int | None:
    """
    Single price for a bucket: low price, falling back to high price

    Returns:
        The price, or None when neither side has one

    Example:
        >>> bucket_price(PriceBucket(timestamp=0, avgHighPrice=120, avgLowPrice=0))
        120
    """
    price = bucket.avgLowPrice or bucket.avgHighPrice
    return price if price > 0 else None


def compute_indicators(series: list[PriceBucket]) -> list[EnrichedPoint]:
    """
    Compute every indicator for every point of a dense series

    Short series never raise: indicators lacking history are None.

    Args:
        series: Buckets sorted by timestamp ASC (usually resample() output)

    Returns:
        One EnrichedPoint per bucket, same order

    Example:
        >>> points = compute_indicators(dense)
        >>> points[-1].rsi
        54.21
    """
    prices = [bucket_price(b) for b in series]

    results: dict[str, list[float | None]] = {}
    for indicator in build_indicators():
        results.update(indicator.get_results(prices))

    valid_count = sum(1 for p in prices if p is not None)
    logger.debug(f"Computed {len(results)} indicator series over {valid_count} prices")

    points = []
    for i, bucket in enumerate(series):
        fields = bucket.model_dump()
        fields["avgLowPrice"] = bucket.avgLowPrice or bucket.avgHighPrice
        fields["avgHighPrice"] = bucket.avgHighPrice or bucket.avgLowPrice
        points.append(
            EnrichedPoint(
                **fields,
                price=prices[i],
                **{key: values[i] for key, values in results.items()},
            )
        )

    return points
