"""
Unit tests for the indicator engine

Tests price selection, enrichment of a dense series and degradation on
short or empty history
"""

import pytest

from core.models.prices import EnrichedPoint, PriceBucket
from core.utils.gap_handling import resample
from domain.indicators.engine import (
    INDICATOR_SPECS,
    bucket_price,
    build_indicators,
    compute_indicators,
)
from domain.indicators.registry import IndicatorRegistry

INDICATOR_FIELDS = [
    "rsi",
    "volatility",
    "sma14",
    "sma50",
    "ema12",
    "ema26",
    "macd",
    "signal",
    "histogram",
]


def create_test_series(prices: list[int], width: int = 300) -> list[PriceBucket]:
    """Helper to create a dense series with the same low and high price"""
    return [
        PriceBucket(
            timestamp=i * width,
            avgHighPrice=price,
            highPriceVolume=5,
            avgLowPrice=price,
            lowPriceVolume=5,
        )
        for i, price in enumerate(prices)
    ]


@pytest.mark.unit
class TestBucketPrice:
    """Test single price selection"""

    def test_prefers_low_price(self):
        assert bucket_price(PriceBucket(timestamp=0, avgHighPrice=120, avgLowPrice=110)) == 110

    def test_falls_back_to_high_price(self):
        assert bucket_price(PriceBucket(timestamp=0, avgHighPrice=120)) == 120

    def test_no_price(self):
        assert bucket_price(PriceBucket(timestamp=0)) is None


@pytest.mark.unit
class TestComputeIndicators:
    """Test series enrichment"""

    def test_one_point_per_bucket(self):
        series = create_test_series([100 + i for i in range(30)])

        points = compute_indicators(series)

        assert len(points) == 30
        assert all(isinstance(p, EnrichedPoint) for p in points)
        assert [p.timestamp for p in points] == [b.timestamp for b in series]

    def test_empty_series(self):
        assert compute_indicators([]) == []

    def test_constant_series_moving_averages(self):
        """Test 60 points at 100 give sma14 = sma50 = 100 once defined"""
        points = compute_indicators(create_test_series([100] * 60))

        assert all(p.sma14 is None for p in points[:13])
        assert all(p.sma14 == 100.0 for p in points[13:])
        assert all(p.sma50 is None for p in points[:49])
        assert all(p.sma50 == 100.0 for p in points[49:])

    def test_short_series_degrades_to_none(self):
        """Test 10 valid points give no RSI or volatility and do not raise"""
        points = compute_indicators(create_test_series([100 + i for i in range(10)]))

        assert all(p.rsi is None for p in points)
        assert all(p.volatility is None for p in points)
        assert all(p.sma14 is None for p in points)
        assert points[0].macd == 0.0

    def test_all_zero_series(self):
        """Test a window with no data yields no price and no indicators"""
        points = compute_indicators(resample([], "5m", window_size=30, now=0))

        assert len(points) == 30
        for point in points:
            assert point.price is None
            assert all(getattr(point, field) is None for field in INDICATOR_FIELDS)

    def test_rsi_within_bounds(self):
        prices = [100, 104, 98, 97, 110, 104, 105, 91, 95, 97, 121, 80, 85, 86, 101, 99, 131, 70]
        points = compute_indicators(create_test_series(prices * 3))

        defined = [p.rsi for p in points if p.rsi is not None]
        assert defined
        assert all(0 <= v <= 100 for v in defined)

    def test_idempotent(self):
        """Test computing twice over the same series gives equal results"""
        series = create_test_series([100 + (i * 7) % 13 for i in range(80)])

        assert compute_indicators(series) == compute_indicators(series)

    def test_cross_fills_missing_side(self):
        """Test a bucket with one side 0 reports the other side's price for both"""
        series = [
            PriceBucket(timestamp=0, avgHighPrice=0, avgLowPrice=95, lowPriceVolume=3),
            PriceBucket(timestamp=300, avgHighPrice=105, highPriceVolume=2, avgLowPrice=0),
        ]

        points = compute_indicators(series)

        assert points[0].avgHighPrice == 95
        assert points[0].avgLowPrice == 95
        assert points[1].avgLowPrice == 105
        assert points[1].price == 105

    def test_preserves_volumes_and_synthetic_flag(self):
        series = resample(
            [PriceBucket(timestamp=0, avgLowPrice=100, lowPriceVolume=7)],
            "5m",
            window_size=3,
            now=600,
        )

        points = compute_indicators(series)

        assert points[0].lowPriceVolume == 7
        assert points[0].is_synthetic is False
        assert points[1].is_synthetic is True
        assert points[1].price == 100

    def test_ema12_seed_matches_sma(self):
        prices = [100 + 3 * i for i in range(40)]

        points = compute_indicators(create_test_series(prices))

        assert points[11].ema12 == pytest.approx(sum(prices[:12]) / 12, abs=0.005)
        assert points[10].ema12 is None


@pytest.mark.unit
class TestBuildIndicators:
    """Test the fixed indicator set"""

    def test_indicator_names(self):
        names = [indicator.name for indicator in build_indicators()]

        assert names == ["rsi", "volatility", "sma14", "sma50", "ema12", "ema26", "macd"]

    def test_specs_cover_every_registered_type(self):
        kinds = {kind for kind, _ in INDICATOR_SPECS}

        assert kinds == set(IndicatorRegistry.list_indicators())
