"""
Unit tests for GapHandler

Tests validation, resampling and gap logging for one item's raw buckets
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from core.models.prices import PriceBucket
from services.price_service.gap_handler import GapHandler, gap_ratio

NOW = 1800


@pytest.fixture
def mock_settings():
    """Small window so tests stay readable"""
    settings = MagicMock()
    settings.TIMESERIES_WINDOW_SIZE = 7
    settings.TIMESERIES_MAX_GAP_RATIO = 0.5
    return settings


@pytest.fixture
def handler(mock_settings):
    with patch("services.price_service.gap_handler.get_settings", return_value=mock_settings):
        yield GapHandler()


@pytest.mark.unit
class TestGapRatio:
    """Test synthesized share of a series"""

    def test_empty(self):
        assert gap_ratio([]) == 0.0

    def test_ratio(self):
        series = [
            PriceBucket(timestamp=0),
            PriceBucket(timestamp=300, is_synthetic=True),
            PriceBucket(timestamp=600, is_synthetic=True),
            PriceBucket(timestamp=900),
        ]

        assert gap_ratio(series) == 0.5


@pytest.mark.unit
class TestGapHandler:
    """Test raw bucket processing"""

    def test_window_size_from_settings(self, handler):
        dense = handler.process([PriceBucket(timestamp=0, avgHighPrice=100)], "5m", 2, now=NOW)

        assert len(dense) == 7
        assert [b.timestamp for b in dense] == [i * 300 for i in range(7)]

    def test_fills_gaps(self, handler):
        buckets = [
            PriceBucket(timestamp=0, avgHighPrice=100),
            PriceBucket(timestamp=1800, avgHighPrice=200),
        ]

        dense = handler.process(buckets, "5m", 2, now=NOW)

        assert dense[3].avgHighPrice == 150

    def test_drops_misaligned_buckets(self, handler):
        buckets = [
            PriceBucket(timestamp=0, avgHighPrice=100),
            PriceBucket(timestamp=301, avgHighPrice=9999),
        ]

        dense = handler.process(buckets, "5m", 2, now=NOW)

        assert all(b.avgHighPrice == 100 for b in dense)
        assert handler.validator.invalid_count == 1

    def test_future_check_uses_window_reference_time(self, handler):
        """Test buckets after now are rejected even when now is in the past"""
        buckets = [
            PriceBucket(timestamp=1800, avgHighPrice=100),
            PriceBucket(timestamp=2100, avgHighPrice=9999),
        ]

        dense = handler.process(buckets, "5m", 2, now=NOW)

        assert handler.validator.invalid_count == 1
        assert dense[-1].timestamp == NOW
        assert dense[-1].avgHighPrice == 100

    def test_warns_on_high_gap_ratio(self, handler, caplog):
        with caplog.at_level(logging.WARNING):
            handler.process([PriceBucket(timestamp=0, avgHighPrice=100)], "5m", 2, now=NOW)

        assert "High gap ratio" in caplog.text

    def test_no_warning_below_threshold(self, handler, caplog):
        buckets = [PriceBucket(timestamp=i * 300, avgLowPrice=100) for i in range(6)]

        with caplog.at_level(logging.WARNING):
            handler.process(buckets, "5m", 2, now=NOW)

        assert "High gap ratio" not in caplog.text

    def test_warns_on_empty_window(self, handler, caplog):
        with caplog.at_level(logging.WARNING):
            dense = handler.process([], "5m", 2, now=NOW)

        assert len(dense) == 7
        assert "No price data in window for item 2/5m" in caplog.text

    def test_unsupported_interval(self, handler):
        with pytest.raises(ValueError, match="Unsupported interval"):
            handler.process([], "10m", 2, now=NOW)
