"""
Data quality validator for raw Wiki price data

Validates:
- Timestamp alignment to the bucket interval
- Timestamp not in the future
- Price spike detection between consecutive buckets
- Latest quote sanity
"""

import logging
from datetime import datetime

from core.models.prices import LatestPrice, PriceBucket
from core.utils.gap_handling import parse_interval, to_millis

logger = logging.getLogger(__name__)


class PriceDataValidator:
    """
    Price data quality validation

    Misaligned or future buckets are rejected; spikes are only logged since
    thinly traded items legitimately jump between buckets.
    """

    def __init__(self, spike_threshold_pct: float = 50.0):
        """
        Initialize validator

        Args:
            spike_threshold_pct: Bucket-to-bucket price change that counts as a spike
        """
        self.spike_threshold_pct = spike_threshold_pct
        self.spike_count = 0
        self.invalid_count = 0

    def validate_bucket(
        self,
        bucket: PriceBucket,
        interval: str,
        now: datetime | int | float | None = None,
    ) -> tuple[bool, str | None]:
        """
        Validate a single timeseries bucket

        Args:
            bucket: Raw bucket
            interval: Bucket interval
            now: Reference time for the future check (default: current time)

        Returns:
            (is_valid, error_message)

        Example:
            >>> validator = PriceDataValidator()
            >>> validator.validate_bucket(PriceBucket(timestamp=301), "5m")
            (False, 'Misaligned timestamp: 301 (interval 5m)')
        """
        width_seconds = parse_interval(interval) // 1000

        if bucket.timestamp % width_seconds != 0:
            self.invalid_count += 1
            return False, f"Misaligned timestamp: {bucket.timestamp} (interval {interval})"

        now_seconds = to_millis(now) // 1000
        if bucket.timestamp > now_seconds:
            self.invalid_count += 1
            return False, f"Future timestamp: {bucket.timestamp} (now: {now_seconds})"

        return True, None

    def validate_buckets(
        self,
        buckets: list[PriceBucket],
        interval: str,
        now: datetime | int | float | None = None,
    ) -> list[PriceBucket]:
        """
        Drop invalid buckets and log price spikes

        Args:
            buckets: Raw buckets from the price source
            interval: Bucket interval
            now: Reference time for the future check

        Returns:
            Valid buckets, sorted by timestamp ASC
        """
        valid = []
        for bucket in sorted(buckets, key=lambda b: b.timestamp):
            is_valid, error = self.validate_bucket(bucket, interval, now=now)
            if not is_valid:
                logger.warning(f"✗ Dropping bucket: {error}")
                continue
            valid.append(bucket)

        self._detect_spikes(valid)
        return valid

    def _detect_spikes(self, buckets: list[PriceBucket]) -> None:
        previous = None
        for bucket in buckets:
            price = bucket.avgLowPrice or bucket.avgHighPrice
            if not price:
                continue

            if previous:
                change_pct = abs(price - previous) / previous * 100
                if change_pct > self.spike_threshold_pct:
                    self.spike_count += 1
                    logger.warning(
                        f"⚠️ Price spike at {bucket.timestamp}: "
                        f"{change_pct:.2f}% change ({previous} → {price})"
                    )
            previous = price

    def validate_latest(self, latest: LatestPrice) -> tuple[bool, str | None]:
        """
        Validate a latest-price quote

        Checks:
        1. At least one side has traded
        2. Traded sides have a positive price and a trade time
        """
        if latest.high is None and latest.low is None:
            self.invalid_count += 1
            return False, "No high or low price"

        for side, price, traded_at in (
            ("high", latest.high, latest.highTime),
            ("low", latest.low, latest.lowTime),
        ):
            if price is None:
                continue
            if price <= 0:
                self.invalid_count += 1
                return False, f"Invalid {side} price: {price} (must be > 0)"
            if traded_at is None:
                self.invalid_count += 1
                return False, f"Missing {side} trade time"

        return True, None

    def get_stats(self) -> dict[str, int]:
        """Get validation statistics"""
        return {
            "spike_count": self.spike_count,
            "invalid_count": self.invalid_count,
        }

    def reset_stats(self) -> None:
        """Reset statistics counters"""
        self.spike_count = 0
        self.invalid_count = 0
