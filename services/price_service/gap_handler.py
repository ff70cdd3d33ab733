"""
Gap Handler - Wrapper around the timeseries resampler

Responsibilities:
- Drop invalid raw buckets (via PriceDataValidator)
- Resample into a dense window with gaps filled
- Log gap details and warn on high gap ratios

Uses core utilities:
- core.utils.gap_handling.resample()
"""

import logging
from datetime import datetime

from config.settings import get_settings
from core.models.prices import PriceBucket
from core.utils.gap_handling import resample
from core.validators.prices import PriceDataValidator

logger = logging.getLogger(__name__)


def gap_ratio(series: list[PriceBucket]) -> float:
    """Share of buckets in a dense series that were synthesized"""
    if not series:
        return 0.0
    return sum(1 for b in series if b.is_synthetic) / len(series)


class GapHandler:
    """Turn raw Wiki buckets into a dense series"""

    def __init__(self, validator: PriceDataValidator | None = None):
        self.settings = get_settings()
        self.validator = validator or PriceDataValidator()

    def process(
        self,
        buckets: list[PriceBucket],
        interval: str,
        item_id: int,
        now: datetime | int | float | None = None,
    ) -> list[PriceBucket]:
        """
        Validate, resample and gap-fill raw buckets

        Args:
            buckets: Raw buckets from the price source
            interval: 5m, 1h, 6h or 24h
            item_id: OSRS item id (for logging)
            now: Reference time for the window end

        Returns:
            Dense series of TIMESERIES_WINDOW_SIZE buckets

        Raises:
            ValueError: If interval is not supported
        """
        valid = self.validator.validate_buckets(buckets, interval, now=now)

        dense = resample(
            valid,
            interval,
            window_size=self.settings.TIMESERIES_WINDOW_SIZE,
            now=now,
        )

        self._log_gaps(dense, item_id, interval)
        return dense

    def _log_gaps(self, series: list[PriceBucket], item_id: int, interval: str) -> None:
        """Log gap details, warning when the gap ratio is above threshold"""
        synthetic_count = sum(1 for b in series if b.is_synthetic)
        if synthetic_count == 0:
            return

        ratio = gap_ratio(series)
        threshold = self.settings.TIMESERIES_MAX_GAP_RATIO

        if ratio > threshold:
            logger.warning(
                f"⚠️ High gap ratio: {ratio:.2%} for item {item_id}/{interval} "
                f"({synthetic_count}/{len(series)} buckets synthesized, "
                f"threshold: {threshold:.2%})"
            )
        else:
            logger.debug(
                f"📊 Filled {synthetic_count}/{len(series)} buckets for item {item_id}/{interval}"
            )

        if all(b.avgHighPrice == 0 and b.avgLowPrice == 0 for b in series):
            logger.warning(f"No price data in window for item {item_id}/{interval}")
