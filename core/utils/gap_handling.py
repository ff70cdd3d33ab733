"""
Gap filling utilities for OSRS price timeseries

The Wiki API only returns buckets in which at least one trade happened, and a
bucket may have trades on one side only. resample() turns that sparse data
into a dense, fixed-length window with every missing price interpolated from
its nearest known neighbours.
"""

from datetime import datetime, timezone

from core.models.prices import PriceBucket

INTERVAL_MS = {
    "5m": 5 * 60 * 1000,
    "1h": 60 * 60 * 1000,
    "6h": 6 * 60 * 60 * 1000,
    "24h": 24 * 60 * 60 * 1000,
}

DEFAULT_WINDOW_SIZE = 365


def parse_interval(interval: str) -> int:
    """
    Convert interval string to bucket width in milliseconds

    Raises:
        ValueError: If interval is not supported

    Example:
        >>> parse_interval("1h")
        3600000
    """
    if interval not in INTERVAL_MS:
        raise ValueError(
            f"Unsupported interval: {interval}. Supported: {', '.join(INTERVAL_MS)}"
        )
    return INTERVAL_MS[interval]


def align_timestamp(timestamp_ms: int, width_ms: int) -> int:
    """Floor a millisecond timestamp to its bucket boundary"""
    return (timestamp_ms // width_ms) * width_ms


def to_millis(now: datetime | int | float | None) -> int:
    """Reference time (datetime or epoch seconds, default now) as epoch milliseconds"""
    if now is None:
        now = datetime.now(timezone.utc)
    if isinstance(now, datetime):
        return int(now.timestamp() * 1000)
    return int(now * 1000)


def window_timestamps(
    interval: str,
    window_size: int = DEFAULT_WINDOW_SIZE,
    now: datetime | int | float | None = None,
) -> list[int]:
    """
    Bucket timestamps (seconds) of the window ending at the bucket containing now

    Args:
        interval: 5m, 1h, 6h or 24h
        window_size: Number of buckets
        now: Reference time (datetime or epoch seconds). Defaults to current UTC time

    Returns:
        Ascending list of window_size timestamps in seconds

    Example:
        >>> window_timestamps("5m", window_size=3, now=1800)
        [1200, 1500, 1800]
    """
    width_ms = parse_interval(interval)
    now_ms = to_millis(now)

    return [
        align_timestamp(now_ms - i * width_ms, width_ms) // 1000
        for i in range(window_size - 1, -1, -1)
    ]


def _nearest_known(values: list[int], index: int, step: int) -> int | None:
    i = index + step
    while 0 <= i < len(values):
        if values[i] != 0:
            return values[i]
        i += step
    return None


def _fill_value(values: list[int], index: int) -> int:
    prev_value = _nearest_known(values, index, -1)
    next_value = _nearest_known(values, index, 1)

    if prev_value is not None and next_value is not None:
        return (prev_value + next_value) // 2
    if prev_value is not None:
        return prev_value
    if next_value is not None:
        return next_value
    return 0


def fill_missing_prices(buckets: list[PriceBucket]) -> list[PriceBucket]:
    """
    Fill zero high/low prices from the nearest non-zero neighbours

    Strategy (high and low filled independently):
    - Known value on both sides → floor of their midpoint
    - Known value on one side → that value
    - No known value anywhere → stays 0

    Neighbours are looked up in the input values only, so a filled value
    never feeds another fill.

    Args:
        buckets: Buckets sorted by timestamp ASC

    Returns:
        New list of buckets; inputs are not modified

    Example:
        >>> filled = fill_missing_prices([b(high=100), b(high=0), b(high=200)])
        >>> filled[1].avgHighPrice
        150
    """
    highs = [b.avgHighPrice for b in buckets]
    lows = [b.avgLowPrice for b in buckets]

    filled = []
    for i, bucket in enumerate(buckets):
        updates = {}
        if highs[i] == 0:
            updates["avgHighPrice"] = _fill_value(highs, i)
        if lows[i] == 0:
            updates["avgLowPrice"] = _fill_value(lows, i)

        filled.append(bucket.model_copy(update=updates) if updates else bucket)

    return filled


def resample(
    sparse_buckets: list[PriceBucket],
    interval: str,
    window_size: int = DEFAULT_WINDOW_SIZE,
    now: datetime | int | float | None = None,
) -> list[PriceBucket]:
    """
    Build a dense, gap-filled series from sparse Wiki timeseries buckets

    Steps:
    1. Compute the window_size aligned bucket timestamps ending at now
    2. Take the matching input bucket for each slot (later duplicates win)
    3. Insert an all-zero synthetic bucket for every empty slot
    4. Fill missing high/low prices (fill_missing_prices)

    Args:
        sparse_buckets: Buckets in any order, timestamps in seconds
        interval: 5m, 1h, 6h or 24h
        window_size: Number of buckets to produce (default 365)
        now: Reference time (datetime or epoch seconds)

    Returns:
        Exactly window_size buckets, ascending by timestamp

    Raises:
        ValueError: If interval is not supported

    Example:
        >>> dense = resample([], "5m", window_size=5, now=1800)
        >>> [b.avgHighPrice for b in dense]
        [0, 0, 0, 0, 0]
    """
    timestamps = window_timestamps(interval, window_size, now)

    # Create lookup dict
    bucket_dict = {b.timestamp: b for b in sparse_buckets}

    window = [
        bucket_dict[ts] if ts in bucket_dict else PriceBucket(timestamp=ts, is_synthetic=True)
        for ts in timestamps
    ]

    return fill_missing_prices(window)
