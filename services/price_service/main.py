"""
Price Service - One-shot price history export

Fetches one item's price history, fills gaps, computes indicators and prints
the result as JSON.

Usage:
    python -m services.price_service.main 2 --interval 1h
    python -m services.price_service.main 13190 --interval 24h --no-latest
"""

import argparse
import asyncio
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from config.settings import get_settings
from core.utils.gap_handling import INTERVAL_MS
from factory.client_factory import create_cache_client, create_price_source
from services.price_service.history import PriceHistoryService

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Console logs on stderr (stdout carries the JSON), errors to a rotating file"""
    os.makedirs("data/logs", exist_ok=True)

    _fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    _console = logging.StreamHandler(sys.stderr)
    _console.setLevel(level)
    _console.setFormatter(logging.Formatter(_fmt))

    _file = RotatingFileHandler(
        "data/logs/price_service_errors.log",
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
    )
    _file.setLevel(logging.ERROR)
    _file.setFormatter(logging.Formatter(_fmt))

    logging.basicConfig(level=level, handlers=[_console, _file])


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export OSRS item price history with indicators")
    parser.add_argument("item_id", type=int, help="OSRS item id (e.g. 2 = Cannonball)")
    parser.add_argument(
        "--interval",
        choices=list(INTERVAL_MS),
        default="5m",
        help="Bucket interval (default: 5m)",
    )
    parser.add_argument(
        "--no-latest",
        action="store_true",
        help="Skip fetching the latest quote",
    )
    return parser.parse_args(argv)


async def run(item_id: int, interval: str, include_latest: bool = True) -> str:
    """Build the price history for one item and return it as JSON"""
    source = create_price_source()
    cache = create_cache_client()
    service = PriceHistoryService(source=source, cache=cache)

    try:
        await cache.connect()
        history = await service.get_price_history(
            item_id, interval, include_latest=include_latest
        )
        return history.model_dump_json(indent=2)
    finally:
        await source.close()
        await cache.close()


def main(argv: list[str] | None = None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    configure_logging(get_settings().LOG_LEVEL)

    try:
        output = asyncio.run(run(args.item_id, args.interval, not args.no_latest))
    except Exception as e:
        logger.error(f"❌ Failed to build price history for item {args.item_id}: {e}", exc_info=True)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
