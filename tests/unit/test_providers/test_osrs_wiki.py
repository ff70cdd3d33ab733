"""
Unit tests for the OSRS Wiki prices API client

Tests OSRSWikiPriceSource using a mocked aiohttp session.
"""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from core.interfaces.price_source import PriceSourceError
from core.models.market import ItemMapping
from core.models.prices import ItemVolume, LatestPrice, PriceBucket
from core.utils.gap_handling import INTERVAL_MS
from providers.osrs_wiki.rest_api import OSRSWikiPriceSource

BASE_URL = "https://prices.runescape.wiki/api/v1/osrs"


def create_mock_response(payload: dict | list | None = None, status: int = 200) -> MagicMock:
    """Mock aiohttp response usable as `async with session.get(...)`"""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value={} if payload is None else payload)
    return response


@pytest.fixture
def mock_session():
    """Mock aiohttp.ClientSession created by the client"""
    with patch("providers.osrs_wiki.rest_api.aiohttp.ClientSession") as mock:
        session = MagicMock()
        session.closed = False
        session.close = AsyncMock()
        mock.return_value = session
        session.factory = mock
        yield session


def respond_with(session: MagicMock, response: MagicMock) -> None:
    session.get.return_value.__aenter__.return_value = response


@pytest.mark.unit
class TestFetchTimeseries:
    """Test /timeseries parsing"""

    @pytest.mark.asyncio
    async def test_fetch_timeseries_success(self, mock_session):
        respond_with(
            mock_session,
            create_mock_response(
                {
                    "data": [
                        {
                            "timestamp": 1700000000,
                            "avgHighPrice": 160,
                            "avgLowPrice": 155,
                            "highPriceVolume": 1200,
                            "lowPriceVolume": 3400,
                        },
                        {
                            "timestamp": 1700000300,
                            "avgHighPrice": None,
                            "avgLowPrice": 154,
                            "highPriceVolume": 0,
                            "lowPriceVolume": 800,
                        },
                    ]
                }
            ),
        )
        source = OSRSWikiPriceSource()

        buckets = await source.fetch_timeseries(item_id=2, interval="5m")

        assert buckets == [
            PriceBucket(
                timestamp=1700000000,
                avgHighPrice=160,
                avgLowPrice=155,
                highPriceVolume=1200,
                lowPriceVolume=3400,
            ),
            PriceBucket(timestamp=1700000300, avgLowPrice=154, lowPriceVolume=800),
        ]
        mock_session.get.assert_called_once_with(
            f"{BASE_URL}/timeseries", params={"timestep": "5m", "id": 2}
        )

    @pytest.mark.asyncio
    async def test_session_sends_user_agent(self, mock_session):
        respond_with(mock_session, create_mock_response({"data": []}))
        source = OSRSWikiPriceSource()

        await source.fetch_timeseries(item_id=2, interval="1h")

        headers = mock_session.factory.call_args.kwargs["headers"]
        assert headers["User-Agent"]

    @pytest.mark.asyncio
    async def test_empty_data(self, mock_session):
        respond_with(mock_session, create_mock_response({"data": []}))

        assert await OSRSWikiPriceSource().fetch_timeseries(2, "24h") == []

    @pytest.mark.asyncio
    async def test_unsupported_interval_no_request(self, mock_session):
        source = OSRSWikiPriceSource()

        with pytest.raises(ValueError, match="Unsupported interval"):
            await source.fetch_timeseries(item_id=2, interval="15m")

        mock_session.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_http_error(self, mock_session):
        respond_with(mock_session, create_mock_response(status=429))

        with pytest.raises(PriceSourceError, match="HTTP 429"):
            await OSRSWikiPriceSource().fetch_timeseries(2, "5m")

    @pytest.mark.asyncio
    async def test_http_error_logged(self, mock_session, caplog):
        respond_with(mock_session, create_mock_response(status=503))

        with caplog.at_level(logging.ERROR):
            with pytest.raises(PriceSourceError):
                await OSRSWikiPriceSource().fetch_timeseries(2, "5m")

        assert "returned HTTP 503" in caplog.text

    @pytest.mark.asyncio
    async def test_timeout_wrapped(self, mock_session, caplog):
        """Test a request timeout surfaces as PriceSourceError, not asyncio.TimeoutError"""
        mock_session.get.side_effect = asyncio.TimeoutError()

        with caplog.at_level(logging.ERROR):
            with pytest.raises(PriceSourceError, match="timed out") as exc_info:
                await OSRSWikiPriceSource().fetch_timeseries(2, "5m")

        assert isinstance(exc_info.value.__cause__, asyncio.TimeoutError)
        assert "timed out" in caplog.text

    @pytest.mark.asyncio
    async def test_timeout_while_reading_body(self, mock_session):
        response = create_mock_response()
        response.json = AsyncMock(side_effect=asyncio.TimeoutError())
        respond_with(mock_session, response)

        with pytest.raises(PriceSourceError, match="timed out"):
            await OSRSWikiPriceSource().fetch_latest(2)

    @pytest.mark.asyncio
    async def test_transport_error(self, mock_session):
        mock_session.get.side_effect = aiohttp.ClientConnectionError("connection reset")

        with pytest.raises(PriceSourceError, match="connection reset"):
            await OSRSWikiPriceSource().fetch_timeseries(2, "5m")


@pytest.mark.unit
class TestFetchLatest:
    """Test /latest parsing"""

    @pytest.mark.asyncio
    async def test_fetch_latest_success(self, mock_session):
        respond_with(
            mock_session,
            create_mock_response(
                {"data": {"2": {"high": 160, "highTime": 1700000100, "low": 158, "lowTime": 1700000050}}}
            ),
        )

        latest = await OSRSWikiPriceSource().fetch_latest(2)

        assert latest == LatestPrice(high=160, highTime=1700000100, low=158, lowTime=1700000050)
        mock_session.get.assert_called_once_with(f"{BASE_URL}/latest", params={"id": 2})

    @pytest.mark.asyncio
    async def test_fetch_latest_missing_item(self, mock_session):
        respond_with(mock_session, create_mock_response({"data": {}}))

        assert await OSRSWikiPriceSource().fetch_latest(999999) is None


@pytest.mark.unit
class TestBulkEndpoints:
    """Test /latest (all items), /24h and /mapping parsing"""

    @pytest.mark.asyncio
    async def test_fetch_latest_all(self, mock_session):
        respond_with(
            mock_session,
            create_mock_response(
                {
                    "data": {
                        "2": {"high": 160, "highTime": 1700000100, "low": 158, "lowTime": 1700000050},
                        "4151": {"high": 1500000, "highTime": 1700000000, "low": None, "lowTime": None},
                    }
                }
            ),
        )

        quotes = await OSRSWikiPriceSource().fetch_latest_all()

        assert set(quotes) == {2, 4151}
        assert quotes[2].low == 158
        assert quotes[4151].low is None
        mock_session.get.assert_called_once_with(f"{BASE_URL}/latest", params=None)

    @pytest.mark.asyncio
    async def test_fetch_volumes(self, mock_session):
        respond_with(
            mock_session,
            create_mock_response(
                {
                    "data": {
                        "2": {
                            "avgHighPrice": 162,
                            "highPriceVolume": 2500000,
                            "avgLowPrice": 157,
                            "lowPriceVolume": 4100000,
                        },
                        "6": {
                            "avgHighPrice": None,
                            "highPriceVolume": 0,
                            "avgLowPrice": 180000,
                            "lowPriceVolume": 12,
                        },
                    }
                }
            ),
        )

        volumes = await OSRSWikiPriceSource().fetch_volumes()

        assert volumes[2] == ItemVolume(
            avgHighPrice=162, highPriceVolume=2500000, avgLowPrice=157, lowPriceVolume=4100000
        )
        assert volumes[6].avgHighPrice == 0
        assert volumes[6].total_volume == 12
        mock_session.get.assert_called_once_with(f"{BASE_URL}/24h", params=None)

    @pytest.mark.asyncio
    async def test_fetch_mapping(self, mock_session):
        respond_with(
            mock_session,
            create_mock_response(
                [
                    {
                        "examine": "Ammo for the Dwarf Cannon.",
                        "id": 2,
                        "members": True,
                        "lowalch": 2,
                        "limit": 11000,
                        "value": 5,
                        "highalch": 3,
                        "icon": "Cannonball.png",
                        "name": "Cannonball",
                    },
                    {"id": 13190, "name": "Old school bond", "members": False},
                ]
            ),
        )

        mapping = await OSRSWikiPriceSource().fetch_mapping()

        assert mapping[0] == ItemMapping(
            id=2,
            name="Cannonball",
            examine="Ammo for the Dwarf Cannon.",
            members=True,
            lowalch=2,
            highalch=3,
            limit=11000,
            value=5,
            icon="Cannonball.png",
        )
        assert mapping[1].highalch is None
        mock_session.get.assert_called_once_with(f"{BASE_URL}/mapping", params=None)

    @pytest.mark.asyncio
    async def test_bulk_http_error(self, mock_session):
        respond_with(mock_session, create_mock_response(status=500))

        with pytest.raises(PriceSourceError, match="HTTP 500"):
            await OSRSWikiPriceSource().fetch_volumes()


@pytest.mark.unit
class TestSessionLifecycle:
    """Test lazy session creation and close"""

    def test_no_session_until_first_request(self, mock_session):
        source = OSRSWikiPriceSource()

        assert source.session is None
        mock_session.factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_session_reused(self, mock_session):
        respond_with(mock_session, create_mock_response({"data": []}))
        source = OSRSWikiPriceSource()

        await source.fetch_timeseries(2, "5m")
        await source.fetch_timeseries(2, "1h")

        mock_session.factory.assert_called_once()

    @pytest.mark.asyncio
    async def test_close(self, mock_session):
        respond_with(mock_session, create_mock_response({"data": []}))
        source = OSRSWikiPriceSource()
        await source.fetch_timeseries(2, "5m")

        await source.close()

        mock_session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_without_session(self, mock_session):
        await OSRSWikiPriceSource().close()

        mock_session.close.assert_not_called()

    def test_supported_intervals(self, mock_session):
        """Test every interval the resampler accepts is advertised, including 24h"""
        intervals = OSRSWikiPriceSource().get_supported_intervals()

        assert intervals == ["5m", "1h", "6h", "24h"]
        assert intervals == list(INTERVAL_MS)
