"""Tests for services/data_ingestion (Binance adapter and mock provider)"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from cryptosignal.services.base import ExternalAPIError
from cryptosignal.services.data_ingestion import (
    BinancePriceHistoryProvider,
    MockPriceHistoryProvider,
    kline_params,
)


def mock_session(status=200, payload=None, text=""):
    """aiohttp session double whose get() yields a single response."""
    resp = MagicMock()
    resp.status = status
    resp.json = AsyncMock(return_value=payload if payload is not None else [])
    resp.text = AsyncMock(return_value=text)

    session = MagicMock()
    session.closed = False
    session.get.return_value.__aenter__ = AsyncMock(return_value=resp)
    session.get.return_value.__aexit__ = AsyncMock(return_value=False)
    return session


KLINES = [
    [1700000000000, "100.0", "105.0", "99.0", "104.0", "1500.5", 1700086399999],
    [1700086400000, "104.0", "108.0", "103.0", "107.5", "1800.0", 1700172799999],
]


class TestKlineParams:

    @pytest.mark.parametrize("days,expected", [
        (1, ("15m", 96)),
        (3, ("1h", 72)),
        (7, ("1h", 168)),
        (30, ("4h", 180)),
        (90, ("1d", 90)),
        (365, ("1d", 365)),
    ])
    def test_interval_mapping(self, days, expected):
        assert kline_params(days) == expected


class TestBinanceProvider:

    def test_pair_mapping(self):
        provider = BinancePriceHistoryProvider(session=mock_session())
        assert provider.get_pair("bitcoin") == "BTCUSDT"
        assert provider.get_pair("avalanche-2") == "AVAXUSDT"
        assert provider.get_pair("sei") == "SEIUSDT"

    def test_fetch_parses_klines(self):
        session = mock_session(payload=KLINES)
        provider = BinancePriceHistoryProvider(
            base_url="https://api.example.test/api/v3", session=session
        )

        history = asyncio.run(provider.fetch_price_history("ethereum", 90))

        assert history.asset_id == "ethereum"
        assert history.closes == [104.0, 107.5]
        assert history.prices[0].timestamp == 1700000000000
        assert history.prices[0].volume == pytest.approx(1500.5)

        args, kwargs = session.get.call_args
        assert args[0] == "https://api.example.test/api/v3/klines"
        assert kwargs["params"] == {"symbol": "ETHUSDT", "interval": "1d", "limit": 90}

    def test_non_200_raises(self):
        provider = BinancePriceHistoryProvider(
            session=mock_session(status=400, text='{"code":-1121,"msg":"Invalid symbol."}')
        )
        with pytest.raises(ExternalAPIError) as exc_info:
            asyncio.run(provider.fetch_price_history("not-a-coin", 90))

        error = exc_info.value.to_dict()
        assert error["service"] == "BinancePriceHistoryProvider"
        assert error["status"] == 400
        assert error["pair"] == "NOT-A-COINUSDT"

    def test_connection_error_raises(self):
        session = mock_session()
        session.get.side_effect = aiohttp.ClientConnectionError("connection refused")
        provider = BinancePriceHistoryProvider(session=session)

        with pytest.raises(ExternalAPIError):
            asyncio.run(provider.fetch_price_history("bitcoin", 7))

    def test_custom_quote_asset(self):
        provider = BinancePriceHistoryProvider(quote_asset="fdusd", session=mock_session())
        assert provider.get_pair("bitcoin") == "BTCFDUSD"


class TestMockProvider:

    def test_deterministic_per_seed(self):
        provider = MockPriceHistoryProvider(seed=1)
        first = asyncio.run(provider.fetch_price_history("bitcoin", 90))
        second = asyncio.run(provider.fetch_price_history("bitcoin", 90))
        assert first.closes == second.closes
        assert len(first.prices) == 90

    def test_seeds_and_assets_differ(self):
        a = asyncio.run(MockPriceHistoryProvider(seed=1).fetch_price_history("bitcoin", 30))
        b = asyncio.run(MockPriceHistoryProvider(seed=2).fetch_price_history("bitcoin", 30))
        c = asyncio.run(MockPriceHistoryProvider(seed=1).fetch_price_history("ethereum", 30))
        assert a.closes != b.closes
        assert a.closes != c.closes

    def test_prices_positive_and_ordered(self):
        history = asyncio.run(
            MockPriceHistoryProvider(volatility=0.1).fetch_price_history("dogecoin", 365)
        )
        assert all(p.price > 0 for p in history.prices)
        timestamps = [p.timestamp for p in history.prices]
        assert timestamps == sorted(timestamps)
        assert all(p.volume is not None for p in history.prices)
