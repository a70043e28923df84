"""Tests for services/universe (tradeable-universe filter)"""

import asyncio

import pytest

from cryptosignal.schemas.market import TradingPlatform
from cryptosignal.services.base import ValidationError
from cryptosignal.services.universe import UniverseService, get_universe_service
from tests.conftest import make_snapshot


@pytest.fixture
def universe():
    return UniverseService(
        excluded_asset_ids=["tether", "wrapped-bitcoin"],
        major_symbols=["BTC", "ETH"],
        extended_symbols=["BTC", "WIF"],
    )


def candidates():
    return [
        make_snapshot(id="bitcoin", symbol="btc"),
        make_snapshot(id="tether", name="Tether", symbol="usdt"),
        make_snapshot(id="dogwifcoin", name="dogwifhat", symbol="wif"),
        make_snapshot(id="unknown", name="Unknown", symbol="xyz"),
        make_snapshot(id="ethereum", name="Ethereum", symbol="eth"),
        make_snapshot(id="wrapped-bitcoin", name="Wrapped Bitcoin", symbol="wbtc"),
    ]


class TestPlatformSupport:

    def test_exclusion(self, universe):
        assert universe.is_excluded("tether")
        assert not universe.is_excluded("bitcoin")

    def test_support_is_case_insensitive(self, universe):
        assert universe.has_platform_support("btc")
        assert universe.has_platform_support("WIF")
        assert not universe.has_platform_support("xyz")

    def test_supported_platforms(self, universe):
        assert universe.supported_platforms("btc") == list(TradingPlatform)
        assert universe.supported_platforms("wif") == [TradingPlatform.HYPERLIQUID]
        assert universe.supported_platforms("eth") == [
            TradingPlatform.BINANCE,
            TradingPlatform.BYBIT,
            TradingPlatform.OKX,
        ]
        assert universe.supported_platforms("xyz") == []

    @pytest.mark.parametrize("platform,url", [
        (TradingPlatform.HYPERLIQUID, "https://app.hyperliquid.xyz/trade/BTC"),
        (TradingPlatform.BINANCE, "https://www.binance.com/en/futures/BTCUSDT"),
        (TradingPlatform.BYBIT, "https://www.bybit.com/trade/usdt/BTCUSDT"),
        (TradingPlatform.OKX, "https://www.okx.com/trade-swap/btc-usdt-swap"),
    ])
    def test_trade_urls(self, universe, platform, url):
        assert universe.trade_url(platform, "btc") == url


class TestFilterTradeable:

    def test_drops_excluded_and_unsupported(self, universe):
        result = universe.filter_tradeable(candidates())
        assert [s.id for s in result] == ["bitcoin", "dogwifcoin", "ethereum"]

    def test_limit_applies_after_filtering(self, universe):
        result = universe.filter_tradeable(candidates(), limit=2)
        assert [s.id for s in result] == ["bitcoin", "dogwifcoin"]

    def test_invalid_limit(self, universe):
        with pytest.raises(ValidationError):
            universe.filter_tradeable(candidates(), limit=0)

    def test_execute(self, universe):
        result = asyncio.run(universe.execute(candidates()))
        assert len(result) == 3

    def test_default_validation_passes_input_through(self, universe):
        snapshots = candidates()
        assert asyncio.run(universe.validate_input(snapshots)) is snapshots


def test_defaults_come_from_settings():
    universe = get_universe_service()
    assert universe is get_universe_service()
    assert universe.is_excluded("tether")
    assert universe.is_excluded("staked-ether")
    assert universe.supported_platforms("BTC") == list(TradingPlatform)
    assert universe.supported_platforms("PEPE") == [TradingPlatform.HYPERLIQUID]
