"""Shared test fixtures for the signal pipeline tests."""

from datetime import datetime, timezone

import pytest

from cryptosignal.schemas.evaluation import PredictionRecord
from cryptosignal.schemas.market import AssetSnapshot, PriceHistory, PriceSample
from cryptosignal.schemas.indicators import (
    BandPosition,
    BasicIndicators,
    BollingerResult,
    Crossover,
    EnhancedIndicators,
    Level,
    LevelStrength,
    LevelType,
    MACDResult,
    OscillatorSignal,
    RSIResult,
    TrendDirection,
    VolumeSignal,
)
from cryptosignal.schemas.prediction import Direction
from cryptosignal.services.data_ingestion.interface import PriceHistoryProvider


def make_snapshot(**overrides) -> AssetSnapshot:
    """Create a realistic asset snapshot (price 100, rank 5) for testing."""
    data = {
        "id": "bitcoin",
        "name": "Bitcoin",
        "symbol": "btc",
        "current_price": 100.0,
        "high_24h": 101.5,
        "low_24h": 98.5,
        "price_change_percentage_24h": 0.0,
        "price_change_percentage_7d": 0.0,
        "market_cap": 1_000_000.0,
        "market_cap_rank": 5,
        "total_volume": 100_000.0,
        **overrides,
    }
    return AssetSnapshot(**data)


def make_basic(**overrides) -> BasicIndicators:
    """Neutral basic indicators with 3% volatility."""
    data = {
        "trend_24h": TrendDirection.NEUTRAL,
        "trend_7d": TrendDirection.NEUTRAL,
        "momentum": 0.0,
        "volume_signal": VolumeSignal.NORMAL,
        "volatility": 3.0,
        "strength": 50.0,
        **overrides,
    }
    return BasicIndicators(**data)


def make_rsi(value=50.0, signal=OscillatorSignal.NEUTRAL, trend=TrendDirection.NEUTRAL):
    return RSIResult(value=value, signal=signal, trend=trend)


def make_macd(
    macd=0.0,
    signal=0.0,
    histogram=0.0,
    trend=TrendDirection.NEUTRAL,
    crossover=Crossover.NONE,
):
    return MACDResult(
        macd=macd, signal=signal, histogram=histogram, trend=trend, crossover=crossover
    )


def make_bollinger(
    bandwidth=10.0,
    position=BandPosition.MIDDLE,
    signal=OscillatorSignal.NEUTRAL,
):
    return BollingerResult(
        upper=105.0,
        middle=100.0,
        lower=95.0,
        bandwidth=bandwidth,
        position=position,
        signal=signal,
    )


def make_level(price, level_type=LevelType.SUPPORT, touches=1) -> Level:
    return Level(
        price=price,
        type=level_type,
        strength=LevelStrength.from_touches(touches),
        touches=touches,
    )


def make_enhanced(
    rsi=None,
    macd=None,
    bollinger=None,
    supports=None,
    resistances=None,
) -> EnhancedIndicators:
    """Enhanced indicators that contribute nothing unless overridden."""
    return EnhancedIndicators(
        rsi=rsi or make_rsi(),
        macd=macd or make_macd(),
        bollinger_bands=bollinger or make_bollinger(),
        support_levels=supports or [],
        resistance_levels=resistances or [],
    )


def make_history(prices, asset_id="bitcoin", volumes=None) -> PriceHistory:
    """Daily history from a list of closes."""
    samples = [
        PriceSample(
            timestamp=1_700_000_000_000 + i * 86_400_000,
            price=price,
            volume=volumes[i] if volumes is not None else None,
        )
        for i, price in enumerate(prices)
    ]
    return PriceHistory(asset_id=asset_id, prices=samples)


RECORD_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_record(direction=Direction.LONG, **overrides) -> PredictionRecord:
    """Pending call at 100; LONG targets 110/95, SHORT 90/105."""
    if direction == Direction.LONG:
        levels = {"target_price": 110.0, "stop_loss": 95.0}
    else:
        levels = {"target_price": 90.0, "stop_loss": 105.0}
    data = {
        "id": "bitcoin-1709294400000",
        "asset_id": "bitcoin",
        "asset_name": "Bitcoin",
        "asset_symbol": "btc",
        "direction": direction,
        "confidence": 60,
        "predicted_price": 100.0,
        "timestamp": RECORD_TIME,
        **levels,
        **overrides,
    }
    return PredictionRecord(**data)


def rising_series(n=30, start=100.0, step=1.0) -> list[float]:
    return [start + i * step for i in range(n)]


def falling_series(n=30, start=100.0, step=1.0) -> list[float]:
    return [start - i * step for i in range(n)]


class StubProvider(PriceHistoryProvider):
    """Serves fixed histories; raises for assets listed in `failing`."""

    def __init__(self, histories=None, failing=(), error=None):
        self.histories = histories or {}
        self.failing = set(failing)
        self.error = error or ConnectionError("provider unavailable")
        self.calls = []

    @property
    def name(self) -> str:
        return "StubProvider"

    async def fetch_price_history(self, asset_id, lookback_days):
        self.calls.append((asset_id, lookback_days))
        if asset_id in self.failing:
            raise self.error
        return self.histories.get(asset_id, PriceHistory(asset_id=asset_id, prices=[]))


@pytest.fixture
def snapshot():
    return make_snapshot()


@pytest.fixture
def failing_provider():
    return StubProvider(failing={"bitcoin", "ethereum", "solana"})
