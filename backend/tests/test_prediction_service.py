"""Tests for services/prediction (the prediction assembler)"""

import asyncio
import logging
from unittest.mock import AsyncMock, patch

import pytest

from cryptosignal.schemas.prediction import Direction
from cryptosignal.services.base import ExternalAPIError
from cryptosignal.services.data_ingestion.mock_data import MockPriceHistoryProvider
from cryptosignal.services.prediction import PredictionService
from cryptosignal.services.signals import SignalService
from tests.conftest import StubProvider, make_history, make_snapshot, rising_series


SCENARIO_ONE = dict(
    price_change_percentage_24h=8.0,
    price_change_percentage_7d=12.0,
    market_cap_rank=5,
)


class TestGeneratePrediction:

    def test_basic_only_momentum_goes_long(self, failing_provider):
        service = PredictionService(provider=failing_provider)
        prediction = asyncio.run(service.generate_prediction(make_snapshot(**SCENARIO_ONE)))

        assert prediction.enhanced_indicators is None
        assert prediction.basic_indicators.momentum == pytest.approx(32 / 3.5)
        assert prediction.direction == Direction.LONG
        assert prediction.target_price > prediction.asset.current_price > prediction.stop_loss

    def test_fetch_failure_is_logged_not_raised(self, failing_provider, caplog):
        service = PredictionService(provider=failing_provider)
        with caplog.at_level(logging.WARNING):
            prediction = asyncio.run(service.generate_prediction(make_snapshot()))

        assert prediction.enhanced_indicators is None
        assert "Failed to fetch price history for bitcoin" in caplog.text

    def test_typed_provider_error_degrades(self):
        provider = StubProvider(
            failing={"bitcoin"},
            error=ExternalAPIError("StubProvider", "HTTP 502"),
        )
        service = PredictionService(provider=provider)
        prediction = asyncio.run(service.generate_prediction(make_snapshot()))
        assert prediction.enhanced_indicators is None

    def test_empty_history_degrades(self):
        service = PredictionService(provider=StubProvider())
        prediction = asyncio.run(service.generate_prediction(make_snapshot()))
        assert prediction.enhanced_indicators is None

    @pytest.mark.parametrize("payload", [None, {"prices": []}, [[1700000000000, "100"]]])
    def test_malformed_history_degrades(self, payload, caplog):
        provider = StubProvider()
        provider.fetch_price_history = AsyncMock(return_value=payload)
        service = PredictionService(provider=provider)

        with caplog.at_level(logging.WARNING):
            predictions = asyncio.run(service.generate_predictions([make_snapshot()]))

        assert len(predictions) == 1
        assert predictions[0].enhanced_indicators is None
        assert "No usable price history for bitcoin" in caplog.text

    def test_history_produces_enhanced_indicators(self):
        provider = StubProvider(histories={"bitcoin": make_history(rising_series(90))})
        service = PredictionService(provider=provider)
        prediction = asyncio.run(service.generate_prediction(make_snapshot()))

        enhanced = prediction.enhanced_indicators
        assert enhanced is not None
        assert enhanced.rsi.value > 70
        assert any(r.category == "RSI Signal" for r in prediction.reasons)

    def test_requests_configured_lookback(self):
        provider = StubProvider()
        service = PredictionService(provider=provider, lookback_days=30)
        asyncio.run(service.execute(make_snapshot()))
        assert provider.calls == [("bitcoin", 30)]

    def test_default_lookback_is_90_days(self):
        provider = StubProvider()
        asyncio.run(PredictionService(provider=provider).generate_prediction(make_snapshot()))
        assert provider.calls == [("bitcoin", 90)]

    def test_output_bounds_with_mock_history(self):
        service = PredictionService(provider=MockPriceHistoryProvider(seed=9))
        prediction = asyncio.run(service.generate_prediction(make_snapshot()))

        assert 0 <= prediction.confidence <= 100
        assert 1 <= prediction.leverage <= 10
        if prediction.direction == Direction.NEUTRAL:
            assert prediction.leverage == 1
        assert prediction.analysis_text


class TestGeneratePredictions:

    def test_batch_keeps_input_order(self):
        snapshots = [
            make_snapshot(id="bitcoin", symbol="btc"),
            make_snapshot(id="ethereum", name="Ethereum", symbol="eth"),
            make_snapshot(id="solana", name="Solana", symbol="sol"),
        ]
        service = PredictionService(provider=StubProvider(), max_concurrency=3)
        predictions = asyncio.run(service.generate_predictions(snapshots))
        assert [p.asset.id for p in predictions] == ["bitcoin", "ethereum", "solana"]

    def test_failing_asset_is_skipped(self, caplog):
        signal_service = SignalService()
        real_decide = signal_service.decide

        def decide(input_data):
            if input_data.snapshot.id == "broken":
                raise RuntimeError("bad snapshot")
            return real_decide(input_data)

        snapshots = [
            make_snapshot(id="bitcoin"),
            make_snapshot(id="broken", name="Broken", symbol="brk"),
            make_snapshot(id="ethereum", name="Ethereum", symbol="eth"),
        ]
        service = PredictionService(provider=StubProvider(), signal_service=signal_service)

        with patch.object(signal_service, "decide", side_effect=decide):
            with caplog.at_level(logging.ERROR):
                predictions = asyncio.run(service.generate_predictions(snapshots))

        assert [p.asset.id for p in predictions] == ["bitcoin", "ethereum"]
        assert "Failed to generate prediction for broken" in caplog.text

    def test_empty_batch(self):
        service = PredictionService(provider=StubProvider())
        assert asyncio.run(service.generate_predictions([])) == []

    @pytest.mark.parametrize("limit", [1, 3])
    def test_concurrency_is_bounded(self, limit):
        in_flight = 0
        peak = 0

        class SlowProvider(StubProvider):
            async def fetch_price_history(self, asset_id, lookback_days):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return await super().fetch_price_history(asset_id, lookback_days)

        snapshots = [make_snapshot(id=f"asset-{i}") for i in range(6)]
        service = PredictionService(provider=SlowProvider(), max_concurrency=limit)
        predictions = asyncio.run(service.generate_predictions(snapshots))

        assert len(predictions) == 6
        assert peak == limit


def test_health_check():
    service = PredictionService(provider=StubProvider())
    assert asyncio.run(service.health_check()) is True
    assert repr(service) == "<PredictionService>"


def test_close_releases_provider():
    provider = StubProvider()
    provider.close = AsyncMock()
    asyncio.run(PredictionService(provider=provider).close())
    provider.close.assert_awaited_once()
