"""Tests for services/evaluation (outcome resolution and stats)"""

import asyncio
from datetime import timedelta, timezone

import pytest

from cryptosignal.schemas.evaluation import Outcome, PredictionRecord
from cryptosignal.schemas.prediction import Direction, Prediction, RiskLevel, Sentiment
from cryptosignal.services.evaluation import (
    EvaluationInput,
    EvaluationService,
    compute_stats,
    evaluate_at_price,
    evaluate_record,
)
from tests.conftest import RECORD_TIME as T0, make_basic, make_record, make_snapshot


class TestEvaluateRecord:

    @pytest.mark.parametrize("direction,price,outcome,profit", [
        (Direction.LONG, 112.0, Outcome.WIN, 12.0),
        (Direction.LONG, 94.0, Outcome.LOSS, -6.0),
        (Direction.SHORT, 88.0, Outcome.WIN, 12.0),
        (Direction.SHORT, 106.0, Outcome.LOSS, -6.0),
    ])
    def test_target_or_stop_hit(self, direction, price, outcome, profit):
        result = evaluate_record(make_record(direction), price, T0 + timedelta(hours=1))
        assert result.outcome == outcome
        assert result.actual_price == price
        assert result.profit_loss == pytest.approx(profit)

    def test_in_range_stays_pending(self):
        record = make_record()
        result = evaluate_record(record, 102.0, T0 + timedelta(hours=1))
        assert result is record
        assert result.is_pending

    def test_expired_resolves_neutral_with_raw_change(self):
        record = make_record(Direction.SHORT)
        result = evaluate_record(record, 102.0, T0 + timedelta(hours=49))
        assert result.outcome == Outcome.NEUTRAL
        # Raw change, not flipped for the short
        assert result.profit_loss == pytest.approx(2.0)

    def test_resolved_record_unchanged(self):
        record = make_record(outcome=Outcome.WIN, actual_price=111.0, profit_loss=11.0)
        assert evaluate_record(record, 50.0, T0 + timedelta(hours=1)) is record

    def test_naive_and_aware_times_mix(self):
        naive_record = make_record(timestamp=T0.replace(tzinfo=None))
        assert naive_record.timestamp == T0

        expired = evaluate_record(naive_record, 102.0, T0 + timedelta(hours=49))
        assert expired.outcome == Outcome.NEUTRAL

        naive_now = (T0 + timedelta(hours=49)).replace(tzinfo=None)
        assert evaluate_record(make_record(), 102.0, naive_now).outcome == Outcome.NEUTRAL

    def test_offset_timestamp_normalised_to_utc(self):
        tokyo = timezone(timedelta(hours=9))
        record = make_record(timestamp=T0.astimezone(tokyo))
        assert record.timestamp.utcoffset() == timedelta(0)
        assert record.timestamp == T0

    def test_input_record_not_mutated(self):
        record = make_record()
        evaluate_record(record, 120.0, T0)
        assert record.is_pending
        assert record.actual_price is None


class TestEvaluateAtPrice:

    def test_no_hit_is_neutral_with_signed_change(self):
        result = evaluate_at_price(make_record(Direction.SHORT), 98.0)
        assert result.outcome == Outcome.NEUTRAL
        assert result.profit_loss == pytest.approx(2.0)

    def test_hit(self):
        result = evaluate_at_price(make_record(Direction.LONG), 110.0)
        assert result.outcome == Outcome.WIN
        assert result.profit_loss == pytest.approx(10.0)


class TestStats:

    def test_empty(self):
        stats = compute_stats([])
        assert stats.total == 0
        assert stats.win_rate == 0.0
        assert stats.avg_profit == 0.0

    def test_summary(self):
        records = [
            make_record(Direction.LONG, outcome=Outcome.WIN, profit_loss=6.0),
            make_record(Direction.LONG, outcome=Outcome.LOSS, profit_loss=-2.0),
            make_record(Direction.SHORT, outcome=Outcome.WIN, profit_loss=4.0),
            make_record(Direction.SHORT, outcome=Outcome.NEUTRAL, profit_loss=1.0),
            make_record(Direction.LONG),
        ]
        stats = compute_stats(records)

        assert stats.total == 4
        assert (stats.wins, stats.losses, stats.neutral) == (2, 1, 1)
        assert stats.win_rate == pytest.approx(50.0)
        assert stats.avg_profit == pytest.approx(2.25)
        assert stats.long_win_rate == pytest.approx(50.0)
        assert stats.short_win_rate == pytest.approx(50.0)
        assert stats.total_pending == 1


class TestPredictionRecord:

    def test_from_prediction(self):
        prediction = Prediction(
            asset=make_snapshot(current_price=250.0),
            direction=Direction.LONG,
            sentiment=Sentiment.BULLISH,
            confidence=72,
            basic_indicators=make_basic(),
            target_price=270.0,
            stop_loss=240.0,
            timeframe="1-2d",
            analysis_text="",
            leverage=3,
            risk_level=RiskLevel.MEDIUM,
            generated_at=T0,
        )
        record = PredictionRecord.from_prediction(prediction)

        assert record.id == f"bitcoin-{int(T0.timestamp() * 1000)}"
        assert record.predicted_price == 250.0
        assert record.target_price == 270.0
        assert record.stop_loss == 240.0
        assert record.timestamp == T0
        assert record.is_pending


class TestEvaluationService:

    def test_only_priced_pending_records_evaluated(self):
        records = [
            make_record(),
            make_record(id="ethereum-1", asset_id="ethereum"),
            make_record(id="done", outcome=Outcome.LOSS, profit_loss=-5.0),
        ]
        service = EvaluationService()
        result = service.evaluate_pending(
            records, {"bitcoin": 115.0}, now=T0 + timedelta(hours=2)
        )

        assert [r.id for r in result] == ["bitcoin-1709294400000", "ethereum-1", "done"]
        assert result[0].outcome == Outcome.WIN
        assert result[1].is_pending
        assert result[2].outcome == Outcome.LOSS
        assert result[2].actual_price is None

    def test_execute_and_stats(self):
        service = EvaluationService()
        result = asyncio.run(service.execute(EvaluationInput(
            records=[make_record(Direction.SHORT)],
            current_prices={"bitcoin": 89.0},
            now=T0 + timedelta(hours=3),
        )))
        stats = service.stats(result)
        assert stats.wins == 1
        assert stats.win_rate == pytest.approx(100.0)
