"""
Outcome Evaluation

Win/loss resolution of tracked predictions against realised prices,
and accuracy statistics.
"""

from datetime import datetime, timedelta
from typing import Optional

from cryptosignal.schemas.evaluation import Outcome, PredictionRecord, PredictionStats, as_utc
from cryptosignal.schemas.prediction import Direction

# Pending calls older than this resolve as neutral
EVALUATION_WINDOW = timedelta(hours=48)


def _percent_change(record: PredictionRecord, price: float) -> float:
    """Direction-signed % change; anything not LONG counts as a short."""
    if record.direction == Direction.LONG:
        return (price - record.predicted_price) / record.predicted_price * 100
    return (record.predicted_price - price) / record.predicted_price * 100


def _hit(record: PredictionRecord, price: float) -> Optional[Outcome]:
    """WIN/LOSS when target or stop was reached, else None."""
    if record.direction == Direction.LONG:
        if price >= record.target_price:
            return Outcome.WIN
        if price <= record.stop_loss:
            return Outcome.LOSS
    elif record.direction == Direction.SHORT:
        if price <= record.target_price:
            return Outcome.WIN
        if price >= record.stop_loss:
            return Outcome.LOSS
    return None


def evaluate_record(
    record: PredictionRecord,
    current_price: float,
    now: datetime,
) -> PredictionRecord:
    """
    Resolve a pending record against the current price.

    Expired records resolve neutral with the raw (unsigned by direction)
    % change. Otherwise the record resolves only when target or stop was
    reached. Resolved records are returned unchanged.
    """
    if not record.is_pending:
        return record

    if as_utc(now) - record.timestamp > EVALUATION_WINDOW:
        change = (current_price - record.predicted_price) / record.predicted_price * 100
        return record.model_copy(update={
            "outcome": Outcome.NEUTRAL,
            "actual_price": current_price,
            "profit_loss": change,
        })

    outcome = _hit(record, current_price)
    if outcome is None:
        return record

    return record.model_copy(update={
        "outcome": outcome,
        "actual_price": current_price,
        "profit_loss": _percent_change(record, current_price),
    })


def evaluate_at_price(record: PredictionRecord, actual_price: float) -> PredictionRecord:
    """Final evaluation: neutral when neither target nor stop was reached."""
    outcome = _hit(record, actual_price) or Outcome.NEUTRAL
    return record.model_copy(update={
        "outcome": outcome,
        "actual_price": actual_price,
        "profit_loss": _percent_change(record, actual_price),
    })


def _win_rate(records: list[PredictionRecord]) -> float:
    if not records:
        return 0.0
    wins = sum(1 for r in records if r.outcome == Outcome.WIN)
    return wins / len(records) * 100


def compute_stats(records: list[PredictionRecord]) -> PredictionStats:
    completed = [r for r in records if not r.is_pending]
    total = len(completed)

    profits = [r.profit_loss for r in completed if r.profit_loss is not None]

    return PredictionStats(
        total=total,
        wins=sum(1 for r in completed if r.outcome == Outcome.WIN),
        losses=sum(1 for r in completed if r.outcome == Outcome.LOSS),
        neutral=sum(1 for r in completed if r.outcome == Outcome.NEUTRAL),
        win_rate=_win_rate(completed),
        avg_profit=sum(profits) / total if total else 0.0,
        long_win_rate=_win_rate([r for r in completed if r.direction == Direction.LONG]),
        short_win_rate=_win_rate([r for r in completed if r.direction == Direction.SHORT]),
        total_pending=len(records) - total,
    )
