"""
CONTRACT 4: Prediction Evaluation

Input: Prediction + realised prices
Output: PredictionRecord (evaluated), PredictionStats

Tracks whether a call hit its target or its stop. Records are
immutable: evaluating one returns a new record.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from cryptosignal.schemas.prediction import Direction, Prediction


class Outcome(str, Enum):
    PENDING = "pending"
    WIN = "win"
    LOSS = "loss"
    NEUTRAL = "neutral"


class PredictionRecord(BaseModel):
    """
    One tracked prediction.
    Created by: Evaluation Service (from a Prediction)
    Consumed by: History store, stats
    """

    model_config = ConfigDict(frozen=True)

    id: str
    asset_id: str
    asset_name: str
    asset_symbol: str
    direction: Direction
    confidence: int = Field(..., ge=0, le=100)
    predicted_price: float = Field(..., gt=0, description="Price when the call was made")
    target_price: float
    stop_loss: float
    timestamp: datetime
    outcome: Outcome = Outcome.PENDING
    actual_price: Optional[float] = None
    profit_loss: Optional[float] = Field(
        default=None, description="Direction-signed % change at evaluation"
    )

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @classmethod
    def from_prediction(
        cls,
        prediction: Prediction,
        timestamp: Optional[datetime] = None,
    ) -> "PredictionRecord":
        """Start tracking a prediction; outcome is pending."""
        if timestamp is None:
            timestamp = prediction.generated_at
        asset = prediction.asset
        return cls(
            id=f"{asset.id}-{int(timestamp.timestamp() * 1000)}",
            asset_id=asset.id,
            asset_name=asset.name,
            asset_symbol=asset.symbol,
            direction=prediction.direction,
            confidence=prediction.confidence,
            predicted_price=asset.current_price,
            target_price=prediction.target_price,
            stop_loss=prediction.stop_loss,
            timestamp=timestamp,
        )

    @property
    def is_pending(self) -> bool:
        return self.outcome == Outcome.PENDING


class PredictionStats(BaseModel):
    """Accuracy summary over resolved records (rates in %)."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    wins: int = 0
    losses: int = 0
    neutral: int = 0
    win_rate: float = 0.0
    avg_profit: float = 0.0
    long_win_rate: float = 0.0
    short_win_rate: float = 0.0
    total_pending: int = 0


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Aware UTC datetime; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
