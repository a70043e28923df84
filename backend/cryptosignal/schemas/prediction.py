"""
CONTRACT 3: Prediction

Input: AssetSnapshot + BasicIndicators + EnhancedIndicators (optional)
Output: Prediction

The final trade recommendation for one asset. Plain data only:
persisting or rendering it is the consumer's job.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from cryptosignal.schemas.market import AssetSnapshot
from cryptosignal.schemas.indicators import BasicIndicators, EnhancedIndicators


# =============================================================================
# ENUMS
# =============================================================================


class Direction(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"
    NEUTRAL = "NEUTRAL"


class Sentiment(str, Enum):
    EXTREME_BULLISH = "EXTREME_BULLISH"
    BULLISH = "BULLISH"
    NEUTRAL = "NEUTRAL"
    BEARISH = "BEARISH"
    EXTREME_BEARISH = "EXTREME_BEARISH"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    EXTREME = "Extreme"


class ReasonImpact(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


# =============================================================================
# COMPONENTS
# =============================================================================


class PredictionReason(BaseModel):
    """One human-readable rationale line."""

    model_config = ConfigDict(frozen=True)

    category: str
    text: str
    impact: ReasonImpact


class SignalScore(BaseModel):
    """Weighted bullish/bearish vote totals."""

    model_config = ConfigDict(frozen=True)

    bullish: int = Field(default=0, ge=0)
    bearish: int = Field(default=0, ge=0)

    @property
    def difference(self) -> int:
        return self.bullish - self.bearish


class PriceTargets(BaseModel):
    """Target price and stop loss for a call."""

    model_config = ConfigDict(frozen=True)

    target_price: float
    stop_loss: float


class SignalDecision(BaseModel):
    """
    Everything the signal engine decides for one asset.
    Returned by: Signal Service
    Consumed by: Prediction Service
    """

    model_config = ConfigDict(frozen=True)

    score: SignalScore
    direction: Direction
    sentiment: Sentiment
    confidence: int = Field(..., ge=0, le=100)
    leverage: int = Field(..., ge=1, le=10)
    risk_level: RiskLevel
    targets: PriceTargets
    timeframe: str
    reasons: list[PredictionReason] = Field(default_factory=list)
    analysis_text: str


# =============================================================================
# OUTPUT: Prediction
# =============================================================================


class Prediction(BaseModel):
    """
    Complete trade recommendation for an asset.
    Returned by: Prediction Service
    Consumed by: History store, presentation layer
    """

    model_config = ConfigDict(frozen=True)

    asset: AssetSnapshot
    direction: Direction
    sentiment: Sentiment
    confidence: int = Field(..., ge=0, le=100)
    basic_indicators: BasicIndicators
    enhanced_indicators: Optional[EnhancedIndicators] = None
    reasons: list[PredictionReason] = Field(default_factory=list)
    target_price: float
    stop_loss: float
    timeframe: str = Field(..., description="Expected holding window, e.g. '12-36h'")
    analysis_text: str
    leverage: int = Field(..., ge=1, le=10)
    risk_level: RiskLevel
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
