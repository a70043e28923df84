"""
CONTRACT 2: Indicator Engine

Input: PriceHistory (close prices) / AssetSnapshot
Output: BasicIndicators, EnhancedIndicators

This module performs ALL mathematical calculations.
Every calculator has a defined default result for short input.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================


class TrendDirection(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class VolumeSignal(str, Enum):
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


class OscillatorSignal(str, Enum):
    OVERBOUGHT = "overbought"
    OVERSOLD = "oversold"
    NEUTRAL = "neutral"


class Crossover(str, Enum):
    BULLISH = "bullish_crossover"
    BEARISH = "bearish_crossover"
    NONE = "none"


class BandPosition(str, Enum):
    ABOVE_UPPER = "above_upper"
    NEAR_UPPER = "near_upper"
    MIDDLE = "middle"
    NEAR_LOWER = "near_lower"
    BELOW_LOWER = "below_lower"


class LevelType(str, Enum):
    SUPPORT = "support"
    RESISTANCE = "resistance"


class LevelStrength(str, Enum):
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"

    @classmethod
    def from_touches(cls, touches: int) -> "LevelStrength":
        if touches >= 3:
            return cls.STRONG
        if touches == 2:
            return cls.MODERATE
        return cls.WEAK


class CandlestickPattern(str, Enum):
    DOJI = "doji"
    ENGULFING_BULLISH = "engulfing_bullish"
    ENGULFING_BEARISH = "engulfing_bearish"
    MORNING_STAR = "morning_star"
    EVENING_STAR = "evening_star"
    THREE_WHITE_SOLDIERS = "three_white_soldiers"
    THREE_BLACK_CROWS = "three_black_crows"
    NONE = "none"


# =============================================================================
# BASIC INDICATORS (from AssetSnapshot only)
# =============================================================================


class BasicIndicators(BaseModel):
    """Coarse indicators derived from 24h/7d summary statistics."""

    model_config = ConfigDict(frozen=True)

    trend_24h: TrendDirection
    trend_7d: TrendDirection
    momentum: float = Field(..., ge=-100, le=100)
    volume_signal: VolumeSignal
    volatility: float = Field(..., ge=0, le=100, description="24h range as % of price")
    strength: float = Field(..., ge=0, le=100)


# =============================================================================
# ENHANCED INDICATORS (from price history)
# =============================================================================


class RSIResult(BaseModel):
    """RSI indicator values."""

    model_config = ConfigDict(frozen=True)

    value: float = Field(..., ge=0, le=100)
    signal: OscillatorSignal
    trend: TrendDirection


class MACDResult(BaseModel):
    """MACD indicator values."""

    model_config = ConfigDict(frozen=True)

    macd: float
    signal: float
    histogram: float
    trend: TrendDirection
    crossover: Crossover


class BollingerResult(BaseModel):
    """Bollinger Bands values."""

    model_config = ConfigDict(frozen=True)

    upper: float
    middle: float
    lower: float
    bandwidth: float = Field(..., description="Band width as % of middle band")
    position: BandPosition
    signal: OscillatorSignal


class Level(BaseModel):
    """Detected support/resistance level."""

    model_config = ConfigDict(frozen=True)

    price: float
    type: LevelType
    strength: LevelStrength
    touches: int = Field(..., ge=1)


class SupportResistance(BaseModel):
    """Support and resistance levels, nearest to current price first."""

    model_config = ConfigDict(frozen=True)

    supports: list[Level] = Field(default_factory=list)
    resistances: list[Level] = Field(default_factory=list)


class CandlestickPatternResult(BaseModel):
    """Close-price candlestick heuristic result."""

    model_config = ConfigDict(frozen=True)

    pattern: CandlestickPattern
    signal: TrendDirection
    confidence: float = Field(..., ge=0, le=100)
    description: str


class VolumeProfileBucket(BaseModel):
    """Single level in volume profile."""

    model_config = ConfigDict(frozen=True)

    price_level: float
    volume: float = Field(..., ge=0)
    percentage: float = Field(..., ge=0, le=100)


class EnhancedIndicators(BaseModel):
    """
    History-based indicator bundle.
    Returned by: Indicator Service
    Consumed by: Signal Engine
    """

    model_config = ConfigDict(frozen=True)

    rsi: RSIResult
    macd: MACDResult
    bollinger_bands: BollingerResult
    support_levels: list[Level] = Field(default_factory=list)
    resistance_levels: list[Level] = Field(default_factory=list)
    candlestick_pattern: Optional[CandlestickPatternResult] = None
    volume_profile: list[VolumeProfileBucket] = Field(default_factory=list)
