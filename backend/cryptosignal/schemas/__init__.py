"""
CryptoSignal Schema Contracts

This module defines all data contracts between system components.
All models are immutable pydantic models.
"""

from cryptosignal.schemas.market import (
    PriceSample,
    PriceHistory,
    AssetSnapshot,
    TradingPlatform,
)
from cryptosignal.schemas.indicators import (
    BasicIndicators,
    RSIResult,
    MACDResult,
    BollingerResult,
    Level,
    SupportResistance,
    CandlestickPatternResult,
    VolumeProfileBucket,
    EnhancedIndicators,
)
from cryptosignal.schemas.prediction import (
    Direction,
    Sentiment,
    RiskLevel,
    PredictionReason,
    SignalScore,
    PriceTargets,
    SignalDecision,
    Prediction,
)
from cryptosignal.schemas.evaluation import (
    Outcome,
    PredictionRecord,
    PredictionStats,
)
from cryptosignal.schemas.backtest import (
    ExitReason,
    BacktestConfig,
    BacktestTrade,
    EquityPoint,
    DrawdownPoint,
    AssetPerformance,
    PeriodPerformance,
    BacktestResult,
)

__all__ = [
    # Market
    "PriceSample",
    "PriceHistory",
    "AssetSnapshot",
    "TradingPlatform",
    # Indicators
    "BasicIndicators",
    "RSIResult",
    "MACDResult",
    "BollingerResult",
    "Level",
    "SupportResistance",
    "CandlestickPatternResult",
    "VolumeProfileBucket",
    "EnhancedIndicators",
    # Prediction
    "Direction",
    "Sentiment",
    "RiskLevel",
    "PredictionReason",
    "SignalScore",
    "PriceTargets",
    "SignalDecision",
    "Prediction",
    # Evaluation
    "Outcome",
    "PredictionRecord",
    "PredictionStats",
    # Backtest
    "ExitReason",
    "BacktestConfig",
    "BacktestTrade",
    "EquityPoint",
    "DrawdownPoint",
    "AssetPerformance",
    "PeriodPerformance",
    "BacktestResult",
]
