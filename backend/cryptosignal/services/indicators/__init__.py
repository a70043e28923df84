"""
Indicator Engine Service

CONTRACT:
    Input:  PriceHistory (close prices) / AssetSnapshot
    Output: EnhancedIndicators / BasicIndicators

RESPONSIBILITIES:
    - Moving averages (SMA, EMA)
    - RSI, MACD, Bollinger Bands
    - Support/resistance detection
    - Candlestick-pattern heuristics and volume profile
    - Basic momentum/trend/volatility/strength from 24h/7d statistics

PURE PYTHON - Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from cryptosignal.services.indicators.interface import IndicatorServiceInterface
from cryptosignal.services.indicators.service import IndicatorService, get_indicator_service

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "get_indicator_service",
]
