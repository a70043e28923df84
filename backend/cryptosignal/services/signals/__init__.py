"""
Signal Engine Service

CONTRACT:
    Input:  AssetSnapshot + BasicIndicators + EnhancedIndicators (optional)
    Output: SignalDecision

RESPONSIBILITIES:
    - Weighted bullish/bearish scoring
    - LONG / SHORT / NEUTRAL call with momentum fallback
    - Sentiment, confidence, leverage, risk level
    - Target price and stop loss from rank tiers and support/resistance
    - Timeframe label, rationale lines and analysis text

PURE PYTHON - No I/O.
All rules are deterministic and auditable.
"""

from cryptosignal.services.signals.interface import SignalInput, SignalServiceInterface
from cryptosignal.services.signals.service import SignalService, get_signal_service
from cryptosignal.services.signals.scoring import determine_direction, score_signals

__all__ = [
    "SignalInput",
    "SignalServiceInterface",
    "SignalService",
    "get_signal_service",
    "determine_direction",
    "score_signals",
]
