"""
Signal Engine Service Implementation

Turns basic + enhanced indicators into a directional call with
confidence, sizing, targets and rationale.
"""

import logging
from typing import Optional

from cryptosignal.schemas.prediction import SignalDecision
from cryptosignal.services.signals.interface import SignalInput, SignalServiceInterface
from cryptosignal.services.signals.scoring import (
    score_signals,
    decide_direction,
    calculate_sentiment,
    calculate_confidence,
)
from cryptosignal.services.signals.risk import (
    calculate_leverage,
    calculate_risk_level,
    calculate_targets,
    calculate_timeframe,
    target_return,
)
from cryptosignal.services.signals.narrative import generate_reasons, generate_analysis

logger = logging.getLogger(__name__)


class SignalService(SignalServiceInterface):
    """
    Signal Engine Service.

    Stateless: the score accumulators live inside score_signals().
    """

    @property
    def name(self) -> str:
        return "SignalService"

    async def execute(self, input_data: SignalInput) -> SignalDecision:
        """Make the trade call."""
        return self.decide(input_data)

    def decide(self, input_data: SignalInput) -> SignalDecision:
        snapshot = input_data.snapshot
        indicators = input_data.indicators
        enhanced = input_data.enhanced

        score = score_signals(indicators, enhanced)
        direction = decide_direction(score, indicators.momentum)
        sentiment = calculate_sentiment(indicators, direction, enhanced)
        confidence = calculate_confidence(indicators, enhanced)

        leverage = calculate_leverage(confidence, indicators.volatility, direction)
        risk_level = calculate_risk_level(indicators.volatility, leverage, indicators)

        reasons = generate_reasons(snapshot, indicators, direction, enhanced)
        targets = calculate_targets(snapshot, direction, indicators, leverage, enhanced)
        timeframe = calculate_timeframe(
            indicators.volatility, indicators.momentum, snapshot.market_cap_rank
        )
        analysis = generate_analysis(
            snapshot,
            indicators,
            direction,
            leverage,
            target_return(snapshot, direction, targets),
            enhanced,
        )

        logger.debug(
            f"{snapshot.id}: score +{score.bullish}/-{score.bearish} -> "
            f"{direction.value} ({confidence}%, {leverage}x, {risk_level.value})"
        )

        return SignalDecision(
            score=score,
            direction=direction,
            sentiment=sentiment,
            confidence=confidence,
            leverage=leverage,
            risk_level=risk_level,
            targets=targets,
            timeframe=timeframe,
            reasons=reasons,
            analysis_text=analysis,
        )

    async def health_check(self) -> bool:
        """Signal service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[SignalService] = None


def get_signal_service() -> SignalService:
    """Get or create signal service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SignalService()
    return _service_instance
