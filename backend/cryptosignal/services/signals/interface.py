"""
Signal Engine Service Interface

Defines the contract for the decision layer.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Optional

from cryptosignal.services.base import BaseService
from cryptosignal.schemas.market import AssetSnapshot
from cryptosignal.schemas.indicators import BasicIndicators, EnhancedIndicators
from cryptosignal.schemas.prediction import SignalDecision


@dataclass
class SignalInput:
    """Input for the signal engine."""

    snapshot: AssetSnapshot
    indicators: BasicIndicators
    enhanced: Optional[EnhancedIndicators] = None


class SignalServiceInterface(BaseService[SignalInput, SignalDecision]):
    """
    Signal Engine Service Contract.

    INPUT: SignalInput
        - snapshot: current market state (price, rank, 24h change)
        - indicators: BasicIndicators
        - enhanced: EnhancedIndicators, or None when no history was available

    OUTPUT: SignalDecision
        - score: bullish/bearish vote totals
        - direction, sentiment, confidence
        - leverage, risk_level
        - targets, timeframe
        - reasons, analysis_text

    DECISION ORDER:
        1. Score indicators, pick direction
        2. Sentiment and confidence
        3. Leverage from confidence and volatility
        4. Risk level from volatility, leverage and strength
        5. Reasons
        6. Targets, then the realised target return for the analysis
        7. Timeframe and analysis text

    Identical inputs always produce identical decisions.
    """

    @property
    def name(self) -> str:
        return "SignalService"

    @abstractmethod
    async def execute(self, input_data: SignalInput) -> SignalDecision:
        """Make the trade call."""
        pass

    @abstractmethod
    def decide(self, input_data: SignalInput) -> SignalDecision:
        """Synchronous core of execute()."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Signal service is always healthy (pure computation)."""
        pass
