"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod

from cryptosignal.services.base import BaseService
from cryptosignal.schemas.market import AssetSnapshot, PriceHistory
from cryptosignal.schemas.indicators import BasicIndicators, EnhancedIndicators


class IndicatorServiceInterface(BaseService[PriceHistory, EnhancedIndicators]):
    """
    Indicator Engine Service Contract.

    INPUT: PriceHistory
        - prices: ordered close-price samples (volume optional)

    OUTPUT: EnhancedIndicators
        - rsi, macd, bollinger_bands
        - support_levels / resistance_levels (nearest first, max 3 each)
        - candlestick_pattern
        - volume_profile (empty when the provider has no volumes)

    Short histories never fail: each indicator falls back to its
    documented default.
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: PriceHistory) -> EnhancedIndicators:
        """Calculate enhanced indicators for a price history."""
        pass

    @abstractmethod
    def calculate_basic(self, snapshot: AssetSnapshot) -> BasicIndicators:
        """Calculate basic indicators from 24h/7d statistics."""
        pass

    @abstractmethod
    def calculate_enhanced(self, history: PriceHistory) -> EnhancedIndicators:
        """Synchronous core of execute()."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
