"""
Indicator Engine Service Implementation

Calculates all technical indicators from price history.
Pure Python/NumPy calculations.
"""

import logging
from typing import Optional

from cryptosignal.schemas.market import AssetSnapshot, PriceHistory
from cryptosignal.schemas.indicators import BasicIndicators, EnhancedIndicators
from cryptosignal.services.indicators.interface import IndicatorServiceInterface
from cryptosignal.services.indicators.basic import calculate_basic_indicators
from cryptosignal.services.indicators.calculations import (
    calculate_rsi,
    calculate_macd,
    calculate_bollinger_bands,
    detect_support_resistance,
    identify_candlestick_pattern,
    calculate_volume_profile,
)

logger = logging.getLogger(__name__)

# Samples fed to the volume profile
VOLUME_PROFILE_WINDOW = 30


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Calculates technical indicators for market analysis.
    All calculations are deterministic and reproducible.
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def execute(self, input_data: PriceHistory) -> EnhancedIndicators:
        """Calculate enhanced indicators for a price history."""
        return self.calculate_enhanced(input_data)

    def calculate_basic(self, snapshot: AssetSnapshot) -> BasicIndicators:
        """Calculate basic indicators from 24h/7d statistics."""
        return calculate_basic_indicators(snapshot)

    def calculate_enhanced(self, history: PriceHistory) -> EnhancedIndicators:
        """Calculate every history-based indicator in one pass."""
        closes = history.closes
        levels = detect_support_resistance(closes)

        with_volume = [
            (p.price, p.volume)
            for p in history.prices[-VOLUME_PROFILE_WINDOW:]
            if p.volume is not None
        ]

        indicators = EnhancedIndicators(
            rsi=calculate_rsi(closes),
            macd=calculate_macd(closes),
            bollinger_bands=calculate_bollinger_bands(closes),
            support_levels=levels.supports,
            resistance_levels=levels.resistances,
            candlestick_pattern=identify_candlestick_pattern(closes),
            volume_profile=calculate_volume_profile(with_volume),
        )

        logger.debug(
            f"{history.asset_id}: RSI {indicators.rsi.value:.1f}, "
            f"MACD {indicators.macd.crossover.value}, "
            f"BB {indicators.bollinger_bands.position.value}, "
            f"{len(levels.supports)} supports / {len(levels.resistances)} resistances"
        )
        return indicators

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
