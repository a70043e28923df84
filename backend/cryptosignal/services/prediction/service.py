"""
Prediction Service Implementation

Assembles basic indicators, optional enhanced indicators and the signal
engine's decision into a Prediction.
"""

import asyncio
import logging
from typing import Optional

from cryptosignal.core.config import settings
from cryptosignal.schemas.market import AssetSnapshot, PriceHistory
from cryptosignal.schemas.indicators import EnhancedIndicators
from cryptosignal.schemas.prediction import Prediction
from cryptosignal.services.data_ingestion import (
    BinancePriceHistoryProvider,
    PriceHistoryProvider,
)
from cryptosignal.services.indicators import IndicatorService, get_indicator_service
from cryptosignal.services.signals import SignalInput, SignalService, get_signal_service
from cryptosignal.services.prediction.interface import PredictionServiceInterface

logger = logging.getLogger(__name__)


class PredictionService(PredictionServiceInterface):
    """
    Prediction Service.

    The provider is injected; the indicator and signal services default
    to their singletons.
    """

    def __init__(
        self,
        provider: PriceHistoryProvider,
        indicator_service: Optional[IndicatorService] = None,
        signal_service: Optional[SignalService] = None,
        lookback_days: Optional[int] = None,
        max_concurrency: Optional[int] = None,
    ):
        self.provider = provider
        self.indicator_service = indicator_service or get_indicator_service()
        self.signal_service = signal_service or get_signal_service()
        self.lookback_days = lookback_days or settings.history_lookback_days
        self.max_concurrency = max(1, max_concurrency or settings.max_concurrent_predictions)

    @property
    def name(self) -> str:
        return "PredictionService"

    async def execute(self, input_data: AssetSnapshot) -> Prediction:
        """Generate a prediction for one asset."""
        return await self.generate_prediction(input_data)

    async def _fetch_enhanced(self, snapshot: AssetSnapshot) -> Optional[EnhancedIndicators]:
        """Enhanced indicators, or None when no usable history is available."""
        try:
            history = await self.provider.fetch_price_history(snapshot.id, self.lookback_days)
        except Exception as e:
            logger.warning(f"Failed to fetch price history for {snapshot.id}: {e}")
            return None

        if not isinstance(history, PriceHistory) or not history.prices:
            logger.warning(f"No usable price history for {snapshot.id}, using basic indicators only")
            return None

        return self.indicator_service.calculate_enhanced(history)

    async def generate_prediction(self, snapshot: AssetSnapshot) -> Prediction:
        indicators = self.indicator_service.calculate_basic(snapshot)
        enhanced = await self._fetch_enhanced(snapshot)

        decision = self.signal_service.decide(
            SignalInput(snapshot=snapshot, indicators=indicators, enhanced=enhanced)
        )

        logger.info(
            f"{snapshot.symbol.upper()}: {decision.direction.value} "
            f"{decision.confidence}% ({decision.sentiment.value}), "
            f"{decision.leverage}x, risk {decision.risk_level.value}"
        )

        return Prediction(
            asset=snapshot,
            direction=decision.direction,
            sentiment=decision.sentiment,
            confidence=decision.confidence,
            basic_indicators=indicators,
            enhanced_indicators=enhanced,
            reasons=decision.reasons,
            target_price=decision.targets.target_price,
            stop_loss=decision.targets.stop_loss,
            timeframe=decision.timeframe,
            analysis_text=decision.analysis_text,
            leverage=decision.leverage,
            risk_level=decision.risk_level,
        )

    async def generate_predictions(self, snapshots: list[AssetSnapshot]) -> list[Prediction]:
        """
        Generate predictions for many assets.

        At most max_concurrency assets are in flight (1 = sequential).
        Failed assets are logged and left out; order follows the input.
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def bounded(snapshot: AssetSnapshot) -> Prediction:
            async with semaphore:
                return await self.generate_prediction(snapshot)

        results = await asyncio.gather(
            *(bounded(s) for s in snapshots), return_exceptions=True
        )

        predictions = []
        for snapshot, result in zip(snapshots, results):
            if isinstance(result, Exception):
                logger.error(f"Failed to generate prediction for {snapshot.id}: {result}")
                continue
            predictions.append(result)

        logger.info(f"Generated {len(predictions)}/{len(snapshots)} predictions")
        return predictions

    async def health_check(self) -> bool:
        return (
            await self.indicator_service.health_check()
            and await self.signal_service.health_check()
        )

    async def close(self) -> None:
        """Release the provider's connections."""
        await self.provider.close()


# Singleton instance
_service_instance: Optional[PredictionService] = None


def get_prediction_service() -> PredictionService:
    """Get or create prediction service instance backed by Binance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = PredictionService(provider=BinancePriceHistoryProvider())
    return _service_instance
