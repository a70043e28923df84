"""
Prediction Service Interface

Defines the contract for the prediction assembler.
"""

from abc import abstractmethod

from cryptosignal.services.base import BaseService
from cryptosignal.schemas.market import AssetSnapshot
from cryptosignal.schemas.prediction import Prediction


class PredictionServiceInterface(BaseService[AssetSnapshot, Prediction]):
    """
    Prediction Service Contract.

    INPUT: AssetSnapshot
        - current price, 24h high/low, 24h/7d change, market cap, rank, volume

    OUTPUT: Prediction
        - direction, sentiment, confidence
        - basic + enhanced indicators (enhanced is None without history)
        - reasons, targets, timeframe, analysis text
        - leverage, risk level

    FLOW:
        1. Basic indicators from the snapshot
        2. Price history from the provider (failure -> basic only)
        3. Enhanced indicators from the history
        4. Signal engine decision

    Batch evaluation isolates failures: one bad asset never stops the batch.
    """

    @property
    def name(self) -> str:
        return "PredictionService"

    @abstractmethod
    async def execute(self, input_data: AssetSnapshot) -> Prediction:
        """Generate a prediction for one asset."""
        pass

    @abstractmethod
    async def generate_prediction(self, snapshot: AssetSnapshot) -> Prediction:
        """Generate a prediction for one asset."""
        pass

    @abstractmethod
    async def generate_predictions(self, snapshots: list[AssetSnapshot]) -> list[Prediction]:
        """Generate predictions for many assets, skipping failures."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check that the service can produce predictions."""
        pass
