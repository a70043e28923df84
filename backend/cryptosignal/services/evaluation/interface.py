"""
Evaluation Service Interface

Defines the contract for prediction outcome tracking.
"""

from abc import abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from cryptosignal.services.base import BaseService
from cryptosignal.schemas.evaluation import PredictionRecord, PredictionStats


@dataclass
class EvaluationInput:
    """Input for a pending-record sweep."""

    records: list[PredictionRecord]
    current_prices: dict[str, float] = field(default_factory=dict)
    now: Optional[datetime] = None


class EvaluationServiceInterface(BaseService[EvaluationInput, list[PredictionRecord]]):
    """
    Evaluation Service Contract.

    INPUT: EvaluationInput
        - records: tracked predictions
        - current_prices: asset id -> latest price
        - now: evaluation time (defaults to current UTC time)

    OUTPUT: list[PredictionRecord]
        - same order as input
        - pending records with a price resolved when target/stop was hit
          or the 48h window expired; all others unchanged

    RULES:
        LONG:  win at price >= target, loss at price <= stop
        SHORT: win at price <= target, loss at price >= stop
        Expired: neutral, profit_loss = raw % change
    """

    @property
    def name(self) -> str:
        return "EvaluationService"

    @abstractmethod
    async def execute(self, input_data: EvaluationInput) -> list[PredictionRecord]:
        """Evaluate all pending records."""
        pass

    @abstractmethod
    def evaluate_pending(
        self,
        records: list[PredictionRecord],
        current_prices: dict[str, float],
        now: Optional[datetime] = None,
    ) -> list[PredictionRecord]:
        pass

    @abstractmethod
    def stats(self, records: list[PredictionRecord]) -> PredictionStats:
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass
