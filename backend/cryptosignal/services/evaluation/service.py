"""
Evaluation Service Implementation

Resolves tracked predictions and summarises accuracy.
Persistence is the caller's job.
"""

import logging
from datetime import datetime
from typing import Optional

from cryptosignal.schemas.evaluation import PredictionRecord, PredictionStats, utc_now
from cryptosignal.services.evaluation.interface import (
    EvaluationInput,
    EvaluationServiceInterface,
)
from cryptosignal.services.evaluation.calculations import compute_stats, evaluate_record

logger = logging.getLogger(__name__)


class EvaluationService(EvaluationServiceInterface):
    """Evaluation Service."""

    @property
    def name(self) -> str:
        return "EvaluationService"

    async def execute(self, input_data: EvaluationInput) -> list[PredictionRecord]:
        return self.evaluate_pending(
            input_data.records, input_data.current_prices, input_data.now
        )

    def evaluate_pending(
        self,
        records: list[PredictionRecord],
        current_prices: dict[str, float],
        now: Optional[datetime] = None,
    ) -> list[PredictionRecord]:
        """Evaluate pending records that have a current price."""
        if now is None:
            now = utc_now()

        evaluated = []
        resolved = 0
        for record in records:
            price = current_prices.get(record.asset_id)
            if record.is_pending and price:
                updated = evaluate_record(record, price, now)
                if not updated.is_pending:
                    resolved += 1
                    logger.debug(
                        f"{record.id}: {updated.outcome.value} "
                        f"({updated.profit_loss:+.2f}%)"
                    )
                record = updated
            evaluated.append(record)

        if resolved:
            logger.info(f"Evaluated {resolved} predictions")
        return evaluated

    def stats(self, records: list[PredictionRecord]) -> PredictionStats:
        return compute_stats(records)

    async def health_check(self) -> bool:
        return True


# Singleton instance
_service_instance: Optional[EvaluationService] = None


def get_evaluation_service() -> EvaluationService:
    """Get or create evaluation service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = EvaluationService()
    return _service_instance
