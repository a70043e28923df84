"""
Prediction Evaluation Service

CONTRACT:
    Input:  PredictionRecord(s) + current prices
    Output: evaluated PredictionRecord(s), PredictionStats

RESPONSIBILITIES:
    - Track a Prediction as a pending record
    - Resolve win / loss against target and stop
    - Expire stale calls as neutral after 48h
    - Win rates and average profit

PURE PYTHON - No storage.
"""

from cryptosignal.services.evaluation.interface import (
    EvaluationInput,
    EvaluationServiceInterface,
)
from cryptosignal.services.evaluation.service import EvaluationService, get_evaluation_service
from cryptosignal.services.evaluation.calculations import (
    evaluate_record,
    evaluate_at_price,
    compute_stats,
)

__all__ = [
    "EvaluationInput",
    "EvaluationServiceInterface",
    "EvaluationService",
    "get_evaluation_service",
    "evaluate_record",
    "evaluate_at_price",
    "compute_stats",
]
