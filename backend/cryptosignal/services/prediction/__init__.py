"""
Prediction Service

CONTRACT:
    Input:  AssetSnapshot (one or many)
    Output: Prediction (one or many)

RESPONSIBILITIES:
    - Fetch price history through the injected provider
    - Degrade to basic indicators when history is unavailable
    - Run the signal engine and assemble the Prediction
    - Batch evaluation with bounded concurrency and per-asset isolation

Network I/O only through the provider.
"""

from cryptosignal.services.prediction.interface import PredictionServiceInterface
from cryptosignal.services.prediction.service import PredictionService, get_prediction_service

__all__ = [
    "PredictionServiceInterface",
    "PredictionService",
    "get_prediction_service",
]
