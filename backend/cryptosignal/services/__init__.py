"""
CryptoSignal Services

Service layer containing all business logic.
Each service has a defined interface (contract) and implementation.
"""

from cryptosignal.services.base import (
    BaseService,
    ServiceError,
    ValidationError,
    ExternalAPIError,
)

__all__ = ["BaseService", "ServiceError", "ValidationError", "ExternalAPIError"]
