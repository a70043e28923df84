"""
Price History Provider Interface

Defines the contract for price-history sources.
"""

from abc import ABC, abstractmethod

from cryptosignal.schemas.market import PriceHistory


class PriceHistoryProvider(ABC):
    """
    Price History Provider Contract.

    INPUT:
        - asset_id: market-data id of the asset (e.g. "bitcoin")
        - lookback_days: how far back to fetch

    OUTPUT: PriceHistory
        - samples ordered ascending by timestamp
        - volume per sample when the source has it

    Providers may raise ServiceError subclasses (ExternalAPIError for
    upstream failures). Callers decide whether to degrade.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging."""
        pass

    @abstractmethod
    async def fetch_price_history(self, asset_id: str, lookback_days: int) -> PriceHistory:
        """Fetch close-price history for one asset."""
        pass

    async def close(self) -> None:
        """Release any open connections."""
        return None
