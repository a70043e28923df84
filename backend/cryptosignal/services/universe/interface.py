"""
Universe Service Interface

Defines the contract for the tradeable-universe filter.
"""

from abc import abstractmethod
from typing import Optional

from cryptosignal.services.base import BaseService
from cryptosignal.schemas.market import AssetSnapshot, TradingPlatform


class UniverseServiceInterface(BaseService[list[AssetSnapshot], list[AssetSnapshot]]):
    """
    Universe Service Contract.

    INPUT: list[AssetSnapshot]
        - candidate assets, typically ranked by volume or market cap

    OUTPUT: list[AssetSnapshot]
        - input order preserved
        - excluded ids (stablecoins, wrapped tokens, staking derivatives) removed
        - symbols without any perpetual venue removed
    """

    @property
    def name(self) -> str:
        return "UniverseService"

    @abstractmethod
    async def execute(self, input_data: list[AssetSnapshot]) -> list[AssetSnapshot]:
        """Filter candidates down to tradeable assets."""
        pass

    @abstractmethod
    def is_excluded(self, asset_id: str) -> bool:
        pass

    @abstractmethod
    def supported_platforms(self, symbol: str) -> list[TradingPlatform]:
        pass

    @abstractmethod
    def has_platform_support(self, symbol: str) -> bool:
        pass

    @abstractmethod
    def filter_tradeable(
        self,
        snapshots: list[AssetSnapshot],
        limit: Optional[int] = None,
    ) -> list[AssetSnapshot]:
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass
