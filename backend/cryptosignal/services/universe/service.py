"""
Universe Service Implementation

Drops assets that should never get a signal: pegged assets and
symbols no supported venue lists.
"""

import logging
from typing import Optional

from cryptosignal.core.config import settings
from cryptosignal.schemas.market import AssetSnapshot, TradingPlatform
from cryptosignal.services.base import ValidationError
from cryptosignal.services.universe.interface import UniverseServiceInterface

logger = logging.getLogger(__name__)


# Perpetual trading page per venue
PLATFORM_URLS = {
    TradingPlatform.HYPERLIQUID: "https://app.hyperliquid.xyz/trade/{upper}",
    TradingPlatform.BINANCE: "https://www.binance.com/en/futures/{upper}USDT",
    TradingPlatform.BYBIT: "https://www.bybit.com/trade/usdt/{upper}USDT",
    TradingPlatform.OKX: "https://www.okx.com/trade-swap/{lower}-usdt-swap",
}


class UniverseService(UniverseServiceInterface):
    """
    Universe Service.

    Hyperliquid is checked against the extended symbol list, the other
    venues against the major list.
    """

    def __init__(
        self,
        excluded_asset_ids: Optional[list[str]] = None,
        major_symbols: Optional[list[str]] = None,
        extended_symbols: Optional[list[str]] = None,
    ):
        if excluded_asset_ids is None:
            excluded_asset_ids = settings.excluded_asset_ids
        if major_symbols is None:
            major_symbols = settings.major_platform_symbols
        if extended_symbols is None:
            extended_symbols = settings.extended_platform_symbols

        self.excluded_asset_ids = set(excluded_asset_ids)
        self.major_symbols = {s.upper() for s in major_symbols}
        self.extended_symbols = {s.upper() for s in extended_symbols}

    @property
    def name(self) -> str:
        return "UniverseService"

    async def execute(self, input_data: list[AssetSnapshot]) -> list[AssetSnapshot]:
        return self.filter_tradeable(input_data)

    def is_excluded(self, asset_id: str) -> bool:
        return asset_id in self.excluded_asset_ids

    def is_platform_supported(self, platform: TradingPlatform, symbol: str) -> bool:
        upper = symbol.upper()
        if platform == TradingPlatform.HYPERLIQUID:
            return upper in self.extended_symbols
        return upper in self.major_symbols

    def supported_platforms(self, symbol: str) -> list[TradingPlatform]:
        """Venues listing the symbol, in display order."""
        return [p for p in TradingPlatform if self.is_platform_supported(p, symbol)]

    def has_platform_support(self, symbol: str) -> bool:
        upper = symbol.upper()
        return upper in self.major_symbols or upper in self.extended_symbols

    def trade_url(self, platform: TradingPlatform, symbol: str) -> str:
        """Direct link to the symbol's perpetual market on a venue."""
        return PLATFORM_URLS[platform].format(upper=symbol.upper(), lower=symbol.lower())

    def filter_tradeable(
        self,
        snapshots: list[AssetSnapshot],
        limit: Optional[int] = None,
    ) -> list[AssetSnapshot]:
        """Keep tradeable assets in input order, truncated to limit."""
        if limit is not None and limit < 1:
            raise ValidationError(self.name, f"limit must be positive, got {limit}")

        tradeable = []
        for snapshot in snapshots:
            label = f"{snapshot.name} ({snapshot.symbol.upper()})"
            if self.is_excluded(snapshot.id):
                logger.debug(f"Filtering out: {label} - Excluded ID")
                continue
            if not self.has_platform_support(snapshot.symbol):
                logger.debug(f"Filtering out: {label} - No platform support")
                continue
            tradeable.append(snapshot)

        logger.info(f"{len(tradeable)}/{len(snapshots)} assets tradeable")
        return tradeable if limit is None else tradeable[:limit]

    async def health_check(self) -> bool:
        return True


# Singleton instance
_service_instance: Optional[UniverseService] = None


def get_universe_service() -> UniverseService:
    """Get or create universe service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = UniverseService()
    return _service_instance
