"""
Tradeable Universe Service

CONTRACT:
    Input:  list[AssetSnapshot]
    Output: list[AssetSnapshot] (tradeable subset)

RESPONSIBILITIES:
    - Exclude stablecoins, wrapped tokens and liquid staking derivatives
    - Check perpetual venue support (Hyperliquid, Binance, Bybit, OKX)
    - Build venue trading links

Lists are configurable through Settings.
"""

from cryptosignal.services.universe.interface import UniverseServiceInterface
from cryptosignal.services.universe.service import UniverseService, get_universe_service

__all__ = [
    "UniverseServiceInterface",
    "UniverseService",
    "get_universe_service",
]
