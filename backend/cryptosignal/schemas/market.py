"""
CONTRACT 1: Market Data

Input side of the pipeline:
    - AssetSnapshot: current 24h/7d market state for one asset
    - PriceHistory: ordered close-price samples from the price-history provider

Both are immutable inputs; nothing downstream mutates them.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# PRICE HISTORY
# =============================================================================


class PriceSample(BaseModel):
    """Single close-price sample."""

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(..., description="Unix time in milliseconds")
    price: float = Field(..., gt=0)
    volume: Optional[float] = Field(
        default=None, ge=0, description="Base-asset volume, when the provider has it"
    )


class PriceHistory(BaseModel):
    """
    Price history for one asset.
    Sent by: Price-history provider
    Received by: Prediction Service

    Samples are ordered ascending by timestamp. Gaps are tolerated.
    """

    model_config = ConfigDict(frozen=True)

    asset_id: str
    prices: list[PriceSample] = Field(default_factory=list)

    @property
    def closes(self) -> list[float]:
        return [p.price for p in self.prices]


# =============================================================================
# ASSET SNAPSHOT
# =============================================================================


class AssetSnapshot(BaseModel):
    """
    Current market state for one asset.
    Sent by: Market data collaborator
    Received by: Prediction Service, Universe Service
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "bitcoin",
                "name": "Bitcoin",
                "symbol": "btc",
                "current_price": 64250.0,
                "high_24h": 65100.0,
                "low_24h": 63020.0,
                "price_change_percentage_24h": 1.8,
                "price_change_percentage_7d": 4.2,
                "market_cap": 1_265_000_000_000,
                "market_cap_rank": 1,
                "total_volume": 31_400_000_000,
            }
        },
    )

    id: str = Field(..., description="Asset id (e.g. 'bitcoin')")
    name: str
    symbol: str = Field(..., description="Ticker symbol (e.g. 'btc')")
    current_price: float = Field(..., gt=0)
    high_24h: float = Field(..., ge=0)
    low_24h: float = Field(..., ge=0)
    price_change_percentage_24h: Optional[float] = None
    price_change_percentage_7d: Optional[float] = None
    market_cap: float = Field(..., ge=0)
    market_cap_rank: int = Field(..., ge=1)
    total_volume: float = Field(..., ge=0)


# =============================================================================
# TRADING PLATFORMS
# =============================================================================


class TradingPlatform(str, Enum):
    """Perpetual-futures venues an asset can be traded on."""

    HYPERLIQUID = "hyperliquid"
    BINANCE = "binance"
    BYBIT = "bybit"
    OKX = "okx"
