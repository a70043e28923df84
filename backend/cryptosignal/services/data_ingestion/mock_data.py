"""
Mock Price History

Generates realistic mock price histories for development and testing.
Seeded per asset, so the same asset always gets the same series.
"""

import random
from datetime import datetime, timedelta, timezone
from typing import Optional

from cryptosignal.schemas.market import PriceHistory, PriceSample
from cryptosignal.services.data_ingestion.interface import PriceHistoryProvider


# Base prices for common assets
ASSET_BASE_PRICES = {
    "bitcoin": 64000.0,
    "ethereum": 3200.0,
    "solana": 150.0,
    "binancecoin": 580.0,
    "ripple": 0.52,
    "cardano": 0.45,
    "dogecoin": 0.15,
}

DAY_MS = 86_400_000


def generate_mock_history(
    asset_id: str,
    lookback_days: int,
    seed: int = 0,
    volatility: float = 0.03,
    end_time: Optional[datetime] = None,
) -> PriceHistory:
    """Daily random-walk closes with volumes."""
    if end_time is None:
        end_time = datetime.now(timezone.utc)

    rng = random.Random(f"{seed}:{asset_id}")
    price = ASSET_BASE_PRICES.get(asset_id, 10.0 + rng.random() * 90)
    start = end_time - timedelta(days=lookback_days)
    timestamp = int(start.timestamp() * 1000)

    samples = []
    for _ in range(lookback_days):
        # Multiplicative walk keeps prices positive
        price *= 1 + (rng.random() - 0.5) * 2 * volatility
        samples.append(
            PriceSample(
                timestamp=timestamp,
                price=round(price, 8),
                volume=round(rng.uniform(1_000, 50_000), 2),
            )
        )
        timestamp += DAY_MS

    return PriceHistory(asset_id=asset_id, prices=samples)


class MockPriceHistoryProvider(PriceHistoryProvider):
    """Provider serving generated histories."""

    def __init__(self, seed: int = 0, volatility: float = 0.03):
        self.seed = seed
        self.volatility = volatility

    @property
    def name(self) -> str:
        return "MockPriceHistoryProvider"

    async def fetch_price_history(self, asset_id: str, lookback_days: int) -> PriceHistory:
        return generate_mock_history(
            asset_id, lookback_days, seed=self.seed, volatility=self.volatility
        )
