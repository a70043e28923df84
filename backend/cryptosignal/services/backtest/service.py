"""
Backtest Service Implementation

Fetches one price history per traded asset, replays every trade on it
and summarises the results.
"""

import logging
from typing import Optional

from cryptosignal.core.config import settings
from cryptosignal.schemas.backtest import BacktestConfig, BacktestResult
from cryptosignal.schemas.evaluation import PredictionRecord
from cryptosignal.schemas.market import PriceHistory
from cryptosignal.services.base import ValidationError
from cryptosignal.services.data_ingestion import (
    BinancePriceHistoryProvider,
    PriceHistoryProvider,
)
from cryptosignal.services.backtest.interface import BacktestInput, BacktestServiceInterface
from cryptosignal.services.backtest.engine import (
    build_trades,
    calculate_metrics,
    simulate_trade,
)

logger = logging.getLogger(__name__)


class BacktestService(BacktestServiceInterface):
    """
    Backtest Service.

    Usage:
        service = BacktestService(provider=BinancePriceHistoryProvider())
        result = await service.run(records, BacktestConfig(leverage=3))
    """

    def __init__(self, provider: PriceHistoryProvider, lookback_days: Optional[int] = None):
        self.provider = provider
        self.lookback_days = lookback_days or settings.backtest_lookback_days

    @property
    def name(self) -> str:
        return "BacktestService"

    async def validate_input(self, input_data: BacktestInput) -> BacktestInput:
        """Record ids become trade ids and must be unique."""
        seen = set()
        for record in input_data.records:
            if record.id in seen:
                raise ValidationError(
                    self.name, f"Duplicate prediction record id {record.id}", {"id": record.id}
                )
            seen.add(record.id)
        return input_data

    async def execute(self, input_data: BacktestInput) -> BacktestResult:
        input_data = await self.validate_input(input_data)
        return await self.run(input_data.records, input_data.config)

    async def _fetch_history(self, asset_id: str) -> Optional[PriceHistory]:
        try:
            history = await self.provider.fetch_price_history(asset_id, self.lookback_days)
        except Exception as e:
            logger.warning(f"Failed to fetch price history for {asset_id}: {e}")
            return None

        if not isinstance(history, PriceHistory) or not history.prices:
            logger.warning(f"No usable price history for {asset_id}, trades stay open")
            return None
        return history

    async def run(
        self,
        records: list[PredictionRecord],
        config: Optional[BacktestConfig] = None,
    ) -> BacktestResult:
        if config is None:
            config = BacktestConfig()

        trades = build_trades(records, config)

        histories = {}
        for asset_id in dict.fromkeys(t.asset_id for t in trades):
            histories[asset_id] = await self._fetch_history(asset_id)

        simulated = []
        for trade in trades:
            history = histories[trade.asset_id]
            if history is not None:
                trade = simulate_trade(trade, history.prices, config.max_hold_hours)
            simulated.append(trade)

        result = calculate_metrics(simulated, config)
        logger.info(
            f"Backtest: {result.total_trades} closed, {result.open_trades} open, "
            f"win rate {result.win_rate:.1f}%, return {result.total_return_percent:+.2f}%"
        )
        return result

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        await self.provider.close()


# Singleton instance
_service_instance: Optional[BacktestService] = None


def get_backtest_service() -> BacktestService:
    """Get or create backtest service instance backed by Binance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = BacktestService(provider=BinancePriceHistoryProvider())
    return _service_instance
