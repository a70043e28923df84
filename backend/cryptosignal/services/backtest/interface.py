"""
Backtest Service Interface

Defines the contract for replaying tracked calls on price history.
"""

from abc import abstractmethod
from dataclasses import dataclass, field

from cryptosignal.services.base import BaseService
from cryptosignal.schemas.backtest import BacktestConfig, BacktestResult
from cryptosignal.schemas.evaluation import PredictionRecord


@dataclass
class BacktestInput:
    """Input for a backtest run."""

    records: list[PredictionRecord]
    config: BacktestConfig = field(default_factory=BacktestConfig)


class BacktestServiceInterface(BaseService[BacktestInput, BacktestResult]):
    """
    Backtest Service Contract.

    INPUT: BacktestInput
        - records: tracked predictions (neutral calls are never traded)
        - config: capital, position size %, leverage, confidence floor,
          shorts on/off, holding limit

    OUTPUT: BacktestResult
        - closed trades and open-trade count
        - win rate, returns, max drawdown, Sharpe ratio, profit factor
        - equity and drawdown curves
        - per-asset and per-month performance

    EXITS (checked per sample after entry, in this order):
        1. Stop loss   -> fill at the stop
        2. Take profit -> fill at the target
        3. Holding limit exceeded -> fill at the sample price

    An asset whose history cannot be fetched leaves its trades open.
    """

    @property
    def name(self) -> str:
        return "BacktestService"

    @abstractmethod
    async def execute(self, input_data: BacktestInput) -> BacktestResult:
        """Validate the input and run the backtest."""
        pass

    @abstractmethod
    async def run(
        self,
        records: list[PredictionRecord],
        config: BacktestConfig,
    ) -> BacktestResult:
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass
