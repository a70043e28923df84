"""
CONTRACT 5: Backtest

Input: PredictionRecord(s) + PriceHistory per asset + BacktestConfig
Output: BacktestResult

Replays tracked calls against realised prices. Each call becomes a
trade that exits at its stop, its target or the holding limit.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from cryptosignal.schemas.evaluation import PredictionRecord
from cryptosignal.schemas.prediction import Direction


HOUR_MS = 3_600_000


class ExitReason(str, Enum):
    TAKE_PROFIT = "take_profit"
    STOP_LOSS = "stop_loss"
    TIME_LIMIT = "time_limit"


# =============================================================================
# INPUT
# =============================================================================


class BacktestConfig(BaseModel):
    """Sizing and filtering rules for a replay."""

    model_config = ConfigDict(frozen=True)

    initial_capital: float = Field(default=10_000.0, gt=0, description="Starting balance in USD")
    position_size: float = Field(
        default=10.0, gt=0, le=100, description="% of initial capital per trade"
    )
    leverage: int = Field(default=1, ge=1, le=10)
    min_confidence: int = Field(default=0, ge=0, le=100)
    include_shorts: bool = True
    max_hold_hours: float = Field(default=48.0, gt=0)


class BacktestTrade(BaseModel):
    """
    One simulated position.
    Created by: Backtest engine (from a PredictionRecord)
    Consumed by: Backtest metrics
    """

    model_config = ConfigDict(frozen=True)

    id: str
    asset_id: str
    asset_name: str
    asset_symbol: str
    direction: Direction
    entry_time: int = Field(..., description="Unix ms")
    entry_price: float = Field(..., gt=0)
    quantity: float = Field(..., gt=0, description="Units of the asset")
    leverage: int = Field(default=1, ge=1, le=10)
    stop_loss: float
    take_profit: float
    confidence: int = Field(default=0, ge=0, le=100)

    exit_time: Optional[int] = None
    exit_price: Optional[float] = None
    profit_loss: Optional[float] = Field(default=None, description="USD, unleveraged")
    profit_loss_percent: Optional[float] = Field(default=None, description="% return x leverage")
    exit_reason: Optional[ExitReason] = None

    @classmethod
    def from_record(cls, record: PredictionRecord, config: BacktestConfig) -> "BacktestTrade":
        """Open a position sized from the config at the record's price."""
        capital = config.initial_capital * config.position_size / 100
        return cls(
            id=record.id,
            asset_id=record.asset_id,
            asset_name=record.asset_name,
            asset_symbol=record.asset_symbol,
            direction=record.direction,
            entry_time=int(record.timestamp.timestamp() * 1000),
            entry_price=record.predicted_price,
            quantity=capital / record.predicted_price,
            leverage=config.leverage,
            stop_loss=record.stop_loss,
            take_profit=record.target_price,
            confidence=record.confidence,
        )

    @property
    def is_open(self) -> bool:
        return self.exit_time is None

    @property
    def capital_used(self) -> float:
        return self.entry_price * self.quantity

    @property
    def hold_hours(self) -> Optional[float]:
        if self.exit_time is None:
            return None
        return (self.exit_time - self.entry_time) / HOUR_MS


# =============================================================================
# OUTPUT: BacktestResult
# =============================================================================


class EquityPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: int
    equity: float
    drawdown: float = Field(..., description="% below the running peak")


class DrawdownPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: int
    drawdown: float
    peak: float
    valley: float


class AssetPerformance(BaseModel):
    """Closed-trade results for one asset."""

    model_config = ConfigDict(frozen=True)

    asset_id: str
    asset_name: str
    asset_symbol: str
    total_trades: int
    win_rate: float
    total_return: float
    total_return_percent: float
    average_return: float
    best_trade: float
    worst_trade: float


class PeriodPerformance(BaseModel):
    """Closed-trade results for one calendar month (UTC, by entry)."""

    model_config = ConfigDict(frozen=True)

    period: str = Field(..., description="YYYY-MM")
    start_time: int
    end_time: int
    trades: int
    win_rate: float
    total_return: float
    total_return_percent: float


class BacktestResult(BaseModel):
    """
    Performance of a replay.
    Returned by: Backtest Service
    Consumed by: Presentation layer
    """

    model_config = ConfigDict(frozen=True)

    config: BacktestConfig
    trades: list[BacktestTrade] = Field(default_factory=list, description="Closed trades")

    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    open_trades: int = 0
    win_rate: float = 0.0

    initial_capital: float
    final_capital: float
    total_return: float = 0.0
    total_return_percent: float = 0.0
    average_return: float = 0.0
    average_return_percent: float = 0.0

    max_drawdown: float = Field(default=0.0, description="% from peak")
    max_drawdown_usd: float = 0.0
    sharpe_ratio: float = 0.0
    profit_factor: float = 0.0

    average_win: float = 0.0
    average_loss: float = 0.0
    largest_win: float = 0.0
    largest_loss: float = 0.0
    average_hold_hours: float = 0.0

    equity_curve: list[EquityPoint] = Field(default_factory=list)
    drawdown_curve: list[DrawdownPoint] = Field(default_factory=list)
    performance_by_asset: list[AssetPerformance] = Field(default_factory=list)
    performance_by_period: list[PeriodPerformance] = Field(default_factory=list)
