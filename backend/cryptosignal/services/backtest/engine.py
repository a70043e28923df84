"""
Backtesting Engine

Simulates tracked calls on historical prices and calculates performance metrics.
Pure functions: the service supplies the price histories.
"""

import math
from datetime import datetime, timezone
from typing import Optional

import numpy as np

from cryptosignal.schemas.backtest import (
    HOUR_MS,
    AssetPerformance,
    BacktestConfig,
    BacktestResult,
    BacktestTrade,
    DrawdownPoint,
    EquityPoint,
    ExitReason,
    PeriodPerformance,
)
from cryptosignal.schemas.evaluation import PredictionRecord
from cryptosignal.schemas.market import PriceSample
from cryptosignal.schemas.prediction import Direction


def build_trades(records: list[PredictionRecord], config: BacktestConfig) -> list[BacktestTrade]:
    """Open a trade for every directional record the config admits."""
    trades = []
    for record in records:
        if record.direction == Direction.NEUTRAL:
            continue
        if record.direction == Direction.SHORT and not config.include_shorts:
            continue
        if record.confidence < config.min_confidence:
            continue
        trades.append(BacktestTrade.from_record(record, config))
    return trades


def _close(
    trade: BacktestTrade,
    exit_price: float,
    exit_time: int,
    reason: ExitReason,
) -> BacktestTrade:
    if trade.direction == Direction.LONG:
        move = exit_price - trade.entry_price
    else:
        move = trade.entry_price - exit_price

    return trade.model_copy(update={
        "exit_time": exit_time,
        "exit_price": exit_price,
        "profit_loss": move * trade.quantity,
        "profit_loss_percent": move / trade.entry_price * 100 * trade.leverage,
        "exit_reason": reason,
    })


def simulate_trade(
    trade: BacktestTrade,
    prices: list[PriceSample],
    max_hold_hours: float = 48.0,
) -> BacktestTrade:
    """
    Walk the history after entry until the trade exits.

    Every sample after the entry sample is checked for the stop, then the
    target, then the holding limit. Stop and target exits fill at the
    level itself; the holding limit fills at the sample's price. A trade
    whose entry lies past the history, or that never exits, comes back
    open and unchanged. Prices must be in time order.
    """
    entry_index = next(
        (i for i, sample in enumerate(prices) if sample.timestamp >= trade.entry_time), None
    )
    if entry_index is None:
        return trade

    is_long = trade.direction == Direction.LONG
    max_hold_ms = max_hold_hours * HOUR_MS

    for sample in prices[entry_index + 1:]:
        price = sample.price

        stopped = price <= trade.stop_loss if is_long else price >= trade.stop_loss
        if stopped:
            return _close(trade, trade.stop_loss, sample.timestamp, ExitReason.STOP_LOSS)

        target_hit = price >= trade.take_profit if is_long else price <= trade.take_profit
        if target_hit:
            return _close(trade, trade.take_profit, sample.timestamp, ExitReason.TAKE_PROFIT)

        if sample.timestamp - trade.entry_time > max_hold_ms:
            return _close(trade, price, sample.timestamp, ExitReason.TIME_LIMIT)

    return trade


# =============================================================================
# METRICS
# =============================================================================


def _mean(values: list[float]) -> float:
    return float(np.mean(values)) if values else 0.0


def _win_rate(trades: list[BacktestTrade]) -> float:
    if not trades:
        return 0.0
    return sum(1 for t in trades if t.profit_loss > 0) / len(trades) * 100


def sharpe_ratio(returns: list[float]) -> float:
    """Per-trade mean return over its population deviation (no annualisation)."""
    if not returns:
        return 0.0
    values = np.asarray(returns, dtype=float)
    variance = float(np.var(values))
    # Identical returns use a unit deviation
    std = math.sqrt(variance) if variance > 0 else 1.0
    return float(np.mean(values)) / std


def _curves(
    completed: list[BacktestTrade],
    initial_capital: float,
) -> tuple[list[EquityPoint], list[DrawdownPoint], float, float]:
    """Equity and drawdown after each exit, plus max drawdown (% and USD)."""
    equity_curve = []
    drawdown_curve = []
    peak = initial_capital
    capital = initial_capital
    max_drawdown = 0.0
    max_drawdown_usd = 0.0

    for trade in completed:
        capital += trade.profit_loss
        peak = max(peak, capital)
        drawdown = (peak - capital) / peak * 100

        if drawdown > max_drawdown:
            max_drawdown = drawdown
            max_drawdown_usd = peak - capital

        equity_curve.append(
            EquityPoint(timestamp=trade.exit_time, equity=capital, drawdown=drawdown)
        )
        drawdown_curve.append(
            DrawdownPoint(timestamp=trade.exit_time, drawdown=drawdown, peak=peak, valley=capital)
        )

    return equity_curve, drawdown_curve, max_drawdown, max_drawdown_usd


def _group(trades: list[BacktestTrade], key) -> dict:
    groups: dict = {}
    for trade in trades:
        groups.setdefault(key(trade), []).append(trade)
    return groups


def _asset_performance(completed: list[BacktestTrade]) -> list[AssetPerformance]:
    performance = []
    for asset_id, trades in _group(completed, lambda t: t.asset_id).items():
        pnls = [t.profit_loss for t in trades]
        performance.append(AssetPerformance(
            asset_id=asset_id,
            asset_name=trades[0].asset_name,
            asset_symbol=trades[0].asset_symbol,
            total_trades=len(trades),
            win_rate=_win_rate(trades),
            total_return=sum(pnls),
            total_return_percent=sum(t.profit_loss_percent for t in trades),
            average_return=sum(pnls) / len(trades),
            best_trade=max(pnls),
            worst_trade=min(pnls),
        ))
    return performance


def _entry_month(trade: BacktestTrade) -> datetime:
    entry = datetime.fromtimestamp(trade.entry_time / 1000, tz=timezone.utc)
    return entry.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def _period_performance(completed: list[BacktestTrade]) -> list[PeriodPerformance]:
    performance = []
    for start, trades in _group(completed, _entry_month).items():
        if start.month == 12:
            next_start = start.replace(year=start.year + 1, month=1)
        else:
            next_start = start.replace(month=start.month + 1)

        performance.append(PeriodPerformance(
            period=start.strftime("%Y-%m"),
            start_time=int(start.timestamp() * 1000),
            end_time=int(next_start.timestamp() * 1000) - 1,
            trades=len(trades),
            win_rate=_win_rate(trades),
            total_return=sum(t.profit_loss for t in trades),
            total_return_percent=sum(t.profit_loss_percent for t in trades),
        ))
    return performance


def calculate_metrics(
    trades: list[BacktestTrade],
    config: Optional[BacktestConfig] = None,
) -> BacktestResult:
    """
    Performance metrics over the closed trades, in exit-time order.

    A trade with zero profit counts as a loss. Profit factor is 0 when
    nothing was lost. Open trades are only counted.
    """
    if config is None:
        config = BacktestConfig()

    completed = sorted((t for t in trades if not t.is_open), key=lambda t: t.exit_time)
    pnls = [t.profit_loss for t in completed]
    wins = [p for p in pnls if p > 0]
    losses = [p for p in pnls if p <= 0]

    total_return = sum(pnls)
    gross_loss = abs(sum(losses))
    equity_curve, drawdown_curve, max_drawdown, max_drawdown_usd = _curves(
        completed, config.initial_capital
    )

    return BacktestResult(
        config=config,
        trades=completed,
        total_trades=len(completed),
        winning_trades=len(wins),
        losing_trades=len(losses),
        open_trades=len(trades) - len(completed),
        win_rate=_win_rate(completed),
        initial_capital=config.initial_capital,
        final_capital=config.initial_capital + total_return,
        total_return=total_return,
        total_return_percent=total_return / config.initial_capital * 100,
        average_return=_mean(pnls),
        average_return_percent=_mean([t.profit_loss_percent for t in completed]),
        max_drawdown=max_drawdown,
        max_drawdown_usd=max_drawdown_usd,
        sharpe_ratio=sharpe_ratio([t.profit_loss_percent / 100 for t in completed]),
        profit_factor=sum(wins) / gross_loss if gross_loss > 0 else 0.0,
        average_win=_mean(wins),
        average_loss=_mean(losses),
        largest_win=max(wins) if wins else 0.0,
        largest_loss=min(losses) if losses else 0.0,
        average_hold_hours=_mean([t.hold_hours for t in completed]),
        equity_curve=equity_curve,
        drawdown_curve=drawdown_curve,
        performance_by_asset=_asset_performance(completed),
        performance_by_period=_period_performance(completed),
    )
