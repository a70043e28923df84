"""
Backtest Service

CONTRACT:
    Input:  PredictionRecord(s) + BacktestConfig
    Output: BacktestResult

RESPONSIBILITIES:
    - Turn tracked calls into sized trades
    - Replay each trade on realised prices to its stop, target or time limit
    - Win rate, drawdown, Sharpe ratio, profit factor
    - Equity curve, per-asset and per-month breakdowns

Network I/O only through the provider.
"""

from cryptosignal.services.backtest.interface import BacktestInput, BacktestServiceInterface
from cryptosignal.services.backtest.service import BacktestService, get_backtest_service
from cryptosignal.services.backtest.engine import (
    build_trades,
    simulate_trade,
    calculate_metrics,
    sharpe_ratio,
)

__all__ = [
    "BacktestInput",
    "BacktestServiceInterface",
    "BacktestService",
    "get_backtest_service",
    "build_trades",
    "simulate_trade",
    "calculate_metrics",
    "sharpe_ratio",
]
