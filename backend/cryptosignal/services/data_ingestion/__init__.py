"""
Price History Ingestion

CONTRACT:
    Input:  asset id + lookback days
    Output: PriceHistory

RESPONSIBILITIES:
    - Fetch close prices (and volumes) from Binance klines
    - Map market-data asset ids to trading pairs
    - Serve seeded mock histories for development and tests

NO ANALYSIS HERE - just fetch and normalize.
"""

from cryptosignal.services.data_ingestion.interface import PriceHistoryProvider
from cryptosignal.services.data_ingestion.binance_adapter import (
    BinancePriceHistoryProvider,
    kline_params,
)
from cryptosignal.services.data_ingestion.mock_data import (
    MockPriceHistoryProvider,
    generate_mock_history,
)

__all__ = [
    "PriceHistoryProvider",
    "BinancePriceHistoryProvider",
    "kline_params",
    "MockPriceHistoryProvider",
    "generate_mock_history",
]
