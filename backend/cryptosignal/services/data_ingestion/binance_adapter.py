"""
Binance Price History Adapter

Close-price history from Binance public klines. No API key required.

Binance API Documentation: https://binance-docs.github.io/apidocs/spot/en/
"""

import logging
from typing import Optional

import aiohttp

from cryptosignal.core.config import settings
from cryptosignal.schemas.market import PriceHistory, PriceSample
from cryptosignal.services.base import ExternalAPIError
from cryptosignal.services.data_ingestion.interface import PriceHistoryProvider

logger = logging.getLogger(__name__)


# Market-data asset ids whose base symbol is not simply the upper-cased id
ASSET_SYMBOL_MAP = {
    "bitcoin": "BTC",
    "ethereum": "ETH",
    "binancecoin": "BNB",
    "ripple": "XRP",
    "cardano": "ADA",
    "solana": "SOL",
    "polkadot": "DOT",
    "dogecoin": "DOGE",
    "polygon": "MATIC",
    "tron": "TRX",
    "avalanche-2": "AVAX",
    "chainlink": "LINK",
    "uniswap": "UNI",
    "litecoin": "LTC",
    "cosmos": "ATOM",
    "monero": "XMR",
    "stellar": "XLM",
    "bitcoin-cash": "BCH",
    "ethereum-classic": "ETC",
    "algorand": "ALGO",
    "filecoin": "FIL",
    "near": "NEAR",
    "vechain": "VET",
    "hedera-hashgraph": "HBAR",
    "internet-computer": "ICP",
    "aptos": "APT",
    "arbitrum": "ARB",
    "optimism": "OP",
    "the-open-network": "TON",
    "sui": "SUI",
    "pepe": "PEPE",
    "immutable-x": "IMX",
    "aave": "AAVE",
    "maker": "MKR",
    "eos": "EOS",
    "the-graph": "GRT",
    "tezos": "XTZ",
    "decentraland": "MANA",
    "the-sandbox": "SAND",
    "axie-infinity": "AXS",
    "zcash": "ZEC",
    "fantom": "FTM",
    "kucoin-shares": "KCS",
    "neo": "NEO",
    "curve-dao-token": "CRV",
    "gala": "GALA",
    "enjincoin": "ENJ",
}

# Kline array layout: [open time, open, high, low, close, volume, ...]
KLINE_OPEN_TIME = 0
KLINE_CLOSE = 4
KLINE_VOLUME = 5


def kline_params(lookback_days: int) -> tuple[str, int]:
    """Kline (interval, limit) covering a lookback window."""
    if lookback_days == 1:
        return "15m", 96
    if lookback_days <= 7:
        return "1h", lookback_days * 24
    if lookback_days <= 30:
        return "4h", lookback_days * 6
    if lookback_days <= 90:
        return "1d", lookback_days
    return "1d", 365


class BinancePriceHistoryProvider(PriceHistoryProvider):
    """
    Binance klines client.

    One aiohttp session per provider, created lazily.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        quote_asset: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.base_url = (base_url or settings.binance_base_url).rstrip("/")
        self.quote_asset = (quote_asset or settings.quote_asset).upper()
        self.timeout_seconds = timeout_seconds or settings.http_timeout_seconds
        self._session = session

    @property
    def name(self) -> str:
        return "BinancePriceHistoryProvider"

    def get_pair(self, asset_id: str) -> str:
        """Trading pair for an asset id, e.g. bitcoin -> BTCUSDT."""
        base = ASSET_SYMBOL_MAP.get(asset_id, asset_id.upper())
        return f"{base}{self.quote_asset}"

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"Accept": "application/json"},
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def fetch_price_history(self, asset_id: str, lookback_days: int) -> PriceHistory:
        pair = self.get_pair(asset_id)
        interval, limit = kline_params(lookback_days)

        try:
            session = await self._ensure_session()
            async with session.get(
                f"{self.base_url}/klines",
                params={"symbol": pair, "interval": interval, "limit": limit},
            ) as resp:
                if resp.status != 200:
                    error = await resp.text()
                    raise ExternalAPIError(
                        self.name,
                        f"Binance klines error {resp.status} for {pair}",
                        {"status": resp.status, "pair": pair, "body": error},
                    )
                klines = await resp.json()
        except aiohttp.ClientError as e:
            raise ExternalAPIError(
                self.name, f"Binance request failed for {pair}: {e}", {"pair": pair}
            ) from e

        prices = [
            PriceSample(
                timestamp=int(kline[KLINE_OPEN_TIME]),
                price=float(kline[KLINE_CLOSE]),
                volume=float(kline[KLINE_VOLUME]),
            )
            for kline in klines
        ]

        logger.debug(f"Fetched {len(prices)} {interval} klines for {pair}")
        return PriceHistory(asset_id=asset_id, prices=prices)
