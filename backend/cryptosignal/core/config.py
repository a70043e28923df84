"""
Application Configuration

All settings loaded from environment variables (prefix CRYPTOSIGNAL_).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


# Stablecoins, wrapped tokens and liquid staking derivatives track another
# asset's price and never get their own signal.
DEFAULT_EXCLUDED_ASSET_IDS = [
    # Stablecoins
    "tether",
    "usd-coin",
    "binance-usd",
    "dai",
    "frax",
    "true-usd",
    "paxos-standard",
    "gemini-dollar",
    "usdd",
    "first-digital-usd",
    "fdusd",
    "terrausd",
    "fei-usd",
    "neutrino",
    "usdk",
    "usdx",
    "reserve",
    "origin-dollar",
    "figure-heloc",
    # Wrapped tokens
    "wrapped-bitcoin",
    "weth",
    "wrapped-bnb",
    "coinbase-wrapped-btc",
    # Liquid staking derivatives
    "staked-ether",
    "wrapped-steth",
    "wsteth",
    "rocket-pool-eth",
    "reth",
    "frax-ether",
    "staked-frax-ether",
    "ankr-staked-eth",
    "coinbase-wrapped-staked-eth",
    "lido-dao",
    "wrapped-eeth",
    "wrapped-beacon-eth",
    # Other pegged assets
    "renbtc",
    "sbtc",
    "hbtc",
    "shiba-inu",
]

# Listed on Binance, Bybit and OKX perpetual markets
DEFAULT_MAJOR_SYMBOLS = [
    "BTC", "ETH", "BNB", "SOL", "XRP", "ADA", "DOGE", "AVAX", "MATIC", "DOT",
    "UNI", "LINK", "ATOM", "LTC", "BCH", "NEAR", "APT", "ARB", "OP", "SUI",
    "FIL", "ICP", "VET", "ALGO", "HBAR", "EOS", "AAVE", "MKR", "CRV", "LDO",
    "FTM", "SAND", "MANA", "AXS", "GRT", "THETA", "XTZ", "ETC", "FLOW",
]

# Listed on Hyperliquid
DEFAULT_EXTENDED_SYMBOLS = [
    # Majors
    "BTC", "ETH", "SOL", "BNB", "XRP", "ADA", "DOGE", "AVAX", "DOT", "MATIC",
    "LTC", "BCH", "LINK", "UNI", "ATOM", "XLM", "NEAR", "ALGO", "VET", "ICP",
    "FIL", "HBAR", "APT", "ARB", "OP", "SUI", "SEI", "TIA", "INJ", "FTM",
    "SAND", "MANA", "AXS", "GRT", "EOS", "AAVE", "MKR", "SNX", "CRV", "LDO",
    "RUNE", "KAVA", "ZIL", "ONE", "ENJ", "BAT", "ZRX", "COMP", "YFI", "UMA",
    # Meme/community
    "WIF", "BONK", "PEPE", "FLOKI", "SHIB", "MEME", "BOME", "MEW", "POPCAT",
    "MOTHER", "DADDY", "WEN", "MYRO", "SILLY", "PONKE", "BRETT", "MOG",
    # Privacy
    "XMR", "ZEC", "DASH",
    # DeFi & infrastructure
    "JUP", "RNDR", "PENDLE", "JTO", "PYTH", "WLD", "BLUR", "STRK", "DYM",
    "ALT", "PIXEL", "PORTAL", "MANTA", "SAGA", "OMNI", "BB", "LISTA", "ZK",
    "ZRO", "IO", "NOT", "DOGS", "TON", "CATI", "HMSTR", "EIGEN", "USUAL",
    "MOVE", "VANA", "PENGU", "BIO",
    # Layer 2s
    "IMX", "LRC", "METIS", "BOBA", "CELO", "SKL", "ROSE", "GLMR", "MOVR",
    # Other altcoins
    "OSMO", "JUNO", "SCRT", "LUNA", "LUNC", "USTC", "AKT", "BAND", "OCEAN",
    "FET", "AGIX", "RLC", "NMR", "CTSI", "PERP", "API3", "DODO", "SXP",
    "RAY", "FIDA", "MNGO", "SAMO",
    # Gaming & metaverse
    "GALA", "ALICE", "TLM", "ILV", "YGG", "GHST", "WAXP", "GODS", "SLP",
    "PYR",
]


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CRYPTOSIGNAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "CryptoSignal Engine"
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"

    # Price history
    history_lookback_days: int = 90
    binance_base_url: str = "https://api.binance.com/api/v3"
    quote_asset: str = "USDT"
    http_timeout_seconds: float = 10.0

    # Batch evaluation (1 = sequential)
    max_concurrent_predictions: int = 1

    # Backtest replay window
    backtest_lookback_days: int = 30

    # Tradeable universe
    excluded_asset_ids: list[str] = DEFAULT_EXCLUDED_ASSET_IDS
    major_platform_symbols: list[str] = DEFAULT_MAJOR_SYMBOLS
    extended_platform_symbols: list[str] = DEFAULT_EXTENDED_SYMBOLS


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
