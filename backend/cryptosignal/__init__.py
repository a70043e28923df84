"""
CryptoSignal Engine

Derives LONG / SHORT / NEUTRAL trade calls for crypto assets from
price history and 24h/7d market statistics.
"""

__version__ = "0.1.0"
