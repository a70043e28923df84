"""
Basic Indicator Calculations

Coarse momentum/trend/volatility/strength metrics computed from an
asset's 24h/7d summary statistics. No price history needed.
"""

import math

from cryptosignal.schemas.market import AssetSnapshot
from cryptosignal.schemas.indicators import (
    BasicIndicators,
    TrendDirection,
    VolumeSignal,
)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _trend(change: float, threshold: float) -> TrendDirection:
    if change > threshold:
        return TrendDirection.BULLISH
    if change < -threshold:
        return TrendDirection.BEARISH
    return TrendDirection.NEUTRAL


def calculate_basic_indicators(snapshot: AssetSnapshot) -> BasicIndicators:
    """
    Derive BasicIndicators from an AssetSnapshot.

    - momentum: 24h change weighted 2.5x against 7d change, in [-100, 100]
    - trends: +/-0.5% (24h) and +/-1% (7d) thresholds
    - volatility: 24h high-low range as % of current price
    - volume_signal: 24h volume / market cap above 0.15 is high, below 0.05 low
    - strength: 50 +/- capped 24h (+/-30) and 7d (+/-20) contributions
    """
    price_24h = snapshot.price_change_percentage_24h or 0.0
    price_7d = snapshot.price_change_percentage_7d or 0.0

    momentum = _clamp((price_24h * 2.5 + price_7d) / 3.5, -100, 100)

    price_range = snapshot.high_24h - snapshot.low_24h
    volatility = _clamp(price_range / snapshot.current_price * 100, 0, 100)

    if snapshot.market_cap > 0:
        volume_ratio = snapshot.total_volume / snapshot.market_cap
    elif snapshot.total_volume > 0:
        volume_ratio = math.inf
    else:
        # No volume and no cap: ratio undefined
        volume_ratio = math.nan
    if volume_ratio > 0.15:
        volume_signal = VolumeSignal.HIGH
    elif volume_ratio < 0.05:
        volume_signal = VolumeSignal.LOW
    else:
        volume_signal = VolumeSignal.NORMAL

    price_strength = _clamp(price_24h * 3, -30, 30)
    trend_strength = _clamp(price_7d * 2, -20, 20)
    strength = _clamp(50 + price_strength + trend_strength, 0, 100)

    return BasicIndicators(
        trend_24h=_trend(price_24h, 0.5),
        trend_7d=_trend(price_7d, 1.0),
        momentum=momentum,
        volume_signal=volume_signal,
        volatility=volatility,
        strength=strength,
    )
