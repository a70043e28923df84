"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators over close prices.
All math is deterministic.

Short input never raises: every calculator returns its documented
default result when the series is below its minimum window.
"""

from typing import Sequence, Union

import numpy as np

from cryptosignal.schemas.indicators import (
    BandPosition,
    BollingerResult,
    CandlestickPattern,
    CandlestickPatternResult,
    Crossover,
    Level,
    LevelStrength,
    LevelType,
    MACDResult,
    OscillatorSignal,
    RSIResult,
    SupportResistance,
    TrendDirection,
    VolumeProfileBucket,
)

PriceSeries = Union[Sequence[float], np.ndarray]


def _as_array(data: PriceSeries) -> np.ndarray:
    return np.asarray(data, dtype=float)


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: PriceSeries, period: int) -> float:
    """
    Simple Moving Average of the last `period` values.

    Uses every available value when fewer than `period` exist.
    Returns 0.0 for an empty series.
    """
    values = _as_array(data)
    if len(values) == 0:
        return 0.0
    if period <= 0 or len(values) < period:
        return float(np.mean(values))
    return float(np.mean(values[-period:]))


def ema_series(data: PriceSeries, period: int) -> np.ndarray:
    """
    Exponential Moving Average at every index.

    Seeded with the SMA of the first `period` values; indexes before the
    seed are NaN. All NaN when the series is shorter than `period`.
    """
    values = _as_array(data)
    result = np.full(len(values), np.nan)
    if period <= 0 or len(values) < period:
        return result

    multiplier = 2 / (period + 1)
    result[period - 1] = np.mean(values[:period])

    for i in range(period, len(values)):
        result[i] = (values[i] - result[i - 1]) * multiplier + result[i - 1]

    return result


def ema(data: PriceSeries, period: int) -> float:
    """
    Exponential Moving Average of the whole series.

    Falls back to the SMA of the whole series when shorter than `period`.
    """
    values = _as_array(data)
    if period <= 0 or len(values) < period:
        return sma(values, len(values))
    return float(ema_series(values, period)[-1])


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def calculate_rsi(prices: PriceSeries, period: int = 14) -> RSIResult:
    """
    Relative Strength Index with Wilder smoothing.

    Default (fewer than period + 1 prices): value 50, neutral signal and trend.
    """
    closes = _as_array(prices)
    if len(closes) < period + 1:
        return RSIResult(
            value=50.0,
            signal=OscillatorSignal.NEUTRAL,
            trend=TrendDirection.NEUTRAL,
        )

    deltas = np.diff(closes)
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    avg_gain = float(np.sum(gains[:period])) / period
    avg_loss = float(np.sum(losses[:period])) / period

    for i in range(period, len(deltas)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period

    # Saturates near 100 instead of dividing by zero
    rs = 100.0 if avg_loss == 0 else avg_gain / avg_loss
    value = float(100 - (100 / (1 + rs)))

    if value > 70:
        signal = OscillatorSignal.OVERBOUGHT
    elif value < 30:
        signal = OscillatorSignal.OVERSOLD
    else:
        signal = OscillatorSignal.NEUTRAL

    last_delta = deltas[-1]
    if value > 50 and last_delta > 0:
        trend = TrendDirection.BULLISH
    elif value < 50 and last_delta < 0:
        trend = TrendDirection.BEARISH
    else:
        trend = TrendDirection.NEUTRAL

    return RSIResult(value=value, signal=signal, trend=trend)


def macd_history(
    prices: PriceSeries, fast_period: int = 12, slow_period: int = 26
) -> np.ndarray:
    """
    MACD line value for every prefix of the series of length >= slow_period.

    EMA recurrences are prefix-stable, so the value at each index equals
    recomputing EMA(fast) - EMA(slow) on that prefix.
    """
    closes = _as_array(prices)
    if len(closes) < slow_period:
        return np.array([])
    fast = ema_series(closes, fast_period)
    slow = ema_series(closes, slow_period)
    return fast[slow_period - 1:] - slow[slow_period - 1:]


def calculate_macd(
    prices: PriceSeries,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MACDResult:
    """
    MACD (Moving Average Convergence Divergence).

    Signal line is the EMA of the MACD history. Crossover compares the
    previous (MACD, signal) pair against the latest one.

    Default (fewer than slow_period prices): all zeros, neutral, no crossover.
    """
    closes = _as_array(prices)
    if len(closes) < slow_period:
        return MACDResult(
            macd=0.0,
            signal=0.0,
            histogram=0.0,
            trend=TrendDirection.NEUTRAL,
            crossover=Crossover.NONE,
        )

    history = macd_history(closes, fast_period, slow_period)
    macd_line = float(history[-1])
    signal_line = ema(history, signal_period)
    histogram = macd_line - signal_line

    if macd_line > signal_line and histogram > 0:
        trend = TrendDirection.BULLISH
    elif macd_line < signal_line and histogram < 0:
        trend = TrendDirection.BEARISH
    else:
        trend = TrendDirection.NEUTRAL

    crossover = Crossover.NONE
    if len(history) >= 2:
        prev_macd = float(history[-2])
        prev_signal = ema(history[:-1], signal_period)

        if prev_macd <= prev_signal and macd_line > signal_line:
            crossover = Crossover.BULLISH
        elif prev_macd >= prev_signal and macd_line < signal_line:
            crossover = Crossover.BEARISH

    return MACDResult(
        macd=macd_line,
        signal=signal_line,
        histogram=histogram,
        trend=trend,
        crossover=crossover,
    )


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def calculate_bollinger_bands(
    prices: PriceSeries, period: int = 20, std_dev: float = 2.0
) -> BollingerResult:
    """
    Bollinger Bands with population standard deviation.

    Default (fewer than period prices): a +/-5% band around the last price,
    bandwidth 10, middle position, neutral signal. An empty series centres
    the band on 0.
    """
    closes = _as_array(prices)
    current_price = float(closes[-1]) if len(closes) > 0 else 0.0

    if len(closes) < period:
        return BollingerResult(
            upper=current_price * 1.05,
            middle=current_price,
            lower=current_price * 0.95,
            bandwidth=10.0,
            position=BandPosition.MIDDLE,
            signal=OscillatorSignal.NEUTRAL,
        )

    middle = sma(closes, period)
    deviation = float(np.std(closes[-period:]))

    upper = middle + std_dev * deviation
    lower = middle - std_dev * deviation
    bandwidth = (upper - lower) / middle * 100

    upper_threshold = upper - (upper - middle) * 0.2
    lower_threshold = lower + (middle - lower) * 0.2

    if current_price > upper:
        position = BandPosition.ABOVE_UPPER
    elif current_price > upper_threshold:
        position = BandPosition.NEAR_UPPER
    elif current_price < lower:
        position = BandPosition.BELOW_LOWER
    elif current_price < lower_threshold:
        position = BandPosition.NEAR_LOWER
    else:
        position = BandPosition.MIDDLE

    if position in (BandPosition.ABOVE_UPPER, BandPosition.NEAR_UPPER):
        signal = OscillatorSignal.OVERBOUGHT
    elif position in (BandPosition.BELOW_LOWER, BandPosition.NEAR_LOWER):
        signal = OscillatorSignal.OVERSOLD
    else:
        signal = OscillatorSignal.NEUTRAL

    return BollingerResult(
        upper=upper,
        middle=middle,
        lower=lower,
        bandwidth=bandwidth,
        position=position,
        signal=signal,
    )


# =============================================================================
# SUPPORT/RESISTANCE
# =============================================================================


def _cluster(levels: list[dict], price: float, threshold: float) -> None:
    """Merge price into the first level within threshold, or start a new one."""
    for level in levels:
        if abs(level["price"] - price) / price < threshold:
            level["touches"] += 1
            touches = level["touches"]
            level["price"] = (level["price"] * (touches - 1) + price) / touches
            return
    levels.append({"price": price, "touches": 1})


def _to_level(level: dict, level_type: LevelType) -> Level:
    return Level(
        price=level["price"],
        type=level_type,
        strength=LevelStrength.from_touches(level["touches"]),
        touches=level["touches"],
    )


def detect_support_resistance(
    prices: PriceSeries, threshold: float = 0.02, max_levels: int = 3
) -> SupportResistance:
    """
    Find support and resistance levels using local minima/maxima.

    Extrema within `threshold` (relative) of an existing level are clustered
    into it. Only levels within 20% of the current price are kept, nearest
    first, at most `max_levels` per side.

    Default (fewer than 10 prices): no levels.
    """
    closes = _as_array(prices)
    if len(closes) < 10:
        return SupportResistance()

    current_price = float(closes[-1])
    supports: list[dict] = []
    resistances: list[dict] = []

    for i in range(2, len(closes) - 2):
        price = float(closes[i])
        neighbours = (closes[i - 2], closes[i - 1], closes[i + 1], closes[i + 2])

        if all(price < n for n in neighbours):
            _cluster(supports, price, threshold)

        if all(price > n for n in neighbours):
            _cluster(resistances, price, threshold)

    relevant_supports = sorted(
        (s for s in supports if current_price * 0.8 < s["price"] < current_price),
        key=lambda s: s["price"],
        reverse=True,
    )[:max_levels]

    relevant_resistances = sorted(
        (r for r in resistances if current_price < r["price"] < current_price * 1.2),
        key=lambda r: r["price"],
    )[:max_levels]

    return SupportResistance(
        supports=[_to_level(s, LevelType.SUPPORT) for s in relevant_supports],
        resistances=[_to_level(r, LevelType.RESISTANCE) for r in relevant_resistances],
    )


# =============================================================================
# PATTERNS
# =============================================================================


def identify_candlestick_pattern(prices: PriceSeries) -> CandlestickPatternResult:
    """
    Classify the last four closes into a candlestick-style pattern.

    Only close prices are available, so each "candle" is the move between
    two consecutive closes. Rules are checked in priority order.

    Default (fewer than 4 prices): pattern none, confidence 0.
    """
    closes = _as_array(prices)
    if len(closes) < 4:
        return CandlestickPatternResult(
            pattern=CandlestickPattern.NONE,
            signal=TrendDirection.NEUTRAL,
            confidence=0,
            description="Insufficient data for pattern recognition",
        )

    p0, p1, p2, p3 = (float(p) for p in closes[-4:])
    change1 = p1 - p0
    change2 = p2 - p1
    change3 = p3 - p2

    if abs(change3) / p2 < 0.001:
        return CandlestickPatternResult(
            pattern=CandlestickPattern.DOJI,
            signal=TrendDirection.NEUTRAL,
            confidence=60,
            description="Doji pattern detected - indecision in the market",
        )

    if change2 < 0 and change3 > 0 and abs(change3) > abs(change2) * 1.5:
        return CandlestickPatternResult(
            pattern=CandlestickPattern.ENGULFING_BULLISH,
            signal=TrendDirection.BULLISH,
            confidence=75,
            description="Bullish engulfing pattern - strong reversal signal",
        )

    if change2 > 0 and change3 < 0 and abs(change3) > abs(change2) * 1.5:
        return CandlestickPatternResult(
            pattern=CandlestickPattern.ENGULFING_BEARISH,
            signal=TrendDirection.BEARISH,
            confidence=75,
            description="Bearish engulfing pattern - strong reversal signal",
        )

    if change1 < 0 and abs(change2) < abs(change1) * 0.5 and change3 > 0:
        return CandlestickPatternResult(
            pattern=CandlestickPattern.MORNING_STAR,
            signal=TrendDirection.BULLISH,
            confidence=70,
            description="Morning star pattern - bullish reversal",
        )

    if change1 > 0 and abs(change2) < abs(change1) * 0.5 and change3 < 0:
        return CandlestickPatternResult(
            pattern=CandlestickPattern.EVENING_STAR,
            signal=TrendDirection.BEARISH,
            confidence=70,
            description="Evening star pattern - bearish reversal",
        )

    if (
        change1 > p0 * 0.01
        and change2 > p1 * 0.01
        and change3 > p2 * 0.01
    ):
        return CandlestickPatternResult(
            pattern=CandlestickPattern.THREE_WHITE_SOLDIERS,
            signal=TrendDirection.BULLISH,
            confidence=80,
            description="Three white soldiers - strong bullish continuation",
        )

    if (
        change1 < -p0 * 0.01
        and change2 < -p1 * 0.01
        and change3 < -p2 * 0.01
    ):
        return CandlestickPatternResult(
            pattern=CandlestickPattern.THREE_BLACK_CROWS,
            signal=TrendDirection.BEARISH,
            confidence=80,
            description="Three black crows - strong bearish continuation",
        )

    return CandlestickPatternResult(
        pattern=CandlestickPattern.NONE,
        signal=TrendDirection.NEUTRAL,
        confidence=0,
        description="No significant candlestick pattern detected",
    )


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def calculate_volume_profile(
    prices_with_volume: Sequence[tuple[float, float]], buckets: int = 20
) -> list[VolumeProfileBucket]:
    """
    Volume distribution across equal-width price buckets.

    Returns non-empty buckets sorted by volume, largest first.
    Empty input (or zero total volume) gives an empty profile.
    """
    if not prices_with_volume or buckets <= 0:
        return []

    data = np.asarray(prices_with_volume, dtype=float)
    prices = data[:, 0]
    volumes = data[:, 1]

    min_price = float(np.min(prices))
    max_price = float(np.max(prices))
    step = (max_price - min_price) / buckets

    if step > 0:
        indexes = np.floor((prices - min_price) / step).astype(int)
        indexes = np.minimum(indexes, buckets - 1)
    else:
        # Flat series: everything lands in the first bucket
        indexes = np.zeros(len(prices), dtype=int)

    bucket_volumes = np.bincount(indexes, weights=volumes, minlength=buckets)
    total_volume = float(np.sum(bucket_volumes))
    if total_volume <= 0:
        return []

    profile = [
        VolumeProfileBucket(
            price_level=min_price + step * i + step / 2,
            volume=float(volume),
            percentage=float(volume) / total_volume * 100,
        )
        for i, volume in enumerate(bucket_volumes)
        if volume > 0
    ]
    return sorted(profile, key=lambda b: b.volume, reverse=True)
