"""
Signal Scoring

Weighted bullish/bearish vote over basic and enhanced indicators, and the
direction, sentiment and confidence derived from it.

The weights are hand-tuned thresholds; every rule adds a fixed number of
points to one side.
"""

import math
from typing import Optional

from cryptosignal.schemas.indicators import (
    BandPosition,
    BasicIndicators,
    Crossover,
    EnhancedIndicators,
    LevelStrength,
    OscillatorSignal,
    TrendDirection,
    VolumeSignal,
)
from cryptosignal.schemas.prediction import Direction, Sentiment, SignalScore

# Score difference needed for a call without falling back to momentum
DECISION_THRESHOLD = 3
MOMENTUM_FALLBACK = 2


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (banker's rounding is not wanted)."""
    return int(math.floor(value + 0.5))


def score_signals(
    indicators: BasicIndicators,
    enhanced: Optional[EnhancedIndicators],
) -> SignalScore:
    """Accumulate bullish and bearish points from every indicator."""
    bullish = 0
    bearish = 0

    momentum = indicators.momentum
    trend_24h = indicators.trend_24h
    trend_7d = indicators.trend_7d

    # Price momentum
    if momentum > 5 and trend_24h == TrendDirection.BULLISH:
        bullish += 2
    if momentum > 10 and trend_7d == TrendDirection.BULLISH:
        bullish += 2
    if momentum < -5 and trend_24h == TrendDirection.BEARISH:
        bearish += 2
    if momentum < -10 and trend_7d == TrendDirection.BEARISH:
        bearish += 2

    # Volume confirmation
    if indicators.volume_signal == VolumeSignal.HIGH and indicators.strength > 55:
        bullish += 1
    if indicators.volume_signal == VolumeSignal.HIGH and indicators.strength < 45:
        bearish += 1

    if enhanced is None:
        return SignalScore(bullish=bullish, bearish=bearish)

    # RSI
    rsi = enhanced.rsi
    if rsi.signal == OscillatorSignal.OVERSOLD and rsi.trend == TrendDirection.BULLISH:
        bullish += 3
    elif rsi.signal == OscillatorSignal.OVERSOLD:
        bullish += 2
    elif rsi.signal == OscillatorSignal.OVERBOUGHT and rsi.trend == TrendDirection.BEARISH:
        bearish += 3
    elif rsi.signal == OscillatorSignal.OVERBOUGHT:
        bearish += 2

    if rsi.value > 50 and rsi.trend == TrendDirection.BULLISH:
        bullish += 1
    if rsi.value < 50 and rsi.trend == TrendDirection.BEARISH:
        bearish += 1

    # MACD
    macd = enhanced.macd
    if macd.crossover == Crossover.BULLISH:
        bullish += 3
    elif macd.crossover == Crossover.BEARISH:
        bearish += 3

    if macd.trend == TrendDirection.BULLISH and macd.histogram > 0:
        bullish += 2
    elif macd.trend == TrendDirection.BEARISH and macd.histogram < 0:
        bearish += 2

    # Bollinger Bands
    bb = enhanced.bollinger_bands
    if bb.signal == OscillatorSignal.OVERSOLD or bb.position == BandPosition.BELOW_LOWER:
        bullish += 2
    elif bb.signal == OscillatorSignal.OVERBOUGHT or bb.position == BandPosition.ABOVE_UPPER:
        bearish += 2

    # Squeeze near a band
    if bb.bandwidth < 5 and bb.position == BandPosition.NEAR_LOWER:
        bullish += 1
    elif bb.bandwidth < 5 and bb.position == BandPosition.NEAR_UPPER:
        bearish += 1

    # Support/resistance
    has_strong_support = any(
        s.strength == LevelStrength.STRONG for s in enhanced.support_levels
    )
    has_strong_resistance = any(
        r.strength == LevelStrength.STRONG for r in enhanced.resistance_levels
    )
    if has_strong_support and trend_24h == TrendDirection.BULLISH:
        bullish += 2
    if has_strong_resistance and trend_24h == TrendDirection.BEARISH:
        bearish += 2

    return SignalScore(bullish=bullish, bearish=bearish)


def decide_direction(score: SignalScore, momentum: float) -> Direction:
    """Direction from the score difference, falling back to raw momentum."""
    if score.difference >= DECISION_THRESHOLD:
        return Direction.LONG
    if score.difference <= -DECISION_THRESHOLD:
        return Direction.SHORT

    if momentum > MOMENTUM_FALLBACK:
        return Direction.LONG
    if momentum < -MOMENTUM_FALLBACK:
        return Direction.SHORT

    return Direction.NEUTRAL


def determine_direction(
    indicators: BasicIndicators,
    enhanced: Optional[EnhancedIndicators],
) -> Direction:
    """Score every indicator and make the LONG / SHORT / NEUTRAL call."""
    return decide_direction(score_signals(indicators, enhanced), indicators.momentum)


def calculate_sentiment(
    indicators: BasicIndicators,
    direction: Direction,
    enhanced: Optional[EnhancedIndicators],
) -> Sentiment:
    """Map direction plus indicator bonuses onto the five sentiment levels."""
    momentum = indicators.momentum
    strength = indicators.strength

    score = 0.0
    if direction == Direction.LONG:
        score = (momentum + strength) / 2
    elif direction == Direction.SHORT:
        score = -(abs(momentum) + (100 - strength)) / 2

    if enhanced is not None:
        if enhanced.rsi.signal == OscillatorSignal.OVERSOLD:
            score += 10
        if enhanced.rsi.signal == OscillatorSignal.OVERBOUGHT:
            score -= 10

        if enhanced.macd.crossover == Crossover.BULLISH:
            score += 15
        if enhanced.macd.crossover == Crossover.BEARISH:
            score -= 15

        if enhanced.bollinger_bands.signal == OscillatorSignal.OVERSOLD:
            score += 8
        if enhanced.bollinger_bands.signal == OscillatorSignal.OVERBOUGHT:
            score -= 8

    if direction == Direction.LONG:
        return Sentiment.EXTREME_BULLISH if score > 60 else Sentiment.BULLISH
    if direction == Direction.SHORT:
        return Sentiment.EXTREME_BEARISH if score < -60 else Sentiment.BEARISH
    return Sentiment.NEUTRAL


def calculate_confidence(
    indicators: BasicIndicators,
    enhanced: Optional[EnhancedIndicators],
) -> int:
    """Confidence 30-100 from momentum, volume and technical confirmations."""
    momentum_score = abs(indicators.momentum) * 1.8

    if indicators.volume_signal == VolumeSignal.HIGH:
        volume_bonus = 10
    elif indicators.volume_signal == VolumeSignal.LOW:
        volume_bonus = -5
    else:
        volume_bonus = 0

    tech_bonus = 0
    if enhanced is not None:
        if enhanced.rsi.signal in (OscillatorSignal.OVERSOLD, OscillatorSignal.OVERBOUGHT):
            tech_bonus += 10
        if enhanced.macd.crossover != Crossover.NONE:
            tech_bonus += 15
        if enhanced.bollinger_bands.signal != OscillatorSignal.NEUTRAL:
            tech_bonus += 8

    raw = 40 + momentum_score + volume_bonus + tech_bonus
    return round_half_up(min(100, max(30, raw)))
