"""
Prediction Narrative

Human-readable rationale lines and the one-paragraph analysis summary.
"""

from typing import Optional

from cryptosignal.schemas.market import AssetSnapshot
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
from cryptosignal.schemas.prediction import Direction, PredictionReason, ReasonImpact


def _reason(category: str, text: str, impact: ReasonImpact) -> PredictionReason:
    return PredictionReason(category=category, text=text, impact=impact)


def _rsi_reason(enhanced: EnhancedIndicators) -> Optional[PredictionReason]:
    rsi = enhanced.rsi
    if rsi.signal == OscillatorSignal.OVERSOLD:
        return _reason(
            "RSI Signal",
            f"RSI at {rsi.value:.1f} indicates oversold conditions - potential bounce",
            ReasonImpact.POSITIVE,
        )
    if rsi.signal == OscillatorSignal.OVERBOUGHT:
        return _reason(
            "RSI Signal",
            f"RSI at {rsi.value:.1f} indicates overbought conditions - potential correction",
            ReasonImpact.NEGATIVE,
        )
    if rsi.value > 50 and rsi.trend == TrendDirection.BULLISH:
        return _reason(
            "RSI Signal", f"RSI at {rsi.value:.1f} with bullish momentum", ReasonImpact.POSITIVE
        )
    if rsi.value < 50 and rsi.trend == TrendDirection.BEARISH:
        return _reason(
            "RSI Signal", f"RSI at {rsi.value:.1f} with bearish momentum", ReasonImpact.NEGATIVE
        )
    return None


def _macd_reason(enhanced: EnhancedIndicators) -> Optional[PredictionReason]:
    macd = enhanced.macd
    if macd.crossover == Crossover.BULLISH:
        return _reason(
            "MACD Signal",
            "Bullish MACD crossover detected - strong momentum shift",
            ReasonImpact.POSITIVE,
        )
    if macd.crossover == Crossover.BEARISH:
        return _reason(
            "MACD Signal",
            "Bearish MACD crossover detected - momentum turning down",
            ReasonImpact.NEGATIVE,
        )
    if macd.trend == TrendDirection.BULLISH and macd.histogram > 0:
        return _reason(
            "MACD Signal",
            f"MACD bullish with positive histogram ({macd.histogram:.2f})",
            ReasonImpact.POSITIVE,
        )
    if macd.trend == TrendDirection.BEARISH and macd.histogram < 0:
        return _reason(
            "MACD Signal",
            f"MACD bearish with negative histogram ({macd.histogram:.2f})",
            ReasonImpact.NEGATIVE,
        )
    return None


def _bollinger_reason(enhanced: EnhancedIndicators) -> Optional[PredictionReason]:
    bb = enhanced.bollinger_bands
    if bb.position == BandPosition.BELOW_LOWER:
        return _reason(
            "Bollinger Bands",
            "Price below lower Bollinger Band - oversold signal",
            ReasonImpact.POSITIVE,
        )
    if bb.position == BandPosition.ABOVE_UPPER:
        return _reason(
            "Bollinger Bands",
            "Price above upper Bollinger Band - overbought signal",
            ReasonImpact.NEGATIVE,
        )
    if bb.bandwidth < 5:
        return _reason(
            "Bollinger Bands",
            f"Bollinger Band squeeze ({bb.bandwidth:.1f}%) - breakout imminent",
            ReasonImpact.NEUTRAL,
        )
    return None


def generate_reasons(
    snapshot: AssetSnapshot,
    indicators: BasicIndicators,
    direction: Direction,
    enhanced: Optional[EnhancedIndicators],
) -> list[PredictionReason]:
    """
    Ordered rationale for a prediction.

    Priority: RSI, MACD, Bollinger, strong support, strong resistance,
    24h momentum, volume, volatility. Each line is emitted only when its
    condition holds.
    """
    reasons: list[PredictionReason] = []

    if enhanced is not None:
        for build in (_rsi_reason, _macd_reason, _bollinger_reason):
            reason = build(enhanced)
            if reason is not None:
                reasons.append(reason)

        support = next(
            (s for s in enhanced.support_levels if s.strength == LevelStrength.STRONG), None
        )
        if support is not None:
            reasons.append(_reason(
                "Support Level",
                f"Strong support at ${support.price:.2f} ({support.touches} touches)",
                ReasonImpact.POSITIVE,
            ))

        resistance = next(
            (r for r in enhanced.resistance_levels if r.strength == LevelStrength.STRONG), None
        )
        if resistance is not None:
            reasons.append(_reason(
                "Resistance Level",
                f"Strong resistance at ${resistance.price:.2f} ({resistance.touches} touches)",
                ReasonImpact.NEGATIVE,
            ))

    change_24h = snapshot.price_change_percentage_24h or 0.0
    if abs(change_24h) > 2:
        rising = change_24h > 0
        reasons.append(_reason(
            "Momentum",
            f"{'Strong upward' if rising else 'Strong downward'} momentum "
            f"with {abs(change_24h):.2f}% move in 24h",
            ReasonImpact.POSITIVE if rising else ReasonImpact.NEGATIVE,
        ))

    if indicators.volume_signal == VolumeSignal.HIGH:
        if direction == Direction.LONG:
            impact = ReasonImpact.POSITIVE
        elif direction == Direction.SHORT:
            impact = ReasonImpact.NEGATIVE
        else:
            impact = ReasonImpact.NEUTRAL
        reasons.append(_reason(
            "Volume", "High trading volume confirms strong market participation", impact
        ))

    if indicators.volatility > 5:
        reasons.append(_reason(
            "Risk",
            f"High volatility ({indicators.volatility:.1f}%) - expect larger price swings",
            ReasonImpact.NEUTRAL,
        ))

    return reasons


def _technical_context(enhanced: Optional[EnhancedIndicators]) -> str:
    if enhanced is None:
        return ""

    parts = []
    rsi = enhanced.rsi
    if rsi.signal == OscillatorSignal.OVERSOLD:
        parts.append("RSI oversold")
    elif rsi.signal == OscillatorSignal.OVERBOUGHT:
        parts.append("RSI overbought")
    else:
        parts.append(f"RSI {rsi.value:.0f}")

    if enhanced.macd.crossover == Crossover.BULLISH:
        parts.append("MACD buy signal")
    elif enhanced.macd.crossover == Crossover.BEARISH:
        parts.append("MACD sell signal")

    if enhanced.bollinger_bands.signal != OscillatorSignal.NEUTRAL:
        parts.append(f"BB {enhanced.bollinger_bands.signal.value}")

    return f" Technical: {', '.join(parts)}."


def generate_analysis(
    snapshot: AssetSnapshot,
    indicators: BasicIndicators,
    direction: Direction,
    leverage: int,
    target_return: float,
    enhanced: Optional[EnhancedIndicators],
) -> str:
    """One-paragraph summary of the call; target_return is a fraction."""
    name = snapshot.name
    momentum = f"{indicators.momentum:.1f}"
    strength = f"{indicators.strength:.0f}"
    volatility = f"{indicators.volatility:.1f}"
    target_pct = f"{target_return * 100:.1f}"
    context = _technical_context(enhanced)

    if direction == Direction.LONG:
        return (
            f"{name} shows bullish setup (momentum: {momentum}) with {strength}/100 strength."
            f"{context} Real 24h volatility: {volatility}%. Target: {target_pct}% upside. "
            f"Consider {leverage}x leverage with tight stops. Enter on dips for better risk/reward."
        )

    if direction == Direction.SHORT:
        return (
            f"{name} exhibits bearish setup (momentum: {momentum}) with {strength}/100 strength."
            f"{context} Real 24h volatility: {volatility}%. Target: {target_pct}% downside. "
            f"Use {leverage}x leverage cautiously. Short rallies into resistance zones."
        )

    return (
        f"{name} trading neutral with momentum at {momentum}.{context} "
        f"Wait for directional confirmation or trade range-bound with 1x only."
    )
