"""
Position Sizing Rules

Leverage, risk level, price targets and holding timeframe for a call.
All rules are deterministic lookups on volatility, confidence and rank.
"""

from typing import Optional

from cryptosignal.schemas.market import AssetSnapshot
from cryptosignal.schemas.indicators import BasicIndicators, EnhancedIndicators
from cryptosignal.schemas.prediction import Direction, PriceTargets, RiskLevel
from cryptosignal.services.signals.scoring import round_half_up


# (volatility above, min leverage, max leverage), checked in order
LEVERAGE_BANDS = [
    (8.0, 1, 2),
    (6.0, 1, 3),
    (4.0, 2, 5),
    (2.0, 3, 7),
]
DEFAULT_LEVERAGE_BAND = (3, 10)

# (max rank, base target %, base stop %)
RANK_TIERS = [
    (10, 0.045, 0.015),
    (30, 0.07, 0.025),
    (50, 0.095, 0.03),
    (100, 0.125, 0.035),
]
DEFAULT_RANK_TIER = (0.16, 0.045)

# A level must sit at least this far away to be used
MIN_TARGET_DISTANCE = 0.01
MIN_STOP_DISTANCE = 0.005
STOP_BUFFER = 0.005


def calculate_leverage(confidence: int, volatility: float, direction: Direction) -> int:
    """Leverage from confidence damped by volatility, capped per volatility band."""
    if direction == Direction.NEUTRAL:
        return 1

    volatility_factor = max(0.3, 1 - volatility / 100)
    raw = round_half_up(confidence / 100 * volatility_factor * 10)

    low, high = DEFAULT_LEVERAGE_BAND
    for threshold, band_low, band_high in LEVERAGE_BANDS:
        if volatility > threshold:
            low, high = band_low, band_high
            break

    return min(high, max(low, raw))


def calculate_risk_level(
    volatility: float,
    leverage: int,
    indicators: BasicIndicators,
) -> RiskLevel:
    score = volatility * 8 + leverage * 3 + (100 - indicators.strength) * 0.2

    if score > 70:
        return RiskLevel.EXTREME
    if score > 45:
        return RiskLevel.HIGH
    if score > 25:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def base_percentages(market_cap_rank: int) -> tuple[float, float]:
    """Base (target %, stop %) for a market cap rank."""
    for max_rank, target, stop in RANK_TIERS:
        if market_cap_rank <= max_rank:
            return target, stop
    return DEFAULT_RANK_TIER


def calculate_targets(
    snapshot: AssetSnapshot,
    direction: Direction,
    indicators: BasicIndicators,
    leverage: int,
    enhanced: Optional[EnhancedIndicators],
) -> PriceTargets:
    """
    Target price and stop loss.

    Percentages come from the rank tier, the target scaled by volatility
    and the stop tightened for leverage. With enhanced indicators the
    nearest support/resistance level replaces a percentage when it sits
    within a sensible distance.
    """
    price = snapshot.current_price
    base_target, base_stop = base_percentages(snapshot.market_cap_rank)

    target_pct = base_target * max(0.7, min(1.8, indicators.volatility / 3))
    stop_pct = base_stop
    if leverage >= 5:
        stop_pct *= 0.6
    elif leverage >= 3:
        stop_pct *= 0.8

    supports = enhanced.support_levels if enhanced is not None else []
    resistances = enhanced.resistance_levels if enhanced is not None else []

    if direction == Direction.LONG:
        target = price * (1 + target_pct)
        stop = price * (1 - stop_pct)

        if resistances:
            level = resistances[0].price
            gain = (level - price) / price
            if MIN_TARGET_DISTANCE < gain < target_pct * 1.5:
                target = level
        if supports:
            level = supports[0].price
            distance = (price - level) / price
            if MIN_STOP_DISTANCE < distance < stop_pct * 2:
                stop = level * (1 - STOP_BUFFER)

        return PriceTargets(target_price=target, stop_loss=stop)

    if direction == Direction.SHORT:
        target = price * (1 - target_pct)
        stop = price * (1 + stop_pct)

        if supports:
            level = supports[0].price
            drop = (price - level) / price
            if MIN_TARGET_DISTANCE < drop < target_pct * 1.5:
                target = level
        if resistances:
            level = resistances[0].price
            distance = (level - price) / price
            if MIN_STOP_DISTANCE < distance < stop_pct * 2:
                stop = level * (1 + STOP_BUFFER)

        return PriceTargets(target_price=target, stop_loss=stop)

    # NEUTRAL
    if enhanced is not None:
        return PriceTargets(target_price=price, stop_loss=price)
    return PriceTargets(target_price=price, stop_loss=price * 0.97)


def target_return(snapshot: AssetSnapshot, direction: Direction, targets: PriceTargets) -> float:
    """Fractional move from current price to target, positive in the trade's favour."""
    price = snapshot.current_price
    if direction == Direction.LONG:
        return (targets.target_price - price) / price
    return (price - targets.target_price) / price


def calculate_timeframe(volatility: float, momentum: float, market_cap_rank: int) -> str:
    strength = abs(momentum)

    if volatility > 8 and strength > 15:
        return "4-8h"
    if volatility > 6:
        return "8-24h"
    if strength > 20 and volatility > 3:
        return "1-2d"
    if volatility < 2 and strength < 10:
        return "2-5d"
    if market_cap_rank <= 10:
        return "1-2d"
    return "12-36h"
