"""
Heat index computation and risk classification.

The heat index estimates how hot it *feels* once humidity is taken into
account, which is what matters for a panting dog.

Formula (two regimes, switched on air temperature):

    T < 80 F:   HI = 0.5 * (T + 61 + (T - 68) * 1.2 + RH * 0.094)
    T >= 80 F:  Rothfusz regression (9-term polynomial in T and RH)

The simple formula is Steadman's linear approximation; it is accurate below
80 F where the regression overshoots.

Risk tiers (classified on the unrounded heat index):

    < 80          safe
    [80, 90)      caution
    [90, 125)     danger
    >= 125        extreme

The extreme bound of 125 is the mobile app's; 95 F at 70% RH (122.6) is danger.

References:
    - NWS Weather Prediction Center: The Heat Index Equation
    - Rothfusz, L.P. (1990), NWS Technical Attachment SR 90-23
"""

from __future__ import annotations

import math

from dogwalk_safety.schemas import HeatIndexResult, RiskTier

# Air temperature at which the regression replaces the linear approximation
REGRESSION_MIN_TEMP_F = 80.0

# Lower bound (inclusive) of each tier above SAFE
CAUTION_MIN_F = 80.0
DANGER_MIN_F = 90.0
EXTREME_MIN_F = 125.0

ADVISORIES: dict[RiskTier, str] = {
    RiskTier.SAFE: "It's a great day for a walk!",
    RiskTier.CAUTION: "Caution: Fatigue possible with prolonged exposure. Take breaks and bring water.",
    RiskTier.DANGER: "Danger: Heatstroke, cramps, or exhaustion likely. Limit outdoor time.",
    RiskTier.EXTREME: "Extreme danger: Heatstroke highly likely. Avoid outdoor activity.",
}


# ---------------------------------------------------------------------------
# Formulas (pure functions, no validation)
# ---------------------------------------------------------------------------


def linear_heat_index(temperature_f: float, humidity_pct: float) -> float:
    """Steadman's simple approximation, used below 80 F."""
    t = temperature_f
    rh = humidity_pct
    return 0.5 * (t + 61.0 + (t - 68.0) * 1.2 + rh * 0.094)


def regression_heat_index(temperature_f: float, humidity_pct: float) -> float:
    """Rothfusz regression with the standard NWS coefficients."""
    t = temperature_f
    rh = humidity_pct
    return (
        -42.379
        + 2.04901523 * t
        + 10.14333127 * rh
        - 0.22475541 * t * rh
        - 6.83783e-3 * t * t
        - 5.481717e-2 * rh * rh
        + 1.22874e-3 * t * t * rh
        + 8.5282e-4 * t * rh * rh
        - 1.99e-6 * t * t * rh * rh
    )


def heat_index_f(temperature_f: float, humidity_pct: float) -> float:
    """Unrounded heat index, picking the formula by air temperature."""
    if temperature_f >= REGRESSION_MIN_TEMP_F:
        return regression_heat_index(temperature_f, humidity_pct)
    return linear_heat_index(temperature_f, humidity_pct)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify(heat_index: float) -> RiskTier:
    """Map an (unrounded) heat index to its risk tier."""
    if heat_index >= EXTREME_MIN_F:
        return RiskTier.EXTREME
    if heat_index >= DANGER_MIN_F:
        return RiskTier.DANGER
    if heat_index >= CAUTION_MIN_F:
        return RiskTier.CAUTION
    return RiskTier.SAFE


def _round_half_up(value: float) -> int:
    # round() would give banker's rounding (92.5 -> 92)
    return math.floor(value + 0.5)


def evaluate(temperature_f: float, humidity_pct: float) -> HeatIndexResult:
    """Compute the heat index, its tier and the advisory for current conditions.

    Args:
        temperature_f: Air temperature in Fahrenheit.
        humidity_pct: Relative humidity in percent. Not clamped.

    Returns:
        Rounded heat index with tier and advisory text.
    """
    value = heat_index_f(temperature_f, humidity_pct)
    tier = classify(value)
    return HeatIndexResult(
        heat_index_f=_round_half_up(value),
        risk_tier=tier,
        advisory=ADVISORIES[tier],
    )
