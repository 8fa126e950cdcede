"""Suggested walking windows for a given air temperature."""

from __future__ import annotations

# Upper bounds (exclusive) of each advice band, in Fahrenheit
ANYTIME_MAX_F = 80.0
MILD_MAX_F = 85.0
HOT_MAX_F = 95.0


def recommend(temperature_f: float) -> list[str]:
    """Return one or two walking suggestions, earliest window first.

    Args:
        temperature_f: Current air temperature in Fahrenheit.

    Returns:
        Non-empty list of human-readable suggestions.
    """
    if temperature_f < ANYTIME_MAX_F:
        return ["Anytime is a good time for a walk!"]
    if temperature_f < MILD_MAX_F:
        return ["Early morning (before 10 AM)", "Late evening (after 7 PM)"]
    if temperature_f < HOT_MAX_F:
        return ["Very early morning (before 8 AM)", "Very late evening (after 8 PM)"]
    return [
        "Consider indoor activities today.",
        "If you must walk, go before sunrise or after sunset.",
    ]
