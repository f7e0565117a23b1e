"""
Day-length geometry: how much of the clock day is daylight, and how far
the edge tints should reach because of it.
"""

from typing import Optional

from daystrip.lighting_math import clamp01, lerp

MINUTES_IN_DAY = 1440


def compute_day_length_fraction(sunrise_minutes: Optional[float], sunset_minutes: Optional[float]) -> float:
    """
    Fraction of the 24h day between sunrise and sunset.

    Fallbacks: both unknown -> 0.5, only sunrise known -> 1.0,
    only sunset known -> 0.0. A sunset that precedes sunrise on the clock
    wraps past midnight.
    """
    if sunrise_minutes is None and sunset_minutes is None:
        return 0.5
    if sunset_minutes is None:
        return 1.0
    if sunrise_minutes is None:
        return 0.0

    span = sunset_minutes - sunrise_minutes
    if span < 0:
        span += MINUTES_IN_DAY

    return clamp01(span / MINUTES_IN_DAY)


def gradient_width_scale(day_fraction: float) -> float:
    """
    Scale factor for edge gradient width.

    [0, 0.5] maps linearly onto [0.8, 1.0] and [0.5, 1.0] onto [1.0, 4/3]:
    short days shrink the edge tints, long days stretch them.
    """
    clamped = clamp01(day_fraction)

    if clamped <= 0.5:
        # interpolate from the pivot so 0.5 maps to exactly 1.0
        return lerp(1.0, 0.8, 1 - clamped / 0.5)

    return lerp(1.0, 4 / 3, (clamped - 0.5) / 0.5)
