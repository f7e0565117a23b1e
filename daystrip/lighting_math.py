"""
Mathematical helpers shared by the color, gradient and phase modules.
"""

import math


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp value into [minimum, maximum]. NaN maps to minimum."""
    if math.isnan(value):
        return minimum
    return min(max(value, minimum), maximum)


def clamp01(value: float) -> float:
    # NaN fails both comparisons
    if math.isnan(value):
        return 0.0
    if value <= 0:
        return 0.0
    if value >= 1:
        return 1.0
    return value


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation (extrapolates outside [0, 1])."""
    return a + (b - a) * t


def normalize(value: float, minimum: float, maximum: float) -> float:
    """Map value from [minimum, maximum] to [0, 1]. Zero-width ranges map to 0."""
    if maximum == minimum:
        return 0.0
    return (value - minimum) / (maximum - minimum)


def wrap(value: float, minimum: float, maximum: float) -> float:
    """Wrap value into [minimum, maximum) modulo the range width."""
    span = maximum - minimum
    if span == 0:
        return minimum
    return ((value - minimum) % span + span) % span + minimum


def is_finite_number(value) -> bool:
    """True for real int/float values that are neither NaN nor infinite."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def ease_cos(t: float) -> float:
    """Cosine ease-in-out used for phase transitions."""
    return 0.5 - 0.5 * math.cos(math.pi * clamp01(t))


def window_progress(elapsed: float, window: float) -> float:
    """
    Eased progress through a transition window.

    Args:
        elapsed: Minutes already spent inside the window
        window: Window length in minutes (divisor is guarded to >= 1)

    Returns:
        Cosine-eased progress in [0, 1]
    """
    return ease_cos(elapsed / max(1.0, window))
