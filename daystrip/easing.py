"""
Easing functions and alpha (opacity) curves.

An alpha curve is a fade-in segment, an opaque plateau and a fade-out
segment laid over [0, 1]. Curves are immutable values; sample them with
sample_curve() / sample_curve_stops().
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from daystrip.lighting_math import clamp01
from daystrip.logger import logger

EasingFn = Callable[[float], float]


class EasingProfile(str, Enum):
    """Named easing curve shapes (values match host settings strings)."""
    SINE_IN = "sineIn"
    SINE_OUT = "sineOut"
    SINE_IN_OUT = "sineInOut"
    QUAD_IN = "quadIn"
    QUAD_OUT = "quadOut"
    QUAD_IN_OUT = "quadInOut"
    CUBIC_IN = "cubicIn"
    CUBIC_OUT = "cubicOut"
    CUBIC_IN_OUT = "cubicInOut"
    CIRC_IN = "circIn"
    CIRC_OUT = "circOut"
    CIRC_IN_OUT = "circInOut"


DEFAULT_ALPHA_EASING_PROFILE = EasingProfile.CUBIC_IN_OUT


# ============================================================================
# Easing Functions
# ============================================================================

def sine_in(t: float) -> float:
    return 1 - math.cos(math.pi * clamp01(t) / 2)


def sine_out(t: float) -> float:
    return math.sin(math.pi * clamp01(t) / 2)


def sine_in_out(t: float) -> float:
    return -(math.cos(math.pi * clamp01(t)) - 1) / 2


def quad_in(t: float) -> float:
    x = clamp01(t)
    return x * x


def quad_out(t: float) -> float:
    x = clamp01(t)
    return 1 - (1 - x) * (1 - x)


def quad_in_out(t: float) -> float:
    x = clamp01(t)
    if x < 0.5:
        return 2 * x * x
    return 1 - (-2 * x + 2) ** 2 / 2


def cubic_in(t: float) -> float:
    x = clamp01(t)
    return x * x * x


def cubic_out(t: float) -> float:
    x = clamp01(t)
    return 1 - (1 - x) ** 3


def cubic_in_out(t: float) -> float:
    x = clamp01(t)
    if x < 0.5:
        return 4 * x * x * x
    return 1 - (-2 * x + 2) ** 3 / 2


def circ_in(t: float) -> float:
    x = clamp01(t)
    return 1 - math.sqrt(1 - x * x)


def circ_out(t: float) -> float:
    x = clamp01(t) - 1
    return math.sqrt(1 - x * x)


def circ_in_out(t: float) -> float:
    x = clamp01(t)
    if x < 0.5:
        scaled = 2 * x
        return (1 - math.sqrt(1 - scaled * scaled)) / 2
    scaled = -2 * x + 2
    return (math.sqrt(1 - scaled * scaled) + 1) / 2


EASING_FUNCTIONS: dict[EasingProfile, EasingFn] = {
    EasingProfile.SINE_IN: sine_in,
    EasingProfile.SINE_OUT: sine_out,
    EasingProfile.SINE_IN_OUT: sine_in_out,
    EasingProfile.QUAD_IN: quad_in,
    EasingProfile.QUAD_OUT: quad_out,
    EasingProfile.QUAD_IN_OUT: quad_in_out,
    EasingProfile.CUBIC_IN: cubic_in,
    EasingProfile.CUBIC_OUT: cubic_out,
    EasingProfile.CUBIC_IN_OUT: cubic_in_out,
    EasingProfile.CIRC_IN: circ_in,
    EasingProfile.CIRC_OUT: circ_out,
    EasingProfile.CIRC_IN_OUT: circ_in_out,
}


def resolve_profile(profile) -> EasingProfile:
    """Coerce a profile name or member to EasingProfile (unknown -> default)."""
    if isinstance(profile, EasingProfile):
        return profile
    try:
        return EasingProfile(profile)
    except ValueError:
        if profile is not None:
            logger.debug(f"Unknown easing profile {profile!r}, using {DEFAULT_ALPHA_EASING_PROFILE.value}")
        return DEFAULT_ALPHA_EASING_PROFILE


def resolve_easing(profile) -> EasingFn:
    return EASING_FUNCTIONS[resolve_profile(profile)]


# ============================================================================
# Alpha Curves
# ============================================================================

@dataclass(frozen=True)
class AlphaCurve:
    """
    Immutable alpha curve: normalized segment widths plus the easing shape.

    left_width + inner_width + right_width == 1.
    """
    profile: EasingProfile
    enable_left: bool
    enable_right: bool
    inner_opacity_ratio: float
    opacity_scale: float
    left_width: float
    inner_width: float
    right_width: float
    easing: EasingFn = field(repr=False, compare=False)

    @property
    def inner_end(self) -> float:
        return self.left_width + self.inner_width


def _option(options, name: str, default):
    value = getattr(options, name, None) if options is not None else None
    return default if value is None else value


def create_alpha_gradient_curve(options=None) -> AlphaCurve:
    """
    Build an alpha curve from AlphaGradientSettings-like options.

    Args:
        options: Object with profile, enable_left, enable_right,
            inner_opacity_ratio and opacity_scale attributes. Missing
            attributes (or None) fall back to cubicInOut, both sides
            enabled, ratio 0.5 and scale 1.

    Returns:
        AlphaCurve

    Algorithm:
        1. Each fade starts at (1 - inner_ratio) / 2
        2. A disabled side gives its width to the other side
        3. Both sides disabled -> the whole domain is the plateau
        4. Normalize the three widths to sum to 1
    """
    profile = resolve_profile(_option(options, "profile", DEFAULT_ALPHA_EASING_PROFILE))
    enable_left = bool(_option(options, "enable_left", True))
    enable_right = bool(_option(options, "enable_right", True))
    inner_ratio = clamp01(_option(options, "inner_opacity_ratio", 0.5))
    opacity_scale = clamp01(_option(options, "opacity_scale", 1.0))

    base_edge_width = max(0.0, (1 - inner_ratio) / 2)

    left_width = base_edge_width if enable_left else 0.0
    right_width = base_edge_width if enable_right else 0.0

    if enable_right and not enable_left:
        right_width += base_edge_width
    if enable_left and not enable_right:
        left_width += base_edge_width

    inner_width = inner_ratio
    if not enable_left and not enable_right:
        inner_width = 1.0

    total = left_width + inner_width + right_width
    # total is never 0: a zero inner ratio leaves both fades at 0.5 or more
    factor = 1 / total

    return AlphaCurve(
        profile=profile,
        enable_left=enable_left,
        enable_right=enable_right,
        inner_opacity_ratio=inner_ratio,
        opacity_scale=opacity_scale,
        left_width=left_width * factor,
        inner_width=inner_width * factor,
        right_width=right_width * factor,
        easing=EASING_FUNCTIONS[profile],
    )


def sample_curve(curve: AlphaCurve, position: float) -> float:
    """Alpha of the curve at position (0 outside [0, 1])."""
    if position < 0 or position > 1:
        return 0.0

    if curve.left_width > 0 and position < curve.left_width:
        t = position / curve.left_width
        return curve.opacity_scale * curve.easing(t)

    if position <= curve.inner_end or curve.right_width == 0:
        return curve.opacity_scale

    if position >= 1:
        return 0.0

    t = (position - curve.inner_end) / curve.right_width
    return curve.opacity_scale * curve.easing(1 - t)


def sample_curve_stops(curve: AlphaCurve, resolution: Optional[int] = 128) -> list[float]:
    """Sample the curve at max(2, resolution) evenly spaced positions over [0, 1]."""
    steps = max(2, math.floor(resolution if resolution is not None else 128))
    return [sample_curve(curve, i / (steps - 1)) for i in range(steps)]
