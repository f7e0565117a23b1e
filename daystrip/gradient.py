"""
Gradient stop builder.

Turns a color plus an alpha curve laid over a sub-range of the row into
an ordered list of stops, and formats stops as CSS linear-gradient()
strings.

Supports:
- Sub-ranges that overshoot [0, 1] (only the visible slice emits stops)
- Per-stop alpha post-processing hooks
- Transparent boundary stops so stacked layers composite without seams
"""

import math
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from daystrip.color import rgba
from daystrip.easing import AlphaCurve, sample_curve
from daystrip.lighting_math import clamp01

AlphaTransform = Callable[[float, float], float]

MIN_SAMPLE_STEPS = 32
SAMPLES_PER_UNIT = 256


# ============================================================================
# Data Structures
# ============================================================================

class GradientStop(BaseModel):
    """Single color stop with alpha."""
    model_config = ConfigDict(frozen=True)

    position: float = Field(..., ge=0.0, le=1.0, description="Position along gradient (0.0-1.0)")
    color: str = Field(..., description="Hex color of the stop")
    alpha: float = Field(..., ge=0.0, le=1.0, description="Opacity (0.0-1.0)")


# ============================================================================
# Formatting
# ============================================================================

def format_percent(fraction: float) -> str:
    """Format a fraction as a percentage rounded to 2 decimals ("12.5%")."""
    value = math.floor(fraction * 10000 + 0.5) / 100
    if value == 0:
        return "0%"
    return f"{value:g}%"


def format_stop(stop: GradientStop) -> str:
    return f"{rgba(stop.color, stop.alpha)} {format_percent(stop.position)}"


def format_linear_gradient(stops: list[GradientStop], angle: int = 90) -> str:
    """Render stops as a CSS linear-gradient() string."""
    return f"linear-gradient({angle}deg, {', '.join(format_stop(stop) for stop in stops)})"


def transparent_stops(color: str) -> list[GradientStop]:
    return [
        GradientStop(position=0.0, color=color, alpha=0.0),
        GradientStop(position=1.0, color=color, alpha=0.0),
    ]


def transparent_gradient(color: str) -> str:
    """Fully transparent two-stop gradient used for degenerate ranges."""
    return format_linear_gradient(transparent_stops(color))


# ============================================================================
# Stop Building
# ============================================================================

def build_alpha_gradient_stops(
    color: str,
    curve: AlphaCurve,
    start: float,
    end: float,
    scale: float = 1.0,
    transform: Optional[AlphaTransform] = None,
    include_unit_stops: bool = False,
) -> list[GradientStop]:
    """
    Build gradient stops for an alpha curve laid over [start, end].

    Args:
        color: Hex color of the layer
        curve: Alpha curve spanning the whole (unclamped) range
        start: Range start as a fraction of the row (may be < 0)
        end: Range end as a fraction of the row (may be > 1)
        scale: Alpha multiplier, clamped to [0, 1]
        transform: Optional hook (alpha, position) -> alpha applied per stop
        include_unit_stops: Also pin transparent stops at 0% and 100%

    Returns:
        Ordered list of GradientStop. Reversed, empty or fully off-row
        ranges yield the transparent two-stop list.

    Algorithm:
        1. Intersect the range with [0, 1]
        2. Map the visible slice back onto the curve's own [0, 1] domain
        3. Sample max(32, visible * 256) steps across the visible slice
        4. Add transparent stops where the slice ends inside the row
    """
    raw_start = start
    raw_end = end
    raw_range = raw_end - raw_start

    # reversed or empty ranges (and NaN) render transparent
    if not raw_range > 0:
        return transparent_stops(color)

    domain_start = clamp01(raw_start)
    domain_end = clamp01(raw_end)
    if domain_end <= domain_start:
        return transparent_stops(color)

    visible_range = domain_end - domain_start
    curve_start = clamp01((domain_start - raw_start) / raw_range)
    curve_end = clamp01((domain_end - raw_start) / raw_range)
    if curve_end <= curve_start:
        return transparent_stops(color)

    alpha_scale = clamp01(scale)

    def alpha_at(curve_position: float, position: float) -> float:
        alpha = clamp01(sample_curve(curve, curve_position) * alpha_scale)
        if transform is not None:
            alpha = transform(alpha, position)
        return clamp01(alpha)

    stops: list[GradientStop] = []

    def push(position: float, alpha: float) -> None:
        stops.append(GradientStop(position=clamp01(position), color=color, alpha=alpha))

    if domain_start > 0:
        push(domain_start, 0.0)

    push(domain_start, alpha_at(curve_start, domain_start))

    steps = max(MIN_SAMPLE_STEPS, math.floor(visible_range * SAMPLES_PER_UNIT + 0.5))
    for i in range(1, steps):
        t = i / steps
        curve_position = curve_start + (curve_end - curve_start) * t
        position = domain_start + visible_range * t
        push(position, alpha_at(curve_position, position))

    push(domain_end, alpha_at(curve_end, domain_end))

    if domain_end < 1:
        push(domain_end, 0.0)

    if include_unit_stops:
        if domain_start > 0 and format_percent(stops[0].position) != "0%":
            stops.insert(0, GradientStop(position=0.0, color=color, alpha=0.0))
        if domain_end < 1 and format_percent(stops[-1].position) != "100%":
            stops.append(GradientStop(position=1.0, color=color, alpha=0.0))

    return stops


def build_alpha_gradient_layer(
    color: str,
    curve: AlphaCurve,
    start: float,
    end: float,
    scale: float = 1.0,
    transform: Optional[AlphaTransform] = None,
    include_unit_stops: bool = False,
) -> str:
    """
    Build a horizontal CSS gradient for an alpha curve laid over [start, end].

    See build_alpha_gradient_stops() for the arguments. Never raises on
    degenerate ranges; those render fully transparent.
    """
    stops = build_alpha_gradient_stops(
        color, curve, start, end,
        scale=scale,
        transform=transform,
        include_unit_stops=include_unit_stops,
    )
    return format_linear_gradient(stops)
