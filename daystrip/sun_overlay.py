"""
Sun overlay: the moving glow, the vertical vignette and the sun icon.

The glow color and its peak/mid/low opacity triple follow their own
sunrise/sunset state machine (separate from the base color resolver in
time_phase, because the two blend differently shaped values). Only the
eased window arithmetic is shared.
"""

import math
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict

from daystrip.color import ensure_hex, format_number, lerp_color_gamma, rgba
from daystrip.day_geometry import MINUTES_IN_DAY
from daystrip.easing import create_alpha_gradient_curve
from daystrip.gradient import build_alpha_gradient_layer
from daystrip.lighting_math import clamp, clamp01, is_finite_number, lerp, window_progress, wrap
from daystrip.settings import (
    DEFAULT_SUN_SCALE,
    DEFAULT_SUN_SYMBOL,
    AlphaGradientSettings,
    DayStripSettings,
    SunAlphaSettings,
    SunLayerSettings,
    VerticalFadeSettings,
)
from daystrip.time_phase import TimeOfDayPhase, has_solar_path

DEFAULT_DAY_SUN_COLOR = "#FFD200"
DEFAULT_NIGHT_SUN_COLOR = "#0f172a"

HORIZON_TOP_PERCENT = 86.0
ZENITH_TOP_PERCENT = 14.0
VIGNETTE_EDGE_PERCENT = 6

NIGHT_BLEND_MODE = "multiply, multiply"
DAY_BLEND_MODE = "screen, normal"


# ============================================================================
# Data Structures
# ============================================================================

class SunOverlayIcon(BaseModel):
    """
    Sun icon placement and look.

    left_percent is the sun position in percent of the row, passed through
    without clamping (non-finite becomes 0). overlay_left_percent
    is the glow center in percent of the overlay element (see
    SunOverlayState.width_percent), clamped to [0, 100]; the two agree only
    when the overflow is 0. top_percent is measured from the top of the row.
    """
    model_config = ConfigDict(frozen=True)

    symbol: str
    left_percent: float
    overlay_left_percent: float
    top_percent: float
    scale: float
    color: str
    opacity: float
    vertical_progress: float


class SunOverlayState(BaseModel):
    """
    Everything the renderer needs for the overlay element.

    width_percent/offset_percent size the overlay element relative to the
    row: it is width_percent wide and shifted left by offset_percent.
    """
    model_config = ConfigDict(frozen=True)

    background: str
    blend_mode: str
    icon: SunOverlayIcon
    width_percent: float
    offset_percent: float


@dataclass(frozen=True)
class SunAppearance:
    color: str
    peak: float
    mid: float
    low: float
    is_night: bool


# ============================================================================
# Color / Opacity Resolution
# ============================================================================

def _lerp_alpha(a: SunAlphaSettings, b: SunAlphaSettings, t: float) -> tuple[float, float, float]:
    return (lerp(a.peak, b.peak, t), lerp(a.mid, b.mid, t), lerp(a.low, b.low, t))


def _triple(alpha: SunAlphaSettings) -> tuple[float, float, float]:
    return (alpha.peak, alpha.mid, alpha.low)


def resolve_sun_appearance(
    sun_layer: SunLayerSettings,
    now_minutes: float,
    sunrise_minutes: Optional[float],
    sunset_minutes: Optional[float],
    time_of_day: TimeOfDayPhase,
) -> SunAppearance:
    """
    Glow color and unscaled peak/mid/low opacities for the current time.

    Window order: before sunset (day -> sunset color), after sunset
    (sunset color -> night, opacities day -> night), before sunrise
    (night -> sunrise color, opacities night -> day), after sunrise
    (sunrise color -> day), then solid night or day. Without a solar path
    night is taken from time_of_day.
    """
    day_color = ensure_hex(sun_layer.colors.day, DEFAULT_DAY_SUN_COLOR)
    sunrise_color = ensure_hex(sun_layer.colors.sunrise, day_color)
    sunset_color = ensure_hex(sun_layer.colors.sunset, day_color)
    night_color = ensure_hex(sun_layer.colors.night, DEFAULT_NIGHT_SUN_COLOR)

    alpha_day = sun_layer.alpha_day
    alpha_night = sun_layer.alpha_night

    if not has_solar_path(sunrise_minutes, sunset_minutes):
        if time_of_day == TimeOfDayPhase.NIGHT:
            return SunAppearance(night_color, *_triple(alpha_night), is_night=True)
        return SunAppearance(day_color, *_triple(alpha_day), is_night=False)

    transitions = sun_layer.transitions
    sunrise_before = max(0.0, transitions.sunrise.before)
    sunrise_after = max(0.0, transitions.sunrise.after)
    sunset_before = max(0.0, transitions.sunset.before)
    sunset_after = max(0.0, transitions.sunset.after)

    now = now_minutes
    is_night = now < sunrise_minutes or now > sunset_minutes

    sunset_window_start = max(0.0, sunset_minutes - sunset_before)
    sunset_window_end = min(MINUTES_IN_DAY, sunset_minutes + sunset_after)
    before_sunrise = wrap(sunrise_minutes - now, 0, MINUTES_IN_DAY)

    if sunset_window_start <= now < sunset_minutes:
        eased = window_progress(max(1.0, sunset_before) - (sunset_minutes - now), sunset_before)
        color = lerp_color_gamma(day_color, sunset_color, eased)
        return SunAppearance(color, *_triple(alpha_day), is_night=is_night)

    if sunset_minutes <= now <= sunset_window_end:
        eased = window_progress(now - sunset_minutes, sunset_after)
        color = lerp_color_gamma(sunset_color, night_color, eased)
        return SunAppearance(color, *_lerp_alpha(alpha_day, alpha_night, eased), is_night=is_night)

    if before_sunrise <= sunrise_before:
        eased = window_progress(max(1.0, sunrise_before) - before_sunrise, sunrise_before)
        color = lerp_color_gamma(night_color, sunrise_color, eased)
        return SunAppearance(color, *_lerp_alpha(alpha_night, alpha_day, eased), is_night=is_night)

    if sunrise_after > 0 and sunrise_minutes <= now <= sunrise_minutes + sunrise_after:
        eased = window_progress(now - sunrise_minutes, sunrise_after)
        color = lerp_color_gamma(sunrise_color, day_color, eased)
        return SunAppearance(color, *_triple(alpha_day), is_night=is_night)

    if is_night:
        return SunAppearance(night_color, *_triple(alpha_night), is_night=True)

    return SunAppearance(day_color, *_triple(alpha_day), is_night=False)


# ============================================================================
# Layers
# ============================================================================

def build_vertical_vignette(fade: VerticalFadeSettings) -> str:
    """Dark vertical vignette: edge opacity at top/bottom, middle opacity inside."""
    top = rgba("#000000", fade.top)
    middle = rgba("#000000", fade.middle)
    edge = VIGNETTE_EDGE_PERCENT
    return (
        f"linear-gradient(180deg, {top} 0%, {middle} {edge}%, "
        f"{middle} {100 - edge}%, {top} 100%)"
    )


def glow_bezier_transform(peak: float, mid: float, low: float, start: float, span: float):
    """
    Per-stop alpha hook shaping the glow as a quadratic Bezier of
    (low, mid, peak) keyed by distance from the glow's center.
    """
    def transform(alpha: float, position: float) -> float:
        if alpha <= 0:
            return 0.0
        normalized = clamp01((position - start) / span)
        center_t = clamp01(1 - abs(normalized - 0.5) * 2)
        inverse = 1 - center_t
        bezier = inverse * inverse * low + 2 * inverse * center_t * mid + center_t * center_t * peak
        return clamp01(alpha * bezier)

    return transform


def icon_vertical_progress(sun_altitude_degrees: Optional[float], progress: float) -> float:
    """
    Height of the icon between horizon (0) and zenith (1).

    Uses the measured altitude when one is available, otherwise a
    sine arc over the day's progress.
    """
    if is_finite_number(sun_altitude_degrees):
        ratio = clamp(sun_altitude_degrees / 90, 0.0, 1.0)
    else:
        ratio = math.sin(math.pi * clamp01(progress))

    if not math.isfinite(ratio):
        return 0.0
    return clamp01(ratio)


def build_sun_overlay_state(
    settings: DayStripSettings,
    now_minutes: float,
    sunrise_minutes: Optional[float],
    sunset_minutes: Optional[float],
    sun_position_percent: float,
    time_of_day: TimeOfDayPhase,
    sun_altitude_degrees: Optional[float] = None,
) -> SunOverlayState:
    """
    Build the sun overlay for the current time.

    Args:
        settings: Strip settings (sun layer and vertical fade are used)
        now_minutes: Local clock time, minutes past midnight
        sunrise_minutes: Local sunrise (None when unknown)
        sunset_minutes: Local sunset (None when unknown)
        sun_position_percent: 0 at sunrise, 100 at sunset
        time_of_day: Hour-table phase, used for night without a solar path
        sun_altitude_degrees: Measured solar altitude, if available

    Returns:
        SunOverlayState

    Algorithm:
        1. Resolve the glow color and opacity triple, scale by gradient_opacity
        2. Center the glow on the sun position with the configured half width
        3. Re-map the visible range into the overflow domain
           (x + overflow) / (1 + 2 * overflow)
        4. Build the glow with a Bezier opacity silhouette and a vignette
        5. Place the icon from altitude (or the sine fallback)
    """
    sun_layer = settings.sun_layer

    appearance = resolve_sun_appearance(sun_layer, now_minutes, sunrise_minutes, sunset_minutes, time_of_day)

    opacity_scale = clamp01(sun_layer.gradient_opacity)
    peak = clamp01(appearance.peak * opacity_scale)
    mid = clamp01(appearance.mid * opacity_scale)
    low = clamp01(appearance.low * opacity_scale)

    half_width = clamp(sun_layer.gradient_width_percent / 2, 0.0, 50.0) / 100
    overflow = clamp(sun_layer.gradient_overflow_percent, 0.0, 200.0) / 100
    scale_factor = 1 + overflow * 2

    if is_finite_number(sun_position_percent):
        center = clamp(sun_position_percent / 100, 0.0, 1.0)
    else:
        center = 0.0

    start_frac = (center - half_width + overflow) / scale_factor
    end_frac = (center + half_width + overflow) / scale_factor

    sun_curve = create_alpha_gradient_curve(AlphaGradientSettings(
        profile=sun_layer.alpha_profile,
        inner_opacity_ratio=clamp01(sun_layer.gradient_inner_ratio),
        opacity_scale=1.0,
    ))

    effective_start = min(start_frac, end_frac)
    effective_span = max(1e-6, max(start_frac, end_frac) - effective_start)

    glow = build_alpha_gradient_layer(
        appearance.color,
        sun_curve,
        start_frac,
        end_frac,
        1.0,
        glow_bezier_transform(peak, mid, low, effective_start, effective_span),
        include_unit_stops=True,
    )
    vignette = build_vertical_vignette(settings.vertical_fade)

    symbol = (sun_layer.icon.symbol or "").strip() or DEFAULT_SUN_SYMBOL
    icon_scale = sun_layer.icon.scale if is_finite_number(sun_layer.icon.scale) else DEFAULT_SUN_SCALE
    vertical_progress = icon_vertical_progress(sun_altitude_degrees, center)
    top_percent = clamp(
        HORIZON_TOP_PERCENT - vertical_progress * (HORIZON_TOP_PERCENT - ZENITH_TOP_PERCENT),
        ZENITH_TOP_PERCENT,
        HORIZON_TOP_PERCENT,
    )

    icon = SunOverlayIcon(
        symbol=symbol,
        left_percent=sun_position_percent if is_finite_number(sun_position_percent) else 0.0,
        overlay_left_percent=clamp01(effective_start + effective_span / 2) * 100,
        top_percent=top_percent,
        scale=icon_scale,
        color=appearance.color,
        opacity=peak,
        vertical_progress=vertical_progress,
    )

    return SunOverlayState(
        background=f"{glow}, {vignette}",
        blend_mode=NIGHT_BLEND_MODE if appearance.is_night else DAY_BLEND_MODE,
        icon=icon,
        width_percent=scale_factor * 100,
        offset_percent=overflow * 100,
    )


def describe_overlay(state: SunOverlayState) -> str:
    """Short human-readable summary, used for debug logging."""
    return (
        f"icon={state.icon.symbol} left={format_number(state.icon.left_percent, 2)}% "
        f"top={format_number(state.icon.top_percent, 2)}% opacity={format_number(state.icon.opacity)} "
        f"blend={state.blend_mode!r}"
    )
