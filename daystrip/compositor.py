"""
Layer compositor: edge tints for one strip, and the full per-row render
pipeline built on top of it.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from daystrip.color import ensure_hex, lerp_color_gamma
from daystrip.day_geometry import compute_day_length_fraction, gradient_width_scale
from daystrip.easing import create_alpha_gradient_curve
from daystrip.gradient import build_alpha_gradient_layer
from daystrip.lighting_math import clamp, clamp01, is_finite_number
from daystrip.logger import logger
from daystrip.palette import TIME_EMOJIS, WeatherCategory, temperature_to_color, weather_style, wmo_to_category
from daystrip.settings import DayStripSettings
from daystrip.solar import compute_solar_altitude
from daystrip.solar_time import (
    SolarGeometry,
    local_time,
    minutes_of_day,
    parse_hm_from_iso_local,
    resolve_offset_minutes,
    sun_position_percent,
)
from daystrip.sun_overlay import SunOverlayState, build_sun_overlay_state, describe_overlay
from daystrip.time_phase import (
    PhaseColor,
    TimeOfDayPhase,
    base_color_for,
    phase_for_hour,
    resolve_time_phase_color,
    time_color_by_sun,
)

DEFAULT_EDGE_PORTION = 0.25


# ============================================================================
# Data Structures
# ============================================================================

class GradientLayers(BaseModel):
    """Background color plus the weather (left) and temperature (right) tints."""
    model_config = ConfigDict(frozen=True)

    background_color: str
    weather_gradient: str
    temperature_gradient: str
    left_gradient_end: float
    right_gradient_start: float


class StripSnapshot(BaseModel):
    """
    Per-location input record supplied by the host.

    Sunrise/sunset may be given either as minutes past local midnight or
    as ISO-like local timestamps ("2024-06-01T04:45"); minutes win.
    """
    model_config = ConfigDict(frozen=True)

    sunrise: Optional[str] = None
    sunset: Optional[str] = None
    sunrise_minutes: Optional[float] = None
    sunset_minutes: Optional[float] = None
    temperature: Optional[float] = None
    weather_code: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: Optional[str] = None
    timezone_offset_minutes: Optional[float] = None

    def solar_geometry(self) -> SolarGeometry:
        sunrise = self.sunrise_minutes if self.sunrise_minutes is not None else parse_hm_from_iso_local(self.sunrise)
        sunset = self.sunset_minutes if self.sunset_minutes is not None else parse_hm_from_iso_local(self.sunset)
        return SolarGeometry(sunrise_minutes=sunrise, sunset_minutes=sunset)


class DayStripState(BaseModel):
    """Everything needed to paint one strip."""
    model_config = ConfigDict(frozen=True)

    background_color: str
    background_image: str
    layers: GradientLayers
    overlay: SunOverlayState
    phase: PhaseColor
    time_of_day: TimeOfDayPhase
    time_emoji: str
    weather_category: WeatherCategory
    weather_icon: str
    temperature_color: str
    local_minutes: int
    sun_position_percent: float = Field(..., description="0 at sunrise, 100 at sunset")
    sun_altitude_degrees: Optional[float] = None


# ============================================================================
# Compositing
# ============================================================================

def compute_gradient_layers(
    settings: DayStripSettings,
    base_color: str,
    weather_color: str,
    temperature_color: str,
    sunrise_minutes: Optional[float],
    sunset_minutes: Optional[float],
) -> GradientLayers:
    """
    Weather and temperature edge tints for one strip.

    The weather tint covers [0, edge] and the temperature tint [1 - edge, 1],
    where edge is the configured portion scaled by day length.
    """
    day_fraction = compute_day_length_fraction(sunrise_minutes, sunset_minutes)
    width_scale = gradient_width_scale(day_fraction)

    configured = settings.gradient_edge_portion
    if not is_finite_number(configured):
        configured = DEFAULT_EDGE_PORTION
    base_portion = clamp(configured, 0.0, 0.5)
    edge_portion = clamp01(base_portion * width_scale)

    left_gradient_end = edge_portion
    right_gradient_start = clamp01(1 - edge_portion)

    weather_curve = create_alpha_gradient_curve(settings.weather_alpha)
    temperature_curve = create_alpha_gradient_curve(settings.temperature_alpha)

    return GradientLayers(
        background_color=base_color,
        weather_gradient=build_alpha_gradient_layer(weather_color, weather_curve, 0.0, left_gradient_end),
        temperature_gradient=build_alpha_gradient_layer(temperature_color, temperature_curve, right_gradient_start, 1.0),
        left_gradient_end=left_gradient_end,
        right_gradient_start=right_gradient_start,
    )


def render_day_strip(
    settings: DayStripSettings,
    snapshot: StripSnapshot,
    now: datetime,
    base_palette: Literal["windows", "continuous"] = "windows",
) -> DayStripState:
    """
    Full render pipeline for one location.

    Args:
        settings: Strip settings
        snapshot: Location input record
        now: Current instant (naive values are taken as UTC)
        base_palette: "windows" blends phase colors only inside the
            sunrise/sunset transition windows; "continuous" drifts through
            the palette all day

    Returns:
        DayStripState

    Steps:
        1. Local clock time from zone name, offset or longitude
        2. Phase color, mixed over the hour-table color
        3. Weather and temperature tints -> edge layers
        4. Solar altitude (when the location is known) -> sun overlay
    """
    longitude = snapshot.longitude if is_finite_number(snapshot.longitude) else 0.0
    offset = resolve_offset_minutes(now, snapshot.timezone, snapshot.timezone_offset_minutes, longitude)
    local = local_time(now, offset)
    now_minutes = minutes_of_day(local)

    geometry = snapshot.solar_geometry()
    sunrise, sunset = geometry.sunrise_minutes, geometry.sunset_minutes

    time_of_day = phase_for_hour(local.hour)
    phase = resolve_time_phase_color(settings.time_base_colors, settings.time_transitions, sunrise, sunset, now_minutes)
    if base_palette == "continuous":
        solar_color = time_color_by_sun(settings.time_base_colors, sunrise, sunset, now_minutes)
    else:
        solar_color = phase.color
    hour_color = base_color_for(settings.time_base_colors, time_of_day)
    base_color = lerp_color_gamma(hour_color, solar_color, clamp01(settings.base_color_mix))

    category = wmo_to_category(snapshot.weather_code)
    weather_color, weather_icon = weather_style(category, settings.category_styles)
    temperature_color = temperature_to_color(snapshot.temperature, settings.temperature_gradient)

    layers = compute_gradient_layers(settings, base_color, weather_color, temperature_color, sunrise, sunset)

    altitude = None
    if is_finite_number(snapshot.latitude) and is_finite_number(snapshot.longitude):
        altitude = compute_solar_altitude(local, snapshot.latitude, snapshot.longitude, offset)

    position = sun_position_percent(sunrise, sunset, now_minutes)
    overlay = build_sun_overlay_state(settings, now_minutes, sunrise, sunset, position, time_of_day, altitude)

    logger.debug(
        f"Rendered strip: local={now_minutes // 60:02d}:{now_minutes % 60:02d} "
        f"phase={phase.phase.value} blend={phase.blend:.3f} base={base_color} {describe_overlay(overlay)}"
    )

    return DayStripState(
        background_color=ensure_hex(layers.background_color, hour_color),
        background_image=f"{layers.temperature_gradient}, {layers.weather_gradient}",
        layers=layers,
        overlay=overlay,
        phase=phase,
        time_of_day=time_of_day,
        time_emoji=TIME_EMOJIS[time_of_day.value],
        weather_category=category,
        weather_icon=weather_icon,
        temperature_color=temperature_color,
        local_minutes=now_minutes,
        sun_position_percent=position,
        sun_altitude_degrees=altitude,
    )
