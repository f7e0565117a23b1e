"""
Weather and temperature tint colors.
"""

from enum import Enum
from typing import Optional, Sequence

from daystrip.color import ensure_hex, lerp_color_gamma
from daystrip.lighting_math import is_finite_number
from daystrip.settings import CategoryStyle, TemperatureColorStop

NEUTRAL_TEMPERATURE_COLOR = "#9ca3af"
FALLBACK_WEATHER_COLOR = "#6b7280"
FALLBACK_WEATHER_ICON = "☁"

TIME_EMOJIS = {
    "morning": "🌅",
    "day": "🌞",
    "evening": "🌇",
    "night": "🌙",
}


class WeatherCategory(str, Enum):
    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    SNOWY = "snowy"
    DRIZZLE = "drizzle"
    STORM = "storm"
    FOGGY = "foggy"


# WMO weather interpretation codes
_WMO_CATEGORIES = {
    0: WeatherCategory.SUNNY,
    1: WeatherCategory.SUNNY,
    2: WeatherCategory.CLOUDY,
    3: WeatherCategory.CLOUDY,
    45: WeatherCategory.FOGGY,
    48: WeatherCategory.FOGGY,
    51: WeatherCategory.DRIZZLE,
    53: WeatherCategory.DRIZZLE,
    55: WeatherCategory.DRIZZLE,
    56: WeatherCategory.DRIZZLE,
    57: WeatherCategory.DRIZZLE,
    61: WeatherCategory.RAINY,
    63: WeatherCategory.RAINY,
    65: WeatherCategory.RAINY,
    66: WeatherCategory.RAINY,
    67: WeatherCategory.RAINY,
    80: WeatherCategory.RAINY,
    81: WeatherCategory.RAINY,
    82: WeatherCategory.RAINY,
    71: WeatherCategory.SNOWY,
    73: WeatherCategory.SNOWY,
    75: WeatherCategory.SNOWY,
    77: WeatherCategory.SNOWY,
    85: WeatherCategory.SNOWY,
    86: WeatherCategory.SNOWY,
    95: WeatherCategory.STORM,
    96: WeatherCategory.STORM,
    99: WeatherCategory.STORM,
}


def wmo_to_category(code: Optional[int]) -> WeatherCategory:
    """Map a WMO weather code to a category (missing -> code 2, unknown -> cloudy)."""
    if not is_finite_number(code):
        code = 2
    return _WMO_CATEGORIES.get(int(code), WeatherCategory.CLOUDY)


def weather_style(
    category: WeatherCategory,
    styles: dict[str, CategoryStyle],
) -> tuple[str, str]:
    """Validated (color, icon) for a weather category."""
    style = styles.get(category.value) if styles else None
    if style is None:
        return FALLBACK_WEATHER_COLOR, FALLBACK_WEATHER_ICON
    color = ensure_hex(style.color, FALLBACK_WEATHER_COLOR)
    icon = (style.icon or "").strip() or FALLBACK_WEATHER_ICON
    return color, icon


def temperature_to_color(
    temperature: Optional[float],
    stops: Sequence[TemperatureColorStop],
) -> str:
    """
    Tint color for a temperature.

    Interpolates in linear light between the surrounding stops, holds the
    end colors beyond the range, and returns a neutral gray when the
    temperature or the stops are missing.
    """
    if not is_finite_number(temperature) or not stops:
        return NEUTRAL_TEMPERATURE_COLOR

    ordered = sorted(stops, key=lambda s: s.temperature)

    if temperature <= ordered[0].temperature:
        return ensure_hex(ordered[0].color, NEUTRAL_TEMPERATURE_COLOR)
    if temperature >= ordered[-1].temperature:
        return ensure_hex(ordered[-1].color, NEUTRAL_TEMPERATURE_COLOR)

    for current, upper in zip(ordered, ordered[1:]):
        if current.temperature <= temperature <= upper.temperature:
            span = upper.temperature - current.temperature
            factor = (temperature - current.temperature) / span if span else 0.0
            return lerp_color_gamma(
                ensure_hex(current.color, NEUTRAL_TEMPERATURE_COLOR),
                ensure_hex(upper.color, NEUTRAL_TEMPERATURE_COLOR),
                factor,
            )

    return ensure_hex(ordered[0].color, NEUTRAL_TEMPERATURE_COLOR)
