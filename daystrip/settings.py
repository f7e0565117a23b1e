"""
Rendering settings for the day strip.

Settings are frozen pydantic models passed explicitly into every entry
point; nothing reads them from module state. Numeric knobs are not range
validated here because every consumer re-clamps them, so a host with
slightly out-of-range values still renders. Field names are snake_case
and the host's camelCase keys are accepted as aliases.
"""

from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from daystrip.easing import DEFAULT_ALPHA_EASING_PROFILE, EasingProfile, resolve_profile


class SettingsModel(BaseModel):
    """Base for all settings models: immutable, camelCase aliases accepted."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class AlphaGradientSettings(SettingsModel):
    """Alpha curve options for an edge tint."""
    profile: EasingProfile = Field(DEFAULT_ALPHA_EASING_PROFILE, description="Easing shape of the fades")
    inner_opacity_ratio: float = Field(0.5, description="Opaque share of the gradient width (0.0-1.0)")
    opacity_scale: float = Field(1.0, description="Multiplier for the whole curve (0.0-1.0)")
    enable_left: bool = Field(True, description="Fade in on the left side")
    enable_right: bool = Field(True, description="Fade out on the right side")

    @field_validator("profile", mode="before")
    @classmethod
    def _known_profile(cls, value):
        return resolve_profile(value)


class TransitionWindow(SettingsModel):
    """Minutes before/after a solar event during which two phases blend."""
    before: float = Field(0.0, description="Minutes before the event")
    after: float = Field(0.0, description="Minutes after the event")

    @field_validator("before", "after")
    @classmethod
    def _non_negative(cls, value: float) -> float:
        return max(0.0, value)


class SunTransitions(SettingsModel):
    sunrise: TransitionWindow = TransitionWindow()
    sunset: TransitionWindow = TransitionWindow()


class SunAlphaSettings(SettingsModel):
    """Peak/mid/low opacity triple of the sun glow."""
    peak: float
    mid: float
    low: float


class SunLayerColors(SettingsModel):
    night: str = "#93C5FD"
    sunrise: str = "#FF4A00"
    day: str = "#FFD200"
    sunset: str = "#FF8A3B"


DEFAULT_SUN_SYMBOL = "◉"
DEFAULT_SUN_SCALE = 1.0


class SunIconSettings(SettingsModel):
    symbol: str = DEFAULT_SUN_SYMBOL
    scale: float = DEFAULT_SUN_SCALE


class SunLayerSettings(SettingsModel):
    """Sun glow overlay settings."""
    colors: SunLayerColors = SunLayerColors()
    alpha_day: SunAlphaSettings = SunAlphaSettings(peak=0.9, mid=0.55, low=0.22)
    alpha_night: SunAlphaSettings = SunAlphaSettings(peak=0.3, mid=0.18, low=0.08)
    alpha_profile: EasingProfile = DEFAULT_ALPHA_EASING_PROFILE
    gradient_width_percent: float = Field(60.0, description="Visible glow width in percent of the row")
    gradient_inner_ratio: float = 0.5
    gradient_opacity: float = Field(0.85, description="Global multiplier for the glow opacity")
    gradient_overflow_percent: float = Field(50.0, description="How far the glow extends past each row edge")
    icon: SunIconSettings = SunIconSettings()
    transitions: SunTransitions = SunTransitions(
        sunrise=TransitionWindow(before=45, after=45),
        sunset=TransitionWindow(before=45, after=45),
    )

    @field_validator("alpha_profile", mode="before")
    @classmethod
    def _known_profile(cls, value):
        return resolve_profile(value)


class VerticalFadeSettings(SettingsModel):
    top: float = 0.22
    middle: float = 0.08


class CategoryStyle(SettingsModel):
    color: str
    icon: str


class TemperatureColorStop(SettingsModel):
    temperature: float
    color: str


DEFAULT_TIME_BASE_COLORS = MappingProxyType({
    "morning": "#FF8C42",
    "day": "#87CEEB",
    "evening": "#FF6B6B",
    "night": "#162331",
})


def _default_time_base_colors() -> dict[str, str]:
    return dict(DEFAULT_TIME_BASE_COLORS)


def _default_category_styles() -> dict[str, CategoryStyle]:
    return {
        "sunny": CategoryStyle(color="#60a5fa", icon="☀"),
        "cloudy": CategoryStyle(color="#e6e7ce", icon="☁"),
        "rainy": CategoryStyle(color="#6b7280", icon="🌧"),
        "snowy": CategoryStyle(color="#c7d2fe", icon="❄"),
        "drizzle": CategoryStyle(color="#9ca3af", icon="🌦"),
        "storm": CategoryStyle(color="#374151", icon="⛈"),
        "foggy": CategoryStyle(color="#d1d5db", icon="🌫"),
    }


def _default_temperature_gradient() -> list[TemperatureColorStop]:
    stops = [
        (-40, "#0B3C91"),
        (-30, "#1E3A8A"),
        (-20, "#2563EB"),
        (-10, "#60A5FA"),
        (-5, "#93C5FD"),
        (0, "#9CA3AF"),
        (5, "#CBE1D0"),
        (15, "#ACDE8B"),
        (25, "#E3CD81"),
        (30, "#F8AC75"),
        (40, "#F37676"),
    ]
    return [TemperatureColorStop(temperature=t, color=c) for t, c in stops]


class DayStripSettings(SettingsModel):
    """Complete rendering configuration for one day strip."""
    weather_alpha: AlphaGradientSettings = AlphaGradientSettings(
        profile=EasingProfile.SINE_IN_OUT, inner_opacity_ratio=0.4, opacity_scale=0.9,
    )
    temperature_alpha: AlphaGradientSettings = AlphaGradientSettings(
        profile=EasingProfile.CUBIC_IN_OUT, inner_opacity_ratio=0.5, opacity_scale=1.0,
    )
    gradient_edge_portion: float = Field(0.25, description="Share of the row each edge tint covers (0.0-0.5)")
    time_base_colors: dict[str, str] = Field(default_factory=_default_time_base_colors)
    time_transitions: SunTransitions = Field(
        SunTransitions(),
        description="Base color transition windows (zero = instant phase switch)",
    )
    base_color_mix: float = Field(0.6, description="Weight of the solar palette over the hour-table color")
    category_styles: dict[str, CategoryStyle] = Field(default_factory=_default_category_styles)
    temperature_gradient: list[TemperatureColorStop] = Field(default_factory=_default_temperature_gradient)
    sun_layer: SunLayerSettings = SunLayerSettings()
    vertical_fade: VerticalFadeSettings = VerticalFadeSettings()


DEFAULT_SETTINGS = DayStripSettings()
