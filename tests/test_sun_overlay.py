"""Tests for the sun glow, vignette and icon placement."""

import pytest

from daystrip.color import hex_to_rgb
from daystrip.settings import (
    DEFAULT_SUN_SYMBOL,
    DayStripSettings,
    SunIconSettings,
    SunLayerSettings,
    VerticalFadeSettings,
)
from daystrip.sun_overlay import (
    DAY_BLEND_MODE,
    NIGHT_BLEND_MODE,
    build_sun_overlay_state,
    build_vertical_vignette,
    describe_overlay,
    glow_bezier_transform,
    icon_vertical_progress,
    resolve_sun_appearance,
)
from daystrip.time_phase import TimeOfDayPhase

SUNRISE = 360
SUNSET = 1080

DAY_SUN = "#FFD200"
NIGHT_SUN = "#93C5FD"
SUNRISE_SUN = "#FF4A00"
SUNSET_SUN = "#FF8A3B"


def between(color, a, b):
    return all(
        min(x, y) <= c <= max(x, y)
        for c, x, y in zip(hex_to_rgb(color), hex_to_rgb(a), hex_to_rgb(b))
    )


def overlay(settings, now, position, time_of_day=TimeOfDayPhase.DAY, altitude=None, sunrise=SUNRISE, sunset=SUNSET):
    return build_sun_overlay_state(settings, now, sunrise, sunset, position, time_of_day, altitude)


class TestResolveSunAppearance:
    """Tests for the glow color/opacity state machine."""

    def test_midday(self, settings):
        """Should use the day color and day opacities."""
        appearance = resolve_sun_appearance(settings.sun_layer, 720, SUNRISE, SUNSET, TimeOfDayPhase.DAY)
        assert appearance.color == DAY_SUN
        assert (appearance.peak, appearance.mid, appearance.low) == (0.9, 0.55, 0.22)
        assert appearance.is_night is False

    def test_deep_night(self, settings):
        """Should use the night color and night opacities."""
        appearance = resolve_sun_appearance(settings.sun_layer, 1300, SUNRISE, SUNSET, TimeOfDayPhase.NIGHT)
        assert appearance.color == NIGHT_SUN
        assert (appearance.peak, appearance.mid, appearance.low) == (0.3, 0.18, 0.08)
        assert appearance.is_night is True

    def test_before_sunset(self, settings):
        """Should blend day into the sunset color before sunset."""
        appearance = resolve_sun_appearance(settings.sun_layer, 1065, SUNRISE, SUNSET, TimeOfDayPhase.DAY)
        assert appearance.color not in (DAY_SUN.lower(), SUNSET_SUN.lower())
        assert between(appearance.color, DAY_SUN, SUNSET_SUN)
        assert appearance.peak == 0.9

    def test_end_of_sunset_window(self, settings):
        """Should reach the night color and opacities at the end of the post-sunset window."""
        appearance = resolve_sun_appearance(settings.sun_layer, SUNSET + 45, SUNRISE, SUNSET, TimeOfDayPhase.EVENING)
        assert appearance.color == NIGHT_SUN.lower()
        assert appearance.peak == pytest.approx(0.3)
        assert appearance.low == pytest.approx(0.08)
        assert appearance.is_night is True

    def test_before_sunrise(self, settings):
        """Should blend night into the sunrise color, opacities night -> day."""
        appearance = resolve_sun_appearance(settings.sun_layer, 340, SUNRISE, SUNSET, TimeOfDayPhase.NIGHT)
        assert between(appearance.color, NIGHT_SUN, SUNRISE_SUN)
        assert 0.3 < appearance.peak < 0.9
        assert appearance.is_night is True

    def test_after_sunrise(self, settings):
        """Should blend the sunrise color into day after sunrise."""
        appearance = resolve_sun_appearance(settings.sun_layer, 380, SUNRISE, SUNSET, TimeOfDayPhase.MORNING)
        assert between(appearance.color, SUNRISE_SUN, DAY_SUN)
        assert appearance.is_night is False

    def test_no_solar_path(self, settings):
        """Should decide night from the hour-table phase without a solar path."""
        night = resolve_sun_appearance(settings.sun_layer, 720, None, None, TimeOfDayPhase.NIGHT)
        day = resolve_sun_appearance(settings.sun_layer, 720, None, None, TimeOfDayPhase.DAY)
        assert night.is_night is True
        assert night.color == NIGHT_SUN
        assert day.is_night is False
        assert day.color == DAY_SUN


class TestVignette:
    """Tests for the vertical vignette."""

    def test_default(self):
        """Should darken the top and bottom edges."""
        assert build_vertical_vignette(VerticalFadeSettings()) == (
            "linear-gradient(180deg, rgba(0, 0, 0, 0.22) 0%, rgba(0, 0, 0, 0.08) 6%, "
            "rgba(0, 0, 0, 0.08) 94%, rgba(0, 0, 0, 0.22) 100%)"
        )

    def test_clamps_opacity(self):
        """Should clamp opacities into [0, 1]."""
        vignette = build_vertical_vignette(VerticalFadeSettings(top=2, middle=-1))
        assert "rgba(0, 0, 0, 1) 0%" in vignette
        assert "rgba(0, 0, 0, 0) 6%" in vignette


class TestGlowBezierTransform:
    """Tests for the glow opacity silhouette."""

    def test_center_is_peak(self):
        """Should reach peak opacity at the glow center."""
        transform = glow_bezier_transform(0.8, 0.5, 0.2, 0.0, 1.0)
        assert transform(1.0, 0.5) == pytest.approx(0.8)

    def test_edges_are_low(self):
        """Should fall to low opacity at the glow edges."""
        transform = glow_bezier_transform(0.8, 0.5, 0.2, 0.0, 1.0)
        assert transform(1.0, 0.0) == pytest.approx(0.2)
        assert transform(1.0, 1.0) == pytest.approx(0.2)

    def test_quarter_point(self):
        """Should follow the quadratic Bezier of (low, mid, peak)."""
        transform = glow_bezier_transform(0.8, 0.5, 0.2, 0.0, 1.0)
        assert transform(1.0, 0.25) == pytest.approx(0.25 * 0.2 + 0.5 * 0.5 + 0.25 * 0.8)

    def test_zero_alpha_stays_zero(self):
        """Should keep transparent stops transparent."""
        transform = glow_bezier_transform(0.8, 0.5, 0.2, 0.0, 1.0)
        assert transform(0.0, 0.5) == 0.0


class TestIconVerticalProgress:
    """Tests for icon height."""

    @pytest.mark.parametrize("altitude,expected", [(90, 1.0), (45, 0.5), (0, 0.0), (-10, 0.0), (120, 1.0)])
    def test_from_altitude(self, altitude, expected):
        """Should map altitude/90 into [0, 1]."""
        assert icon_vertical_progress(altitude, 0.0) == pytest.approx(expected)

    def test_sine_fallback(self):
        """Should follow sin(pi * progress) without an altitude."""
        assert icon_vertical_progress(None, 0.5) == pytest.approx(1.0)
        assert icon_vertical_progress(None, 0.0) == pytest.approx(0.0)
        assert icon_vertical_progress(float("nan"), 0.25) == pytest.approx(0.7071, abs=1e-4)


class TestBuildSunOverlayState:
    """Tests for the full overlay."""

    def test_midday(self, settings):
        """Should build a screen-blended day glow centered on the sun."""
        state = overlay(settings, 720, 50.0)
        assert state.blend_mode == DAY_BLEND_MODE
        assert state.background.startswith("linear-gradient(90deg, rgba(255, 210, 0, 0) 0%, ")
        assert "linear-gradient(180deg, " in state.background
        assert state.icon.left_percent == 50.0
        assert state.icon.overlay_left_percent == pytest.approx(50.0)
        assert state.icon.opacity == pytest.approx(0.9 * 0.85)
        assert state.icon.color == DAY_SUN
        assert state.icon.top_percent == pytest.approx(14.0)

    def test_night(self, settings):
        """Should multiply-blend a dim night glow."""
        state = overlay(settings, 1300, 100.0, TimeOfDayPhase.NIGHT)
        assert state.blend_mode == NIGHT_BLEND_MODE
        assert state.icon.color == NIGHT_SUN
        assert state.icon.opacity == pytest.approx(0.3 * 0.85)

    @pytest.mark.parametrize("altitude,top", [(90, 14.0), (45, 50.0), (0, 86.0), (-10, 86.0)])
    def test_top_from_altitude(self, settings, altitude, top):
        """Should map altitude onto the [14, 86] band, inverted."""
        state = overlay(settings, 720, 50.0, altitude=altitude)
        assert state.icon.top_percent == pytest.approx(top)

    def test_top_from_sine(self, settings):
        """Should place the icon on the horizon at sunrise without an altitude."""
        state = overlay(settings, SUNRISE, 0.0)
        assert state.icon.top_percent == pytest.approx(86.0)
        assert state.icon.vertical_progress == pytest.approx(0.0)

    def test_overflow_sizing(self, settings):
        """Should size the overlay element from the overflow."""
        state = overlay(settings, 720, 50.0)
        assert state.width_percent == 200.0
        assert state.offset_percent == 50.0

        flush = DayStripSettings(sun_layer=SunLayerSettings(gradient_overflow_percent=0))
        state = overlay(flush, 720, 50.0)
        assert state.width_percent == 100.0
        assert state.offset_percent == 0.0

    def test_overlay_left_in_overlay_coordinates(self, settings):
        """Should place the glow center in overlay-element percent, not row percent."""
        flush = DayStripSettings(sun_layer=SunLayerSettings(gradient_overflow_percent=0))
        assert overlay(flush, 540, 25.0).icon.overlay_left_percent == pytest.approx(25.0)

        # default 50% overflow: overlay is 200% wide, so row 25% sits at (25 + 50) / 200
        state = overlay(settings, 540, 25.0)
        assert state.icon.left_percent == 25.0
        assert state.icon.overlay_left_percent == pytest.approx(37.5)

    def test_zero_width_glow(self):
        """Should render a transparent glow for a zero width."""
        narrow = DayStripSettings(sun_layer=SunLayerSettings(gradient_width_percent=0))
        state = overlay(narrow, 720, 50.0)
        assert state.background.startswith(
            "linear-gradient(90deg, rgba(255, 210, 0, 0) 0%, rgba(255, 210, 0, 0) 100%), "
            "linear-gradient(180deg, "
        )

    def test_icon_passthrough(self):
        """Should pass icon scale through and default a blank symbol."""
        custom = DayStripSettings(sun_layer=SunLayerSettings(icon=SunIconSettings(symbol="  ", scale=2.5)))
        state = overlay(custom, 720, 50.0)
        assert state.icon.symbol == DEFAULT_SUN_SYMBOL
        assert state.icon.scale == 2.5

    def test_icon_symbol(self):
        """Should use the configured symbol."""
        custom = DayStripSettings(sun_layer=SunLayerSettings(icon=SunIconSettings(symbol="☀")))
        assert overlay(custom, 720, 50.0).icon.symbol == "☀"

    def test_non_finite_scale(self):
        """Should default a non-finite icon scale."""
        custom = DayStripSettings(sun_layer=SunLayerSettings(icon=SunIconSettings(scale=float("nan"))))
        assert overlay(custom, 720, 50.0).icon.scale == 1.0

    def test_horizontal_position(self, settings):
        """Should track the unclamped sun position and treat non-finite as 0."""
        assert overlay(settings, 720, 120.0).icon.left_percent == 120.0
        assert overlay(settings, 720, float("nan")).icon.left_percent == 0.0

    def test_gradient_opacity(self):
        """Should scale every opacity by gradient_opacity."""
        dark = DayStripSettings(sun_layer=SunLayerSettings(gradient_opacity=0))
        assert overlay(dark, 720, 50.0).icon.opacity == 0.0

    def test_nan_gradient_opacity(self):
        """Should treat a NaN gradient_opacity as zero instead of raising."""
        dark = DayStripSettings(sun_layer={"gradientOpacity": float("nan")})
        state = overlay(dark, 720, 50.0)
        assert state.icon.opacity == 0.0
        assert "nan" not in state.background

    def test_nan_gradient_width(self):
        """Should render a transparent glow for a NaN width."""
        narrow = DayStripSettings(sun_layer=SunLayerSettings(gradient_width_percent=float("nan")))
        state = overlay(narrow, 720, 50.0)
        assert state.background.startswith(
            "linear-gradient(90deg, rgba(255, 210, 0, 0) 0%, rgba(255, 210, 0, 0) 100%), "
        )

    def test_no_solar_path(self, settings):
        """Should take day/night from the hour-table phase without a solar path."""
        night = overlay(settings, 720, 0.0, TimeOfDayPhase.NIGHT, sunrise=None, sunset=None)
        day = overlay(settings, 720, 0.0, TimeOfDayPhase.DAY, sunrise=None, sunset=None)
        assert night.blend_mode == NIGHT_BLEND_MODE
        assert day.blend_mode == DAY_BLEND_MODE

    def test_idempotent(self, settings):
        """Should rebuild identical state for identical input."""
        assert overlay(settings, 1065, 97.9, altitude=3.2) == overlay(settings, 1065, 97.9, altitude=3.2)

    def test_describe(self, settings):
        """Should summarize the overlay for logging."""
        summary = describe_overlay(overlay(settings, 720, 50.0))
        assert "left=50%" in summary
        assert "'screen, normal'" in summary
