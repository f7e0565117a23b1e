"""Shared pytest fixtures for all tests."""

import pytest

from daystrip.settings import (
    DEFAULT_SETTINGS,
    DEFAULT_TIME_BASE_COLORS,
    DayStripSettings,
    SunTransitions,
    TransitionWindow,
)


@pytest.fixture
def settings() -> DayStripSettings:
    """Default strip settings."""
    return DEFAULT_SETTINGS


@pytest.fixture
def base_colors() -> dict[str, str]:
    """Default phase base colors as a plain dict."""
    return dict(DEFAULT_TIME_BASE_COLORS)


@pytest.fixture
def no_windows() -> SunTransitions:
    """Zero-width transition windows (instant phase switch)."""
    return SunTransitions()


@pytest.fixture
def half_hour_windows() -> SunTransitions:
    """30 minute windows on both sides of sunrise and sunset."""
    return SunTransitions(
        sunrise=TransitionWindow(before=30, after=30),
        sunset=TransitionWindow(before=30, after=30),
    )
