"""
Time-of-day phase resolution for the strip's base color.

Four cyclic phases (morning -> day -> evening -> night -> morning) with
two transition windows anchored at sunrise and sunset. Inside a window
the base colors are cosine-blended in linear light; outside, the color is
the solid phase color.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from daystrip.color import ensure_hex, lerp_color_gamma
from daystrip.day_geometry import MINUTES_IN_DAY
from daystrip.lighting_math import is_finite_number, window_progress, wrap
from daystrip.settings import DEFAULT_TIME_BASE_COLORS, SunTransitions


class TimeOfDayPhase(str, Enum):
    """Time-of-day bucket."""
    MORNING = "morning"
    DAY = "day"
    EVENING = "evening"
    NIGHT = "night"

    def next(self) -> "TimeOfDayPhase":
        """Cyclic successor (night wraps to morning)."""
        members = list(TimeOfDayPhase)
        return members[(members.index(self) + 1) % len(members)]


@dataclass(frozen=True)
class PhaseColor:
    """
    Resolved base color.

    phase is the dominant phase, next_phase the phase the active transition
    moves toward (equal to phase outside transitions) and blend the eased
    progress of that transition (0 outside transitions).
    """
    color: str
    phase: TimeOfDayPhase
    next_phase: TimeOfDayPhase
    blend: float


def phase_for_hour(hour: int) -> TimeOfDayPhase:
    """Fixed clock-hour table used when no solar path is available."""
    if 6 <= hour < 12:
        return TimeOfDayPhase.MORNING
    if 12 <= hour < 18:
        return TimeOfDayPhase.DAY
    if 18 <= hour < 22:
        return TimeOfDayPhase.EVENING
    return TimeOfDayPhase.NIGHT


def has_solar_path(sunrise_minutes: Optional[float], sunset_minutes: Optional[float]) -> bool:
    """True when both events are known and sunset comes after sunrise."""
    if not is_finite_number(sunrise_minutes) or not is_finite_number(sunset_minutes):
        return False
    return sunset_minutes > sunrise_minutes


def base_color_for(base_colors: Optional[Mapping[str, str]], phase: TimeOfDayPhase) -> str:
    """Validated base color of a phase (built-in default when missing or malformed)."""
    fallback = DEFAULT_TIME_BASE_COLORS[phase.value]
    if not base_colors:
        return fallback
    return ensure_hex(base_colors.get(phase.value, fallback), fallback)


def _solid(base_colors, phase: TimeOfDayPhase) -> PhaseColor:
    return PhaseColor(color=base_color_for(base_colors, phase), phase=phase, next_phase=phase, blend=0.0)


def _blend(base_colors, earlier: TimeOfDayPhase, later: TimeOfDayPhase, eased: float) -> PhaseColor:
    color = lerp_color_gamma(base_color_for(base_colors, earlier), base_color_for(base_colors, later), eased)
    dominant = earlier if eased < 0.5 else later
    return PhaseColor(color=color, phase=dominant, next_phase=later, blend=eased)


def _hour_of(now_minutes: float) -> int:
    if not is_finite_number(now_minutes):
        return 0
    return math.floor(now_minutes / 60)


def resolve_time_phase_color(
    base_colors: Optional[Mapping[str, str]],
    transitions: Optional[SunTransitions],
    sunrise_minutes: Optional[float],
    sunset_minutes: Optional[float],
    now_minutes: float,
) -> PhaseColor:
    """
    Resolve the instantaneous base color and phase.

    Args:
        base_colors: Phase name -> hex color
        transitions: Sunrise/sunset windows in minutes (None = no windows)
        sunrise_minutes: Local sunrise, minutes past midnight
        sunset_minutes: Local sunset, minutes past midnight
        now_minutes: Local clock time, minutes past midnight

    Returns:
        PhaseColor

    Window priority:
        1. sunset .. sunset+after       evening -> night
        2. later than that              night
        3. sunset-before .. sunset      day -> evening
        4. sunrise-before .. sunrise    night -> morning
        5. sunrise .. sunrise+after     morning -> day
        6. otherwise                    day

    Times earlier than the sunrise window fall through to day. The hour
    table (time_of_day) and the sun overlay carry the night reading.

    A window of 0 minutes never matches its branch, so the phase flips
    instantly at the event.
    """
    if not has_solar_path(sunrise_minutes, sunset_minutes):
        return _solid(base_colors, phase_for_hour(_hour_of(now_minutes)))

    if transitions is None:
        transitions = SunTransitions()

    sunrise_before = max(0.0, transitions.sunrise.before)
    sunrise_after = max(0.0, transitions.sunrise.after)
    sunset_before = max(0.0, transitions.sunset.before)
    sunset_after = max(0.0, transitions.sunset.after)

    now = now_minutes

    if sunset_after > 0 and sunset_minutes <= now <= sunset_minutes + sunset_after:
        eased = window_progress(now - sunset_minutes, sunset_after)
        return _blend(base_colors, TimeOfDayPhase.EVENING, TimeOfDayPhase.NIGHT, eased)

    if now >= sunset_minutes:
        return _solid(base_colors, TimeOfDayPhase.NIGHT)

    if sunset_before > 0 and sunset_minutes - sunset_before <= now < sunset_minutes:
        eased = window_progress(now - (sunset_minutes - sunset_before), sunset_before)
        return _blend(base_colors, TimeOfDayPhase.DAY, TimeOfDayPhase.EVENING, eased)

    before_sunrise = wrap(sunrise_minutes - now, 0, MINUTES_IN_DAY)
    if sunrise_before > 0 and 0 < before_sunrise <= sunrise_before:
        eased = window_progress(sunrise_before - before_sunrise, sunrise_before)
        return _blend(base_colors, TimeOfDayPhase.NIGHT, TimeOfDayPhase.MORNING, eased)

    if sunrise_after > 0 and sunrise_minutes <= now <= sunrise_minutes + sunrise_after:
        eased = window_progress(now - sunrise_minutes, sunrise_after)
        return _blend(base_colors, TimeOfDayPhase.MORNING, TimeOfDayPhase.DAY, eased)

    return _solid(base_colors, TimeOfDayPhase.DAY)


def time_color_by_sun(
    base_colors: Optional[Mapping[str, str]],
    sunrise_minutes: Optional[float],
    sunset_minutes: Optional[float],
    now_minutes: float,
) -> str:
    """
    Continuous palette across the whole day.

    Anchors night at midnight, morning at sunrise, day at solar midday,
    evening at sunset and night again at midnight, interpolating in linear
    light between neighbours. Without a solar path the hour table color
    is used.
    """
    if not has_solar_path(sunrise_minutes, sunset_minutes):
        return base_color_for(base_colors, phase_for_hour(_hour_of(now_minutes)))

    midday = math.floor((sunrise_minutes + sunset_minutes) / 2)
    anchors = [
        (0, TimeOfDayPhase.NIGHT),
        (sunrise_minutes, TimeOfDayPhase.MORNING),
        (midday, TimeOfDayPhase.DAY),
        (sunset_minutes, TimeOfDayPhase.EVENING),
        (MINUTES_IN_DAY, TimeOfDayPhase.NIGHT),
    ]

    for (start, start_phase), (end, end_phase) in zip(anchors, anchors[1:]):
        if start <= now_minutes <= end:
            factor = (now_minutes - start) / max(1, end - start)
            return lerp_color_gamma(
                base_color_for(base_colors, start_phase),
                base_color_for(base_colors, end_phase),
                factor,
            )

    return base_color_for(base_colors, TimeOfDayPhase.NIGHT)
