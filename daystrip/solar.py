"""
Solar altitude approximation (NOAA low-precision series).

Accurate to roughly one degree outside polar latitudes, which is plenty
for placing the sun icon on the strip.
"""

import math
import re
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from daystrip.day_geometry import MINUTES_IN_DAY
from daystrip.lighting_math import clamp, is_finite_number
from daystrip.logger import logger

_OFFSET_PATTERN = re.compile(r"(UTC|GMT)?\s*([+-])(\d{1,2})(?::?(\d{2}))?")
_MINUS_SIGNS = str.maketrans({"−": "-", "–": "-", "—": "-"})


def day_of_year(when: datetime) -> int:
    """1-based day of year."""
    return when.timetuple().tm_yday


def _minutes_past_midnight(when: datetime) -> float:
    return (
        when.hour * 60
        + when.minute
        + when.second / 60
        + when.microsecond / 60_000_000
    )


def compute_solar_altitude(
    when: datetime,
    latitude: float,
    longitude: float,
    timezone_offset_minutes: float,
) -> Optional[float]:
    """
    Sun altitude above the horizon in degrees.

    Args:
        when: Local wall-clock time at the location (tzinfo is ignored)
        latitude: Degrees north, clamped to [-90, 90]
        longitude: Degrees east
        timezone_offset_minutes: Local offset from UTC in minutes

    Returns:
        Altitude in degrees (negative below the horizon), or None when an
        input or the trigonometric result is not finite

    Algorithm:
        1. Fractional year from day of year and local time
        2. Equation of time and declination from Fourier series
        3. True solar time -> hour angle
        4. asin(sin(lat)sin(decl) + cos(lat)cos(decl)cos(hour angle))
    """
    if not (
        is_finite_number(latitude)
        and is_finite_number(longitude)
        and is_finite_number(timezone_offset_minutes)
    ):
        logger.debug("Solar altitude skipped: non-finite location or offset")
        return None

    lat_rad = math.radians(clamp(latitude, -90.0, 90.0))
    minutes_local = _minutes_past_midnight(when)

    gamma = (2 * math.pi / 365) * (day_of_year(when) - 1 + (minutes_local / 60 - 12) / 24)

    equation_of_time = 229.18 * (
        0.000075
        + 0.001868 * math.cos(gamma)
        - 0.032077 * math.sin(gamma)
        - 0.014615 * math.cos(2 * gamma)
        - 0.040849 * math.sin(2 * gamma)
    )

    declination = (
        0.006918
        - 0.399912 * math.cos(gamma)
        + 0.070257 * math.sin(gamma)
        - 0.006758 * math.cos(2 * gamma)
        + 0.000907 * math.sin(2 * gamma)
        - 0.002697 * math.cos(3 * gamma)
        + 0.00148 * math.sin(3 * gamma)
    )

    time_offset = equation_of_time + 4 * longitude - timezone_offset_minutes
    true_solar_time = (minutes_local + time_offset) % MINUTES_IN_DAY

    hour_angle = true_solar_time / 4 - 180

    sin_altitude = (
        math.sin(lat_rad) * math.sin(declination)
        + math.cos(lat_rad) * math.cos(declination) * math.cos(math.radians(hour_angle))
    )

    try:
        altitude = math.asin(sin_altitude)
    except ValueError:
        # Rounding near the poles can push the sine a hair outside [-1, 1]
        logger.debug(f"Solar altitude undefined for sin={sin_altitude}")
        return None

    if not math.isfinite(altitude):
        return None

    return math.degrees(altitude)


# ============================================================================
# UTC Offsets
# ============================================================================

def parse_utc_offset(text: str) -> Optional[int]:
    """
    Parse an offset label such as "UTC+5:30", "GMT-3" or "+0100" to minutes.

    Bare "UTC"/"GMT" is 0. Returns None when no offset can be read.
    """
    if not isinstance(text, str):
        return None

    normalized = text.translate(_MINUS_SIGNS)
    match = _OFFSET_PATTERN.search(normalized)
    if match:
        sign = -1 if match.group(2) == "-" else 1
        hours = int(match.group(3))
        minutes = int(match.group(4)) if match.group(4) else 0
        return sign * (hours * 60 + minutes)

    if "UTC" in normalized or "GMT" in normalized:
        return 0

    return None


def timezone_offset_for_zone(when: datetime, zone_name: str) -> Optional[int]:
    """
    UTC offset in minutes of an IANA zone at a given instant.

    Naive datetimes are taken as UTC. Unknown zones return None.
    """
    try:
        zone = ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError, TypeError):
        logger.debug(f"Unknown time zone {zone_name!r}")
        return None

    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)

    offset = when.astimezone(zone).utcoffset()
    if offset is None:
        return None
    return int(offset.total_seconds() // 60)
