"""
Solar schedule helpers: sunrise/sunset minutes and local clock time.

Sunrise/sunset can come from a weather provider's ISO strings or be
computed astronomically with Astral.
"""

import math
import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from astral import LocationInfo
from astral.sun import sun
from pydantic import BaseModel, ConfigDict

from daystrip.day_geometry import compute_day_length_fraction
from daystrip.lighting_math import clamp, is_finite_number, normalize
from daystrip.logger import logger
from daystrip.solar import parse_utc_offset, timezone_offset_for_zone
from daystrip.time_phase import has_solar_path

_ISO_CLOCK = re.compile(r"T(\d{2}):(\d{2})")

MIN_UTC_OFFSET = -12 * 60
MAX_UTC_OFFSET = 14 * 60


class SolarGeometry(BaseModel):
    """Local sunrise/sunset in minutes past midnight (None when unknown)."""
    model_config = ConfigDict(frozen=True)

    sunrise_minutes: Optional[float] = None
    sunset_minutes: Optional[float] = None

    @property
    def has_solar_path(self) -> bool:
        return has_solar_path(self.sunrise_minutes, self.sunset_minutes)

    @property
    def day_length_fraction(self) -> float:
        return compute_day_length_fraction(self.sunrise_minutes, self.sunset_minutes)


def parse_hm_from_iso_local(text: Optional[str]) -> Optional[int]:
    """Minutes past midnight of the 'THH:MM' part of an ISO-like local timestamp."""
    if not text or not isinstance(text, str):
        return None
    match = _ISO_CLOCK.search(text)
    if not match:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_of_day(when: datetime) -> int:
    return when.hour * 60 + when.minute


def clamp_offset_by_longitude(longitude: float) -> int:
    """Rough UTC offset from longitude (4 minutes per degree), within UTC-12..UTC+14."""
    offset = math.floor(longitude * 4 + 0.5)
    return int(clamp(offset, MIN_UTC_OFFSET, MAX_UTC_OFFSET))


def resolve_offset_minutes(
    when: datetime,
    timezone_name: Optional[str] = None,
    offset_minutes: Optional[float] = None,
    longitude: float = 0.0,
) -> int:
    """
    UTC offset for a location.

    Preference order: IANA zone name (or a "UTC+5:30" style label),
    explicit offset, longitude estimate.
    """
    if timezone_name:
        zone_offset = timezone_offset_for_zone(when, timezone_name)
        if zone_offset is None:
            zone_offset = parse_utc_offset(timezone_name)
        if zone_offset is not None:
            return zone_offset
        logger.warning(f"Falling back from unknown time zone {timezone_name!r}")

    if is_finite_number(offset_minutes):
        return int(offset_minutes)

    return clamp_offset_by_longitude(longitude if is_finite_number(longitude) else 0.0)


def local_time(when: datetime, offset_minutes: float) -> datetime:
    """Naive local wall-clock time for an instant (naive input is taken as UTC)."""
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    utc = when.astimezone(timezone.utc).replace(tzinfo=None)
    return utc + timedelta(minutes=offset_minutes)


def minutes_of_day_with_offset(when: datetime, offset_minutes: float) -> int:
    return minutes_of_day(local_time(when, offset_minutes))


def sun_position_percent(
    sunrise_minutes: Optional[float],
    sunset_minutes: Optional[float],
    now_minutes: float,
) -> float:
    """
    Progress of the sun from sunrise (0) to sunset (100).

    Clamped outside the day; 0 when there is no solar path.
    """
    if not has_solar_path(sunrise_minutes, sunset_minutes):
        return 0.0
    if now_minutes <= sunrise_minutes:
        return 0.0
    if now_minutes >= sunset_minutes:
        return 100.0
    return normalize(now_minutes, sunrise_minutes, sunset_minutes) * 100


def get_sun_times(
    latitude: float,
    longitude: float,
    on_date: Optional[date] = None,
    offset_minutes: float = 0,
) -> SolarGeometry:
    """
    Astronomical sunrise/sunset for a location using Astral.

    Args:
        latitude: Degrees north
        longitude: Degrees east
        on_date: Local calendar date (default: today at the location)
        offset_minutes: Local UTC offset in minutes

    Returns:
        SolarGeometry in local minutes past midnight. Polar day/night
        (no sunrise or sunset) returns an empty SolarGeometry.
    """
    tz = timezone(timedelta(minutes=offset_minutes))
    if on_date is None:
        on_date = datetime.now(tz).date()

    location = LocationInfo(latitude=latitude, longitude=longitude)
    try:
        s = sun(location.observer, date=on_date, tzinfo=tz)
    except ValueError as e:
        logger.warning(f"No sunrise/sunset at lat={latitude}, lon={longitude} on {on_date}: {e}")
        return SolarGeometry()

    return SolarGeometry(
        sunrise_minutes=minutes_of_day(s["sunrise"]),
        sunset_minutes=minutes_of_day(s["sunset"]),
    )
