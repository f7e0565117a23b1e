"""
Color space helpers.

- hex <-> RGB parsing and formatting
- Gamma-correct (linear light) interpolation
- CSS rgba() formatting

Nothing in here raises on bad input: malformed colors resolve to a
documented fallback so a render pass never fails on a typo in settings.
"""

import math
import re

from daystrip.lighting_math import clamp01
from daystrip.logger import logger

RGB = tuple[int, int, int]

_HEX_PATTERN = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)
_HEX_DIGITS = re.compile(r"^[0-9a-f]+$", re.IGNORECASE)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_channel(value: float) -> int:
    """Round and clamp a channel value to 0-255."""
    return min(255, max(0, _round_half_up(value)))


def format_number(value: float, digits: int = 4) -> str:
    """Format a number compactly ("0.5", "1", "0.1235") for CSS output."""
    rounded = round(float(value), digits)
    if rounded == 0:
        return "0"
    return f"{rounded:g}"


# ============================================================================
# Parsing / Formatting
# ============================================================================

def hex_to_rgb(hex_color: str) -> RGB:
    """
    Parse a hex color string into an (r, g, b) tuple.

    Accepts 3, 6 or 8 hex digits with or without a leading '#'.
    The alpha byte of 8-digit colors is ignored.

    Returns:
        (r, g, b) with each channel in 0-255, or (0, 0, 0) for malformed input
    """
    if not isinstance(hex_color, str):
        return (0, 0, 0)

    cleaned = hex_color.strip()
    if cleaned.startswith("#"):
        cleaned = cleaned[1:]

    if len(cleaned) == 3:
        cleaned = "".join(char * 2 for char in cleaned)

    if len(cleaned) not in (6, 8) or not _HEX_DIGITS.match(cleaned):
        return (0, 0, 0)

    value = int(cleaned[:6], 16)
    return ((value >> 16) & 255, (value >> 8) & 255, value & 255)


def rgb_to_hex(rgb: tuple[float, float, float]) -> str:
    """Format an (r, g, b) triple as '#rrggbb' (channels rounded and clamped)."""
    r, g, b = rgb
    return f"#{clamp_channel(r):02x}{clamp_channel(g):02x}{clamp_channel(b):02x}"


def rgba(hex_color: str, alpha: float) -> str:
    """Format a color as a CSS rgba() string with alpha clamped to [0, 1]."""
    r, g, b = hex_to_rgb(hex_color)
    return f"rgba({r}, {g}, {b}, {format_number(clamp01(alpha))})"


def ensure_hex(color: str, fallback: str = "#000000") -> str:
    """
    Validate a hex color string.

    Returns:
        The trimmed color if it is '#' followed by 3, 6 or 8 hex digits,
        otherwise fallback
    """
    if not isinstance(color, str) or not color:
        return fallback

    cleaned = color.strip()
    if _HEX_PATTERN.match(cleaned):
        return cleaned

    logger.debug(f"Invalid color {color!r}, using fallback {fallback}")
    return fallback


# ============================================================================
# Interpolation
# ============================================================================

def srgb_to_linear(channel: float) -> float:
    """Convert an 8-bit sRGB channel to linear light in [0, 1]."""
    normalized = channel / 255
    if normalized <= 0.04045:
        return normalized / 12.92
    return ((normalized + 0.055) / 1.055) ** 2.4


def linear_to_srgb(value: float) -> float:
    """Convert linear light in [0, 1] back to an (unrounded) 8-bit sRGB channel."""
    clamped = clamp01(value)
    if clamped <= 0.0031308:
        return clamped * 12.92 * 255
    return (1.055 * clamped ** (1 / 2.4) - 0.055) * 255


def lerp_color_gamma(color_a: str, color_b: str, t: float) -> str:
    """
    Interpolate two hex colors in linear light.

    Interpolating encoded sRGB values directly gives muddy mid-tones for
    sunrise/sunset transitions, so both ends are linearized first.

    Args:
        color_a: Start color (t=0)
        color_b: End color (t=1)
        t: Interpolation factor, clamped to [0, 1]

    Returns:
        Interpolated color as '#rrggbb'
    """
    factor = clamp01(t)
    a = hex_to_rgb(color_a)
    b = hex_to_rgb(color_b)

    channels = []
    for channel_a, channel_b in zip(a, b):
        linear_a = srgb_to_linear(channel_a)
        linear_b = srgb_to_linear(channel_b)
        channels.append(linear_to_srgb(linear_a + (linear_b - linear_a) * factor))

    return rgb_to_hex(tuple(channels))


def mix_colors(color_a: str, color_b: str, t: float) -> str:
    """Interpolate two hex colors directly in sRGB space."""
    factor = clamp01(t)
    a = hex_to_rgb(color_a)
    b = hex_to_rgb(color_b)
    return rgb_to_hex(tuple(x + (y - x) * factor for x, y in zip(a, b)))
