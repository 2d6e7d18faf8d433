"""Hex/RGB/HSL conversions and perceptual color properties."""
from __future__ import annotations

import logging
import math
import re
from typing import List, NamedTuple

from .models import Undertone

logger = logging.getLogger(__name__)


HEX_PATTERN = re.compile(r"#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})", re.IGNORECASE)

# WCAG 2.x sRGB linearisation constants
SRGB_THRESHOLD = 0.03928
SRGB_GAMMA = 2.4
LUMINANCE_WEIGHTS = (0.2126, 0.7152, 0.0722)

LIGHT_BRIGHTNESS_THRESHOLD = 128.0


class RGB(NamedTuple):
    r: int
    g: int
    b: int


class HSL(NamedTuple):
    h: float
    s: float
    l: float  # noqa: E741


BLACK = RGB(0, 0, 0)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (``2.5 -> 3``)."""

    return int(math.floor(value + 0.5))


def parse_hex(hex_color: str) -> RGB:
    """Strictly parse ``#rrggbb`` (``#`` optional, any case).

    Raises
    ------
    ValueError
        If ``hex_color`` is not a six-digit hex string.
    """

    match = HEX_PATTERN.fullmatch(hex_color) if isinstance(hex_color, str) else None
    if match is None:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    return RGB(*(int(group, 16) for group in match.groups()))


def is_valid_hex(hex_color: str) -> bool:
    try:
        parse_hex(hex_color)
    except ValueError:
        return False
    return True


def hex_to_rgb(hex_color: str) -> RGB:
    """Parse a hex color, falling back to black when it does not match."""

    try:
        return parse_hex(hex_color)
    except ValueError:
        logger.debug("Unparseable hex color %r, using black", hex_color)
        return BLACK


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    r_n, g_n, b_n = r / 255.0, g / 255.0, b / 255.0
    high = max(r_n, g_n, b_n)
    low = min(r_n, g_n, b_n)
    lightness = (high + low) / 2.0

    if high == low:
        # achromatic
        return HSL(0.0, 0.0, lightness * 100.0)

    delta = high - low
    if lightness > 0.5:
        saturation = delta / (2.0 - high - low)
    else:
        saturation = delta / (high + low)

    if high == r_n:
        hue = (g_n - b_n) / delta + (6.0 if g_n < b_n else 0.0)
    elif high == g_n:
        hue = (b_n - r_n) / delta + 2.0
    else:
        hue = (r_n - g_n) / delta + 4.0
    hue /= 6.0

    return HSL(hue * 360.0, saturation * 100.0, lightness * 100.0)


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:  # noqa: E741
    h_n, s_n, l_n = h / 360.0, s / 100.0, l / 100.0

    if s_n == 0:
        r = g = b = l_n
    else:
        q = l_n * (1 + s_n) if l_n < 0.5 else l_n + s_n - l_n * s_n
        p = 2 * l_n - q
        r = _hue_to_channel(p, q, h_n + 1 / 3)
        g = _hue_to_channel(p, q, h_n)
        b = _hue_to_channel(p, q, h_n - 1 / 3)

    return RGB(round_half_up(r * 255), round_half_up(g * 255), round_half_up(b * 255))


def hsl_to_hex(h: float, s: float, l: float) -> str:  # noqa: E741
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


def hex_to_hsl(hex_color: str) -> HSL:
    return rgb_to_hsl(*hex_to_rgb(hex_color))


def get_color_temperature(hex_color: str) -> Undertone:
    """Classify a color as warm, cool or neutral by its hue band.

    Warm covers reds through yellows ([0, 60] and [300, 360]), cool covers
    greens through purples ([120, 300]) and the remaining (60, 120) band is
    neutral.
    """

    hue = hex_to_hsl(hex_color).h
    if 0 <= hue <= 60 or 300 <= hue <= 360:
        return Undertone.WARM
    if 120 <= hue <= 300:
        return Undertone.COOL
    return Undertone.NEUTRAL


def get_complementary_color(hex_color: str) -> str:
    hsl = hex_to_hsl(hex_color)
    return hsl_to_hex((hsl.h + 180) % 360, hsl.s, hsl.l)


def get_analogous_colors(hex_color: str) -> List[str]:
    hsl = hex_to_hsl(hex_color)
    return [
        hsl_to_hex((hsl.h + 30) % 360, hsl.s, hsl.l),
        hsl_to_hex((hsl.h - 30) % 360, hsl.s, hsl.l),
    ]


def _linearise(channel: int) -> float:
    c = channel / 255.0
    if c <= SRGB_THRESHOLD:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** SRGB_GAMMA


def relative_luminance(hex_color: str) -> float:
    rgb = hex_to_rgb(hex_color)
    w_r, w_g, w_b = LUMINANCE_WEIGHTS
    return w_r * _linearise(rgb.r) + w_g * _linearise(rgb.g) + w_b * _linearise(rgb.b)


def get_contrast_ratio(hex1: str, hex2: str) -> float:
    """WCAG contrast ratio between two colors, from 1.0 up to 21.0."""

    lum1 = relative_luminance(hex1)
    lum2 = relative_luminance(hex2)
    brightest = max(lum1, lum2)
    darkest = min(lum1, lum2)
    return (brightest + 0.05) / (darkest + 0.05)


def is_light_color(hex_color: str) -> bool:
    rgb = hex_to_rgb(hex_color)
    brightness = (rgb.r * 299 + rgb.g * 587 + rgb.b * 114) / 1000
    return brightness > LIGHT_BRIGHTNESS_THRESHOLD


def generate_color_palette(base_color: str, count: int = 5) -> List[str]:
    """Sweep lightness from 0 to 100 in ``count`` steps at the base hue/saturation.

    A single-sample palette is just the (canonicalised) base color.
    """

    if count < 1:
        raise ValueError(f"Palette size must be >= 1, got {count}")

    rgb = hex_to_rgb(base_color)
    if count == 1:
        return [rgb_to_hex(*rgb)]

    hsl = rgb_to_hsl(*rgb)
    step = 100.0 / (count - 1)
    return [hsl_to_hex(hsl.h, hsl.s, step * i) for i in range(count)]


__all__ = [
    "BLACK",
    "HSL",
    "RGB",
    "generate_color_palette",
    "get_analogous_colors",
    "get_color_temperature",
    "get_complementary_color",
    "get_contrast_ratio",
    "hex_to_hsl",
    "hex_to_rgb",
    "hsl_to_hex",
    "hsl_to_rgb",
    "is_light_color",
    "is_valid_hex",
    "parse_hex",
    "relative_luminance",
    "rgb_to_hex",
    "rgb_to_hsl",
    "round_half_up",
]
