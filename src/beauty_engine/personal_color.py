"""Skin tone classification (undertone, depth, season) from a skin hex color."""
from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Mapping, Tuple

import numpy as np
from skimage import color as skcolor

from .beauty_scoring import rank_colors_by_compatibility
from .color_math import get_analogous_colors, hex_to_rgb, rgb_to_hex
from .models import ColorAnalysis, RecommendedColors, Season, SkinTone, Undertone

logger = logging.getLogger(__name__)


THRESHOLDS: Dict[str, Dict[str, float]] = {
    "ita": {"warm": 28.0, "cool": 10.0},
    "b": {"neutral_band": 2.0},
    "L": {"season_split": 55.0},
}

SEASON_PALETTES: Dict[Season, Dict[str, List[str]]] = {
    Season.SPRING: {
        "eyeshadow": ["#F8C2A3", "#F5E6A8", "#D4A373", "#A3C585"],
        "lipstick": ["#FF7F50", "#F88379", "#E9967A"],
        "blush": ["#FFB7B2", "#F7DAD9", "#FBA58C"],
    },
    Season.SUMMER: {
        "eyeshadow": ["#A8C8E8", "#B6A4C8", "#9EC3B1", "#C8C8D0"],
        "lipstick": ["#D8739F", "#C7708B", "#E9BFD1"],
        "blush": ["#E9BFD1", "#F4C2C2", "#D8A7B1"],
    },
    Season.AUTUMN: {
        "eyeshadow": ["#B46A55", "#865640", "#D39F6B", "#6B8E23"],
        "lipstick": ["#A0522D", "#B7410E", "#8B3A3A"],
        "blush": ["#D2691E", "#C97B63", "#B46A55"],
    },
    Season.WINTER: {
        "eyeshadow": ["#5B6DCE", "#36454F", "#6ED0D4", "#B6CAE3"],
        "lipstick": ["#B0003A", "#8B008B", "#DC143C"],
        "blush": ["#C21E56", "#DE5D83", "#B3446C"],
    },
}

# (name, hex, depth) anchors of the 1..10 depth scale
SKIN_TONE_PALETTE: Tuple[Tuple[str, str, int], ...] = (
    ("Very Fair", "#FDE7D6", 1),
    ("Fair", "#F7E7CE", 2),
    ("Light", "#F0D5A8", 3),
    ("Light Medium", "#E8C4A0", 4),
    ("Medium", "#D4A574", 5),
    ("Medium Deep", "#C19A6B", 6),
    ("Deep", "#A67C5A", 7),
    ("Dark", "#8B4513", 8),
    ("Very Dark", "#5D4037", 9),
    ("Deepest", "#3E2723", 10),
)

OPPOSITE_SEASON: Mapping[Season, Season] = {
    Season.SPRING: Season.WINTER,
    Season.WINTER: Season.SPRING,
    Season.SUMMER: Season.AUTUMN,
    Season.AUTUMN: Season.SUMMER,
}


def _to_lab(hex_colors: Iterable[str]) -> np.ndarray:
    rgb = np.asarray([hex_to_rgb(h) for h in hex_colors], dtype=np.float64) / 255.0
    return skcolor.rgb2lab(rgb.reshape(1, -1, 3))[0]


_PALETTE_LAB = _to_lab(hex_color for _, hex_color, _ in SKIN_TONE_PALETTE)


def skin_lab_metrics(hex_color: str) -> Dict[str, float]:
    """CIELAB (D65) values and Individual Typology Angle of a skin color."""

    l_star, a_star, b_star = _to_lab([hex_color])[0]
    ita = math.degrees(math.atan((l_star - 50.0) / (b_star + 1e-6)))
    metrics = {
        "L": round(float(l_star), 2),
        "a": round(float(a_star), 2),
        "b": round(float(b_star), 2),
        "ITA": round(float(ita), 2),
    }
    logger.debug("Skin %s LAB metrics: %s", hex_color, metrics)
    return metrics


def season_for(undertone: Undertone, light: bool) -> Season:
    # neutral skin borrows the softer, muted seasons
    if undertone is Undertone.WARM:
        return Season.SPRING if light else Season.AUTUMN
    if undertone is Undertone.COOL:
        return Season.SUMMER if light else Season.WINTER
    return Season.SUMMER if light else Season.AUTUMN


def classify_from_metrics(metrics: Mapping[str, float]) -> Tuple[Season, Undertone]:
    """Return season and undertone derived from LAB metrics."""

    ita = metrics["ITA"]
    l_star = metrics["L"]
    b_star = metrics["b"]

    if ita >= THRESHOLDS["ita"]["warm"]:
        undertone = Undertone.WARM
    elif ita <= THRESHOLDS["ita"]["cool"]:
        undertone = Undertone.COOL
    elif abs(b_star) < THRESHOLDS["b"]["neutral_band"]:
        undertone = Undertone.NEUTRAL
    else:
        undertone = Undertone.WARM if b_star >= 0 else Undertone.COOL

    season = season_for(undertone, l_star >= THRESHOLDS["L"]["season_split"])
    return season, undertone


def estimate_depth(hex_color: str) -> int:
    """Depth of the ``SKIN_TONE_PALETTE`` anchor nearest to ``hex_color`` (CIEDE2000)."""

    lab = np.broadcast_to(_to_lab([hex_color]), _PALETTE_LAB.shape)
    distances = skcolor.deltaE_ciede2000(lab, _PALETTE_LAB)
    return SKIN_TONE_PALETTE[int(np.argmin(distances))][2]


def analyze_skin_tone(hex_color: str) -> SkinTone:
    metrics = skin_lab_metrics(hex_color)
    season, undertone = classify_from_metrics(metrics)
    return SkinTone(
        hex=rgb_to_hex(*hex_to_rgb(hex_color)),
        undertone=undertone,
        depth=estimate_depth(hex_color),
        season=season,
    )


def _ranked(skin_tone: SkinTone, colors: Iterable[str]) -> List[str]:
    return [hex_color for hex_color, _ in rank_colors_by_compatibility(skin_tone, colors)]


def build_color_analysis(
    skin_tone: SkinTone, dominant_colors: Iterable[str] = ()
) -> ColorAnalysis:
    """Season palette for ``skin_tone`` with each category ranked by compatibility."""

    season = skin_tone.season or season_for(skin_tone.undertone, skin_tone.depth <= 5)
    palette = SEASON_PALETTES[season]
    opposite = SEASON_PALETTES[OPPOSITE_SEASON[season]]
    base = rgb_to_hex(*hex_to_rgb(skin_tone.hex))

    return ColorAnalysis(
        dominant_colors=list(dominant_colors),
        undertone=skin_tone.undertone,
        season=season,
        recommended_colors=RecommendedColors(
            eyeshadow=_ranked(skin_tone, palette["eyeshadow"]),
            lipstick=_ranked(skin_tone, palette["lipstick"]),
            blush=_ranked(skin_tone, palette["blush"]),
            foundation=[base, *get_analogous_colors(base)],
        ),
        colors_to_avoid=opposite["lipstick"] + opposite["eyeshadow"],
    )


__all__ = [
    "OPPOSITE_SEASON",
    "SEASON_PALETTES",
    "SKIN_TONE_PALETTE",
    "THRESHOLDS",
    "analyze_skin_tone",
    "build_color_analysis",
    "classify_from_metrics",
    "estimate_depth",
    "season_for",
    "skin_lab_metrics",
]
