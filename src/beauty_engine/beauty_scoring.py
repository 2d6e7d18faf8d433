"""Skin/face scores, skin-type classification and recommendation tables."""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .color_math import HSL, hex_to_hsl, round_half_up
from .models import (
    BeautyAnalysis,
    ColorAnalysis,
    ConcernType,
    FaceGeometry,
    FaceProportions,
    FaceShape,
    SkinMetrics,
    SkinTone,
    SkinType,
    Undertone,
)

logger = logging.getLogger(__name__)


SKIN_HEALTH_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "clarity": 0.25,
        "hydration": 0.20,
        "evenness": 0.20,
        "texture": 0.15,
        "firmness": 0.10,
        # inverted before weighting: lower is better
        "oiliness": 0.05,
        "sensitivity": 0.05,
    }
)
INVERTED_METRICS = frozenset({"oiliness", "sensitivity"})

GOLDEN_RATIO = 1.618
SYMMETRY_WEIGHT = 0.4
PROPORTION_WEIGHT = 0.6

# ratio name -> (ideal value, penalty per unit of deviation)
IDEAL_RATIOS: Mapping[str, Tuple[float, float]] = MappingProxyType(
    {
        "face_length_to_width": (GOLDEN_RATIO, 50.0),
        "jaw_to_forehead": (0.9, 100.0),
        "cheekbone_to_jaw": (1.1, 100.0),
    }
)

# hue bands (inclusive) that flatter each undertone
UNDERTONE_HUE_BANDS: Mapping[Undertone, Tuple[float, float]] = MappingProxyType(
    {
        Undertone.WARM: (30.0, 90.0),
        Undertone.COOL: (180.0, 270.0),
    }
)
UNDERTONE_MATCH_SCORE = 90
UNDERTONE_MISMATCH_SCORE = 60
NEUTRAL_UNDERTONE_SCORE = 75


FACE_SHAPE_TECHNIQUES: Mapping[FaceShape, Tuple[str, ...]] = MappingProxyType(
    {
        FaceShape.OVAL: (
            "Natural contouring along cheekbones",
            "Balanced eye makeup",
            "Subtle highlighting on forehead and chin",
        ),
        FaceShape.ROUND: (
            "Contour sides of face to add definition",
            "Elongate eyes with winged eyeliner",
            "Highlight center of face vertically",
        ),
        FaceShape.SQUARE: (
            "Soften jaw with blush placement",
            "Round out features with curved lines",
            "Avoid harsh angles in makeup application",
        ),
        FaceShape.HEART: (
            "Balance forehead with chin highlighting",
            "Soften pointed chin with rounded blush",
            "Emphasize eyes to draw attention upward",
        ),
        FaceShape.DIAMOND: (
            "Widen forehead and chin with highlighting",
            "Soften cheekbones with strategic contouring",
            "Create horizontal lines to balance face",
        ),
        FaceShape.OBLONG: (
            "Add width with horizontal blush placement",
            "Avoid elongating techniques",
            "Focus on creating fuller, wider features",
        ),
    }
)

SKIN_TYPE_RECOMMENDATIONS: Mapping[SkinType, Tuple[str, ...]] = MappingProxyType(
    {
        SkinType.OILY: (
            "Use oil-free, mattifying foundation",
            "Apply powder to control shine",
            "Use blotting papers throughout the day",
        ),
        SkinType.DRY: (
            "Use hydrating primer before foundation",
            "Choose dewy finish products",
            "Avoid powder-heavy makeup",
        ),
        SkinType.COMBINATION: (
            "Use different products for T-zone and cheeks",
            "Apply powder only to oily areas",
            "Use cream blush on dry areas",
        ),
        SkinType.SENSITIVE: (
            "Choose hypoallergenic products",
            "Avoid fragranced cosmetics",
            "Test products on small area first",
        ),
        SkinType.MATURE: (
            "Use hydrating, anti-aging formulas",
            "Avoid heavy powder application",
            "Focus on luminous, youthful finishes",
        ),
        SkinType.NORMAL: (
            "Most products will work well",
            "Focus on enhancing natural features",
            "Experiment with different textures",
        ),
    }
)

CONCERN_RECOMMENDATIONS: Mapping[ConcernType, Tuple[str, ...]] = MappingProxyType(
    {
        ConcernType.ACNE: (
            "Use non-comedogenic products",
            "Apply concealer after treating blemishes",
        ),
        ConcernType.DARK_SPOTS: (
            "Use color-correcting concealer",
            "Consider highlighting to redirect attention",
        ),
        ConcernType.FINE_LINES: ("Use primer to fill in lines", "Avoid settling into creases"),
        ConcernType.WRINKLES: ("Use hydrating formulas", "Apply with patting motions"),
        ConcernType.PORES: ("Use pore-minimizing primer", "Avoid thick, cakey products"),
        ConcernType.REDNESS: ("Use green color corrector", "Choose neutral-toned products"),
        ConcernType.DRYNESS: ("Use hydrating formulas", "Avoid matte finishes"),
        ConcernType.OILINESS: ("Use oil-controlling products", "Set with powder"),
    }
)


# ------------------------- Scores ------------------------- #
def calculate_skin_health_score(metrics: SkinMetrics) -> int:
    score = 0.0
    for name, weight in SKIN_HEALTH_WEIGHTS.items():
        value = getattr(metrics, name)
        if name in INVERTED_METRICS:
            value = 100 - value
        score += value * weight
    return round_half_up(score)


def calculate_proportion_score(proportions: FaceProportions) -> float:
    """Average closeness of three facial ratios to their ideals, floored at 0.

    Individual sub-scores may go negative; only the average is clamped.
    """

    ratios = {
        "face_length_to_width": proportions.face_length / proportions.face_width,
        "jaw_to_forehead": proportions.jaw_width / proportions.forehead_width,
        "cheekbone_to_jaw": proportions.cheekbone_width / proportions.jaw_width,
    }
    sub_scores = []
    for name, ratio in ratios.items():
        ideal, penalty = IDEAL_RATIOS[name]
        sub_scores.append(100 - abs(ratio - ideal) * penalty)
    logger.debug("Proportion ratios %s -> sub-scores %s", ratios, sub_scores)
    return max(0.0, sum(sub_scores) / len(sub_scores))


def calculate_beauty_score(geometry: FaceGeometry) -> int:
    proportion_score = calculate_proportion_score(geometry.proportions)
    score = geometry.symmetry_score * SYMMETRY_WEIGHT + proportion_score * PROPORTION_WEIGHT
    return round_half_up(score)


def determine_skin_type(metrics: SkinMetrics) -> SkinType:
    # order matters: the first matching rule wins
    if metrics.oiliness > 70:
        return SkinType.OILY
    if metrics.hydration < 30:
        return SkinType.DRY
    if metrics.sensitivity > 60:
        return SkinType.SENSITIVE
    if metrics.oiliness > 40 and metrics.hydration < 50:
        return SkinType.COMBINATION
    if metrics.age > 45:
        return SkinType.MATURE
    return SkinType.NORMAL


# ------------------------- Color compatibility ------------------------- #
def calculate_undertone_compatibility(undertone: Undertone, color: HSL) -> int:
    undertone = Undertone(undertone)
    if undertone is Undertone.NEUTRAL:
        return NEUTRAL_UNDERTONE_SCORE
    low, high = UNDERTONE_HUE_BANDS[undertone]
    return UNDERTONE_MATCH_SCORE if low <= color.h <= high else UNDERTONE_MISMATCH_SCORE


def calculate_depth_compatibility(skin_depth: int, color: HSL) -> float:
    # deeper skin carries more saturated colors
    ideal_saturation = skin_depth * 10
    return max(0.0, 100 - abs(color.s - ideal_saturation))


def calculate_color_compatibility(skin_tone: SkinTone, product_color: str) -> int:
    """Score in [0, 100] for how well ``product_color`` suits ``skin_tone``."""

    product_hsl = hex_to_hsl(product_color)
    undertone_score = calculate_undertone_compatibility(skin_tone.undertone, product_hsl)
    depth_score = calculate_depth_compatibility(skin_tone.depth, product_hsl)
    return round_half_up((undertone_score + depth_score) / 2)


def rank_colors_by_compatibility(
    skin_tone: SkinTone, colors: Iterable[str]
) -> List[Tuple[str, int]]:
    """Pair each color with its compatibility score, best first (ties keep input order)."""

    scored = [(color, calculate_color_compatibility(skin_tone, color)) for color in colors]
    return sorted(scored, key=lambda item: item[1], reverse=True)


# ------------------------- Recommendations ------------------------- #
def get_recommended_techniques(face_shape: Union[FaceShape, str, None]) -> List[str]:
    """Makeup techniques for a face shape; unknown shapes get the oval set."""

    try:
        shape = FaceShape(face_shape)
    except ValueError:
        logger.debug("Unknown face shape %r, falling back to oval", face_shape)
        shape = FaceShape.OVAL
    return list(FACE_SHAPE_TECHNIQUES[shape])


def get_skin_type_recommendations(skin_type: Union[SkinType, str]) -> List[str]:
    try:
        return list(SKIN_TYPE_RECOMMENDATIONS[SkinType(skin_type)])
    except ValueError:
        return []


def get_concern_recommendations(concern: Union[ConcernType, str]) -> List[str]:
    try:
        return list(CONCERN_RECOMMENDATIONS[ConcernType(concern)])
    except ValueError:
        return []


def get_color_recommendations(color_analysis: ColorAnalysis) -> List[str]:
    recommended = color_analysis.recommended_colors
    return [
        f"Your {color_analysis.season.value} color palette emphasizes "
        f"{color_analysis.undertone.value} tones",
        "Recommended eyeshadow shades: " + ", ".join(recommended.eyeshadow[:3]),
        "Recommended lip colors: " + ", ".join(recommended.lipstick[:3]),
        "Avoid these colors: " + ", ".join(color_analysis.colors_to_avoid[:2]),
    ]


def get_personalized_recommendations(
    analysis: BeautyAnalysis, preferences: Optional[Mapping[str, Any]] = None
) -> List[str]:
    """Flat list of advice: skin type, face shape, color, then each concern.

    Lines are not de-duplicated. ``preferences`` is accepted for callers that
    already pass user preferences along; it does not change the output.
    """

    recommendations: List[str] = []
    recommendations.extend(
        get_skin_type_recommendations(determine_skin_type(analysis.skin_metrics))
    )
    recommendations.extend(get_recommended_techniques(analysis.face_geometry.face_shape))
    recommendations.extend(get_color_recommendations(analysis.color_analysis))
    for concern in analysis.skin_concerns:
        recommendations.extend(get_concern_recommendations(concern.type))
    return recommendations


__all__ = [
    "CONCERN_RECOMMENDATIONS",
    "FACE_SHAPE_TECHNIQUES",
    "GOLDEN_RATIO",
    "IDEAL_RATIOS",
    "SKIN_HEALTH_WEIGHTS",
    "SKIN_TYPE_RECOMMENDATIONS",
    "calculate_beauty_score",
    "calculate_color_compatibility",
    "calculate_depth_compatibility",
    "calculate_proportion_score",
    "calculate_skin_health_score",
    "calculate_undertone_compatibility",
    "determine_skin_type",
    "get_color_recommendations",
    "get_concern_recommendations",
    "get_personalized_recommendations",
    "get_recommended_techniques",
    "get_skin_type_recommendations",
    "rank_colors_by_compatibility",
]
