"""Enumerations and immutable value records consumed by the scoring engine."""
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _LabelEnum(str, Enum):
    """String enum whose lookup ignores case (``"Oval"`` -> ``OVAL``)."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class Undertone(_LabelEnum):
    WARM = "warm"
    COOL = "cool"
    NEUTRAL = "neutral"


class Season(_LabelEnum):
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


class FaceShape(_LabelEnum):
    OVAL = "oval"
    ROUND = "round"
    SQUARE = "square"
    HEART = "heart"
    DIAMOND = "diamond"
    OBLONG = "oblong"


class SkinType(_LabelEnum):
    OILY = "oily"
    DRY = "dry"
    COMBINATION = "combination"
    SENSITIVE = "sensitive"
    MATURE = "mature"
    NORMAL = "normal"


class ConcernType(_LabelEnum):
    ACNE = "acne"
    DARK_SPOTS = "dark_spots"
    FINE_LINES = "fine_lines"
    WRINKLES = "wrinkles"
    PORES = "pores"
    REDNESS = "redness"
    DRYNESS = "dryness"
    OILINESS = "oiliness"


class Record(BaseModel):
    # camelCase payloads from the web layer and snake_case from Python callers
    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel
    )


class SkinTone(Record):
    hex: str
    undertone: Undertone
    depth: int
    season: Optional[Season] = None


class FaceProportions(Record):
    face_length: float
    face_width: float
    jaw_width: float
    forehead_width: float
    cheekbone_width: float


class FaceGeometry(Record):
    face_shape: Optional[FaceShape] = None
    symmetry_score: float
    proportions: FaceProportions


class SkinMetrics(Record):
    """Percentage-scale skin attributes plus an estimated age.

    Values are not range checked; scores computed from out-of-range inputs
    are returned as-is.
    """

    oiliness: float
    hydration: float
    sensitivity: float
    clarity: float
    texture: float
    firmness: float
    evenness: float
    age: int


class ConcernLocation(Record):
    x: float
    y: float
    radius: float


class SkinConcern(Record):
    type: ConcernType
    severity: float
    location: ConcernLocation
    confidence: float = 100.0


class RecommendedColors(Record):
    eyeshadow: List[str] = Field(default_factory=list)
    lipstick: List[str] = Field(default_factory=list)
    blush: List[str] = Field(default_factory=list)
    foundation: List[str] = Field(default_factory=list)


class ColorAnalysis(Record):
    dominant_colors: List[str] = Field(default_factory=list)
    undertone: Undertone
    season: Season
    recommended_colors: RecommendedColors = Field(default_factory=RecommendedColors)
    colors_to_avoid: List[str] = Field(default_factory=list)


class BeautyAnalysis(Record):
    """Completed analysis record handed over by the analysis pipeline."""

    face_geometry: FaceGeometry
    skin_metrics: SkinMetrics
    skin_concerns: List[SkinConcern] = Field(default_factory=list)
    color_analysis: ColorAnalysis


__all__ = [
    "BeautyAnalysis",
    "ColorAnalysis",
    "ConcernLocation",
    "ConcernType",
    "FaceGeometry",
    "FaceProportions",
    "FaceShape",
    "RecommendedColors",
    "Record",
    "Season",
    "SkinConcern",
    "SkinMetrics",
    "SkinTone",
    "SkinType",
    "Undertone",
]
