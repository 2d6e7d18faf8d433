"""Color math and beauty scoring modules exposed for the FastAPI service."""

from .models import (  # noqa: F401
    BeautyAnalysis,
    ColorAnalysis,
    ConcernLocation,
    ConcernType,
    FaceGeometry,
    FaceProportions,
    FaceShape,
    RecommendedColors,
    Season,
    SkinConcern,
    SkinMetrics,
    SkinTone,
    SkinType,
    Undertone,
)

from .color_math import (  # noqa: F401
    HSL,
    RGB,
    generate_color_palette,
    get_analogous_colors,
    get_color_temperature,
    get_complementary_color,
    get_contrast_ratio,
    hex_to_rgb,
    hsl_to_rgb,
    is_light_color,
    is_valid_hex,
    parse_hex,
    rgb_to_hex,
    rgb_to_hsl,
)

from .beauty_scoring import (  # noqa: F401
    calculate_beauty_score,
    calculate_color_compatibility,
    calculate_skin_health_score,
    determine_skin_type,
    get_personalized_recommendations,
    get_recommended_techniques,
    rank_colors_by_compatibility,
)

from .face_shape import (  # noqa: F401
    build_face_geometry,
    classify_face_shape,
    classify_with_confidence,
    measure_proportions,
)

from .personal_color import (  # noqa: F401
    analyze_skin_tone,
    build_color_analysis,
    classify_from_metrics,
)

__all__ = [
    "BeautyAnalysis",
    "ColorAnalysis",
    "ConcernLocation",
    "ConcernType",
    "FaceGeometry",
    "FaceProportions",
    "FaceShape",
    "HSL",
    "RGB",
    "RecommendedColors",
    "Season",
    "SkinConcern",
    "SkinMetrics",
    "SkinTone",
    "SkinType",
    "Undertone",
    "analyze_skin_tone",
    "build_color_analysis",
    "build_face_geometry",
    "calculate_beauty_score",
    "calculate_color_compatibility",
    "calculate_skin_health_score",
    "classify_face_shape",
    "classify_from_metrics",
    "classify_with_confidence",
    "determine_skin_type",
    "generate_color_palette",
    "get_analogous_colors",
    "get_color_temperature",
    "get_complementary_color",
    "get_contrast_ratio",
    "get_personalized_recommendations",
    "get_recommended_techniques",
    "hex_to_rgb",
    "hsl_to_rgb",
    "is_light_color",
    "is_valid_hex",
    "measure_proportions",
    "parse_hex",
    "rank_colors_by_compatibility",
    "rgb_to_hex",
    "rgb_to_hsl",
]
