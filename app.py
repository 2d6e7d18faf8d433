"""FastAPI application exposing color math and beauty scoring APIs."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from fastapi import Body, FastAPI, Header
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette import status
from starlette.responses import Response

from src.beauty_engine import (
    BeautyAnalysis,
    FaceGeometry,
    SkinMetrics,
    SkinTone,
    analyze_skin_tone,
    build_color_analysis,
    build_face_geometry,
    calculate_beauty_score,
    calculate_color_compatibility,
    calculate_skin_health_score,
    classify_with_confidence,
    determine_skin_type,
    generate_color_palette,
    get_analogous_colors,
    get_color_temperature,
    get_complementary_color,
    get_contrast_ratio,
    get_personalized_recommendations,
    get_recommended_techniques,
    is_light_color,
    parse_hex,
    rgb_to_hex,
    rgb_to_hsl,
)

logger = logging.getLogger(__name__)
app = FastAPI(title="Beauty Scoring Service", version="1.0.0")

WHITE = "#ffffff"
BLACK = "#000000"
MAX_PALETTE_SIZE = 64


class ColorRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    hex: str
    palette_size: int = Field(default=5, alias="paletteSize")


class ContrastRequest(BaseModel):
    foreground: str
    background: str


class FaceShapeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    landmarks: List[Tuple[float, float]]
    symmetry_score: float = Field(alias="symmetryScore")


class CompatibilityRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    skin_tone: SkinTone = Field(alias="skinTone")
    product_color: str = Field(alias="productColor")


class RecommendationRequest(BaseModel):
    analysis: BeautyAnalysis
    preferences: Optional[Dict[str, Any]] = None


def _trace_id(header_value: Optional[str]) -> str:
    return header_value or str(uuid4())


def _response_with_trace_dict(payload: Dict[str, Any], trace_id: str) -> JSONResponse:
    """Attach ``traceId`` to the payload and the ``X-Trace-Id`` header."""
    payload.setdefault("traceId", trace_id)
    resp = JSONResponse(content=payload, status_code=status.HTTP_200_OK)
    resp.headers["X-Trace-Id"] = trace_id
    return resp


def _error(code: str, trace_id: str) -> JSONResponse:
    return _response_with_trace_dict({"status": "error", "code": code}, trace_id)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


# ------------------ Color endpoints ------------------ #
@app.post("/colors/properties")
def color_properties(
    request: ColorRequest = Body(...),
    x_trace_id: Optional[str] = Header(default=None, alias="X-Trace-Id"),
) -> Response:
    trace_id = _trace_id(x_trace_id)
    try:
        rgb = parse_hex(request.hex)
    except ValueError:
        logger.debug("Rejected color %r", request.hex)
        return _error("INVALID_COLOR", trace_id)

    hex_color = rgb_to_hex(*rgb)
    try:
        if request.palette_size > MAX_PALETTE_SIZE:
            raise ValueError(f"paletteSize must be <= {MAX_PALETTE_SIZE}")
        palette = generate_color_palette(hex_color, request.palette_size)
    except ValueError:
        logger.debug("Rejected palette size %r", request.palette_size)
        return _error("INVALID_ARGUMENT", trace_id)

    hsl = rgb_to_hsl(*rgb)
    payload = {
        "status": "ok",
        "hex": hex_color,
        "rgb": rgb._asdict(),
        "hsl": hsl._asdict(),
        "temperature": get_color_temperature(hex_color).value,
        "complementary": get_complementary_color(hex_color),
        "analogous": get_analogous_colors(hex_color),
        "isLight": is_light_color(hex_color),
        "contrast": {
            "white": get_contrast_ratio(hex_color, WHITE),
            "black": get_contrast_ratio(hex_color, BLACK),
        },
        "palette": palette,
    }
    return _response_with_trace_dict(payload, trace_id)


@app.post("/colors/contrast")
def color_contrast(
    request: ContrastRequest = Body(...),
    x_trace_id: Optional[str] = Header(default=None, alias="X-Trace-Id"),
) -> Response:
    trace_id = _trace_id(x_trace_id)
    try:
        foreground = rgb_to_hex(*parse_hex(request.foreground))
        background = rgb_to_hex(*parse_hex(request.background))
    except ValueError:
        return _error("INVALID_COLOR", trace_id)
    ratio = get_contrast_ratio(foreground, background)
    return _response_with_trace_dict({"status": "ok", "ratio": ratio}, trace_id)


@app.post("/color/compatibility")
def color_compatibility(
    request: CompatibilityRequest = Body(...),
    x_trace_id: Optional[str] = Header(default=None, alias="X-Trace-Id"),
) -> Response:
    trace_id = _trace_id(x_trace_id)
    score = calculate_color_compatibility(request.skin_tone, request.product_color)
    return _response_with_trace_dict({"status": "ok", "score": score}, trace_id)


@app.post("/skin-tone")
def skin_tone(
    request: ColorRequest = Body(...),
    x_trace_id: Optional[str] = Header(default=None, alias="X-Trace-Id"),
) -> Response:
    trace_id = _trace_id(x_trace_id)
    try:
        parse_hex(request.hex)
    except ValueError:
        return _error("INVALID_COLOR", trace_id)

    tone = analyze_skin_tone(request.hex)
    analysis = build_color_analysis(tone)
    payload = {
        "status": "ok",
        "skinTone": tone.model_dump(mode="json", by_alias=True),
        "colorAnalysis": analysis.model_dump(mode="json", by_alias=True),
    }
    return _response_with_trace_dict(payload, trace_id)


# ------------------ Scoring endpoints ------------------ #
@app.post("/skin/score")
def skin_score(
    metrics: SkinMetrics = Body(...),
    x_trace_id: Optional[str] = Header(default=None, alias="X-Trace-Id"),
) -> Response:
    trace_id = _trace_id(x_trace_id)
    payload = {
        "status": "ok",
        "skinHealthScore": calculate_skin_health_score(metrics),
        "skinType": determine_skin_type(metrics).value,
    }
    return _response_with_trace_dict(payload, trace_id)


@app.post("/face/score")
def face_score(
    geometry: FaceGeometry = Body(...),
    x_trace_id: Optional[str] = Header(default=None, alias="X-Trace-Id"),
) -> Response:
    trace_id = _trace_id(x_trace_id)
    payload = {
        "status": "ok",
        "beautyScore": calculate_beauty_score(geometry),
        "techniques": get_recommended_techniques(geometry.face_shape),
    }
    return _response_with_trace_dict(payload, trace_id)


@app.post("/face/shape")
def face_shape(
    request: FaceShapeRequest = Body(...),
    x_trace_id: Optional[str] = Header(default=None, alias="X-Trace-Id"),
) -> Response:
    trace_id = _trace_id(x_trace_id)
    try:
        geometry = build_face_geometry(request.landmarks, request.symmetry_score)
    except ValueError:
        logger.debug("Rejected landmarks", exc_info=True)
        return _error("INVALID_LANDMARKS", trace_id)

    res = classify_with_confidence(geometry.proportions)
    payload = {
        "status": "ok",
        "faceGeometry": geometry.model_dump(mode="json", by_alias=True),
        "confidence": res["confidence"],
        "top2": res["top2"],
    }
    return _response_with_trace_dict(payload, trace_id)


@app.post("/recommendations")
def recommendations(
    request: RecommendationRequest = Body(...),
    x_trace_id: Optional[str] = Header(default=None, alias="X-Trace-Id"),
) -> Response:
    trace_id = _trace_id(x_trace_id)
    lines = get_personalized_recommendations(request.analysis, request.preferences)
    return _response_with_trace_dict({"status": "ok", "recommendations": lines}, trace_id)


__all__ = ("app",)
