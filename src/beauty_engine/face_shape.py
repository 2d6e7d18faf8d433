"""Face proportions and face-shape classification from 2D landmarks."""
from __future__ import annotations

import logging
import math
from typing import Dict, Sequence, Tuple, Union

import numpy as np

from .models import FaceGeometry, FaceProportions, FaceShape

logger = logging.getLogger(__name__)

Landmarks = Union[Sequence[Sequence[float]], np.ndarray]

# Horizontal band: (vertical position ratio, half-height ratio)
Band = Tuple[float, float]
DEFAULT_BANDS: Dict[str, Band] = {
    "forehead": (0.20, 0.06),
    "cheekbone": (0.50, 0.06),
    "jaw": (0.82, 0.06),
}

MIN_LANDMARKS = 100  # Face Mesh emits 468
MIN_BAND_POINTS = 8
BAND_FALLBACK_POINTS = 24
SOFTMAX_ALPHA = 4.0
EPS = 1e-6


def _as_ndarray(landmarks: Landmarks, min_points: int) -> np.ndarray:
    arr = np.asarray(landmarks, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError("landmarks must have shape (N, 2)")
    if arr.shape[0] < min_points:
        raise ValueError(f"Expected >= {min_points} landmarks, got {arr.shape[0]}")
    return arr


def _band_width(pts: np.ndarray, band: Band) -> float:
    """Horizontal extent of the points lying in one band of the face."""
    ys = pts[:, 1]
    miny, maxy = ys.min(), ys.max()
    height = maxy - miny
    cy, hh = band
    y0 = miny + cy * height
    band_pts = pts[np.abs(ys - y0) <= hh * height]
    # sparse band: use the nearest points instead
    if band_pts.shape[0] < MIN_BAND_POINTS:
        k = min(BAND_FALLBACK_POINTS, pts.shape[0])
        band_pts = pts[np.argsort(np.abs(ys - y0))[:k]]
    return float(band_pts[:, 0].max() - band_pts[:, 0].min())


def measure_proportions(
    landmarks: Landmarks, min_points: int = MIN_LANDMARKS
) -> FaceProportions:
    """Measure face length and band widths; face width is the cheekbone width.

    Raises ``ValueError`` when the landmarks collapse to a line or a point,
    since no face ratio can be formed from them.
    """
    pts = _as_ndarray(landmarks, min_points)
    ys = pts[:, 1]
    face_length = float(ys.max() - ys.min())
    widths = {name: _band_width(pts, band) for name, band in DEFAULT_BANDS.items()}
    if face_length <= EPS or min(widths.values()) <= EPS:
        raise ValueError("landmarks are degenerate: zero face length or band width")
    return FaceProportions(
        face_length=face_length,
        face_width=widths["cheekbone"],
        jaw_width=widths["jaw"],
        forehead_width=widths["forehead"],
        cheekbone_width=widths["cheekbone"],
    )


def _ratios(p: FaceProportions) -> Dict[str, float]:
    return {
        "LWR": p.face_length / (p.cheekbone_width + EPS),  # length / cheek width
        "FJ": p.forehead_width / (p.jaw_width + EPS),
        "CWF": p.cheekbone_width / (p.forehead_width + EPS),
        "CWJ": p.cheekbone_width / (p.jaw_width + EPS),
    }


def _dist_to_interval(x: float, lo: float, hi: float) -> float:
    if lo <= x <= hi:
        return 0.0
    return min(abs(x - lo), abs(x - hi))


def _rule_penalties(m: Dict[str, float]) -> Dict[FaceShape, float]:
    """Distance from each shape's rules; the smaller, the more likely."""
    LWR, FJ, CWF, CWJ = m["LWR"], m["FJ"], m["CWF"], m["CWJ"]
    return {
        FaceShape.OBLONG: max(0.0, 1.55 - LWR) + _dist_to_interval(FJ, 0.88, 1.12),
        FaceShape.ROUND: max(0.0, LWR - 1.05) + max(0.0, CWJ - 1.10),
        FaceShape.SQUARE: _dist_to_interval(FJ, 0.93, 1.07)
        + _dist_to_interval(CWF, 0.93, 1.07)
        + max(0.0, LWR - 1.20),
        FaceShape.HEART: max(0.0, 1.18 - FJ) + max(0.0, 1.05 - CWF) + max(0.0, 1.05 - CWJ),
        FaceShape.DIAMOND: max(0.0, 1.12 - CWF)
        + max(0.0, 1.12 - CWJ)
        + _dist_to_interval(FJ, 0.92, 1.10),
        FaceShape.OVAL: _dist_to_interval(LWR, 1.25, 1.50)
        + _dist_to_interval(FJ, 0.95, 1.10)
        + _dist_to_interval(CWF, 0.95, 1.10),
    }


def _softmax_from_penalties(
    p: Dict[FaceShape, float], alpha: float = SOFTMAX_ALPHA
) -> Dict[FaceShape, float]:
    keys = list(p.keys())
    scores = np.array([math.exp(-alpha * p[k]) for k in keys], dtype=np.float64)
    probs = (scores / scores.sum()).tolist()
    return {k: float(v) for k, v in zip(keys, probs)}


def classify_with_confidence(proportions: FaceProportions) -> Dict[str, object]:
    ratios = _ratios(proportions)
    penalties = _rule_penalties(ratios)
    probs = _softmax_from_penalties(penalties)
    best = max(probs.items(), key=lambda kv: kv[1])[0]
    top2 = sorted(probs.items(), key=lambda kv: kv[1], reverse=True)[:2]
    logger.debug("Face ratios %s -> %s", ratios, best.value)
    return {
        "shape": best,
        "confidence": probs[best],
        "top2": [{"label": k.value, "prob": v} for k, v in top2],
        "ratios": ratios,
        "penalties": {k.value: v for k, v in penalties.items()},
        "probs": {k.value: v for k, v in probs.items()},
    }


def classify_face_shape(proportions: FaceProportions) -> Tuple[FaceShape, float]:
    res = classify_with_confidence(proportions)
    return res["shape"], float(res["confidence"])


def build_face_geometry(
    landmarks: Landmarks, symmetry_score: float, min_points: int = MIN_LANDMARKS
) -> FaceGeometry:
    """Measure ``landmarks`` and bundle shape, symmetry and proportions."""
    proportions = measure_proportions(landmarks, min_points=min_points)
    shape, _ = classify_face_shape(proportions)
    return FaceGeometry(
        face_shape=shape, symmetry_score=symmetry_score, proportions=proportions
    )


__all__ = [
    "DEFAULT_BANDS",
    "build_face_geometry",
    "classify_face_shape",
    "classify_with_confidence",
    "measure_proportions",
]
