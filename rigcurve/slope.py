# rigcurve/slope.py
# Elastic stiffness: steepest sub-range OLS slope, then a fixed-slope line
# through as many windowed samples as possible.
import logging

import numpy as np
from pydantic import BaseModel, ConfigDict

from .constants import WINDOW_LOW, WINDOW_HIGH, SEGMENTS, INLIER_TOLERANCE, LINE_EXTENSION, OFFSET_CHUNK

logger = logging.getLogger(__name__)


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return self.x, self.y


class SlopeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_slope: float
    point_one: Point
    point_two: Point
    extended_endpoints: tuple[Point, Point]
    offset: float
    inlier_count: int


def elastic_window(x: np.ndarray, y: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Samples with WINDOW_LOW < x < WINDOW_HIGH, stably sorted by x."""
    x = np.asarray(x, dtype=float); y = np.asarray(y, dtype=float)
    m = (x > WINDOW_LOW) & (x < WINDOW_HIGH)
    wx, wy = x[m], y[m]
    order = np.argsort(wx, kind="stable")
    return wx[order], wy[order]


def ols_slope(x: np.ndarray, y: np.ndarray) -> float:
    n = len(x)
    sx, sy = x.sum(), y.sum()
    sxy, sxx = (x * y).sum(), (x * x).sum()
    with np.errstate(divide="ignore", invalid="ignore"):
        return float((n * sxy - sx * sy) / (n * sxx - sx * sx))


def max_segment_slope(wx: np.ndarray, wy: np.ndarray) -> float | None:
    best = None
    for lo, hi in SEGMENTS:
        m = (wx >= lo) & (wx <= hi)
        if m.sum() < 2:
            continue
        s = ols_slope(wx[m], wy[m])
        if not np.isfinite(s):
            continue
        if best is None or s > best:
            best = s
    return best


def best_offset(wx: np.ndarray, wy: np.ndarray, slope: float) -> tuple[float, np.ndarray]:
    """Offset (among those through an observed sample) with the most inliers.

    Returns the winning offset and the inlier mask over ``wx``; first maximum wins.
    """
    offsets = wy - slope * wx
    fitted = slope * wx
    best_k, best_n = 0, -1
    # candidates in row blocks keep memory at OFFSET_CHUNK x n
    for start in range(0, len(offsets), OFFSET_CHUNK):
        block = offsets[start:start + OFFSET_CHUNK]
        counts = (np.abs(wy[None, :] - (fitted[None, :] + block[:, None])) < INLIER_TOLERANCE).sum(axis=1)
        i = int(np.argmax(counts))
        if counts[i] > best_n:
            best_k, best_n = start + i, int(counts[i])
    return float(offsets[best_k]), np.abs(wy - (fitted + offsets[best_k])) < INLIER_TOLERANCE


def analyze_slope(x: np.ndarray, y: np.ndarray) -> SlopeResult | None:
    """Steepest elastic slope and its best-supported line, or ``None`` without data."""
    wx, wy = elastic_window(x, y)
    slope = max_segment_slope(wx, wy)
    if slope is None:
        logger.debug("No sub-range with 2+ samples in (%g, %g)", WINDOW_LOW, WINDOW_HIGH)
        return None

    _, mask = best_offset(wx, wy, slope)
    lx, ly = wx[mask], wy[mask]
    i1, i2 = int(np.argmin(lx)), int(np.argmax(lx))
    x1, y1, x2, y2 = float(lx[i1]), float(ly[i1]), float(lx[i2]), float(ly[i2])
    offset = y1 - slope * x1   # pin the line through point one

    span = x2 - x1
    x1e, x2e = x1 - span * LINE_EXTENSION, x2 + span * LINE_EXTENSION
    ends = (Point(x=x1e, y=slope * x1e + offset), Point(x=x2e, y=slope * x2e + offset))

    logger.debug("Max slope %.6g through %d/%d windowed samples", slope, int(mask.sum()), len(wx))
    return SlopeResult(
        max_slope=slope,
        point_one=Point(x=x1, y=y1),
        point_two=Point(x=x2, y=y2),
        extended_endpoints=ends,
        offset=offset,
        inlier_count=int(mask.sum()),
    )
