# rigcurve/state.py
# Movable overlay points. The only mutable piece of a session.
import math
from enum import Enum

import numpy as np

from .slope import Point, SlopeResult


class PointName(Enum):
    POINT_ONE = "Slope point 1"
    POINT_TWO = "Slope point 2"
    YIELD = "Yield point"


class InteractiveState:
    """Two slope points and the yield marker, seeded from the computed results.

    Points are stored as given; callers snap to real samples first
    (see ``snap_to_sample``).
    """

    def __init__(self, slope: SlopeResult | None, yield_seed: tuple[float, float] | None):
        self._slope = slope
        self._seed = {
            PointName.POINT_ONE: slope.point_one if slope else None,
            PointName.POINT_TWO: slope.point_two if slope else None,
            PointName.YIELD: Point(x=yield_seed[0], y=yield_seed[1]) if yield_seed else None,
        }
        self.reset()

    @property
    def max_slope(self) -> float:
        return self._slope.max_slope if self._slope else math.nan

    @property
    def point_one(self) -> Point | None:
        return self._points[PointName.POINT_ONE]

    @property
    def point_two(self) -> Point | None:
        return self._points[PointName.POINT_TWO]

    @property
    def yield_point(self) -> Point | None:
        return self._points[PointName.YIELD]

    def point(self, which: PointName) -> Point | None:
        return self._points[which]

    def editable(self) -> list[PointName]:
        return [p for p in PointName if self._seed[p] is not None]

    def set_point(self, which: PointName, x: float, y: float) -> None:
        self._points[which] = Point(x=x, y=y)

    def recompute_custom_slope(self) -> float:
        p1, p2 = self.point_one, self.point_two
        if p1 is None or p2 is None:
            self.custom_slope = math.nan
            return self.custom_slope
        # x1 == x2 yields nan/inf, not an error
        with np.errstate(divide="ignore", invalid="ignore"):
            self.custom_slope = float(np.float64(p2.y - p1.y) / np.float64(p2.x - p1.x))
        return self.custom_slope

    def reset(self) -> None:
        self._points = dict(self._seed)
        self.custom_slope = self.max_slope


def snap_to_sample(x_values, data_x: float) -> int:
    """Index of the sample whose X is closest to ``data_x`` (-1 if there are none)."""
    xs = np.asarray(x_values, dtype=float)
    if xs.size == 0:
        return -1
    order = np.argsort(xs, kind="stable")
    pos = int(np.searchsorted(xs[order], data_x, side="left"))
    pos = min(pos, xs.size - 1)
    best = int(order[pos]); best_d = abs(xs[best] - data_x)
    for nb in (pos - 1, pos + 1):
        if 0 <= nb < xs.size:
            i = int(order[nb]); d = abs(xs[i] - data_x)
            if d < best_d:
                best, best_d = i, d
    return best
