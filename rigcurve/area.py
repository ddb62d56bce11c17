# rigcurve/area.py
import numpy as np
import pandas as pd
from scipy.integrate import trapezoid

from .constants import AREA_DECIMALS


def dedupe_curve(x, y) -> pd.DataFrame:
    """Average Y over repeated X (equal to AREA_DECIMALS places), sorted by X."""
    d = pd.DataFrame({"x": np.asarray(x, dtype=float), "y": np.asarray(y, dtype=float)})
    d["key"] = d["x"].round(AREA_DECIMALS)
    g = d.groupby("key", sort=False).agg(x=("x", "first"), y=("y", "mean"))
    return g.sort_values("x", kind="stable").reset_index(drop=True)


def area_under_curve(x, y) -> float:
    """Trapezoidal area of the de-duplicated curve; 0.0 for fewer than two X values."""
    g = dedupe_curve(x, y)
    if len(g) < 2:
        return 0.0
    return float(trapezoid(g["y"].to_numpy(), g["x"].to_numpy()))
