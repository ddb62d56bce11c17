# rigcurve/dataset.py
# Row parsing, load-channel choice and curve normalization.
import logging
import math

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict

from .columns import Column, LOAD_COLUMNS
from .constants import FIELDS_PER_ROW, SLACK_THRESHOLD, FAILURE_DROP

logger = logging.getLogger(__name__)


class Dataset(BaseModel):
    """Index-aligned float columns, one per ``Column``. Treated as read-only."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    frame: pd.DataFrame

    @classmethod
    def empty(cls) -> "Dataset":
        return cls(frame=pd.DataFrame({c.value: pd.Series(dtype=float) for c in Column}))

    def __len__(self) -> int:
        return len(self.frame)

    def column(self, col: Column) -> np.ndarray:
        return self.frame[col.value].to_numpy(dtype=float, copy=True)

    def sample(self, i: int, x: Column, y: Column) -> tuple[float, float]:
        return float(self.frame[x.value].iat[i]), float(self.frame[y.value].iat[i])


class CurveSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_value: float     # peak force
    max_x: float         # displacement at the first peak


# -------------------------
# Parsing
# -------------------------
def detect_delimiter(line: str) -> str | None:
    """``","`` for comma files, ``None`` (any whitespace run) otherwise."""
    return "," if "," in line else None


def _fields(line: str, delimiter: str | None) -> list[str]:
    tokens = [t.strip() for t in line.split(delimiter)]
    tokens = [t for t in tokens if t != ""]
    return tokens[1:1 + FIELDS_PER_ROW]


def _to_float(token: str) -> float:
    try:
        return float(token)
    except ValueError:
        return math.nan


def parse_rows(lines: list[str]) -> Dataset:
    """Numeric rows with exactly five finite values; anything else is skipped."""
    if not lines:
        return Dataset.empty()
    delimiter = detect_delimiter(lines[0])
    rows = []
    for line in lines:
        vals = [_to_float(t) for t in _fields(line, delimiter)]
        if len(vals) == FIELDS_PER_ROW and all(math.isfinite(v) for v in vals):
            rows.append(vals)
    logger.debug("Parsed %d/%d rows (delimiter=%r)", len(rows), len(lines), delimiter or "whitespace")
    if not rows:
        return Dataset.empty()
    return Dataset(frame=pd.DataFrame(rows, columns=Column.labels(), dtype=float))


def preferred_load_column(lines: list[str]) -> Column:
    """The rig logs compression as negative on the live load channel; check row one only."""
    if not lines:
        return Column.LOAD_1
    vals = _fields(lines[0], detect_delimiter(lines[0]))
    if len(vals) >= FIELDS_PER_ROW:
        load1, load2 = _to_float(vals[3]), _to_float(vals[4])
        if load1 < 0:
            return LOAD_COLUMNS[0]
        if load2 < 0:
            return LOAD_COLUMNS[1]
    return Column.LOAD_1


# -------------------------
# Normalization
# -------------------------
def normalize(dataset: Dataset, x: Column, y: Column) -> Dataset:
    """Flip signs, remove pre-load slack on X, cut everything after specimen failure.

    Returns a new ``Dataset``; the input is left untouched.
    """
    df = dataset.frame.copy()
    df[y.value] = -df[y.value]
    if x is not y:
        df[x.value] = -df[x.value]

    if len(df):
        first_x = float(df[x.value].iat[0])
        if first_x > SLACK_THRESHOLD:
            df[x.value] = df[x.value] - first_x

        yv = df[y.value].to_numpy()
        peak = int(np.argmax(yv))
        drops = np.flatnonzero(yv[peak:-1] - yv[peak + 1:] > FAILURE_DROP)
        if drops.size:
            cut = peak + 1 + int(drops[0])
            logger.debug("Failure drop after peak %d, truncating at row %d of %d", peak, cut, len(df))
            df = df.iloc[:cut].reset_index(drop=True)

    return Dataset(frame=df)


def summarize(dataset: Dataset, x: Column, y: Column) -> CurveSummary:
    if not len(dataset):
        return CurveSummary(max_value=math.nan, max_x=math.nan)
    peak = int(np.argmax(dataset.column(y)))
    max_x, max_value = dataset.sample(peak, x, y)
    return CurveSummary(max_value=max_value, max_x=max_x)


def min_x_sample(dataset: Dataset, x: Column, y: Column) -> tuple[float, float] | None:
    """Sample with the smallest X (first on ties); seeds the yield marker."""
    if not len(dataset):
        return None
    return dataset.sample(int(np.argmin(dataset.column(x))), x, y)
