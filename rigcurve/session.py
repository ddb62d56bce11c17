# rigcurve/session.py
import logging
import math

from .area import area_under_curve
from .columns import Column, DEFAULT_X
from .dataset import Dataset, CurveSummary, parse_rows, preferred_load_column, normalize, summarize, min_x_sample
from .export import ResultRow
from .ingest import clean_lines, display_name
from .slope import SlopeResult, analyze_slope
from .state import InteractiveState

logger = logging.getLogger(__name__)


class RigCurveError(ValueError):
    pass


def _as_column(col: Column | str) -> Column:
    if isinstance(col, Column):
        return col
    try:
        return Column.from_label(col)
    except ValueError:
        raise RigCurveError(f"Unknown column: {col!r}. Expected one of {Column.labels()}") from None


class Session:
    """Everything derived from one loaded file. Build a new one per file."""

    def __init__(self, lines: list[str], file_name: str):
        self.file_name = file_name
        self.lines = lines
        self.raw = parse_rows(lines)
        self.preferred_load = preferred_load_column(lines)

        self.x: Column | None = None
        self.y: Column | None = None
        self.dataset: Dataset | None = None
        self.summary: CurveSummary | None = None
        self.slope: SlopeResult | None = None
        self.area: float = 0.0
        self.state: InteractiveState | None = None

    @classmethod
    def process_file(cls, text: str, file_name: str) -> "Session":
        """Ingest raw export text and run the pipeline on the default columns."""
        s = cls(clean_lines(text), display_name(file_name))
        logger.info("Loaded '%s': %d data rows, preferred load %s",
                    s.file_name, len(s.raw), s.preferred_load.label)
        s.set_columns(DEFAULT_X, s.preferred_load)
        return s

    def set_columns(self, x: Column | str, y: Column | str) -> None:
        """Re-derive everything for a new X/Y pair from the parsed rows; user edits are lost."""
        x, y = _as_column(x), _as_column(y)
        data = normalize(self.raw, x, y)
        xs, ys = data.column(x), data.column(y)

        self.x, self.y, self.dataset = x, y, data
        self.summary = summarize(data, x, y)
        self.slope = analyze_slope(xs, ys)
        self.area = area_under_curve(xs, ys)
        self.state = InteractiveState(self.slope, min_x_sample(data, x, y))

        if self.slope is None:
            logger.warning("'%s': no elastic slope found for %s vs %s", self.file_name, y.label, x.label)
        logger.info("'%s' %s vs %s: %d samples, max %.4f, area %.4f",
                    self.file_name, y.label, x.label, len(data), self.summary.max_value, self.area)

    def result_row(self) -> ResultRow:
        if self.state is None:
            raise RigCurveError("set_columns() must run before exporting")
        yp = self.state.yield_point
        return ResultRow(
            file_name=self.file_name,
            slope=self.state.custom_slope,
            area=self.area,
            yield_displacement=yp.x if yp else math.nan,
            yield_strength=yp.y if yp else math.nan,
            max_strength=self.summary.max_value,
        )
