# rigcurve/__init__.py
"""Displacement–force curve analysis for compression rig exports."""
from .columns import Column
from .dataset import Dataset, CurveSummary
from .slope import SlopeResult, analyze_slope
from .area import area_under_curve
from .state import InteractiveState, Point, PointName
from .session import Session, RigCurveError
from .export import ResultRow, ResultLog

__version__ = "0.1.0"

__all__ = [
    "Column", "Dataset", "CurveSummary", "SlopeResult", "analyze_slope",
    "area_under_curve", "InteractiveState", "Point", "PointName",
    "Session", "RigCurveError", "ResultRow", "ResultLog",
]
