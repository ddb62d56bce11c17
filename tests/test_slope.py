"""Tests for elastic slope detection and the robust stiffness line."""
import tracemalloc

import numpy as np
import pytest
from pydantic import ValidationError

from rigcurve.columns import Column
from rigcurve.dataset import parse_rows, normalize
from rigcurve.ingest import clean_lines
from rigcurve.slope import (
    analyze_slope, best_offset, elastic_window, max_segment_slope, ols_slope,
)


@pytest.fixture
def rig_curve(rig_text):
    data = normalize(parse_rows(clean_lines(rig_text)), Column.DISPLAY_1, Column.LOAD_1)
    return data.column(Column.DISPLAY_1), data.column(Column.LOAD_1)


class TestWindow:

    def test_bounds_exclusive_and_sorted(self):
        x = np.array([0.05, 0.01, 0.1, 0.02, 0.0999, 0.2])
        y = np.arange(6, dtype=float)
        wx, wy = elastic_window(x, y)
        np.testing.assert_array_equal(wx, [0.02, 0.05, 0.0999])
        np.testing.assert_array_equal(wy, [3, 0, 4])


class TestSegmentSlope:

    def test_ols_matches_polyfit(self):
        rng = np.random.default_rng(0)
        x = np.linspace(0.0, 1.0, 25)
        y = 3.0 * x + 1.0 + rng.normal(0, 0.01, x.size)
        assert ols_slope(x, y) == pytest.approx(np.polyfit(x, y, 1)[0], rel=1e-9)

    def test_steepest_segment_wins(self):
        wx = np.array([0.015, 0.02, 0.025, 0.04, 0.045, 0.05])
        wy = np.concatenate([50 * wx[:3], 200 * wx[3:] - 6])
        assert max_segment_slope(wx, wy) == pytest.approx(200.0)

    def test_segment_needs_two_points(self):
        wx = np.array([0.02, 0.06])
        assert max_segment_slope(wx, np.array([1.0, 5.0])) is None

    def test_boundary_point_counts_in_both_segments(self):
        wx = np.array([0.03, 0.0325, 0.04])
        wy = np.array([0.0, 1.0, 1.0])
        # [0.03, 0.0325] alone has slope 400, [0.0325, 0.04] has slope 0
        assert max_segment_slope(wx, wy) == pytest.approx(400.0)

    def test_vertical_segment_is_skipped(self):
        wx = np.array([0.015625, 0.015625, 0.06, 0.07])
        wy = np.array([1.0, 2.0, 1.0, 2.0])
        assert max_segment_slope(wx, wy) == pytest.approx(100.0)


class TestBestOffset:

    def test_outlier_excluded(self):
        wx = np.linspace(0.02, 0.09, 15)
        wy = 100 * wx + 0.5
        wy[0] += 3.0
        offset, mask = best_offset(wx, wy, 100.0)
        assert offset == pytest.approx(0.5)
        assert mask.sum() == 14 and not mask[0]

    def test_first_maximum_wins(self):
        wx = np.array([0.02, 0.03, 0.04, 0.05])
        wy = np.array([0.0, 0.0, 5.0, 5.0])
        offset, mask = best_offset(wx, wy, 0.0)
        assert offset == 0.0
        np.testing.assert_array_equal(mask, [True, True, False, False])


class TestAnalyzeSlope:

    def test_rig_curve(self, rig_curve):
        res = analyze_slope(*rig_curve)
        assert res.max_slope == pytest.approx(100.0, rel=1e-6)
        assert res.inlier_count == 60
        assert res.point_one.as_tuple() == pytest.approx((0.0105, 1.55))
        assert res.point_two.as_tuple() == pytest.approx((0.099, 10.4))
        assert res.offset == pytest.approx(0.5)
        e1, e2 = res.extended_endpoints
        assert e1.as_tuple() == pytest.approx((-0.03375, -2.875))
        assert e2.as_tuple() == pytest.approx((0.14325, 14.825))

    def test_line_pinned_through_point_one(self, rig_curve):
        res = analyze_slope(*rig_curve)
        assert res.max_slope * res.point_one.x + res.offset == pytest.approx(res.point_one.y, abs=1e-12)

    def test_deterministic(self, rig_curve):
        assert analyze_slope(*rig_curve) == analyze_slope(*rig_curve)

    def test_robust_to_spikes(self):
        x = np.linspace(0.0, 0.12, 121)
        y = 80 * x
        # spikes placed so they flatten their segments rather than steepen them
        y[35] += 2.0
        y[75] -= 2.0
        res = analyze_slope(x, y)
        assert res.inlier_count == int(((x > 0.01) & (x < 0.1)).sum()) - 2

    def test_no_window_returns_none(self):
        assert analyze_slope(np.array([0.0, 0.005, 0.2]), np.array([0.0, 1.0, 2.0])) is None
        assert analyze_slope(np.array([]), np.array([])) is None
        assert analyze_slope(np.array([0.05]), np.array([1.0])) is None

    def test_result_is_frozen(self, rig_curve):
        res = analyze_slope(*rig_curve)
        with pytest.raises(ValidationError):
            res.max_slope = 1.0

    def test_large_window_bounded_memory(self):
        x = np.linspace(0.0, 0.11, 12_000)
        y = 90 * x + 0.2
        y[::97] += 1.0
        tracemalloc.start()
        try:
            res = analyze_slope(x, y)
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()
        n_window = int(((x > 0.01) & (x < 0.1)).sum())
        # a dense n x n float residual would need n_window**2 * 8 bytes
        assert peak < n_window ** 2
        assert res.max_slope == pytest.approx(90.0, rel=1e-2)
        assert res.inlier_count == n_window - int(((x[::97] > 0.01) & (x[::97] < 0.1)).sum())


class TestBestOffsetBlocks:

    def test_winner_in_later_block_matches_dense_search(self):
        # first candidates are outliers, so the best line is found past one block
        rng = np.random.default_rng(3)
        wx = np.linspace(0.011, 0.099, 700)
        wy = 50 * wx + rng.normal(0, 0.01, wx.size)
        wy[:300] += np.linspace(1.0, 4.0, 300)
        offset, mask = best_offset(wx, wy, 50.0)

        offsets = wy - 50.0 * wx
        dense = np.abs(wy[None, :] - (50.0 * wx[None, :] + offsets[:, None])) < 0.05
        k = int(np.argmax(dense.sum(axis=1)))
        assert offset == offsets[k]
        np.testing.assert_array_equal(mask, dense[k])
        assert k >= 256
