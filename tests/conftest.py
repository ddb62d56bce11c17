"""
Shared fixtures: synthetic rig exports with a known curve.

Normalized curve: X = 0.0015·k, Y = 100·X + 0.5 for k = 0..80 (peak 12.5),
then five 0.5 steps down, then a failure drop to 2.0 at k = 86.
Raw files store both channels negated and X offset by 0.02 of slack.
"""
import pytest

SLACK = 0.02
STEP = 0.0015
FAIL_INDEX = 86


def curve_points():
    pts = [(STEP * k, 100 * STEP * k + 0.5) for k in range(81)]
    pts += [(STEP * k, 12.5 - 0.5 * (k - 80)) for k in range(81, 86)]
    pts += [(STEP * k, y) for k, y in zip(range(86, 90), (2.0, 1.5, 1.0, 0.5))]
    return pts


def rig_rows():
    """(index, elapsed, scan, display 1, load 1, load 2) as the rig writes them."""
    return [
        (k, 0.1 * k, float(k), -(x + SLACK), -y, 0.3)
        for k, (x, y) in enumerate(curve_points())
    ]


def make_rig_text(rows=None, delimiter="\t", newline="\n", metadata=True):
    rows = rig_rows() if rows is None else rows
    lines = []
    if metadata:
        lines.append("Axial Counts\t0\t0")
    lines += ["Test: compression", "Specimen: A1", "Rate: 1 mm/min",
              "Units: s, s, mm, N, N", "Index Elapsed Scan Display Load1 Load2"]
    for r in rows:
        lines.append(delimiter.join(str(v) for v in r))
        if metadata and r[0] == 10:
            lines.append("Axial Counts\t1\t1")
    return newline.join(lines) + newline


@pytest.fixture
def rig_text():
    return make_rig_text()


@pytest.fixture
def rig_text_factory():
    return make_rig_text


@pytest.fixture(name="rig_rows")
def rig_rows_fixture():
    return rig_rows()
