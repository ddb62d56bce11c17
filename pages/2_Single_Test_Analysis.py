# pages/2_Single_Test_Analysis.py
# Single Test Analysis (elastic slope, area, max strength, movable slope/yield points)
import streamlit as st
import numpy as np

from rigcurve import Column, PointName, Session, ResultLog
from rigcurve.config import AppSettings
from rigcurve.figure import build_figure, fmt
from rigcurve.logging_config import setup_logging
from rigcurve.state import snap_to_sample

settings = AppSettings.from_env()
logger = setup_logging(settings.level, settings.log_file)

st.title("Single Test Analysis")

# -------------------------
# Guards & load session data
# -------------------------
if "session" not in st.session_state:
    st.info("Go to **Upload & QA/QC** first to load data.")
    st.stop()

session: Session = st.session_state["session"]
results: ResultLog = st.session_state.setdefault("results", ResultLog())
st.caption(f"File: **{session.file_name}**")

# -------------------------
# Column selection
# -------------------------
labels = Column.labels()
c1, c2 = st.columns(2)
x_label = c1.selectbox("X (displacement)", labels, index=labels.index(session.x.label))
y_label = c2.selectbox("Y (force)", labels, index=labels.index(session.y.label))

if (x_label, y_label) != (session.x.label, session.y.label):
    session.set_columns(x_label, y_label)
    st.session_state.pop("last_pick", None)

state = session.state
xs, ys = session.dataset.column(session.x), session.dataset.column(session.y)

if not len(xs):
    st.error("No valid samples for this column pair.")
    st.stop()
if session.slope is None:
    st.warning("No samples in the elastic window (0.01 < X < 0.1); stiffness is unavailable.")


def move(which: PointName, data_x: float):
    """Snap to the nearest sample by X and move the chosen point there."""
    i = snap_to_sample(xs, data_x)
    state.set_point(which, float(xs[i]), float(ys[i]))
    if which is not PointName.YIELD:
        state.recompute_custom_slope()
    logger.debug("Moved %s to sample %d", which.value, i)


# -------------------------
# Sidebar: point editing
# -------------------------
st.sidebar.header("Points")
editable = state.editable()
which = st.sidebar.radio("Point to move", editable, format_func=lambda p: p.value,
                         help="Click a sample on the chart to move the selected point there.")
current = state.point(which)
target_x = st.sidebar.number_input("Move to X", value=float(current.x), format="%.4f",
                                   help="Snaps to the nearest sample.")
if st.sidebar.button("Move point"):
    move(which, target_x)
if st.sidebar.button("Reset points", help="Restore computed slope and yield points."):
    state.reset()
    st.session_state.pop("last_pick", None)

# -------------------------
# Metrics
# -------------------------
m1, m2, m3, m4 = st.columns(4)
m1.metric("Calculated max slope", fmt(state.max_slope))
m2.metric("Current slope", fmt(state.custom_slope))
m3.metric("Area", fmt(session.area))
m4.metric("Max strength", fmt(session.summary.max_value))
yp = state.yield_point
st.caption(f"Yield point: displacement = {fmt(yp.x)} | strength = {fmt(yp.y)}")

# -------------------------
# Plot (click a sample to move the selected point)
# -------------------------
event = st.plotly_chart(build_figure(session), use_container_width=True,
                        on_select="rerun", selection_mode="points", key="curve")
picked = (event.selection.get("points") or []) if event else []
if picked:
    pick = (which, float(picked[0]["x"]))
    if st.session_state.get("last_pick") != pick:
        st.session_state["last_pick"] = pick
        move(*pick)
        st.rerun()

with st.expander("Diagnostics: elastic window"):
    if session.slope is not None:
        s = session.slope
        st.write(f"Line through {s.inlier_count} samples: y = {s.max_slope:.4f}·x + {s.offset:.4f}")
        st.write(f"Point one: ({fmt(s.point_one.x)}, {fmt(s.point_one.y)}) | "
                 f"Point two: ({fmt(s.point_two.x)}, {fmt(s.point_two.y)})")
    if not np.isfinite(state.custom_slope):
        st.warning("Slope points share the same X; current slope is undefined.")

# -------------------------
# Export
# -------------------------
if st.button("➕ Add to results"):
    results.append(session.result_row())
    st.success(f"Added **{session.file_name}** ({len(results)} row(s)).")

st.download_button(
    "⬇️ Results CSV",
    results.to_csv(),
    file_name=results.file_name,
    mime="text/csv",
    disabled=not len(results),
)
