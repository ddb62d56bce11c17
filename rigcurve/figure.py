# rigcurve/figure.py
# Plotly chart of a session: data, stiffness line, movable points, peak.
import math

import plotly.graph_objects as go

from .session import Session


def fmt(v: float, nd: int = 4) -> str:
    """Fixed decimals, or an em dash for nan/inf (e.g. coincident slope points)."""
    return f"{v:.{nd}f}" if v is not None and math.isfinite(v) else "—"


def _point_note(x, y, color, ax, ay):
    return dict(x=x, y=y, xref="x", yref="y", text=f"({fmt(x)}, {fmt(y)})",
                showarrow=True, arrowhead=0, ax=ax, ay=ay, font=dict(color=color, size=11))


def _box(y, text, color):
    return dict(x=0.02, y=y, xref="paper", yref="paper", text=text, showarrow=False,
                font=dict(color=color, size=12), bgcolor="white", bordercolor=color,
                borderwidth=1, borderpad=6, xanchor="left", yanchor="top")


def build_figure(session: Session, height: int = 560) -> go.Figure:
    data, x, y = session.dataset, session.x, session.y
    state, slope, summ = session.state, session.slope, session.summary

    fig = go.Figure()
    fig.add_scatter(x=data.column(x), y=data.column(y), name="Data", mode="markers",
                    marker=dict(color="#1f77b4", size=4, opacity=0.5))
    notes = []

    if slope is not None:
        e1, e2 = slope.extended_endpoints
        fig.add_scatter(x=[e1.x, e2.x], y=[e1.y, e2.y], name="Stiffness", mode="lines",
                        line=dict(color="purple", width=2), hoverinfo="skip")
        p1, p2 = state.point_one, state.point_two
        fig.add_scatter(x=[p1.x, p2.x], y=[p1.y, p2.y], mode="lines", showlegend=False,
                        line=dict(color="blue", width=1, dash="dash"), hoverinfo="skip")
        fig.add_scatter(x=[p1.x, p2.x], y=[p1.y, p2.y], name="Slope Points", mode="markers",
                        marker=dict(color="blue", size=12))
        notes += [_point_note(p1.x, p1.y, "blue", 20, -20), _point_note(p2.x, p2.y, "blue", 20, 20)]

    if len(data):
        fig.add_scatter(x=[summ.max_x], y=[summ.max_value], name="Maximum Strength", mode="markers",
                        marker=dict(color="red", size=12))
        notes.append(_point_note(summ.max_x, summ.max_value, "red", 10, -20))

    yp = state.yield_point
    if yp is not None:
        fig.add_scatter(x=[yp.x], y=[yp.y], name="Yield Point", mode="markers",
                        marker=dict(color="green", size=12))
        notes.append(_point_note(yp.x, yp.y, "green", -80, -20))

    notes += [
        _box(0.98, f"Calculated Max Slope: {fmt(state.max_slope)}", "purple"),
        _box(0.90, f"Current Slope: {fmt(state.custom_slope)}", "blue"),
        _box(0.82, f"Area: {fmt(session.area)}", "blue"),
    ]

    fig.update_layout(
        xaxis=dict(title=x.label, gridcolor="#e0e0e0", zeroline=False),
        yaxis=dict(title=y.label, gridcolor="#e0e0e0", zeroline=False),
        legend=dict(x=0.7, y=0.05, xanchor="left", yanchor="bottom"),
        margin=dict(l=80, r=40, t=40, b=80),
        annotations=notes,
        hovermode="closest",
        plot_bgcolor="white", paper_bgcolor="white",
        height=height,
    )
    return fig
