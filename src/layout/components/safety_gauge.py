"""
src/layout/components/safety_gauge.py
──────────────────────────────────────
Severity gauge using Plotly indicator chart.
"""
from __future__ import annotations

import plotly.graph_objects as go
from dash import dcc

from config.status import SEVERITY_BANDS, SafetyStatus, severity_color

CARD_BG = "#0f141a"


def safety_gauge(
    severity: float | None,
    label: str = "Severity",
    height: int = 220,
) -> dcc.Graph:
    """
    Plotly gauge for the 0–100 severity score (higher = worse).

    Args:
        severity: 0–100 value, or None before the first prediction
        label: Title shown above the gauge
        height: Figure height in px
    """
    value = severity if severity is not None else 0.0
    color = severity_color(severity)
    safe_max = SEVERITY_BANDS[SafetyStatus.SAFE]
    warn_max = SEVERITY_BANDS[SafetyStatus.WARNING]

    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=value,
        number={"font": {"color": color, "size": 34}, "valueformat": ".0f"},
        title={"text": label, "font": {"color": "#8a949d", "size": 12}},
        gauge={
            "axis": {
                "range": [0, 100],
                "tickwidth": 1,
                "tickcolor": "#1e262f",
                "tickfont": {"color": "#8a949d", "size": 9},
            },
            "bar": {"color": color, "thickness": 0.25},
            "bgcolor": "rgba(0,0,0,0)",
            "borderwidth": 0,
            "steps": [
                {"range": [0, safe_max], "color": "rgba(0,230,118,0.10)"},
                {"range": [safe_max, warn_max], "color": "rgba(255,214,0,0.10)"},
                {"range": [warn_max, 100], "color": "rgba(255,23,68,0.12)"},
            ],
            "threshold": {
                "line": {"color": "#ff1744", "width": 2},
                "thickness": 0.75,
                "value": warn_max,
            },
        },
    ))

    fig.update_layout(
        paper_bgcolor=CARD_BG,
        plot_bgcolor=CARD_BG,
        margin=dict(l=20, r=20, t=40, b=10),
        height=height,
        font=dict(color="#ffffff"),
    )

    return dcc.Graph(
        figure=fig,
        config={"displayModeBar": False},
        style={"height": f"{height}px"},
    )
