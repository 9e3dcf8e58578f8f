"""
src/callbacks/dashboard.py
───────────────────────────
Dashboard callbacks: sync / manual submission and rendering of the latest
history entry.
"""
from __future__ import annotations

import logging

import dash_bootstrap_components as dbc
import plotly.graph_objects as go
from dash import Input, Output, State, ctx, html
from pydantic import ValidationError

from config.status import STATUS_BG, STATUS_COLORS, severity_color
from config.water import SOURCE_LIMITS, WaterSourceCategory
from src.analytics.scoring import PH_BAND
from src.data.models import HistoryEntry
from src.layout.components.disease_card import disease_card
from src.layout.components.kpi_card import kpi_card, mini_kpi
from src.layout.components.safety_gauge import safety_gauge

logger = logging.getLogger(__name__)

CARD_BG = "#0f141a"
GRID_CLR = "#1e262f"
MUTED = "#8a949d"
ACCENT = "#2196f3"
LIMIT_COLOR = "#ff9100"  # value outside the source category's limit
PLOTLY_TMPL = "plotly_dark"


def _fig_layout(height: int = 260) -> dict:
    return {
        "template": PLOTLY_TMPL,
        "paper_bgcolor": CARD_BG,
        "plot_bgcolor": CARD_BG,
        "margin": {"l": 10, "r": 10, "t": 10, "b": 10},
        "font": {"color": "#e1e7ec", "size": 11},
        "xaxis": {"gridcolor": GRID_CLR},
        "yaxis": {"gridcolor": GRID_CLR, "range": [4, 10]},
        "height": height,
        "showlegend": False,
    }


def ph_trend_figure(entries: list[HistoryEntry]) -> go.Figure:
    """pH across the session history, oldest sample on the left."""
    fig = go.Figure()
    chronological = list(reversed(entries))
    if chronological:
        fig.add_scatter(
            x=[e.reading.timestamp for e in chronological],
            y=[e.reading.ph for e in chronological],
            mode="lines+markers",
            line={"color": ACCENT, "width": 2, "shape": "spline"},
            marker={
                "size": 7,
                "color": [STATUS_COLORS[e.prediction.status] for e in chronological],
            },
            hovertemplate="%{x|%H:%M:%S}<br>pH %{y:.2f}<extra></extra>",
        )
    for bound in PH_BAND:
        fig.add_hline(y=bound, line_dash="dot", line_color="#ffd600", line_width=1)
    fig.update_layout(**_fig_layout())
    return fig


def _status_badge(entry: HistoryEntry) -> html.Div:
    status = entry.prediction.status
    color = STATUS_COLORS[status]
    children = [
        html.Span(
            status.value,
            style={
                "fontSize": ".8rem",
                "fontWeight": "800",
                "color": color,
                "backgroundColor": STATUS_BG[status],
                "border": f"1px solid {color}",
                "borderRadius": "10px",
                "padding": "3px 12px",
            },
        ),
        html.Div(entry.prediction.model_type, style={"fontSize": ".65rem", "color": MUTED, "marginTop": "8px"}),
    ]
    if entry.prediction.narrative_fallback:
        children.append(html.Div("Offline narrative", style={"fontSize": ".65rem", "color": "#ffd600"}))
    return html.Div(children)


def _fmt_optional(value: float | None, fmt: str) -> str:
    return "N/A" if value is None else format(value, fmt)


def _kpi_strip(entry: HistoryEntry) -> html.Div:
    r = entry.reading
    p = entry.prediction
    border = STATUS_COLORS[p.status]
    breaches = SOURCE_LIMITS[r.category].breaches(ph=r.ph, bod=r.bod, tds=r.tds, fecal=r.fecal_coliform)

    # (label, value, unit, limit key)
    sensors = [
        ("pH", f"{r.ph:.2f}", "", "ph"),
        ("Dissolved O₂", f"{r.dissolved_oxygen:.2f}", "mg/l", None),
        ("BOD", f"{r.bod:.2f}", "mg/l", "bod"),
        ("Fecal Coliform", f"{r.fecal_coliform:,.0f}", "MPN", "fecal"),
        ("Turbidity", f"{r.turbidity:.1f}", "NTU", None),
        ("TDS", f"{r.tds:.0f}", "ppm", "tds"),
        ("Nitrate", f"{r.nitrate:.2f}", "mg/l", None),
        ("Temperature", f"{r.temperature:.1f}", "°C", None),
    ]
    scores = [
        ("Severity", f"{p.severity_score:.1f}", severity_color(p.severity_score)),
        ("Bio-Hazard", _fmt_optional(p.bio_hazard_score, ".1f"), severity_color(p.bio_hazard_score)),
        ("Confidence", "N/A" if p.confidence is None else f"{p.confidence:.0%}", ACCENT),
        ("Reliability", f"{p.reliability_index:.0f}%", ACCENT),
    ]

    return html.Div(
        [
            dbc.Row(
                [
                    dbc.Col(
                        kpi_card(label, value, unit, color=LIMIT_COLOR if key in breaches else "#ffffff", border_color=border),
                        xs=6,
                        md=3,
                    )
                    for label, value, unit, key in sensors
                ],
                className="g-2 mb-2",
            ),
            dbc.Row(
                [dbc.Col(kpi_card(label, value, color=color), xs=6, md=3) for label, value, color in scores],
                className="g-2",
            ),
            html.Div(
                [
                    mini_kpi("Station", r.id),
                    mini_kpi("Location", r.location.name),
                    mini_kpi("Category", r.category.value),
                    mini_kpi("Sampled", r.timestamp.strftime("%H:%M:%S")),
                ],
                style={"display": "grid", "gridTemplateColumns": "repeat(4, 1fr)", "gap": "8px", "marginTop": "12px"},
            ),
        ]
    )


def _summary(entry: HistoryEntry) -> html.Div:
    p = entry.prediction
    children = [html.P(p.ai_summary, style={"fontSize": ".9rem", "color": "#e1e7ec"})]
    for title, text in (
        ("Root Cause", p.root_cause),
        ("Counterfactual", p.counterfactual),
        ("Policy Recommendation", p.policy_recommendation),
    ):
        if text:
            children.append(html.Div(title, style={"fontSize": ".64rem", "color": MUTED, "textTransform": "uppercase", "marginTop": "10px"}))
            children.append(html.P(text, style={"fontSize": ".8rem", "marginBottom": 0}))
    return html.Div(children)


def _disease_cards(entry: HistoryEntry) -> dbc.Row:
    return dbc.Row(
        [dbc.Col(disease_card(risk), md=4) for risk in entry.prediction.disease_risks],
        className="g-3",
    )


def render_dashboard(entries: list[HistoryEntry]) -> tuple:
    """Gauge, status, KPI strip, summary, pH figure and disease cards for the newest entry."""
    if not entries:
        waiting = html.Div("Awaiting first sensor sync.", style={"color": MUTED, "padding": "12px"})
        return safety_gauge(None), "", waiting, waiting, ph_trend_figure([]), ""

    latest = entries[0]
    return (
        safety_gauge(latest.prediction.severity_score),
        _status_badge(latest),
        _kpi_strip(latest),
        _summary(latest),
        ph_trend_figure(entries),
        _disease_cards(latest),
    )


def should_sync(trigger: str | None, *, live: bool, source: str, history_empty: bool) -> bool:
    """
    Whether a dashboard event takes a fresh simulated reading.

    The Sync button always does. Under the simulated source so do a station
    or category change, a live interval tick and the first page load of an
    empty session.
    """
    if trigger == "dash-sync-btn":
        return True
    if source != "simulated":
        return False
    if trigger in ("dash-location", "dash-category"):
        return True
    if trigger == "interval-live":
        return bool(live)
    return trigger is None and history_empty


def register(app, session) -> None:

    # ── Manual form visibility ────────────────────────────────────────────────
    @app.callback(
        Output("manual-collapse", "is_open"),
        Input("dash-source", "value"),
    )
    def toggle_manual(source: str) -> bool:
        session.source = source
        return source == "manual"

    # ── Sync / submit / render ────────────────────────────────────────────────
    @app.callback(
        [
            Output("dash-gauge", "children"),
            Output("dash-status", "children"),
            Output("dash-kpi-strip", "children"),
            Output("dash-summary", "children"),
            Output("dash-ph-trend", "figure"),
            Output("dash-disease-cards", "children"),
            Output("manual-error", "children"),
        ],
        [
            Input("interval-live", "n_intervals"),
            Input("dash-sync-btn", "n_clicks"),
            Input("manual-submit-btn", "n_clicks"),
            Input("dash-location", "value"),
            Input("dash-category", "value"),
        ],
        [
            State("live-switch", "value"),
            State("dash-source", "value"),
            State("manual-ph", "value"),
            State("manual-bod", "value"),
            State("manual-do", "value"),
            State("manual-fecal", "value"),
            State("manual-conductivity", "value"),
        ],
    )
    def update_dashboard(
        n_intervals, n_sync, n_manual, location_index, category,
        live, source, ph, bod, dissolved_oxygen, fecal, conductivity,
    ):
        session.select_location(int(location_index or 0))
        session.category = WaterSourceCategory(category)
        trigger = ctx.triggered_id
        error = ""

        if should_sync(trigger, live=live, source=source, history_empty=len(session.history) == 0):
            session.sync_simulated()
        elif trigger == "manual-submit-btn":
            values = (ph, bod, dissolved_oxygen, fecal, conductivity)
            if any(v is None for v in values):
                error = "All manual fields are required."
            else:
                try:
                    session.submit_manual(
                        ph=float(ph),
                        bod=float(bod),
                        dissolved_oxygen=float(dissolved_oxygen),
                        fecal_coliform=float(fecal),
                        conductivity=float(conductivity),
                    )
                except ValidationError as e:
                    logger.info("Rejected manual reading: %s", e)
                    error = "Invalid reading: " + "; ".join(
                        f"{'.'.join(str(p) for p in err['loc'])} {err['msg']}" for err in e.errors()
                    )

        return (*render_dashboard(session.history.entries()), error)
