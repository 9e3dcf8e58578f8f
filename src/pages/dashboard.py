"""
src/pages/dashboard.py
───────────────────────
Live water-quality dashboard.

Static structure; gauge, KPI strip, narrative and disease cards are
injected via callbacks. Control defaults are taken from the session so a
page revisit shows the station and source last used.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.water import MOCK_LOCATIONS, WaterSourceCategory

CARD_BG = "#0f141a"
BORDER = "#1e262f"
MUTED = "#8a949d"

_LABEL_STYLE = {"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"}

_LOCATION_OPTIONS = [
    {"label": f"{loc['name']} ({loc['state']})", "value": i} for i, loc in enumerate(MOCK_LOCATIONS)
]

_CATEGORY_OPTIONS = [{"label": c.value, "value": c.value} for c in WaterSourceCategory]

_SOURCE_OPTIONS = [
    {"label": "Simulated", "value": "simulated"},
    {"label": "Manual", "value": "manual"},
]

# (id, label, default, step)
_MANUAL_FIELDS = [
    ("manual-ph", "pH", 7.2, 0.1),
    ("manual-bod", "BOD (mg/l)", 2.0, 0.1),
    ("manual-do", "Dissolved O₂ (mg/l)", 6.5, 0.1),
    ("manual-fecal", "Fecal Coliform (MPN/100ml)", 500, 1),
    ("manual-conductivity", "Conductivity (µmhos/cm)", 450, 1),
]


def _manual_form(is_open: bool) -> dbc.Collapse:
    inputs = [
        dbc.Col(
            [
                html.Label(label, style=_LABEL_STYLE),
                dbc.Input(id=field_id, type="number", value=default, step=step, min=0, size="sm"),
            ],
            xs=6,
            md=2,
        )
        for field_id, label, default, step in _MANUAL_FIELDS
    ]
    inputs.append(
        dbc.Col(
            dbc.Button("Run Analysis", id="manual-submit-btn", n_clicks=0, color="primary", size="sm", className="w-100"),
            xs=12,
            md=2,
            className="d-flex align-items-end",
        )
    )
    return dbc.Collapse(
        html.Div(
            [
                dbc.Row(inputs, className="g-2"),
                html.Div(id="manual-error", style={"color": "#ff1744", "fontSize": ".75rem", "marginTop": "6px"}),
            ],
            className="chart-card",
        ),
        id="manual-collapse",
        is_open=is_open,
        className="mb-3",
    )


def layout(session) -> html.Div:
    return html.Div(
        [
            # ── Page header ───────────────────────────────────────────────────
            html.Div(
                [
                    html.H2("Water Quality Dashboard", className="page-title"),
                    html.P(
                        "Heuristic severity, bio-hazard and disease-risk screening per sample",
                        className="page-subtitle",
                    ),
                ],
                className="page-header",
            ),
            # ── Controls ──────────────────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        [
                            html.Label("Station", style=_LABEL_STYLE),
                            dcc.Dropdown(
                                id="dash-location",
                                options=_LOCATION_OPTIONS,
                                value=session.location_index,
                                clearable=False,
                                className="dark-dropdown",
                            ),
                        ],
                        md=4,
                    ),
                    dbc.Col(
                        [
                            html.Label("Source Category", style=_LABEL_STYLE),
                            dcc.Dropdown(
                                id="dash-category",
                                options=_CATEGORY_OPTIONS,
                                value=session.category.value,
                                clearable=False,
                                className="dark-dropdown",
                            ),
                        ],
                        md=3,
                    ),
                    dbc.Col(
                        [
                            html.Label("Input", style=_LABEL_STYLE),
                            dbc.RadioItems(
                                id="dash-source",
                                options=_SOURCE_OPTIONS,
                                value=session.source,
                                inline=True,
                            ),
                        ],
                        md=3,
                    ),
                    dbc.Col(
                        dbc.Button("Sync Sensors", id="dash-sync-btn", n_clicks=0, color="info", className="w-100"),
                        md=2,
                        className="d-flex align-items-end",
                    ),
                ],
                className="g-3 mb-3",
            ),
            _manual_form(session.source == "manual"),
            # ── Gauge + status ────────────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Safety Index", className="chart-title"),
                                html.Div(id="dash-gauge"),
                                html.Div(id="dash-status", style={"textAlign": "center"}),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                    dbc.Col(html.Div(id="dash-kpi-strip"), md=8),
                ],
                className="g-3 mb-3",
            ),
            # ── Narrative + pH trend ──────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Diagnostic Summary", className="chart-title"),
                                html.Div(id="dash-summary"),
                            ],
                            className="chart-card",
                        ),
                        md=6,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("pH Trend", className="chart-title"),
                                dcc.Graph(id="dash-ph-trend", config={"displayModeBar": False}),
                            ],
                            className="chart-card",
                        ),
                        md=6,
                    ),
                ],
                className="g-3 mb-3",
            ),
            # ── Disease risk cards ────────────────────────────────────────────
            html.Div("Disease Risk", className="chart-title"),
            html.Div(id="dash-disease-cards"),
        ],
        style={"padding": "1.5rem"},
    )
