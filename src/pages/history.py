"""
src/pages/history.py
─────────────────────
Field log page: session history plus readings persisted to the log store.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

MUTED = "#8a949d"

_STATUS_OPTIONS = [
    {"label": "All", "value": "all"},
    {"label": "Safe", "value": "SAFE"},
    {"label": "Warning", "value": "WARNING"},
    {"label": "Critical", "value": "CRITICAL"},
]


def layout() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Field Logs", className="page-title"),
                    html.P(
                        "Most recent samples first · session history and persisted log store",
                        className="page-subtitle",
                    ),
                ],
                className="page-header",
            ),
            # ── Summary badges ─────────────────────────────────────────────────
            html.Div(id="history-summary", className="mb-3"),
            # ── Filter row ─────────────────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        [
                            html.Label(
                                "Status",
                                style={"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"},
                            ),
                            dcc.Dropdown(
                                id="history-filter-status",
                                options=_STATUS_OPTIONS,
                                value="all",
                                clearable=False,
                                style={"fontSize": ".85rem"},
                                className="dark-dropdown",
                            ),
                        ],
                        md=3,
                    ),
                ],
                className="g-3 mb-3",
            ),
            # ── Session history table ──────────────────────────────────────────
            html.Div(
                [
                    html.Div("Session History", className="chart-title"),
                    html.Div(id="history-table"),
                ],
                className="chart-card mb-3",
            ),
            # ── Persisted log table ────────────────────────────────────────────
            html.Div(
                [
                    html.Div("Log Store", className="chart-title"),
                    html.Div(id="history-store-table"),
                ],
                className="chart-card",
            ),
        ],
        style={"padding": "1.5rem"},
    )
