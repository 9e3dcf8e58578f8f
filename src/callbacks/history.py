"""
src/callbacks/history.py
─────────────────────────
Field log page callbacks.
"""
from __future__ import annotations

import logging
import sqlite3

import dash_bootstrap_components as dbc
import pandas as pd
from dash import Input, Output, html

from config.status import STATUS_COLORS, SafetyStatus, severity_color
from src.data import store
from src.data.models import HistoryEntry

logger = logging.getLogger(__name__)

CARD_BG = "#0f141a"
BORDER = "#1e262f"
MUTED = "#8a949d"

_HISTORY_COLUMNS = [
    "timestamp", "station_id", "location", "ph", "dissolved_oxygen", "bod",
    "fecal_coliform", "severity", "bio_hazard", "status",
]


def history_frame(entries: list[HistoryEntry]) -> pd.DataFrame:
    """Session history flattened to one row per sample, most recent first."""
    rows = [
        {
            "timestamp": e.reading.timestamp,
            "station_id": e.reading.id,
            "location": e.reading.location.name,
            "ph": e.reading.ph,
            "dissolved_oxygen": e.reading.dissolved_oxygen,
            "bod": e.reading.bod,
            "fecal_coliform": e.reading.fecal_coliform,
            "severity": e.prediction.severity_score,
            "bio_hazard": e.prediction.bio_hazard_score,
            "status": e.prediction.status.value,
        }
        for e in entries
    ]
    return pd.DataFrame(rows, columns=_HISTORY_COLUMNS)


def _status_badge(status: str) -> html.Span:
    color = STATUS_COLORS.get(status, MUTED)
    return html.Span(
        status,
        style={
            "fontSize": ".65rem",
            "fontWeight": "700",
            "color": color,
            "border": f"1px solid {color}",
            "borderRadius": "4px",
            "padding": "1px 6px",
        },
    )


def _table(headers: list[str], rows: list[html.Tr]) -> html.Div:
    return html.Div(
        html.Table(
            [
                html.Thead(
                    html.Tr(
                        [html.Th(h) for h in headers],
                        style={"color": MUTED, "fontSize": ".68rem", "textTransform": "uppercase"},
                    )
                ),
                html.Tbody(rows),
            ],
            style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".82rem"},
        ),
        style={"overflowX": "auto"},
    )


def _build_history_table(df: pd.DataFrame) -> html.Div:
    if df.empty:
        return html.Div(
            "No samples recorded this session.",
            style={"color": MUTED, "padding": "20px", "textAlign": "center"},
        )

    rows = []
    for _, row in df.iterrows():
        bio = row["bio_hazard"]
        rows.append(
            html.Tr(
                [
                    html.Td(row["timestamp"].strftime("%d/%m %H:%M:%S"), style={"color": MUTED, "fontSize": ".78rem"}),
                    html.Td(html.Span(row["station_id"], style={"color": "#2196f3", "fontWeight": "600"})),
                    html.Td(row["location"], style={"fontSize": ".78rem"}),
                    html.Td(f"{row['ph']:.2f}"),
                    html.Td(f"{row['dissolved_oxygen']:.2f}"),
                    html.Td(f"{row['bod']:.2f}"),
                    html.Td(f"{row['fecal_coliform']:,.0f}"),
                    html.Td(f"{row['severity']:.1f}", style={"color": severity_color(row["severity"]), "fontWeight": "700"}),
                    html.Td("N/A" if pd.isna(bio) else f"{bio:.1f}", style={"color": MUTED}),
                    html.Td(_status_badge(row["status"])),
                ],
                style={"borderBottom": f"1px solid {BORDER}"},
            )
        )
    return _table(
        ["Time", "Station", "Location", "pH", "DO", "BOD", "Fecal", "Severity", "Bio-Hazard", "Status"],
        rows,
    )


def _build_store_table(df: pd.DataFrame) -> html.Div:
    if df.empty:
        return html.Div("Log store is empty.", style={"color": MUTED, "padding": "20px", "textAlign": "center"})

    rows = [
        html.Tr(
            [
                html.Td(str(row["id"]), style={"color": MUTED}),
                html.Td(row["timestamp"].strftime("%d/%m %H:%M:%S"), style={"color": MUTED, "fontSize": ".78rem"}),
                html.Td(row["station_id"]),
                html.Td(row["location"]),
                html.Td(f"{row['severity']:.1f}", style={"color": severity_color(row["severity"])}),
                html.Td(_status_badge(row["status"])),
            ],
            style={"borderBottom": f"1px solid {BORDER}"},
        )
        for _, row in df.iterrows()
    ]
    return _table(["#", "Time", "Station", "Location", "Severity", "Status"], rows)


def register(app, session) -> None:

    @app.callback(
        [
            Output("history-table", "children"),
            Output("history-store-table", "children"),
            Output("history-summary", "children"),
        ],
        [
            Input("interval-live", "n_intervals"),
            Input("history-filter-status", "value"),
        ],
    )
    def update_history(n_intervals: int, status_filter: str):
        df = history_frame(session.history.entries())
        counts = df.groupby("status").size()
        if status_filter != "all":
            df = df[df["status"] == status_filter]

        try:
            logs = store.get_logs(limit=50)
            persisted = store.count_logs()
        except sqlite3.Error as e:
            logger.warning("Log store unavailable: %s", e)
            logs = pd.DataFrame()
            persisted = 0
        if status_filter != "all" and not logs.empty:
            logs = logs[logs["status"] == status_filter]

        badges = dbc.Row(
            [
                dbc.Col(
                    html.Div(
                        [
                            html.Div(
                                str(counts.get(status.value, 0)),
                                style={"fontSize": "1.4rem", "fontWeight": "700", "color": STATUS_COLORS[status]},
                            ),
                            html.Div(status.value, style={"fontSize": ".65rem", "color": MUTED, "textTransform": "uppercase"}),
                        ],
                        style={"backgroundColor": CARD_BG, "border": f"1px solid {BORDER}", "borderRadius": "8px", "padding": "10px 16px"},
                    ),
                    xs=6, md=3,
                )
                for status in SafetyStatus
            ]
            + [
                dbc.Col(
                    html.Div(
                        [
                            html.Div(str(persisted), style={"fontSize": "1.4rem", "fontWeight": "700", "color": "#2196f3"}),
                            html.Div("Persisted", style={"fontSize": ".65rem", "color": MUTED, "textTransform": "uppercase"}),
                        ],
                        style={"backgroundColor": CARD_BG, "border": f"1px solid {BORDER}", "borderRadius": "8px", "padding": "10px 16px"},
                    ),
                    xs=6, md=3,
                )
            ],
            className="g-2",
        )

        return _build_history_table(df), _build_store_table(logs), badges
