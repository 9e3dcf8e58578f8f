"""
src/layout/main.py
───────────────────
Main application layout composition.

Contains:
  - dcc.Location for routing
  - dcc.Interval for live simulated syncs
  - Navbar + page content container
"""
from dash import dcc, html

from config.settings import settings
from src.layout.navbar import create_navbar


def create_layout() -> html.Div:
    """Assemble the root application layout."""
    return html.Div(
        [
            # ── Routing ───────────────────────────────────────────────────────
            dcc.Location(id="url", refresh=False),

            # ── Live update interval ──────────────────────────────────────────
            dcc.Interval(
                id="interval-live",
                interval=settings.UPDATE_INTERVAL_MS,
                n_intervals=0,
            ),

            # ── Navigation bar ────────────────────────────────────────────────
            create_navbar(),

            # ── Page content ──────────────────────────────────────────────────
            html.Div(
                id="page-content",
                style={"minHeight": "calc(100vh - 60px)"},
            ),

            # ── Footer ────────────────────────────────────────────────────────
            html.Footer(
                [
                    html.Span("AQUAI"),
                    html.Span(" · "),
                    html.Span("Water Quality Heuristic Monitor"),
                    html.Span(" · "),
                    html.Span("Simulated and field readings"),
                ],
                style={
                    "textAlign": "center",
                    "padding": ".7rem",
                    "fontSize": ".72rem",
                    "color": "#8a949d",
                    "borderTop": "1px solid #1e262f",
                    "marginTop": "2rem",
                },
            ),
        ],
        style={"backgroundColor": "#06090d", "minHeight": "100vh", "color": "#e1e7ec"},
    )
