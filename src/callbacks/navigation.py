"""
src/callbacks/navigation.py — Page routing and navbar callbacks.
"""
from __future__ import annotations

from dash import Input, Output, State

from src.pages import dashboard, dataset, history


def register(app, session) -> None:
    """Register routing + navbar callbacks."""

    # ── Page routing ──────────────────────────────────────────────────────────
    @app.callback(
        Output("page-content", "children"),
        Input("url", "pathname"),
    )
    def display_page(pathname: str):
        if pathname == "/history":
            return history.layout()
        if pathname == "/dataset":
            return dataset.layout()
        return dashboard.layout(session)

    # ── Navbar collapse ───────────────────────────────────────────────────────
    @app.callback(
        Output("navbar-collapse", "is_open"),
        Input("navbar-toggler", "n_clicks"),
        State("navbar-collapse", "is_open"),
        prevent_initial_call=True,
    )
    def toggle_navbar(n_clicks: int, is_open: bool) -> bool:
        return not is_open
