"""
src/layout/navbar.py
─────────────────────
Navigation bar with page links and the live-sync switch.
"""

import dash_bootstrap_components as dbc
from dash import html

NAV_BG = "#06090d"
BORDER = "#1e262f"
ACCENT = "#2196f3"


def create_navbar() -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            [
                # Brand
                dbc.NavbarBrand(
                    [
                        html.Span("💧", style={"marginRight": "8px", "fontSize": "1.1rem"}),
                        html.Span("AQUAI", style={"fontWeight": "800", "letterSpacing": ".08em"}),
                    ],
                    href="/",
                    style={"color": ACCENT, "textDecoration": "none"},
                ),
                dbc.NavbarToggler(id="navbar-toggler", n_clicks=0),
                dbc.Collapse(
                    dbc.Nav(
                        [
                            dbc.NavItem(dbc.NavLink("Dashboard", href="/", id="nav-dashboard", active="exact")),
                            dbc.NavItem(
                                dbc.NavLink("Field Logs", href="/history", id="nav-history", active="exact")
                            ),
                            dbc.NavItem(
                                dbc.NavLink("Dataset", href="/dataset", id="nav-dataset", active="exact")
                            ),
                            dbc.NavItem(
                                dbc.Switch(
                                    id="live-switch",
                                    label="Live",
                                    value=False,
                                    style={"marginLeft": "12px", "marginBottom": 0, "fontSize": ".75rem"},
                                )
                            ),
                        ],
                        className="ms-auto",
                        navbar=True,
                    ),
                    id="navbar-collapse",
                    navbar=True,
                    is_open=False,
                ),
            ],
            fluid=True,
        ),
        color=NAV_BG,
        dark=True,
        sticky="top",
        style={"borderBottom": f"1px solid {BORDER}", "padding": ".5rem 1rem"},
    )
