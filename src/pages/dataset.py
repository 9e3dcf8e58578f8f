"""
src/pages/dataset.py
─────────────────────
Dataset calibration page: upload spreadsheets or fetch one by URL and view
the derived weights.
"""
import dash_bootstrap_components as dbc
from dash import dcc, html

from config.water import WaterSourceCategory

BORDER = "#1e262f"
MUTED = "#8a949d"

_LABEL_STYLE = {"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"}


def layout() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Dataset Calibration", className="page-title"),
                    html.P(
                        "Derive advisory weights from CSV / Excel monitoring records",
                        className="page-subtitle",
                    ),
                ],
                className="page-header",
            ),
            # ── Controls ───────────────────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        [
                            html.Label("Source Category", style=_LABEL_STYLE),
                            dcc.Dropdown(
                                id="dataset-category",
                                options=[{"label": c.value, "value": c.value} for c in WaterSourceCategory],
                                value=WaterSourceCategory.RIVER.value,
                                clearable=False,
                                className="dark-dropdown",
                            ),
                        ],
                        md=3,
                    ),
                    dbc.Col(
                        [
                            html.Label("Dataset URL", style=_LABEL_STYLE),
                            dbc.InputGroup(
                                [
                                    dbc.Input(id="dataset-url", type="url", placeholder="https://…/records.csv"),
                                    dbc.Button("Fetch", id="dataset-url-btn", n_clicks=0, color="secondary"),
                                ]
                            ),
                        ],
                        md=6,
                    ),
                ],
                className="g-3 mb-3",
            ),
            dcc.Upload(
                id="dataset-upload",
                children=html.Div(["Drop CSV / XLSX files here or ", html.A("browse")]),
                multiple=True,
                style={
                    "border": f"1px dashed {BORDER}",
                    "borderRadius": "14px",
                    "padding": "28px",
                    "textAlign": "center",
                    "color": MUTED,
                    "marginBottom": "1rem",
                },
            ),
            # ── Result ─────────────────────────────────────────────────────────
            dcc.Loading(html.Div(id="dataset-result"), type="dot"),
        ],
        style={"padding": "1.5rem"},
    )
