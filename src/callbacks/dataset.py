"""
src/callbacks/dataset.py
─────────────────────────
Dataset calibration page callbacks.
"""
from __future__ import annotations

import base64
import binascii

import dash_bootstrap_components as dbc
from dash import Input, Output, State, ctx, html, no_update

from config.water import WaterSourceCategory
from src.analytics.calibration import (
    CalibrationError,
    TrainingStats,
    calibrate_files,
    calibrate_from_url,
)
from src.layout.components.kpi_card import kpi_card, mini_kpi

MUTED = "#8a949d"
ACCENT = "#2196f3"


def decode_upload(contents: str) -> bytes:
    """dcc.Upload payload ("data:<mime>;base64,<data>") → raw bytes."""
    try:
        _, encoded = contents.split(",", 1)
        return base64.b64decode(encoded)
    except (ValueError, binascii.Error) as e:
        raise CalibrationError("Upload could not be decoded.") from e


def stats_panel(stats: TrainingStats) -> html.Div:
    weights = [
        ("pH Weight", f"{stats.ph_weight:.2f}"),
        ("BOD Weight", f"{stats.bod_weight:.2f}"),
        ("Fecal Weight", f"{stats.fecal_weight:.2f}"),
        ("DO Weight", f"{stats.do_weight:.2f}"),
    ]
    return html.Div(
        [
            dbc.Row(
                [dbc.Col(kpi_card(label, value, color=ACCENT), xs=6, md=3) for label, value in weights],
                className="g-2 mb-3",
            ),
            html.Div(
                [
                    mini_kpi("Data Points", f"{stats.data_points:,}"),
                    mini_kpi("Fidelity", f"{stats.fidelity:.1f}%"),
                    mini_kpi("Seasonal Variance", f"{stats.seasonal_variance:.2f}"),
                    mini_kpi("Mean pH", f"{stats.mean_values['ph']:.2f}"),
                    mini_kpi("Mean BOD", f"{stats.mean_values['bod']:.2f}"),
                    mini_kpi("Path", stats.virtual_path),
                ],
                style={"display": "grid", "gridTemplateColumns": "repeat(3, 1fr)", "gap": "10px"},
            ),
            html.Div(
                "Columns: " + ", ".join(stats.identified_columns),
                style={"fontSize": ".72rem", "color": MUTED, "marginTop": "12px"},
            ),
            html.Div(
                f"Calibrated {stats.last_trained:%Y-%m-%d %H:%M} UTC · advisory only",
                style={"fontSize": ".68rem", "color": MUTED},
            ),
        ],
        className="chart-card",
    )


def register(app) -> None:

    @app.callback(
        Output("dataset-result", "children"),
        [
            Input("dataset-upload", "contents"),
            Input("dataset-url-btn", "n_clicks"),
        ],
        [
            State("dataset-upload", "filename"),
            State("dataset-category", "value"),
            State("dataset-url", "value"),
        ],
        prevent_initial_call=True,
    )
    def run_calibration(contents, n_clicks, filenames, category, url):
        category = WaterSourceCategory(category)
        try:
            if ctx.triggered_id == "dataset-url-btn":
                if not url:
                    return no_update
                stats = calibrate_from_url(url, category)
            else:
                if not contents:
                    return no_update
                files = [(name, decode_upload(payload)) for name, payload in zip(filenames, contents)]
                stats = calibrate_files(files, category)
        except CalibrationError as e:
            return dbc.Alert(str(e), color="danger", style={"fontSize": ".85rem"})
        return stats_panel(stats)
