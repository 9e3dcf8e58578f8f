"""
src/layout/components/disease_card.py
──────────────────────────────────────
Disease-risk card with percentage badge and progress bar.
"""

from dash import html

from config.status import probability_color
from src.data.models import DiseaseRisk

CARD_BG = "#06090d"
BORDER = "#1e262f"
MUTED = "#8a949d"


def disease_card(risk: DiseaseRisk) -> html.Div:
    color = probability_color(risk.probability)
    percentage = round(risk.probability * 100)

    return html.Div(
        [
            html.Div(
                [
                    html.Span(
                        risk.disease,
                        style={"fontSize": ".75rem", "fontWeight": "800", "textTransform": "uppercase", "color": "#ffffff"},
                    ),
                    html.Span(
                        f"{percentage}% RISK",
                        style={
                            "fontSize": ".6rem",
                            "fontWeight": "800",
                            "color": "#ffffff",
                            "backgroundColor": color,
                            "borderRadius": "10px",
                            "padding": "3px 10px",
                            "whiteSpace": "nowrap",
                        },
                    ),
                ],
                style={"display": "flex", "justifyContent": "space-between", "alignItems": "center", "marginBottom": "14px"},
            ),
            html.Div(
                html.Div(style={"width": f"{percentage}%", "height": "6px", "borderRadius": "3px", "backgroundColor": color}),
                style={"width": "100%", "height": "6px", "borderRadius": "3px", "backgroundColor": "rgba(255,255,255,0.05)", "marginBottom": "14px"},
            ),
            html.P(risk.description, style={"fontSize": ".68rem", "color": MUTED, "fontWeight": "600", "marginBottom": 0}),
        ],
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {BORDER}",
            "borderRadius": "20px",
            "padding": "18px",
            "height": "100%",
        },
    )
