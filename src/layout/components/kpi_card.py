"""
src/layout/components/kpi_card.py
──────────────────────────────────
Sensor stat and score KPI cards.
"""
from dash import html

CARD_BG = "#0f141a"
BORDER = "#1e262f"
MUTED = "#8a949d"


def kpi_card(
    label: str,
    value: str,
    unit: str = "",
    color: str = "#ffffff",
    border_color: str = BORDER,
) -> html.Div:
    """
    Sensor/score card: uppercase label, large value, small unit.

    The border takes the current status color so a glance at the strip
    shows which tier the latest reading fell into.
    """
    value_row = [html.Span(value, style={"fontSize": "1.5rem", "fontWeight": "800", "color": color})]
    if unit:
        value_row.append(html.Span(f" {unit}", style={"fontSize": ".7rem", "color": MUTED, "fontWeight": "700"}))

    return html.Div(
        [
            html.Div(
                label,
                style={"fontSize": ".64rem", "color": MUTED, "textTransform": "uppercase", "letterSpacing": ".08em"},
            ),
            html.Div(value_row, style={"marginTop": "4px", "lineHeight": "1.2"}),
        ],
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {border_color}",
            "borderRadius": "14px",
            "padding": "14px 16px",
            "minWidth": "120px",
        },
    )


def mini_kpi(label: str, value: str, color: str = "#ffffff") -> html.Div:
    return html.Div([
        html.Div(label, style={"fontSize": ".62rem", "color": MUTED, "textTransform": "uppercase"}),
        html.Div(value, style={"fontSize": ".9rem", "fontWeight": "700", "color": color}),
    ])
