# components.py
# -*- coding: utf-8 -*-
"""
UI components for stat cards, severity badges, and the report table.
"""

from dash import html
import dash_bootstrap_components as dbc

from severity import classify_severity, severity_color
from utils import COLORS, format_timestamp

EMPTY_TABLE_TEXT = "No leak reports match the current filters."

STAT_CARD_STYLE = {
    "background": "linear-gradient(135deg, #1C1C1F 0%, #18181B 100%)",
    "border": "1px solid rgba(255, 255, 255, 0.08)",
    "borderRadius": "10px",
    "height": "100%",
}

CELL_STYLE = {"whiteSpace": "nowrap", "verticalAlign": "middle"}


def make_stat_card(card_id, title, value, icon, color):
    """Counter card with a coloured left accent."""
    return dbc.Card(
        dbc.CardBody(
            html.Div(
                [
                    html.Div(
                        [
                            html.P(
                                title,
                                className="mb-1",
                                style={
                                    "fontSize": "0.8rem",
                                    "fontWeight": "500",
                                    "color": COLORS["text_secondary"],
                                    "textTransform": "uppercase",
                                },
                            ),
                            html.H3(
                                str(value),
                                className="mb-0",
                                style={"fontWeight": "700", "color": COLORS["text_primary"]},
                            ),
                        ]
                    ),
                    html.Span(icon, style={"fontSize": "1.5rem"}),
                ],
                style={
                    "display": "flex",
                    "justifyContent": "space-between",
                    "alignItems": "flex-start",
                },
            )
        ),
        id=card_id,
        style={**STAT_CARD_STYLE, "borderLeft": f"4px solid {color}"},
    )


def make_stat_cards(stats):
    """Row of the four summary cards."""
    cards = [
        make_stat_card(
            "stat-total-active", "Total Active Leaks", stats.total_active, "💧", COLORS["danger"]
        ),
        make_stat_card(
            "stat-resolved-today", "Resolved Today", stats.resolved_today, "✅", COLORS["success"]
        ),
        make_stat_card(
            "stat-critical", "Critical Cases", stats.critical_active, "⚠️", COLORS["warning"]
        ),
        make_stat_card(
            "stat-avg-response", "Avg Response Time", stats.avg_response_time, "⏱️", COLORS["primary"]
        ),
    ]
    return dbc.Row(
        [dbc.Col(c, xs=12, md=6, lg=3, className="mb-3") for c in cards],
        className="g-3",
    )


def severity_badge(leak_type):
    """Pill showing the leak type, coloured by its severity."""
    severity = classify_severity(leak_type)
    return html.Span(
        leak_type or "Unknown",
        title=severity,
        className="badge rounded-pill",
        style={
            "backgroundColor": severity_color(severity),
            "color": "white",
            "fontSize": "0.75rem",
            "fontWeight": "500",
        },
    )


def _location_cell(report):
    children = [html.Div(report.address)]
    if report.description:
        children.append(
            html.P(
                report.description,
                className="mb-0 mt-1",
                style={"fontSize": "0.75rem", "color": COLORS["text_muted"]},
            )
        )
    return html.Td(children, style=CELL_STYLE)


def _action_cell(report):
    if report.resolved:
        content = html.Span("✔ Resolved", style={"color": COLORS["text_muted"]})
    else:
        content = dbc.Button(
            "✔ Mark Resolved",
            id={"type": "resolve-btn", "index": report.id},
            color="success",
            size="sm",
            n_clicks=0,
        )
    return html.Td(content, style={**CELL_STYLE, "textAlign": "right"})


def make_report_row(report, tz=None):
    status_color = COLORS["success"] if report.resolved else COLORS["danger"]
    return html.Tr(
        [
            _location_cell(report),
            html.Td(severity_badge(report.leak_type), style=CELL_STYLE),
            html.Td(format_timestamp(report.created_at, tz), style=CELL_STYLE),
            html.Td(
                html.Span(
                    "Resolved" if report.resolved else "Active",
                    style={"color": status_color, "fontWeight": "500"},
                ),
                style=CELL_STYLE,
            ),
            _action_cell(report),
        ],
        key=str(report.id),
    )


def make_report_table(reports, tz=None):
    """Leak report table, or an empty-state message when nothing matches."""
    header = html.Thead(
        html.Tr(
            [
                html.Th("Location"),
                html.Th("Severity"),
                html.Th("Reported"),
                html.Th("Status"),
                html.Th("Action", style={"textAlign": "right"}),
            ]
        )
    )
    table = dbc.Table(
        [header, html.Tbody([make_report_row(r, tz) for r in reports])],
        hover=True,
        responsive=True,
        className="table-dark mb-0",
    )
    if not reports:
        return html.Div(
            [
                table,
                html.Div(
                    EMPTY_TABLE_TEXT,
                    className="p-4 text-center",
                    style={"color": COLORS["text_muted"]},
                ),
            ]
        )
    return table


def make_error_alert(message):
    if not message:
        return None
    return dbc.Alert(
        f"⚠️ {message}",
        id="error-alert",
        color="danger",
        dismissable=True,
        is_open=True,
        className="mb-3",
    )
