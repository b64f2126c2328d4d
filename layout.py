# layout.py
# -*- coding: utf-8 -*-
"""
Dashboard layout definition - header, filter controls, stat cards, table.
"""

from dash import dcc, html
import dash_bootstrap_components as dbc

from config import APP_TITLE, cfg
from models import DISTRICT_ALL, SEVERITY_LEVELS, STATUS_ALL, STATUS_OPTIONS
from processing import district_options
from utils import COLORS, today_string

CARD_STYLE = {
    "background": "linear-gradient(135deg, #1C1C1F 0%, #18181B 100%)",
    "border": "1px solid rgba(255, 255, 255, 0.08)",
    "borderRadius": "16px",
}

LABEL_STYLE = {
    "fontSize": "0.8rem",
    "fontWeight": "500",
    "color": COLORS["text_secondary"],
    "textTransform": "uppercase",
    "letterSpacing": "0.025em",
    "marginBottom": "8px",
    "display": "block",
}


def district_dropdown_options(reports):
    return [{"label": "All Districts", "value": DISTRICT_ALL}] + [
        {"label": d, "value": d} for d in district_options(reports)
    ]


def default_date_range(tz=None):
    """Configured default bounds; a missing end date means today."""
    start = cfg.get("default_date_start")
    end = cfg.get("default_date_end") or today_string(tz)
    return start, end


def create_header(last_updated=""):
    return html.Header(
        dbc.Card(
            dbc.CardBody(
                dbc.Row(
                    [
                        dbc.Col(
                            html.H1(
                                APP_TITLE,
                                className="mb-0",
                                style={
                                    "fontSize": "clamp(1.25rem, 4vw, 1.75rem)",
                                    "fontWeight": "700",
                                    "color": COLORS["primary"],
                                },
                            ),
                            xs=12,
                            md=8,
                        ),
                        dbc.Col(
                            html.Div(
                                [
                                    "Last Updated: ",
                                    html.Span(
                                        last_updated,
                                        id="last-updated",
                                        style={"fontWeight": "500"},
                                    ),
                                ],
                                style={"fontSize": "0.85rem", "color": COLORS["text_muted"]},
                            ),
                            xs=12,
                            md=4,
                            style={"textAlign": "right"},
                        ),
                    ],
                    className="align-items-center",
                ),
                style={"padding": "16px 20px"},
            ),
            style=CARD_STYLE,
        ),
        style={"marginTop": "16px", "marginBottom": "16px"},
    )


def create_controls(reports, tz=None):
    """Filter controls card: status, severity, district, date range, export."""
    start, end = default_date_range(tz)
    return dbc.Card(
        dbc.CardBody(
            dbc.Row(
                [
                    dbc.Col(
                        [
                            html.Label("Status", style=LABEL_STYLE),
                            dbc.RadioItems(
                                id="status-filter",
                                options=[{"label": s, "value": s} for s in STATUS_OPTIONS],
                                value=STATUS_ALL,
                                inline=True,
                            ),
                        ],
                        xs=12,
                        md=6,
                        lg=3,
                        className="mb-3 mb-lg-0",
                    ),
                    dbc.Col(
                        [
                            html.Label("Severity", style=LABEL_STYLE),
                            dbc.Checklist(
                                id="severity-filter",
                                options=[{"label": s, "value": s} for s in SEVERITY_LEVELS],
                                value=list(SEVERITY_LEVELS),
                                inline=True,
                            ),
                        ],
                        xs=12,
                        md=6,
                        lg=3,
                        className="mb-3 mb-lg-0",
                    ),
                    dbc.Col(
                        [
                            html.Label("District", style=LABEL_STYLE),
                            dcc.Dropdown(
                                id="district-filter",
                                options=district_dropdown_options(reports),
                                value=DISTRICT_ALL,
                                clearable=False,
                            ),
                        ],
                        xs=12,
                        md=6,
                        lg=2,
                        className="mb-3 mb-lg-0",
                    ),
                    dbc.Col(
                        [
                            html.Label("Reported Between", style=LABEL_STYLE),
                            dcc.DatePickerRange(
                                id="date-range",
                                start_date=start,
                                end_date=end,
                                display_format="YYYY-MM-DD",
                                clearable=True,
                            ),
                        ],
                        xs=12,
                        md=6,
                        lg=3,
                        className="mb-3 mb-lg-0",
                    ),
                    dbc.Col(
                        [
                            html.Label("Export", style=LABEL_STYLE),
                            dbc.Button("⬇ CSV", id="btn-export", color="secondary", size="sm"),
                            dcc.Download(id="download-reports-csv"),
                        ],
                        xs=12,
                        md=6,
                        lg=1,
                    ),
                ],
                className="g-2 g-md-3",
            )
        ),
        style=CARD_STYLE,
        className="mb-3",
    )


def create_report_panel():
    return dbc.Card(
        [
            dbc.CardHeader(
                html.H2(
                    "Leak Reports",
                    className="mb-0",
                    style={"fontSize": "1.1rem", "fontWeight": "500"},
                )
            ),
            dbc.CardBody(html.Div(id="report-table"), className="p-0"),
        ],
        style=CARD_STYLE,
        className="mb-4",
    )


def create_layout(view):
    """
    Create the complete dashboard layout for a mounted DashboardView.

    Stat cards, the table and the error banner are filled by callbacks; the
    two intervals drive the clock and change polling.
    """
    return dbc.Container(
        [
            create_header(view.last_updated),
            create_controls(view.reports, view.tz),
            html.Div(id="error-container"),
            html.Div(id="stat-cards"),
            create_report_panel(),
            dcc.Interval(
                id="clock-interval",
                interval=int(cfg.get("clock_interval_seconds", 60)) * 1000,
            ),
            dcc.Interval(
                id="sync-interval",
                interval=int(cfg.get("change_poll_seconds", 5)) * 1000,
            ),
            dcc.Store(id="store-version", data=view.snapshot()),
        ],
        fluid=True,
        style={"maxWidth": "1280px"},
    )
