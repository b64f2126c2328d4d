# callbacks.py
# -*- coding: utf-8 -*-
"""
Dashboard callbacks - all interactive functionality.

Every callback goes through the DashboardView passed to register_callbacks():
- Clock tick (header timestamp only)
- Change polling and re-fetch
- Filtered table and stat-card rendering
- Resolve actions and error dismissal
- CSV export of the visible reports
"""

import logging

import dash
from dash import ctx, dcc, ALL
from dash.dependencies import Input, Output, State
from pydantic import ValidationError

from config import cfg
from components import make_error_alert, make_report_table, make_stat_cards
from layout import district_dropdown_options
from models import DISTRICT_ALL, STATUS_ALL, FilterState
from utils import reports_frame

log = logging.getLogger(__name__)


# -------------------------
# Helpers
# -------------------------


def build_filters(status, severities, district, start_date, end_date):
    """Translate control values into a FilterState, falling back to defaults."""
    try:
        return FilterState(
            status=status or STATUS_ALL,
            severities=severities or [],
            district=district or DISTRICT_ALL,
            date_start=start_date,
            date_end=end_date,
        )
    except ValidationError as e:
        log.warning(f"Ignoring invalid filter values: {e.error_count()} error(s)")
        return FilterState()


def render_view(view, filters=None):
    """Stat cards, table, error banner and district options for one page's filters."""
    return (
        make_stat_cards(view.statistics()),
        make_report_table(view.visible_reports(filters), view.tz),
        make_error_alert(view.error),
        district_dropdown_options(view.reports),
    )


def export_frame(view, filters):
    """CSV rows for the reports visible under the requesting page's filters."""
    return reports_frame(view.visible_reports(filters))


def dismiss_alert(view, is_open):
    """Clear the stored error once its banner is closed. Returns a new snapshot or None."""
    if is_open or not view.dismiss_error():
        return None
    return view.snapshot()


def triggered_report_id(triggered_id, triggered_value):
    """Report id from a pattern-matched resolve button, or None for a non-click."""
    if not isinstance(triggered_id, dict) or not triggered_value:
        return None
    return triggered_id.get("index")


def register_callbacks(app, view):
    """Register all dashboard callbacks"""

    # -------------------------
    # Clock
    # -------------------------
    @app.callback(
        Output("last-updated", "children"),
        Input("clock-interval", "n_intervals"),
    )
    def update_clock(_n):
        return view.tick()

    # -------------------------
    # Change polling
    # -------------------------
    @app.callback(
        Output("store-version", "data"),
        Input("sync-interval", "n_intervals"),
        State("store-version", "data"),
        prevent_initial_call=True,
    )
    def sync_reports(_n, snapshot):
        view.sync()
        current = view.snapshot()
        if current == snapshot:
            raise dash.exceptions.PreventUpdate
        return current

    # -------------------------
    # Table + stats
    # -------------------------
    @app.callback(
        [
            Output("stat-cards", "children"),
            Output("report-table", "children"),
            Output("error-container", "children"),
            Output("district-filter", "options"),
        ],
        [
            Input("store-version", "data"),
            Input("status-filter", "value"),
            Input("severity-filter", "value"),
            Input("district-filter", "value"),
            Input("date-range", "start_date"),
            Input("date-range", "end_date"),
        ],
    )
    def render_reports(_snapshot, status, severities, district, start_date, end_date):
        filters = build_filters(status, severities, district, start_date, end_date)
        return render_view(view, filters)

    # -------------------------
    # Error banner
    # -------------------------
    @app.callback(
        Output("store-version", "data", allow_duplicate=True),
        Input("error-alert", "is_open"),
        prevent_initial_call=True,
    )
    def dismiss_error(is_open):
        snapshot = dismiss_alert(view, is_open)
        if snapshot is None:
            raise dash.exceptions.PreventUpdate
        return snapshot

    # -------------------------
    # Resolve action
    # -------------------------
    @app.callback(
        Output("store-version", "data", allow_duplicate=True),
        Input({"type": "resolve-btn", "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def resolve_report(n_clicks_list):
        if not ctx.triggered_id or not any(n_clicks_list or []):
            raise dash.exceptions.PreventUpdate

        report_id = triggered_report_id(ctx.triggered_id, ctx.triggered[0].get("value"))
        if report_id is None:
            raise dash.exceptions.PreventUpdate

        log.info(f"Resolve requested for report {report_id}")
        view.resolve(report_id)
        return view.snapshot()

    # -------------------------
    # Export
    # -------------------------
    @app.callback(
        Output("download-reports-csv", "data"),
        Input("btn-export", "n_clicks"),
        State("status-filter", "value"),
        State("severity-filter", "value"),
        State("district-filter", "value"),
        State("date-range", "start_date"),
        State("date-range", "end_date"),
        prevent_initial_call=True,
    )
    def export_reports(_n, status, severities, district, start_date, end_date):
        filters = build_filters(status, severities, district, start_date, end_date)
        df = export_frame(view, filters)
        if df.empty:
            raise dash.exceptions.PreventUpdate
        return dcc.send_data_frame(
            df.to_csv, cfg.get("export_filename", "leak_reports.csv"), index=False
        )
