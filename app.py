# app.py
# -*- coding: utf-8 -*-
"""
Main Dash application entry point.

Connects to the hosted report store when REPORTS_API_URL is set, otherwise
runs against the built-in demo reports. Production servers load the WSGI
app through create_server().
"""
# %%
import atexit

import dash
import dash_bootstrap_components as dbc

from callbacks import register_callbacks
from config import APP_TITLE, cfg, log, settings
from dashboard import DashboardView
from data import load_demo_reports
from layout import create_layout
from store import build_store

meta_tags = [
    {
        "name": "viewport",
        "content": "width=device-width, initial-scale=1.0, shrink-to-fit=no",
    },
    {"name": "theme-color", "content": "#151515"},
    {"name": "description", "content": "Water leak incident reports dashboard"},
]


def create_app(store=None):
    """Build the Dash app around one mounted DashboardView."""
    if store is None:
        store = build_store(settings, cfg, demo_records=load_demo_reports())

    view = DashboardView(store).mount()
    # release the change subscription when the process exits
    atexit.register(view.unmount)

    app = dash.Dash(
        __name__,
        external_stylesheets=[dbc.themes.CYBORG],
        suppress_callback_exceptions=True,
        meta_tags=meta_tags,
    )
    app.title = APP_TITLE
    app.layout = lambda: create_layout(view)
    register_callbacks(app, view)
    return app, view


def create_server(store=None):
    """WSGI entry point, e.g. ``gunicorn "app:create_server()" --workers 1``.

    Keep a single worker process: every worker builds its own DashboardView.
    """
    app, _view = create_app(store)
    return app.server


# -------------------------
# Main
# -------------------------

if __name__ == "__main__":
    app, view = create_app()
    log.info(f"📊 Dashboard: http://{settings.HOST}:{settings.PORT}")
    # callbacks share one DashboardView; serve them one at a time
    app.run(
        debug=settings.DEBUG,
        host=settings.HOST,
        port=settings.PORT,
        use_reloader=False,
        threaded=False,
    )
