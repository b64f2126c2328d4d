# dashboard.py
# -*- coding: utf-8 -*-
"""
Dashboard view state: report list, filters, clock, errors and the change
subscription.

State machine over the report collection:

    loading --fetch ok--> loaded --fetch ok--> loaded
       |                    |
       +---fetch/update fails---> error --fetch ok--> loaded

A failure keeps the last known report list. Every successful fetch replaces
the whole list.
"""

import logging

from config import cfg
from models import FilterState
from processing import compute_statistics, filter_reports
from store import FetchError, StoreError, UpdateError
from utils import now_display

log = logging.getLogger(__name__)

LOADING = "loading"
LOADED = "loaded"
ERROR = "error"


class DashboardView:
    """Owns the state for one dashboard page and drives the report store."""

    def __init__(self, store, filters=None, tz=None):
        self.store = store
        self.tz = tz or cfg.get("timezone")
        self.filters = filters or FilterState()
        self.reports = []
        self.status = LOADING
        self.error = None
        self.last_updated = ""
        self.version = 0
        self._subscription = None

    # -------------------------
    # Lifecycle
    # -------------------------

    def mount(self):
        """Initial load, then subscribe to change notifications."""
        if self._subscription is not None:
            return self
        self.tick()
        self.refresh()
        self._subscription = self.store.subscribe_to_changes(self._on_change)
        return self

    def unmount(self):
        """Release the subscription. Later calls are no-ops."""
        if self._subscription is None:
            return
        handle, self._subscription = self._subscription, None
        self.store.unsubscribe(handle)

    @property
    def mounted(self):
        return self._subscription is not None

    def __enter__(self):
        return self.mount()

    def __exit__(self, exc_type, exc, tb):
        self.unmount()
        return False

    # -------------------------
    # Data
    # -------------------------

    def _on_change(self):
        self.refresh()

    def _fail(self, err):
        self.error = err.message
        self.status = ERROR

    def refresh(self):
        """Re-fetch the collection. Returns True on success."""
        try:
            reports = self.store.list_reports()
        except FetchError as e:
            log.error(f"Error fetching reports: {e.message}")
            self._fail(e)
            return False
        self.reports = reports
        self.status = LOADED
        self.error = None
        self.version += 1
        self.tick()
        return True

    def sync(self):
        """Poll the store for changes; subscribers (including us) re-fetch on change.

        An unchanged but successful poll while in the error state re-fetches
        so the view can return to loaded.
        """
        try:
            changed = self.store.poll_changes()
        except StoreError as e:
            log.error(f"Error checking for report changes: {e.message}")
            self._fail(e)
            return False
        if not changed and self.status == ERROR:
            self.refresh()
        return changed

    def resolve(self, report_id):
        """Mark a report resolved, flipping the local copy once the store confirms."""
        try:
            self.store.mark_resolved(report_id)
        except UpdateError as e:
            log.error(f"Error updating report {report_id}: {e.message}")
            self._fail(e)
            return False

        self.reports = [
            r.model_copy(update={"resolved": True}) if r.id == report_id else r
            for r in self.reports
        ]
        self.version += 1
        self.tick()
        return True

    def tick(self, now=None):
        """Refresh only the "last updated" display."""
        self.last_updated = now or now_display(self.tz)
        return self.last_updated

    def dismiss_error(self):
        """Drop the error message; the status stays until the next fetch."""
        if self.error is None:
            return False
        self.error = None
        return True

    # -------------------------
    # Derived views
    # -------------------------

    def snapshot(self):
        """JSON-safe marker of the data state; the page re-renders when it changes."""
        return {"version": self.version, "status": self.status, "error": self.error}

    def set_filters(self, filters):
        self.filters = filters

    def visible_reports(self, filters=None):
        """Filtered reports; per-page callers pass their own FilterState."""
        if filters is None:
            filters = self.filters
        return filter_reports(self.reports, filters, tz=self.tz)

    def statistics(self, today=None):
        return compute_statistics(self.reports, today=today, tz=self.tz)
