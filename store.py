# store.py
# -*- coding: utf-8 -*-
"""
Report store clients.

RestReportStore talks to a hosted PostgREST endpoint (e.g. a Supabase
project) over HTTP. MemoryReportStore keeps records in process for demo mode
and tests. Both share the change-subscription registry in ReportStore:
subscribers get a payload-free notification and re-run list_reports().
"""

import json
import hashlib
import logging
import itertools

import requests
from pydantic import ValidationError

from models import Report
from utils import parse_timestamp

log = logging.getLogger(__name__)


# -------------------------
# Errors
# -------------------------


class StoreError(Exception):
    """A report store call failed. ``message`` is safe to show to operators."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class FetchError(StoreError):
    """Loading the report collection failed."""


class UpdateError(StoreError):
    """Marking a report resolved failed."""


# -------------------------
# Subscriptions
# -------------------------


class Subscription:
    """Handle for a registered change listener."""

    _ids = itertools.count(1)

    def __init__(self, on_change):
        self.id = next(self._ids)
        self.on_change = on_change
        self.active = True

    def __repr__(self):
        state = "active" if self.active else "released"
        return f"<Subscription {self.id} {state}>"


class ReportStore:
    """Base class holding the subscriber registry."""

    def __init__(self):
        self._subscriptions = {}

    def list_reports(self):
        raise NotImplementedError

    def mark_resolved(self, report_id):
        raise NotImplementedError

    def poll_changes(self) -> bool:
        """Detect changes for stores without a push channel. Returns True on change."""
        return False

    def subscribe_to_changes(self, on_change):
        sub = Subscription(on_change)
        self._subscriptions[sub.id] = sub
        log.info(f"Subscribed to report changes ({sub!r})")
        return sub

    def unsubscribe(self, handle):
        if handle is None or self._subscriptions.pop(handle.id, None) is None:
            log.warning(f"unsubscribe() on a handle that is not live: {handle!r}")
            return
        handle.active = False
        log.info(f"Released report change subscription {handle.id}")

    @property
    def subscriber_count(self):
        return len(self._subscriptions)

    def _notify_change(self):
        for sub in list(self._subscriptions.values()):
            if sub.active:
                sub.on_change()


def parse_reports(records):
    """Validate raw backend records, dropping those without a usable id."""
    reports = []
    for rec in records or []:
        try:
            reports.append(Report.model_validate(rec))
        except ValidationError as e:
            log.warning(f"Skipping malformed report record {rec!r}: {e.error_count()} error(s)")
    return reports


# -------------------------
# Hosted backend (PostgREST)
# -------------------------


class RestReportStore(ReportStore):
    """
    Report store backed by a PostgREST ``/rest/v1/<table>`` endpoint.

    Parameters
    ----------
    base_url : str
        Project URL, e.g. ``https://<project>.supabase.co``.
    api_key : str|None
        Sent as both ``apikey`` and bearer token.
    table : str
    timeout : float|None
        Per-request timeout in seconds. None waits indefinitely.
    session : requests.Session|None
    """

    def __init__(self, base_url, api_key=None, table="reports", timeout=None, session=None):
        super().__init__()
        self.endpoint = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self.timeout = timeout
        self.session = session or requests.Session()
        if api_key:
            self.session.headers.update(
                {"apikey": api_key, "Authorization": f"Bearer {api_key}"}
            )
        self._fingerprint = None

    def _read(self):
        try:
            response = self.session.get(
                self.endpoint,
                params={"select": "*", "order": "created_at.desc"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise FetchError(f"Could not reach report store: {e}") from e
        if not response.ok:
            raise FetchError(_error_message(response))
        try:
            return response.json()
        except ValueError as e:
            raise FetchError(f"Report store returned invalid JSON: {e}") from e

    def list_reports(self):
        records = self._read()
        self._fingerprint = _fingerprint(records)
        return parse_reports(records)

    def mark_resolved(self, report_id):
        try:
            response = self.session.patch(
                self.endpoint,
                params={"id": f"eq.{report_id}"},
                json={"resolved": True},
                headers={"Prefer": "return=minimal"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpdateError(f"Could not reach report store: {e}") from e
        if not response.ok:
            raise UpdateError(_error_message(response))
        log.info(f"Report {report_id} marked resolved")

    def poll_changes(self) -> bool:
        fingerprint = _fingerprint(self._read())
        if fingerprint == self._fingerprint:
            return False
        self._fingerprint = fingerprint
        log.info("Report collection changed; notifying subscribers")
        self._notify_change()
        return True


def _fingerprint(records):
    payload = json.dumps(records, sort_keys=True, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def _error_message(response):
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}: {response.reason}"


def _created_sort_key(report):
    ts = parse_timestamp(report.created_at)
    return (ts is not None, ts)


# -------------------------
# In-memory store
# -------------------------


class MemoryReportStore(ReportStore):
    """In-process store. Every mutation notifies subscribers synchronously."""

    def __init__(self, records=None):
        super().__init__()
        self._records = {}
        for rec in records or []:
            self._records[rec["id"]] = dict(rec)

    def list_reports(self):
        reports = parse_reports(self._records.values())
        # newest instant first, unparseable timestamps last; stable for ties
        return sorted(reports, key=_created_sort_key, reverse=True)

    def mark_resolved(self, report_id):
        rec = self._records.get(report_id)
        if rec is None:
            raise UpdateError(f"Report {report_id} not found")
        rec["resolved"] = True
        log.info(f"Report {report_id} marked resolved")
        self._notify_change()

    def insert_report(self, record):
        if record["id"] in self._records:
            raise StoreError(f"Report {record['id']} already exists")
        self._records[record["id"]] = dict(record)
        self._notify_change()

    def delete_report(self, report_id):
        if self._records.pop(report_id, None) is None:
            raise StoreError(f"Report {report_id} not found")
        self._notify_change()


def build_store(settings, cfg, demo_records=None):
    """Pick the REST store when a backend URL is configured, else demo mode."""
    if settings.REPORTS_API_URL and not settings.DEMO_MODE:
        log.info(f"Using hosted report store at {settings.REPORTS_API_URL}")
        return RestReportStore(
            settings.REPORTS_API_URL,
            api_key=settings.REPORTS_API_KEY,
            table=cfg.get("reports_table", "reports"),
            timeout=settings.REQUEST_TIMEOUT,
        )
    log.info("No REPORTS_API_URL configured (or DEMO_MODE on); using demo report store.")
    return MemoryReportStore(demo_records)
