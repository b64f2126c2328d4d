# utils.py
# -*- coding: utf-8 -*-
"""
Utility functions for timestamps, colours, and data export.

Every report timestamp goes through parse_timestamp(); anything that cannot
be parsed becomes None (or an empty string for the formatted variants) so a
single bad record never breaks a render.
"""

import pandas as pd

from config import cfg
from severity import classify_severity

# ============================================
# DESIGN SYSTEM CONSTANTS
# ============================================

COLORS = {
    "primary": "#0EA5E9",
    "success": "#22C55E",
    "warning": "#FB923C",
    "danger": "#EF4444",
    "bg_card": "#1C1C1F",
    "text_primary": "#F4F4F5",
    "text_secondary": "#A1A1AA",
    "text_muted": "#71717A",
}

EXPORT_COLUMNS = [
    "id",
    "address",
    "Description",
    "district",
    "leak_type",
    "severity",
    "created_at",
    "resolved",
]


# -------------------------
# Timestamps
# -------------------------


def _tz(tz):
    return tz or cfg.get("timezone") or "UTC"


def parse_timestamp(value, tz=None):
    """Parse an ISO 8601 value into a tz-aware Timestamp, or None."""
    if value is None or value == "":
        return None
    try:
        # values outside pandas' Timestamp range (after 2262-04-11) coerce to NaT
        ts = pd.to_datetime(value, utc=True, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return ts.tz_convert(_tz(tz))


def report_date(value, tz=None) -> str:
    """Calendar date (``YYYY-MM-DD``) of a timestamp, or "" when unparseable."""
    ts = parse_timestamp(value, tz)
    return ts.strftime("%Y-%m-%d") if ts is not None else ""


def format_timestamp(value, tz=None) -> str:
    """Table display form ``YYYY-MM-DD HH:MM``, or "" when unparseable."""
    ts = parse_timestamp(value, tz)
    return ts.strftime("%Y-%m-%d %H:%M") if ts is not None else ""


def today_string(tz=None) -> str:
    return pd.Timestamp.now(tz=_tz(tz)).strftime("%Y-%m-%d")


def now_display(tz=None) -> str:
    """Wall-clock string for the "Last Updated" header."""
    return pd.Timestamp.now(tz=_tz(tz)).strftime("%Y-%m-%d %H:%M:%S")


# -------------------------
# Export
# -------------------------


def reports_frame(reports):
    """Build a DataFrame of reports with wire field names and a severity column."""
    rows = []
    for r in reports:
        row = r.to_record()
        row["severity"] = classify_severity(r.leak_type)
        rows.append(row)
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)
