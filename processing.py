# processing.py
# -*- coding: utf-8 -*-
"""
Report filtering and derived statistics.

Both operate on the full in-memory report list on every render. Nothing is
cached and input order is never changed.
"""

from datetime import date, datetime

from config import cfg
from models import (
    CRITICAL,
    DISTRICT_ALL,
    STATUS_ACTIVE,
    STATUS_RESOLVED,
    FilterState,
    Statistics,
)
from severity import classify_severity
from utils import report_date, today_string


# -------------------------
# Filter Engine
# -------------------------


def matches_status(report, status) -> bool:
    if status == STATUS_ACTIVE:
        return not report.resolved
    if status == STATUS_RESOLVED:
        return report.resolved
    return True


def matches_severity(report, severities) -> bool:
    return classify_severity(report.leak_type) in severities


def matches_district(report, district) -> bool:
    return district == DISTRICT_ALL or report.district == district


def matches_date_range(report, start=None, end=None, tz=None) -> bool:
    """Inclusive ``YYYY-MM-DD`` comparison; an open range matches everything."""
    if start is None and end is None:
        return True
    day = report_date(report.created_at, tz)
    if not day:
        return False
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


def filter_reports(reports, filters=None, tz=None):
    """Return the reports matching every active filter, in input order."""
    filters = filters or FilterState()
    return [
        r
        for r in reports
        if matches_status(r, filters.status)
        and matches_severity(r, filters.severities)
        and matches_district(r, filters.district)
        and matches_date_range(r, filters.date_start, filters.date_end, tz)
    ]


def district_options(reports):
    """Sorted distinct non-empty districts present in the report set."""
    return sorted({r.district for r in reports if r.district})


# -------------------------
# Statistics Aggregator
# -------------------------


def compute_statistics(reports, today=None, avg_response_time=None, tz=None):
    """
    Compute the stat-card counters.

    Parameters
    ----------
    reports : list[Report]
    today : date|str|None
        Reference day for ``resolved_today``. Defaults to the current date in
        the dashboard timezone.
    avg_response_time : str|None
        Display placeholder; defaults to cfg['avg_response_time'].
    """
    if today is None:
        today = today_string(tz)
    elif isinstance(today, (date, datetime)):
        today = today.strftime("%Y-%m-%d")

    total_active = 0
    resolved_today = 0
    critical_active = 0
    for r in reports:
        if not r.resolved:
            total_active += 1
            if classify_severity(r.leak_type) == CRITICAL:
                critical_active += 1
        elif report_date(r.created_at, tz) == today:
            resolved_today += 1

    return Statistics(
        total_active=total_active,
        resolved_today=resolved_today,
        critical_active=critical_active,
        avg_response_time=(
            avg_response_time
            if avg_response_time is not None
            else str(cfg.get("avg_response_time", ""))
        ),
    )
