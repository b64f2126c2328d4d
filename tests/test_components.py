"""Rendered components and the callback helpers behind them."""

from callbacks import (
    build_filters,
    dismiss_alert,
    export_frame,
    render_view,
    triggered_report_id,
)
from components import (
    EMPTY_TABLE_TEXT,
    make_error_alert,
    make_report_row,
    make_report_table,
    make_stat_cards,
    severity_badge,
)
from dashboard import DashboardView
from layout import create_layout, district_dropdown_options
from models import Report, Statistics
from severity import SEVERITY_COLORS
from utils import reports_frame


def _texts(component):
    """Flatten every string in a Dash component tree."""
    if component is None:
        return []
    if isinstance(component, (str, int, float)):
        return [str(component)]
    if isinstance(component, (list, tuple)):
        return [t for c in component for t in _texts(c)]
    return _texts(getattr(component, "children", None))


def _find(component, predicate):
    found = []
    if isinstance(component, (list, tuple)):
        for c in component:
            found.extend(_find(c, predicate))
        return found
    if component is None or isinstance(component, (str, int, float)):
        return found
    if predicate(component):
        found.append(component)
    found.extend(_find(getattr(component, "children", None), predicate))
    return found


def test_active_row_has_resolve_button(reports):
    row = make_report_row(reports[0], tz="UTC")
    texts = _texts(row)
    assert "123 Main St" in texts
    assert "Severe water burst" in texts
    assert "2025-06-07 10:00" in texts
    assert "Active" in texts
    buttons = _find(row, lambda c: getattr(c, "id", None) == {"type": "resolve-btn", "index": 1})
    assert len(buttons) == 1


def test_resolved_row_has_no_button(reports):
    row = make_report_row(reports[1], tz="UTC")
    assert "Resolved" in _texts(row)
    assert _find(row, lambda c: isinstance(getattr(c, "id", None), dict)) == []


def test_row_with_bad_timestamp_renders_blank():
    report = Report.model_validate({"id": 5, "address": "X", "created_at": "nope"})
    texts = _texts(make_report_row(report))
    assert "X" in texts


def test_severity_badge_colour():
    badge = severity_badge("Burst Pipe")
    assert badge.children == "Burst Pipe"
    assert badge.style["backgroundColor"] == SEVERITY_COLORS["Critical"]


def test_empty_table_message():
    assert EMPTY_TABLE_TEXT in _texts(make_report_table([]))


def test_stat_cards_show_counts():
    stats = Statistics(total_active=4, resolved_today=2, critical_active=1, avg_response_time="3.2 hours")
    texts = _texts(make_stat_cards(stats))
    for expected in ["Total Active Leaks", "4", "Resolved Today", "2", "Critical Cases", "1", "3.2 hours"]:
        assert expected in texts


def test_error_alert():
    assert make_error_alert(None) is None
    alert = make_error_alert("network down")
    assert "network down" in alert.children


def test_district_dropdown_options(reports):
    values = [o["value"] for o in district_dropdown_options(reports)]
    assert values == ["All", "District A", "District B"]


def test_build_filters_defaults_and_fallback():
    fs = build_filters(None, None, None, None, None)
    assert fs.status == "All"
    assert fs.severities == set()
    assert fs.district == "All"

    fs = build_filters("Bogus", ["Critical"], "District A", "2025-01-01", "2025-12-31")
    assert fs.status == "All"
    assert fs.district == "All"


def test_triggered_report_id():
    assert triggered_report_id({"type": "resolve-btn", "index": 7}, 1) == 7
    assert triggered_report_id({"type": "resolve-btn", "index": 7}, 0) is None
    assert triggered_report_id("btn-export", 1) is None


def test_render_view(memory_store):
    view = DashboardView(memory_store, tz="UTC").mount()
    filters = build_filters("Active", ["Critical", "Moderate", "Minor"], "All", None, None)
    cards, table, alert, options = render_view(view, filters)
    assert "123 Main St" in _texts(table)
    assert "456 Park Ave" not in _texts(table)
    assert alert is None
    assert len(options) == 3


def test_render_view_leaves_shared_filters_alone(memory_store):
    view = DashboardView(memory_store, tz="UTC").mount()
    shared = view.filters
    render_view(view, build_filters("Resolved", ["Minor"], "District B", None, None))
    assert view.filters is shared
    assert [r.id for r in view.visible_reports()] == [1, 2]


def test_export_uses_requesting_page_filters(memory_store):
    view = DashboardView(memory_store, tz="UTC").mount()
    # another page rendered with a different selection in between
    render_view(view, build_filters("Resolved", None, "All", None, None))

    df = export_frame(view, build_filters("Active", ["Critical", "Moderate", "Minor"], "All", None, None))
    assert df["id"].tolist() == [1]

    df = export_frame(view, build_filters("All", ["Critical", "Moderate", "Minor"], "All", None, None))
    assert df["id"].tolist() == [1, 2]


def test_closing_error_banner_clears_error(memory_store):
    view = DashboardView(memory_store, tz="UTC").mount()
    view.error = "network down"
    assert render_view(view)[2] is not None

    assert dismiss_alert(view, True) is None
    snapshot = dismiss_alert(view, False)
    assert snapshot is not None
    assert snapshot["error"] is None
    assert render_view(view)[2] is None
    assert dismiss_alert(view, False) is None


def test_create_layout_has_controls(memory_store):
    view = DashboardView(memory_store).mount()
    layout = create_layout(view)
    ids = {c.id for c in _find(layout, lambda c: isinstance(getattr(c, "id", None), str))}
    for expected in [
        "status-filter",
        "severity-filter",
        "district-filter",
        "date-range",
        "report-table",
        "stat-cards",
        "clock-interval",
        "sync-interval",
        "store-version",
    ]:
        assert expected in ids


def test_reports_frame(reports):
    df = reports_frame(reports)
    assert list(df["id"]) == [1, 2]
    assert list(df["severity"]) == ["Critical", "Minor"]
    assert "Description" in df.columns
