"""App factory and demo data loading."""

from app import create_app, create_server
from data import DEMO_REPORTS, load_demo_reports
from store import MemoryReportStore


def test_create_app_mounts_view(memory_store):
    app, view = create_app(memory_store)
    assert view.mounted
    assert memory_store.subscriber_count == 1
    assert [r.id for r in view.reports] == [1, 2]
    assert app.title
    view.unmount()
    assert memory_store.subscriber_count == 0


def test_create_server_returns_wsgi_app(memory_store):
    server = create_server(memory_store)
    assert callable(server.wsgi_app)
    assert memory_store.subscriber_count == 1

    response = server.test_client().get("/_dash-layout")
    assert response.status_code == 200
    assert b"report-table" in response.data


def test_builtin_demo_reports_are_copies():
    records = load_demo_reports()
    assert len(records) == len(DEMO_REPORTS)
    records[0]["resolved"] = True
    assert DEMO_REPORTS[0]["resolved"] is False


def test_demo_reports_from_csv(tmp_path):
    path = tmp_path / "reports.csv"
    path.write_text(
        "id,address,leak_type,created_at,resolved,district,Description\n"
        "10,1 Quay St,Burst Pipe,2025-06-07T10:00:00Z,false,District A,\n"
        "11,2 Quay St,Small Leak,,TRUE,District B,Drip under sink\n",
        encoding="utf-8",
    )
    records = load_demo_reports(str(path))
    reports = MemoryReportStore(records).list_reports()

    by_id = {r.id: r for r in reports}
    assert by_id[10].resolved is False
    assert by_id[10].description is None
    assert by_id[11].resolved is True
    assert by_id[11].created_at == ""
    assert by_id[11].description == "Drip under sink"


def test_missing_demo_csv_falls_back(tmp_path):
    records = load_demo_reports(str(tmp_path / "missing.csv"))
    assert [r["id"] for r in records] == [r["id"] for r in DEMO_REPORTS]
