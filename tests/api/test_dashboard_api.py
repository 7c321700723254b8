# tests/api/test_dashboard_api.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from logidash.api.deps import get_store
from logidash.main import app
from logidash.services.feed.store import DatasetStore


def test_summary_all_data(client: TestClient):
    r = client.get("/dashboard/summary")
    assert r.status_code == 200, r.text
    j = r.json()
    assert j["ok"] is True

    s = j["summary"]
    assert s["total_orders"] == 5
    assert s["total_sales"] == 4600.0
    assert s["total_shipping_cost"] == 270.0
    assert s["rto_rate"] == pytest.approx(40.0)
    assert j["canceled"] == {"count": 1, "value": 300.0}


def test_summary_with_date_range_reanchors_mom(client: TestClient):
    r = client.get("/dashboard/summary", params={"from_date": "2024-03-01", "to_date": "2024-03-31"})
    assert r.status_code == 200, r.text
    s = r.json()["summary"]
    assert s["total_orders"] == 3
    assert s["total_sales"] == 3100.0
    # 过滤后没有上月数据
    assert s["mom_growth"] == 100.0


def test_summary_single_date_bound_is_ignored(client: TestClient):
    full = client.get("/dashboard/summary").json()
    half = client.get("/dashboard/summary", params={"from_date": "2024-03-01"}).json()
    assert full == half


def test_by_state_limit(client: TestClient):
    r = client.get("/dashboard/by-state", params={"limit": 2})
    assert r.status_code == 200, r.text
    rows = r.json()["rows"]
    assert [x["state"] for x in rows] == ["Maharashtra", "Karnataka"]
    assert rows[0]["order_count"] == 2


def test_by_partner_and_payment(client: TestClient):
    partners = client.get("/dashboard/by-partner").json()["rows"]
    assert [x["partner"] for x in partners] == ["Delhivery", "Ekart", "BlueDart"]
    assert partners[0]["success_rate"] == 100.0

    payments = client.get("/dashboard/by-payment").json()["rows"]
    assert payments[0]["method"] == "Prepaid"

    shipping = client.get("/dashboard/state-shipping").json()["rows"]
    assert sum(x["shipping_cost"] for x in shipping) == 270.0


def test_filters_status_and_partner_lists(client: TestClient):
    r = client.get("/dashboard/orders", params={"status": "rto,rto_delivered"})
    assert r.json()["total"] == 2

    r = client.get("/dashboard/orders", params=[("partner", "Ekart"), ("partner", "BlueDart")])
    assert r.json()["total"] == 4

    r = client.get("/dashboard/by-state", params={"state": "Delhi", "city": "New Delhi"})
    assert [x["state"] for x in r.json()["rows"]] == ["Delhi"]


def test_trend_month(client: TestClient):
    r = client.get("/dashboard/trend", params={"granularity": "month"})
    assert r.status_code == 200, r.text
    j = r.json()
    assert j["granularity"] == "month"
    assert [x["raw_key"] for x in j["rows"]] == ["2024-02", "2024-03"]
    assert [x["growth"] for x in j["rows"]] == [0.0, 100.0]


def test_trend_default_is_day(client: TestClient):
    j = client.get("/dashboard/trend").json()
    assert j["granularity"] == "day"
    assert len(j["rows"]) == 6


def test_orders_paging(client: TestClient):
    r = client.get("/dashboard/orders", params={"limit": 2, "offset": 1})
    assert r.status_code == 200, r.text
    j = r.json()
    assert j["total"] == 6
    assert [x["id"] for x in j["rows"]] == ["A2", "A3"]
    assert j["rows"][0]["status"] == "rto"
    assert j["rows"][0]["destination"] == "Mysuru, Karnataka"


def test_options(client: TestClient):
    j = client.get("/dashboard/options").json()
    assert j["states"] == ["Delhi", "Karnataka", "Maharashtra"]
    assert j["partners"] == ["BlueDart", "Delhivery", "Ekart"]
    assert "rto_initiated" in j["statuses"]
    assert j["min_date"] == "2024-02-05"
    assert j["max_date"] == "2024-03-20"

    j = client.get("/dashboard/options", params={"state": "Karnataka"}).json()
    assert j["cities"] == ["Bengaluru", "Mysuru"]


def test_highlights(client: TestClient):
    r = client.get("/dashboard/highlights")
    assert r.status_code == 200, r.text
    j = r.json()
    assert j["highlights"]["best_state"] == {"name": "Maharashtra", "value": 2300.0}
    assert j["highlights"]["best_partner"]["name"] == "Delhivery"
    assert j["insights"]["top_city"]["name"] == "New Delhi"


def test_invalid_date_is_problem_422(client: TestClient):
    r = client.get("/dashboard/summary", params={"from_date": "03/01/2024", "to_date": "2024-03-31"})
    assert r.status_code == 422
    j = r.json()
    assert j["error_code"] == "invalid_date"
    assert j["http_status"] == 422
    assert j["trace_id"].startswith("t_")
    assert j["context"]["path"] == "/dashboard/summary"
    assert j["details"][0]["path"] == "query.from_date"


def test_invalid_status_is_problem_422(client: TestClient):
    r = client.get("/dashboard/summary", params={"status": "lost"})
    assert r.status_code == 422
    assert r.json()["error_code"] == "invalid_status"


def test_request_validation_error_shape(client: TestClient):
    r = client.get("/dashboard/trend", params={"granularity": "week"})
    assert r.status_code == 422
    j = r.json()
    assert j["error_code"] == "request_validation_error"
    assert any(d["path"].endswith("granularity") for d in j["details"])

    r = client.get("/dashboard/by-state", params={"limit": 0})
    assert r.status_code == 422


def test_dataset_not_loaded_is_503():
    app.dependency_overrides[get_store] = lambda: DatasetStore()
    try:
        r = TestClient(app).get("/dashboard/summary")
    finally:
        app.dependency_overrides.pop(get_store, None)
    assert r.status_code == 503
    assert r.json()["error_code"] == "dataset_unavailable"


def test_feed_status(client: TestClient):
    j = client.get("/dashboard/feed").json()
    assert j["loaded"] is True
    assert j["source"] == "fixture"
    assert j["rows"] == 6
    assert j["skipped_rows"] == 0


def test_feed_refresh_failure_keeps_snapshot(tmp_path, sample_orders):
    s = DatasetStore(feed_path=str(tmp_path / "missing.csv"))
    s.replace(sample_orders, source="fixture")
    app.dependency_overrides[get_store] = lambda: s
    try:
        c = TestClient(app)
        r = c.post("/dashboard/feed/refresh")
        assert r.status_code == 502
        assert r.json()["error_code"] == "feed_error"

        # 旧快照仍可用
        assert c.get("/dashboard/summary").json()["summary"]["total_orders"] == 5
        assert "not found" in c.get("/dashboard/feed").json()["last_error"]
    finally:
        app.dependency_overrides.pop(get_store, None)


def test_feed_refresh_non_utf8_file_is_502(tmp_path, sample_orders):
    p = tmp_path / "orders.csv"
    p.write_bytes("Order ID,City,Order Date\n1,S\u00e3o Paulo,01/03/2024\n".encode("latin-1"))
    s = DatasetStore(feed_path=str(p))
    s.replace(sample_orders, source="fixture")
    app.dependency_overrides[get_store] = lambda: s
    try:
        r = TestClient(app).post("/dashboard/feed/refresh")
    finally:
        app.dependency_overrides.pop(get_store, None)
    assert r.status_code == 502
    assert r.json()["error_code"] == "feed_error"
    assert s.last_error is not None


def test_feed_refresh_from_file(tmp_path):
    p = tmp_path / "orders.csv"
    p.write_text(
        "Order ID,SKU,Deliver Status,Order Date,State,City,Pincode,Shipping Partner,Payment Method,Ship Cost,RTO Cost,Total Sales\n"
        "1,A,Delivered,01/03/2024,Karnataka,Bengaluru,560001,Delhivery,COD,40,0,100\n",
        encoding="utf-8",
    )
    s = DatasetStore(feed_path=str(p))
    app.dependency_overrides[get_store] = lambda: s
    try:
        r = TestClient(app).post("/dashboard/feed/refresh")
    finally:
        app.dependency_overrides.pop(get_store, None)
    assert r.status_code == 200, r.text
    assert r.json()["loaded"] is True
    assert r.json()["rows"] == 1


def test_metrics_and_health(client: TestClient):
    client.get("/dashboard/summary")
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "logidash_http_request_duration_seconds" in r.text

    j = client.get("/healthz").json()
    assert j["status"] == "ok"
    assert isinstance(j["dataset_loaded"], bool)
    assert client.get("/ping").json() == {"status": "ok"}
