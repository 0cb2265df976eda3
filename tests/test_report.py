"""Revenue report windows (Istanbul, UTC+3) and the report endpoints."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from siptakip.api.v1.endpoints import orders as orders_endpoint
from siptakip.utils.time import in_window, local_date, report_window

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_daily_window_is_istanbul_day() -> None:
    assert report_window("daily", NOW) == (_utc(2026, 3, 9, 21), _utc(2026, 3, 10, 21))


def test_daily_window_just_after_local_midnight() -> None:
    start, end = report_window("daily", _utc(2026, 3, 9, 21, 30))
    assert start == _utc(2026, 3, 9, 21)
    assert local_date(_utc(2026, 3, 9, 21, 30), 3) == date(2026, 3, 10)


def test_weekly_window_starts_on_local_monday() -> None:
    assert report_window("weekly", NOW) == (_utc(2026, 3, 8, 21), _utc(2026, 3, 10, 21))


def test_monthly_window() -> None:
    assert report_window("monthly", NOW) == (_utc(2026, 2, 28, 21), _utc(2026, 3, 31, 21))


def test_custom_range_end_is_inclusive() -> None:
    window = report_window(None, NOW, start_date=date(2026, 3, 1), end_date=date(2026, 3, 5))
    assert window == (_utc(2026, 2, 28, 21), _utc(2026, 3, 5, 21))


def test_named_period_wins_over_custom_dates() -> None:
    window = report_window("daily", NOW, start_date=date(2026, 1, 1), end_date=date(2026, 1, 31))
    assert window == report_window("daily", NOW)


def test_custom_range_rejects_reversed_dates() -> None:
    with pytest.raises(ValueError):
        report_window(None, NOW, start_date=date(2026, 3, 5), end_date=date(2026, 3, 1))


def test_window_is_half_open() -> None:
    window = report_window("daily", NOW)
    assert in_window(window[0], window)
    assert not in_window(window[1], window)
    assert not in_window(None, window)


def _paid_order(client: TestClient, headers: dict[str, str], monkeypatch, paid_at: datetime, **overrides) -> dict:
    monkeypatch.setattr(orders_endpoint, "_now_utc", lambda: paid_at)
    payload = {"tableNumber": 2, "items": [{"id": "prod-006", "name": "Izgara Köfte", "price": "220", "quantity": 1}]}
    payload.update(overrides)
    order = client.post("/api/v1/orders", json=payload, headers=headers).json()
    steps = ["Hazır", "Teslim Edildi", "Ödendi"]
    if payload.get("orderSource", "restaurant") != "restaurant":
        steps = ["Hazır", "Kuryeye Teslim Edildi"]
    for status in steps:
        response = client.patch(f"/api/v1/orders/{order['id']}/status", json={"status": status}, headers=headers)
        assert response.status_code == 200, response.text
    return order


def test_daily_report_uses_istanbul_midnight(client: TestClient, admin_headers, monkeypatch) -> None:
    _paid_order(client, admin_headers, monkeypatch, _utc(2026, 3, 9, 20, 59))
    included = _paid_order(client, admin_headers, monkeypatch, _utc(2026, 3, 9, 21, 0))
    courier = _paid_order(
        client,
        admin_headers,
        monkeypatch,
        _utc(2026, 3, 10, 9, 0),
        tableNumber=None,
        orderSource="trendyol",
        items=[{"id": "prod-008", "name": "Lahmacun", "price": "85", "quantity": 2}],
    )
    monkeypatch.setattr(orders_endpoint, "_now_utc", lambda: NOW)

    report = client.get("/api/v1/orders/report", params={"period": "daily"}, headers=admin_headers).json()
    assert report["period"] == "daily"
    assert {order["id"] for order in report["orders"]} == {included["id"], courier["id"]}
    assert report["total_orders"] == 2
    assert Decimal(report["total_revenue"]) == Decimal("390.00")
    assert Decimal(report["restaurant_revenue"]) == Decimal("220.00")
    assert report["third_party_orders"] == 1
    assert Decimal(report["average_order"]) == Decimal("195.00")

    weekly = client.get("/api/v1/orders/report", params={"period": "weekly"}, headers=admin_headers).json()
    assert weekly["total_orders"] == 3

    only_trendyol = client.get(
        "/api/v1/orders/report",
        params={"period": "daily", "source": "trendyol"},
        headers=admin_headers,
    ).json()
    assert only_trendyol["total_orders"] == 1


def test_custom_report_range(client: TestClient, admin_headers, monkeypatch) -> None:
    _paid_order(client, admin_headers, monkeypatch, _utc(2026, 3, 2, 10, 0))
    monkeypatch.setattr(orders_endpoint, "_now_utc", lambda: NOW)

    params = {"startDate": "2026-03-01", "endDate": "2026-03-02"}
    report = client.get("/api/v1/orders/report", params=params, headers=admin_headers).json()
    assert report["period"] == "custom"
    assert report["total_orders"] == 1

    reversed_range = client.get(
        "/api/v1/orders/report",
        params={"startDate": "2026-03-05", "endDate": "2026-03-01"},
        headers=admin_headers,
    )
    assert reversed_range.status_code == 400


def test_empty_report_has_zero_average(client: TestClient, admin_headers) -> None:
    report = client.get("/api/v1/orders/report", params={"period": "monthly"}, headers=admin_headers).json()
    assert report["total_orders"] == 0
    assert Decimal(report["average_order"]) == Decimal("0")


def test_report_is_admin_only(client: TestClient, kitchen_headers) -> None:
    response = client.get("/api/v1/orders/report", headers=kitchen_headers)
    assert response.status_code == 403


def test_report_pdf_download(client: TestClient, admin_headers, monkeypatch) -> None:
    _paid_order(client, admin_headers, monkeypatch, _utc(2026, 3, 10, 8, 0))
    monkeypatch.setattr(orders_endpoint, "_now_utc", lambda: NOW)

    response = client.get("/api/v1/orders/report.pdf", params={"period": "daily"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")
