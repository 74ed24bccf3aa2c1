"""Revenue and product reports."""
from datetime import datetime

import pytest

from app.models.discount import Discount
from app.models.order import Order, OrderProduct
from app.models.product import Product
from app.services.reports import add_months, product_report, revenue_summary

NOW = datetime(2026, 3, 18, 12, 0)


@pytest.fixture
def orders(db_session):
    db_session.add_all([
        Order(id="jan", total_amount=100, order_date=datetime(2026, 1, 5)),
        Order(id="mar", total_amount=50, order_date=datetime(2026, 3, 2)),
        Order(id="deleted", total_amount=999, order_date=datetime(2026, 2, 10), deleted_at=datetime(2026, 2, 11)),
        Order(id="old", total_amount=500, order_date=datetime(2025, 12, 20)),
    ])
    db_session.commit()


def test_monthly_summary(db_session, orders):
    summary = revenue_summary(db_session, "month", span=2, now=NOW)

    assert [point["label"] for point in summary["series"]] == ["2026-01", "2026-02", "2026-03"]
    assert [point["value"] for point in summary["series"]] == [100, 0, 50]
    assert summary["total"] == 150


def test_weekly_summary_buckets_start_on_monday(db_session, orders):
    summary = revenue_summary(db_session, "week", span=1, now=NOW)

    assert [point["label"] for point in summary["series"]] == ["2026-03-09", "2026-03-16"]
    assert summary["total"] == 0


def test_unknown_range_is_rejected(db_session):
    with pytest.raises(ValueError):
        revenue_summary(db_session, "decade", now=NOW)


def test_add_months_clamps_day():
    assert add_months(datetime(2026, 1, 31), 1) == datetime(2026, 2, 28)
    assert add_months(datetime(2026, 1, 15), -2) == datetime(2025, 11, 15)


def test_product_report_profit_breakdown(db_session):
    db_session.add_all([
        Product(id="p1", title="Runner", purchase_price=10),
        Discount(id="d1", code="TEN", discount_percent=10),
        Order(id="o1", total_amount=100, order_date=datetime(2026, 3, 10)),
    ])
    db_session.flush()
    db_session.add(OrderProduct(
        order_id="o1",
        product_id="p1",
        discount_id="d1",
        quantity=2,
        unit_price=50,
        total_price=100,
        advertising_cost=5,
    ))
    db_session.commit()

    report = product_report(db_session, start=datetime(2026, 3, 1), end=datetime(2026, 3, 31))

    item = report["products"][0]
    assert item["product_title"] == "Runner"
    assert item["quantity"] == 2
    assert item["revenue"] == 100
    assert item["cost"] == 20
    assert item["discount_amount"] == 10
    assert item["gross_profit"] == 80
    assert item["net_profit"] == 65
    assert report["total_advertising"] == 5
    assert report["total_net_profit"] == 65


def test_summary_route(client):
    response = client.get("/api/reports/summary", params={"range": "year", "span": 1})

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["series"]) == 2
    assert data["total"] == 0


def test_summary_route_rejects_unknown_range(client):
    response = client.get("/api/reports/summary", params={"range": "decade"})

    assert response.status_code == 400
    assert response.json()["success"] is False
