"""Sales reports computed from orders."""
import calendar
from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from sqlalchemy.orm import Session, joinedload

from app.models.order import Order, OrderProduct

RANGES = ("week", "month", "year")
RANGE_DAYS = {"week": 7, "month": 30, "year": 365}
COST_FIELDS = ("advertising_cost", "packaging_cost", "shipping_cost", "personnel_cost", "rent_cost", "freeship_cost")


def add_months(value: datetime, months: int) -> datetime:
    """Shift by whole months, clamping the day to the target month's length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def start_of_week(value: datetime) -> datetime:
    """Midnight of the Monday starting the week of ``value``."""
    monday = value - timedelta(days=value.weekday())
    return monday.replace(hour=0, minute=0, second=0, microsecond=0)


def bucket_label(value: datetime, range_: str) -> str:
    if range_ == "week":
        return start_of_week(value).strftime("%Y-%m-%d")
    if range_ == "month":
        return value.strftime("%Y-%m")
    return value.strftime("%Y")


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def series_start(now: datetime, range_: str, span: int) -> datetime:
    """First instant covered by a ``span``-unit series ending at ``now``."""
    if range_ == "week":
        return start_of_week(now - timedelta(days=span * 7))
    if range_ == "month":
        return add_months(now, -span).replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return now.replace(year=now.year - span, month=1, day=1, hour=0, minute=0, second=0, microsecond=0)


def revenue_summary(db: Session, range_: str = "month", span: int = 6, now: Optional[datetime] = None) -> dict:
    """Sum order totals per week, month or year from ``span`` units back to now."""
    if range_ not in RANGES:
        raise ValueError(f"Unknown range: {range_}")
    now = _naive_utc(now or datetime.now(timezone.utc))
    start = series_start(now, range_, span)

    buckets: Dict[str, float] = OrderedDict()
    cursor = start
    while cursor <= now:
        buckets[bucket_label(cursor, range_)] = 0.0
        if range_ == "week":
            cursor += timedelta(days=7)
        elif range_ == "month":
            cursor = add_months(cursor, 1)
        else:
            cursor = cursor.replace(year=cursor.year + 1)

    orders = (
        db.query(Order.order_date, Order.total_amount)
        .filter(Order.order_date >= start, Order.deleted_at.is_(None))
        .all()
    )
    for order_date, total_amount in orders:
        label = bucket_label(_naive_utc(order_date), range_)
        if label in buckets:
            buckets[label] += total_amount or 0

    series = [{"label": label, "value": value} for label, value in buckets.items()]
    return {"series": series, "total": sum(point["value"] for point in series)}


def line_discount(line: OrderProduct) -> float:
    """Discount granted on one order line."""
    discount = line.discount
    if discount is None:
        return 0.0
    if discount.discount_percent:
        return (line.unit_price or 0) * (line.quantity or 0) * discount.discount_percent / 100
    return discount.discount_amount or 0.0


def product_report(
    db: Session,
    range_: str = "month",
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> dict:
    """Revenue, cost and profit per product for orders within the window."""
    if start is None or end is None:
        end = datetime.now(timezone.utc)
        start = end - timedelta(days=RANGE_DAYS.get(range_, 30))

    lines = (
        db.query(OrderProduct)
        .join(Order, Order.id == OrderProduct.order_id)
        .options(joinedload(OrderProduct.product), joinedload(OrderProduct.discount))
        .filter(
            Order.deleted_at.is_(None),
            OrderProduct.deleted_at.is_(None),
            Order.order_date >= _naive_utc(start),
            Order.order_date <= _naive_utc(end),
        )
        .all()
    )

    products: Dict[str, dict] = OrderedDict()
    for line in lines:
        quantity = line.quantity or 0
        revenue = line.total_price or 0
        purchase_price = (line.product.purchase_price if line.product else None) or 0
        cost = purchase_price * quantity
        discount_amount = line_discount(line)
        costs = {field: getattr(line, field) or 0 for field in COST_FIELDS}
        gross_profit = revenue - cost
        net_profit = gross_profit - sum(costs.values()) - discount_amount

        item = products.get(line.product_id)
        if item is None:
            item = products[line.product_id] = {
                "product_id": line.product_id,
                "product_title": line.product.title if line.product else "Unknown",
                "quantity": 0,
                "revenue": 0.0,
                "cost": 0.0,
                "discount_amount": 0.0,
                "gross_profit": 0.0,
                "net_profit": 0.0,
                **{field: 0.0 for field in COST_FIELDS},
            }
        item["quantity"] += quantity
        item["revenue"] += revenue
        item["cost"] += cost
        item["discount_amount"] += discount_amount
        item["gross_profit"] += gross_profit
        item["net_profit"] += net_profit
        for field, value in costs.items():
            item[field] += value

    rows = list(products.values())
    return {
        "total_revenue": sum(p["revenue"] for p in rows),
        "total_cost": sum(p["cost"] for p in rows),
        "total_gross_profit": sum(p["gross_profit"] for p in rows),
        "total_net_profit": sum(p["net_profit"] for p in rows),
        "total_advertising": sum(p["advertising_cost"] for p in rows),
        "total_packaging": sum(p["packaging_cost"] for p in rows),
        "total_shipping": sum(p["shipping_cost"] for p in rows),
        "total_personnel": sum(p["personnel_cost"] for p in rows),
        "total_rent": sum(p["rent_cost"] for p in rows),
        "total_freeship": sum(p["freeship_cost"] for p in rows),
        "total_discount": sum(p["discount_amount"] for p in rows),
        "products": rows,
    }
