"""Order routes."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.exceptions import BadRequestError, NotFoundError, forward_backend_errors
from app.models.base import utcnow
from app.models.order import Order, OrderProduct
from app.models.product import Product, ProductStatus
from app.responses import Envelope, ok
from app.schemas.common import DeletedResponse, ListPage
from app.schemas.order import OrderCreate, OrderItemInput, OrderResponse, OrderUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])


def get_order(db: Session, order_id: str) -> Optional[Order]:
    return (
        db.query(Order)
        .options(joinedload(Order.customer), joinedload(Order.order_product))
        .filter(Order.id == order_id, Order.deleted_at.is_(None))
        .first()
    )


def line_total(item: OrderItemInput) -> float:
    """Explicit line total, or quantity times unit price."""
    if item.total_price is not None:
        return item.total_price
    return item.quantity * item.unit_price


def build_lines(order_id: str, items: List[OrderItemInput]) -> List[OrderProduct]:
    """Order lines for ``items``; every item must name a product."""
    if any(not item.product_id or not item.product_id.strip() for item in items):
        raise BadRequestError("One or more items are missing product_id")

    lines = []
    for item in items:
        lines.append(OrderProduct(
            order_id=order_id,
            product_id=item.product_id,
            discount_id=item.discount_id or None,
            quantity=item.quantity,
            unit_price=item.unit_price,
            total_price=line_total(item),
            advertising_cost=item.advertising_cost,
            packaging_cost=item.packaging_cost,
            shipping_cost=item.shipping_cost,
            personnel_cost=item.personnel_cost,
            rent_cost=item.rent_cost,
            freeship_cost=item.freeship_cost,
        ))
    return lines


def linked_product_ids(db: Session, order_id: str) -> List[str]:
    rows = (
        db.query(OrderProduct.product_id)
        .filter(OrderProduct.order_id == order_id, OrderProduct.deleted_at.is_(None))
        .all()
    )
    return [row.product_id for row in rows]


def set_product_status(db: Session, product_ids, new_status: str) -> None:
    product_ids = list(set(product_ids))
    if not product_ids:
        return
    db.query(Product).filter(Product.id.in_(product_ids)).update(
        {Product.status: new_status}, synchronize_session=False
    )


def order_fields(order_data, exclude_unset: bool) -> dict:
    data = order_data.model_dump(exclude={"items"}, exclude_unset=exclude_unset)
    if data.get("status") is not None:
        data["status"] = ProductStatus(data["status"]).value
    if data.get("order_date") is None:
        data.pop("order_date", None)
    return data


@router.get("", response_model=Envelope[ListPage[OrderResponse]])
async def list_orders(
    customer_id: Optional[str] = Query(None, description="Filter by customer"),
    db: Session = Depends(get_db),
):
    """List orders, most recent order date first."""
    query = (
        db.query(Order)
        .options(joinedload(Order.customer), joinedload(Order.order_product))
        .filter(Order.deleted_at.is_(None))
    )
    if customer_id:
        query = query.filter(Order.customer_id == customer_id)

    with forward_backend_errors(db):
        orders = query.order_by(Order.order_date.desc()).all()
    return ok({"data": orders, "count": len(orders)})


@router.post("", response_model=Envelope[OrderResponse], status_code=status.HTTP_201_CREATED)
async def create_order(
    order_data: OrderCreate,
    db: Session = Depends(get_db),
):
    """Create an order, optionally with its lines."""
    db_order = Order(**order_fields(order_data, exclude_unset=False))
    items = order_data.items or []
    if items:
        db_order.total_amount = sum(line_total(item) for item in items)

    with forward_backend_errors(db):
        db.add(db_order)
        db.flush()
        lines = build_lines(db_order.id, items)
        db.add_all(lines)
        set_product_status(
            db,
            [line.product_id for line in lines],
            db_order.status or ProductStatus.IN_TRANSIT.value,
        )
        db.commit()
    return ok(get_order(db, db_order.id))


@router.get("/{order_id}", response_model=Envelope[OrderResponse])
async def get_order_by_id(
    order_id: str,
    db: Session = Depends(get_db),
):
    """Get a specific order with its lines."""
    order = get_order(db, order_id)
    if not order:
        raise NotFoundError("Order not found")
    return ok(order)


@router.put("/{order_id}", response_model=Envelope[OrderResponse])
async def update_order(
    order_id: str,
    order_update: OrderUpdate,
    db: Session = Depends(get_db),
):
    """Update an order.

    When ``items`` is given the order's lines are replaced: newly linked
    products take the order status (``in_transit`` by default) and products
    no longer linked go back to ``in_stock``. A status change without items
    is applied to every linked product.
    """
    order = get_order(db, order_id)
    if not order:
        raise NotFoundError("Order not found")

    update_data = order_fields(order_update, exclude_unset=True)
    items = order_update.items
    if items:
        update_data["total_amount"] = sum(line_total(item) for item in items)
    elif "total_amount" in update_data:
        update_data["total_amount"] = update_data["total_amount"] or 0

    with forward_backend_errors(db):
        for field, value in update_data.items():
            setattr(order, field, value)

        if items is not None:
            lines = build_lines(order_id, items)
            existing_ids = linked_product_ids(db, order_id)
            db.query(OrderProduct).filter(OrderProduct.order_id == order_id).delete(
                synchronize_session=False
            )
            db.add_all(lines)

            new_ids = {line.product_id for line in lines}
            target_status = order.status or ProductStatus.IN_TRANSIT.value
            set_product_status(db, [pid for pid in new_ids if pid not in existing_ids], target_status)
            set_product_status(db, [pid for pid in existing_ids if pid not in new_ids], ProductStatus.IN_STOCK.value)
            if update_data.get("status"):
                set_product_status(db, new_ids, update_data["status"])
        elif update_data.get("status"):
            set_product_status(db, linked_product_ids(db, order_id), update_data["status"])

        db.commit()

    db.expire_all()
    return ok(get_order(db, order_id))


@router.delete("/{order_id}", response_model=Envelope[DeletedResponse[OrderResponse]])
async def delete_order(
    order_id: str,
    db: Session = Depends(get_db),
):
    """Soft delete an order, releasing its products back to stock."""
    order = get_order(db, order_id)
    if not order:
        raise NotFoundError("Order not found")

    with forward_backend_errors(db):
        product_ids = linked_product_ids(db, order_id)
        set_product_status(db, product_ids, ProductStatus.IN_STOCK.value)
        db.query(OrderProduct).filter(OrderProduct.order_id == order_id).delete(
            synchronize_session=False
        )
        order.deleted_at = utcnow()
        db.commit()
    logger.info("Order %s deleted, %d products back in stock", order_id, len(product_ids))

    db.expire_all()
    deleted = (
        db.query(Order)
        .options(joinedload(Order.customer))
        .filter(Order.id == order_id)
        .first()
    )
    return ok({"data": deleted, "message": "Order deleted successfully"})
