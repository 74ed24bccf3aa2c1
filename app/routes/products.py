"""Product routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.exceptions import BadRequestError, NotFoundError, forward_backend_errors
from app.models.base import utcnow
from app.models.product import Product
from app.responses import Envelope, ok
from app.schemas.common import DeletedResponse, ListPage
from app.schemas.product import (
    ProductCreate,
    ProductIdsRequest,
    ProductResponse,
    ProductUpdate,
    ProductWithCategoryTitle,
)

router = APIRouter(prefix="/products", tags=["Products"])


def active_products(db: Session):
    """Products that have not been soft deleted, with relations loaded."""
    return (
        db.query(Product)
        .options(joinedload(Product.category), joinedload(Product.discount))
        .filter(Product.deleted_at.is_(None))
    )


def get_product(db: Session, product_id: str) -> Optional[Product]:
    return active_products(db).filter(Product.id == product_id).first()


@router.get("", response_model=Envelope[ListPage[ProductResponse]])
async def list_products(
    category_id: Optional[str] = Query(None, description="Filter by category"),
    db: Session = Depends(get_db),
):
    """List products, newest first."""
    query = active_products(db)
    if category_id:
        query = query.filter(Product.category_id == category_id)

    with forward_backend_errors(db):
        products = query.order_by(Product.created_at.desc()).all()
    return ok({"data": products, "count": len(products)})


@router.post("", response_model=Envelope[ProductResponse], status_code=status.HTTP_201_CREATED)
async def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
):
    """Create a new product."""
    data = product_data.model_dump()
    data["status"] = product_data.status.value
    db_product = Product(**data)
    with forward_backend_errors(db):
        db.add(db_product)
        db.commit()
    return ok(get_product(db, db_product.id))


@router.post("/by-ids", response_model=Envelope[List[ProductWithCategoryTitle]])
async def get_products_by_ids(
    request: ProductIdsRequest,
    db: Session = Depends(get_db),
):
    """Get products by id, in the order the ids were given.

    Ids without a matching product are dropped from the result.
    """
    if not request.ids:
        raise BadRequestError("Invalid product IDs")

    with forward_backend_errors(db):
        products = active_products(db).filter(Product.id.in_(request.ids)).all()

    by_id = {product.id: product for product in products}
    ordered = [by_id[product_id] for product_id in request.ids if product_id in by_id]
    return ok(ordered)


@router.get("/{product_id}", response_model=Envelope[ProductResponse])
async def get_product_by_id(
    product_id: str,
    db: Session = Depends(get_db),
):
    """Get a specific product."""
    product = get_product(db, product_id)
    if not product:
        raise NotFoundError("Product not found")
    return ok(product)


@router.put("/{product_id}", response_model=Envelope[ProductResponse])
async def update_product(
    product_id: str,
    product_update: ProductUpdate,
    db: Session = Depends(get_db),
):
    """Update a product."""
    product = get_product(db, product_id)
    if not product:
        raise NotFoundError("Product not found")

    update_data = product_update.model_dump(exclude_unset=True)
    if update_data.get("status") is not None:
        update_data["status"] = product_update.status.value
    for field, value in update_data.items():
        setattr(product, field, value)

    with forward_backend_errors(db):
        db.commit()
    return ok(get_product(db, product_id))


@router.delete("/{product_id}", response_model=Envelope[DeletedResponse[ProductResponse]])
async def delete_product(
    product_id: str,
    db: Session = Depends(get_db),
):
    """Soft delete a product."""
    product = get_product(db, product_id)
    if not product:
        raise NotFoundError("Product not found")

    product.deleted_at = utcnow()
    with forward_backend_errors(db):
        db.commit()
    db.refresh(product)
    return ok({"data": product, "message": "Product deleted successfully"})
