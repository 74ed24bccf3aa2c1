"""Discount routes."""
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import NotFoundError, forward_backend_errors
from app.models.base import utcnow
from app.models.discount import Discount
from app.responses import Envelope, ok
from app.schemas.common import DeletedResponse, ListPage
from app.schemas.discount import DiscountCreate, DiscountResponse, DiscountUpdate

router = APIRouter(prefix="/discounts", tags=["Discounts"])


def get_discount(db: Session, discount_id: str) -> Optional[Discount]:
    return (
        db.query(Discount)
        .filter(Discount.id == discount_id, Discount.deleted_at.is_(None))
        .first()
    )


@router.get("", response_model=Envelope[ListPage[DiscountResponse]])
async def list_discounts(db: Session = Depends(get_db)):
    """List all discounts, newest first."""
    with forward_backend_errors(db):
        discounts = (
            db.query(Discount)
            .filter(Discount.deleted_at.is_(None))
            .order_by(Discount.created_at.desc())
            .all()
        )
    return ok({"data": discounts, "count": len(discounts)})


@router.post("", response_model=Envelope[DiscountResponse], status_code=status.HTTP_201_CREATED)
async def create_discount(
    discount_data: DiscountCreate,
    db: Session = Depends(get_db),
):
    """Create a new discount."""
    db_discount = Discount(**discount_data.model_dump())
    with forward_backend_errors(db):
        db.add(db_discount)
        db.commit()
    db.refresh(db_discount)
    return ok(db_discount)


@router.get("/{discount_id}", response_model=Envelope[DiscountResponse])
async def get_discount_by_id(
    discount_id: str,
    db: Session = Depends(get_db),
):
    """Get a specific discount."""
    discount = get_discount(db, discount_id)
    if not discount:
        raise NotFoundError("Discount not found")
    return ok(discount)


@router.put("/{discount_id}", response_model=Envelope[DiscountResponse])
async def update_discount(
    discount_id: str,
    discount_update: DiscountUpdate,
    db: Session = Depends(get_db),
):
    """Update a discount."""
    discount = get_discount(db, discount_id)
    if not discount:
        raise NotFoundError("Discount not found")

    for field, value in discount_update.model_dump(exclude_unset=True).items():
        setattr(discount, field, value)

    with forward_backend_errors(db):
        db.commit()
    db.refresh(discount)
    return ok(discount)


@router.delete("/{discount_id}", response_model=Envelope[DeletedResponse[DiscountResponse]])
async def delete_discount(
    discount_id: str,
    db: Session = Depends(get_db),
):
    """Soft delete a discount."""
    discount = get_discount(db, discount_id)
    if not discount:
        raise NotFoundError("Discount not found")

    discount.deleted_at = utcnow()
    with forward_backend_errors(db):
        db.commit()
    db.refresh(discount)
    return ok({"data": discount, "message": "Discount deleted successfully"})
