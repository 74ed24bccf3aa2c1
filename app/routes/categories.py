"""Category routes."""
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import NotFoundError, forward_backend_errors
from app.models.base import utcnow
from app.models.category import Category
from app.responses import Envelope, ok
from app.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from app.schemas.common import DeletedResponse, ListPage

router = APIRouter(prefix="/categories", tags=["Categories"])


def get_category(db: Session, category_id: str) -> Optional[Category]:
    """Get a category unless it has been soft deleted."""
    return (
        db.query(Category)
        .filter(Category.id == category_id, Category.deleted_at.is_(None))
        .first()
    )


@router.get("", response_model=Envelope[ListPage[CategoryResponse]])
async def list_categories(db: Session = Depends(get_db)):
    """List all categories, newest first."""
    with forward_backend_errors(db):
        categories = (
            db.query(Category)
            .filter(Category.deleted_at.is_(None))
            .order_by(Category.created_at.desc())
            .all()
        )
    return ok({"data": categories, "count": len(categories)})


@router.post("", response_model=Envelope[CategoryResponse], status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    db: Session = Depends(get_db),
):
    """Create a new category."""
    db_category = Category(**category_data.model_dump())
    with forward_backend_errors(db):
        db.add(db_category)
        db.commit()
    db.refresh(db_category)
    return ok(db_category)


@router.get("/{category_id}", response_model=Envelope[CategoryResponse])
async def get_category_by_id(
    category_id: str,
    db: Session = Depends(get_db),
):
    """Get a specific category."""
    category = get_category(db, category_id)
    if not category:
        raise NotFoundError("Category not found")
    return ok(category)


@router.put("/{category_id}", response_model=Envelope[CategoryResponse])
async def update_category(
    category_id: str,
    category_update: CategoryUpdate,
    db: Session = Depends(get_db),
):
    """Update a category."""
    category = get_category(db, category_id)
    if not category:
        raise NotFoundError("Category not found")

    update_data = category_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(category, field, value)

    with forward_backend_errors(db):
        db.commit()
    db.refresh(category)
    return ok(category)


@router.delete("/{category_id}", response_model=Envelope[DeletedResponse[CategoryResponse]])
async def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
):
    """Soft delete a category."""
    category = get_category(db, category_id)
    if not category:
        raise NotFoundError("Category not found")

    category.deleted_at = utcnow()
    with forward_backend_errors(db):
        db.commit()
    db.refresh(category)
    return ok({"data": category, "message": "Category deleted successfully"})
