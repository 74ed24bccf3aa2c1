"""Customer routes."""
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import NotFoundError, forward_backend_errors
from app.models.base import utcnow
from app.models.customer import Customer
from app.responses import Envelope, ok
from app.schemas.common import DeletedResponse, ListPage
from app.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate

router = APIRouter(prefix="/customers", tags=["Customers"])


def get_customer(db: Session, customer_id: str) -> Optional[Customer]:
    return (
        db.query(Customer)
        .filter(Customer.id == customer_id, Customer.deleted_at.is_(None))
        .first()
    )


@router.get("", response_model=Envelope[ListPage[CustomerResponse]])
async def list_customers(db: Session = Depends(get_db)):
    """List all customers, newest first."""
    with forward_backend_errors(db):
        customers = (
            db.query(Customer)
            .filter(Customer.deleted_at.is_(None))
            .order_by(Customer.created_at.desc())
            .all()
        )
    return ok({"data": customers, "count": len(customers)})


@router.post("", response_model=Envelope[CustomerResponse], status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer_data: CustomerCreate,
    db: Session = Depends(get_db),
):
    """Create a new customer."""
    db_customer = Customer(**customer_data.model_dump())
    with forward_backend_errors(db):
        db.add(db_customer)
        db.commit()
    db.refresh(db_customer)
    return ok(db_customer)


@router.get("/{customer_id}", response_model=Envelope[CustomerResponse])
async def get_customer_by_id(
    customer_id: str,
    db: Session = Depends(get_db),
):
    """Get a specific customer."""
    customer = get_customer(db, customer_id)
    if not customer:
        raise NotFoundError("Customer not found")
    return ok(customer)


@router.put("/{customer_id}", response_model=Envelope[CustomerResponse])
async def update_customer(
    customer_id: str,
    customer_update: CustomerUpdate,
    db: Session = Depends(get_db),
):
    """Update a customer."""
    customer = get_customer(db, customer_id)
    if not customer:
        raise NotFoundError("Customer not found")

    for field, value in customer_update.model_dump(exclude_unset=True).items():
        setattr(customer, field, value)

    with forward_backend_errors(db):
        db.commit()
    db.refresh(customer)
    return ok(customer)


@router.delete("/{customer_id}", response_model=Envelope[DeletedResponse[CustomerResponse]])
async def delete_customer(
    customer_id: str,
    db: Session = Depends(get_db),
):
    """Soft delete a customer."""
    customer = get_customer(db, customer_id)
    if not customer:
        raise NotFoundError("Customer not found")

    customer.deleted_at = utcnow()
    with forward_backend_errors(db):
        db.commit()
    db.refresh(customer)
    return ok({"data": customer, "message": "Customer deleted successfully"})
