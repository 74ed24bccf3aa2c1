"""Customer schemas for request/response validation."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class CustomerBase(BaseModel):
    """Base customer schema."""
    full_name: Optional[str] = None
    phone_number: Optional[str] = None


class CustomerCreate(CustomerBase):
    """Schema for creating a customer."""
    pass


class CustomerUpdate(CustomerBase):
    """Schema for updating a customer."""
    pass


class CustomerResponse(CustomerBase):
    """Schema for customer response."""
    id: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True
