"""Discount schemas for request/response validation."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class DiscountBase(BaseModel):
    """Base discount schema."""
    code: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    discount_percent: Optional[float] = Field(None, ge=0, le=100)
    discount_amount: Optional[float] = Field(None, ge=0)


class DiscountCreate(DiscountBase):
    """Schema for creating a discount."""
    pass


class DiscountUpdate(DiscountBase):
    """Schema for updating a discount."""
    pass


class DiscountResponse(DiscountBase):
    """Schema for discount response."""
    id: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True
