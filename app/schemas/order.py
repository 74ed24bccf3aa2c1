"""Order schemas."""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from app.models.product import ProductStatus
from app.schemas.customer import CustomerResponse


class OrderItemInput(BaseModel):
    """Order line as sent by the admin order form."""
    product_id: Optional[str] = None
    discount_id: Optional[str] = None
    quantity: int = Field(1, ge=0)
    unit_price: float = 0
    total_price: Optional[float] = None
    advertising_cost: Optional[float] = None
    packaging_cost: Optional[float] = None
    shipping_cost: Optional[float] = None
    personnel_cost: Optional[float] = None
    rent_cost: Optional[float] = None
    freeship_cost: Optional[float] = None


class OrderProductResponse(BaseModel):
    """Response schema for order lines."""
    id: str
    order_id: str
    product_id: str
    discount_id: Optional[str] = None
    quantity: int
    unit_price: float
    total_price: float
    advertising_cost: Optional[float] = None
    packaging_cost: Optional[float] = None
    shipping_cost: Optional[float] = None
    personnel_cost: Optional[float] = None
    rent_cost: Optional[float] = None
    freeship_cost: Optional[float] = None

    class Config:
        from_attributes = True


class OrderBase(BaseModel):
    """Base schema for orders."""
    address: Optional[str] = None
    shipping_code: Optional[str] = None
    total_amount: Optional[float] = None
    status: Optional[ProductStatus] = None
    customer_id: Optional[str] = None
    order_date: Optional[datetime] = None


class OrderCreate(OrderBase):
    """Schema for creating an order."""
    items: Optional[List[OrderItemInput]] = None


class OrderUpdate(OrderBase):
    """Schema for updating an order."""
    items: Optional[List[OrderItemInput]] = None


class OrderResponse(BaseModel):
    """Response schema for orders."""
    id: str
    address: Optional[str] = None
    shipping_code: Optional[str] = None
    total_amount: Optional[float] = None
    status: Optional[str] = None
    customer_id: Optional[str] = None
    order_date: datetime
    created_at: datetime
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    customer: Optional[CustomerResponse] = None
    order_product: List[OrderProductResponse] = []

    class Config:
        from_attributes = True
