"""Product schemas for request/response validation."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

from app.models.product import ProductStatus
from app.schemas.category import CategoryResponse, CategoryTitle
from app.schemas.discount import DiscountResponse


class ProductBase(BaseModel):
    """Base product schema."""
    title: str
    description: Optional[str] = None
    image: Optional[str] = None
    purchase_price: Optional[float] = None
    suggested: Optional[float] = None
    size: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    color: Optional[str] = None
    category_id: Optional[str] = None
    discount_id: Optional[str] = None


class ProductCreate(ProductBase):
    """Schema for creating a product."""
    status: ProductStatus = ProductStatus.IN_STOCK


class ProductUpdate(BaseModel):
    """Schema for updating a product."""
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    purchase_price: Optional[float] = None
    suggested: Optional[float] = None
    size: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    color: Optional[str] = None
    status: Optional[ProductStatus] = None
    category_id: Optional[str] = None
    discount_id: Optional[str] = None


class ProductResponse(ProductBase):
    """Schema for product response, with category and discount embedded."""
    id: str
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    category: Optional[CategoryResponse] = None
    discount: Optional[DiscountResponse] = None

    class Config:
        from_attributes = True


class ProductWithCategoryTitle(ProductBase):
    """Product as returned by the by-ids lookup."""
    id: str
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    category: Optional[CategoryTitle] = None

    class Config:
        from_attributes = True


class ProductIdsRequest(BaseModel):
    """Body of the by-ids lookup."""
    ids: Optional[List[str]] = None
