"""Product model."""
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Float
from sqlalchemy.orm import relationship
import enum

from app.database import Base
from app.models.base import new_id, utcnow


class ProductStatus(str, enum.Enum):
    """Product stock status, driven by the orders it belongs to."""
    IN_STOCK = "in_stock"
    IN_TRANSIT = "in_transit"
    SOLD = "sold"


class Product(Base):
    """Product model - catalog item."""
    __tablename__ = "product"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    image = Column(String(1024), nullable=True)
    purchase_price = Column(Float, nullable=True)
    suggested = Column(Float, nullable=True)
    size = Column(String(50), nullable=True)
    width = Column(Float, nullable=True)
    height = Column(Float, nullable=True)
    color = Column(String(50), nullable=True)
    status = Column(String(20), default=ProductStatus.IN_STOCK.value, nullable=False)
    category_id = Column(String(36), ForeignKey("category.id"), nullable=True, index=True)
    discount_id = Column(String(36), ForeignKey("discount.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    # Relationships
    category = relationship("Category", back_populates="products")
    discount = relationship("Discount")
