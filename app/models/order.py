"""Order model."""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Float
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.base import new_id, utcnow


class Order(Base):
    """Order model - a customer purchase made of order lines."""
    __tablename__ = "order"

    id = Column(String(36), primary_key=True, default=new_id)
    address = Column(Text, nullable=True)
    shipping_code = Column(String(100), nullable=True)
    total_amount = Column(Float, nullable=True)
    status = Column(String(20), nullable=True)
    customer_id = Column(String(36), ForeignKey("customer.id"), nullable=True, index=True)
    order_date = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    # Relationships
    customer = relationship("Customer", back_populates="orders")
    order_product = relationship(
        "OrderProduct",
        primaryjoin="and_(Order.id == OrderProduct.order_id, OrderProduct.deleted_at.is_(None))",
        viewonly=True,
    )


class OrderProduct(Base):
    """Order line - one product in an order, with price and cost breakdown."""
    __tablename__ = "order_product"

    id = Column(String(36), primary_key=True, default=new_id)
    order_id = Column(String(36), ForeignKey("order.id"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("product.id"), nullable=False)
    discount_id = Column(String(36), ForeignKey("discount.id"), nullable=True)
    quantity = Column(Integer, default=1, nullable=False)
    unit_price = Column(Float, default=0, nullable=False)
    total_price = Column(Float, default=0, nullable=False)
    advertising_cost = Column(Float, nullable=True)
    packaging_cost = Column(Float, nullable=True)
    shipping_cost = Column(Float, nullable=True)
    personnel_cost = Column(Float, nullable=True)
    rent_cost = Column(Float, nullable=True)
    freeship_cost = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    order = relationship("Order")
    product = relationship("Product")
    discount = relationship("Discount")
