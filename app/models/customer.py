"""Customer model."""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.base import new_id, utcnow


class Customer(Base):
    """Customer model - buyer referenced by orders."""
    __tablename__ = "customer"

    id = Column(String(36), primary_key=True, default=new_id)
    full_name = Column(String(255), nullable=True)
    phone_number = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    # Relationships
    orders = relationship("Order", back_populates="customer")
