"""Category model."""
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.base import new_id, utcnow


class Category(Base):
    """Product category."""
    __tablename__ = "category"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    # Relationships
    products = relationship("Product", back_populates="category")
