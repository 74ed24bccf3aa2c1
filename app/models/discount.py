"""Discount model."""
from sqlalchemy import Column, String, Text, DateTime, Float

from app.database import Base
from app.models.base import new_id, utcnow


class Discount(Base):
    """Discount - either a percentage or a fixed amount off."""
    __tablename__ = "discount"

    id = Column(String(36), primary_key=True, default=new_id)
    code = Column(String(100), nullable=True)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    discount_percent = Column(Float, nullable=True)
    discount_amount = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)
