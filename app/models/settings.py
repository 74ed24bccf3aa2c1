"""Settings record model - generic key/tab/JSON store."""
from sqlalchemy import Column, Integer, String, DateTime, JSON

from app.database import Base
from app.models.base import utcnow


class SettingRecord(Base):
    """One admin settings document.

    ``key`` is unique across the table regardless of ``tab``; ``data`` is
    opaque to the store and replaced wholesale on every upsert.
    """
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), unique=True, index=True, nullable=False)
    tab = Column(String(50), index=True, nullable=False)
    data = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


# Default settings keys
SETTINGS_KEYS = {
    "homepage": {
        "key": "homepage_v1",
        "tab": "homepage",
    },
}
