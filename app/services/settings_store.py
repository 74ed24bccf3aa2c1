"""Generic settings record store.

Records are keyed by a unique ``key`` and partitioned by ``tab``. The store
does not look inside ``data``: an upsert replaces ``tab`` and ``data`` of the
matching record wholesale.
"""
import logging
from typing import Any, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.models.settings import SettingRecord

logger = logging.getLogger(__name__)


class SettingsValidationError(ValueError):
    """Raised when a record cannot be stored as given."""


class SettingsStore:
    """Key/tab/data repository over the ``settings`` table."""

    def __init__(self, db: Session):
        self.db = db

    def list(self, tab: Optional[str] = None) -> List[SettingRecord]:
        """Return records, newest first, optionally limited to one tab."""
        query = self.db.query(SettingRecord)
        if tab:
            query = query.filter(SettingRecord.tab == tab)
        return query.order_by(SettingRecord.created_at.desc(), SettingRecord.id.desc()).all()

    def get(self, key: str) -> Optional[SettingRecord]:
        return self.db.query(SettingRecord).filter(SettingRecord.key == key).first()

    def upsert(self, key: Optional[str], tab: Optional[str], data: Any) -> SettingRecord:
        """Insert a record or fully replace the one with the same key."""
        record = self._stage(key, tab, data)
        self.db.commit()
        self.db.refresh(record)
        return record

    def upsert_many(self, rows: Iterable[Tuple[str, str, Any]]) -> List[SettingRecord]:
        """Upsert several ``(key, tab, data)`` rows in one transaction."""
        records = [self._stage(key, tab, data) for key, tab, data in rows]
        self.db.commit()
        for record in records:
            self.db.refresh(record)
        return records

    def delete(self, key: str, tab: Optional[str] = None) -> bool:
        """Delete by key. Returns False when there was nothing to delete."""
        query = self.db.query(SettingRecord).filter(SettingRecord.key == key)
        if tab:
            query = query.filter(SettingRecord.tab == tab)
        deleted = query.delete()
        self.db.commit()
        if deleted:
            logger.info("Deleted settings record %s", key)
        return bool(deleted)

    def _stage(self, key: Optional[str], tab: Optional[str], data: Any) -> SettingRecord:
        if not key or not key.strip():
            raise SettingsValidationError("Missing key")
        if not tab or not tab.strip():
            raise SettingsValidationError("Missing tab")

        record = self.get(key)
        if record:
            record.tab = tab
            record.data = data
        else:
            record = SettingRecord(key=key, tab=tab, data=data)
            self.db.add(record)
        # Make the staged row visible to later lookups in the same batch
        self.db.flush()
        return record
