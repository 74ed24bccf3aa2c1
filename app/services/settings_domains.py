"""Per-domain settings services.

Each service pins the settings store to one ``tab`` and knows the shape of
that domain's ``data``. Shape checking is left to the request schemas.
"""
import json
import uuid
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from app.models.settings import SettingRecord, SETTINGS_KEYS
from app.services.settings_store import SettingsStore, SettingsValidationError

HOMEPAGE_TAB = SETTINGS_KEYS["homepage"]["tab"]
HOMEPAGE_KEY = SETTINGS_KEYS["homepage"]["key"]
CALCULATION_TAB = "calculation"
PRODUCT_COST_TAB = "product_cost"
PRODUCT_COST_KEY_PREFIX = f"{PRODUCT_COST_TAB}_"

COST_CATEGORIES = ("advertising", "packaging", "shipping", "personnel", "rent", "freeship")
PRODUCT_COST_FIELDS = ("advertising", "packaging", "shipping", "personnel", "rent")
DEFAULT_PROFIT_MARGIN = 30


class DomainSettingsService:
    """Store access bound to a single tab."""

    tab: str = ""

    def __init__(self, db: Session):
        self.store = SettingsStore(db)

    def records(self) -> List[SettingRecord]:
        return self.store.list(self.tab)

    def check_owned(self, key: str) -> None:
        """Refuse to overwrite a record that belongs to another tab."""
        record = self.store.get(key)
        if record is not None and record.tab != self.tab:
            raise SettingsValidationError(f"Key {key} belongs to tab {record.tab}")

    def delete(self, key: str) -> bool:
        return self.store.delete(key, self.tab)


class HomepageSettingsService(DomainSettingsService):
    """Homepage layout: a single document holding the ordered sections."""

    tab = HOMEPAGE_TAB
    key = HOMEPAGE_KEY

    def get(self) -> Dict[str, Any]:
        record = self.store.get(self.key)
        if record is None or record.tab != self.tab or not isinstance(record.data, dict):
            return {"sections": []}
        return record.data

    def save(self, sections: List[Dict[str, Any]]) -> SettingRecord:
        self.check_owned(self.key)
        return self.store.upsert(self.key, self.tab, {"sections": sections})


def _parse_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def normalize_cost_items(value: Any) -> List[Dict[str, Any]]:
    """Coerce a stored cost value into a list of ``{label, amount}`` items."""
    if isinstance(value, list):
        items = []
        for entry in value:
            if isinstance(entry, (int, float)) and not isinstance(entry, bool):
                items.append({"label": "Default", "amount": entry})
                continue
            entry = entry if isinstance(entry, Mapping) else {}
            items.append({
                "label": str(entry.get("label") or ""),
                "amount": _parse_number(entry.get("amount")),
            })
        return items
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return [{"label": "Default", "amount": value}]
    return []


def normalize_payload(payload: Optional[Mapping[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    """Turn an arbitrary stored payload into the per-category form shape."""
    if not payload:
        return {}
    return {category: normalize_cost_items(payload.get(category)) for category in COST_CATEGORIES}


def build_payload(values: Mapping[str, Any]) -> Dict[str, List[Dict[str, Any]]]:
    """Build the persisted shape, with every category present."""
    payload = {}
    for category in COST_CATEGORIES:
        items = values.get(category) or []
        payload[category] = [
            {
                "label": str(item.get("label") or ""),
                "amount": item.get("amount") if _parse_number(item.get("amount")) is not None else None,
            }
            for item in items
        ]
    return payload


class CalculationSettingsService(DomainSettingsService):
    """Operating cost items, stored as one record per cost category."""

    tab = CALCULATION_TAB

    @staticmethod
    def key_for(category: str) -> str:
        return f"calculation_{category}"

    def get(self) -> Dict[str, List[Dict[str, Any]]]:
        stored = {}
        for record in self.records():
            category = record.key[len("calculation_"):]
            if category in COST_CATEGORIES and category not in stored:
                stored[category] = record.data
        return normalize_payload(stored) or {category: [] for category in COST_CATEGORIES}

    def save_category(self, category: str, items: Any) -> SettingRecord:
        if category not in COST_CATEGORIES:
            raise SettingsValidationError(f"Unknown cost category: {category}")
        self.check_owned(self.key_for(category))
        return self.store.upsert(self.key_for(category), self.tab, items)

    def save(self, form: Mapping[str, Any]) -> List[SettingRecord]:
        """Upsert every cost category present in ``form``."""
        rows = [
            (self.key_for(category), self.tab, form[category])
            for category in COST_CATEGORIES
            if category in form
        ]
        if not rows:
            raise SettingsValidationError("Invalid calculation payload")
        for key, _, _ in rows:
            self.check_owned(key)
        return self.store.upsert_many(rows)


def parse_maybe_json(value: Any) -> Any:
    """Decode JSON-encoded strings, leaving anything else untouched."""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


class ProductCostSettingsService(DomainSettingsService):
    """Named product cost presets, one record each."""

    tab = PRODUCT_COST_TAB

    def list(self) -> List[SettingRecord]:
        return self.records()

    def save(self, preset: Mapping[str, Any], key: Optional[str] = None) -> SettingRecord:
        """Create a preset, or replace the one stored under ``key``."""
        if key:
            if not key.startswith(PRODUCT_COST_KEY_PREFIX):
                raise SettingsValidationError(f"Invalid product cost key: {key}")
            self.check_owned(key)
        else:
            key = f"{PRODUCT_COST_KEY_PREFIX}{uuid.uuid4()}"
        data = {"title": preset.get("title")}
        for field in PRODUCT_COST_FIELDS:
            data[field] = parse_maybe_json(preset.get(field))
        margin = preset.get("profit_margin")
        data["profit_margin"] = DEFAULT_PROFIT_MARGIN if margin is None else margin
        return self.store.upsert(key, self.tab, data)
