"""Settings schemas for request/response validation."""
from datetime import datetime
from typing import Any, List, Optional
from pydantic import AliasChoices, BaseModel, Field


class SettingRecordBase(BaseModel):
    """Base settings record schema."""
    key: str
    tab: str
    data: Any = None


class SettingUpsert(BaseModel):
    """Schema for upserting a settings record.

    Fields are optional here so a missing key or tab is reported with a
    plain message rather than a field error list.
    """
    key: Optional[str] = None
    tab: Optional[str] = None
    data: Any = None


class SettingDelete(BaseModel):
    """Schema for deleting a settings record."""
    key: Optional[str] = None


class SettingRecordResponse(SettingRecordBase):
    """Schema for settings record response."""
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DeleteResult(BaseModel):
    """Outcome of an idempotent delete."""
    key: str
    deleted: bool


# Homepage

class HomepageSection(BaseModel):
    """One configurable homepage section."""
    section_id: str
    label: str
    data: Any = None


class HomepageSettingsData(BaseModel):
    """Homepage settings document."""
    sections: List[HomepageSection] = []


class HomepageSettingsPayload(BaseModel):
    """Body of a homepage settings save."""
    data: HomepageSettingsData


# Calculation

class CostItem(BaseModel):
    """A labelled absolute cost amount."""
    label: str = ""
    amount: Optional[float] = None


class CalculationPayload(BaseModel):
    """Calculation settings save.

    ``{"tab": "shipping", "data": [...]}`` saves one cost category;
    ``{"data": {"shipping": [...], ...}}`` saves several at once.
    """
    tab: Optional[str] = None
    data: Any = None


# Product cost

class ProductCostPreset(BaseModel):
    """A product cost preset; cost fields may arrive as JSON strings."""
    key: Optional[str] = None
    title: Optional[str] = None
    advertising: Any = None
    packaging: Any = None
    shipping: Any = None
    personnel: Any = None
    rent: Any = None
    profit_margin: Optional[float] = Field(
        None, validation_alias=AliasChoices("profit_margin", "profitMargin")
    )


class CalculationForm(BaseModel):
    """Aggregated calculation settings, one item list per cost category."""
    advertising: List[CostItem] = []
    packaging: List[CostItem] = []
    shipping: List[CostItem] = []
    personnel: List[CostItem] = []
    rent: List[CostItem] = []
    freeship: List[CostItem] = []

