"""Settings routes."""
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import BadRequestError, forward_backend_errors
from app.responses import Envelope, ok
from app.schemas.settings import (
    CalculationForm,
    CalculationPayload,
    DeleteResult,
    HomepageSettingsPayload,
    ProductCostPreset,
    SettingDelete,
    SettingRecordResponse,
    SettingUpsert,
)
from app.services.settings_domains import (
    CalculationSettingsService,
    HomepageSettingsService,
    ProductCostSettingsService,
)
from app.services.settings_store import SettingsStore, SettingsValidationError

router = APIRouter(prefix="/settings", tags=["Settings"])


@contextmanager
def settings_errors(db: Session):
    """Map store validation to 400 and database failures to 500."""
    with forward_backend_errors(db, status.HTTP_500_INTERNAL_SERVER_ERROR):
        try:
            yield
        except SettingsValidationError as e:
            raise BadRequestError(str(e))


def resolve_key(key: Optional[str], payload: Optional[SettingDelete]) -> str:
    """Key of a delete request, from the query string or the JSON body."""
    key = key or (payload.key if payload else None)
    if not key:
        raise BadRequestError("Missing key")
    return key


@router.get("", response_model=Envelope[List[SettingRecordResponse]])
async def list_settings(
    tab: Optional[str] = Query(None, description="Filter by tab"),
    db: Session = Depends(get_db),
):
    """List settings records, newest first."""
    with settings_errors(db):
        records = SettingsStore(db).list(tab)
    return ok(records)


@router.post("", response_model=Envelope[SettingRecordResponse])
async def upsert_setting(
    payload: SettingUpsert,
    db: Session = Depends(get_db),
):
    """Insert a settings record or replace the one with the same key."""
    if not payload.key or not payload.tab:
        raise BadRequestError("Missing key or tab")

    with settings_errors(db):
        record = SettingsStore(db).upsert(payload.key, payload.tab, payload.data)
    return ok(record)


@router.delete("", response_model=Envelope[DeleteResult])
async def delete_setting(
    key: Optional[str] = Query(None),
    payload: Optional[SettingDelete] = Body(None),
    db: Session = Depends(get_db),
):
    """Delete a settings record by key. Missing keys are not an error."""
    key = resolve_key(key, payload)
    with settings_errors(db):
        deleted = SettingsStore(db).delete(key)
    return ok({"key": key, "deleted": deleted})


@router.get("/homepage", response_model=Envelope[Dict[str, Any]])
async def get_homepage_settings(db: Session = Depends(get_db)):
    """Get the homepage sections document."""
    with settings_errors(db):
        document = HomepageSettingsService(db).get()
    return ok(document)


@router.post("/homepage", response_model=Envelope[SettingRecordResponse])
async def save_homepage_settings(
    payload: HomepageSettingsPayload,
    db: Session = Depends(get_db),
):
    """Replace the homepage sections document."""
    sections = [section.model_dump() for section in payload.data.sections]
    with settings_errors(db):
        record = HomepageSettingsService(db).save(sections)
    return ok(record)


@router.get("/calculation", response_model=Envelope[CalculationForm])
async def get_calculation_settings(db: Session = Depends(get_db)):
    """Get cost items for every calculation category."""
    with settings_errors(db):
        form = CalculationSettingsService(db).get()
    return ok(form)


@router.post("/calculation", response_model=Envelope[List[SettingRecordResponse]])
async def save_calculation_settings(
    payload: CalculationPayload,
    db: Session = Depends(get_db),
):
    """Save one cost category (``tab`` + ``data``) or several (``data`` mapping)."""
    service = CalculationSettingsService(db)
    with settings_errors(db):
        if payload.tab is None and isinstance(payload.data, dict):
            records = service.save(payload.data)
        elif not payload.tab:
            raise BadRequestError("Missing tab")
        else:
            records = [service.save_category(payload.tab, payload.data)]
    return ok(records)


@router.delete("/calculation", response_model=Envelope[DeleteResult])
async def delete_calculation_setting(
    key: Optional[str] = Query(None),
    payload: Optional[SettingDelete] = Body(None),
    db: Session = Depends(get_db),
):
    """Delete a calculation record by key."""
    key = resolve_key(key, payload)
    with settings_errors(db):
        deleted = CalculationSettingsService(db).delete(key)
    return ok({"key": key, "deleted": deleted})


@router.get("/product-cost", response_model=Envelope[List[SettingRecordResponse]])
async def list_product_cost_settings(db: Session = Depends(get_db)):
    """List product cost presets, newest first."""
    with settings_errors(db):
        records = ProductCostSettingsService(db).list()
    return ok(records)


@router.post("/product-cost", response_model=Envelope[SettingRecordResponse])
async def save_product_cost_setting(
    preset: ProductCostPreset,
    db: Session = Depends(get_db),
):
    """Create a product cost preset, or replace the one named by ``key``."""
    with settings_errors(db):
        record = ProductCostSettingsService(db).save(preset.model_dump(exclude={"key"}), key=preset.key)
    return ok(record)


@router.delete("/product-cost", response_model=Envelope[DeleteResult])
async def delete_product_cost_setting(
    key: Optional[str] = Query(None),
    payload: Optional[SettingDelete] = Body(None),
    db: Session = Depends(get_db),
):
    """Delete a product cost preset by key."""
    key = resolve_key(key, payload)
    with settings_errors(db):
        deleted = ProductCostSettingsService(db).delete(key)
    return ok({"key": key, "deleted": deleted})
