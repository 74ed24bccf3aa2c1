"""Report routes."""
from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import forward_backend_errors
from app.responses import Envelope, ok
from app.schemas.report import ProductReport, RevenueSummary
from app.services.reports import product_report, revenue_summary

router = APIRouter(prefix="/reports", tags=["Reports"])

Range = Literal["week", "month", "year"]


@router.get("/summary", response_model=Envelope[RevenueSummary])
async def get_revenue_summary(
    range: Range = Query("month"),
    span: int = Query(6, ge=1, le=120, description="Number of units back"),
    db: Session = Depends(get_db),
):
    """Order revenue bucketed by week, month or year."""
    with forward_backend_errors(db):
        summary = revenue_summary(db, range, span)
    return ok(summary)


@router.get("/products", response_model=Envelope[ProductReport])
async def get_product_report(
    range: Range = Query("month"),
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    db: Session = Depends(get_db),
):
    """Revenue, cost and profit per product."""
    with forward_backend_errors(db):
        report = product_report(db, range, start, end)
    return ok(report)
