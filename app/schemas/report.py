"""Report schemas."""
from typing import List
from pydantic import BaseModel


class SeriesPoint(BaseModel):
    label: str
    value: float


class RevenueSummary(BaseModel):
    """Revenue bucketed by week, month or year."""
    series: List[SeriesPoint]
    total: float


class ProductReportItem(BaseModel):
    """Profit breakdown for one product across the report window."""
    product_id: str
    product_title: str
    quantity: int = 0
    revenue: float = 0
    cost: float = 0
    discount_amount: float = 0
    advertising_cost: float = 0
    packaging_cost: float = 0
    shipping_cost: float = 0
    personnel_cost: float = 0
    rent_cost: float = 0
    freeship_cost: float = 0
    gross_profit: float = 0
    net_profit: float = 0


class ProductReport(BaseModel):
    """Per-product report with totals."""
    total_revenue: float = 0
    total_cost: float = 0
    total_gross_profit: float = 0
    total_net_profit: float = 0
    total_advertising: float = 0
    total_packaging: float = 0
    total_shipping: float = 0
    total_personnel: float = 0
    total_rent: float = 0
    total_freeship: float = 0
    total_discount: float = 0
    products: List[ProductReportItem] = []
