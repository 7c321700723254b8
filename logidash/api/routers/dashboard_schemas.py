# logidash/api/routers/dashboard_schemas.py
from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from logidash.models.enums import OrderStatus


class _FromAttrs(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class DashboardSummaryOut(_FromAttrs):
    total_sales: float
    total_orders: int
    avg_shipping_cost: float
    success_rate: float
    rto_rate: float
    total_rto_cost: float
    total_shipping_cost: float
    mom_growth: float


class CanceledSummaryOut(_FromAttrs):
    count: int
    value: float


class DashboardSummaryResponse(BaseModel):
    ok: bool = True
    summary: DashboardSummaryOut
    canceled: CanceledSummaryOut


class StateBreakdownRow(_FromAttrs):
    state: str
    total_sales: float
    shipping_cost: float
    rto_cost: float
    order_count: int
    percentage: float


class StateBreakdownResponse(BaseModel):
    ok: bool = True
    rows: List[StateBreakdownRow]


class StateShippingRow(_FromAttrs):
    state: str
    shipping_cost: float
    order_count: int
    percentage: float


class StateShippingResponse(BaseModel):
    ok: bool = True
    rows: List[StateShippingRow]


class PartnerBreakdownRow(_FromAttrs):
    partner: str
    sales: float
    shipping_cost: float
    rto_cost: float
    delivered_count: int
    rto_count: int
    pending_count: int
    order_count: int
    success_rate: float
    rto_rate: float
    percentage: float


class PartnerBreakdownResponse(BaseModel):
    ok: bool = True
    rows: List[PartnerBreakdownRow]


class PaymentBreakdownRow(_FromAttrs):
    method: str
    amount: float
    count: int
    percentage: float


class PaymentBreakdownResponse(BaseModel):
    ok: bool = True
    rows: List[PaymentBreakdownRow]


class TimeBucketRow(_FromAttrs):
    label: str
    raw_key: str  # YYYY-MM-DD / YYYY-MM
    sales: float
    orders: int
    growth: float


class TrendResponse(BaseModel):
    ok: bool = True
    granularity: str
    rows: List[TimeBucketRow]


class NamedValueOut(_FromAttrs):
    name: str
    value: float


class PartnerHighlightOut(_FromAttrs):
    name: str
    value: float
    success_rate: float
    rto_rate: float


class HighlightsOut(_FromAttrs):
    best_state: Optional[NamedValueOut] = None
    best_partner: Optional[PartnerHighlightOut] = None
    best_partner_rto: Optional[NamedValueOut] = None


class InsightsOut(_FromAttrs):
    unique_customers: int
    top_city: Optional[NamedValueOut] = None
    peak_day: Optional[NamedValueOut] = None
    popular_product: Optional[NamedValueOut] = None
    yoy_growth: float


class HighlightsResponse(BaseModel):
    ok: bool = True
    highlights: HighlightsOut
    insights: InsightsOut


class OrderRow(_FromAttrs):
    id: str
    product: str
    status: OrderStatus
    destination: str
    state: str
    city: str
    pincode: str
    order_date: date
    quantity: int
    shipping_partner: str
    shipping_cost: float
    payment_method: str
    rto_cost: float
    total_sales: float


class OrderListResponse(BaseModel):
    ok: bool = True
    rows: List[OrderRow]
    total: int


class DashboardFilterOptions(BaseModel):
    states: List[str]
    cities: List[str]
    partners: List[str]
    statuses: List[str]
    min_date: Optional[date] = None
    max_date: Optional[date] = None


class FeedStatusResponse(BaseModel):
    ok: bool = True
    loaded: bool
    source: str
    rows: int = 0
    skipped_rows: int = 0
    skip_reasons: Dict[str, int] = {}
    loaded_at: Optional[datetime] = None
    quality_warnings: List[str] = []
    last_error: Optional[str] = None
