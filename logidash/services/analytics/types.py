# logidash/services/analytics/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import FrozenSet, Optional

from logidash.models.enums import OrderStatus


class Granularity(str, Enum):
    DAY = "day"
    MONTH = "month"


@dataclass(frozen=True)
class OrderRecord:
    """
    单条订单记录（已由 feed 归一化层完成类型转换）。

    金额字段缺失时一律为 0，不允许为 None。
    """

    id: str
    product: str
    status: OrderStatus
    state: str
    city: str
    pincode: str
    order_date: date
    quantity: int = 0
    shipping_partner: str = ""
    shipping_cost: float = 0.0
    payment_method: str = ""
    rto_cost: float = 0.0
    total_sales: float = 0.0

    @property
    def destination(self) -> str:
        return f"{self.city}, {self.state}"


@dataclass(frozen=True)
class FilterSpec:
    """
    过滤条件（不可变）：
    - date_from / date_to：闭区间，两端都给才生效
    - state / city：精确匹配，空串 = 不限
    - statuses / partners：集合匹配，空集 = 不限
    各维度之间为 AND。
    """

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    state: str = ""
    city: str = ""
    statuses: FrozenSet[OrderStatus] = field(default_factory=frozenset)
    partners: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def has_date_range(self) -> bool:
        return self.date_from is not None and self.date_to is not None


@dataclass(frozen=True)
class DashboardSummary:
    total_sales: float = 0.0
    total_orders: int = 0
    avg_shipping_cost: float = 0.0
    success_rate: float = 0.0
    rto_rate: float = 0.0
    total_rto_cost: float = 0.0
    total_shipping_cost: float = 0.0
    mom_growth: float = 0.0


@dataclass(frozen=True)
class CanceledSummary:
    count: int = 0
    value: float = 0.0


@dataclass(frozen=True)
class StateBreakdown:
    state: str
    total_sales: float
    shipping_cost: float
    rto_cost: float
    order_count: int
    percentage: float


@dataclass(frozen=True)
class StateShippingShare:
    state: str
    shipping_cost: float
    order_count: int
    percentage: float


@dataclass(frozen=True)
class PartnerBreakdown:
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


@dataclass(frozen=True)
class PaymentBreakdown:
    method: str
    amount: float
    count: int
    percentage: float


@dataclass(frozen=True)
class TimeBucket:
    label: str
    raw_key: str
    sales: float
    orders: int
    growth: float
