# logidash/services/analytics/highlights.py
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence

from logidash.services.analytics.grouping import group_by_partner, group_by_state
from logidash.services.analytics.kpi import year_over_year_growth
from logidash.services.analytics.types import OrderRecord

DEFAULT_BEST_RTO_MIN_ORDERS = 10


@dataclass(frozen=True)
class NamedValue:
    name: str
    value: float


@dataclass(frozen=True)
class PartnerHighlight:
    name: str
    value: float
    success_rate: float
    rto_rate: float


@dataclass(frozen=True)
class Highlights:
    best_state: Optional[NamedValue]
    best_partner: Optional[PartnerHighlight]
    best_partner_rto: Optional[NamedValue]


@dataclass(frozen=True)
class DatasetInsights:
    unique_customers: int
    top_city: Optional[NamedValue]
    peak_day: Optional[NamedValue]
    popular_product: Optional[NamedValue]
    yoy_growth: float


def _most_common(values) -> Optional[NamedValue]:
    # Counter.most_common 对并列保持首次出现顺序
    counts = Counter(values)
    if not counts:
        return None
    name, count = counts.most_common(1)[0]
    return NamedValue(name=name, value=float(count))


def compute_highlights(
    records: Sequence[OrderRecord],
    *,
    best_rto_min_orders: int = DEFAULT_BEST_RTO_MIN_ORDERS,
) -> Highlights:
    """
    看板“最佳”卡片：
    - best_state       ：销售额最高的州
    - best_partner     ：销售额最高的物流商（带成功率 / RTO 率）
    - best_partner_rto ：订单数 >= best_rto_min_orders 的物流商里 RTO 率最低者
    """
    states = group_by_state(records)
    partners = group_by_partner(records)

    best_state = NamedValue(name=states[0].state, value=states[0].total_sales) if states else None

    best_partner = None
    if partners:
        top = partners[0]
        best_partner = PartnerHighlight(
            name=top.partner,
            value=top.sales,
            success_rate=top.success_rate,
            rto_rate=top.rto_rate,
        )

    eligible = [p for p in partners if p.order_count >= best_rto_min_orders]
    best_partner_rto = None
    if eligible:
        lowest = min(eligible, key=lambda p: p.rto_rate)
        best_partner_rto = NamedValue(name=lowest.partner, value=lowest.rto_rate)

    return Highlights(
        best_state=best_state,
        best_partner=best_partner,
        best_partner_rto=best_partner_rto,
    )


def compute_insights(records: Sequence[OrderRecord]) -> DatasetInsights:
    return DatasetInsights(
        # pincode 作为“客户”的近似
        unique_customers=len({r.pincode for r in records}),
        top_city=_most_common(r.city for r in records),
        peak_day=_most_common(r.order_date.strftime("%A") for r in records),
        popular_product=_most_common(r.product for r in records),
        yoy_growth=year_over_year_growth(records),
    )
