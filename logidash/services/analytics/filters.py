# logidash/services/analytics/filters.py
from __future__ import annotations

from typing import Iterable, List

from logidash.services.analytics.types import FilterSpec, OrderRecord


def matches(record: OrderRecord, spec: FilterSpec) -> bool:
    # 日期：from/to 必须同时给出才生效，只给一端时整体忽略
    if spec.has_date_range:
        if record.order_date < spec.date_from or record.order_date > spec.date_to:  # type: ignore[operator]
            return False

    if spec.state and record.state != spec.state:
        return False

    if spec.city and record.city != spec.city:
        return False

    if spec.statuses and record.status not in spec.statuses:
        return False

    if spec.partners and record.shipping_partner not in spec.partners:
        return False

    return True


def filter_orders(records: Iterable[OrderRecord], spec: FilterSpec) -> List[OrderRecord]:
    """保持输入顺序，返回新列表，不修改输入。"""
    return [r for r in records if matches(r, spec)]
