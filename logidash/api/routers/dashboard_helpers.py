# logidash/api/routers/dashboard_helpers.py
from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence, Tuple

from fastapi import Depends, Query

from logidash.api.deps import get_records
from logidash.api.problem import raise_422
from logidash.models.enums import OrderStatus
from logidash.services.analytics.filters import filter_orders
from logidash.services.analytics.types import FilterSpec, OrderRecord


def parse_date_param(value: Optional[str], *, name: str) -> Optional[date]:
    if value is None:
        return None
    v = value.strip()
    if not v:
        return None
    try:
        return date.fromisoformat(v)
    except ValueError:
        raise_422(
            "invalid_date",
            f"{name} must be YYYY-MM-DD",
            details=[{"type": "validation", "path": f"query.{name}", "reason": "bad_date", "value": v}],
        )


def clean_opt_str(value: Optional[str]) -> str:
    return (value or "").strip()


def split_multi(values: Optional[Sequence[str]]) -> List[str]:
    """支持 ?status=a&status=b 与 ?status=a,b 两种写法。"""
    out: List[str] = []
    for raw in values or []:
        out.extend(p.strip() for p in raw.split(",") if p.strip())
    return out


def parse_statuses(values: Optional[Sequence[str]]) -> frozenset:
    parsed = []
    for s in split_multi(values):
        try:
            parsed.append(OrderStatus(s.lower()))
        except ValueError:
            raise_422(
                "invalid_status",
                f"unknown status '{s}'",
                details=[{"type": "validation", "path": "query.status", "reason": "unknown_status", "value": s}],
            )
    return frozenset(parsed)


def get_filter_spec(
    from_date: Optional[str] = Query(None, description="起始日期（YYYY-MM-DD，含）；需与 to_date 同时给出"),
    to_date: Optional[str] = Query(None, description="结束日期（YYYY-MM-DD，含）；需与 from_date 同时给出"),
    state: Optional[str] = Query(None, description="州（精确匹配）"),
    city: Optional[str] = Query(None, description="城市（精确匹配）"),
    status: Optional[List[str]] = Query(None, description="订单状态，可重复或逗号分隔"),
    partner: Optional[List[str]] = Query(None, description="物流商，可重复或逗号分隔"),
) -> FilterSpec:
    return FilterSpec(
        date_from=parse_date_param(from_date, name="from_date"),
        date_to=parse_date_param(to_date, name="to_date"),
        state=clean_opt_str(state),
        city=clean_opt_str(city),
        statuses=parse_statuses(status),
        partners=frozenset(split_multi(partner)),
    )


def get_filtered_records(
    records: Tuple[OrderRecord, ...] = Depends(get_records),
    spec: FilterSpec = Depends(get_filter_spec),
) -> List[OrderRecord]:
    return filter_orders(records, spec)
