# logidash/api/routers/dashboard_routes_breakdowns.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from logidash.api.routers.dashboard_helpers import get_filtered_records
from logidash.api.routers.dashboard_schemas import (
    PartnerBreakdownResponse,
    PartnerBreakdownRow,
    PaymentBreakdownResponse,
    PaymentBreakdownRow,
    StateBreakdownResponse,
    StateBreakdownRow,
    StateShippingResponse,
    StateShippingRow,
)
from logidash.services.analytics.grouping import (
    group_by_partner,
    group_by_payment,
    group_by_state,
    state_shipping_comparison,
    top_n,
)
from logidash.services.analytics.types import OrderRecord

_LIMIT = Query(None, ge=1, le=500, description="只取排序后的前 N 条（不传 = 全部）")


def register(router: APIRouter) -> None:
    @router.get("/by-state", response_model=StateBreakdownResponse)
    def dashboard_by_state(
        limit: Optional[int] = _LIMIT,
        records: List[OrderRecord] = Depends(get_filtered_records),
    ) -> StateBreakdownResponse:
        """按州：销售额 / 运费 / 退回费用 / 订单数 / 销售额占比，按销售额降序。"""
        rows = top_n(group_by_state(records), limit)
        return StateBreakdownResponse(
            ok=True,
            rows=[StateBreakdownRow.model_validate(r) for r in rows],
        )

    @router.get("/state-shipping", response_model=StateShippingResponse)
    def dashboard_state_shipping(
        limit: Optional[int] = _LIMIT,
        records: List[OrderRecord] = Depends(get_filtered_records),
    ) -> StateShippingResponse:
        """按州运费对比：运费及占总运费比例，按运费降序。"""
        rows = top_n(state_shipping_comparison(records), limit)
        return StateShippingResponse(
            ok=True,
            rows=[StateShippingRow.model_validate(r) for r in rows],
        )

    @router.get("/by-partner", response_model=PartnerBreakdownResponse)
    def dashboard_by_partner(
        limit: Optional[int] = _LIMIT,
        records: List[OrderRecord] = Depends(get_filtered_records),
    ) -> PartnerBreakdownResponse:
        """按物流商：销售额排名 + 签收率 / RTO 率（分母为该物流商订单总数）。"""
        rows = top_n(group_by_partner(records), limit)
        return PartnerBreakdownResponse(
            ok=True,
            rows=[PartnerBreakdownRow.model_validate(r) for r in rows],
        )

    @router.get("/by-payment", response_model=PaymentBreakdownResponse)
    def dashboard_by_payment(
        limit: Optional[int] = _LIMIT,
        records: List[OrderRecord] = Depends(get_filtered_records),
    ) -> PaymentBreakdownResponse:
        rows = top_n(group_by_payment(records), limit)
        return PaymentBreakdownResponse(
            ok=True,
            rows=[PaymentBreakdownRow.model_validate(r) for r in rows],
        )
