# logidash/api/routers/dashboard_routes_list.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from logidash.api.routers.dashboard_helpers import get_filtered_records
from logidash.api.routers.dashboard_schemas import OrderListResponse, OrderRow
from logidash.services.analytics.types import OrderRecord


def register(router: APIRouter) -> None:
    @router.get("/orders", response_model=OrderListResponse)
    def dashboard_orders(
        limit: int = Query(50, ge=1, le=500),
        offset: int = Query(0, ge=0),
        records: List[OrderRecord] = Depends(get_filtered_records),
    ) -> OrderListResponse:
        """物流明细表：过滤后按原始顺序分页，total 为过滤后总条数。"""
        page = records[offset : offset + limit]
        return OrderListResponse(
            ok=True,
            rows=[OrderRow.model_validate(r) for r in page],
            total=len(records),
        )
