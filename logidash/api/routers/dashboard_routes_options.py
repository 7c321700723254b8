# logidash/api/routers/dashboard_routes_options.py
from __future__ import annotations

from typing import Optional, Tuple

from fastapi import APIRouter, Depends, Query

from logidash.api.deps import get_records
from logidash.api.routers.dashboard_helpers import clean_opt_str
from logidash.api.routers.dashboard_schemas import DashboardFilterOptions
from logidash.models.enums import OrderStatus
from logidash.services.analytics.types import OrderRecord


def register(router: APIRouter) -> None:
    # ----------------- options（下拉选项） -----------------
    @router.get("/options", response_model=DashboardFilterOptions)
    def dashboard_options(
        state: Optional[str] = Query(None, description="给出时 cities 只列该州下的城市"),
        records: Tuple[OrderRecord, ...] = Depends(get_records),
    ) -> DashboardFilterOptions:
        """
        过滤器下拉选项（基于全量数据集，不受其它过滤条件影响）：
        - 州 / 城市（可按州收窄）/ 物流商
        - 状态为封闭枚举，固定全量返回
        - min_date / max_date 用于日期控件边界
        """
        state_clean = clean_opt_str(state)

        states = {r.state for r in records if r.state}
        cities = {r.city for r in records if r.city and (not state_clean or r.state == state_clean)}
        partners = {r.shipping_partner for r in records if r.shipping_partner}

        dates = [r.order_date for r in records]
        return DashboardFilterOptions(
            states=sorted(states),
            cities=sorted(cities),
            partners=sorted(partners),
            statuses=[s.value for s in OrderStatus],
            min_date=min(dates) if dates else None,
            max_date=max(dates) if dates else None,
        )
