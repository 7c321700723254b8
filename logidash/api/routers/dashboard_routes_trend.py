# logidash/api/routers/dashboard_routes_trend.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from logidash.api.routers.dashboard_helpers import get_filtered_records
from logidash.api.routers.dashboard_schemas import TimeBucketRow, TrendResponse
from logidash.services.analytics.timeseries import bucket_orders
from logidash.services.analytics.types import Granularity, OrderRecord


def register(router: APIRouter) -> None:
    @router.get("/trend", response_model=TrendResponse)
    def dashboard_trend(
        granularity: Granularity = Query(Granularity.DAY, description="day | month"),
        records: List[OrderRecord] = Depends(get_filtered_records),
    ) -> TrendResponse:
        """
        销售趋势：

        - 按日 / 按月分桶，日期升序
        - growth：与前一桶相比，夹到 [-100, 100]，首桶为 0
        """
        rows = bucket_orders(records, granularity)
        return TrendResponse(
            ok=True,
            granularity=granularity.value,
            rows=[TimeBucketRow.model_validate(r) for r in rows],
        )
