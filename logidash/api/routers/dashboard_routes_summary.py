# logidash/api/routers/dashboard_routes_summary.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from logidash.api.routers.dashboard_helpers import get_filtered_records
from logidash.api.routers.dashboard_schemas import (
    CanceledSummaryOut,
    DashboardSummaryOut,
    DashboardSummaryResponse,
    HighlightsOut,
    HighlightsResponse,
    InsightsOut,
)
from logidash.core.config import AppSettings, get_settings
from logidash.services.analytics.highlights import compute_highlights, compute_insights
from logidash.services.analytics.kpi import summarize, summarize_canceled
from logidash.services.analytics.types import OrderRecord


def register(router: APIRouter) -> None:
    @router.get(
        "/summary",
        response_model=DashboardSummaryResponse,
        summary="看板汇总卡片（销售额 / 订单数 / 运费 / 成功率 / RTO 率 / 月环比）",
    )
    def dashboard_summary(
        records: List[OrderRecord] = Depends(get_filtered_records),
    ) -> DashboardSummaryResponse:
        """
        过滤后的数据集上计算汇总：

        - 有效订单 = 非 canceled
        - 月环比锚定在过滤后数据的最大日期所在月
        - canceled：取消订单数与其销售额，单独展示
        """
        return DashboardSummaryResponse(
            ok=True,
            summary=DashboardSummaryOut.model_validate(summarize(records)),
            canceled=CanceledSummaryOut.model_validate(summarize_canceled(records)),
        )

    @router.get(
        "/highlights",
        response_model=HighlightsResponse,
        summary="最佳州 / 最佳物流商 / 最低 RTO 物流商 + 数据集洞察",
    )
    def dashboard_highlights(
        records: List[OrderRecord] = Depends(get_filtered_records),
        settings: AppSettings = Depends(get_settings),
    ) -> HighlightsResponse:
        highlights = compute_highlights(records, best_rto_min_orders=settings.BEST_RTO_MIN_ORDERS)
        return HighlightsResponse(
            ok=True,
            highlights=HighlightsOut.model_validate(highlights),
            insights=InsightsOut.model_validate(compute_insights(records)),
        )
