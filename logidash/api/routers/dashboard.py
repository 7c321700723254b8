# logidash/api/routers/dashboard.py
from __future__ import annotations

from fastapi import APIRouter

from logidash.api.routers import dashboard_routes_breakdowns
from logidash.api.routers import dashboard_routes_feed
from logidash.api.routers import dashboard_routes_list
from logidash.api.routers import dashboard_routes_options
from logidash.api.routers import dashboard_routes_summary
from logidash.api.routers import dashboard_routes_trend

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _register_all_routes() -> None:
    # 汇总卡片 / 高亮
    dashboard_routes_summary.register(router)
    # 分组明细
    dashboard_routes_breakdowns.register(router)
    # 趋势
    dashboard_routes_trend.register(router)
    # 明细列表
    dashboard_routes_list.register(router)
    # 下拉选项
    dashboard_routes_options.register(router)
    # 数据源状态 / 刷新
    dashboard_routes_feed.register(router)


_register_all_routes()
