# logidash/services/analytics/kpi.py
from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence, Tuple

from logidash.models.enums import is_canceled, is_delivered, is_return_family
from logidash.services.analytics.reduce import clamp, growth_pct, pct
from logidash.services.analytics.types import CanceledSummary, DashboardSummary, OrderRecord

logger = logging.getLogger("logidash.analytics")

# 月环比的展示安全边界：防止上月量很小时图表被拉爆，不代表真实经济上限
MOM_GROWTH_MIN = -100.0
MOM_GROWTH_MAX = 500.0


def month_start(d: date) -> date:
    return d.replace(day=1)


def previous_month_start(d: date) -> date:
    if d.month == 1:
        return date(d.year - 1, 12, 1)
    return date(d.year, d.month - 1, 1)


def max_order_date(records: Sequence[OrderRecord]) -> Optional[date]:
    if not records:
        return None
    return max(r.order_date for r in records)


def month_windows(anchor: date) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """以 anchor 所在月为“本月”，返回 (本月, 上月) 的 (year, month)。"""
    cur = month_start(anchor)
    prev = previous_month_start(cur)
    return (cur.year, cur.month), (prev.year, prev.month)


def month_over_month_growth(records: Sequence[OrderRecord]) -> float:
    """
    月环比（展示口径）：

    - “本月”锚定在数据自身的最大日期所在月，而不是系统当前日期
      （因此日期过滤会改变“本月”的含义，保持与现有看板一致）
    - 两个窗口内的销售额不区分是否取消，直接累加
    - 结果夹到 [-100, 500]
    """
    anchor = max_order_date(records)
    if anchor is None:
        return 0.0

    (cy, cm), (py, pm) = month_windows(anchor)
    current = 0.0
    previous = 0.0
    for r in records:
        ym = (r.order_date.year, r.order_date.month)
        if ym == (cy, cm):
            current += r.total_sales
        elif ym == (py, pm):
            previous += r.total_sales

    logger.debug(
        "mom window anchor=%s current=%s previous=%s", anchor.isoformat(), current, previous
    )
    return clamp(growth_pct(current, previous), MOM_GROWTH_MIN, MOM_GROWTH_MAX)


def summarize(records: Sequence[OrderRecord]) -> DashboardSummary:
    """
    看板汇总卡片。

    口径说明：
    - 销售额 / 订单数：只算有效订单（非 canceled）
    - RTO 率：分子扫描全部记录里的 RTO 家族，分母是有效订单数
    - 运费 / 退回费用：全部记录求和
    - 平均运费：总运费 / 有效订单数，有效订单为 0 时除以 1
    - 成功率：delivered 数 / 有效订单数，同样的 0 保护
    空输入返回全 0。
    """
    total_sales = 0.0
    total_orders = 0
    delivered = 0
    rto = 0
    total_shipping_cost = 0.0
    total_rto_cost = 0.0

    for r in records:
        if not is_canceled(r.status):
            total_orders += 1
            total_sales += r.total_sales
        if is_delivered(r.status):
            delivered += 1
        if is_return_family(r.status):
            rto += 1
        total_shipping_cost += r.shipping_cost
        total_rto_cost += r.rto_cost

    denominator = total_orders or 1

    return DashboardSummary(
        total_sales=total_sales,
        total_orders=total_orders,
        avg_shipping_cost=total_shipping_cost / denominator,
        success_rate=(delivered / denominator) * 100,
        rto_rate=(rto / denominator) * 100,
        total_rto_cost=total_rto_cost,
        total_shipping_cost=total_shipping_cost,
        mom_growth=month_over_month_growth(records),
    )


def summarize_canceled(records: Sequence[OrderRecord]) -> CanceledSummary:
    count = 0
    value = 0.0
    for r in records:
        if is_canceled(r.status):
            count += 1
            value += r.total_sales
    return CanceledSummary(count=count, value=value)


def year_over_year_growth(records: Sequence[OrderRecord]) -> float:
    """以最大日期所在年份为“今年”；去年无销售额时记 0，不做夹取。"""
    anchor = max_order_date(records)
    if anchor is None:
        return 0.0

    current = sum(r.total_sales for r in records if r.order_date.year == anchor.year)
    previous = sum(r.total_sales for r in records if r.order_date.year == anchor.year - 1)
    if not previous:
        return 0.0
    return pct(current - previous, previous)
