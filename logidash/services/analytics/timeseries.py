# logidash/services/analytics/timeseries.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Sequence, Tuple

from logidash.services.analytics.reduce import clamp, growth_pct, reduce_by_key
from logidash.services.analytics.types import Granularity, OrderRecord, TimeBucket

# 趋势图 Y 轴固定百分比区间，比 KPI 月环比更窄
BUCKET_GROWTH_MIN = -100.0
BUCKET_GROWTH_MAX = 100.0


@dataclass
class _BucketAcc:
    sales: float = 0.0
    orders: int = 0


def _acc(acc: _BucketAcc, r: OrderRecord) -> _BucketAcc:
    acc.sales += r.total_sales
    acc.orders += 1
    return acc


def day_key(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def month_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def parse_day_key(key: str) -> date:
    return date.fromisoformat(key)


def parse_month_key(key: str) -> date:
    year, month = key.split("-")
    return date(int(year), int(month), 1)


def day_label(d: date) -> str:
    # e.g. "Mar 05"
    return d.strftime("%b %d")


def month_label(d: date) -> str:
    # e.g. "Mar 2024"
    return d.strftime("%b %Y")


_KEYING: Dict[Granularity, Tuple[Callable[[date], str], Callable[[str], date], Callable[[date], str]]] = {
    Granularity.DAY: (day_key, parse_day_key, day_label),
    Granularity.MONTH: (month_key, parse_month_key, month_label),
}


def bucket_orders(
    records: Sequence[OrderRecord],
    granularity: Granularity | str = Granularity.DAY,
) -> List[TimeBucket]:
    """
    按自然日 / 自然月分桶：

    1) key：YYYY-MM-DD 或 YYYY-MM
    2) 每桶累加销售额、订单数
    3) 保留原始 key，另给一个展示 label
    4) 把 key 解析回日期后升序排列（不按字符串排）
    5) 与前一个桶比较算增长率，夹到 [-100, 100]，保留 1 位小数；首桶恒为 0
    空输入返回空列表。
    """
    to_key, parse_key, to_label = _KEYING[Granularity(granularity)]

    buckets = reduce_by_key(
        records, lambda r: to_key(r.order_date), lambda _k: _BucketAcc(), _acc
    )
    ordered = sorted(buckets.items(), key=lambda kv: parse_key(kv[0]))

    out: List[TimeBucket] = []
    prev_sales: float | None = None
    for key, acc in ordered:
        if prev_sales is None:
            growth = 0.0
        else:
            growth = round(clamp(growth_pct(acc.sales, prev_sales), BUCKET_GROWTH_MIN, BUCKET_GROWTH_MAX), 1)
        out.append(
            TimeBucket(
                label=to_label(parse_key(key)),
                raw_key=key,
                sales=acc.sales,
                orders=acc.orders,
                growth=growth,
            )
        )
        prev_sales = acc.sales
    return out
