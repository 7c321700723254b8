# logidash/services/feed/normalize.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping

from logidash.models.enums import OrderStatus
from logidash.services.analytics.types import OrderRecord

# 表头（冻结合同，与表格导出一致）
COL_ORDER_ID = "Order ID"
COL_SKU = "SKU"
COL_STATUS = "Deliver Status"
COL_ORDER_DATE = "Order Date"
COL_QUANTITY = "Total Quantity"
COL_PARTNER = "Shipping Partner"
COL_SHIP_COST = "Ship Cost"
COL_PAYMENT = "Payment Method"
COL_STATE = "State"
COL_CITY = "City"
COL_PINCODE = "Pincode"
COL_RTO_COST = "RTO Cost"
COL_TOTAL_SALES = "Total Sales"


class RowError(ValueError):
    pass


@dataclass(frozen=True)
class NormalizeResult:
    records: List[OrderRecord]
    skipped: int
    skip_reasons: Dict[str, int]


def normalize_status(raw: Any) -> OrderStatus:
    """
    自由文本 → 封闭枚举：
    - 含 rto：再看 delivered / initiated，否则为 rto
    - 含 deliver → delivered；含 ship → shipped；含 cancel → canceled
    - 其余（含空）→ pending
    """
    s = str(raw or "").strip().lower()
    if not s:
        return OrderStatus.PENDING

    if "rto" in s:
        if "delivered" in s:
            return OrderStatus.RTO_DELIVERED
        if "initiated" in s:
            return OrderStatus.RTO_INITIATED
        return OrderStatus.RTO

    if "deliver" in s:
        return OrderStatus.DELIVERED
    if "ship" in s:
        return OrderStatus.SHIPPED
    if "cancel" in s:
        return OrderStatus.CANCELED
    return OrderStatus.PENDING


def parse_order_date(raw: Any) -> date:
    """表格日期为 DD/MM/YYYY；也接受 ISO YYYY-MM-DD。解析失败抛 RowError。"""
    s = str(raw or "").strip()
    if not s:
        raise RowError("missing_date")

    if "/" in s:
        parts = s.split("/")
        if len(parts) != 3:
            raise RowError("bad_date")
        day, month, year = parts
        try:
            return date(int(year), int(month), int(day))
        except ValueError as e:
            raise RowError("bad_date") from e

    try:
        return date.fromisoformat(s[:10])
    except ValueError as e:
        raise RowError("bad_date") from e


def _num(raw: Any) -> float:
    if raw is None:
        return 0.0
    s = str(raw).strip().replace(",", "")
    if not s:
        return 0.0
    try:
        v = float(s)
    except ValueError:
        return 0.0
    # NaN 归零，负数不合法也归零
    if v != v or v < 0:
        return 0.0
    return v


def _int(raw: Any) -> int:
    return int(_num(raw))


def _str(raw: Any) -> str:
    if raw is None:
        return ""
    s = str(raw).strip()
    # 数字型 pincode 在导出里常带 ".0"
    if s.endswith(".0") and s[:-2].isdigit():
        return s[:-2]
    return s


def normalize_row(row: Mapping[str, Any], *, index: int) -> OrderRecord:
    order_date = parse_order_date(row.get(COL_ORDER_DATE))
    status = normalize_status(row.get(COL_STATUS))

    return OrderRecord(
        id=_str(row.get(COL_ORDER_ID)) or f"row-{index}",
        product=_str(row.get(COL_SKU)),
        status=status,
        state=_str(row.get(COL_STATE)),
        city=_str(row.get(COL_CITY)),
        pincode=_str(row.get(COL_PINCODE)),
        order_date=order_date,
        quantity=_int(row.get(COL_QUANTITY)),
        shipping_partner=_str(row.get(COL_PARTNER)),
        shipping_cost=_num(row.get(COL_SHIP_COST)),
        payment_method=_str(row.get(COL_PAYMENT)),
        rto_cost=_num(row.get(COL_RTO_COST)),
        total_sales=_num(row.get(COL_TOTAL_SALES)),
    )


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> NormalizeResult:
    """
    逐行归一化；日期缺失 / 无法解析的行直接跳过并计数，不进入聚合层。
    """
    records: List[OrderRecord] = []
    reasons: Dict[str, int] = {}
    skipped = 0

    for i, row in enumerate(rows, start=1):
        try:
            records.append(normalize_row(row, index=i))
        except RowError as e:
            skipped += 1
            key = str(e) or "invalid"
            reasons[key] = reasons.get(key, 0) + 1

    return NormalizeResult(records=records, skipped=skipped, skip_reasons=reasons)
