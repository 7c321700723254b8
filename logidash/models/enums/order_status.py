# logidash/models/enums/order_status.py
from __future__ import annotations

from enum import Enum
from typing import Any, FrozenSet


class OrderStatus(str, Enum):
    """
    订单状态（封闭枚举，冻结合同）：
    - PENDING        待处理
    - SHIPPED        已发货
    - DELIVERED      已签收
    - CANCELED       已取消
    - RTO            退回发件方（Return to Origin）
    - RTO_INITIATED  退回已发起
    - RTO_DELIVERED  退回已送达发件方

    rto* 三个状态统称“RTO 家族”，算比率时合并计数，分组明细时仍可区分。
    """

    PENDING = "pending"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELED = "canceled"
    RTO = "rto"
    RTO_INITIATED = "rto_initiated"
    RTO_DELIVERED = "rto_delivered"


RETURN_FAMILY: FrozenSet[OrderStatus] = frozenset(
    {OrderStatus.RTO, OrderStatus.RTO_INITIATED, OrderStatus.RTO_DELIVERED}
)
DELIVERED_STATUSES: FrozenSet[OrderStatus] = frozenset({OrderStatus.DELIVERED})
CANCELED_STATUSES: FrozenSet[OrderStatus] = frozenset({OrderStatus.CANCELED})


def _coerce(status: Any) -> OrderStatus | None:
    # 不在封闭集合里的值一律视为“其它”：计入总数，不进任何比率分子
    if isinstance(status, OrderStatus):
        return status
    try:
        return OrderStatus(status)
    except ValueError:
        return None


def is_return_family(status: Any) -> bool:
    return _coerce(status) in RETURN_FAMILY


def is_delivered(status: Any) -> bool:
    return _coerce(status) in DELIVERED_STATUSES


def is_canceled(status: Any) -> bool:
    return _coerce(status) in CANCELED_STATUSES


def is_pending(status: Any) -> bool:
    return _coerce(status) is OrderStatus.PENDING
