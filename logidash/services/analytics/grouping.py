# logidash/services/analytics/grouping.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, TypeVar, Union

from logidash.models.enums import is_delivered, is_pending, is_return_family
from logidash.services.analytics.reduce import pct, reduce_by_key
from logidash.services.analytics.types import (
    OrderRecord,
    PartnerBreakdown,
    PaymentBreakdown,
    StateBreakdown,
    StateShippingShare,
)


class Dimension(str, Enum):
    STATE = "state"
    SHIPPING_PARTNER = "shipping_partner"
    PAYMENT_METHOD = "payment_method"


# ---- 累加器（每个维度一种，显式字段） ----------------------------------------


@dataclass
class _StateAcc:
    sales: float = 0.0
    shipping_cost: float = 0.0
    rto_cost: float = 0.0
    count: int = 0


@dataclass
class _PartnerAcc:
    sales: float = 0.0
    shipping_cost: float = 0.0
    rto_cost: float = 0.0
    delivered: int = 0
    rto: int = 0
    pending: int = 0
    total: int = 0


@dataclass
class _PaymentAcc:
    amount: float = 0.0
    count: int = 0


def _acc_state(acc: _StateAcc, r: OrderRecord) -> _StateAcc:
    acc.sales += r.total_sales
    acc.shipping_cost += r.shipping_cost
    acc.rto_cost += r.rto_cost
    acc.count += 1
    return acc


def _acc_partner(acc: _PartnerAcc, r: OrderRecord) -> _PartnerAcc:
    acc.sales += r.total_sales
    acc.shipping_cost += r.shipping_cost
    acc.rto_cost += r.rto_cost
    acc.total += 1
    if is_delivered(r.status):
        acc.delivered += 1
    elif is_return_family(r.status):
        acc.rto += 1
    elif is_pending(r.status):
        acc.pending += 1
    return acc


def _acc_payment(acc: _PaymentAcc, r: OrderRecord) -> _PaymentAcc:
    acc.amount += r.total_sales
    acc.count += 1
    return acc


# ---- 对外函数 --------------------------------------------------------------


def group_by_state(records: Sequence[OrderRecord]) -> List[StateBreakdown]:
    """按省/州汇总；percentage = 销售额占比；按销售额降序（并列保持首次出现顺序）。"""
    buckets = reduce_by_key(records, lambda r: r.state, lambda _k: _StateAcc(), _acc_state)
    grand_total = sum(a.sales for a in buckets.values())

    rows = [
        StateBreakdown(
            state=k,
            total_sales=a.sales,
            shipping_cost=a.shipping_cost,
            rto_cost=a.rto_cost,
            order_count=a.count,
            percentage=pct(a.sales, grand_total),
        )
        for k, a in buckets.items()
    ]
    return sorted(rows, key=lambda x: x.total_sales, reverse=True)


def state_shipping_comparison(records: Sequence[OrderRecord]) -> List[StateShippingShare]:
    """各州运费及其占总运费的比例，按运费降序。"""
    buckets = reduce_by_key(records, lambda r: r.state, lambda _k: _StateAcc(), _acc_state)
    total_cost = sum(a.shipping_cost for a in buckets.values())

    rows = [
        StateShippingShare(
            state=k,
            shipping_cost=a.shipping_cost,
            order_count=a.count,
            percentage=pct(a.shipping_cost, total_cost),
        )
        for k, a in buckets.items()
    ]
    return sorted(rows, key=lambda x: x.shipping_cost, reverse=True)


def group_by_partner(records: Sequence[OrderRecord]) -> List[PartnerBreakdown]:
    """
    按物流商汇总：
    - success_rate = delivered / 该物流商订单总数
    - rto_rate     = RTO 家族 / 该物流商订单总数
    - 按销售额降序
    """
    buckets = reduce_by_key(
        records, lambda r: r.shipping_partner, lambda _k: _PartnerAcc(), _acc_partner
    )
    grand_total = sum(a.sales for a in buckets.values())

    rows = [
        PartnerBreakdown(
            partner=k,
            sales=a.sales,
            shipping_cost=a.shipping_cost,
            rto_cost=a.rto_cost,
            delivered_count=a.delivered,
            rto_count=a.rto,
            pending_count=a.pending,
            order_count=a.total,
            success_rate=pct(a.delivered, a.total),
            rto_rate=pct(a.rto, a.total),
            percentage=pct(a.sales, grand_total),
        )
        for k, a in buckets.items()
    ]
    return sorted(rows, key=lambda x: x.sales, reverse=True)


def group_by_payment(records: Sequence[OrderRecord]) -> List[PaymentBreakdown]:
    buckets = reduce_by_key(
        records, lambda r: r.payment_method, lambda _k: _PaymentAcc(), _acc_payment
    )
    grand_total = sum(a.amount for a in buckets.values())

    rows = [
        PaymentBreakdown(
            method=k,
            amount=a.amount,
            count=a.count,
            percentage=pct(a.amount, grand_total),
        )
        for k, a in buckets.items()
    ]
    return sorted(rows, key=lambda x: x.amount, reverse=True)


Breakdown = Union[StateBreakdown, PartnerBreakdown, PaymentBreakdown]


def group_by(records: Sequence[OrderRecord], dimension: Dimension | str) -> List[Breakdown]:
    dim = Dimension(dimension)
    if dim is Dimension.STATE:
        return list(group_by_state(records))
    if dim is Dimension.SHIPPING_PARTNER:
        return list(group_by_partner(records))
    return list(group_by_payment(records))


T = TypeVar("T")


def top_n(rows: Sequence[T], limit: int | None) -> List[T]:
    if limit is None or limit <= 0:
        return list(rows)
    return list(rows[:limit])
