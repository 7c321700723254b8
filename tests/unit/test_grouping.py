from __future__ import annotations

import pytest

from logidash.services.analytics.grouping import (
    Dimension,
    group_by,
    group_by_partner,
    group_by_payment,
    group_by_state,
    state_shipping_comparison,
    top_n,
)
from logidash.services.analytics.types import PaymentBreakdown, StateBreakdown


def test_state_breakdown_percentages(order):
    rows = [
        order(state="A", total_sales=30.0),
        order(state="B", total_sales=70.0),
    ]
    out = group_by_state(rows)
    assert [r.state for r in out] == ["B", "A"]
    assert out[0].percentage == pytest.approx(70.0)
    assert out[1].percentage == pytest.approx(30.0)


def test_state_breakdown_sample(sample_orders):
    out = group_by_state(sample_orders)
    assert [r.state for r in out] == ["Maharashtra", "Karnataka", "Delhi"]

    mh = out[0]
    assert mh.total_sales == 2300.0
    assert mh.shipping_cost == 100.0
    assert mh.order_count == 2

    dl = out[2]
    assert dl.rto_cost == 80.0


def test_breakdowns_reconcile_with_input(sample_orders):
    total = sum(r.total_sales for r in sample_orders)
    for rows, attr in (
        (group_by_state(sample_orders), "total_sales"),
        (group_by_partner(sample_orders), "sales"),
        (group_by_payment(sample_orders), "amount"),
    ):
        assert sum(getattr(r, attr) for r in rows) == pytest.approx(total)
        assert sum(r.percentage for r in rows) == pytest.approx(100.0)


def test_zero_grand_total_gives_zero_percentage(order):
    out = group_by_state([order(state="A"), order(state="B")])
    assert all(r.percentage == 0 for r in out)


def test_ties_keep_first_seen_order(order):
    rows = [
        order(state="X", total_sales=10.0),
        order(state="Y", total_sales=10.0),
        order(state="Z", total_sales=10.0),
    ]
    assert [r.state for r in group_by_state(rows)] == ["X", "Y", "Z"]


def test_partner_rates(sample_orders):
    out = {r.partner: r for r in group_by_partner(sample_orders)}
    assert [r.partner for r in group_by_partner(sample_orders)] == ["Delhivery", "Ekart", "BlueDart"]

    assert out["Delhivery"].success_rate == 100.0
    assert out["Delhivery"].rto_rate == 0.0

    bd = out["BlueDart"]
    assert (bd.delivered_count, bd.rto_count, bd.pending_count, bd.order_count) == (0, 1, 1, 2)
    assert bd.rto_rate == 50.0

    ek = out["Ekart"]
    # RTO_DELIVERED 属于 RTO 家族；取消单只计入总数
    assert ek.rto_count == 1
    assert ek.pending_count == 0
    assert ek.rto_rate == 50.0


def test_state_shipping_share(sample_orders):
    out = state_shipping_comparison(sample_orders)
    assert [r.state for r in out] == ["Maharashtra", "Karnataka", "Delhi"]
    assert [r.shipping_cost for r in out] == [100.0, 90.0, 80.0]
    assert sum(r.percentage for r in out) == pytest.approx(100.0)


def test_payment_breakdown(sample_orders):
    out = group_by_payment(sample_orders)
    assert [(r.method, r.amount, r.count) for r in out] == [
        ("Prepaid", 2500.0, 2),
        ("COD", 1300.0, 2),
        ("UPI", 1100.0, 2),
    ]


def test_empty_input_empty_output():
    assert group_by_state([]) == []
    assert group_by_partner([]) == []
    assert group_by_payment([]) == []
    assert state_shipping_comparison([]) == []


def test_group_by_dispatch(sample_orders):
    assert all(isinstance(r, StateBreakdown) for r in group_by(sample_orders, Dimension.STATE))
    assert all(isinstance(r, PaymentBreakdown) for r in group_by(sample_orders, "payment_method"))
    with pytest.raises(ValueError):
        group_by(sample_orders, "pincode")


def test_top_n(order):
    rows = group_by_state([order(state=s, total_sales=float(i)) for i, s in enumerate("ABCDE")])
    assert [r.state for r in top_n(rows, 2)] == ["E", "D"]
    assert len(top_n(rows, None)) == 5
    assert len(top_n(rows, 0)) == 5
    assert len(top_n(rows, 50)) == 5


def test_unknown_status_counts_only_in_total(order):
    # 未知状态仍计入分组总数
    rows = [order(shipping_partner="P", status="lost")]
    out = group_by_partner(rows)
    assert out[0].order_count == 1
    assert out[0].delivered_count == out[0].rto_count == out[0].pending_count == 0
