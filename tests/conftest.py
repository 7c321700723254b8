# tests/conftest.py
from __future__ import annotations

from datetime import date
from typing import Any, Callable, Iterator, List

import pytest
from fastapi.testclient import TestClient

from logidash.api.deps import get_store
from logidash.main import app
from logidash.models.enums import OrderStatus
from logidash.services.analytics.types import OrderRecord
from logidash.services.feed.store import DatasetStore

_seq = {"n": 0}


def make_order(**kw: Any) -> OrderRecord:
    """测试造数：只给关心的字段，其余用稳定默认值。"""
    _seq["n"] += 1
    base = dict(
        id=f"ORD-{_seq['n']}",
        product="SKU-1",
        status=OrderStatus.DELIVERED,
        state="Karnataka",
        city="Bengaluru",
        pincode="560001",
        order_date=date(2024, 3, 10),
        quantity=1,
        shipping_partner="Delhivery",
        shipping_cost=0.0,
        payment_method="COD",
        rto_cost=0.0,
        total_sales=0.0,
    )
    base.update(kw)
    return OrderRecord(**base)


@pytest.fixture
def order() -> Callable[..., OrderRecord]:
    return make_order


@pytest.fixture
def sample_orders() -> List[OrderRecord]:
    """
    小型混合数据集：两个月、三个州、三家物流商、含取消与 RTO 家族。
    """
    return [
        make_order(id="A1", state="Karnataka", city="Bengaluru", shipping_partner="Delhivery",
                   payment_method="COD", order_date=date(2024, 2, 5), total_sales=1000.0,
                   shipping_cost=50.0, status=OrderStatus.DELIVERED, pincode="560001"),
        make_order(id="A2", state="Karnataka", city="Mysuru", shipping_partner="BlueDart",
                   payment_method="Prepaid", order_date=date(2024, 2, 20), total_sales=500.0,
                   shipping_cost=40.0, status=OrderStatus.RTO, rto_cost=60.0, pincode="570001"),
        make_order(id="A3", state="Maharashtra", city="Mumbai", shipping_partner="Delhivery",
                   payment_method="Prepaid", order_date=date(2024, 3, 1), total_sales=2000.0,
                   shipping_cost=70.0, status=OrderStatus.DELIVERED, pincode="400001"),
        make_order(id="A4", state="Maharashtra", city="Pune", shipping_partner="Ekart",
                   payment_method="COD", order_date=date(2024, 3, 3), total_sales=300.0,
                   shipping_cost=30.0, status=OrderStatus.CANCELED, pincode="411001"),
        make_order(id="A5", state="Delhi", city="New Delhi", shipping_partner="Ekart",
                   payment_method="UPI", order_date=date(2024, 3, 15), total_sales=700.0,
                   shipping_cost=45.0, status=OrderStatus.RTO_DELIVERED, rto_cost=80.0, pincode="110001"),
        make_order(id="A6", state="Delhi", city="New Delhi", shipping_partner="BlueDart",
                   payment_method="UPI", order_date=date(2024, 3, 20), total_sales=400.0,
                   shipping_cost=35.0, status=OrderStatus.PENDING, pincode="110001"),
    ]


@pytest.fixture
def store(sample_orders: List[OrderRecord]) -> DatasetStore:
    s = DatasetStore(zero_sales_warn_ratio=0.2)
    s.replace(sample_orders, source="fixture")
    return s


@pytest.fixture
def client(store: DatasetStore) -> Iterator[TestClient]:
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_store, None)
