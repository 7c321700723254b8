# logidash/api/deps.py
from __future__ import annotations

from typing import Tuple

from fastapi import Depends, Request

from logidash.api.problem import raise_503
from logidash.services.analytics.types import OrderRecord
from logidash.services.feed.store import DatasetStore, DatasetUnavailable


def get_store(request: Request) -> DatasetStore:
    """
    DatasetStore 挂在 app.state 上（main.py 启动时创建）。
    测试里用 dependency_overrides 直接注入内存数据集。
    """
    return request.app.state.dataset_store


def get_records(store: DatasetStore = Depends(get_store)) -> Tuple[OrderRecord, ...]:
    try:
        return store.records()
    except DatasetUnavailable:
        raise_503("dataset_unavailable", "dataset not loaded yet, retry after feed refresh")
