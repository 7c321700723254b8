# logidash/services/analytics/reduce.py
from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def reduce_by_key(
    records: Iterable[T],
    key_fn: Callable[[T], K],
    initial: Callable[[K], V],
    accumulate: Callable[[V, T], V],
) -> Dict[K, V]:
    """
    单遍按 key 归约。

    - initial(key) 为每个新 key 构造一个独立的累加器
    - accumulate(acc, record) 返回新的累加器（允许就地修改后返回自身）
    - 返回的 dict 保持 key 首次出现的顺序，后续稳定排序依赖这一点
    """
    out: Dict[K, V] = {}
    for record in records:
        k = key_fn(record)
        acc = out[k] if k in out else initial(k)
        out[k] = accumulate(acc, record)
    return out


def pct(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return (numerator / denominator) * 100


def growth_pct(current: float, previous: float) -> float:
    """上一期 > 0 时按比例算；否则本期有值记 100，都为 0 记 0。"""
    if previous > 0:
        return ((current - previous) / previous) * 100
    return 100.0 if current > 0 else 0.0


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
