from __future__ import annotations

from .filters import filter_orders
from .grouping import (
    Dimension,
    group_by,
    group_by_partner,
    group_by_payment,
    group_by_state,
    state_shipping_comparison,
)
from .highlights import compute_highlights, compute_insights
from .kpi import summarize, summarize_canceled
from .reduce import reduce_by_key
from .timeseries import bucket_orders
from .types import FilterSpec, Granularity, OrderRecord

__all__ = [
    "OrderRecord",
    "FilterSpec",
    "Granularity",
    "Dimension",
    "filter_orders",
    "summarize",
    "summarize_canceled",
    "group_by",
    "group_by_state",
    "group_by_partner",
    "group_by_payment",
    "state_shipping_comparison",
    "bucket_orders",
    "compute_highlights",
    "compute_insights",
    "reduce_by_key",
]
