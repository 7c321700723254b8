from __future__ import annotations

from .order_status import (
    CANCELED_STATUSES,
    DELIVERED_STATUSES,
    RETURN_FAMILY,
    OrderStatus,
    is_canceled,
    is_delivered,
    is_pending,
    is_return_family,
)

__all__ = [
    "OrderStatus",
    "RETURN_FAMILY",
    "DELIVERED_STATUSES",
    "CANCELED_STATUSES",
    "is_return_family",
    "is_delivered",
    "is_canceled",
    "is_pending",
]
