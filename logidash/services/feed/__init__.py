from __future__ import annotations

from .normalize import normalize_rows, normalize_status, parse_order_date
from .sheet_client import FeedError, load_feed_rows
from .store import DatasetSnapshot, DatasetStore, DatasetUnavailable

__all__ = [
    "DatasetSnapshot",
    "DatasetStore",
    "DatasetUnavailable",
    "FeedError",
    "load_feed_rows",
    "normalize_rows",
    "normalize_status",
    "parse_order_date",
]
