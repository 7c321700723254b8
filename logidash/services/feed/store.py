# logidash/services/feed/store.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from logidash.obs.metrics import record_feed_load
from logidash.services.analytics.quality import QualityReport, check_zero_sales
from logidash.services.analytics.types import OrderRecord
from logidash.services.feed.normalize import normalize_rows
from logidash.services.feed.sheet_client import FeedError, load_feed_rows

logger = logging.getLogger("logidash.feed")


@dataclass(frozen=True)
class DatasetSnapshot:
    """一次加载的不可变快照；刷新时整体替换。"""

    records: Tuple[OrderRecord, ...]
    source: str
    loaded_at: datetime
    skipped_rows: int = 0
    skip_reasons: Dict[str, int] = field(default_factory=dict)
    quality: Optional[QualityReport] = None


class DatasetUnavailable(Exception):
    pass


class DatasetStore:
    """
    进程内数据集：
    - 持有当前快照（只读 tuple），聚合层每次请求直接拿快照计算
    - refresh() 串行化，失败时保留旧快照
    """

    def __init__(
        self,
        *,
        feed_url: str = "",
        feed_path: str = "",
        timeout: float = 15.0,
        zero_sales_warn_ratio: float = 0.2,
    ) -> None:
        self.feed_url = feed_url
        self.feed_path = feed_path
        self.timeout = timeout
        self.zero_sales_warn_ratio = zero_sales_warn_ratio
        self._snapshot: Optional[DatasetSnapshot] = None
        self._lock = asyncio.Lock()
        self.last_error: Optional[str] = None

    @property
    def source(self) -> str:
        return self.feed_path or self.feed_url

    @property
    def snapshot(self) -> Optional[DatasetSnapshot]:
        return self._snapshot

    def is_loaded(self) -> bool:
        return self._snapshot is not None

    def records(self) -> Tuple[OrderRecord, ...]:
        snap = self._snapshot
        if snap is None:
            raise DatasetUnavailable("dataset not loaded")
        return snap.records

    def replace(
        self,
        records: Sequence[OrderRecord],
        *,
        source: str = "memory",
        skipped_rows: int = 0,
        skip_reasons: Optional[Dict[str, int]] = None,
    ) -> DatasetSnapshot:
        rows = tuple(records)
        quality = check_zero_sales(rows, warn_ratio=self.zero_sales_warn_ratio)
        snap = DatasetSnapshot(
            records=rows,
            source=source,
            loaded_at=datetime.now(timezone.utc),
            skipped_rows=skipped_rows,
            skip_reasons=dict(skip_reasons or {}),
            quality=quality,
        )
        self._snapshot = snap
        return snap

    async def refresh(self) -> DatasetSnapshot:
        async with self._lock:
            try:
                raw_rows: List[Dict[str, str]] = await load_feed_rows(
                    url=self.feed_url, path=self.feed_path, timeout=self.timeout
                )
                result = normalize_rows(raw_rows)
                # 全部行都被跳过时视为失败，旧快照保持不动
                if not result.records:
                    raise FeedError(
                        f"no usable rows in feed (skipped={result.skipped}, reasons={result.skip_reasons})"
                    )
            except FeedError as e:
                self.last_error = str(e)
                record_feed_load(ok=False)
                logger.error("[feed] load failed source=%s err=%s", self.source, e)
                raise

            snap = self.replace(
                result.records,
                source=self.source,
                skipped_rows=result.skipped,
                skip_reasons=result.skip_reasons,
            )
            self.last_error = None
            record_feed_load(ok=True, loaded=len(snap.records), skipped=result.skipped)
            logger.info(
                "[feed] loaded rows=%d skipped=%d reasons=%s",
                len(snap.records),
                result.skipped,
                result.skip_reasons,
            )
            return snap
