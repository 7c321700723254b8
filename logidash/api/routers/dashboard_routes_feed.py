# logidash/api/routers/dashboard_routes_feed.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from logidash.api.deps import get_store
from logidash.api.problem import raise_502
from logidash.api.routers.dashboard_schemas import FeedStatusResponse
from logidash.services.feed.sheet_client import FeedError
from logidash.services.feed.store import DatasetStore


def _status(store: DatasetStore) -> FeedStatusResponse:
    snap = store.snapshot
    if snap is None:
        return FeedStatusResponse(
            ok=True,
            loaded=False,
            source=store.source,
            last_error=store.last_error,
        )
    return FeedStatusResponse(
        ok=True,
        loaded=True,
        source=snap.source,
        rows=len(snap.records),
        skipped_rows=snap.skipped_rows,
        skip_reasons=snap.skip_reasons,
        loaded_at=snap.loaded_at,
        quality_warnings=list(snap.quality.warnings) if snap.quality else [],
        last_error=store.last_error,
    )


def register(router: APIRouter) -> None:
    @router.get("/feed", response_model=FeedStatusResponse)
    def dashboard_feed_status(store: DatasetStore = Depends(get_store)) -> FeedStatusResponse:
        return _status(store)

    @router.post("/feed/refresh", response_model=FeedStatusResponse)
    async def dashboard_feed_refresh(store: DatasetStore = Depends(get_store)) -> FeedStatusResponse:
        """
        手动刷新数据源。
        失败时旧快照保留不动，返回 502 feed_error。
        """
        try:
            await store.refresh()
        except FeedError as e:
            raise_502(
                "feed_error",
                "failed to refresh dataset from feed",
                details=[{"type": "feed", "reason": str(e)}],
            )
        return _status(store)
