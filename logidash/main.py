# logidash/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from logidash.api.routers.dashboard import router as dashboard_router
from logidash.core.config import get_settings
from logidash.core.logging import setup_logging
from logidash.http_problem_handlers import register_exception_handlers
from logidash.obs.metrics import PrometheusMiddleware
from logidash.obs.metrics import router as metrics_router
from logidash.services.feed.sheet_client import FeedError
from logidash.services.feed.store import DatasetStore

settings = get_settings()
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger("logidash")


def build_store() -> DatasetStore:
    return DatasetStore(
        feed_url=settings.FEED_URL,
        feed_path=settings.FEED_PATH,
        timeout=settings.FEED_TIMEOUT_SECONDS,
        zero_sales_warn_ratio=settings.ZERO_SALES_WARN_RATIO,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: DatasetStore = app.state.dataset_store
    if settings.FEED_LOAD_ON_STARTUP and store.source:
        try:
            await store.refresh()
        except FeedError as e:
            # 启动不因数据源失败而中断；接口返回 503，等待手动刷新
            logger.warning("[startup] feed load failed: %s", e)
    else:
        logger.info("[startup] feed load skipped (no source configured or disabled)")
    yield


app = FastAPI(
    title="LogiDash",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)
app.state.dataset_store = build_store()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(PrometheusMiddleware)

register_exception_handlers(app)

# ===========================
#          挂载路由
# ===========================
app.include_router(dashboard_router)
app.include_router(metrics_router)


@app.get("/")
async def root():
    return {"name": "LogiDash", "version": "1.0.0"}


@app.get("/ping")
async def ping():
    return {"status": "ok"}


@app.get("/healthz")
async def healthz():
    return {"status": "ok", "dataset_loaded": app.state.dataset_store.is_loaded()}
