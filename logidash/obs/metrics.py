# logidash/obs/metrics.py
import time

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware

http_request_duration = Histogram(
    "logidash_http_request_duration_seconds",
    "HTTP request duration seconds",
    ["method", "path", "code"],
)

# feed 加载结果：ok / error
feed_loads_total = Counter("logidash_feed_loads_total", "Feed load attempts", ["result"])
# 行数：loaded = 进入数据集；skipped = 归一化阶段丢弃
feed_rows_total = Counter("logidash_feed_rows_total", "Feed rows processed", ["kind"])
dataset_rows = Gauge("logidash_dataset_rows", "Rows in the current dataset snapshot")


def record_feed_load(*, ok: bool, loaded: int = 0, skipped: int = 0) -> None:
    feed_loads_total.labels("ok" if ok else "error").inc()
    if not ok:
        return
    feed_rows_total.labels("loaded").inc(loaded)
    feed_rows_total.labels("skipped").inc(skipped)
    dataset_rows.set(loaded)


class PrometheusMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        http_request_duration.labels(
            request.method, request.url.path, str(response.status_code)
        ).observe(elapsed)
        return response


router = APIRouter(tags=["metrics"])


@router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)
