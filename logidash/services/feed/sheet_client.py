# logidash/services/feed/sheet_client.py
from __future__ import annotations

import csv
import logging
from io import StringIO
from pathlib import Path
from typing import Dict, List, Optional

import httpx

logger = logging.getLogger("logidash.feed")


class FeedError(Exception):
    pass


def parse_csv_text(text: str) -> List[Dict[str, str]]:
    if not text or not text.strip():
        raise FeedError("feed returned empty data")

    reader = csv.DictReader(StringIO(text))
    try:
        rows = [
            {(k or "").strip(): v for k, v in row.items()}
            for row in reader
            if any((v or "").strip() for v in row.values() if isinstance(v, str))
        ]
    except csv.Error as e:
        raise FeedError(f"malformed csv in feed: {e}") from e
    if not rows:
        raise FeedError("no data rows found in feed")
    return rows


async def fetch_csv_text(
    url: str,
    *,
    timeout: float = 15.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    拉取 CSV 文本（Google Sheets gviz 导出）。
    非 2xx / 网络异常统一包装为 FeedError。
    """
    logger.info("[feed] fetching %s", url)
    try:
        async with httpx.AsyncClient(
            timeout=timeout, follow_redirects=True, transport=transport
        ) as client:
            resp = await client.get(url)
    except httpx.HTTPError as e:
        raise FeedError(f"failed to fetch feed: {e}") from e

    if resp.status_code >= 400:
        raise FeedError(f"failed to fetch feed: {resp.status_code} {resp.reason_phrase}")

    logger.info("[feed] received %d bytes", len(resp.content))
    return resp.text


def read_csv_file(path: str) -> str:
    p = Path(path)
    if not p.is_file():
        raise FeedError(f"feed file not found: {path}")
    try:
        return p.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise FeedError(f"feed file is not valid utf-8: {path}") from e
    except OSError as e:
        raise FeedError(f"failed to read feed file {path}: {e}") from e


async def load_feed_rows(*, url: str = "", path: str = "", timeout: float = 15.0) -> List[Dict[str, str]]:
    if path:
        text = read_csv_file(path)
    elif url:
        text = await fetch_csv_text(url, timeout=timeout)
    else:
        raise FeedError("no feed source configured (FEED_PATH / FEED_URL)")
    return parse_csv_text(text)
