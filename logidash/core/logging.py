# logidash/core/logging.py
import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """
    极简统一日志：
    - 根 logger 设级别
    - 单一 stdout handler，避免重复输出
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    # 清已有 handlers，避免重复
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    fmt = "%(asctime)s %(levelname)s %(name)s %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    # 拉 feed 时 httpx 每次请求都会打 INFO，非 DEBUG 下压到 WARNING
    logging.getLogger("httpx").setLevel(
        logging.INFO if level.upper() == "DEBUG" else logging.WARNING
    )
