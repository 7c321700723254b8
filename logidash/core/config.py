# logidash/core/config.py
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    全局应用配置（环境变量 / .env）
    """

    # 运行环境
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # 数据源：FEED_PATH 优先，其次 FEED_URL（Google Sheets CSV 导出地址）
    FEED_URL: str = Field(
        default="",
        description="CSV 数据源地址，例如 https://docs.google.com/spreadsheets/d/<id>/gviz/tq?tqx=out:csv&gid=<gid>",
    )
    FEED_PATH: str = Field(default="", description="本地 CSV 路径（调试 / 离线用）")
    FEED_TIMEOUT_SECONDS: float = Field(default=15.0)
    FEED_LOAD_ON_STARTUP: bool = Field(default=True)

    # 数据质量 / 看板口径
    ZERO_SALES_WARN_RATIO: float = Field(default=0.2)
    BEST_RTO_MIN_ORDERS: int = Field(default=10)

    CORS_ORIGINS: List[str] = Field(
        default=[
            "http://127.0.0.1:5173",
            "http://localhost:5173",
            "http://127.0.0.1:8000",
            "http://localhost:8000",
        ]
    )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> AppSettings:
    """全局单例设置入口。"""
    return AppSettings()
