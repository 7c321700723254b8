# logidash/services/analytics/quality.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from logidash.services.analytics.types import OrderRecord

logger = logging.getLogger("logidash.quality")


@dataclass(frozen=True)
class QualityReport:
    total_rows: int
    zero_sales_rows: int
    zero_sales_ratio: float
    warnings: List[str] = field(default_factory=list)


def check_zero_sales(records: Sequence[OrderRecord], *, warn_ratio: float) -> QualityReport:
    """
    数据质量检查（与聚合口径分离）：
    零销售额行占比超过 warn_ratio 时给出告警，只报告不修正。
    """
    total = len(records)
    zero = sum(1 for r in records if not r.total_sales)
    ratio = (zero / total) if total else 0.0

    warnings: List[str] = []
    if total and ratio > warn_ratio:
        msg = f"zero_sales_ratio={ratio:.2%} exceeds {warn_ratio:.2%} ({zero}/{total} rows)"
        warnings.append(msg)
        logger.warning("[quality] %s", msg)

    return QualityReport(
        total_rows=total,
        zero_sales_rows=zero,
        zero_sales_ratio=ratio,
        warnings=warnings,
    )
