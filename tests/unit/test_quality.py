from __future__ import annotations

import logging

from logidash.services.analytics.quality import check_zero_sales


def test_zero_sales_below_threshold(sample_orders):
    rep = check_zero_sales(sample_orders, warn_ratio=0.2)
    assert rep.total_rows == 6
    assert rep.zero_sales_rows == 0
    assert rep.zero_sales_ratio == 0.0
    assert rep.warnings == []


def test_zero_sales_warning(order, caplog):
    rows = [order(total_sales=0.0), order(total_sales=0.0), order(total_sales=10.0)]
    with caplog.at_level(logging.WARNING, logger="logidash.quality"):
        rep = check_zero_sales(rows, warn_ratio=0.2)

    assert rep.zero_sales_rows == 2
    assert len(rep.warnings) == 1
    assert "zero_sales_ratio" in rep.warnings[0]
    assert any("zero_sales_ratio" in r.getMessage() for r in caplog.records)


def test_quality_report_does_not_mutate_rows(order):
    rows = [order(total_sales=0.0)]
    check_zero_sales(rows, warn_ratio=0.0)
    assert rows[0].total_sales == 0.0


def test_empty_dataset():
    rep = check_zero_sales([], warn_ratio=0.2)
    assert rep.total_rows == 0
    assert rep.warnings == []
