# pbi_recon/tools/recon/summary.py
from __future__ import annotations

from typing import Optional, Sequence

from .config import AppConfig
from .dto import ComparisonData, ComparisonSummary
from .reconcile import discrepancy


def summarize_comparison(comparison: Sequence[ComparisonData], cfg: Optional[AppConfig] = None) -> ComparisonSummary:
    """Totales globales del cruce.

    Las discrepancias globales usan la misma regla que por ASIN (0 si el lado
    de órdenes suma <= 0). Un ASIN cuenta como fuera de umbral si |sales| o
    |units| supera cfg.discrepancy_threshold.
    """
    cfg = cfg or AppConfig()
    order_total = sum(row.total for row in comparison)
    order_units = sum(row.units for row in comparison)
    pbi_sales = sum(row.pbi_sales for row in comparison)
    pbi_units = sum(row.pbi_units for row in comparison)

    over = sum(
        1
        for row in comparison
        if abs(row.sales_discrepancy) > cfg.discrepancy_threshold
        or abs(row.units_discrepancy) > cfg.discrepancy_threshold
    )

    return ComparisonSummary(
        asin_count=len(comparison),
        order_total=order_total,
        order_units=order_units,
        pbi_sales=pbi_sales,
        pbi_units=pbi_units,
        sales_discrepancy=discrepancy(order_total, pbi_sales),
        units_discrepancy=discrepancy(order_units, pbi_units),
        asins_over_threshold=over,
        asins_without_pbi=sum(1 for row in comparison if not row.pbi_found),
        threshold=cfg.discrepancy_threshold,
    )
