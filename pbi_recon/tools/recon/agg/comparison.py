# pbi_recon/tools/recon/agg/comparison.py
from __future__ import annotations

from typing import Any, Dict, List
import logging

from ..config import AppConfig
from ..dto import ReconQuery
from ..i18n import add_formatted_fields, locale_config
from ..loader import DataRepository
from ..reconcile import compare_data, find_missing_asins
from ..summary import summarize_comparison
from .base import IModeHandler

logger = logging.getLogger(__name__)

_CURRENCY_FIELDS = ("total", "pbi_sales")
_PERCENT_FIELDS = ("sales_discrepancy", "units_discrepancy")


class ComparisonHandler(IModeHandler):
    """Órdenes vs PBI por ASIN. Siempre sobre el total de órdenes (sin filtro de estado)."""

    def run(self, repo: DataRepository, q: ReconQuery) -> List[Dict[str, Any]]:
        rows = [row.model_dump() for row in compare_data(repo.orders, repo.pbi)]
        if q.include_formatted:
            fmt = locale_config(q.locale, q.currency)
            rows = [add_formatted_fields(r, _CURRENCY_FIELDS, _PERCENT_FIELDS, cfg=fmt) for r in rows]
        return rows


class MissingAsinsHandler(IModeHandler):
    """ASINs de órdenes sin ninguna fila en el extracto PBI."""

    def run(self, repo: DataRepository, q: ReconQuery) -> List[Dict[str, Any]]:
        missing = find_missing_asins(repo.orders, repo.pbi)
        if missing:
            logger.warning("ASINs de órdenes ausentes en PBI: %d", len(missing))
        return [{"asin": asin} for asin in missing]


class SummaryHandler(IModeHandler):
    """Panel de resumen del cruce."""

    def __init__(self, cfg: AppConfig | None = None) -> None:
        self._cfg = cfg or AppConfig()

    def run(self, repo: DataRepository, q: ReconQuery) -> List[Dict[str, Any]]:
        summary = summarize_comparison(compare_data(repo.orders, repo.pbi), self._cfg)
        out = summary.model_dump()
        if q.include_formatted:
            fmt = locale_config(q.locale, q.currency)
            out = add_formatted_fields(out, ("order_total", "pbi_sales"), _PERCENT_FIELDS, cfg=fmt)
        return [out]
