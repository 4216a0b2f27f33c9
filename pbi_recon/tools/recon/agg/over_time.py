# pbi_recon/tools/recon/agg/over_time.py
from __future__ import annotations

from typing import Any, Dict, List, Sequence
import logging

from ..dto import AggregateBucket, OrderRecord, ReconQuery
from ..filters import filter_orders_by_status
from ..loader import DataRepository
from .base import IModeHandler, KeyFn, aggregate_by, buckets_to_records

logger = logging.getLogger(__name__)


def _resolve_period_key(grain: str) -> KeyFn:
    """Mapea el grain lógico a la clave de agrupación sobre la fecha ISO."""
    g = (grain or "day").strip().lower()
    if g in ("month", "monthly"):
        return lambda rec: rec.date[:7]  # ej. '2025-03'
    return lambda rec: rec.date          # ej. '2025-03-14'


def aggregate_by_date(data: Sequence[OrderRecord], time_grain: str = "day") -> List[AggregateBucket]:
    """Totales por fecha (o mes), en orden ascendente.

    Las fechas son ISO, así que el orden lexicográfico es el cronológico.
    """
    return aggregate_by(data, _resolve_period_key(time_grain), sort_keys=True)


class OverTimeHandler(IModeHandler):
    """Serie diaria/mensual de ventas y unidades."""

    def run(self, repo: DataRepository, q: ReconQuery) -> List[Dict[str, Any]]:
        grain = q.time_grain or "day"
        orders = filter_orders_by_status(repo.orders, q.order_status)
        if not orders:
            return []
        logger.debug("Serie over_time grain=%s sobre %d órdenes", grain, len(orders))
        return buckets_to_records(aggregate_by_date(orders, grain), "date" if grain == "day" else "period")
