# pbi_recon/tools/recon/agg/marketplaces.py
from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..dto import AggregateBucket, OrderRecord, ReconQuery
from ..filters import filter_orders_by_status
from ..loader import DataRepository
from .base import IModeHandler, aggregate_by, buckets_to_records


def aggregate_by_marketplace(data: Sequence[OrderRecord]) -> List[AggregateBucket]:
    return aggregate_by(data, lambda rec: rec.sales_channel)


class MarketplacesHandler(IModeHandler):
    """Desglose por sales-channel (marketplace)."""

    def run(self, repo: DataRepository, q: ReconQuery) -> List[Dict[str, Any]]:
        orders = filter_orders_by_status(repo.orders, q.order_status)
        return buckets_to_records(aggregate_by_marketplace(orders), "marketplace")
