# pbi_recon/tools/recon/agg/drilldown.py
from __future__ import annotations

from typing import Any, Dict, List

from ..dto import ReconQuery
from ..filters import filter_pbi_by_metadata, get_unique_values, join_pbi_metadata
from ..loader import DataRepository
from .base import IModeHandler


class DrilldownHandler(IModeHandler):
    """PBI filtrado por atributos de metadata (brand, category, client, ...)."""

    def run(self, repo: DataRepository, q: ReconQuery) -> List[Dict[str, Any]]:
        selected = filter_pbi_by_metadata(repo.pbi, repo.metadata, q.metadata_filter)
        return join_pbi_metadata(selected, repo.metadata)


class UniqueValuesHandler(IModeHandler):
    """Opciones para los selects de filtros."""

    def run(self, repo: DataRepository, q: ReconQuery) -> List[Dict[str, Any]]:
        records = {"orders": repo.orders, "metadata": repo.metadata, "pbi": repo.pbi}[q.dataset or "orders"]
        return [{"value": v} for v in get_unique_values(records, q.field or "")]
