# pbi_recon/tools/recon/agg/base.py
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence
import logging

import pandas as pd

from ..config import AppConfig
from ..dto import AggregateBucket, OrderRecord, ReconQuery
from ..loader import DataRepository

logger = logging.getLogger(__name__)

KeyFn = Callable[[OrderRecord], str]


class IModeHandler(Protocol):
    """Contratos de los handlers por modo."""
    def run(self, repo: DataRepository, q: ReconQuery) -> List[Dict[str, Any]]: ...


def aggregate_by(data: Sequence[OrderRecord], key_fn: KeyFn, *, sort_keys: bool = False) -> List[AggregateBucket]:
    """Agrupa órdenes por key_fn sumando item-price-eur (total) y quantity (units).

    Un solo recorrido; las claves salen en orden de primera aparición salvo
    sort_keys=True (orden lexicográfico ascendente). Sin filas no hay bucket.
    """
    if not data:
        return []

    df = pd.DataFrame(
        {
            "key": [key_fn(rec) for rec in data],
            "total": [rec.item_price_eur for rec in data],
            "units": [rec.quantity for rec in data],
        }
    )
    grp = df.groupby("key", sort=sort_keys).agg(total=("total", "sum"), units=("units", "sum")).reset_index()

    return [
        AggregateBucket(key=str(key), total=float(total), units=int(units))
        for key, total, units in grp.itertuples(index=False, name=None)
    ]


def buckets_to_records(buckets: Sequence[AggregateBucket], key_name: str) -> List[Dict[str, Any]]:
    """Serializa buckets renombrando 'key' al nombre de la agrupación."""
    return [{key_name: b.key, "total": b.total, "units": b.units} for b in buckets]


def get_handler(mode: str, cfg: Optional[AppConfig] = None) -> IModeHandler:
    """Devuelve el handler adecuado para el modo."""
    if mode == "by_asin":
        from .asins import AsinsHandler
        return AsinsHandler()
    if mode == "by_marketplace":
        from .marketplaces import MarketplacesHandler
        return MarketplacesHandler()
    if mode == "over_time":
        from .over_time import OverTimeHandler
        return OverTimeHandler()
    if mode == "comparison":
        from .comparison import ComparisonHandler
        return ComparisonHandler()
    if mode == "missing_asins":
        from .comparison import MissingAsinsHandler
        return MissingAsinsHandler()
    if mode == "summary":
        from .comparison import SummaryHandler
        return SummaryHandler(cfg)
    if mode == "drilldown":
        from .drilldown import DrilldownHandler
        return DrilldownHandler()
    if mode == "unique_values":
        from .drilldown import UniqueValuesHandler
        return UniqueValuesHandler()
    raise ValueError(f"Modo no soportado: {mode}")
