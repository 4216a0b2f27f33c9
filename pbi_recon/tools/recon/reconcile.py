# pbi_recon/tools/recon/reconcile.py
"""Cruce de totales de órdenes contra el extracto PBI por ASIN."""
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence

from .agg.asins import aggregate_by_asin
from .dto import ComparisonData, OrderRecord, PBILookup, PBIRecord


def discrepancy(reference: float, observed: float) -> float:
    """Diferencia relativa en % de observed contra reference.

    Si reference <= 0 la discrepancia es exactamente 0, sea cual sea observed.
    """
    if reference > 0:
        return (observed - reference) / reference * 100
    return 0.0


def index_pbi(pbi: Iterable[PBIRecord]) -> Dict[str, PBIRecord]:
    """ASIN -> registro PBI; ante duplicados gana el primero."""
    index: Dict[str, PBIRecord] = {}
    for rec in pbi:
        index.setdefault(rec.asin, rec)
    return index


def lookup_pbi(index: Mapping[str, PBIRecord], asin: str) -> PBILookup:
    rec = index.get(asin)
    if rec is None:
        return PBILookup(found=False)
    return PBILookup(found=True, sales=rec.sales, units=rec.units)


def compare_data(orders: Sequence[OrderRecord], pbi: Sequence[PBIRecord]) -> List[ComparisonData]:
    """Una fila por ASIN de las órdenes, en el orden de la agregación por ASIN."""
    index = index_pbi(pbi)
    out: List[ComparisonData] = []
    for bucket in aggregate_by_asin(orders):
        hit = lookup_pbi(index, bucket.key)
        out.append(
            ComparisonData(
                asin=bucket.key,
                total=bucket.total,
                units=bucket.units,
                pbi_sales=hit.sales,
                pbi_units=hit.units,
                pbi_found=hit.found,
                sales_discrepancy=discrepancy(bucket.total, hit.sales),
                units_discrepancy=discrepancy(bucket.units, hit.units),
            )
        )
    return out


def find_missing_asins(
    orders: Iterable[OrderRecord], comparison: Iterable[ComparisonData | PBIRecord]
) -> List[str]:
    """ASINs de las órdenes ausentes del conjunto dado (orden ascendente).

    El conjunto puede ser la comparación o directamente el extracto PBI.
    """
    known = {row.asin for row in comparison}
    return sorted({o.asin for o in orders} - known)


def find_asins_without_pbi(comparison: Iterable[ComparisonData]) -> List[str]:
    """ASINs comparados que no tienen entrada en el PBI."""
    return sorted(row.asin for row in comparison if not row.pbi_found)
