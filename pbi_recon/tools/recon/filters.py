# pbi_recon/tools/recon/filters.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from .dto import AsinMetadata, MetadataFilter, OrderRecord, PBIRecord


def _field_value(record: Any, field: str) -> Any:
    """Lee un campo por nombre de columna CSV ('product-type', 'ASIN') o atributo."""
    if isinstance(record, Mapping):
        return record.get(field)
    attr = field.replace("-", "_")
    if hasattr(record, attr):
        return getattr(record, attr)
    if isinstance(record, BaseModel):
        for name, info in type(record).model_fields.items():
            if info.alias == field:
                return getattr(record, name)
    return None


def get_unique_values(records: Iterable[Any], field: str) -> List[str]:
    """Valores distintos y no vacíos del campo, ordenados ascendente (para selects)."""
    values = {str(v) for v in (_field_value(rec, field) for rec in records) if v}
    return sorted(values)


def filter_orders_by_status(orders: Sequence[OrderRecord], status: Optional[str]) -> List[OrderRecord]:
    if not status:
        return list(orders)
    return [o for o in orders if o.order_status == status]


def index_metadata(metadata: Iterable[AsinMetadata]) -> Dict[str, AsinMetadata]:
    """ASIN -> metadata; ante duplicados gana el primero."""
    index: Dict[str, AsinMetadata] = {}
    for m in metadata:
        index.setdefault(m.asin, m)
    return index


def _matches(m: AsinMetadata, f: MetadataFilter) -> bool:
    return (
        (not f.brand or m.brand == f.brand)
        and (not f.category or m.category == f.category)
        and (not f.client or m.client == f.client)
        and (not f.subcategory or m.subcategory == f.subcategory)
        and (not f.product_type or m.product_type == f.product_type)
    )


def filter_pbi_by_metadata(
    pbi: Sequence[PBIRecord],
    metadata: Sequence[AsinMetadata],
    selection: Optional[MetadataFilter] = None,
) -> List[PBIRecord]:
    """PBI con metadata conocida que cumple todos los selectores no vacíos.

    Los registros PBI sin metadata se excluyen siempre.
    """
    selection = selection or MetadataFilter()
    index = index_metadata(metadata)
    out: List[PBIRecord] = []
    for rec in pbi:
        m = index.get(rec.asin)
        if m is not None and _matches(m, selection):
            out.append(rec)
    return out


def join_pbi_metadata(pbi: Sequence[PBIRecord], metadata: Sequence[AsinMetadata]) -> List[Dict[str, Any]]:
    """Filas PBI enriquecidas con su metadata (None si el ASIN no tiene)."""
    index = index_metadata(metadata)
    rows: List[Dict[str, Any]] = []
    for rec in pbi:
        row: Dict[str, Any] = rec.model_dump(by_alias=True)
        m = index.get(rec.asin)
        attrs = m.model_dump(by_alias=True, exclude={"asin"}) if m else dict.fromkeys(
            ("brand", "category", "subcategory", "product-type", "client")
        )
        row.update(attrs)
        rows.append(row)
    return rows
