# pbi_recon/tools/recon/validators.py
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence

from .dto import AsinMetadata, ReconQuery
from .exceptions import InvalidParam
from .schema import METADATA_REQUIRED_COLS
from .value_parser import clean_text


# —— Metadata ——

def validate_metadata_headers(headers: Sequence[Optional[str]]) -> Optional[str]:
    """Devuelve un mensaje nombrando las columnas faltantes, o None si están todas.

    La comparación es sensible a mayúsculas, tras recortar espacios.
    """
    missing = missing_metadata_columns(headers)
    if missing:
        return f"Faltan columnas requeridas: {', '.join(missing)}"
    return None


def missing_metadata_columns(headers: Iterable[Optional[str]]) -> list[str]:
    present = {h.strip() for h in headers if isinstance(h, str)}
    return [c for c in METADATA_REQUIRED_COLS if c not in present]


def validate_metadata_row(row: Mapping[str, Any]) -> bool:
    """True si todos los campos requeridos están presentes y no vacíos."""
    return all(clean_text(row.get(c)) for c in METADATA_REQUIRED_COLS)


def normalize_metadata_row(row: Mapping[str, Any]) -> AsinMetadata:
    """Recorta y copia los campos; asume que la fila ya pasó validate_metadata_row."""
    return AsinMetadata.model_validate({c: clean_text(row.get(c)) for c in METADATA_REQUIRED_COLS})


# —— Queries ——

# Campos consultables por dataset para mode="unique_values" (alias de columna CSV)
UNIQUE_VALUE_FIELDS: dict[str, set[str]] = {
    "orders": {"asin", "order-status", "sales-channel", "date"},
    "metadata": {"asin", "brand", "category", "subcategory", "product-type", "client"},
    "pbi": {"ASIN"},
}


def validate_time_grain(q: ReconQuery) -> None:
    if q.time_grain and q.mode != "over_time":
        raise InvalidParam("time_grain solo aplica cuando mode='over_time'.")


def validate_unique_values(q: ReconQuery) -> None:
    if q.mode != "unique_values":
        return
    if not q.dataset or not q.field:
        raise InvalidParam("dataset y field son requeridos cuando mode='unique_values'.")
    allowed = UNIQUE_VALUE_FIELDS[q.dataset]
    if q.field not in allowed:
        raise InvalidParam(f"field='{q.field}' no soportado para dataset='{q.dataset}'.")


def validate_query(q: ReconQuery) -> None:
    """Valida aspectos semánticos de la query."""
    validate_time_grain(q)
    validate_unique_values(q)
