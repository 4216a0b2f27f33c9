# pbi_recon/tools/recon/parsers.py
"""Parsers de fila: fila cruda (columna -> texto) a registro tipado, o None.

Un None significa fila rechazada: el llamador la descarta sin levantar error.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from .dto import OrderRecord, PBIRecord
from .schema import ORDER_COLS, PBI_COLS


def _pick(row: Mapping[str, Any], cols: tuple[str, ...]) -> dict[str, Any]:
    # Solo columnas conocidas; las ausentes quedan fuera para que pydantic las marque
    return {c: row[c] for c in cols if c in row}


def parse_order_row(row: Mapping[str, Any]) -> Optional[OrderRecord]:
    try:
        return OrderRecord.model_validate(_pick(row, ORDER_COLS))
    except PydanticValidationError:
        return None


def parse_pbi_row(row: Mapping[str, Any]) -> Optional[PBIRecord]:
    try:
        return PBIRecord.model_validate(_pick(row, PBI_COLS))
    except PydanticValidationError:
        return None
