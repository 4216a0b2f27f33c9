# pbi_recon/tools/recon/loader.py
from __future__ import annotations

import asyncio
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Callable, Dict, List, Optional, Tuple, TypeVar, Union

import pandas as pd

from .config import AppConfig
from .dto import AsinMetadata, OrderRecord, PBIRecord
from .exceptions import EmptyDataset, IngestionError, MissingColumns
from .parsers import parse_order_row, parse_pbi_row
from .validators import (
    missing_metadata_columns,
    normalize_metadata_row,
    validate_metadata_headers,
    validate_metadata_row,
)

logger = logging.getLogger(__name__)

Source = Union[str, Path, bytes, IO[str], IO[bytes]]
T = TypeVar("T")


# ------------------------- Helpers de lectura ---------------------------------

def _describe(source: Source) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    if isinstance(source, bytes):
        return f"<bytes:{len(source)}>"
    return getattr(source, "name", None) or type(source).__name__


def read_frame(source: Source, cfg: Optional[AppConfig] = None) -> pd.DataFrame:
    """Lee el CSV completo como texto (sin inferencia de tipos) y recorta encabezados.

    Las líneas vacías y las filas con más campos que el encabezado se ignoran.
    Un archivo sin contenido devuelve un DF vacío sin columnas.
    Fallos de tokenización/encoding -> IngestionError.
    """
    cfg = cfg or AppConfig()
    buf: Any = io.BytesIO(source) if isinstance(source, bytes) else source
    try:
        df = pd.read_csv(
            buf,
            sep=cfg.delimiter,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            on_bad_lines="skip",  # filas con columnas de más: rechazo a nivel fila
            encoding=cfg.encoding,
        )
    except pd.errors.EmptyDataError:
        logger.info("Archivo vacío: %s", _describe(source))
        return pd.DataFrame()
    except (pd.errors.ParserError, UnicodeDecodeError, FileNotFoundError, IsADirectoryError) as exc:
        raise IngestionError(f"No se pudo parsear {_describe(source)}: {exc}") from exc

    df.columns = [str(c).strip() for c in df.columns]
    return df


def _rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    if df.empty:
        return []
    return df.to_dict(orient="records")


def _collect(rows: List[Dict[str, Any]], parse: Callable[[Dict[str, Any]], Optional[T]]) -> List[T]:
    out: List[T] = []
    for row in rows:
        rec = parse(row)
        if rec is not None:
            out.append(rec)
    return out


# ------------------------- Carga por tipo de archivo (sync) -------------------

def load_orders(source: Source, cfg: Optional[AppConfig] = None) -> List[OrderRecord]:
    """Órdenes válidas del archivo; filas inválidas se descartan en silencio."""
    rows = _rows(read_frame(source, cfg))
    orders = _collect(rows, parse_order_row)
    logger.info("Órdenes cargadas desde %s: %d válidas", _describe(source), len(orders))
    if len(orders) != len(rows):
        logger.debug("Órdenes descartadas: %d", len(rows) - len(orders))
    return orders


def load_pbi(source: Source, cfg: Optional[AppConfig] = None) -> List[PBIRecord]:
    """Registros PBI válidos del archivo; filas inválidas se descartan en silencio."""
    rows = _rows(read_frame(source, cfg))
    records = _collect(rows, parse_pbi_row)
    logger.info("PBI cargado desde %s: %d válidos", _describe(source), len(records))
    if len(records) != len(rows):
        logger.debug("Filas PBI descartadas: %d", len(rows) - len(records))
    return records


def load_metadata(source: Source, cfg: Optional[AppConfig] = None) -> List[AsinMetadata]:
    """Metadata del archivo. Todo o nada: encabezados faltantes o cero filas válidas
    abortan la carga.
    """
    df = read_frame(source, cfg)

    headers = list(df.columns)
    header_error = validate_metadata_headers(headers)
    if header_error:
        raise MissingColumns(header_error, missing_metadata_columns(headers))

    metadata = [normalize_metadata_row(row) for row in _rows(df) if validate_metadata_row(row)]
    if not metadata:
        raise EmptyDataset("No se encontraron filas de metadata válidas.")

    logger.info("Metadata cargada desde %s: %d ASINs", _describe(source), len(metadata))
    return metadata


# ------------------------- Ingesta asíncrona (una sola resolución) ------------

async def ingest_orders(source: Source, cfg: Optional[AppConfig] = None) -> List[OrderRecord]:
    return await asyncio.to_thread(load_orders, source, cfg)


async def ingest_metadata(source: Source, cfg: Optional[AppConfig] = None) -> List[AsinMetadata]:
    return await asyncio.to_thread(load_metadata, source, cfg)


async def ingest_pbi(source: Source, cfg: Optional[AppConfig] = None) -> List[PBIRecord]:
    return await asyncio.to_thread(load_pbi, source, cfg)


# ------------------------- Repositorio de colecciones -------------------------

@dataclass(frozen=True)
class DataRepository:
    """Repositorio inmutable con las tres colecciones cargadas."""
    orders: Tuple[OrderRecord, ...] = ()
    metadata: Tuple[AsinMetadata, ...] = ()
    pbi: Tuple[PBIRecord, ...] = ()
