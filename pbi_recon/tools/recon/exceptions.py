# pbi_recon/tools/recon/exceptions.py
from __future__ import annotations

from typing import Sequence


class ReconError(Exception):
    """Base para errores del dominio de reconciliación."""


class IngestionError(ReconError):
    """El archivo no se pudo tokenizar como CSV (encoding/estructura)."""


class ValidationError(ReconError):
    """El archivo es parseable pero semánticamente inválido."""


class MissingColumns(ValidationError):
    """Faltan columnas requeridas en el encabezado."""

    def __init__(self, message: str, missing: Sequence[str]) -> None:
        super().__init__(message)
        self.missing = list(missing)


class EmptyDataset(ValidationError):
    """Ninguna fila válida sobrevivió al filtrado."""


class InvalidParam(ReconError):
    """Parámetro inválido o faltante."""
