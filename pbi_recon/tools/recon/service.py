# pbi_recon/tools/recon/service.py
from __future__ import annotations

from dataclasses import replace
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence
import logging

from .agg.base import get_handler
from .config import AppConfig
from .dto import ReconQuery, ReconResult
from .exceptions import InvalidParam, ReconError
from .formatters import to_error, to_result
from .loader import DataRepository, Source, ingest_metadata, ingest_orders, ingest_pbi
from .schema import FILE_KINDS
from .validators import validate_query

logger = logging.getLogger(__name__)

_INGESTORS: Dict[str, Callable[[Source, Optional[AppConfig]], Awaitable[Sequence[Any]]]] = {
    "orders": ingest_orders,
    "metadata": ingest_metadata,
    "pbi": ingest_pbi,
}

# Datasets que necesita cada modo para producir datos
REQUIRED_DATASETS: Dict[str, tuple[str, ...]] = {
    "by_asin": ("orders",),
    "by_marketplace": ("orders",),
    "over_time": ("orders",),
    "comparison": ("orders", "pbi"),
    "missing_asins": ("orders", "pbi"),
    "summary": ("orders", "pbi"),
    "drilldown": ("metadata", "pbi"),
}


class ReconSession:
    """Estado de una sesión de trabajo: las tres colecciones cargadas.

    Cada carga reemplaza solo su colección. Si una carga falla se registra
    last_error y el resto del estado queda intacto.
    """

    def __init__(self, cfg: Optional[AppConfig] = None) -> None:
        self.cfg = cfg or AppConfig()
        self.repo = DataRepository()
        self.loaded: Dict[str, bool] = dict.fromkeys(FILE_KINDS, False)
        self.last_error: Optional[str] = None

    async def load(self, kind: str, source: Source) -> int:
        """Ingresa un archivo del tipo dado; devuelve cuántos registros quedaron."""
        ingest = _INGESTORS.get(kind)
        if ingest is None:
            raise InvalidParam(f"Tipo de archivo no soportado: {kind}")

        self.last_error = None
        try:
            records = await ingest(source, self.cfg)
        except ReconError as exc:
            self.last_error = str(exc)
            logger.error("Fallo al cargar archivo %s: %s", kind, exc)
            raise

        self.repo = replace(self.repo, **{kind: tuple(records)})
        self.loaded[kind] = True
        return len(records)

    async def load_orders(self, source: Source) -> int:
        return await self.load("orders", source)

    async def load_metadata(self, source: Source) -> int:
        return await self.load("metadata", source)

    async def load_pbi(self, source: Source) -> int:
        return await self.load("pbi", source)

    def missing_datasets(self, q: ReconQuery) -> List[str]:
        needed = REQUIRED_DATASETS.get(q.mode, ())
        if q.mode == "unique_values" and q.dataset:
            needed = (q.dataset,)
        return [kind for kind in needed if not self.loaded[kind]]

    def reset(self) -> None:
        self.repo = DataRepository()
        self.loaded = dict.fromkeys(FILE_KINDS, False)
        self.last_error = None

    def query(self, q: ReconQuery) -> ReconResult:
        return run_recon_query(self, q)


def run_recon_query(session: ReconSession, q: ReconQuery) -> ReconResult:
    """
    Punto de entrada del core. Orquesta:
    validación -> datasets -> handler -> payload (ReconResult).
    """
    try:
        validate_query(q)

        missing = session.missing_datasets(q)
        if missing:
            logger.warning("Datasets sin cargar para mode=%s: %s", q.mode, missing)
            return to_result(q, data=[], warnings=[f"Dataset '{kind}' no cargado." for kind in missing])

        handler = get_handler(q.mode, session.cfg)
        data: List[Dict[str, Any]] = handler.run(session.repo, q)
        return to_result(q, data=data)

    except ReconError as re_:
        logger.exception("Error de dominio en recon service.")
        return to_error(q, str(re_))
    except Exception as ex:
        logger.exception("Fallo no controlado en recon service.")
        return to_error(q, f"Unexpected error: {ex}")
