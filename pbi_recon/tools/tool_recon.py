# pbi_recon/tools/tool_recon.py
from __future__ import annotations

from typing import Optional, Literal, Dict, Any
import asyncio
import dataclasses
import logging
from datetime import date, datetime
from decimal import Decimal
import math

import numpy as np
from dotenv import load_dotenv

# === Capa de dominio =========================================================
from .recon.config import AppConfig
from .recon.dto import MetadataFilter, ReconQuery
from .recon.exceptions import ReconError
from .recon.loader import Source
from .recon.service import ReconSession, run_recon_query

load_dotenv()

logger = logging.getLogger(__name__)

# Sesión por defecto (una por proceso)
DEFAULT_SESSION = ReconSession(AppConfig())


# ------------------------------- Helpers -------------------------------------
def _norm_mode(x: Optional[str]) -> Optional[str]:
    if not x:
        return x
    v = x.lower().strip()
    # Normalizamos parametros
    mapping = {
        # by_asin
        "asin": "by_asin",
        "by-asin": "by_asin",
        "por_asin": "by_asin",
        # by_marketplace
        "marketplace": "by_marketplace",
        "by-marketplace": "by_marketplace",
        "sales_channel": "by_marketplace",
        "sales-channel": "by_marketplace",
        # over_time
        "overtime": "over_time",
        "over-time": "over_time",
        "daily": "over_time",
        "by_date": "over_time",
        # comparison
        "compare": "comparison",
        "pbi": "comparison",
        # drilldown
        "drill-down": "drilldown",
        "drill_down": "drilldown",
        # unique_values
        "unique": "unique_values",
        "options": "unique_values",
    }
    return mapping.get(v, v)


def _norm_kind(x: str) -> str:
    v = (x or "").lower().strip()
    mapping = {"order": "orders", "ordenes": "orders", "meta": "metadata", "asin_metadata": "metadata"}
    return mapping.get(v, v)


def _json_safe(obj: Any) -> Any:
    """Convierte recursivamente a tipos JSON-serializables."""
    # escalares especiales
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return float(obj)
    if isinstance(obj, float) and (math.isnan(obj) or math.isinf(obj)):
        return None

    # numpy
    if isinstance(obj, np.generic):
        return _json_safe(obj.item())
    if isinstance(obj, np.ndarray):
        return [_json_safe(x) for x in obj.tolist()]

    # estructuras
    if isinstance(obj, dict):
        return {str(k): _json_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [_json_safe(v) for v in obj]

    # dataclass
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return _json_safe(dataclasses.asdict(obj))

    # pydantic v2
    model_dump = getattr(obj, "model_dump", None)
    if callable(model_dump):
        return _json_safe(model_dump())

    return obj


# --------------------------- Tools públicas -----------------------------------
def load_file(
    kind: Literal["orders", "metadata", "pbi"],
    source: Source,
    session: Optional[ReconSession] = None,
) -> Dict[str, Any]:
    """
    Carga un archivo CSV en la sesión (orders | metadata | pbi).

    No usar dentro de un event loop en curso; ahí usar `await session.load(...)`.

    Retorna:
      dict con llaves: ok, kind, count, loaded (estado de los tres archivos), error.
    """
    sess = session or DEFAULT_SESSION
    kind_norm = _norm_kind(kind)
    try:
        count = asyncio.run(sess.load(kind_norm, source))
    except ReconError as exc:
        return {"ok": False, "kind": kind_norm, "count": 0, "loaded": dict(sess.loaded), "error": str(exc)}
    except Exception as exc:
        logger.exception("Fallo no controlado cargando %s.", kind_norm)
        return {
            "ok": False,
            "kind": kind_norm,
            "count": 0,
            "loaded": dict(sess.loaded),
            "error": f"{type(exc).__name__}: {exc}",
        }
    return {"ok": True, "kind": kind_norm, "count": count, "loaded": dict(sess.loaded), "error": None}


def recon_insights(
    mode: str,
    order_status: Optional[str] = None,
    time_grain: Optional[Literal["day", "month"]] = None,
    dataset: Optional[Literal["orders", "metadata", "pbi"]] = None,
    field: Optional[str] = None,
    brand: Optional[str] = None,
    category: Optional[str] = None,
    client: Optional[str] = None,
    subcategory: Optional[str] = None,
    product_type: Optional[str] = None,
    include_formatted: bool = False,
    session: Optional[ReconSession] = None,
) -> Dict[str, Any]:
    """
    Tool pública: desgloses y cruce órdenes vs PBI sobre los archivos cargados.

    Parámetros:
      - mode: "by_asin" | "by_marketplace" | "over_time" | "comparison" | "missing_asins"
        | "summary" | "drilldown" | "unique_values" (se aceptan sinónimos).
      - order_status: filtro de estado para los desgloses.
      - time_grain: "day" | "month" (solo "over_time").
      - dataset/field: origen y columna para "unique_values".
      - brand/category/client/subcategory/product_type: selectores del drill-down.

    Retorna:
      dict JSON-serializable con llaves: ok, mode, filters, meta, data, warnings, error, count.
    """
    sess = session or DEFAULT_SESSION
    mode_norm = _norm_mode(mode)

    try:
        q = ReconQuery(
            mode=mode_norm,
            order_status=order_status,
            time_grain=time_grain,
            dataset=dataset,
            field=field,
            metadata_filter=MetadataFilter(
                brand=brand,
                category=category,
                client=client,
                subcategory=subcategory,
                product_type=product_type,
            ),
            include_formatted=include_formatted,
            locale=sess.cfg.locale,
            currency=sess.cfg.currency,
        )
    except Exception as exc:
        return {"ok": False, "mode": mode_norm, "data": [], "count": 0, "error": f"{type(exc).__name__}: {exc}"}

    out = _json_safe(run_recon_query(sess, q))
    out["count"] = len(out.get("data", []))
    return out
