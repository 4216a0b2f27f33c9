# pbi_recon/tools/recon/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

# —— Lectura de CSV ——
CSV_ENCODING: Final[str] = os.getenv("RECON_CSV_ENCODING", "utf-8-sig")
CSV_DELIMITER: Final[str] = os.getenv("RECON_CSV_DELIMITER", ",")

# —— Localización ——
DEFAULT_LOCALE: Final[str] = os.getenv("RECON_LOCALE", "de-DE")
DEFAULT_CURRENCY: Final[str] = os.getenv("RECON_CURRENCY", "EUR")

# —— Umbral de discrepancia (en %) para el resumen ——
DISCREPANCY_THRESHOLD: Final[float] = float(os.getenv("RECON_DISCREPANCY_THRESHOLD", "5.0"))


@dataclass(frozen=True)
class AppConfig:
    """Snapshot inmutable de configuración consumida por loader y servicio."""
    encoding: str = CSV_ENCODING
    delimiter: str = CSV_DELIMITER
    locale: str = DEFAULT_LOCALE
    currency: str = DEFAULT_CURRENCY
    discrepancy_threshold: float = DISCREPANCY_THRESHOLD
