# pbi_recon/tools/recon/value_parser.py
from __future__ import annotations

import math
import re
from typing import Any

_NULL_TOKENS = {"", "null", "n/a", "none", "nan", "-", "--"}
_CURRENCY_RE = re.compile(r"€|EUR", flags=re.IGNORECASE)
_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")


def clean_text(value: Any) -> str:
    """Texto recortado; None/NaN (celdas faltantes de pandas) se vuelven ''."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def _normalize_number_string(text: str) -> str:
    cleaned = text.replace(" ", "").replace("\u00a0", "")
    cleaned = _CURRENCY_RE.sub("", cleaned)

    # Decimales europeos: "1.234,56" -> "1234.56"; US: "1,234.56" -> "1234.56"
    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    elif "," in cleaned:
        parts = cleaned.split(",")
        # Coma como decimal si hay una sola y no parece separador de miles
        if len(parts) == 2 and len(parts[-1]) != 3:
            cleaned = ".".join(parts)
        elif all(len(p) == 3 for p in parts[1:]):
            cleaned = "".join(parts)
        else:
            cleaned = ".".join(parts)
    elif cleaned.count(".") > 1:
        # Miles europeos sin decimales: "1.234.567" -> "1234567"
        parts = cleaned.split(".")
        if all(len(p) == 3 for p in parts[1:]):
            cleaned = "".join(parts)
    return cleaned


def parse_decimal(value: Any) -> float:
    """Convierte un valor monetario en float aceptando notación europea o US.

    Lanza ValueError si el valor está vacío, no es numérico o no es finito.
    """
    if isinstance(value, bool):
        raise ValueError(f"Valor no numérico: {value!r}")
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = clean_text(value)
        if text.lower() in _NULL_TOKENS:
            raise ValueError("Valor numérico vacío")
        cleaned = _normalize_number_string(text)
        if not _NUMBER_RE.match(cleaned):
            raise ValueError(f"Valor no numérico: {text!r}")
        number = float(cleaned)
    if not math.isfinite(number):
        raise ValueError(f"Valor no finito: {value!r}")
    return number


def parse_int(value: Any) -> int:
    """Como parse_decimal pero exige un valor entero ("3", "3.0", "3,0")."""
    number = parse_decimal(value)
    if not number.is_integer():
        raise ValueError(f"Valor no entero: {value!r}")
    return int(number)
