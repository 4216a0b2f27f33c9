# pbi_recon/tools/recon/i18n.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional


@dataclass(frozen=True)
class LocaleConfig:
    """Configuración mínima de formato.
    No usamos Babel para evitar dependencia; ajusta aquí símbolos y separadores.
    """
    locale: str = "de-DE"
    currency: str = "EUR"
    currency_symbol: str = "€"
    decimal_sep: str = ","
    thousand_sep: str = "."


DEFAULT_LOCALE = LocaleConfig()


def _format_number(value: float, cfg: LocaleConfig, ndigits: int) -> str:
    # "{:,.2f}" usa separadores US; los sustituimos por los del locale
    s = f"{value:,.{ndigits}f}"
    if cfg.thousand_sep != "," or cfg.decimal_sep != ".":
        s = s.replace(",", "X").replace(".", cfg.decimal_sep).replace("X", cfg.thousand_sep)
    return s


def format_currency(value: Optional[float], cfg: LocaleConfig = DEFAULT_LOCALE, ndigits: int = 2) -> str:
    """Formatea un float como moneda ('1.234,50 €'). Si value es None, devuelve '-'."""
    if value is None:
        return "-"
    return f"{_format_number(round(float(value), ndigits), cfg, ndigits)} {cfg.currency_symbol}"


def format_percent(value: Optional[float], cfg: LocaleConfig = DEFAULT_LOCALE, ndigits: int = 2) -> str:
    """Formatea un valor que ya está en % ('20,00%'), con signo si es positivo."""
    if value is None:
        return "-"
    q = round(float(value), ndigits)
    sign = "+" if q > 0 else ""
    return f"{sign}{_format_number(q, cfg, ndigits)}%"


def add_formatted_fields(
    row: Mapping[str, object],
    currency_fields: Iterable[str],
    percent_fields: Iterable[str],
    cfg: LocaleConfig = DEFAULT_LOCALE,
    suffix: str = "_fmt",
) -> Dict[str, object]:
    """Devuelve un nuevo dict con campos formateados añadidos para UI.
    Ej.: 'pbi_sales' -> 'pbi_sales_fmt'
    """
    out: Dict[str, object] = dict(row)
    for c in currency_fields:
        v = row.get(c)
        out[f"{c}{suffix}"] = format_currency(v if isinstance(v, (int, float)) else None, cfg=cfg)
    for p in percent_fields:
        v = row.get(p)
        out[f"{p}{suffix}"] = format_percent(v if isinstance(v, (int, float)) else None, cfg=cfg)
    return out


# Idiomas que escriben el decimal con coma ("1.234,50")
_DECIMAL_COMMA_LANGS = frozenset({"de", "es", "fr", "it", "nl", "pt", "da", "pl", "sv", "tr"})
_CURRENCY_SYMBOLS = {"EUR": "€", "GBP": "£", "USD": "$"}


def locale_config(locale: str = "de-DE", currency: str = "EUR") -> LocaleConfig:
    """Construye un LocaleConfig a partir de un tag BCP 47 y un código de moneda."""
    lang = (locale or "").replace("_", "-").split("-")[0].lower()
    code = (currency or "").strip().upper()
    symbol = _CURRENCY_SYMBOLS.get(code, code)
    if lang in _DECIMAL_COMMA_LANGS:
        return LocaleConfig(locale=locale, currency=code, currency_symbol=symbol, decimal_sep=",", thousand_sep=".")
    return LocaleConfig(locale=locale, currency=code, currency_symbol=symbol, decimal_sep=".", thousand_sep=",")
