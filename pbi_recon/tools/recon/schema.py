# pbi_recon/tools/recon/schema.py
from __future__ import annotations

from typing import Final, Tuple

# Nombres canónicos de columnas (evita strings sueltos en el resto del código)

# —— Órdenes ——
ASIN: Final[str] = "asin"
QTY: Final[str] = "quantity"
PRICE: Final[str] = "item-price-eur"
STATUS: Final[str] = "order-status"
CHANNEL: Final[str] = "sales-channel"
DATE: Final[str] = "date"

# —— Metadata ——
BRAND: Final[str] = "brand"
CATEGORY: Final[str] = "category"
SUBCATEGORY: Final[str] = "subcategory"
PRODUCT_TYPE: Final[str] = "product-type"
CLIENT: Final[str] = "client"

# —— PBI (respeta las mayúsculas del extracto) ——
PBI_ASIN: Final[str] = "ASIN"
PBI_SALES: Final[str] = "Sales"
PBI_UNITS: Final[str] = "Units"

# Conjuntos útiles
ORDER_COLS: Final[Tuple[str, ...]] = (ASIN, QTY, PRICE, STATUS, CHANNEL, DATE)
METADATA_REQUIRED_COLS: Final[Tuple[str, ...]] = (ASIN, BRAND, CATEGORY, SUBCATEGORY, PRODUCT_TYPE, CLIENT)
PBI_COLS: Final[Tuple[str, ...]] = (PBI_ASIN, PBI_SALES, PBI_UNITS)

FILE_KINDS: Final[Tuple[str, ...]] = ("orders", "metadata", "pbi")
