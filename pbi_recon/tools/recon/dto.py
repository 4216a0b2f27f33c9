# pbi_recon/tools/recon/dto.py
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .value_parser import clean_text, parse_decimal, parse_int

# —— Literales y tipos ——
ModeLiteral = Literal[
    "by_asin",
    "by_marketplace",
    "over_time",
    "comparison",
    "missing_asins",
    "summary",
    "drilldown",
    "unique_values",
]
TimeGrainLiteral = Literal["day", "month"]
DatasetLiteral = Literal["orders", "metadata", "pbi"]

_RECORD_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


# ------------------------------ Registros tipados -----------------------------


class OrderRecord(BaseModel):
    """Una línea de orden de venta ya validada."""
    model_config = _RECORD_CONFIG

    asin: str
    quantity: int = Field(ge=0)
    item_price_eur: float = Field(alias="item-price-eur")
    order_status: str = Field(default="", alias="order-status")
    sales_channel: str = Field(default="", alias="sales-channel")
    date: str = ""

    @field_validator("asin", mode="before")
    @classmethod
    def _require_asin(cls, v: Any) -> str:
        asin = clean_text(v)
        if not asin:
            raise ValueError("asin vacío")
        return asin

    @field_validator("quantity", mode="before")
    @classmethod
    def _parse_quantity(cls, v: Any) -> int:
        return parse_int(v)

    @field_validator("item_price_eur", mode="before")
    @classmethod
    def _parse_price(cls, v: Any) -> float:
        return parse_decimal(v)

    @field_validator("order_status", "sales_channel", "date", mode="before")
    @classmethod
    def _strip_text(cls, v: Any) -> str:
        return clean_text(v)


class AsinMetadata(BaseModel):
    """Atributos de catálogo de un ASIN (todos obligatorios)."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore", str_strip_whitespace=True)

    asin: str = Field(min_length=1)
    brand: str = Field(min_length=1)
    category: str = Field(min_length=1)
    subcategory: str = Field(min_length=1)
    product_type: str = Field(alias="product-type", min_length=1)
    client: str = Field(min_length=1)


class PBIRecord(BaseModel):
    """Entrada del extracto externo PBI."""
    model_config = _RECORD_CONFIG

    asin: str = Field(alias="ASIN")
    sales: float = Field(alias="Sales")
    units: int = Field(alias="Units", ge=0)

    @field_validator("asin", mode="before")
    @classmethod
    def _require_asin(cls, v: Any) -> str:
        asin = clean_text(v)
        if not asin:
            raise ValueError("ASIN vacío")
        return asin

    @field_validator("sales", mode="before")
    @classmethod
    def _parse_sales(cls, v: Any) -> float:
        return parse_decimal(v)

    @field_validator("units", mode="before")
    @classmethod
    def _parse_units(cls, v: Any) -> int:
        return parse_int(v)


# ------------------------------ Derivados --------------------------------------


class AggregateBucket(BaseModel):
    """Resultado de agrupar órdenes por una clave (ASIN, marketplace o fecha)."""
    model_config = ConfigDict(frozen=True)

    key: str
    total: float
    units: int


class PBILookup(BaseModel):
    """Resultado explícito del join por ASIN: encontrado o fallback a cero."""
    model_config = ConfigDict(frozen=True)

    found: bool
    sales: float = 0.0
    units: int = 0


class ComparisonData(BaseModel):
    model_config = ConfigDict(frozen=True)

    asin: str
    total: float
    units: int
    pbi_sales: float
    pbi_units: int
    pbi_found: bool
    sales_discrepancy: float
    units_discrepancy: float


class ComparisonSummary(BaseModel):
    """Totales del cruce órdenes vs PBI (lo que muestra el panel de resumen)."""
    model_config = ConfigDict(frozen=True)

    asin_count: int
    order_total: float
    order_units: int
    pbi_sales: float
    pbi_units: int
    sales_discrepancy: float
    units_discrepancy: float
    asins_over_threshold: int
    asins_without_pbi: int
    threshold: float


class MetadataFilter(BaseModel):
    """Selectores del drill-down; vacío/None = sin filtro."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    brand: Optional[str] = None
    category: Optional[str] = None
    client: Optional[str] = None
    subcategory: Optional[str] = None
    product_type: Optional[str] = Field(default=None, alias="product-type")

    @field_validator("brand", "category", "client", "subcategory", "product_type")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None  # si queda vacío, tratar como None (sin filtro)


# ------------------------------ Contratos de query -----------------------------


class ReconQuery(BaseModel):
    """Contrato de entrada para la tool de reconciliación."""
    mode: ModeLiteral
    order_status: Optional[str] = Field(
        default=None, description="Filtra las órdenes de los desgloses (no afecta la comparación)."
    )
    time_grain: Optional[TimeGrainLiteral] = Field(
        default=None, description="Solo para mode='over_time'; default 'day'."
    )
    dataset: Optional[DatasetLiteral] = Field(
        default=None, description="Requerido cuando mode='unique_values'."
    )
    field: Optional[str] = Field(default=None, description="Requerido cuando mode='unique_values'.")
    metadata_filter: MetadataFilter = Field(default_factory=MetadataFilter)
    include_formatted: bool = False

    # locales / meta
    locale: str = "de-DE"
    currency: str = "EUR"

    @field_validator("order_status", "field")
    @classmethod
    def _strip_optional(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class FilterEcho(BaseModel):
    """Se devuelve en la respuesta para transparencia de filtros aplicados."""
    order_status: Optional[str] = None
    time_grain: Optional[TimeGrainLiteral] = None
    dataset: Optional[DatasetLiteral] = None
    field: Optional[str] = None
    metadata_filter: Dict[str, Optional[str]] = Field(default_factory=dict)
    locale: str = "de-DE"
    currency: str = "EUR"


class MetaInfo(BaseModel):
    row_count: int
    generated_at: str
    currency: str
    locale: str


class ReconResult(BaseModel):
    """Contrato de salida: estable, serializable y amigable para UI."""
    ok: bool
    mode: ModeLiteral
    filters: FilterEcho
    warnings: List[str] = Field(default_factory=list)
    meta: MetaInfo
    data: List[Dict[str, Any]] = Field(default_factory=list)
    error: Optional[str] = None
