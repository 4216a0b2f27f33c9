# pbi_recon/tests/test_parsers.py
from __future__ import annotations

import math

import pytest

from pbi_recon.tools.recon.parsers import parse_order_row, parse_pbi_row
from pbi_recon.tools.recon.validators import (
    normalize_metadata_row,
    validate_metadata_headers,
    validate_metadata_row,
)
from pbi_recon.tools.recon.value_parser import parse_decimal, parse_int


def _order(**overrides: str) -> dict:
    row = {
        "asin": "B000123",
        "quantity": "2",
        "item-price-eur": "19.99",
        "order-status": "Shipped",
        "sales-channel": "Amazon.de",
        "date": "2024-03-01",
    }
    row.update(overrides)
    return row


# ------------------------------ Números locales --------------------------------


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12.5", 12.5),
        ("12,5", 12.5),
        ("1.234,56", 1234.56),
        ("1,234.56", 1234.56),
        (" 7 ", 7.0),
        ("-3,20", -3.2),
        ("€ 9,99", 9.99),
        ("0", 0.0),
        ("1.234.567", 1234567.0),
        ("-2.500.000", -2500000.0),
    ],
)
def test_parse_decimal_locale_formats(raw: str, expected: float) -> None:
    assert parse_decimal(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["", "abc", "12a", "nan", "inf", None, float("nan")])
def test_parse_decimal_rejects(raw) -> None:
    with pytest.raises(ValueError):
        parse_decimal(raw)


def test_parse_int_requires_integral() -> None:
    assert parse_int("3") == 3
    assert parse_int("3,0") == 3
    with pytest.raises(ValueError):
        parse_int("2.5")


# ------------------------------ Órdenes ----------------------------------------


def test_parse_order_row_happy_path() -> None:
    rec = parse_order_row(_order(asin="  B000123 "))
    assert rec is not None
    assert rec.asin == "B000123"
    assert rec.quantity == 2
    assert rec.item_price_eur == pytest.approx(19.99)
    assert rec.order_status == "Shipped"
    assert rec.sales_channel == "Amazon.de"
    assert rec.date == "2024-03-01"


def test_parse_order_row_allows_refunds() -> None:
    rec = parse_order_row(_order(**{"item-price-eur": "-19,99"}))
    assert rec is not None
    assert rec.item_price_eur == pytest.approx(-19.99)


@pytest.mark.parametrize(
    "overrides",
    [
        {"asin": ""},
        {"asin": "   "},
        {"quantity": "two"},
        {"quantity": "-1"},
        {"item-price-eur": "n/a"},
        {"item-price-eur": ""},
    ],
)
def test_parse_order_row_rejects(overrides: dict) -> None:
    assert parse_order_row(_order(**overrides)) is None


def test_parse_order_row_missing_numeric_column() -> None:
    row = _order()
    del row["item-price-eur"]
    assert parse_order_row(row) is None


def test_parse_order_row_missing_text_cells_default_to_empty() -> None:
    row = _order()
    row["order-status"] = math.nan  # celda faltante según pandas
    del row["date"]
    rec = parse_order_row(row)
    assert rec is not None
    assert rec.order_status == ""
    assert rec.date == ""


# ------------------------------ PBI --------------------------------------------


def test_parse_pbi_row() -> None:
    rec = parse_pbi_row({"ASIN": "A1", "Sales": "1.018,40", "Units": "12", "Other": "x"})
    assert rec is not None
    assert rec.asin == "A1"
    assert rec.sales == pytest.approx(1018.40)
    assert rec.units == 12


@pytest.mark.parametrize(
    "row",
    [
        {"ASIN": "", "Sales": "1", "Units": "1"},
        {"ASIN": "A1", "Sales": "x", "Units": "1"},
        {"ASIN": "A1", "Sales": "1", "Units": "1.5"},
        {"asin": "A1", "Sales": "1", "Units": "1"},  # la clave PBI es 'ASIN'
    ],
)
def test_parse_pbi_row_rejects(row: dict) -> None:
    assert parse_pbi_row(row) is None


# ------------------------------ Metadata ---------------------------------------


def test_metadata_headers_ok_with_whitespace() -> None:
    headers = [" asin", "brand ", "category", "subcategory", "product-type", "client", "extra"]
    assert validate_metadata_headers(headers) is None


def test_metadata_headers_names_missing_columns() -> None:
    error = validate_metadata_headers(["asin", "brand", "category"])
    assert error is not None
    for col in ("subcategory", "product-type", "client"):
        assert col in error
    assert "brand" not in error


def test_metadata_headers_are_case_sensitive() -> None:
    error = validate_metadata_headers(["ASIN", "brand", "category", "subcategory", "product-type", "client"])
    assert error is not None
    assert "asin" in error


def test_validate_and_normalize_metadata_row() -> None:
    row = {
        "asin": " A1 ",
        "brand": "Acme",
        "category": "Home",
        "subcategory": "Kitchen",
        "product-type": "Pan",
        "client": " C1",
    }
    assert validate_metadata_row(row) is True
    meta = normalize_metadata_row(row)
    assert meta.asin == "A1"
    assert meta.product_type == "Pan"
    assert meta.client == "C1"

    assert validate_metadata_row({**row, "brand": "  "}) is False
    assert validate_metadata_row({k: v for k, v in row.items() if k != "client"}) is False
