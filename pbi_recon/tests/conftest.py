# pbi_recon/tests/conftest.py
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, List, Sequence

import pytest

ORDER_HEADERS = ["asin", "quantity", "item-price-eur", "order-status", "sales-channel", "date"]
METADATA_HEADERS = ["asin", "brand", "category", "subcategory", "product-type", "client"]
PBI_HEADERS = ["ASIN", "Sales", "Units"]


def write_csv(path: Path, headers: Sequence[str], rows: List[List[Any]]) -> Path:
    """Escribe un CSV con los encabezados dados."""
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(headers)
        writer.writerows(rows)
    return path


@pytest.fixture()
def orders_csv(tmp_path: Path) -> Path:
    """
    5 órdenes, 1 malformada (precio no numérico).
    A1 aparece dos veces; B2 en otro marketplace; C3 sin entrada en PBI.
    """
    rows = [
        # asin, qty, price, status, channel, date
        ["A1", 2, "10", "Shipped", "Amazon.de", "2024-03-02"],
        ["A1", 1, "5", "Shipped", "Amazon.de", "2024-03-01"],
        ["B2", 4, "40,00", "Pending", "Amazon.fr", "2024-03-01"],
        ["C3", 1, "abc", "Shipped", "Amazon.fr", "2024-03-02"],
        ["C3", 3, "9.00", "Cancelled", "Amazon.it", "2024-04-10"],
    ]
    return write_csv(tmp_path / "orders.csv", ORDER_HEADERS, rows)


@pytest.fixture()
def metadata_csv(tmp_path: Path) -> Path:
    rows = [
        ["A1", "Acme", "Home", "Kitchen", "Pan", "Client1"],
        ["B2", "Bolt", "Tools", "Power", "Drill", "Client2"],
        ["C3", "", "Tools", "Hand", "Hammer", "Client2"],  # brand vacío: se filtra
    ]
    return write_csv(tmp_path / "metadata.csv", METADATA_HEADERS, rows)


@pytest.fixture()
def pbi_csv(tmp_path: Path) -> Path:
    rows = [
        ["A1", "18", "3"],
        ["B2", "30", "4"],
        ["A1", "999", "99"],  # duplicado: gana el primero
        ["D4", "12", "x"],    # unidades inválidas: se descarta
    ]
    return write_csv(tmp_path / "pbi.csv", PBI_HEADERS, rows)
