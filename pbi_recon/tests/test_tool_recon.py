# pbi_recon/tests/test_tool_recon.py
from __future__ import annotations

"""
Tests de integración ligera para pbi_recon.tools.tool_recon.

Principios:
- Datos sintéticos mínimos (rápidos y deterministas).
- Validación del contrato: ok/count/data y forma básica de los registros.
- Manejo de errores (modo inválido, archivo inválido) sin excepciones hacia afuera.
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from conftest import write_csv
from pbi_recon.tools.recon.service import ReconSession
from pbi_recon.tools.tool_recon import load_file, recon_insights


@pytest.fixture()
def loaded(orders_csv: Path, metadata_csv: Path, pbi_csv: Path) -> ReconSession:
    s = ReconSession()
    for kind, path in (("orders", orders_csv), ("metadata", metadata_csv), ("pbi", pbi_csv)):
        out = load_file(kind, path, session=s)
        assert out["ok"] is True
    return s


# ------------------------------ Tests: happy paths ----------------------------


def test_load_file_reports_counts(orders_csv: Path) -> None:
    s = ReconSession()
    out = load_file("order", orders_csv, session=s)  # sinónimo de 'orders'
    assert out == {
        "ok": True,
        "kind": "orders",
        "count": 4,
        "loaded": {"orders": True, "metadata": False, "pbi": False},
        "error": None,
    }


def test_comparison_payload_is_json_safe(loaded: ReconSession) -> None:
    out: Dict[str, Any] = recon_insights("compare", include_formatted=True, session=loaded)
    assert out["ok"] is True
    assert out["mode"] == "comparison"
    assert out["count"] == len(out["data"]) == 3
    json.dumps(out)

    row0 = out["data"][0]
    for key in ("asin", "total", "units", "pbi_sales", "pbi_units", "sales_discrepancy", "sales_discrepancy_fmt"):
        assert key in row0
    assert row0["sales_discrepancy_fmt"] == "+20,00%"


def test_drilldown_by_brand(loaded: ReconSession) -> None:
    out = recon_insights("drill-down", brand="Bolt", session=loaded)
    assert out["ok"] is True
    assert [r["ASIN"] for r in out["data"]] == ["B2"]


def test_unique_values(loaded: ReconSession) -> None:
    out = recon_insights("unique_values", dataset="metadata", field="brand", session=loaded)
    assert [r["value"] for r in out["data"]] == ["Acme", "Bolt"]


# ------------------------------ Tests: errores/defensivos ---------------------


def test_invalid_mode_returns_ok_false(loaded: ReconSession) -> None:
    out = recon_insights("no_such_mode", session=loaded)
    assert out["ok"] is False
    assert "error" in out and isinstance(out["error"], str)


def test_invalid_metadata_keeps_previous_state(loaded: ReconSession, tmp_path: Path) -> None:
    bad = write_csv(tmp_path / "bad.csv", ["colA", "colB"], [[1, 2]])
    out = load_file("metadata", bad, session=loaded)
    assert out["ok"] is False
    assert "asin" in out["error"]
    assert out["loaded"] == {"orders": True, "metadata": True, "pbi": True}

    still = recon_insights("drilldown", session=loaded)
    assert still["count"] == 3


def test_unreadable_file_returns_ok_false(tmp_path: Path) -> None:
    p = tmp_path / "latin1.csv"
    p.write_bytes("ASIN,Sales,Units\né,1,1\n".encode("latin-1"))
    out = load_file("pbi", p, session=ReconSession())
    assert out["ok"] is False
    assert out["loaded"]["pbi"] is False
