"""Shared pytest fixtures for skatmoms tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest


@pytest.fixture
def make_row() -> Callable[..., dict[str, str]]:
    """Build a raw ledger row as it comes out of the CSV reader."""

    def _make_row(
        invoice_id: str = "INV-1",
        date: str = "2024-02-15",
        name: str = "Acme ApS",
        type: str = "A - Goods",
        vat_number: str = "",
        grand_total: Any = "1250",
        vat_rate: Any = "0.25",
        base_value: Any = "1000",
        vat_value: Any = "250",
    ) -> dict[str, str]:
        return {
            "invoiceId": invoice_id,
            "date": date,
            "name": name,
            "type": type,
            "vatNumber": vat_number,
            "grandTotal": str(grand_total),
            "vatRate": str(vat_rate),
            "baseValue": str(base_value),
            "vatValue": str(vat_value),
        }

    return _make_row


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep the developer's environment and settings file out of the tests."""
    for name in ("SHEETS_CSV_URL", "FROM_DATE", "TO_DATE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SKATMOMS_CONFIG", str(tmp_path / "no-settings.toml"))
