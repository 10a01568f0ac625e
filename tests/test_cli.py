from __future__ import annotations

import json
from pathlib import Path

import pytest

from skatmoms.cli.main import main
from skatmoms.domain import boxes

LEDGER_CSV = """invoiceId,date,name,type,vatNumber,grandTotal,vatRate,baseValue,vatValue
P1,2024-01-10,Kontorland ApS,A - Goods,DK11111111,1250,0.25,1000,250
P2,2024-02-01,Acme GmbH,A - Goods,DE123,400,0,400,0
S1,2024-03-05,Client SARL,B - Services,FR456,-500,0,-500,0
"""


@pytest.fixture
def ledger(tmp_path) -> Path:
    path = tmp_path / "ledger.csv"
    path.write_text(LEDGER_CSV, encoding="utf-8")
    return path


def _period_args(path: Path) -> list[str]:
    return ["--source", str(path), "--from", "2024-01-01", "--to", "2024-03-31"]


def test_report_prints_every_label_set(ledger: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["report", *_period_args(ledger)])

    out = capsys.readouterr().out
    assert code == 0
    assert "Boxes:" in out
    assert "English form:" in out
    assert "Dansk formular:" in out
    assert "Rubrik A - varer" in out
    assert "Box A - goods" in out
    assert "Reverse charge VAT added manually (25%): 100" in out
    assert "EU-salg uden moms" in out
    assert "by the 25th day of each month" in out


def test_report_with_single_label_set(ledger: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["report", *_period_args(ledger), "--labels", "danish"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Dansk formular:" in out
    assert "English form:" not in out
    assert "Boxes:" not in out


def test_report_json(ledger: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["report", *_period_args(ledger), "--labels", "keys", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert set(payload) == {"keys", "reverse-charge-total"}
    assert payload["keys"][boxes.VAT_IN_DK] == 250
    assert payload["keys"][boxes.VAT_PAID] == 350
    assert payload["keys"][boxes.EU_SALES_WITHOUT_VAT] == -500
    assert payload["reverse-charge-total"] == 100


def test_validate_reports_entry_count(ledger: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["validate", *_period_args(ledger)])

    assert code == 0
    assert capsys.readouterr().out == "OK: 3 entries for the 2024-01-01 - 2024-03-31 period.\n"


def test_validate_fails_on_bad_row(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "ledger.csv"
    path.write_text(LEDGER_CSV + "S2,2024-03-06,Refund,B - Services,,100,0,100,0\n", encoding="utf-8")

    code = main(["validate", *_period_args(path)])

    out = capsys.readouterr().out
    assert code == 1
    assert "S2" in out
    assert "negative" in out


def test_missing_settings_exit_with_error(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["report"])

    assert code == 1
    assert "SHEETS_CSV_URL is required" in capsys.readouterr().out


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    code = main([])

    assert code == 1
    assert "report" in capsys.readouterr().out
