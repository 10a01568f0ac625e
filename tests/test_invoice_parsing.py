from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest

from skatmoms.domain.errors import SchemaError
from skatmoms.domain.invoice import InvoiceType, parse_date, parse_invoice_row, row_date


def test_parse_row_into_typed_record(make_row) -> None:
    record = parse_invoice_row(make_row(vat_number=" DE 123 ", grand_total="1250.50"))

    assert record.invoice_id == "INV-1"
    assert record.date == dt.date(2024, 2, 15)
    assert record.type is InvoiceType.PURCHASE_GOODS
    assert record.vat_number == "DE 123"
    assert record.grand_total == Decimal("1250.50")
    assert record.vat_rate == Decimal("0.25")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("A - Goods", InvoiceType.PURCHASE_GOODS),
        ("A - Services", InvoiceType.PURCHASE_SERVICES),
        ("B - Services", InvoiceType.SALE),
        ("PurchaseGoods", InvoiceType.PURCHASE_GOODS),
        ("purchaseservices", InvoiceType.PURCHASE_SERVICES),
        ("Sale", InvoiceType.SALE),
    ],
)
def test_type_spellings(make_row, raw: str, expected: InvoiceType) -> None:
    base_value = "-100" if expected is InvoiceType.SALE else "100"
    assert parse_invoice_row(make_row(type=raw, base_value=base_value)).type is expected


def test_empty_vat_number_is_none(make_row) -> None:
    assert parse_invoice_row(make_row(vat_number="   ")).vat_number is None


def test_numeric_cells_accept_python_numbers(make_row) -> None:
    row = make_row()
    row["grandTotal"] = 0.1  # type: ignore[assignment]
    row["vatRate"] = 0  # type: ignore[assignment]
    record = parse_invoice_row(row)
    assert record.grand_total == Decimal("0.1")
    assert record.vat_rate == Decimal("0")


def test_missing_column_raises_schema_error(make_row) -> None:
    row = make_row()
    del row["vatValue"]
    with pytest.raises(SchemaError) as excinfo:
        parse_invoice_row(row)
    assert excinfo.value.field == "vatValue"
    assert excinfo.value.invoice_id == "INV-1"


def test_missing_vat_number_column_is_allowed(make_row) -> None:
    row = make_row()
    del row["vatNumber"]
    assert parse_invoice_row(row).vat_number is None


@pytest.mark.parametrize("field", ["grandTotal", "vatRate", "baseValue", "vatValue"])
def test_non_numeric_amount_raises_schema_error(make_row, field: str) -> None:
    row = make_row()
    row[field] = "twelve"
    with pytest.raises(SchemaError, match=field):
        parse_invoice_row(row)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), "NaN", "Infinity"])
def test_non_finite_amount_raises_schema_error(make_row, value: object) -> None:
    row = make_row()
    row["vatRate"] = value  # type: ignore[assignment]
    with pytest.raises(SchemaError, match="vatRate") as excinfo:
        parse_invoice_row(row)
    assert "finite" in str(excinfo.value)


def test_unknown_type_raises_schema_error(make_row) -> None:
    with pytest.raises(SchemaError, match="type"):
        parse_invoice_row(make_row(type="C - Goods"))


@pytest.mark.parametrize("invoice_id", ["", "   "])
def test_empty_invoice_id_raises_schema_error(make_row, invoice_id: str) -> None:
    with pytest.raises(SchemaError, match="invoiceId"):
        parse_invoice_row(make_row(invoice_id=invoice_id))


def test_date_formats() -> None:
    assert parse_date("2024-03-31") == dt.date(2024, 3, 31)
    assert parse_date("31.03.2024") == dt.date(2024, 3, 31)
    assert parse_date("2024/03/31") == dt.date(2024, 3, 31)
    assert parse_date(dt.datetime(2024, 3, 31, 12, 0)) == dt.date(2024, 3, 31)
    with pytest.raises(ValueError):
        parse_date("next tuesday")


def test_row_date_wraps_bad_dates_in_schema_error(make_row) -> None:
    with pytest.raises(SchemaError) as excinfo:
        row_date(make_row(date="not a date"))
    assert excinfo.value.field == "date"
