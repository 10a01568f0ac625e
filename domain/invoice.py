"""Invoice records and parsing of raw ledger rows into them."""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from skatmoms.domain.errors import SchemaError

FIELDS = (
    "invoiceId",
    "date",
    "name",
    "type",
    "vatNumber",
    "grandTotal",
    "vatRate",
    "baseValue",
    "vatValue",
)

DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%d.%m.%Y", "%d-%m-%Y")


class InvoiceType(Enum):
    PURCHASE_GOODS = "PurchaseGoods"
    PURCHASE_SERVICES = "PurchaseServices"
    SALE = "Sale"

    @property
    def is_purchase(self) -> bool:
        return self is not InvoiceType.SALE


# The expenses sheet uses "A" for purchases and "B" for sales.
_TYPE_ALIASES = {
    "A - GOODS": InvoiceType.PURCHASE_GOODS,
    "A - SERVICES": InvoiceType.PURCHASE_SERVICES,
    "B - SERVICES": InvoiceType.SALE,
    "PURCHASEGOODS": InvoiceType.PURCHASE_GOODS,
    "PURCHASESERVICES": InvoiceType.PURCHASE_SERVICES,
    "SALE": InvoiceType.SALE,
}


@dataclass(frozen=True)
class InvoiceRecord:
    invoice_id: str
    date: dt.date
    name: str
    type: InvoiceType
    vat_number: str | None
    grand_total: Decimal
    vat_rate: Decimal
    base_value: Decimal
    vat_value: Decimal

    def __str__(self) -> str:
        return f"Invoice {self.invoice_id} {self.date.isoformat()} {self.type.value} {self.name} : {self.grand_total}"


def _cell(row: Mapping[str, Any], field: str, invoice_id: str | None) -> Any:
    if field not in row:
        raise SchemaError(f"Missing column '{field}'", invoice_id=invoice_id, field=field)
    return row[field]


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def parse_date(value: Any) -> dt.date:
    """Parse a ledger date cell. Raises ValueError when no known format matches."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    text = _text(value)
    if not text:
        raise ValueError("empty date")
    try:
        return dt.datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return dt.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"unrecognized date {text!r}")


def parse_decimal(value: Any) -> Decimal:
    """Parse a numeric cell into Decimal. Floats go through str() to avoid binary noise."""
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    else:
        text = _text(value).replace(" ", "")
        if not text:
            raise ValueError("empty number")
        try:
            number = Decimal(text)
        except InvalidOperation as exc:
            raise ValueError(f"not a number: {text!r}") from exc
    if not number.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return number


def parse_invoice_type(value: Any) -> InvoiceType:
    key = _text(value).upper()
    try:
        return _TYPE_ALIASES[key]
    except KeyError:
        raise ValueError(f"unknown invoice type {_text(value)!r}") from None


def row_invoice_id(row: Mapping[str, Any]) -> str | None:
    value = _text(row.get("invoiceId"))
    return value or None


def row_date(row: Mapping[str, Any]) -> dt.date:
    """Parse only the date cell of a row; used to filter rows by period before full parsing."""
    invoice_id = row_invoice_id(row)
    raw = _cell(row, "date", invoice_id)
    try:
        return parse_date(raw)
    except ValueError as exc:
        raise SchemaError(f"Invalid date for invoice {invoice_id}: {exc}", invoice_id=invoice_id, field="date") from exc


def parse_invoice_row(row: Mapping[str, Any]) -> InvoiceRecord:
    """Parse one raw ledger row into an InvoiceRecord.

    Raises:
        SchemaError: A column is missing or a cell has the wrong type.
    """
    invoice_id = row_invoice_id(row)
    for field in FIELDS:
        if field != "vatNumber":
            _cell(row, field, invoice_id)
    if invoice_id is None:
        raise SchemaError("Row has an empty invoiceId", field="invoiceId")

    name = _text(row["name"])
    try:
        invoice_type = parse_invoice_type(row["type"])
    except ValueError as exc:
        raise SchemaError(f"Invalid type for invoice {invoice_id}: {exc}", invoice_id=invoice_id, field="type") from exc

    amounts: dict[str, Decimal] = {}
    for field in ("grandTotal", "vatRate", "baseValue", "vatValue"):
        try:
            amounts[field] = parse_decimal(row[field])
        except ValueError as exc:
            raise SchemaError(
                f"Invalid {field} for invoice {invoice_id}: {exc}", invoice_id=invoice_id, field=field
            ) from exc

    vat_number = _text(row.get("vatNumber")) or None

    return InvoiceRecord(
        invoice_id=invoice_id,
        date=row_date(row),
        name=name,
        type=invoice_type,
        vat_number=vat_number,
        grand_total=amounts["grandTotal"],
        vat_rate=amounts["vatRate"],
        base_value=amounts["baseValue"],
        vat_value=amounts["vatValue"],
    )
