"""Batch validation of ledger rows for one VAT period.

Rows outside the period are dropped before anything else is parsed. Every
remaining row must parse and satisfy the accounting invariants; the first
failure invalidates the whole batch.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from skatmoms.domain.classification import DK_PREFIX, normalize_vat_number
from skatmoms.domain.errors import InvariantViolation, SchemaError, VatReturnError
from skatmoms.domain.invoice import InvoiceRecord, parse_invoice_row, row_date

logger = logging.getLogger(__name__)

DK_VAT_RATE = Decimal("0.25")


@dataclass(frozen=True)
class Period:
    """Inclusive date range of a VAT return."""

    from_date: dt.date
    to_date: dt.date

    def __post_init__(self) -> None:
        if self.from_date > self.to_date:
            raise ValueError(f"Period starts after it ends: {self.from_date} > {self.to_date}")

    def __contains__(self, day: object) -> bool:
        if not isinstance(day, dt.date):
            return False
        return self.from_date <= day <= self.to_date

    def __str__(self) -> str:
        return f"{self.from_date.isoformat()} - {self.to_date.isoformat()}"


@dataclass(frozen=True)
class ValidationResult:
    records: tuple[InvoiceRecord, ...] = ()
    error: VatReturnError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> tuple[InvoiceRecord, ...]:
        if self.error is not None:
            raise self.error
        return self.records


def validate_record(record: InvoiceRecord) -> InvoiceRecord:
    """Check the accounting invariants of one record, in order.

    Raises:
        InvariantViolation: naming the invoice, the rule and the offending value.
    """
    if not (0 <= record.vat_rate <= 1):
        raise InvariantViolation(
            record.invoice_id,
            "vatRate",
            record.vat_rate,
            "vatRate must be a multiplier between 0 and 1",
        )

    if normalize_vat_number(record.vat_number).startswith(DK_PREFIX) and record.vat_rate != DK_VAT_RATE:
        raise InvariantViolation(
            record.invoice_id,
            "vatRate",
            record.vat_rate,
            f"DK transactions must have {DK_VAT_RATE} VAT rate",
        )

    # Sales are recorded as negative amounts in the expenses sheet.
    if not record.type.is_purchase and record.base_value >= 0:
        raise InvariantViolation(
            record.invoice_id,
            "baseValue",
            record.base_value,
            "sale records must have negative amount",
        )
    if record.type.is_purchase and record.base_value <= 0:
        raise InvariantViolation(
            record.invoice_id,
            "baseValue",
            record.base_value,
            "purchase records must have positive amount",
        )
    return record


def validate_records(rows: Iterable[Mapping[str, Any]], period: Period) -> ValidationResult:
    """Parse and validate the rows that fall inside ``period``."""
    records: list[InvoiceRecord] = []
    try:
        for row in rows:
            if row_date(row) not in period:
                continue
            records.append(validate_record(parse_invoice_row(row)))
    except (SchemaError, InvariantViolation) as exc:
        logger.debug("Rejecting batch: %s", exc)
        return ValidationResult(error=exc)
    return ValidationResult(records=tuple(records))
