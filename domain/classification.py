"""Classification of invoice records by counterparty VAT registration."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal

from skatmoms.domain.invoice import InvoiceRecord, InvoiceType

DK_PREFIX = "DK"

_VAT_NUMBER_NOISE = re.compile(r"[\s-]")


def normalize_vat_number(vat_number: str | None) -> str:
    """Strip whitespace and hyphens, then upper-case. ``None`` becomes ``""``."""
    if not vat_number:
        return ""
    return _VAT_NUMBER_NOISE.sub("", vat_number).upper()


@dataclass(frozen=True)
class ClassifiedRecord:
    """An invoice record plus the facets derived from its VAT number.

    A VAT number on the invoice means the counterparty is a VAT-registered
    business, which the ledger only records for EU counterparties.
    """

    record: InvoiceRecord
    in_eu: bool
    in_dk: bool

    @property
    def invoice_id(self) -> str:
        return self.record.invoice_id

    @property
    def type(self) -> InvoiceType:
        return self.record.type

    @property
    def is_purchase(self) -> bool:
        return self.record.type.is_purchase

    @property
    def is_sale(self) -> bool:
        return self.record.type is InvoiceType.SALE

    @property
    def is_zero_rated(self) -> bool:
        return self.record.vat_rate == 0

    @property
    def is_foreign_eu(self) -> bool:
        return self.in_eu and not self.in_dk

    @property
    def grand_total(self) -> Decimal:
        return self.record.grand_total

    @property
    def base_value(self) -> Decimal:
        return self.record.base_value

    @property
    def vat_value(self) -> Decimal:
        return self.record.vat_value

    @property
    def vat_rate(self) -> Decimal:
        return self.record.vat_rate


def classify(record: InvoiceRecord) -> ClassifiedRecord:
    normalized = normalize_vat_number(record.vat_number)
    return ClassifiedRecord(
        record=record,
        in_eu=len(normalized) > 0,
        in_dk=normalized.startswith(DK_PREFIX),
    )
