"""Self-assessed (reverse-charge) VAT on foreign purchases.

When a foreign seller invoices without VAT, the Danish buyer calculates 25%
of the invoice value and reports it as both payable and deductible VAT.
"""

from __future__ import annotations

from decimal import Decimal

from skatmoms.domain.classification import ClassifiedRecord

REVERSE_CHARGE_RATE = Decimal("0.25")
ZERO = Decimal("0")


def is_reverse_charged(record: ClassifiedRecord) -> bool:
    return record.is_purchase and not record.in_dk and record.is_zero_rated


def estimate_reverse_charge(record: ClassifiedRecord) -> Decimal:
    """Estimated Danish VAT for a reverse-charged purchase, zero otherwise."""
    if not is_reverse_charged(record):
        return ZERO
    return record.grand_total * REVERSE_CHARGE_RATE


def select_vat(record: ClassifiedRecord) -> tuple[Decimal, Decimal]:
    """Return ``(vat_value, reverse_charge_contribution)`` for one record.

    The stated VAT is used as-is unless the purchase is reverse-charged, in
    which case the estimate replaces it and is also returned as contribution.
    """
    if is_reverse_charged(record):
        estimate = estimate_reverse_charge(record)
        return estimate, estimate
    return record.vat_value, ZERO
