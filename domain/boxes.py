"""Aggregation of classified invoice records into VAT return boxes.

Base boxes are independent filter/reduce passes over the record set and are
collected into an immutable ``BaseBoxes``. Composite boxes are computed from
``BaseBoxes`` only, never from the records.

References (SKAT, "indberet din handel med udlandet"):
https://skat.dk/erhverv/moms/moms-ved-handel-med-udlandet/moms-ved-handel-med-virksomheder/indberet-din-handel-med-udlandet
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, fields
from decimal import Decimal

from skatmoms.domain.classification import ClassifiedRecord
from skatmoms.domain.invoice import InvoiceType
from skatmoms.domain.reverse_charge import ZERO, select_vat

logger = logging.getLogger(__name__)

# Købsmoms part: VAT on domestic purchases.
VAT_IN_DK = "vat-in-dk"
# Moms af varekøb i udlandet (både EU og lande uden for EU).
VAT_GOODS_OUTSIDE_DK = "vat-on-goods-purchased-outside-denmark"
# Moms af ydelseskøb i udlandet med omvendt betalingspligt, split by EU membership.
VAT_SERVICES_REVERSE_CHARGE = "vat-on-services-purchased-outside-denmark-subject-to-a-reverse-charge"
VAT_SERVICES_OUTSIDE_EU = "vat-on-services-purchased-outside-denmark-outside-eu"
VAT_SERVICES_INSIDE_EU = "vat-on-services-purchased-outside-denmark-inside-eu"
EU_SALES_WITH_VAT = "eu-sales-with-vat"
EU_SALES_WITHOUT_VAT = "eu-sales-without-vat"
# Købsmoms (input VAT, deductible).
VAT_PAID = "vat-paid"
# Salgsmoms (output VAT, payable). Not derived from the ledger yet.
VAT_COLLECTED = "vat-collected"
# Rubrik A - ydelser / varer: purchases from other EU countries, excl. VAT.
BOX_A_SERVICES = "box-a-services"
BOX_A_GOODS = "box-a-goods"
# Rubrik B - ydelser / varer: sales to other EU countries without VAT.
BOX_B_SERVICES = "box-b-services"
BOX_B_GOODS = "box-b-goods"
# Rubrik C: other sales without VAT, in Denmark and abroad.
BOX_C_SERVICES = "box-c-services"

BOX_NAMES: tuple[str, ...] = (
    VAT_IN_DK,
    VAT_GOODS_OUTSIDE_DK,
    VAT_SERVICES_REVERSE_CHARGE,
    VAT_SERVICES_OUTSIDE_EU,
    VAT_SERVICES_INSIDE_EU,
    EU_SALES_WITH_VAT,
    EU_SALES_WITHOUT_VAT,
    VAT_PAID,
    VAT_COLLECTED,
    BOX_A_SERVICES,
    BOX_A_GOODS,
    BOX_B_SERVICES,
    BOX_B_GOODS,
    BOX_C_SERVICES,
)

RecordValue = Callable[[ClassifiedRecord], tuple[Decimal, Decimal]]


def _stated_vat(record: ClassifiedRecord) -> tuple[Decimal, Decimal]:
    return record.vat_value, ZERO


def _grand_total(record: ClassifiedRecord) -> tuple[Decimal, Decimal]:
    return record.grand_total, ZERO


def _base_value(record: ClassifiedRecord) -> tuple[Decimal, Decimal]:
    return record.base_value, ZERO


@dataclass(frozen=True)
class BoxRule:
    """One base box: which records count, and what each one contributes."""

    box: str
    field: str
    applies: Callable[[ClassifiedRecord], bool]
    value: RecordValue
    absolute: bool = False

    def reduce(self, records: Iterable[ClassifiedRecord]) -> tuple[Decimal, Decimal]:
        """Return ``(box_value, reverse_charge_contribution)`` over matching records."""
        total = ZERO
        contribution = ZERO
        for record in records:
            if not self.applies(record):
                continue
            value, extra = self.value(record)
            total += value
            contribution += extra
        if self.absolute:
            total = abs(total)
        return total, contribution


BASE_BOX_RULES: tuple[BoxRule, ...] = (
    BoxRule(
        VAT_IN_DK,
        "vat_in_dk",
        lambda r: r.in_dk and r.is_purchase,
        _stated_vat,
    ),
    BoxRule(
        VAT_GOODS_OUTSIDE_DK,
        "vat_goods_outside_dk",
        lambda r: not r.in_dk and r.type is InvoiceType.PURCHASE_GOODS,
        select_vat,
    ),
    # Only zero-rated EU services are self-assessed; any VAT a seller did
    # charge is foreign VAT and not deductible here.
    BoxRule(
        VAT_SERVICES_INSIDE_EU,
        "vat_services_inside_eu",
        lambda r: r.is_foreign_eu and r.type is InvoiceType.PURCHASE_SERVICES and r.is_zero_rated,
        select_vat,
    ),
    BoxRule(
        VAT_SERVICES_OUTSIDE_EU,
        "vat_services_outside_eu",
        lambda r: not r.in_dk and not r.in_eu and r.type is InvoiceType.PURCHASE_SERVICES,
        select_vat,
    ),
    BoxRule(
        BOX_A_GOODS,
        "box_a_goods",
        lambda r: r.is_foreign_eu and r.type is InvoiceType.PURCHASE_GOODS,
        _grand_total,
    ),
    BoxRule(
        BOX_A_SERVICES,
        "box_a_services",
        lambda r: r.is_foreign_eu and r.type is InvoiceType.PURCHASE_SERVICES,
        _grand_total,
    ),
    BoxRule(
        BOX_B_SERVICES,
        "box_b_services",
        lambda r: r.is_foreign_eu and r.is_sale,
        _grand_total,
    ),
    # Sales are negative in the ledger, the form wants a positive amount.
    BoxRule(
        BOX_C_SERVICES,
        "box_c_services",
        lambda r: r.is_zero_rated and r.is_sale,
        _base_value,
        absolute=True,
    ),
    BoxRule(
        EU_SALES_WITH_VAT,
        "eu_sales_with_vat",
        lambda r: r.is_foreign_eu and r.is_sale and r.vat_rate > 0,
        _grand_total,
    ),
    BoxRule(
        EU_SALES_WITHOUT_VAT,
        "eu_sales_without_vat",
        lambda r: r.is_foreign_eu and r.is_sale and r.is_zero_rated,
        _base_value,
    ),
)


@dataclass(frozen=True)
class BaseBoxes:
    vat_in_dk: Decimal = ZERO
    vat_goods_outside_dk: Decimal = ZERO
    vat_services_inside_eu: Decimal = ZERO
    vat_services_outside_eu: Decimal = ZERO
    box_a_goods: Decimal = ZERO
    box_a_services: Decimal = ZERO
    box_b_services: Decimal = ZERO
    box_c_services: Decimal = ZERO
    eu_sales_with_vat: Decimal = ZERO
    eu_sales_without_vat: Decimal = ZERO
    # Reserved on the form, never populated from the ledger.
    box_b_goods: Decimal = ZERO
    vat_collected: Decimal = ZERO


@dataclass(frozen=True)
class TaxReturn:
    """Unrounded VAT return for one period."""

    base: BaseBoxes
    reverse_charge_total: Decimal = ZERO

    @property
    def vat_services_reverse_charge(self) -> Decimal:
        return self.base.vat_services_inside_eu + self.base.vat_services_outside_eu

    @property
    def vat_paid(self) -> Decimal:
        return self.base.vat_in_dk + self.base.vat_goods_outside_dk + self.vat_services_reverse_charge

    def boxes(self) -> dict[str, Decimal]:
        """All boxes keyed by box name, in form order."""
        base = self.base
        values = {
            VAT_IN_DK: base.vat_in_dk,
            VAT_GOODS_OUTSIDE_DK: base.vat_goods_outside_dk,
            VAT_SERVICES_REVERSE_CHARGE: self.vat_services_reverse_charge,
            VAT_SERVICES_OUTSIDE_EU: base.vat_services_outside_eu,
            VAT_SERVICES_INSIDE_EU: base.vat_services_inside_eu,
            EU_SALES_WITH_VAT: base.eu_sales_with_vat,
            EU_SALES_WITHOUT_VAT: base.eu_sales_without_vat,
            VAT_PAID: self.vat_paid,
            VAT_COLLECTED: base.vat_collected,
            BOX_A_SERVICES: base.box_a_services,
            BOX_A_GOODS: base.box_a_goods,
            BOX_B_SERVICES: base.box_b_services,
            BOX_B_GOODS: base.box_b_goods,
            BOX_C_SERVICES: base.box_c_services,
        }
        return {name: values[name] for name in BOX_NAMES}

    def __getitem__(self, box: str) -> Decimal:
        return self.boxes()[box]


def compute_base_boxes(
    records: Iterable[ClassifiedRecord],
    rules: Iterable[BoxRule] = BASE_BOX_RULES,
) -> tuple[BaseBoxes, Decimal]:
    """Run every base rule over ``records``.

    Returns:
        Tuple of (base boxes, summed reverse-charge contributions).
    """
    materialized = list(records)
    values: dict[str, Decimal] = {}
    reverse_charge_total = ZERO
    for rule in rules:
        value, contribution = rule.reduce(materialized)
        values[rule.field] = value
        reverse_charge_total += contribution
        logger.debug("%s = %s (reverse charge %s)", rule.box, value, contribution)

    known = {f.name for f in fields(BaseBoxes)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Box rules refer to unknown fields: {sorted(unknown)}")
    return BaseBoxes(**values), reverse_charge_total


def aggregate(records: Iterable[ClassifiedRecord]) -> TaxReturn:
    base, reverse_charge_total = compute_base_boxes(records)
    return TaxReturn(base=base, reverse_charge_total=reverse_charge_total)
