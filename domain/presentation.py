"""Rounding and labelling of a computed VAT return for display."""

from __future__ import annotations

import json
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from skatmoms.domain import boxes as b
from skatmoms.domain.boxes import TaxReturn

LabelSet = Literal["keys", "english", "danish"]
LABEL_SETS: tuple[LabelSet, ...] = ("keys", "english", "danish")

# Labels as printed on the English version of the SKAT form.
ENGLISH_LABELS: dict[str, str] = {
    "Output VAT (VAT payable)": b.VAT_COLLECTED,
    "Input VAT (VAT deductible)": b.VAT_PAID,
    "VAT on goods purchased abroad (both the EU and third countries)": b.VAT_GOODS_OUTSIDE_DK,
    "VAT on services purchased abroad subject to a reverse charge": b.VAT_SERVICES_REVERSE_CHARGE,
    "Box A - goods": b.BOX_A_GOODS,
    "Box A - services": b.BOX_A_SERVICES,
    "Box B - services": b.BOX_B_SERVICES,
    "Box B - goods": b.BOX_B_GOODS,
    "Box C": b.BOX_C_SERVICES,
    "EU sales with VAT": b.EU_SALES_WITH_VAT,
    "EU sales exclusive of VAT": b.EU_SALES_WITHOUT_VAT,
}

DANISH_LABELS: dict[str, str] = {
    "Salgsmoms": b.VAT_COLLECTED,
    "Købsmoms": b.VAT_PAID,
    "Moms af varekøb i udlandet (både EU og lande uden for EU)": b.VAT_GOODS_OUTSIDE_DK,
    "Moms af ydelseskøb i udlandet med omvendt betalingspligt": b.VAT_SERVICES_REVERSE_CHARGE,
    "Rubrik A - varer": b.BOX_A_GOODS,
    "Rubrik A - ydelser": b.BOX_A_SERVICES,
    "Rubrik B - ydelser": b.BOX_B_SERVICES,
    "Rubrik B - varer": b.BOX_B_GOODS,
    "Rubrik C": b.BOX_C_SERVICES,
    "EU-salg med moms": b.EU_SALES_WITH_VAT,
    "EU-salg uden moms": b.EU_SALES_WITHOUT_VAT,
}

EU_SALES_WITHOUT_VAT_NOTICE = (
    "Report the value of your sale in two different places in E-tax for businesses:\n"
    "\n"
    "In your VAT return within the normal deadlines that apply to your business.\n"
    "Under 'EU-salg uden moms' (EU sales exclusive of VAT) by the 25th day of each month."
)


def round_krone(value: Decimal) -> int:
    """Round to whole kroner, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_boxes(tax_return: TaxReturn) -> dict[str, int]:
    return {name: round_krone(value) for name, value in tax_return.boxes().items()}


def labelled(rounded: Mapping[str, int], label_set: LabelSet) -> dict[str, int]:
    """Re-key rounded boxes under a human label set. ``keys`` returns box names."""
    if label_set == "keys":
        return dict(rounded)
    labels = ENGLISH_LABELS if label_set == "english" else DANISH_LABELS
    return {label: rounded[box] for label, box in labels.items()}


def notices(tax_return: TaxReturn) -> list[str]:
    """Reminders for the filer, decided on the unrounded boxes."""
    messages: list[str] = []
    if tax_return[b.EU_SALES_WITHOUT_VAT] != 0:
        messages.append(EU_SALES_WITHOUT_VAT_NOTICE)
    return messages


def format_boxes(values: Mapping[str, int]) -> str:
    """Format one label set as ``label: value`` lines."""
    width = max((len(label) for label in values), default=0)
    return "\n".join(f"{label.ljust(width)}  {value}" for label, value in values.items()) + "\n"


def format_json(rounded: Mapping[str, int], label_sets: tuple[LabelSet, ...], reverse_charge_total: int) -> str:
    payload: dict[str, object] = {label_set: labelled(rounded, label_set) for label_set in label_sets}
    payload["reverse-charge-total"] = reverse_charge_total
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
