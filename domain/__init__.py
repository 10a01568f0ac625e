"""Core domain models and rules for the Danish VAT return.

This package is pure: no I/O, no configuration, no runtime imports.
- InvoiceRecord, parse_invoice_row: typed ledger rows
- validate_records: period filter + accounting invariants
- classify: EU/DK facets derived from the VAT number
- aggregate: classified records -> TaxReturn boxes

Usage:
    from skatmoms.domain import Period, aggregate, classify, validate_records
"""

from skatmoms.domain.boxes import BOX_NAMES, BaseBoxes, TaxReturn, aggregate
from skatmoms.domain.classification import ClassifiedRecord, classify, normalize_vat_number
from skatmoms.domain.errors import ConfigurationError, InvariantViolation, SchemaError, VatReturnError
from skatmoms.domain.invoice import InvoiceRecord, InvoiceType, parse_invoice_row
from skatmoms.domain.presentation import round_boxes
from skatmoms.domain.reverse_charge import estimate_reverse_charge, select_vat
from skatmoms.domain.validation import Period, ValidationResult, validate_record, validate_records

__all__ = [
    "BOX_NAMES",
    "BaseBoxes",
    "TaxReturn",
    "aggregate",
    "ClassifiedRecord",
    "classify",
    "normalize_vat_number",
    "ConfigurationError",
    "InvariantViolation",
    "SchemaError",
    "VatReturnError",
    "InvoiceRecord",
    "InvoiceType",
    "parse_invoice_row",
    "round_boxes",
    "estimate_reverse_charge",
    "select_vat",
    "Period",
    "ValidationResult",
    "validate_record",
    "validate_records",
]
