"""Error types raised while turning ledger rows into a VAT return."""

from __future__ import annotations

from typing import Any


class VatReturnError(ValueError):
    """Base class for data-quality and usage errors."""


class SchemaError(VatReturnError):
    """A raw row does not fit the invoice record shape."""

    def __init__(self, message: str, *, invoice_id: str | None = None, field: str | None = None) -> None:
        super().__init__(message)
        self.invoice_id = invoice_id
        self.field = field


class InvariantViolation(VatReturnError):
    """A parsed invoice record breaks one of the accounting rules."""

    def __init__(self, invoice_id: str, rule: str, value: Any, reason: str) -> None:
        super().__init__(f"Invalid {rule} {value} for invoice {invoice_id}: {reason}")
        self.invoice_id = invoice_id
        self.rule = rule
        self.value = value
        self.reason = reason


class ConfigurationError(VatReturnError):
    """Required inputs (record source, period) are missing or invalid."""
