"""VAT return workflow.

Loads the ledger rows, validates them for the requested period, classifies
and aggregates them, and returns the rounded boxes as a structured result.
"""

from __future__ import annotations

import argparse
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from skatmoms.domain import Period, TaxReturn, VatReturnError, aggregate, classify, validate_records
from skatmoms.domain.presentation import notices, round_boxes, round_krone
from skatmoms.runtime import SourceUnavailable, get_logger, load_rows, resolve_period, resolve_settings

logger = get_logger(__name__)

VatReturnStatus = Literal["ok", "error"]


@dataclass(frozen=True)
class VatReturnRequest:
    """Inputs for the VAT return workflow. Unset fields fall back to env/config."""

    source: str | None = None
    from_date: str | None = None
    to_date: str | None = None


@dataclass(frozen=True)
class VatReturnResult:
    """Outcome of the VAT return workflow."""

    status: VatReturnStatus
    period: Period | None = None
    entry_count: int = 0
    tax_return: TaxReturn | None = None
    rounded: dict[str, int] = field(default_factory=dict)
    reverse_charge_total: int = 0
    notices: tuple[str, ...] = ()
    error: str | None = None


def compute_vat_return(rows: Sequence[Mapping[str, Any]], period: Period) -> tuple[TaxReturn, int]:
    """Validate, classify and aggregate ``rows`` for ``period``.

    Returns:
        Tuple of (unrounded tax return, number of records in the period).

    Raises:
        SchemaError, InvariantViolation: The batch is rejected as a whole.
    """
    records = validate_records(rows, period).raise_for_error()
    logger.info("Found %d entries for the %s period.", len(records), period)
    tax_return = aggregate(classify(record) for record in records)
    return tax_return, len(records)


def run_vat_return(
    request: VatReturnRequest,
    rows: Sequence[Mapping[str, Any]] | None = None,
) -> VatReturnResult:
    """Run the VAT return workflow and return a structured result.

    Args:
        request: Source and period overrides.
        rows: Already-loaded ledger rows. When given, the source is not read.
    """
    try:
        if rows is None:
            settings = resolve_settings(
                source=request.source,
                from_date=request.from_date,
                to_date=request.to_date,
            )
            period = settings.period
        else:
            period = resolve_period(request.from_date, request.to_date)
    except VatReturnError as exc:
        return VatReturnResult(status="error", error=str(exc))

    if rows is None:
        try:
            rows = load_rows(settings.source)
        except SourceUnavailable as exc:
            return VatReturnResult(status="error", period=period, error=str(exc))

    try:
        tax_return, entry_count = compute_vat_return(rows, period)
    except VatReturnError as exc:
        return VatReturnResult(status="error", period=period, error=str(exc))

    rounded = round_boxes(tax_return)
    messages = tuple(notices(tax_return))
    if messages:
        logger.info("EU sales without VAT in the period; they must also be reported monthly.")

    return VatReturnResult(
        status="ok",
        period=period,
        entry_count=entry_count,
        tax_return=tax_return,
        rounded=rounded,
        reverse_charge_total=round_krone(tax_return.reverse_charge_total),
        notices=messages,
    )


def parse_vat_return_request(argv: Sequence[str] | None = None) -> VatReturnRequest:
    """Parse CLI args into a typed request object."""
    parser = argparse.ArgumentParser(description="Compute the Danish VAT return boxes")
    parser.add_argument("--source", help="Ledger CSV URL or file (default: $SHEETS_CSV_URL)")
    parser.add_argument("--from", dest="from_date", help="First day of the period (default: $FROM_DATE)")
    parser.add_argument("--to", dest="to_date", help="Last day of the period (default: $TO_DATE)")
    args = parser.parse_args(argv)
    return VatReturnRequest(source=args.source, from_date=args.from_date, to_date=args.to_date)


def main(argv: Sequence[str] | None = None) -> int:
    request = parse_vat_return_request(argv)
    result = run_vat_return(request)
    if result.status == "ok":
        for name, value in result.rounded.items():
            print(f"{name}: {value}")
        return 0
    assert result.error is not None
    for line in result.error.splitlines():
        logger.error(line)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
