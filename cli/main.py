#!/usr/bin/env python3

import argparse
from collections.abc import Sequence

from skatmoms.application.vat_return import VatReturnRequest, VatReturnResult, run_vat_return
from skatmoms.domain.presentation import LABEL_SETS, LabelSet, format_boxes, format_json, labelled
from skatmoms.runtime import get_logger

logger = get_logger(__name__)

_LABEL_HEADINGS = {
    "keys": "Boxes",
    "english": "English form",
    "danish": "Dansk formular",
}


def _print_error(error: str) -> None:
    for line in error.splitlines():
        print(line)


def _selected_label_sets(choice: str) -> tuple[LabelSet, ...]:
    if choice == "all":
        return LABEL_SETS
    for label_set in LABEL_SETS:
        if label_set == choice:
            return (label_set,)
    raise ValueError(f"Unknown label set: {choice}")


def _add_period_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--source", help="Ledger CSV URL or file (default: $SHEETS_CSV_URL)")
    parser.add_argument("--from", dest="from_date", help="First day of the period, YYYY-MM-DD (default: $FROM_DATE)")
    parser.add_argument("--to", dest="to_date", help="Last day of the period, YYYY-MM-DD (default: $TO_DATE)")


def _request_from_args(args: argparse.Namespace) -> VatReturnRequest:
    return VatReturnRequest(
        source=args.source,
        from_date=args.from_date,
        to_date=args.to_date,
    )


def _print_report(result: VatReturnResult, label_sets: tuple[LabelSet, ...], as_json: bool) -> None:
    if as_json:
        print(format_json(result.rounded, label_sets, result.reverse_charge_total), end="")
        return

    for index, label_set in enumerate(label_sets):
        if index:
            print()
        print(f"{_LABEL_HEADINGS[label_set]}:")
        print(format_boxes(labelled(result.rounded, label_set)), end="")
    print()
    print(f"Reverse charge VAT added manually (25%): {result.reverse_charge_total}")
    for notice in result.notices:
        print()
        print(notice)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Danish VAT (moms) return from an invoice ledger",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  report      Compute and print the VAT return boxes for a period
  validate    Only check the ledger rows of a period

Settings fall back to SHEETS_CSV_URL, FROM_DATE and TO_DATE, then to
config/skatmoms.toml (or the file named by SKATMOMS_CONFIG).
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    report_parser = subparsers.add_parser("report", help="Compute the VAT return boxes")
    _add_period_arguments(report_parser)
    report_parser.add_argument(
        "--labels",
        choices=[*LABEL_SETS, "all"],
        default="all",
        help="Label set to print (default: all)",
    )
    report_parser.add_argument("--json", action="store_true", help="Print JSON instead of text")

    validate_parser = subparsers.add_parser("validate", help="Validate the ledger rows of a period")
    _add_period_arguments(validate_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    result = run_vat_return(_request_from_args(args))
    if result.status == "error":
        assert result.error is not None
        logger.debug("VAT return failed for period %s", result.period)
        _print_error(result.error)
        return 1

    if args.command == "validate":
        print(f"OK: {result.entry_count} entries for the {result.period} period.")
        return 0

    if args.command == "report":
        _print_report(result, _selected_label_sets(args.labels), args.json)
        return 0

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
