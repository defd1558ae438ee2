"""Convert foreign currency amounts into pounds using HMRC monthly rates."""

from __future__ import annotations

import argparse
import sys
from datetime import date
from typing import Sequence, TextIO

from hmrc_rates import HMRCRates
from hmrc_rates.core.resolver import normalise_currency
from hmrc_rates.errors import ConversionError, CurrencyNotFound
from hmrc_rates.utils.logger import get_logger, set_verbosity

LOGGER = get_logger(__name__)

__all__ = ["parse_args", "main"]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="hmrc-rates", description=__doc__)
    parser.add_argument(
        "--data-dir",
        dest="data_dir",
        default=None,
        help="Directory of HMRC monthly XML files (defaults to the bundled data)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level for hmrc_rates",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser("convert", help="Convert 'VALUE CURRENCY' into GBP")
    convert_parser.add_argument("value", help="Amount and currency, e.g. '100.00 USD'")
    convert_parser.add_argument(
        "--date",
        dest="on_date",
        type=date.fromisoformat,
        default=None,
        help="Conversion date (YYYY-MM-DD); defaults to today",
    )
    convert_parser.add_argument(
        "--exact",
        action="store_true",
        help="Print the unrounded result instead of rounding to pence",
    )

    rates_parser = subparsers.add_parser("rates", help="Show the rates in effect on a date")
    rates_parser.add_argument(
        "--date",
        dest="on_date",
        type=date.fromisoformat,
        default=None,
        help="Date (YYYY-MM-DD); defaults to today",
    )
    rates_parser.add_argument(
        "--currency",
        dest="currencies",
        action="append",
        default=None,
        help="Restrict output to this currency code (repeatable)",
    )
    return parser.parse_args(argv)


def _run_convert(rates: HMRCRates, args: argparse.Namespace, out: TextIO) -> None:
    result = rates.convert_text(args.value, args.on_date or date.today())
    out.write(f"{result if args.exact else result.rounded(2)}\n")


def _run_rates(rates: HMRCRates, args: argparse.Namespace, out: TextIO) -> None:
    on_date = args.on_date or date.today()
    snapshot = rates.snapshot(on_date)
    selected = snapshot["rates"]
    if args.currencies:
        codes = [normalise_currency(code) for code in args.currencies]
        for code in codes:
            if code not in selected:
                raise CurrencyNotFound(code, on_date, snapshot["period_start"])
        selected = {code: selected[code] for code in codes}
    end = snapshot["period_end"]
    out.write(
        f"Period {snapshot['period_start'].isoformat()} until "
        f"{end.isoformat() if end else 'open'} ({snapshot['quotation']})\n"
    )
    for code, value in selected.items():
        out.write(f"{code} {value}\n")


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    set_verbosity(args.log_level)
    try:
        rates = HMRCRates(args.data_dir)
        if args.command == "convert":
            _run_convert(rates, args, sys.stdout)
        else:
            _run_rates(rates, args, sys.stdout)
    except ConversionError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
