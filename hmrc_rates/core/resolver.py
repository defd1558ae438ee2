"""Rate resolution and currency conversion against a :class:`RateTable`."""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation, localcontext

from hmrc_rates.core.money import Money
from hmrc_rates.core.table import CURRENCY_CODE_RE, Quotation, RateTable
from hmrc_rates.errors import CurrencyNotFound, InvalidInputFormat
from hmrc_rates.utils.dates import parse_date


def lookup(table: RateTable, currency: str, on_date: date | str) -> Decimal:
    """Return the rate for ``currency`` in the period in effect on ``on_date``.

    The period is the one with the latest start date not after ``on_date``; a
    currency missing from that period is an error even when an earlier
    period lists it.
    """

    day = normalise_date(on_date)
    period = table.period_for(day)
    rate = period.rates.get(currency)
    if rate is None:
        raise CurrencyNotFound(currency, day, period.start_date)
    return rate


def convert(
    amount: Decimal | int | str,
    currency: str,
    on_date: date | str,
    table: RateTable,
) -> Money:
    """Convert ``amount`` of ``currency`` into pounds using ``table``."""

    code = normalise_currency(currency)
    value = normalise_amount(amount)
    day = normalise_date(on_date)
    rate = lookup(table, code, day)
    if table.quotation is Quotation.INDIRECT:
        return Money(value / rate)
    with localcontext() as ctx:
        # enough digits that the product is never rounded
        ctx.prec = max(ctx.prec, len(value.as_tuple().digits) + len(rate.as_tuple().digits))
        return Money(value * rate)


def normalise_currency(currency: object) -> str:
    if not isinstance(currency, str):
        raise InvalidInputFormat(currency, f"Invalid currency code: {currency!r}")
    code = currency.strip().upper()
    if not CURRENCY_CODE_RE.match(code):
        raise InvalidInputFormat(currency, f"Invalid currency code: {currency!r}")
    return code


def normalise_amount(amount: object) -> Decimal:
    if isinstance(amount, bool) or not isinstance(amount, (Decimal, int, str)):
        raise InvalidInputFormat(amount, f"Amount must be a Decimal, int or string: {amount!r}")
    try:
        value = Decimal(amount.strip()) if isinstance(amount, str) else Decimal(amount)
    except InvalidOperation:
        raise InvalidInputFormat(amount, f"Failed to parse value: {amount!r}") from None
    if not value.is_finite():
        raise InvalidInputFormat(amount, f"Amount must be finite: {amount!r}")
    return value


def normalise_date(on_date: object) -> date:
    try:
        return parse_date(on_date)  # type: ignore[arg-type]
    except ValueError as exc:
        raise InvalidInputFormat(on_date, str(exc)) from exc


__all__ = ["lookup", "convert", "normalise_currency", "normalise_amount", "normalise_date"]
