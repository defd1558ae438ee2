"""Parsing of ``"VALUE CURRENCY"`` strings such as ``"100.00 USD"``."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from hmrc_rates.errors import InvalidInputFormat


def parse_amount_currency(value: str) -> tuple[Decimal, str]:
    """Split ``value`` into a decimal amount and an upper-cased currency code.

    The code itself is validated later by :func:`hmrc_rates.core.resolver.convert`.
    """

    if not isinstance(value, str):
        raise InvalidInputFormat(value)
    parts = value.split()
    if len(parts) != 2:
        raise InvalidInputFormat(value)
    amount_raw, currency = parts
    try:
        amount = Decimal(amount_raw.replace(",", ""))
    except InvalidOperation:
        raise InvalidInputFormat(value, f"Failed to parse value: '{amount_raw}'") from None
    if not amount.is_finite():
        raise InvalidInputFormat(value, f"Failed to parse value: '{amount_raw}'")
    return amount, currency.upper()


__all__ = ["parse_amount_currency"]
