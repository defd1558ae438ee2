"""Exception types raised by :mod:`hmrc_rates`."""

from __future__ import annotations

from datetime import date


class ConversionError(Exception):
    """Base class for every failure surfaced by the package."""


class ConstructionError(ConversionError, ValueError):
    """Raw period data could not be turned into a rate table."""

    def __init__(
        self,
        message: str,
        *,
        record_index: int | None = None,
        source: str | None = None,
    ) -> None:
        self.record_index = record_index
        self.source = source
        location = []
        if record_index is not None:
            location.append(f"record {record_index}")
        if source:
            location.append(source)
        if location:
            message = f"{message} ({', '.join(location)})"
        super().__init__(message)


class InvalidInputFormat(ConversionError, ValueError):
    """A caller supplied amount, currency code or notation string is malformed."""

    def __init__(self, value: object, detail: str | None = None) -> None:
        self.value = value
        message = detail or f"Invalid input format: '{value}'. Expected format 'VALUE CURRENCY'."
        super().__init__(message)


class DateOutOfRange(ConversionError, LookupError):
    """The requested date precedes the earliest known period."""

    def __init__(self, on_date: date) -> None:
        self.on_date = on_date
        super().__init__(f"No exchange rate data available for date: {on_date.isoformat()}.")


class CurrencyNotFound(ConversionError, LookupError):
    """The period in effect on a date has no rate for the currency."""

    def __init__(self, currency: str, on_date: date, period_start: date | None = None) -> None:
        self.currency = currency
        self.on_date = on_date
        self.period_start = period_start
        super().__init__(f"Currency not found: '{currency}' for date {on_date.isoformat()}.")


__all__ = [
    "ConversionError",
    "ConstructionError",
    "InvalidInputFormat",
    "DateOutOfRange",
    "CurrencyNotFound",
]
