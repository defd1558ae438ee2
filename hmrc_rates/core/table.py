"""Immutable, date-ordered store of monthly exchange-rate periods."""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from hmrc_rates.errors import ConstructionError, DateOutOfRange
from hmrc_rates.ingestion.models import RawPeriodRecord
from hmrc_rates.utils.dates import parse_date
from hmrc_rates.utils.logger import get_logger

LOGGER = get_logger(__name__)

CURRENCY_CODE_RE = re.compile(r"^[A-Z]{3}$")


class Quotation(str, Enum):
    """How a stored rate relates a foreign currency to the pound."""

    # pounds per one unit of foreign currency: amount * rate
    DIRECT = "direct"
    # units of foreign currency per one pound (HMRC's convention): amount / rate
    INDIRECT = "indirect"


@dataclass(frozen=True, slots=True)
class Period:
    """Rates in effect from ``start_date`` until the next period starts."""

    start_date: date
    rates: Mapping[str, Decimal] = field(default_factory=lambda: MappingProxyType({}))

    def __contains__(self, currency: object) -> bool:
        return currency in self.rates


@dataclass(frozen=True, slots=True)
class RateTable:
    """Periods keyed by strictly increasing start dates.

    ``dates`` and ``periods`` are parallel tuples; instances are never mutated
    after :func:`build` returns them.
    """

    dates: tuple[date, ...] = ()
    periods: tuple[Period, ...] = ()
    quotation: Quotation = Quotation.DIRECT

    def __len__(self) -> int:
        return len(self.periods)

    def __iter__(self) -> Iterator[Period]:
        return iter(self.periods)

    @property
    def earliest(self) -> date | None:
        return self.dates[0] if self.dates else None

    @property
    def latest(self) -> date | None:
        return self.dates[-1] if self.dates else None

    def period_for(self, on_date: date) -> Period:
        """Return the period whose start is the greatest date ``<= on_date``."""

        index = bisect_right(self.dates, on_date) - 1
        if index < 0:
            raise DateOutOfRange(on_date)
        return self.periods[index]

    def period_at(self, start_date: date) -> Period | None:
        """Return the period starting exactly on ``start_date``, if any."""

        index = bisect_right(self.dates, start_date) - 1
        if index >= 0 and self.dates[index] == start_date:
            return self.periods[index]
        return None

    def end_of(self, period: Period) -> date | None:
        """Exclusive end of ``period``: the next start date, or None when open-ended."""

        index = bisect_right(self.dates, period.start_date)
        if index < len(self.dates):
            return self.dates[index]
        return None

    def currencies(self) -> frozenset[str]:
        return frozenset(code for period in self.periods for code in period.rates)


def build(
    records: Iterable[RawPeriodRecord | Mapping[str, Any]],
    *,
    quotation: Quotation = Quotation.DIRECT,
) -> RateTable:
    """Build a :class:`RateTable` from raw period records.

    Records are applied in input order and a later record fully replaces an
    earlier one with the same start date. Any malformed record aborts the
    whole build with :class:`ConstructionError`.
    """

    quotation = Quotation(quotation)
    by_date: dict[date, Period] = {}
    count = 0
    for index, raw in enumerate(records):
        period = _period_from_record(index, raw, quotation)
        if period.start_date in by_date:
            LOGGER.debug("Record %s replaces period starting %s", index, period.start_date)
        by_date[period.start_date] = period
        count += 1

    ordered = sorted(by_date)
    table = RateTable(
        dates=tuple(ordered),
        periods=tuple(by_date[day] for day in ordered),
        quotation=quotation,
    )
    LOGGER.debug("Built rate table with %s periods from %s records", len(table), count)
    return table


def _period_from_record(index: int, raw: object, quotation: Quotation) -> Period:
    start_raw, rates_raw, source = _unpack_record(index, raw)
    try:
        start_date = parse_date(start_raw)
    except ValueError as exc:
        raise ConstructionError(str(exc), record_index=index, source=source) from exc
    if not isinstance(rates_raw, Mapping):
        raise ConstructionError(
            "Rates must be a mapping of currency code to rate",
            record_index=index,
            source=source,
        )

    rates: dict[str, Decimal] = {}
    for code, value in rates_raw.items():
        if not isinstance(code, str) or not CURRENCY_CODE_RE.match(code):
            raise ConstructionError(
                f"Invalid currency code: {code!r}", record_index=index, source=source
            )
        rates[code] = _parse_rate(index, source, code, value, quotation)
    return Period(start_date=start_date, rates=MappingProxyType(rates))


def _unpack_record(index: int, raw: object) -> tuple[Any, Any, str | None]:
    if isinstance(raw, RawPeriodRecord):
        return raw.start_date, raw.rates, raw.source
    if isinstance(raw, Mapping):
        if "start_date" not in raw or "rates" not in raw:
            raise ConstructionError(
                "Record mapping requires 'start_date' and 'rates' keys", record_index=index
            )
        return raw["start_date"], raw["rates"], raw.get("source")
    raise ConstructionError(f"Unsupported record type: {type(raw).__name__}", record_index=index)


def _parse_rate(
    index: int, source: str | None, code: str, value: object, quotation: Quotation
) -> Decimal:
    # floats are refused; they have already lost the published digits
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, str)):
        raise ConstructionError(
            f"Failed to parse rate for {code}: {value!r}", record_index=index, source=source
        )
    try:
        rate = Decimal(value.strip()) if isinstance(value, str) else Decimal(value)
    except InvalidOperation:
        raise ConstructionError(
            f"Failed to parse rate for {code}: {value!r}", record_index=index, source=source
        ) from None
    if not rate.is_finite() or rate < 0:
        raise ConstructionError(
            f"Rate for {code} must be a finite non-negative decimal: {value!r}",
            record_index=index,
            source=source,
        )
    if quotation is Quotation.INDIRECT and rate == 0:
        raise ConstructionError(
            f"Rate for {code} cannot be zero in an indirect quotation",
            record_index=index,
            source=source,
        )
    return rate


__all__ = ["Quotation", "Period", "RateTable", "build", "CURRENCY_CODE_RE"]
