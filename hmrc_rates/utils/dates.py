"""Date helpers for HMRC period strings and caller supplied dates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

ISO_FORMAT = "%Y-%m-%d"
HMRC_FORMAT = "%d/%b/%Y"
PERIOD_SEPARATOR = " to "


@dataclass(frozen=True)
class DateRange:
    """Container representing a closed date range."""

    start: date
    end: date | None = None


def parse_date(value: str | date) -> date:
    """Parse ``value`` as an ISO (``2025-08-01``) or HMRC (``01/Aug/2025``) date.

    ``datetime`` instances are truncated to their calendar date.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported date value: {value!r}")
    text = value.strip()
    for fmt in (ISO_FORMAT, HMRC_FORMAT):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unparseable date: {value!r}")


def parse_period(value: str) -> DateRange:
    """Parse an HMRC ``Period`` attribute such as ``01/Aug/2025 to 31/Aug/2025``.

    Only the start is mandatory; HMRC files occasionally omit the end.
    """

    if not value or not value.strip():
        raise ValueError("Period attribute is empty")
    start_raw, _, end_raw = value.partition(PERIOD_SEPARATOR)
    start = parse_date(start_raw)
    end = parse_date(end_raw) if end_raw.strip() else None
    if end is not None and end < start:
        raise ValueError(f"Period ends before it starts: {value!r}")
    return DateRange(start=start, end=end)


__all__ = ["DateRange", "parse_date", "parse_period", "ISO_FORMAT", "HMRC_FORMAT"]
