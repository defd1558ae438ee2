"""Data models shared across ingestion modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Mapping

RateValue = Decimal | int | str


@dataclass(slots=True)
class RawPeriodRecord:
    """One published rate table before validation.

    ``start_date`` may still be a string and ``rates`` may hold rate strings
    exactly as they appeared in the source document; the table builder turns
    them into dates and decimals and rejects anything malformed.
    """

    start_date: date | str
    rates: Mapping[str, RateValue] = field(default_factory=dict)
    source: str | None = None
