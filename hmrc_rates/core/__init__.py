"""Rate table construction, lookup and conversion."""

from __future__ import annotations

from hmrc_rates.core.money import TARGET_CURRENCY, Money
from hmrc_rates.core.resolver import convert, lookup
from hmrc_rates.core.table import Period, Quotation, RateTable, build

__all__ = [
    "TARGET_CURRENCY",
    "Money",
    "Period",
    "Quotation",
    "RateTable",
    "build",
    "convert",
    "lookup",
]
