"""Public interface for the hmrc_rates package."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from hmrc_rates.core.money import TARGET_CURRENCY, Money
from hmrc_rates.core.resolver import convert, lookup, normalise_currency, normalise_date
from hmrc_rates.core.table import Period, Quotation, RateTable, build
from hmrc_rates.data import DEFAULT_DATA_DIR
from hmrc_rates.errors import (
    ConstructionError,
    ConversionError,
    CurrencyNotFound,
    DateOutOfRange,
    InvalidInputFormat,
)
from hmrc_rates.ingestion.hmrc_xml import HMRCXMLParser, XMLDirectorySource
from hmrc_rates.ingestion.models import RawPeriodRecord
from hmrc_rates.ingestion.strategy import RecordSource
from hmrc_rates.utils.logger import get_logger
from hmrc_rates.utils.notation import parse_amount_currency

LOGGER = get_logger(__name__)

__all__ = [
    "__version__",
    "HMRCRates",
    "Money",
    "Period",
    "Quotation",
    "RateTable",
    "RawPeriodRecord",
    "RecordSource",
    "build",
    "lookup",
    "convert",
    "ConversionError",
    "ConstructionError",
    "InvalidInputFormat",
    "DateOutOfRange",
    "CurrencyNotFound",
]

try:
    __version__ = importlib_metadata.version("hmrc-rates")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


class _StaticSource:
    """Record source over an in-memory sequence."""

    def __init__(self, records: Iterable[RawPeriodRecord | Mapping[str, Any]]) -> None:
        self._records = list(records)

    def records(self) -> Iterable[RawPeriodRecord | Mapping[str, Any]]:
        return iter(self._records)


class HMRCRates:
    """Package facade holding the current rate table.

    The table is built once on construction. :meth:`reload` builds a fresh
    table and publishes it with a single reference assignment, so concurrent
    readers see either the old table or the new one, never a partial build.
    """

    __slots__ = ("source", "quotation", "_table")

    # Provide direct access to the package version as a class attribute.
    __version__ = __version__

    def __init__(
        self,
        data_dir: str | Path | None = None,
        *,
        source: RecordSource | None = None,
        quotation: Quotation = Quotation.INDIRECT,
    ) -> None:
        """Load rates from ``source`` or from the XML files in ``data_dir``.

        With no arguments the XML files bundled in :mod:`hmrc_rates.data` are
        used. HMRC quotes foreign units per pound, hence the INDIRECT default;
        pass ``quotation=Quotation.DIRECT`` for sources quoting pounds per unit.
        """

        if source is not None and data_dir is not None:
            raise ValueError("Pass either data_dir or source, not both")
        self.source: RecordSource = source or XMLDirectorySource(data_dir or DEFAULT_DATA_DIR)
        self.quotation = Quotation(quotation)
        self._table: RateTable = build(self.source.records(), quotation=self.quotation)

    @classmethod
    def from_records(
        cls,
        records: Iterable[RawPeriodRecord | Mapping[str, Any]],
        *,
        quotation: Quotation = Quotation.DIRECT,
    ) -> "HMRCRates":
        """Build from in-memory records, quoted as pounds per unit by default."""

        return cls(source=_StaticSource(records), quotation=quotation)

    @classmethod
    def from_xml(cls, *documents: bytes | str) -> "HMRCRates":
        """Build from one or more HMRC XML documents held in memory."""

        parser = HMRCXMLParser()
        records = [
            parser.parse(document, source=f"document {position}")
            for position, document in enumerate(documents)
        ]
        return cls(source=_StaticSource(records), quotation=Quotation.INDIRECT)

    @property
    def table(self) -> RateTable:
        return self._table

    def reload(self) -> RateTable:
        """Rebuild the table from the configured source and swap it in."""

        table = build(self.source.records(), quotation=self.quotation)
        self._table = table
        LOGGER.info("Reloaded rate table with %s periods", len(table))
        return table

    def rate(self, currency: str, on_date: date | str) -> Decimal:
        """Return the published rate for ``currency`` on ``on_date``."""

        return lookup(self._table, normalise_currency(currency), on_date)

    def convert(self, amount: Decimal | int | str, currency: str, on_date: date | str) -> Money:
        """Convert ``amount`` of ``currency`` into pounds."""

        return convert(amount, currency, on_date, self._table)

    def convert_text(self, value: str, on_date: date | str) -> Money:
        """Convert a ``"VALUE CURRENCY"`` string such as ``"100.00 USD"``."""

        amount, currency = parse_amount_currency(value)
        return convert(amount, currency, on_date, self._table)

    def snapshot(self, on_date: date | str) -> Dict[str, Any]:
        """Return the full period in effect on ``on_date``."""

        table = self._table
        period = table.period_for(normalise_date(on_date))
        return self._snapshot_payload(table, period)

    def history(self, from_date: date | str, to_date: date | str) -> List[Dict[str, Any]]:
        """Return snapshots for every period overlapping the inclusive window."""

        start = normalise_date(from_date)
        end = normalise_date(to_date)
        if start > end:
            raise ValueError("from_date must not be after to_date")
        table = self._table
        snapshots: List[Dict[str, Any]] = []
        for period in table:
            if period.start_date > end:
                break
            period_end = table.end_of(period)
            if period_end is not None and period_end <= start:
                continue
            snapshots.append(self._snapshot_payload(table, period))
        return snapshots

    @staticmethod
    def _snapshot_payload(table: RateTable, period: Period) -> Dict[str, Any]:
        return {
            "period_start": period.start_date,
            "period_end": table.end_of(period),
            "base_currency": TARGET_CURRENCY,
            "quotation": table.quotation.value,
            "rates": dict(sorted(period.rates.items())),
        }
