"""Abstractions for pluggable raw period sources."""

from __future__ import annotations

from typing import Iterable, Protocol

from hmrc_rates.ingestion.models import RawPeriodRecord


class RecordSource(Protocol):
    """Contract for anything that can supply raw period records.

    Implementations may read bundled files, a config-selected directory or an
    in-memory fixture. Records are consumed in the order they are yielded,
    which decides which record wins when two share a start date.
    """

    def records(self) -> Iterable[RawPeriodRecord]:
        ...  # pragma: no cover - protocol definition


__all__ = ["RecordSource"]
