"""Tests for building the rate table."""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from decimal import Decimal

import pytest

from hmrc_rates.core.table import Period, Quotation, RateTable, build
from hmrc_rates.errors import ConstructionError, ConversionError, DateOutOfRange
from hmrc_rates.ingestion.models import RawPeriodRecord


def test_build_orders_periods_by_start_date() -> None:
    table = build(
        [
            RawPeriodRecord(start_date=date(2025, 9, 1), rates={"USD": "0.73"}),
            RawPeriodRecord(start_date=date(2025, 7, 1), rates={"USD": "0.80"}),
            RawPeriodRecord(start_date=date(2025, 8, 1), rates={"USD": "0.74"}),
        ]
    )

    assert table.dates == (date(2025, 7, 1), date(2025, 8, 1), date(2025, 9, 1))
    assert [period.start_date for period in table] == list(table.dates)
    assert table.earliest == date(2025, 7, 1)
    assert table.latest == date(2025, 9, 1)
    assert len(table) == 3
    assert table.quotation is Quotation.DIRECT


def test_rates_are_stored_as_exact_decimals(scenario_records) -> None:
    table = build(scenario_records)

    rate = table.period_at(date(2025, 8, 1)).rates["USD"]
    assert isinstance(rate, Decimal)
    assert rate == Decimal("0.74")
    assert str(rate) == "0.74"


def test_duplicate_start_date_is_fully_replaced_by_later_record() -> None:
    table = build(
        [
            RawPeriodRecord(start_date=date(2025, 8, 1), rates={"USD": "0.74", "EUR": "0.86"}),
            RawPeriodRecord(start_date=date(2025, 7, 1), rates={"USD": "0.80"}),
            RawPeriodRecord(start_date=date(2025, 8, 1), rates={"JPY": "0.0051"}),
        ]
    )

    assert table.dates == (date(2025, 7, 1), date(2025, 8, 1))
    assert dict(table.period_at(date(2025, 8, 1)).rates) == {"JPY": Decimal("0.0051")}


def test_build_is_deterministic(scenario_records) -> None:
    first = build(scenario_records)
    second = build(scenario_records)

    assert first == second


def test_build_accepts_mappings_and_string_dates() -> None:
    table = build(
        [
            {"start_date": "2025-07-01", "rates": {"USD": Decimal("0.80")}},
            {"start_date": "01/Aug/2025", "rates": {"USD": 1}, "source": "inline"},
            {"start_date": datetime(2025, 9, 1, 12, 30), "rates": {}},
        ]
    )

    assert table.dates == (date(2025, 7, 1), date(2025, 8, 1), date(2025, 9, 1))
    assert table.period_at(date(2025, 8, 1)).rates["USD"] == Decimal(1)
    assert dict(table.period_at(date(2025, 9, 1)).rates) == {}


def test_build_consumes_generators() -> None:
    records = (
        RawPeriodRecord(start_date=date(2025, month, 1), rates={"USD": "0.8"})
        for month in (1, 2, 3)
    )

    assert len(build(records)) == 3


def test_empty_input_builds_empty_table() -> None:
    table = build([])

    assert len(table) == 0
    assert table.earliest is None
    assert table.latest is None
    with pytest.raises(DateOutOfRange):
        table.period_for(date(2025, 1, 1))


@pytest.mark.parametrize(
    "record, message",
    [
        (RawPeriodRecord(start_date="2025-13-01", rates={"USD": "1"}), "Unparseable date"),
        (RawPeriodRecord(start_date="", rates={"USD": "1"}), "Unparseable date"),
        (RawPeriodRecord(start_date=date(2025, 1, 1), rates={"USD": "abc"}), "Failed to parse rate"),
        (RawPeriodRecord(start_date=date(2025, 1, 1), rates={"USD": 0.8}), "Failed to parse rate"),
        (RawPeriodRecord(start_date=date(2025, 1, 1), rates={"USD": True}), "Failed to parse rate"),
        (RawPeriodRecord(start_date=date(2025, 1, 1), rates={"USD": "-1.2"}), "non-negative"),
        (RawPeriodRecord(start_date=date(2025, 1, 1), rates={"USD": "NaN"}), "non-negative"),
        (RawPeriodRecord(start_date=date(2025, 1, 1), rates={"usd": "1"}), "Invalid currency code"),
        (RawPeriodRecord(start_date=date(2025, 1, 1), rates={"US": "1"}), "Invalid currency code"),
        (RawPeriodRecord(start_date=date(2025, 1, 1), rates=["USD"]), "must be a mapping"),  # type: ignore[arg-type]
        ({"rates": {"USD": "1"}}, "requires 'start_date' and 'rates'"),
        (42, "Unsupported record type"),
    ],
)
def test_malformed_record_fails_the_whole_build(record: object, message: str) -> None:
    good = RawPeriodRecord(start_date=date(2024, 12, 1), rates={"USD": "0.8"})

    with pytest.raises(ConstructionError, match=message) as excinfo:
        build([good, record])  # type: ignore[list-item]

    assert excinfo.value.record_index == 1
    assert isinstance(excinfo.value, ConversionError)


def test_construction_error_names_the_source() -> None:
    record = RawPeriodRecord(
        start_date=date(2025, 8, 1), rates={"USD": "x"}, source="exrates-monthly-0825.xml"
    )

    with pytest.raises(ConstructionError) as excinfo:
        build([record])

    assert excinfo.value.source == "exrates-monthly-0825.xml"
    assert "exrates-monthly-0825.xml" in str(excinfo.value)


def test_zero_rate_only_rejected_for_indirect_quotation() -> None:
    record = RawPeriodRecord(start_date=date(2025, 8, 1), rates={"VES": "0"})

    assert build([record]).period_at(date(2025, 8, 1)).rates["VES"] == Decimal(0)
    with pytest.raises(ConstructionError, match="cannot be zero"):
        build([record], quotation=Quotation.INDIRECT)


def test_quotation_accepts_string_values(scenario_records) -> None:
    assert build(scenario_records, quotation="indirect").quotation is Quotation.INDIRECT


def test_table_and_periods_are_read_only(scenario_records) -> None:
    table = build(scenario_records)
    period = table.period_at(date(2025, 7, 1))

    with pytest.raises(dataclasses.FrozenInstanceError):
        table.dates = ()  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        period.start_date = date(2020, 1, 1)  # type: ignore[misc]
    with pytest.raises(TypeError):
        period.rates["USD"] = Decimal("1")  # type: ignore[index]


def test_end_of_is_next_start_or_open(scenario_records) -> None:
    table = build(scenario_records)
    july, august = table.periods

    assert table.end_of(july) == date(2025, 8, 1)
    assert table.end_of(august) is None


def test_period_at_requires_exact_start(scenario_records) -> None:
    table = build(scenario_records)

    assert table.period_at(date(2025, 7, 15)) is None
    assert table.period_at(date(2025, 6, 1)) is None
    assert isinstance(table.period_at(date(2025, 7, 1)), Period)


def test_currencies_union(scenario_records) -> None:
    assert build(scenario_records).currencies() == frozenset({"USD", "EUR"})


def test_period_membership() -> None:
    period = build([RawPeriodRecord(start_date=date(2025, 8, 1), rates={"USD": "1"})]).periods[0]

    assert "USD" in period
    assert "EUR" not in period


def test_default_table_is_empty() -> None:
    assert len(RateTable()) == 0
