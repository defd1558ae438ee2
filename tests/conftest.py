from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable

import pytest

from hmrc_rates.ingestion.models import RawPeriodRecord


def render_hmrc_xml(period: str, rates: dict[str, str]) -> bytes:
    entries = "".join(
        "<exchangeRate>"
        f"<countryName>Somewhere</countryName><currencyName>Unit</currencyName>"
        f"<currencyCode>{code}</currencyCode><rateNew>{value}</rateNew>"
        "</exchangeRate>"
        for code, value in rates.items()
    )
    document = (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<exchangeRateMonthList Period="{period}">{entries}</exchangeRateMonthList>'
    )
    return document.encode("utf-8")


@pytest.fixture
def xml_document() -> Callable[[str, dict[str, str]], bytes]:
    return render_hmrc_xml


@pytest.fixture
def scenario_records() -> list[RawPeriodRecord]:
    return [
        RawPeriodRecord(start_date=date(2025, 7, 1), rates={"USD": "0.80"}),
        RawPeriodRecord(start_date=date(2025, 8, 1), rates={"USD": "0.74", "EUR": "0.86"}),
    ]


@pytest.fixture
def hmrc_data_dir(tmp_path: Path) -> Path:
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "exrates-monthly-0725.xml").write_bytes(
        render_hmrc_xml("01/Jul/2025 to 31/Jul/2025", {"USD": "1.3650", "EUR": "1.1650"})
    )
    (data_dir / "exrates-monthly-0825.xml").write_bytes(
        render_hmrc_xml("01/Aug/2025 to 31/Aug/2025", {"USD": "1.3541", "EUR": "1.1547"})
    )
    return data_dir
