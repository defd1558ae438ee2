"""Readers for HMRC monthly exchange-rate XML documents.

HMRC publishes one document per month::

    <exchangeRateMonthList Period="01/Aug/2025 to 31/Aug/2025">
      <exchangeRate>
        <countryName>USA</countryName>
        <currencyCode>USD</currencyCode>
        <rateNew>1.3541</rateNew>
      </exchangeRate>
      ...
    </exchangeRateMonthList>

``rateNew`` is quoted as units of the foreign currency per one pound, so
tables built from these documents use :attr:`Quotation.INDIRECT`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from bs4 import BeautifulSoup
from lxml import etree

from hmrc_rates.errors import ConstructionError
from hmrc_rates.ingestion.models import RawPeriodRecord
from hmrc_rates.utils.dates import parse_period
from hmrc_rates.utils.logger import get_logger

LOGGER = get_logger(__name__)

ROOT_TAG = "exchangeRateMonthList"
PERIOD_ATTRIBUTE = "Period"
RATE_TAG = "exchangeRate"
CODE_TAG = "currencyCode"
VALUE_TAG = "rateNew"


@dataclass(slots=True)
class HMRCXMLParser:
    """Turn a single HMRC XML document into a :class:`RawPeriodRecord`."""

    features: str = "xml"

    def parse(self, data: bytes | str, *, source: str | None = None) -> RawPeriodRecord:
        document = data.encode("utf-8") if isinstance(data, str) else data
        self._check_well_formed(document, source)
        soup = BeautifulSoup(document, self.features)
        root = soup.find(ROOT_TAG)
        if root is None:
            raise ConstructionError(f"Missing <{ROOT_TAG}> element", source=source)

        period_raw = root.get(PERIOD_ATTRIBUTE)
        if not period_raw:
            raise ConstructionError(f"Missing {PERIOD_ATTRIBUTE} attribute", source=source)
        try:
            period = parse_period(str(period_raw))
        except ValueError as exc:
            raise ConstructionError(f"Invalid Period format: {exc}", source=source) from exc

        rates: dict[str, str] = {}
        for position, node in enumerate(root.find_all(RATE_TAG)):
            code_node = node.find(CODE_TAG)
            value_node = node.find(VALUE_TAG)
            code = code_node.get_text(strip=True) if code_node is not None else ""
            value = value_node.get_text(strip=True) if value_node is not None else ""
            if not code or not value:
                raise ConstructionError(
                    f"<{RATE_TAG}> entry {position} lacks <{CODE_TAG}> or <{VALUE_TAG}>",
                    source=source,
                )
            rates[code] = value
        return RawPeriodRecord(start_date=period.start, rates=rates, source=source)

    @staticmethod
    def _check_well_formed(document: bytes, source: str | None) -> None:
        # bs4 repairs broken markup, so truncated files must be caught here
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        try:
            etree.fromstring(document, parser)
        except etree.XMLSyntaxError as exc:
            raise ConstructionError(f"Failed to parse XML data: {exc}", source=source) from exc

    def parse_file(self, path: str | Path) -> RawPeriodRecord:
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(file_path)
        return self.parse(file_path.read_bytes(), source=file_path.name)


class XMLDirectorySource:
    """Record source yielding one period per ``*.xml`` file, in file-name order."""

    def __init__(
        self,
        directory: str | Path,
        *,
        pattern: str = "*.xml",
        parser: HMRCXMLParser | None = None,
    ) -> None:
        self.directory = Path(directory)
        self.pattern = pattern
        self.parser = parser or HMRCXMLParser()

    def paths(self) -> list[Path]:
        if not self.directory.is_dir():
            raise ConstructionError(f"Rate data directory not found: {self.directory}")
        return sorted(path for path in self.directory.glob(self.pattern) if path.is_file())

    def records(self) -> Iterator[RawPeriodRecord]:
        paths = self.paths()
        if not paths:
            LOGGER.warning("No HMRC rate files matching %s in %s", self.pattern, self.directory)
            return
        for path in paths:
            yield self.parser.parse_file(path)
        LOGGER.info("Loaded %s HMRC rate files from %s", len(paths), self.directory)


__all__ = ["HMRCXMLParser", "XMLDirectorySource"]
