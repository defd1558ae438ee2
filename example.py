from datetime import date
from decimal import Decimal

from hmrc_rates import HMRCRates, Quotation, RawPeriodRecord

print(HMRCRates.__version__)  # 0.1.0

# Default usage: HMRC XML files bundled under hmrc_rates/data
rates = HMRCRates()
print(rates.convert_text("100.00 USD", date(2025, 8, 15)).rounded())
# => £73.85

# Full period in effect on a date
print(rates.snapshot(date(2025, 8, 15)))
# => {'period_start': date(2025, 8, 1), 'period_end': None, 'base_currency': 'GBP', ...}

# Pass data_dir to read a directory of exrates-monthly-MMYY.xml downloads instead,
# e.g. HMRCRates("path/to/hmrc-xml")

# In-memory records quoted as pounds per foreign unit
rates = HMRCRates.from_records(
    [
        RawPeriodRecord(start_date=date(2025, 7, 1), rates={"USD": "0.80"}),
        RawPeriodRecord(start_date=date(2025, 8, 1), rates={"USD": "0.74", "EUR": "0.86"}),
    ],
    quotation=Quotation.DIRECT,
)
print(rates.convert(Decimal("100.00"), "USD", date(2025, 8, 15)))
# => £74.0000
