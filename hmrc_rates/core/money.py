"""Pound-denominated conversion results."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal

TARGET_CURRENCY = "GBP"
CURRENCY_SYMBOL = "£"


@dataclass(frozen=True, slots=True, order=True)
class Money:
    """Decimal amount in the target currency, produced by conversions."""

    amount: Decimal
    currency: str = TARGET_CURRENCY

    def rounded(self, places: int = 2) -> "Money":
        """Return a copy rounded half-to-even to ``places`` decimal places."""

        if places < 0:
            raise ValueError("places must not be negative")
        exponent = Decimal(1).scaleb(-places)
        return Money(self.amount.quantize(exponent, rounding=ROUND_HALF_EVEN), self.currency)

    def __str__(self) -> str:
        return f"{CURRENCY_SYMBOL}{self.amount}"


__all__ = ["Money", "TARGET_CURRENCY"]
