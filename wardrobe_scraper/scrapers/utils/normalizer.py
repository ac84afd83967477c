"""Price parsing for localized currency strings."""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Tuple

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class PriceLocale:
    """Number formatting convention of a target market."""

    thousands_separator: str
    decimal_separator: str
    currency_symbols: Tuple[str, ...] = ()


# Brazilian Real: "R$ 1.234,56"
BRL_LOCALE = PriceLocale(
    thousands_separator=".",
    decimal_separator=",",
    currency_symbols=("R$", "$"),
)

ZERO = Decimal("0")


class PriceParser:
    """Best-effort conversion of price strings into Decimal amounts.

    Parsing never raises: anything that is not a finite number comes back
    as zero, which downstream validation treats as an invalid listing.
    """

    @staticmethod
    def parse(text: str, locale: PriceLocale = BRL_LOCALE) -> Decimal:
        """Parse a localized price string.

        Examples (BRL):
        - "R$ 1.234,56" -> 1234.56
        - "R$79,90" -> 79.90
        - "—" -> 0

        Args:
            text: Raw price text as shown on the page
            locale: Separator and currency-symbol policy

        Returns:
            Parsed amount, or Decimal("0") if parsing fails
        """
        if not text:
            return ZERO

        cleaned = text
        for symbol in locale.currency_symbols:
            cleaned = cleaned.replace(symbol, "")
        cleaned = _WHITESPACE.sub("", cleaned)
        cleaned = cleaned.replace(locale.thousands_separator, "")
        cleaned = cleaned.replace(locale.decimal_separator, ".")

        if not cleaned:
            return ZERO

        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            return ZERO

        if not amount.is_finite():
            return ZERO
        return amount
