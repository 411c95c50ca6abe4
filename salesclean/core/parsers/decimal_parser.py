"""
DecimalParser - fixed-point decimal conversion with rounding.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from .base_parser import BaseParser

DECIMAL_PATTERN = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)$")


def quantize(value: Decimal, places: int = 2) -> Decimal:
    """Round half away from zero to a fixed number of fractional digits."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


class DecimalParser(BaseParser):
    """
    Parses plain decimal text ("10", "-3.5", ".25") and rounds it.

    Parameters:
    - places: Fractional digits to keep (default 2)
    - max_value: Exclusive bound on the absolute rounded value (default none)

    Exponents, NaN, infinities, non-ASCII digits and values that cannot be
    held at the requested precision yield None.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)
        self.places = self.parameters.get("places", 2)
        self.max_value = self.parameters.get("max_value")

    def parse(self, value: str | None) -> Decimal | None:
        if value is None:
            return None

        text = value.strip()
        if not DECIMAL_PATTERN.match(text):
            return None

        try:
            number = quantize(Decimal(text), self.places)
        except InvalidOperation:
            return None

        if self.max_value is not None and abs(number) >= self.max_value:
            return None

        return number

    @property
    def parser_type(self) -> str:
        return "decimal"
