"""
IntegerParser - strict integer conversion.
"""

import re
from typing import Any

from .base_parser import BaseParser

INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")

# PostgreSQL INTEGER
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


class IntegerParser(BaseParser):
    """
    Parses an optionally signed run of ASCII digits after trimming.

    Parameters:
    - min_value: Smallest accepted value (default INT32_MIN)
    - max_value: Largest accepted value (default INT32_MAX)

    Decimal points, exponents, thousands separators, underscores and
    non-ASCII digits are rejected, so "3.0" and "1_000" both yield None.
    Values outside the range yield None as well.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)
        self.min_value = self.parameters.get("min_value", INT32_MIN)
        self.max_value = self.parameters.get("max_value", INT32_MAX)
        self.max_digits = max(len(str(abs(self.min_value))), len(str(abs(self.max_value))))

    def parse(self, value: str | None) -> int | None:
        if value is None:
            return None

        text = value.strip()
        if not INTEGER_PATTERN.match(text):
            return None

        # bound the digit count before int() so huge inputs stay cheap
        if len(text.lstrip("+-").lstrip("0")) > self.max_digits:
            return None

        number = int(text)
        if not self.min_value <= number <= self.max_value:
            return None

        return number

    @property
    def parser_type(self) -> str:
        return "integer"
