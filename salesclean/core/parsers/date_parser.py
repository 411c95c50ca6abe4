"""
DateParser - day/month/year text to calendar date.
"""

import re
from datetime import date

from .base_parser import BaseParser

DMY_PATTERN = re.compile(r"^([0-9]{1,2})/([0-9]{1,2})/([0-9]{4})$")


class DateParser(BaseParser):
    """
    Parses "DD/MM/YYYY" (one- or two-digit day and month accepted).

    The text is always read as day first; "03/04/2024" is 3 April.
    Impossible dates such as "31/02/2024" yield None.
    """

    def parse(self, value: str | None) -> date | None:
        if value is None:
            return None

        match = DMY_PATTERN.match(value.strip())
        if not match:
            return None

        day, month, year = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            return None

    @property
    def parser_type(self) -> str:
        return "date"
