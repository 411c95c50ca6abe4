"""
EmailParser - keeps addresses that contain "@", normalized to lowercase.
"""

from .base_parser import BaseParser


class EmailParser(BaseParser):
    """
    Accepts any text containing "@" and returns it trimmed and lowercased.

    Anything else, e.g. "brownbenjamin", is dropped to None. An address is
    never fabricated or repaired.
    """

    def parse(self, value: str | None) -> str | None:
        if value is None or "@" not in value:
            return None

        return value.strip().lower()

    @property
    def parser_type(self) -> str:
        return "email"
