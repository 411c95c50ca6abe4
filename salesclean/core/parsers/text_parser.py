"""
TextParser - trimmed free text with blank handling.
"""

from typing import Any

from .base_parser import BaseParser


class TextParser(BaseParser):
    """
    Trims surrounding whitespace; blank text becomes None.

    Parameters:
    - null_literals: Values treated as absent after trimming, compared
      case-insensitively (e.g. ["NULL"] for a status column exported by a
      database)
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)
        self.null_literals = {
            literal.lower() for literal in self.parameters.get("null_literals", [])
        }

    def parse(self, value: str | None) -> str | None:
        if value is None:
            return None

        text = value.strip()
        if not text or text.lower() in self.null_literals:
            return None

        return text

    @property
    def parser_type(self) -> str:
        return "text"
