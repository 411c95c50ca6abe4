"""
Base parser interface for all field conversions.

All parsers inherit from BaseParser and implement the parse() method.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseParser(ABC):
    """
    Abstract base class for field parsers.

    A parser is a pure conversion from raw text to a typed value. Unusable
    input yields None instead of an exception, so one malformed field never
    stops the rest of the row from being processed.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        """
        Initialize parser.

        Args:
            field_name: Name of the field being parsed (used in logs and repr)
            parameters: Parser-specific parameters
        """
        self.field_name = field_name
        self.parameters = parameters or {}

    @abstractmethod
    def parse(self, value: str | None) -> Any | None:
        """
        Convert raw text to a typed value.

        Args:
            value: The raw field text, possibly None

        Returns:
            The converted value, or None if the text is absent or invalid
        """
        pass

    @property
    @abstractmethod
    def parser_type(self) -> str:
        """Return the parser type identifier."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field_name}, params={self.parameters})"
