"""
Fallible field parsers.

Each parser turns one raw text value into a typed value, or None when the
text cannot be converted. Parsers never raise on bad data.
"""

from .base_parser import BaseParser
from .date_parser import DateParser
from .decimal_parser import DecimalParser
from .email_parser import EmailParser
from .integer_parser import IntegerParser
from .text_parser import TextParser

__all__ = [
    "BaseParser",
    "IntegerParser",
    "DecimalParser",
    "DateParser",
    "EmailParser",
    "TextParser",
]
