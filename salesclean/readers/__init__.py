"""
Source loaders for raw sales records.
"""

from .csv_reader import CSVReader, SourceReadError

__all__ = [
    "CSVReader",
    "SourceReadError",
]
