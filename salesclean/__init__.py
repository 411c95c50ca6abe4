"""
salesclean - deduplicate, repair and validate a dirty sales extract.
"""

from .pipeline import CleanOutcome, clean, report

__version__ = "0.1.0"

__all__ = [
    "CleanOutcome",
    "clean",
    "report",
]
