"""
Deduplication and record-level cleaning.
"""

from .cleaner import RecordCleaner
from .deduplicator import DeduplicationResult, Deduplicator

__all__ = [
    "RecordCleaner",
    "Deduplicator",
    "DeduplicationResult",
]
