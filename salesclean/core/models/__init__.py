"""
Core data models for the sales cleaning pipeline.

All models use Pydantic for runtime validation and type safety.
"""

from .clean_record import CleanRecord
from .cleaning_result import CleaningResult
from .raw_record import RAW_FIELDS, RawRecord
from .rejection import Rejection, RejectionReason

__all__ = [
    "RAW_FIELDS",
    "RawRecord",
    "CleanRecord",
    "Rejection",
    "RejectionReason",
    "CleaningResult",
]
