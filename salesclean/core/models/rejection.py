"""
Rejection model describing why a raw row did not reach the cleaned table.
"""

from enum import Enum

from pydantic import BaseModel, Field

from .raw_record import RawRecord


class RejectionReason(str, Enum):
    """Terminal reasons a row is dropped. Rejected rows are counted, never retried."""

    MISSING_KEY = "MissingKey"
    UNPARSABLE_DATE = "UnparsableDate"
    DUPLICATE_KEY = "DuplicateKey"
    ZERO_SIGNAL_ROW = "ZeroSignalRow"


class Rejection(BaseModel):
    """
    A dropped row with enough context to audit the decision.

    Attributes:
        transaction_id: Parsed key, None when the key itself was unusable
        reason: Why the row was dropped
        row_number: 0-based position of the row in the loader's order
        message: Human-readable detail
        raw: The row as supplied
    """

    transaction_id: int | None = None
    reason: RejectionReason
    row_number: int = Field(..., ge=0)
    message: str = ""
    raw: RawRecord

    class Config:
        frozen = True
