"""
CleaningResult model representing the outcome of cleaning one row (ephemeral).
"""

from pydantic import BaseModel, Field, model_validator

from .clean_record import CleanRecord
from .rejection import Rejection


class CleaningResult(BaseModel):
    """
    Outcome of cleaning a single raw row.

    Exactly one of record and rejection is set.

    Attributes:
        row_number: 0-based input position of the raw row
        record: The cleaned row, when it survived
        rejection: Why it was dropped, otherwise
        transformations_applied: Repair stages that changed a value
            (e.g. "quantity_sign_flipped", "total_amount_recomputed")
        warnings: Non-blocking issues (e.g. "customer_id_unparseable")
    """

    row_number: int = Field(..., ge=0)
    record: CleanRecord | None = None
    rejection: Rejection | None = None
    transformations_applied: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_exactly_one_outcome(self):
        """Validate that a result is either a record or a rejection."""
        if (self.record is None) == (self.rejection is None):
            raise ValueError("exactly one of record and rejection must be set")
        return self

    @property
    def passed(self) -> bool:
        return self.record is not None
