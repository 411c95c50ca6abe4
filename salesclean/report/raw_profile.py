"""
Exploration profile of a raw batch, taken before any cleaning.

Answers the questions an analyst asks of a fresh extract: how many rows,
which columns are blank, which keys repeat, how many emails and quantities
are obviously broken, and how messy the categorical columns are.
"""

from collections import Counter
from collections.abc import Sequence

from pydantic import BaseModel, Field

from salesclean.core.models import RAW_FIELDS, RawRecord
from salesclean.core.parsers import IntegerParser


class RawProfile(BaseModel):
    """
    Summary of a raw batch.

    Attributes:
        total_rows: Rows in the batch
        blank_counts: Per column, values that are missing or whitespace-only
        duplicate_ids: Raw transaction_id text -> occurrences, for repeats only
        invalid_emails: Non-blank emails without "@"
        negative_quantities: Quantities that parse as negative integers
        payment_method_counts: Distinct raw payment_method values
        delivery_status_counts: Distinct raw delivery_status values
        category_counts: Distinct raw category values
    """

    total_rows: int = Field(..., ge=0)
    blank_counts: dict[str, int]
    duplicate_ids: dict[str, int]
    invalid_emails: int = Field(..., ge=0)
    negative_quantities: int = Field(..., ge=0)
    payment_method_counts: dict[str, int]
    delivery_status_counts: dict[str, int]
    category_counts: dict[str, int]

    class Config:
        frozen = True


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _distinct(records: Sequence[RawRecord], name: str) -> dict[str, int]:
    # blank and missing values are grouped under ""
    counts = Counter((getattr(r, name) or "") for r in records)
    return dict(sorted(counts.items(), key=lambda item: item[0]))


def profile_raw(records: Sequence[RawRecord]) -> RawProfile:
    """Profile a raw batch without modifying it."""
    quantity_parser = IntegerParser("quantity")

    id_counts = Counter(r.transaction_id for r in records if not _is_blank(r.transaction_id))
    negative = 0
    for r in records:
        quantity = quantity_parser.parse(r.quantity)
        if quantity is not None and quantity < 0:
            negative += 1

    return RawProfile(
        total_rows=len(records),
        blank_counts={
            name: sum(1 for r in records if _is_blank(getattr(r, name)))
            for name in RAW_FIELDS
        },
        duplicate_ids=dict(sorted(
            ((tid, n) for tid, n in id_counts.items() if n > 1),
            key=lambda item: (-item[1], item[0]),
        )),
        invalid_emails=sum(
            1 for r in records if not _is_blank(r.email) and "@" not in r.email
        ),
        negative_quantities=negative,
        payment_method_counts=_distinct(records, "payment_method"),
        delivery_status_counts=_distinct(records, "delivery_status"),
        category_counts=_distinct(records, "category"),
    )
