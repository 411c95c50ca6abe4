"""
Quality report for a finished cleaning run.

Pure aggregation over the cleaned records and rejections; nothing here
mutates its inputs or feeds back into cleaning.
"""

from collections import Counter, defaultdict
from collections.abc import Callable, Sequence
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from salesclean.core.models import CleaningResult, CleanRecord, Rejection, RejectionReason
from salesclean.core.parsers.decimal_parser import quantize

NULLABLE_FIELDS = (
    "customer_id",
    "customer_name",
    "email",
    "product_id",
    "category",
    "price",
    "quantity",
    "total_amount",
    "payment_method",
    "delivery_status",
    "customer_address",
)


class GroupStats(BaseModel):
    """
    Count and averages for one value of a categorical column.

    Averages skip missing values and are None when the group has none.
    """

    key: str
    count: int = Field(..., ge=0)
    avg_price: Decimal | None = None
    avg_total_amount: Decimal | None = None


class QualityReport(BaseModel):
    """
    Aggregate statistics of a cleaning run.

    Attributes:
        raw_rows: Rows supplied by the source
        cleaned_rows: Rows in the cleaned table
        rejected_rows: Rows dropped for any reason
        rejections_by_reason: Count per RejectionReason value, zero-filled
        null_counts: Remaining missing values per nullable column
        by_category: Group stats ordered by count descending, then key
        by_payment_method: As above
        by_delivery_status: As above
        transformation_counts: Rows touched per repair stage
        warning_counts: Rows per non-blocking warning
        out_of_range_dates: transaction_ids dated after as_of or before the
            minimum valid date (flagged, not removed)
        as_of: Reference date for the date range check
    """

    raw_rows: int = Field(..., ge=0)
    cleaned_rows: int = Field(..., ge=0)
    rejected_rows: int = Field(..., ge=0)
    rejections_by_reason: dict[str, int]
    null_counts: dict[str, int]
    by_category: list[GroupStats]
    by_payment_method: list[GroupStats]
    by_delivery_status: list[GroupStats]
    transformation_counts: dict[str, int] = Field(default_factory=dict)
    warning_counts: dict[str, int] = Field(default_factory=dict)
    out_of_range_dates: list[int] = Field(default_factory=list)
    as_of: date

    class Config:
        frozen = True


def _average(values: list[Decimal]) -> Decimal | None:
    if not values:
        return None
    return quantize(sum(values, Decimal(0)) / len(values))


def group_stats(
    records: Sequence[CleanRecord],
    key: Callable[[CleanRecord], str],
) -> list[GroupStats]:
    """Group records by a categorical key and compute count and averages."""
    groups: dict[str, list[CleanRecord]] = defaultdict(list)
    for record in records:
        groups[key(record)].append(record)

    stats = [
        GroupStats(
            key=name,
            count=len(members),
            avg_price=_average([r.price for r in members if r.price is not None]),
            avg_total_amount=_average([r.total_amount for r in members if r.total_amount is not None]),
        )
        for name, members in groups.items()
    ]
    return sorted(stats, key=lambda s: (-s.count, s.key))


def build_quality_report(
    raw_count: int,
    cleaned: Sequence[CleanRecord],
    rejections: Sequence[Rejection | RejectionReason | str],
    results: Sequence[CleaningResult] = (),
    as_of: date | None = None,
    min_valid_date: date = date(2000, 1, 1),
) -> QualityReport:
    """
    Summarize a cleaning run.

    Args:
        raw_count: Number of rows the source supplied
        cleaned: Cleaned records
        rejections: Rejection values or bare reasons
        results: Per-row cleaner results, for repair and warning counts
        as_of: Reference date for future-date flagging (default today)
        min_valid_date: Earliest plausible purchase date

    Returns:
        QualityReport
    """
    if raw_count < 0:
        raise ValueError(f"raw_count must be non-negative, got {raw_count}")

    as_of = as_of or date.today()

    reasons = Counter(
        r.reason if isinstance(r, Rejection) else RejectionReason(r)
        for r in rejections
    )

    null_counts = {
        name: sum(1 for record in cleaned if getattr(record, name) is None)
        for name in NULLABLE_FIELDS
    }

    transformation_counts = Counter(
        stage for result in results for stage in set(result.transformations_applied)
    )
    warning_counts = Counter(
        warning for result in results for warning in set(result.warnings)
    )

    out_of_range = [
        record.transaction_id
        for record in cleaned
        if record.purchase_date > as_of or record.purchase_date < min_valid_date
    ]

    return QualityReport(
        raw_rows=raw_count,
        cleaned_rows=len(cleaned),
        rejected_rows=sum(reasons.values()),
        rejections_by_reason={reason.value: reasons.get(reason, 0) for reason in RejectionReason},
        null_counts=null_counts,
        by_category=group_stats(cleaned, lambda r: r.category),
        by_payment_method=group_stats(cleaned, lambda r: r.payment_method),
        by_delivery_status=group_stats(cleaned, lambda r: r.delivery_status),
        transformation_counts=dict(sorted(transformation_counts.items())),
        warning_counts=dict(sorted(warning_counts.items())),
        out_of_range_dates=out_of_range,
        as_of=as_of,
    )
