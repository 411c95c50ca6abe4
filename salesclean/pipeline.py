"""
Cleaning pipeline orchestration.

Coordinates the flow: raw records → deduplicate → clean → report
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date

from salesclean.config import CleaningConfig
from salesclean.core.cleaner import RecordCleaner
from salesclean.core.deduplicator import Deduplicator
from salesclean.core.models import CleaningResult, CleanRecord, RawRecord, Rejection
from salesclean.observability.logger import get_logger, log_operation
from salesclean.report.quality_report import QualityReport, build_quality_report

logger = get_logger(__name__)


@dataclass(frozen=True)
class CleanOutcome:
    """
    Result of a cleaning run.

    Unpacks as ``cleaned, rejections = outcome``.

    Attributes:
        cleaned: Surviving records in source order
        rejections: Every dropped row (duplicates included) in source order
        results: Per-row results of the cleaner, with audit trail
    """

    cleaned: list[CleanRecord] = field(default_factory=list)
    rejections: list[Rejection] = field(default_factory=list)
    results: list[CleaningResult] = field(default_factory=list)

    def __iter__(self):
        yield self.cleaned
        yield self.rejections


class CleaningPipeline:
    """
    Runs deduplication and record cleaning over one batch.

    Flow:
    1. Deduplicate on transaction_id, first occurrence wins
    2. Clean every survivor independently
    3. Collect cleaned records and rejections, both in source order

    Row-level problems never abort the run; every rejection is reported.
    """

    def __init__(self, config: CleaningConfig | None = None):
        self.config = config or CleaningConfig()
        self.deduplicator = Deduplicator()
        self.cleaner = RecordCleaner(self.config)

    def clean(self, records: Iterable[RawRecord]) -> CleanOutcome:
        """
        Clean an ordered batch of raw records.

        Args:
            records: Raw records in the order the source supplied them

        Returns:
            CleanOutcome with cleaned records, rejections and per-row results
        """
        records = list(records)

        with log_operation("Deduplicating records", logger=logger, raw_rows=len(records)) as op:
            deduped = self.deduplicator.deduplicate(records)
            op.add_fields(duplicates=len(deduped.rejections), survivors=len(deduped.survivors))

        with log_operation("Cleaning records", logger=logger, rows=len(deduped.survivors)) as op:
            results = [
                self.cleaner.clean(raw, row_number)
                for row_number, raw in deduped.survivors
            ]
            rejected = Counter(
                result.rejection.reason.value for result in results if not result.passed
            )
            op.add_fields(
                cleaned_rows=len(results) - sum(rejected.values()),
                rejected_by_reason=dict(rejected),
            )

        cleaned = [result.record for result in results if result.passed]
        rejections = sorted(
            deduped.rejections + [result.rejection for result in results if not result.passed],
            key=lambda rejection: rejection.row_number,
        )

        logger.info(
            f"Cleaning complete: {len(cleaned)} cleaned, {len(rejections)} rejected",
            extra={"cleaned_rows": len(cleaned), "rejected_rows": len(rejections)},
        )

        return CleanOutcome(cleaned=cleaned, rejections=rejections, results=results)

    def report(
        self,
        raw_count: int,
        cleaned: Sequence[CleanRecord],
        rejections: Sequence[Rejection],
        results: Sequence[CleaningResult] = (),
        as_of: date | None = None,
    ) -> QualityReport:
        """Build the quality report for a finished run."""
        return build_quality_report(
            raw_count,
            cleaned,
            rejections,
            results=results,
            as_of=as_of,
            min_valid_date=self.config.min_valid_date,
        )


def clean(records: Iterable[RawRecord], config: CleaningConfig | None = None) -> CleanOutcome:
    """Deduplicate and clean an ordered batch of raw records."""
    return CleaningPipeline(config).clean(records)


def report(
    raw_count: int,
    cleaned: Sequence[CleanRecord],
    rejections: Sequence[Rejection],
    results: Sequence[CleaningResult] = (),
    as_of: date | None = None,
    config: CleaningConfig | None = None,
) -> QualityReport:
    """Summarize a cleaning run for inspection."""
    return CleaningPipeline(config).report(raw_count, cleaned, rejections, results, as_of)
