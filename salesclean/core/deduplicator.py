"""
First-seen-wins deduplication on transaction_id.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from salesclean.core.models import RawRecord, Rejection, RejectionReason
from salesclean.core.parsers import IntegerParser


@dataclass(frozen=True)
class DeduplicationResult:
    """
    Output of the deduplication stage.

    Attributes:
        survivors: (row_number, record) pairs in input order
        rejections: One DuplicateKey rejection per dropped repeat
    """

    survivors: list[tuple[int, RawRecord]] = field(default_factory=list)
    rejections: list[Rejection] = field(default_factory=list)


class Deduplicator:
    """
    Keeps the first record seen for each parsed transaction_id.

    Input order is the only tie-break, so callers must pass records in the
    order the source supplied them. Records whose transaction_id does not
    parse are passed through untouched; the cleaner rejects them as
    MissingKey, which keeps "no usable key" and "repeated key" apart in the
    report. This stage is sequential by construction and must stay so.
    """

    def __init__(self):
        self.id_parser = IntegerParser("transaction_id")

    def deduplicate(self, records: Iterable[RawRecord]) -> DeduplicationResult:
        """
        Drop repeated transaction_ids in one ordered pass.

        Args:
            records: Raw records in source order

        Returns:
            DeduplicationResult with survivors and DuplicateKey rejections
        """
        seen: dict[int, int] = {}
        result = DeduplicationResult()

        for row_number, record in enumerate(records):
            transaction_id = self.id_parser.parse(record.transaction_id)

            if transaction_id is None:
                result.survivors.append((row_number, record))
            elif transaction_id not in seen:
                seen[transaction_id] = row_number
                result.survivors.append((row_number, record))
            else:
                result.rejections.append(Rejection(
                    transaction_id=transaction_id,
                    reason=RejectionReason.DUPLICATE_KEY,
                    row_number=row_number,
                    message=f"transaction_id {transaction_id} first seen at row {seen[transaction_id]}",
                    raw=record,
                ))

        return result
