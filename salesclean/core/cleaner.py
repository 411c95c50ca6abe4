"""
Record-level cleaning: parse, repair and validate one raw sales row.

RecordCleaner.clean() is a pure function of its input row. It never looks at
other rows and never raises on bad data; problems come back as a Rejection or
as warnings on the CleaningResult.
"""

from decimal import Decimal

from salesclean.config import CleaningConfig
from salesclean.core.mappings import PaymentMethodMapper, build_alias_table
from salesclean.core.models import (
    CleaningResult,
    CleanRecord,
    RawRecord,
    Rejection,
    RejectionReason,
)
from salesclean.core.parsers import (
    DateParser,
    DecimalParser,
    EmailParser,
    IntegerParser,
    TextParser,
)
from salesclean.core.parsers.decimal_parser import quantize
from salesclean.core.parsers.integer_parser import INT32_MAX
from salesclean.observability.logger import get_logger

logger = get_logger(__name__)

# Largest magnitudes the cleaned table can hold: NUMERIC(10, 2) and NUMERIC(12, 2)
MAX_PRICE = Decimal("1e8")
MAX_TOTAL = Decimal("1e10")


class RecordCleaner:
    """
    Turns a RawRecord into a CleanRecord or a Rejection.

    Order of work:
    1. Parse keys (transaction_id is load-bearing, the other ids are not)
    2. Trim name and address
    3. Keep the email only if it contains "@"
    4. Parse purchase_date (load-bearing)
    5-7. Parse category, money fields, quantity and status
    8. Repair: return rows, sign normalization, total/price consistency,
       defaults for categorical fields
    9. Reject rows with zero quantity and zero total
    """

    def __init__(self, config: CleaningConfig | None = None):
        self.config = config or CleaningConfig()

        self.int_parser = IntegerParser("id")
        self.price_parser = DecimalParser("price", {"places": 2, "max_value": MAX_PRICE})
        self.total_parser = DecimalParser("total_amount", {"places": 2, "max_value": MAX_TOTAL})
        # abs() of the result must still fit the column
        self.quantity_parser = IntegerParser("quantity", {"min_value": -INT32_MAX})
        self.date_parser = DateParser("purchase_date")
        self.email_parser = EmailParser("email")
        self.text_parser = TextParser("text")
        self.status_parser = TextParser(
            "delivery_status", {"null_literals": self.config.null_literals}
        )
        self.payment_mapper = PaymentMethodMapper(
            build_alias_table(extra=self.config.payment_aliases),
            default=self.config.default_label,
        )

    def clean(self, raw: RawRecord, row_number: int = 0) -> CleaningResult:
        """
        Clean a single raw row.

        Args:
            raw: The untrusted input row
            row_number: Position of the row in source order, carried into
                rejections for auditing

        Returns:
            CleaningResult holding either the cleaned record or the rejection
        """
        applied: list[str] = []
        warnings: list[str] = []

        # Step 1: keys
        transaction_id = self.int_parser.parse(raw.transaction_id)
        if transaction_id is None:
            return self._reject(
                raw, row_number, None, RejectionReason.MISSING_KEY,
                f"transaction_id {raw.transaction_id!r} is not an integer",
            )

        customer_id = self.int_parser.parse(raw.customer_id)
        if customer_id is None:
            warnings.append("customer_id_unparseable")
        product_id = self.int_parser.parse(raw.product_id)
        if product_id is None:
            warnings.append("product_id_unparseable")

        # Step 2: free text
        customer_name = self.text_parser.parse(raw.customer_name)
        customer_address = self.text_parser.parse(raw.customer_address)

        # Step 3: email
        email = self.email_parser.parse(raw.email)
        if email is None and self.text_parser.parse(raw.email) is not None:
            applied.append("email_dropped")

        # Step 4: date
        purchase_date = self.date_parser.parse(raw.purchase_date)
        if purchase_date is None:
            return self._reject(
                raw, row_number, transaction_id, RejectionReason.UNPARSABLE_DATE,
                f"purchase_date {raw.purchase_date!r} is not a valid DD/MM/YYYY date",
            )

        # Steps 5-7: remaining fields
        category = self.text_parser.parse(raw.category)
        price = self.price_parser.parse(raw.price)
        total_amount = self.total_parser.parse(raw.total_amount)
        quantity = self.quantity_parser.parse(raw.quantity)
        delivery_status = self.status_parser.parse(raw.delivery_status)

        # Step 8a: negative quantity is a return
        if quantity is not None and quantity < 0:
            quantity = abs(quantity)
            applied.append("quantity_sign_flipped")
            if total_amount is not None and total_amount < 0:
                total_amount = abs(total_amount)
                applied.append("total_amount_sign_flipped")
            if delivery_status is None:
                delivery_status = self.config.returned_status
                applied.append("delivery_status_marked_returned")

        # Money is never negative in the cleaned table
        if price is not None and price < 0:
            price = abs(price)
            applied.append("price_sign_flipped")
        if total_amount is not None and total_amount < 0:
            total_amount = abs(total_amount)
            applied.append("total_amount_sign_flipped")

        # Step 8b: total must agree with price * quantity
        total_amount = self._repair_total(price, quantity, total_amount, applied)

        # Step 8c: back-derive a missing price
        if price is None and total_amount is not None and quantity:
            derived = quantize(total_amount / quantity)
            if derived < MAX_PRICE:
                price = derived
                applied.append("price_back_derived")
                # the derived price is rounded, so re-check the total against it
                total_amount = self._repair_total(price, quantity, total_amount, applied)

        # Steps 8d-8f: categorical defaults
        if category is None:
            category = self.config.default_label
            applied.append("category_defaulted")

        payment_method = self.payment_mapper.normalize(raw.payment_method)
        original_payment = self.text_parser.parse(raw.payment_method)
        if original_payment is None:
            applied.append("payment_method_defaulted")
        elif payment_method != original_payment:
            applied.append("payment_method_mapped")

        if delivery_status is None:
            delivery_status = self.config.default_label
            applied.append("delivery_status_defaulted")

        # Step 9: rows with no signal
        if quantity == 0 and total_amount is not None and total_amount == 0:
            return self._reject(
                raw, row_number, transaction_id, RejectionReason.ZERO_SIGNAL_ROW,
                "quantity and total_amount are both zero",
            )

        record = CleanRecord(
            transaction_id=transaction_id,
            customer_id=customer_id,
            customer_name=customer_name,
            email=email,
            purchase_date=purchase_date,
            product_id=product_id,
            category=category,
            price=price,
            quantity=quantity,
            total_amount=total_amount,
            payment_method=payment_method,
            delivery_status=delivery_status,
            customer_address=customer_address,
        )

        return CleaningResult(
            row_number=row_number,
            record=record,
            transformations_applied=applied,
            warnings=warnings,
        )

    def _repair_total(
        self,
        price: Decimal | None,
        quantity: int | None,
        total_amount: Decimal | None,
        applied: list[str],
    ) -> Decimal | None:
        """
        Recompute total_amount when it is missing or off by more than the tolerance.

        A recomputed total too large for the table leaves total_amount absent.
        """
        if price is None or quantity is None:
            return total_amount

        if total_amount is not None and abs(total_amount - price * quantity) <= self.config.total_tolerance:
            return total_amount

        expected = quantize(price * quantity)
        if expected >= MAX_TOTAL:
            if total_amount is not None:
                applied.append("total_amount_dropped")
            return None

        applied.append("total_amount_recomputed")
        return expected

    def _reject(
        self,
        raw: RawRecord,
        row_number: int,
        transaction_id: int | None,
        reason: RejectionReason,
        message: str,
    ) -> CleaningResult:
        logger.debug(
            f"Rejected row {row_number}: {reason.value}",
            extra={"row_number": row_number, "reason": reason.value, "detail": message},
        )
        return CleaningResult(
            row_number=row_number,
            rejection=Rejection(
                transaction_id=transaction_id,
                reason=reason,
                row_number=row_number,
                message=message,
                raw=raw,
            ),
        )
