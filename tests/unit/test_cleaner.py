"""
Unit tests for RecordCleaner.

Covers each parsing step, the repair pass and the rejection rules.
"""

from datetime import date
from decimal import Decimal

import pytest

from salesclean.config import CleaningConfig
from salesclean.core.cleaner import RecordCleaner
from salesclean.core.models import RejectionReason


@pytest.fixture
def cleaner():
    return RecordCleaner()


class TestKeysAndRejections:
    """Tests for load-bearing fields"""

    def test_valid_row_is_cleaned(self, cleaner, make_raw):
        result = cleaner.clean(make_raw())

        assert result.passed
        record = result.record
        assert record.transaction_id == 1001
        assert record.customer_id == 5021
        assert record.product_id == 310
        assert record.purchase_date == date(2024, 3, 27)
        assert record.price == Decimal("10.00")
        assert record.quantity == 3
        assert record.total_amount == Decimal("30.00")
        assert result.transformations_applied == []
        assert result.warnings == []

    @pytest.mark.parametrize("transaction_id", [None, "", "  ", "TXN1001", "10.5"])
    def test_unusable_transaction_id_is_missing_key(self, cleaner, make_raw, transaction_id):
        result = cleaner.clean(make_raw(transaction_id=transaction_id), row_number=4)

        assert not result.passed
        assert result.rejection.reason == RejectionReason.MISSING_KEY
        assert result.rejection.transaction_id is None
        assert result.rejection.row_number == 4

    def test_invalid_calendar_date_is_rejected(self, cleaner, make_raw):
        """31 February does not exist"""
        result = cleaner.clean(make_raw(purchase_date="31/02/2024"))

        assert result.rejection.reason == RejectionReason.UNPARSABLE_DATE
        assert result.rejection.transaction_id == 1001

    def test_iso_date_is_rejected(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(purchase_date="2024-03-27"))
        assert result.rejection.reason == RejectionReason.UNPARSABLE_DATE

    def test_bad_customer_and_product_ids_are_flagged_not_rejected(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(customer_id="abc", product_id=""))

        assert result.passed
        assert result.record.customer_id is None
        assert result.record.product_id is None
        assert result.warnings == ["customer_id_unparseable", "product_id_unparseable"]

    def test_zero_quantity_and_total_is_rejected(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(quantity="0", total_amount="0"))
        assert result.rejection.reason == RejectionReason.ZERO_SIGNAL_ROW

    def test_zero_quantity_with_nonzero_total_is_repaired_then_rejected(self, cleaner, make_raw):
        """price 10 * quantity 0 disagrees with total 5, so total becomes 0"""
        result = cleaner.clean(make_raw(quantity="0", total_amount="5"))
        assert result.rejection.reason == RejectionReason.ZERO_SIGNAL_ROW

    def test_zero_quantity_without_total_and_price_survives(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(quantity="0", total_amount=None, price=None))

        assert result.passed
        assert result.record.quantity == 0
        assert result.record.total_amount is None


class TestTextFields:
    """Tests for name, address, email, category and status"""

    def test_name_and_address_trimmed(self, cleaner, make_raw):
        record = cleaner.clean(make_raw(customer_name="  Ann  ", customer_address=" 1 Road ")).record
        assert record.customer_name == "Ann"
        assert record.customer_address == "1 Road"

    def test_blank_name_and_address_absent(self, cleaner, make_raw):
        record = cleaner.clean(make_raw(customer_name="   ", customer_address="")).record
        assert record.customer_name is None
        assert record.customer_address is None

    def test_email_without_at_is_absent_not_an_error(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(email="brownbenjamin"))

        assert result.passed
        assert result.record.email is None
        assert "email_dropped" in result.transformations_applied

    def test_email_lowercased_and_trimmed(self, cleaner, make_raw):
        record = cleaner.clean(make_raw(email=" Ben@Example.COM ")).record
        assert record.email == "ben@example.com"

    def test_blank_category_defaults_to_unknown(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(category="  "))
        assert result.record.category == "Unknown"
        assert "category_defaulted" in result.transformations_applied

    def test_category_trimmed(self, cleaner, make_raw):
        assert cleaner.clean(make_raw(category=" Sports ")).record.category == "Sports"

    @pytest.mark.parametrize("status", [None, "", "  ", "NULL", "null"])
    def test_missing_status_defaults_to_unknown(self, cleaner, make_raw, status):
        record = cleaner.clean(make_raw(delivery_status=status)).record
        assert record.delivery_status == "Unknown"

    def test_status_trimmed(self, cleaner, make_raw):
        assert cleaner.clean(make_raw(delivery_status=" Shipped ")).record.delivery_status == "Shipped"


class TestPaymentMethod:
    """Tests for payment method normalization"""

    def test_cc_maps_to_credit_card(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(payment_method="CC"))
        assert result.record.payment_method == "Credit Card"
        assert "payment_method_mapped" in result.transformations_applied

    def test_unmapped_value_passes_through(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(payment_method="Cash"))
        assert result.record.payment_method == "Cash"
        assert "payment_method_mapped" not in result.transformations_applied

    def test_missing_value_is_unknown(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(payment_method=" "))
        assert result.record.payment_method == "Unknown"
        assert "payment_method_defaulted" in result.transformations_applied

    def test_configured_alias(self, make_raw):
        cleaner = RecordCleaner(CleaningConfig(payment_aliases={"visa": "Credit Card"}))
        assert cleaner.clean(make_raw(payment_method="VISA")).record.payment_method == "Credit Card"


class TestRepairPass:
    """Tests for returns, sign normalization and total/price consistency"""

    def test_negative_quantity_marks_return(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(quantity="-3", total_amount=None, delivery_status=None))
        record = result.record

        assert record.quantity == 3
        assert record.total_amount == Decimal("30.00")
        assert record.delivery_status == "Returned"
        assert result.transformations_applied[:2] == [
            "quantity_sign_flipped", "delivery_status_marked_returned",
        ]

    def test_negative_quantity_keeps_explicit_status(self, cleaner, make_raw):
        record = cleaner.clean(make_raw(quantity="-3", total_amount="-30", delivery_status="Delivered")).record

        assert record.quantity == 3
        assert record.total_amount == Decimal("30.00")
        assert record.delivery_status == "Delivered"

    def test_null_literal_status_counts_as_missing_for_returns(self, cleaner, make_raw):
        record = cleaner.clean(make_raw(quantity="-1", total_amount="-10", delivery_status="NULL")).record
        assert record.delivery_status == "Returned"

    def test_negative_total_with_positive_quantity_is_flipped(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(price=None, quantity="2", total_amount="-20"))

        assert result.record.total_amount == Decimal("20.00")
        assert result.record.price == Decimal("10.00")
        assert "total_amount_sign_flipped" in result.transformations_applied

    def test_negative_price_is_flipped(self, cleaner, make_raw):
        record = cleaner.clean(make_raw(price="-10")).record
        assert record.price == Decimal("10.00")
        assert record.total_amount == Decimal("30.00")

    def test_mismatched_total_is_recomputed(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(price="12.345", quantity="3", total_amount="10.00"))

        assert result.record.price == Decimal("12.35")
        assert result.record.total_amount == Decimal("37.05")
        assert "total_amount_recomputed" in result.transformations_applied

    def test_total_within_tolerance_is_kept(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(price="9.99", quantity="3", total_amount="29.98"))

        assert result.record.total_amount == Decimal("29.98")
        assert "total_amount_recomputed" not in result.transformations_applied

    def test_total_just_beyond_tolerance_is_recomputed(self, cleaner, make_raw):
        record = cleaner.clean(make_raw(price="10", quantity="3", total_amount="30.06")).record
        assert record.total_amount == Decimal("30.00")

    def test_total_left_alone_without_quantity(self, cleaner, make_raw):
        record = cleaner.clean(make_raw(quantity="two", total_amount="17.50")).record

        assert record.quantity is None
        assert record.total_amount == Decimal("17.50")

    def test_missing_total_stays_missing_without_price(self, cleaner, make_raw):
        record = cleaner.clean(make_raw(price="n/a", total_amount=None)).record

        assert record.price is None
        assert record.total_amount is None

    def test_price_back_derived_from_total(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(price=None, quantity="4", total_amount="40.00"))

        assert result.record.price == Decimal("10.00")
        assert result.transformations_applied == ["price_back_derived"]

    def test_back_derived_price_rounding_keeps_total_consistent(self, cleaner, make_raw):
        """1.00 / 1000 rounds to a 0.00 price, so the total is brought in line"""
        record = cleaner.clean(make_raw(price=None, quantity="1000", total_amount="1.00")).record

        assert record.price == Decimal("0.00")
        assert abs(record.total_amount - record.price * record.quantity) <= Decimal("0.05")

    def test_no_back_derivation_for_zero_quantity(self, cleaner, make_raw):
        record = cleaner.clean(make_raw(price=None, quantity="0", total_amount="12")).record

        assert record.price is None
        assert record.total_amount == Decimal("12.00")

    def test_custom_tolerance(self, make_raw):
        cleaner = RecordCleaner(CleaningConfig(total_tolerance=Decimal("1.00")))
        record = cleaner.clean(make_raw(price="10", quantity="3", total_amount="30.90")).record
        assert record.total_amount == Decimal("30.90")

    def test_raw_record_is_not_modified(self, cleaner, make_raw):
        raw = make_raw(quantity="-3")
        cleaner.clean(raw)
        assert raw.quantity == "-3"


class TestOutOfRangeValues:
    """Values the cleaned table cannot hold become absent instead of failing"""

    @pytest.mark.parametrize("transaction_id", ["1" * 5000, "2147483648", "-2147483649"])
    def test_out_of_range_transaction_id_is_missing_key(self, cleaner, make_raw, transaction_id):
        result = cleaner.clean(make_raw(transaction_id=transaction_id))

        assert result.rejection.reason == RejectionReason.MISSING_KEY

    def test_out_of_range_customer_id_is_flagged(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(customer_id="99999999999"))

        assert result.record.customer_id is None
        assert result.warnings == ["customer_id_unparseable"]

    def test_price_beyond_precision_is_absent(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(price="1" * 30, quantity="3", total_amount="30.00"))

        assert result.passed
        # re-derived from the total
        assert result.record.price == Decimal("10.00")

    def test_quantity_beyond_precision_is_absent(self, cleaner, make_raw):
        record = cleaner.clean(make_raw(quantity="9" * 30, total_amount="30.00")).record

        assert record.quantity is None
        assert record.total_amount == Decimal("30.00")

    def test_most_negative_quantity_is_absent(self, cleaner, make_raw):
        assert cleaner.clean(make_raw(quantity="-2147483648")).record.quantity is None
        assert cleaner.clean(make_raw(quantity="-2147483647", price="0")).record.quantity == 2147483647

    def test_recomputed_total_too_large_is_dropped(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(price="99999999.99", quantity="1000", total_amount="5"))

        assert result.record.price == Decimal("99999999.99")
        assert result.record.total_amount is None
        assert result.transformations_applied == ["total_amount_dropped"]

    def test_missing_total_too_large_stays_missing(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(price="99999999.99", quantity="1000", total_amount=None))

        assert result.record.total_amount is None
        assert result.transformations_applied == []

    def test_back_derived_price_too_large_is_not_derived(self, cleaner, make_raw):
        result = cleaner.clean(make_raw(price=None, quantity="1", total_amount="9999999999.99"))

        assert result.record.price is None
        assert result.record.total_amount == Decimal("9999999999.99")
        assert "price_back_derived" not in result.transformations_applied

    def test_dropped_total_is_stable_on_reclean(self, cleaner, make_raw):
        record = cleaner.clean(make_raw(price="99999999.99", quantity="1000", total_amount="5")).record

        assert cleaner.clean(record.to_raw()).record == record
