"""
CleanRecord model representing a validated, typed, repaired sales row.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from .raw_record import RawRecord


class CleanRecord(BaseModel):
    """
    Typed projection of a RawRecord after parsing and repair.

    Produced once by the cleaner and never mutated afterwards; further
    corrections produce a new value.

    Attributes:
        transaction_id: Primary key
        customer_id: None when the source value was unparseable
        customer_name: Trimmed, None when blank
        email: Lowercase and trimmed, None unless it contained "@"
        purchase_date: Calendar date
        product_id: None when the source value was unparseable
        category: "Unknown" when blank
        price: Two fractional digits, possibly back-derived from the total
        quantity: Absolute value of the source quantity
        total_amount: Two fractional digits, consistent with price * quantity
        payment_method: Canonical name, trimmed passthrough or "Unknown"
        delivery_status: Trimmed status, "Returned" or "Unknown"
        customer_address: Trimmed, None when blank
    """

    transaction_id: int
    customer_id: int | None = None
    customer_name: str | None = None
    email: str | None = None
    purchase_date: date
    product_id: int | None = None
    category: str
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    quantity: int | None = Field(None, ge=0)
    total_amount: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    payment_method: str
    delivery_status: str
    customer_address: str | None = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "transaction_id": 1001,
                "customer_id": 5021,
                "customer_name": "Benjamin Brown",
                "email": None,
                "purchase_date": "2024-03-27",
                "product_id": 310,
                "category": "Unknown",
                "price": "10.00",
                "quantity": 3,
                "total_amount": "30.00",
                "payment_method": "Credit Card",
                "delivery_status": "Returned",
                "customer_address": "12 High St",
            }
        }

    @field_validator("email")
    @classmethod
    def check_email_has_at(cls, v):
        """An email is either absent or contains '@'."""
        if v is not None and "@" not in v:
            raise ValueError(f"email '{v}' does not contain '@'")
        return v

    def to_raw(self) -> RawRecord:
        """
        Re-encode as source text (dates as DD/MM/YYYY, decimals with 2 dp).

        Cleaning the result again yields an equal CleanRecord.
        """
        def text(value) -> str | None:
            return None if value is None else str(value)

        d = self.purchase_date

        return RawRecord(
            transaction_id=str(self.transaction_id),
            customer_id=text(self.customer_id),
            customer_name=self.customer_name,
            email=self.email,
            purchase_date=f"{d.day:02d}/{d.month:02d}/{d.year:04d}",
            product_id=text(self.product_id),
            category=self.category,
            price=text(self.price),
            quantity=text(self.quantity),
            total_amount=text(self.total_amount),
            payment_method=self.payment_method,
            delivery_status=self.delivery_status,
            customer_address=self.customer_address,
        )
