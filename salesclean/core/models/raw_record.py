"""
RawRecord model representing one untrusted row of the sales extract.
"""

from typing import Any

from pydantic import BaseModel

RAW_FIELDS = (
    "transaction_id",
    "customer_id",
    "customer_name",
    "email",
    "purchase_date",
    "product_id",
    "category",
    "price",
    "quantity",
    "total_amount",
    "payment_method",
    "delivery_status",
    "customer_address",
)


class RawRecord(BaseModel):
    """
    A single row exactly as the source supplied it.

    Every field is free-form text and may be missing, empty or malformed.
    No invariants are enforced here; parsing happens in the cleaner.

    Attributes:
        transaction_id: Business key, expected to be an integer
        customer_id: Expected integer
        customer_name: Free text
        email: Expected to contain "@"
        purchase_date: Day/month/year text, e.g. "27/03/2024"
        product_id: Expected integer
        category: Free text, often blank
        price: Decimal text
        quantity: Integer text, negative for returns
        total_amount: Decimal text, expected to equal price * quantity
        payment_method: Free text with inconsistent spellings
        delivery_status: Free text, sometimes the literal "NULL"
        customer_address: Free text
    """

    transaction_id: str | None = None
    customer_id: str | None = None
    customer_name: str | None = None
    email: str | None = None
    purchase_date: str | None = None
    product_id: str | None = None
    category: str | None = None
    price: str | None = None
    quantity: str | None = None
    total_amount: str | None = None
    payment_method: str | None = None
    delivery_status: str | None = None
    customer_address: str | None = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "transaction_id": "1001",
                "customer_id": "5021",
                "customer_name": "  Benjamin Brown ",
                "email": "brownbenjamin",
                "purchase_date": "27/03/2024",
                "product_id": "310",
                "category": "",
                "price": "10",
                "quantity": "-3",
                "total_amount": "",
                "payment_method": "CC",
                "delivery_status": "NULL",
                "customer_address": "12 High St",
            }
        }

    @classmethod
    def from_mapping(cls, row: dict[str, Any]) -> "RawRecord":
        """
        Build a RawRecord from a loader row (CSV dict, Spark Row.asDict()).

        Columns outside RAW_FIELDS are dropped and non-null values are
        rendered as text, so loaders that infer types cannot leak them in.
        """
        return cls(**{
            field: None if row.get(field) is None else str(row[field])
            for field in RAW_FIELDS
        })
