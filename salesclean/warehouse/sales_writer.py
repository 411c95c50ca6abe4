"""
Idempotent writes of cleaned sales records to PostgreSQL.

Creates the cleaned table with a primary key on transaction_id and
secondary indexes on customer_id and purchase_date, then upserts with
INSERT ... ON CONFLICT so a rerun over the same batch is safe.
"""

from collections.abc import Sequence

from psycopg import sql

from salesclean.core.models import CleanRecord
from salesclean.observability.logger import get_logger
from salesclean.utils.validation import sanitize_sql_identifier

from .connection import DatabaseConnectionPool

logger = get_logger(__name__)

COLUMNS = (
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

CREATE_TABLE = """
    CREATE TABLE IF NOT EXISTS {table} (
        transaction_id   INTEGER        NOT NULL,
        customer_id      INTEGER,
        customer_name    VARCHAR(200),
        email            VARCHAR(200),
        purchase_date    DATE           NOT NULL,
        product_id       INTEGER,
        category         VARCHAR(100)   NOT NULL,
        price            NUMERIC(10, 2),
        quantity         INTEGER        CHECK (quantity >= 0),
        total_amount     NUMERIC(12, 2) CHECK (total_amount >= 0),
        payment_method   VARCHAR(100)   NOT NULL,
        delivery_status  VARCHAR(100)   NOT NULL,
        customer_address VARCHAR(500),
        CONSTRAINT {pk} PRIMARY KEY (transaction_id)
    )
"""

CREATE_INDEXES = (
    "CREATE INDEX IF NOT EXISTS {index} ON {table} (customer_id)",
    "CREATE INDEX IF NOT EXISTS {index} ON {table} (purchase_date)",
)


class SalesWriter:
    """
    Persists CleanRecords to the cleaned sales table.
    """

    def __init__(self, pool: DatabaseConnectionPool, table: str = "sales_cleaned"):
        """
        Initialize sales writer.

        Args:
            pool: Database connection pool
            table: Target table name
        """
        self.pool = pool
        self.table = sanitize_sql_identifier(table, field_name="table")

    def create_table(self) -> None:
        """Create the table and its indexes if they do not exist."""
        table = sql.Identifier(self.table)

        self.pool.execute_command(
            sql.SQL(CREATE_TABLE).format(table=table, pk=sql.Identifier(f"pk_{self.table}"))
        )
        for statement, suffix in zip(CREATE_INDEXES, ("customer", "date")):
            self.pool.execute_command(
                sql.SQL(statement).format(
                    table=table,
                    index=sql.Identifier(f"ix_{self.table}_{suffix}"),
                )
            )

        logger.info(f"Ensured table {self.table}", extra={"table": self.table})

    def write(self, records: Sequence[CleanRecord]) -> int:
        """
        Upsert a batch of cleaned records in one transaction.

        Args:
            records: Cleaned records (transaction_id already unique)

        Returns:
            Number of records written
        """
        if not records:
            return 0

        query = sql.SQL(
            "INSERT INTO {table} ({columns}) VALUES ({values}) "
            "ON CONFLICT (transaction_id) DO UPDATE SET {updates}"
        ).format(
            table=sql.Identifier(self.table),
            columns=sql.SQL(", ").join(map(sql.Identifier, COLUMNS)),
            values=sql.SQL(", ").join(sql.Placeholder() * len(COLUMNS)),
            updates=sql.SQL(", ").join(
                sql.SQL("{col} = EXCLUDED.{col}").format(col=sql.Identifier(name))
                for name in COLUMNS[1:]
            ),
        )

        rows = [tuple(getattr(record, name) for name in COLUMNS) for record in records]

        with self.pool.get_connection() as conn:
            with conn.cursor() as cur:
                cur.executemany(query, rows)
            conn.commit()

        logger.info(f"Wrote {len(rows)} records to {self.table}", extra={"rows": len(rows)})
        return len(rows)

    def count(self) -> int:
        """Return the number of rows in the table."""
        result = self.pool.execute_query(
            sql.SQL("SELECT COUNT(*) AS count FROM {table}").format(table=sql.Identifier(self.table))
        )
        return result[0]["count"]
