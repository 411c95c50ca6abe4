"""
PostgreSQL sink for cleaned sales records.
"""

from .connection import DatabaseConnectionPool
from .sales_writer import SalesWriter

__all__ = [
    "DatabaseConnectionPool",
    "SalesWriter",
]
