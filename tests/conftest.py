"""
Pytest configuration and fixtures for salesclean tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
import os
from typing import Generator

import pytest
from pyspark.sql import SparkSession
from testcontainers.postgres import PostgresContainer

from salesclean.core.models import RawRecord


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that require Spark or Docker containers"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that test the full pipeline"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds to run"
    )


# =======================
# RECORD FIXTURES
# =======================

VALID_RAW = {
    "transaction_id": "1001",
    "customer_id": "5021",
    "customer_name": "Benjamin Brown",
    "email": "benjamin.brown@example.com",
    "purchase_date": "27/03/2024",
    "product_id": "310",
    "category": "Electronics",
    "price": "10.00",
    "quantity": "3",
    "total_amount": "30.00",
    "payment_method": "Credit Card",
    "delivery_status": "Delivered",
    "customer_address": "12 High St",
}


@pytest.fixture
def make_raw():
    """
    Factory for RawRecords that are valid unless overridden

    Usage:
        raw = make_raw(quantity="-3", total_amount=None)
    """
    def _make(**overrides) -> RawRecord:
        return RawRecord(**{**VALID_RAW, **overrides})

    return _make


# =======================
# SPARK FIXTURES
# =======================

@pytest.fixture(scope="session")
def spark_session() -> Generator[SparkSession, None, None]:
    """
    Create a Spark session for testing with local mode

    Yields:
        SparkSession configured for local testing
    """
    spark = (
        SparkSession.builder
        .appName("salesclean-test")
        .master("local[2]")
        .config("spark.sql.shuffle.partitions", "2")
        .config("spark.driver.memory", "1g")
        .config("spark.ui.enabled", "false")
        .config("spark.sql.warehouse.dir", "/tmp/spark-warehouse")
        .getOrCreate()
    )

    spark.sparkContext.setLogLevel("WARN")

    yield spark

    spark.stop()


# =======================
# DATABASE FIXTURES (Testcontainers)
# =======================

@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """
    Start PostgreSQL container for integration tests

    Yields:
        PostgresContainer instance
    """
    with PostgresContainer(
        image="postgres:16.2-alpine",
        username="test_salesclean",
        password="test_password",
        dbname="test_salesdb"
    ) as postgres:
        yield postgres


@pytest.fixture
def db_pool(postgres_container):
    """
    Open a connection pool against the test container, dropping the
    cleaned table afterwards
    """
    from salesclean.warehouse import DatabaseConnectionPool

    pool = DatabaseConnectionPool(
        host=postgres_container.get_container_host_ip(),
        port=int(postgres_container.get_exposed_port(5432)),
        database="test_salesdb",
        user="test_salesclean",
        password="test_password",
    )
    pool.open()

    yield pool

    pool.execute_command("DROP TABLE IF EXISTS sales_cleaned")
    pool.close()


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture(scope="session")
def test_data_dir() -> str:
    """
    Get path to test data fixtures directory

    Returns:
        Path to tests/fixtures directory
    """
    return os.path.join(os.path.dirname(__file__), "fixtures")


@pytest.fixture(scope="session")
def dirty_sales_csv(test_data_dir) -> str:
    return os.path.join(test_data_dir, "dirty_sales.csv")


# =======================
# CONFIGURATION FIXTURES
# =======================

@pytest.fixture(scope="session")
def test_env_vars():
    """
    Set test environment variables

    This fixture loads config/test.env and sets environment variables
    """
    from dotenv import load_dotenv

    env_path = os.path.join(
        os.path.dirname(os.path.dirname(__file__)),
        "config",
        "test.env"
    )

    if os.path.exists(env_path):
        load_dotenv(env_path, override=True)
