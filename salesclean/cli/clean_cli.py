"""
Command-line interface for cleaning the sales extract.

Usage:
    python -m salesclean.cli.clean_cli profile --input <file_path>
    python -m salesclean.cli.clean_cli process --input <file_path> [options]
"""

import argparse
import sys
from pathlib import Path

from psycopg import OperationalError
from pyspark.sql import SparkSession

from salesclean.config import load_config
from salesclean.observability.logger import get_logger
from salesclean.pipeline import CleaningPipeline
from salesclean.readers import CSVReader, SourceReadError
from salesclean.report import QualityReport, profile_raw
from salesclean.utils.validation import validate_file_path
from salesclean.warehouse import DatabaseConnectionPool, SalesWriter

logger = get_logger(__name__)


def create_spark_session(app_name: str = "SalesClean") -> SparkSession:
    """
    Create a local Spark session for reading the source file.

    Args:
        app_name: Application name

    Returns:
        SparkSession
    """
    spark = SparkSession.builder \
        .appName(app_name) \
        .master("local[1]") \
        .config("spark.ui.enabled", "false") \
        .getOrCreate()

    spark.sparkContext.setLogLevel("WARN")
    return spark


def _resolve_input(path_arg: str) -> Path:
    input_path = Path(validate_file_path(path_arg, field_name="input"))
    if not input_path.exists():
        raise SourceReadError(f"Input file not found: {path_arg}")
    return input_path


def log_report(report: QualityReport) -> None:
    """Render the quality report as log lines."""
    logger.info("=" * 60)
    logger.info("CLEANING COMPLETE")
    logger.info("=" * 60)
    logger.info(f"Raw rows: {report.raw_rows}")
    logger.info(f"Cleaned rows: {report.cleaned_rows}")
    for reason, count in report.rejections_by_reason.items():
        logger.info(f"Rejected ({reason}): {count}")
    logger.info("Remaining nulls", extra={"null_counts": report.null_counts})
    logger.info("Repairs applied", extra={"transformation_counts": report.transformation_counts})
    for title, groups in (
        ("category", report.by_category),
        ("payment_method", report.by_payment_method),
        ("delivery_status", report.by_delivery_status),
    ):
        for group in groups:
            logger.info(
                f"{title}={group.key}: {group.count} rows",
                extra={
                    "group": title,
                    "key": group.key,
                    "count": group.count,
                    "avg_price": str(group.avg_price),
                    "avg_total_amount": str(group.avg_total_amount),
                },
            )
    if report.out_of_range_dates:
        logger.warning(
            f"{len(report.out_of_range_dates)} records have implausible purchase dates",
            extra={"transaction_ids": report.out_of_range_dates},
        )
    logger.info("=" * 60)


def profile_command(args) -> None:
    """Log an exploration profile of the raw file."""
    input_path = _resolve_input(args.input)

    spark = create_spark_session("SalesClean-profile")
    try:
        records = CSVReader(spark).read_records(str(input_path))
    finally:
        spark.stop()

    profile = profile_raw(records)
    logger.info("Raw profile", extra=profile.model_dump())


def process_command(args) -> None:
    """Clean the file, report on it and (unless dry-run) persist the result."""
    input_path = _resolve_input(args.input)
    config = load_config(args.config)

    spark = create_spark_session("SalesClean-process")
    try:
        records = CSVReader(spark).read_records(str(input_path))
    finally:
        spark.stop()

    pipeline = CleaningPipeline(config)
    outcome = pipeline.clean(records)
    report = pipeline.report(len(records), outcome.cleaned, outcome.rejections, outcome.results)
    log_report(report)

    if args.report_json:
        Path(args.report_json).write_text(report.model_dump_json(indent=2))
        logger.info(f"Report written to {args.report_json}")

    if args.dry_run:
        logger.info("DRY RUN: No data was written to the database")
        return

    pool = DatabaseConnectionPool(
        host=args.db_host,
        port=args.db_port,
        database=args.db_name,
        user=args.db_user,
        password=args.db_password,
    )
    pool.open()
    try:
        writer = SalesWriter(pool, table=args.table)
        writer.create_table()
        writer.write(outcome.cleaned)
    finally:
        pool.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Clean a dirty sales extract",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Look at the raw data first
  python -m salesclean.cli.clean_cli profile --input data/sales.csv

  # Clean and report without touching the database
  python -m salesclean.cli.clean_cli process --input data/sales.csv --dry-run \\
      --report-json out/report.json

  # Clean with extra payment aliases and load into PostgreSQL
  python -m salesclean.cli.clean_cli process --input data/sales.csv \\
      --config config/cleaning.yaml
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    profile_parser = subparsers.add_parser("profile", help="Profile a raw file")
    profile_parser.add_argument("--input", required=True, help="Path to input CSV")

    process_parser = subparsers.add_parser("process", help="Clean a raw file")
    process_parser.add_argument("--input", required=True, help="Path to input CSV")
    process_parser.add_argument(
        "--config",
        default=None,
        help="Path to cleaning configuration YAML (default: built-in settings)"
    )
    process_parser.add_argument("--report-json", default=None, help="Write the quality report as JSON")
    process_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Clean and report without writing to the database"
    )
    process_parser.add_argument("--table", default="sales_cleaned", help="Target table (default: sales_cleaned)")

    # Database connection arguments; unset values fall back to DB_* env vars
    process_parser.add_argument("--db-host", default=None, help="Database host")
    process_parser.add_argument("--db-port", type=int, default=None, help="Database port")
    process_parser.add_argument("--db-name", default=None, help="Database name")
    process_parser.add_argument("--db-user", default=None, help="Database user")
    process_parser.add_argument("--db-password", default=None, help="Database password")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "profile": profile_command,
        "process": process_command,
    }

    try:
        commands[args.command](args)
    except (SourceReadError, ValueError, FileNotFoundError) as e:
        logger.error(f"Cannot run {args.command}: {e}")
        return 1
    except OperationalError as e:
        logger.error(f"Database error: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
