"""
CSV reader using Spark for loading the raw sales extract.
"""

from pyspark.errors import AnalysisException
from pyspark.sql import DataFrame, SparkSession
from pyspark.sql.functions import col, lit, monotonically_increasing_id
from pyspark.sql.types import StringType

from salesclean.core.models import RAW_FIELDS, RawRecord
from salesclean.observability.logger import get_logger

logger = get_logger(__name__)

ROW_ORDER_COLUMN = "_row_order"


class SourceReadError(RuntimeError):
    """Raised when the source cannot be read at all. No partial result is returned."""
    pass


class CSVReader:
    """
    Reads the sales CSV with every column as text, in file order.

    Type inference is disabled; the cleaner owns all parsing. Row order
    matters because deduplication keeps the first occurrence of a key, so
    each row is tagged with a monotonically increasing id before collection
    and sorted on it.
    """

    def __init__(self, spark: SparkSession):
        """
        Initialize CSV reader.

        Args:
            spark: Active Spark session
        """
        self.spark = spark

    def read(
        self,
        file_path: str,
        header: bool = True,
        delimiter: str = ",",
        encoding: str = "UTF-8",
    ) -> DataFrame:
        """
        Read CSV file into a Spark DataFrame of string columns.

        Columns of the raw schema missing from the file are added as nulls;
        extra columns are dropped.

        Args:
            file_path: Path to CSV file
            header: Whether CSV has header row
            delimiter: Field delimiter
            encoding: File encoding

        Returns:
            DataFrame with RAW_FIELDS plus the row order column

        Raises:
            SourceReadError: If the file cannot be read
        """
        try:
            df = self.spark.read \
                .option("header", str(header).lower()) \
                .option("delimiter", delimiter) \
                .option("encoding", encoding) \
                .option("inferSchema", "false") \
                .option("mode", "PERMISSIVE") \
                .csv(file_path)
        except AnalysisException as e:
            raise SourceReadError(f"Cannot read source file {file_path}: {e}") from e

        missing = [name for name in RAW_FIELDS if name not in df.columns]
        if missing:
            logger.warning(
                f"Source is missing columns: {', '.join(missing)}",
                extra={"file_path": file_path, "missing_columns": missing},
            )

        columns = [
            col(name).cast(StringType()) if name in df.columns
            else lit(None).cast(StringType()).alias(name)
            for name in RAW_FIELDS
        ]

        return df.select(*columns).withColumn(ROW_ORDER_COLUMN, monotonically_increasing_id())

    def read_records(self, file_path: str, **options) -> list[RawRecord]:
        """
        Read the CSV and return RawRecords in file order.

        Args:
            file_path: Path to CSV file
            **options: Passed to read()

        Returns:
            List of RawRecord
        """
        df = self.read(file_path, **options)
        rows = df.orderBy(ROW_ORDER_COLUMN).drop(ROW_ORDER_COLUMN).collect()
        logger.info(f"Read {len(rows)} records", extra={"file_path": file_path, "rows": len(rows)})
        return [RawRecord.from_mapping(row.asDict()) for row in rows]
