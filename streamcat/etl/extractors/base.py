"""Base extractor abstract class.

Provides the common reading, logging and result tracking used by
the catalog and genre table loaders.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

import polars as pl
from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError

from streamcat.etl.extractors.schemas import SourceDescriptor
from streamcat.etl.types import ETLResult
from streamcat.etl.utils.logger import setup_logger


class LoadError(Exception):
    """Base exception for source loading errors."""

    pass


class SourceNotFoundError(LoadError):
    """Raised when a declared source is missing or unreadable."""

    pass


class MissingColumnsError(LoadError):
    """Raised when a source lacks required columns."""

    pass


class BaseExtractor(ABC):
    """Abstract base class for source table loaders.

    Reads a file or database table into a polars DataFrame and keeps
    one ETLResult per loaded source.

    Attributes:
        name: Extractor identifier (e.g., 'catalog', 'genres').
        logger: Logger instance for this extractor.
    """

    name: str = "base"

    SUPPORTED_SUFFIXES: frozenset[str] = frozenset({".csv", ".parquet", ".json", ".ndjson"})

    def __init__(self, engine: Engine | None = None) -> None:
        """Initialize base extractor.

        Args:
            engine: SQLAlchemy engine for database-resident tables.
        """
        self._engine = engine
        self._logger = setup_logger(f"etl.{self.name}")
        self._start_time: datetime | None = None
        self._extracted_count: int = 0
        self._errors: list[str] = []
        self._results: list[ETLResult] = []

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger

    @property
    def results(self) -> list[ETLResult]:
        """Results of every load performed by this extractor."""
        return list(self._results)

    @abstractmethod
    def extract(self, descriptor: SourceDescriptor) -> pl.DataFrame:
        """Load and validate one source.

        Args:
            descriptor: Source name and location.

        Returns:
            DataFrame with the extractor's fixed schema.

        Raises:
            LoadError: If the source is unreadable or lacks required columns.
        """
        pass

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _start_extraction(self, source: str) -> None:
        """Mark the start of extraction."""
        self._start_time = datetime.now()
        self._extracted_count = 0
        self._errors = []
        self._logger.info(f"Starting {self.name} extraction: {source}")

    def _end_extraction(self, source: str) -> ETLResult:
        """Mark the end of extraction and record the result.

        Returns:
            ETLResult with final statistics.
        """
        duration = self._calculate_duration()
        success = len(self._errors) == 0

        if success:
            self._logger.info(
                f"Completed {self.name} extraction: {source} "
                f"{self._extracted_count} rows in {duration:.2f}s"
            )

        result = ETLResult(
            source=source,
            success=success,
            count=self._extracted_count,
            errors=list(self._errors),
            duration_seconds=duration,
        )
        self._results.append(result)
        return result

    def _calculate_duration(self) -> float:
        """Calculate extraction duration in seconds."""
        if self._start_time is None:
            return 0.0
        delta = datetime.now() - self._start_time
        return delta.total_seconds()

    def _log_error(self, message: str) -> None:
        """Log and track an error.

        Args:
            message: Error message to log.
        """
        self._logger.error(message)
        self._errors.append(message)

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def _read_source(self, descriptor: SourceDescriptor) -> pl.DataFrame:
        """Read the raw relation behind a descriptor.

        Args:
            descriptor: Source name and location.

        Returns:
            Raw DataFrame.

        Raises:
            SourceNotFoundError: If the file or table cannot be read.
        """
        if descriptor.table is not None:
            return self._read_table(descriptor.table)
        return self._read_file(descriptor.path)

    def _read_file(self, path: Path) -> pl.DataFrame:
        """Read a file by extension, keeping every CSV value as text.

        Args:
            path: Source file path.

        Returns:
            Raw DataFrame.
        """
        if not path.exists():
            raise SourceNotFoundError(f"Source file not found: {path}")

        suffix = path.suffix.lower()
        if suffix not in self.SUPPORTED_SUFFIXES:
            raise SourceNotFoundError(f"Unsupported file format: {suffix} ({path})")

        self._logger.info(f"Reading {path.name}")
        try:
            match suffix:
                case ".csv":
                    return pl.read_csv(path, infer_schema_length=0)
                case ".parquet":
                    return pl.read_parquet(path)
                case ".json":
                    return pl.read_json(path)
                case _:
                    return pl.read_ndjson(path)
        except (OSError, pl.exceptions.PolarsError) as e:
            raise SourceNotFoundError(f"Unreadable source {path}: {e}") from e

    def _read_table(self, table: str) -> pl.DataFrame:
        """Read a whole database table.

        Args:
            table: Validated table name.

        Returns:
            Raw DataFrame.
        """
        if self._engine is None:
            raise SourceNotFoundError(f"No database engine configured for table '{table}'")

        self._logger.info(f"Reading table {table}")
        try:
            return pl.read_database(
                f"SELECT * FROM {table}",
                connection=self._engine,
                infer_schema_length=None,
            )
        except (SQLAlchemyError, pl.exceptions.PolarsError) as e:
            raise SourceNotFoundError(f"Unreadable table {table}: {e}") from e
