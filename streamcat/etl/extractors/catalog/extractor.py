"""Catalog and genre table loaders.

Read the four streaming-service catalogs and the genre lookup table
into polars DataFrames with a fixed schema. Loading is fail-fast: an
unreadable source or a missing required column raises LoadError.
"""

from collections.abc import Iterable, Mapping

import polars as pl
from sqlalchemy import Engine

from streamcat.etl.extractors.base import (
    BaseExtractor,
    LoadError,
    MissingColumnsError,
)
from streamcat.etl.extractors.catalog.normalizer import (
    CATALOG_REQUIRED_COLUMNS,
    GENRE_COLUMNS,
    CatalogNormalizer,
)
from streamcat.etl.extractors.schemas import SourceDescriptor
from streamcat.etl.types import SERVICES, CatalogRowRaw, GenreRowRaw


class CatalogExtractor(BaseExtractor):
    """Loads streaming-service catalogs.

    Attributes:
        name: Extractor identifier.
    """

    name = "catalog"

    def __init__(self, engine: Engine | None = None) -> None:
        """Initialize catalog extractor.

        Args:
            engine: SQLAlchemy engine for database-resident catalogs.
        """
        super().__init__(engine=engine)
        self._normalizer = CatalogNormalizer()

    # -------------------------------------------------------------------------
    # Main Extraction
    # -------------------------------------------------------------------------

    def extract(self, descriptor: SourceDescriptor) -> pl.DataFrame:
        """Load one service catalog.

        Args:
            descriptor: Service name and location.

        Returns:
            Catalog with normalized headers and conformed types.

        Raises:
            LoadError: If the source is unreadable or lacks required columns.
        """
        self._start_extraction(descriptor.name)
        try:
            raw = self._read_source(descriptor)
            df = self.validate(raw, source=descriptor.location)
        except LoadError as e:
            self._log_error(str(e))
            self._end_extraction(descriptor.name)
            raise

        self._extracted_count = len(df)
        self._end_extraction(descriptor.name)
        return df

    def extract_all(
        self,
        descriptors: Iterable[SourceDescriptor],
    ) -> dict[str, pl.DataFrame]:
        """Load every service catalog.

        Args:
            descriptors: One descriptor per service.

        Returns:
            Mapping service -> catalog, in the fixed service order.

        Raises:
            LoadError: If a service is unknown, declared twice or missing.
        """
        by_service = self._index_descriptors(descriptors)
        return {service: self.extract(by_service[service]) for service in SERVICES}

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self, df: pl.DataFrame, source: str = "<memory>") -> pl.DataFrame:
        """Apply header normalization and schema checks to a raw catalog.

        Args:
            df: Raw catalog, from a file, a table or built in memory.
            source: Location used in error messages.

        Returns:
            Conformed catalog.

        Raises:
            MissingColumnsError: If a required column is absent.
        """
        df = self._normalizer.normalize_headers(df)
        missing = self._normalizer.missing_catalog_columns(df)
        if missing:
            raise MissingColumnsError(f"{source}: missing required columns {missing}")
        return self._normalizer.conform_catalog(df)

    def validate_all(self, catalogs: Mapping[str, pl.DataFrame]) -> dict[str, pl.DataFrame]:
        """Validate in-memory catalogs passed by the caller.

        Args:
            catalogs: Mapping service -> raw catalog.

        Returns:
            Mapping service -> conformed catalog, in the fixed service order.
        """
        self._check_services(catalogs.keys())
        return {
            service: self.validate(catalogs[service], source=service)
            for service in SERVICES
        }

    def frame_from_rows(self, rows: list[CatalogRowRaw]) -> pl.DataFrame:
        """Build a conformed catalog from row dictionaries.

        Args:
            rows: Raw catalog rows.

        Returns:
            Conformed catalog (empty with the required schema if no rows).
        """
        if not rows:
            schema = dict.fromkeys(CATALOG_REQUIRED_COLUMNS, pl.String)
            return self.validate(pl.DataFrame(schema=schema))
        return self.validate(pl.DataFrame(rows, infer_schema_length=None))

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _index_descriptors(
        self,
        descriptors: Iterable[SourceDescriptor],
    ) -> dict[str, SourceDescriptor]:
        """Index descriptors by service, rejecting duplicates."""
        by_service: dict[str, SourceDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in by_service:
                raise LoadError(f"Service declared twice: {descriptor.name}")
            by_service[descriptor.name] = descriptor
        self._check_services(by_service.keys())
        return by_service

    @staticmethod
    def _check_services(names: Iterable[str]) -> None:
        """Require exactly the four known services."""
        names = set(names)
        unknown = sorted(names - set(SERVICES))
        if unknown:
            raise LoadError(f"Unknown services: {unknown}. Valid: {list(SERVICES)}")
        missing = [s for s in SERVICES if s not in names]
        if missing:
            raise LoadError(f"Missing catalog sources: {missing}")


class GenreExtractor(BaseExtractor):
    """Loads the film name to genre lookup table.

    Attributes:
        name: Extractor identifier.
    """

    name = "genres"

    def __init__(self, engine: Engine | None = None) -> None:
        """Initialize genre extractor."""
        super().__init__(engine=engine)
        self._normalizer = CatalogNormalizer()

    def extract(self, descriptor: SourceDescriptor) -> pl.DataFrame:
        """Load the genre table.

        Args:
            descriptor: Genre table location.

        Returns:
            DataFrame with columns (film, genres).

        Raises:
            LoadError: If the source is unreadable or lacks key/value columns.
        """
        self._start_extraction(descriptor.name)
        try:
            raw = self._read_source(descriptor)
            df = self.validate(raw, source=descriptor.location)
        except LoadError as e:
            self._log_error(str(e))
            self._end_extraction(descriptor.name)
            raise

        self._extracted_count = len(df)
        self._end_extraction(descriptor.name)
        return df

    def validate(self, df: pl.DataFrame, source: str = "<memory>") -> pl.DataFrame:
        """Project a raw genre table onto (film, genres).

        Raises:
            MissingColumnsError: If no film or genre column is found.
        """
        df = self._normalizer.normalize_headers(df)
        key, value = self._normalizer.resolve_genre_columns(df)
        if key is None or value is None:
            raise MissingColumnsError(
                f"{source}: genre table needs a film and a genres column, got {df.columns}"
            )
        return self._normalizer.conform_genres(df, key, value)

    def frame_from_rows(self, rows: list[GenreRowRaw]) -> pl.DataFrame:
        """Build a genre table from row dictionaries."""
        if not rows:
            return pl.DataFrame(schema=dict.fromkeys(GENRE_COLUMNS, pl.String))
        return self.validate(pl.DataFrame(rows, infer_schema_length=None))
