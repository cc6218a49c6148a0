"""Catalog and genre table schema normalizer.

Maps heterogeneous export headers onto the fixed column names used
downstream. Values are left untouched apart from type alignment:
scores and age ratings stay raw strings.
"""

import re

import polars as pl

from streamcat.etl.utils.logger import setup_logger

CATALOG_REQUIRED_COLUMNS: tuple[str, ...] = (
    "title",
    "type",
    "year",
    "age",
    "imdb",
    "rotten_tomatoes",
)

CATALOG_TEXT_COLUMNS: tuple[str, ...] = ("title", "type", "age", "imdb", "rotten_tomatoes")

GENRE_KEY_ALIASES: tuple[str, ...] = ("film", "title", "film_name", "name")
GENRE_VALUE_ALIASES: tuple[str, ...] = ("genres", "genre")

GENRE_COLUMNS: tuple[str, ...] = ("film", "genres")

_SEPARATORS = re.compile(r"[\s\-+]+")


class CatalogNormalizer:
    """Normalizes catalog and genre table headers and column types."""

    def __init__(self) -> None:
        """Initialize normalizer."""
        self._logger = setup_logger("etl.catalog.normalizer")

    # -------------------------------------------------------------------------
    # Headers
    # -------------------------------------------------------------------------

    @staticmethod
    def normalize_header(name: str, position: int = 0) -> str:
        """Normalize a single column header.

        "Rotten Tomatoes" -> "rotten_tomatoes", "IMDb" -> "imdb",
        "Prime Video" -> "prime_video", blank -> "column_<position>".

        Args:
            name: Raw header.
            position: Column position, used for blank headers.

        Returns:
            Normalized header.
        """
        cleaned = _SEPARATORS.sub("_", name.strip().lower()).strip("_")
        return cleaned or f"column_{position}"

    def normalize_headers(self, df: pl.DataFrame) -> pl.DataFrame:
        """Rename every column to its normalized header.

        Args:
            df: Raw DataFrame.

        Returns:
            DataFrame with normalized headers. When two headers collide the
            later one keeps a positional suffix.
        """
        mapping: dict[str, str] = {}
        seen: set[str] = set()
        for position, column in enumerate(df.columns):
            target = self.normalize_header(column, position)
            if target in seen:
                target = f"{target}_{position}"
            seen.add(target)
            mapping[column] = target
        return df.rename(mapping)

    # -------------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------------

    @staticmethod
    def missing_catalog_columns(df: pl.DataFrame) -> list[str]:
        """List required catalog columns absent from a normalized frame."""
        return [col for col in CATALOG_REQUIRED_COLUMNS if col not in df.columns]

    def conform_catalog(self, df: pl.DataFrame) -> pl.DataFrame:
        """Align catalog column types.

        ``year`` becomes Int64 (unparseable values become null); text
        columns become String. Service-specific columns are preserved.

        Args:
            df: Catalog with normalized headers and all required columns.

        Returns:
            Conformed DataFrame.
        """
        year_before = df["year"].null_count()
        df = df.with_columns(
            pl.col("year").cast(pl.Float64, strict=False).cast(pl.Int64, strict=False),
            *[pl.col(col).cast(pl.String) for col in CATALOG_TEXT_COLUMNS],
        )
        invalid_years = df["year"].null_count() - year_before
        if invalid_years:
            self._logger.warning(f"{invalid_years} non-numeric year values set to null")
        return df

    # -------------------------------------------------------------------------
    # Genres
    # -------------------------------------------------------------------------

    @staticmethod
    def resolve_genre_columns(df: pl.DataFrame) -> tuple[str | None, str | None]:
        """Find the key and value columns of a normalized genre table.

        Returns:
            (key column, value column); either may be None when absent.
        """
        key = next((c for c in GENRE_KEY_ALIASES if c in df.columns), None)
        value = next((c for c in GENRE_VALUE_ALIASES if c in df.columns), None)
        return key, value

    @staticmethod
    def conform_genres(df: pl.DataFrame, key: str, value: str) -> pl.DataFrame:
        """Project a genre table onto (film, genres) as text.

        Args:
            df: Genre table with normalized headers.
            key: Column holding the film name.
            value: Column holding the genre string.

        Returns:
            Two-column DataFrame.
        """
        return df.select(
            pl.col(key).cast(pl.String).alias("film"),
            pl.col(value).cast(pl.String).alias("genres"),
        )
