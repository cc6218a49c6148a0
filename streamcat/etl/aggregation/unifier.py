"""Catalog unifier.

Concatenates the four service catalogs into one relation tagged with
the originating service, then left-joins the genre lookup table on
exact title equality. Rows are never dropped or deduplicated: a title
listed by several services (or several times by one) is kept once
per listing.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

import polars as pl

from streamcat.etl.transform.ratings import SCORE_SOURCES, with_rating_scores
from streamcat.etl.types import SERVICES, UnifyStatsData
from streamcat.etl.utils.logger import setup_logger

logger = logging.getLogger(__name__)

SERVICE_COLUMN = "service"
GENRE_COLUMN = "genres"
GENRE_SEPARATOR = ", "
_ROW_INDEX = "_unify_row_nr"

RESERVED_COLUMNS: tuple[str, ...] = (SERVICE_COLUMN, GENRE_COLUMN, *SCORE_SOURCES)
"""Columns the unifier adds; a catalog column with one of these names is renamed."""


# =============================================================================
# UNIFY STATISTICS
# =============================================================================


@dataclass
class UnifyStats:
    """Statistics for a unify run.

    Attributes:
        rows_per_service: Input rows per service.
        total_rows: Rows in the unified relation.
        genre_matched: Rows that received a genre string.
        genre_unmatched: Rows left with a null genre.
        genre_duplicates: Genre table rows merged into an earlier film entry.
    """

    rows_per_service: dict[str, int] = field(default_factory=dict)
    total_rows: int = 0
    genre_matched: int = 0
    genre_unmatched: int = 0
    genre_duplicates: int = 0

    @property
    def match_rate(self) -> float:
        """Percentage of rows with a genre."""
        if self.total_rows == 0:
            return 0.0
        return round(self.genre_matched / self.total_rows * 100, 2)

    def log_summary(self, log: logging.Logger = logger) -> None:
        """Log unify statistics."""
        per_service = ", ".join(f"{s}={n}" for s, n in self.rows_per_service.items())
        log.info(
            "Unified %d rows (%s); genre matched=%d unmatched=%d (%.2f%%)",
            self.total_rows,
            per_service,
            self.genre_matched,
            self.genre_unmatched,
            self.match_rate,
        )

    def to_dict(self) -> UnifyStatsData:
        """Serialize statistics."""
        return UnifyStatsData(
            rows_per_service=dict(self.rows_per_service),
            total_rows=self.total_rows,
            genre_matched=self.genre_matched,
            genre_unmatched=self.genre_unmatched,
            genre_duplicates=self.genre_duplicates,
        )


# =============================================================================
# UNIFIER
# =============================================================================


class Unifier:
    """Builds the unified catalog relation.

    Attributes:
        stats: Statistics of the last unify run.
    """

    def __init__(self) -> None:
        """Initialize unifier with empty statistics."""
        self.stats = UnifyStats()
        self._logger = setup_logger("etl.unifier")

    # =========================================================================
    # Public API
    # =========================================================================

    def unify(
        self,
        catalogs: Mapping[str, pl.DataFrame],
        genres: pl.DataFrame,
    ) -> pl.DataFrame:
        """Build the unified relation.

        Args:
            catalogs: Mapping service -> conformed catalog.
            genres: Genre table with columns (film, genres).

        Returns:
            One row per catalog row, with ``service``, ``genres`` and the
            parsed ``imdb_score`` / ``rt_score`` columns.
        """
        self.stats = UnifyStats()

        combined = self.concatenate(catalogs)
        unified = self.join_genres(combined, genres)
        unified = with_rating_scores(unified)

        self._update_stats(unified)
        self.stats.log_summary(self._logger)
        return unified

    def concatenate(self, catalogs: Mapping[str, pl.DataFrame]) -> pl.DataFrame:
        """Union all catalogs, tagging each row with its service.

        Columns a service lacks are filled with null. Input order is kept:
        services in fixed order, rows in source order.

        Args:
            catalogs: Mapping service -> conformed catalog.

        Returns:
            Concatenated relation (multiset union).

        Raises:
            ValueError: If a service label is unknown or no catalog is given.
        """
        unknown = sorted(set(catalogs) - set(SERVICES))
        if unknown:
            raise ValueError(f"Unknown service labels: {unknown}. Valid: {list(SERVICES)}")
        if not catalogs:
            raise ValueError("No catalogs to unify")

        frames: list[pl.DataFrame] = []
        for service in SERVICES:
            if service not in catalogs:
                self._logger.warning(f"No catalog for service '{service}'")
                continue
            df = catalogs[service]
            self.stats.rows_per_service[service] = len(df)
            frames.append(self._tag_service(df, service))

        return pl.concat(frames, how="diagonal_relaxed")

    def join_genres(self, combined: pl.DataFrame, genres: pl.DataFrame) -> pl.DataFrame:
        """Left-join genre strings on exact, case-sensitive title match.

        Args:
            combined: Concatenated catalogs.
            genres: Genre table with columns (film, genres).

        Returns:
            Relation with the same rows, in the same order, plus ``genres``.
        """
        lookup = self.collapse_genres(genres)

        joined = (
            combined.with_row_index(_ROW_INDEX)
            .join(lookup, left_on="title", right_on="film", how="left")
            .sort(_ROW_INDEX)
            .drop(_ROW_INDEX)
        )

        if len(joined) != len(combined):
            raise RuntimeError(
                f"Genre join changed row count: {len(combined)} -> {len(joined)}"
            )
        return joined

    def collapse_genres(self, genres: pl.DataFrame) -> pl.DataFrame:
        """Reduce the genre table to one row per film name.

        Genre strings of repeated film names are joined in input order so
        the left join can never multiply catalog rows.

        Args:
            genres: Genre table with columns (film, genres).

        Returns:
            Lookup with unique ``film`` values.
        """
        usable = genres.select(
            pl.col("film").cast(pl.String),
            pl.col(GENRE_COLUMN).cast(pl.String),
        ).filter(pl.col("film").is_not_null() & pl.col(GENRE_COLUMN).is_not_null())

        lookup = (
            usable.group_by("film", maintain_order=True)
            .agg(pl.col(GENRE_COLUMN))
            .with_columns(pl.col(GENRE_COLUMN).list.join(GENRE_SEPARATOR))
        )

        self.stats.genre_duplicates = len(usable) - len(lookup)
        if self.stats.genre_duplicates:
            self._logger.warning(
                f"{self.stats.genre_duplicates} repeated film names merged in genre table"
            )
        return lookup

    # =========================================================================
    # Internal Methods
    # =========================================================================

    def _tag_service(self, df: pl.DataFrame, service: str) -> pl.DataFrame:
        """Add the service label, moving aside clashing catalog columns."""
        clashes = [col for col in RESERVED_COLUMNS if col in df.columns]
        for col in clashes:
            self._logger.warning(f"{service}: catalog column '{col}' renamed to 'catalog_{col}'")
        df = df.rename({col: f"catalog_{col}" for col in clashes})
        return df.with_columns(pl.lit(service).alias(SERVICE_COLUMN))

    def _update_stats(self, unified: pl.DataFrame) -> None:
        """Update statistics after unifying."""
        self.stats.total_rows = len(unified)
        self.stats.genre_unmatched = unified[GENRE_COLUMN].null_count()
        self.stats.genre_matched = self.stats.total_rows - self.stats.genre_unmatched
