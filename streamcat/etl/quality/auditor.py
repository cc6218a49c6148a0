"""Missing-value audit of the unified catalog relation.

Diagnostic only: the auditor counts, it never filters or repairs.
"""

import logging
from dataclasses import asdict, dataclass

import polars as pl

from streamcat.etl.transform.classifiers import service_rank_expr
from streamcat.etl.transform.ratings import (
    IMDB_SCORE_COLUMN,
    RT_SCORE_COLUMN,
    STATUS_MALFORMED,
    score_status,
    with_rating_scores,
)
from streamcat.etl.types import QualityReportData
from streamcat.etl.utils.logger import setup_logger

logger = logging.getLogger(__name__)

MISSING_COLUMNS: dict[str, str] = {
    "imdb_missing": "imdb",
    "age_missing": "age",
    "rt_missing": "rotten_tomatoes",
}
"""Report field -> raw column whose nulls it counts."""


@dataclass(frozen=True)
class QualityReport:
    """Fixed-shape missing-value record.

    Attributes:
        total_rows: Rows audited.
        imdb_missing: Rows with a null IMDb score.
        age_missing: Rows with a null age rating.
        rt_missing: Rows with a null Rotten Tomatoes score.
        imdb_malformed: Non-null IMDb scores that failed to parse.
        rt_malformed: Non-null Rotten Tomatoes scores that failed to parse.
    """

    total_rows: int
    imdb_missing: int
    age_missing: int
    rt_missing: int
    imdb_malformed: int = 0
    rt_malformed: int = 0

    def to_dict(self) -> QualityReportData:
        """Serialize the report."""
        return QualityReportData(**asdict(self))

    def log_summary(self, log: logging.Logger = logger) -> None:
        """Log audit counts."""
        log.info(
            "Quality audit: %d rows, missing imdb=%d age=%d rt=%d, malformed imdb=%d rt=%d",
            self.total_rows,
            self.imdb_missing,
            self.age_missing,
            self.rt_missing,
            self.imdb_malformed,
            self.rt_malformed,
        )


class QualityAuditor:
    """Computes null counts over the unified relation."""

    def __init__(self) -> None:
        """Initialize auditor."""
        self._logger = setup_logger("etl.quality")

    def audit(self, unified: pl.DataFrame) -> QualityReport:
        """Count missing and malformed score values in one pass.

        Args:
            unified: Unified relation.

        Returns:
            QualityReport with the counts.
        """
        scored = with_rating_scores(unified)
        counts = scored.select(
            pl.len().alias("total_rows"),
            *[pl.col(col).null_count().alias(name) for name, col in MISSING_COLUMNS.items()],
            (score_status(IMDB_SCORE_COLUMN) == STATUS_MALFORMED).sum().alias("imdb_malformed"),
            (score_status(RT_SCORE_COLUMN) == STATUS_MALFORMED).sum().alias("rt_malformed"),
        ).row(0, named=True)

        report = QualityReport(**{key: int(value or 0) for key, value in counts.items()})
        report.log_summary(self._logger)
        return report

    @staticmethod
    def column_profile(unified: pl.DataFrame) -> pl.DataFrame:
        """Null count and percentage for every raw column.

        Parsed score structs are left out; their raw columns are profiled.

        Args:
            unified: Unified relation.

        Returns:
            DataFrame (column, null_count, null_pct) in column order.
        """
        columns = [
            col
            for col, dtype in unified.schema.items()
            if not isinstance(dtype, pl.Struct)
        ]
        total = len(unified)
        null_counts = [unified[col].null_count() for col in columns]
        null_pcts = [round(n / total * 100, 2) if total else 0.0 for n in null_counts]

        return pl.DataFrame(
            {"column": columns, "null_count": null_counts, "null_pct": null_pcts},
            schema={"column": pl.String, "null_count": pl.Int64, "null_pct": pl.Float64},
        )

    @staticmethod
    def missing_by_service(unified: pl.DataFrame) -> pl.DataFrame:
        """Missing counts broken down per service.

        Args:
            unified: Unified relation with a ``service`` column.

        Returns:
            DataFrame (service, total_rows, imdb_missing, age_missing,
            rt_missing) in fixed service order.
        """
        return (
            unified.group_by("service")
            .agg(
                pl.len().alias("total_rows"),
                *[pl.col(col).null_count().alias(name) for name, col in MISSING_COLUMNS.items()],
            )
            .with_columns(service_rank_expr().alias("_order"))
            .sort("_order", "service")
            .drop("_order")
        )
