"""Analysis pipeline orchestration.

Runs the four stages in order, each consuming the previous stage's
output and nothing else:

    1. Load: catalogs and genre table (fatal on LoadError)
    2. Unify: tagged union + genre left join, computed once
    3. Audit: missing-value counts
    4. Analyze: aggregate queries over the unified relation
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import polars as pl
from sqlalchemy import Engine, create_engine

from streamcat.etl.aggregation import Unifier, UnifyStats
from streamcat.etl.analytics import AnalyticsEngine, AnalyticsReport
from streamcat.etl.extractors import CatalogExtractor, GenreExtractor, SourceDescriptor
from streamcat.etl.loaders import ReportWriter
from streamcat.etl.quality import QualityAuditor, QualityReport
from streamcat.etl.types import ETLResult
from streamcat.etl.utils import setup_logger
from streamcat.settings import settings

logger = setup_logger("etl.pipeline")


@dataclass
class AnalysisResult:
    """Everything produced by one analysis run."""

    unified: pl.DataFrame
    unify_stats: UnifyStats
    quality: QualityReport
    column_profile: pl.DataFrame
    missing_by_service: pl.DataFrame
    analytics: AnalyticsReport | None = None
    load_results: list[ETLResult] = field(default_factory=list)
    written: dict[str, Path] = field(default_factory=dict)


# =============================================================================
# STEPS
# =============================================================================


def step_1_load(
    catalogs: Mapping[str, pl.DataFrame] | None = None,
    genres: pl.DataFrame | None = None,
) -> tuple[dict[str, pl.DataFrame], pl.DataFrame, list[ETLResult]]:
    """Load or validate the source relations.

    Relations passed in are validated and used as-is; missing ones are
    read from the configured database tables or export files.

    Args:
        catalogs: Optional mapping service -> raw catalog.
        genres: Optional raw genre table.

    Returns:
        (catalogs, genres, load results).

    Raises:
        LoadError: If a source is missing, unreadable or lacks columns.
    """
    logger.info("=" * 60)
    logger.info("STEP 1/4: LOAD SOURCES")
    logger.info("=" * 60)

    engine = _create_engine() if catalogs is None or genres is None else None
    try:
        catalog_extractor = CatalogExtractor(engine=engine)
        genre_extractor = GenreExtractor(engine=engine)

        if catalogs is None:
            loaded_catalogs = catalog_extractor.extract_all(_catalog_descriptors())
        else:
            loaded_catalogs = catalog_extractor.validate_all(catalogs)

        if genres is None:
            loaded_genres = genre_extractor.extract(_genre_descriptor())
        else:
            loaded_genres = genre_extractor.validate(genres)
    finally:
        if engine is not None:
            engine.dispose()

    return (
        loaded_catalogs,
        loaded_genres,
        catalog_extractor.results + genre_extractor.results,
    )


def step_2_unify(
    catalogs: Mapping[str, pl.DataFrame],
    genres: pl.DataFrame,
) -> tuple[pl.DataFrame, UnifyStats]:
    """Build the unified relation."""
    logger.info("=" * 60)
    logger.info("STEP 2/4: UNIFY CATALOGS")
    logger.info("=" * 60)

    unifier = Unifier()
    unified = unifier.unify(catalogs, genres)
    return unified, unifier.stats


def step_3_audit(unified: pl.DataFrame) -> tuple[QualityReport, pl.DataFrame, pl.DataFrame]:
    """Audit missing values.

    Returns:
        (report, column profile, missing counts per service).
    """
    logger.info("=" * 60)
    logger.info("STEP 3/4: QUALITY AUDIT")
    logger.info("=" * 60)

    auditor = QualityAuditor()
    report = auditor.audit(unified)
    return report, auditor.column_profile(unified), auditor.missing_by_service(unified)


def step_4_analyze(
    unified: pl.DataFrame,
    analytics: AnalyticsEngine | None = None,
) -> AnalyticsReport:
    """Run the aggregate queries."""
    logger.info("=" * 60)
    logger.info("STEP 4/4: ANALYTICS")
    logger.info("=" * 60)

    return (analytics or AnalyticsEngine()).run(unified)


# =============================================================================
# ORCHESTRATION
# =============================================================================


def run_audit(
    catalogs: Mapping[str, pl.DataFrame] | None = None,
    genres: pl.DataFrame | None = None,
) -> AnalysisResult:
    """Load, unify and audit without running the analytics.

    Args:
        catalogs: Optional mapping service -> raw catalog.
        genres: Optional raw genre table.

    Returns:
        AnalysisResult without analytics.
    """
    loaded_catalogs, loaded_genres, load_results = step_1_load(catalogs, genres)
    unified, unify_stats = step_2_unify(loaded_catalogs, loaded_genres)
    quality, profile, by_service = step_3_audit(unified)

    return AnalysisResult(
        unified=unified,
        unify_stats=unify_stats,
        quality=quality,
        column_profile=profile,
        missing_by_service=by_service,
        load_results=load_results,
    )


def run_analysis(
    catalogs: Mapping[str, pl.DataFrame] | None = None,
    genres: pl.DataFrame | None = None,
    *,
    analytics: AnalyticsEngine | None = None,
    writer: ReportWriter | None = None,
) -> AnalysisResult:
    """Run the full pipeline.

    Args:
        catalogs: Optional mapping service -> raw catalog.
        genres: Optional raw genre table.
        analytics: Configured engine; defaults to settings.
        writer: When given, results are written through it.

    Returns:
        AnalysisResult with every stage's output.

    Raises:
        LoadError: If loading fails; no analytics run in that case.
    """
    result = run_audit(catalogs, genres)
    result.analytics = step_4_analyze(result.unified, analytics)

    if writer is not None:
        result.written = writer.write_analytics(result.analytics)
        result.written["quality_report"] = writer.write_quality(
            result.quality,
            result.column_profile,
            result.missing_by_service,
        )

    logger.info("=" * 60)
    logger.info(f"PIPELINE COMPLETE: {len(result.unified)} unified rows")
    logger.info("=" * 60)
    return result


# =============================================================================
# HELPERS
# =============================================================================


def _create_engine() -> Engine | None:
    """Create a SQLAlchemy engine when a catalog database is configured."""
    if not settings.database.is_configured:
        return None
    return create_engine(settings.database.url)


def _catalog_descriptors() -> list[SourceDescriptor]:
    """Catalog descriptors from the database or file settings."""
    if settings.database.is_configured:
        return settings.database.catalog_descriptors()
    return settings.sources.catalog_descriptors()


def _genre_descriptor() -> SourceDescriptor:
    """Genre descriptor from the database or file settings."""
    if settings.database.is_configured:
        return settings.database.genre_descriptor()
    return settings.sources.genre_descriptor()
