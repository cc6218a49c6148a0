"""Pipeline data types package.

Exports the service enumeration and all TypedDict definitions for
raw rows, parsed ratings and pipeline results.

Usage:
    from streamcat.etl.types import SERVICES, CatalogRowRaw
"""

from streamcat.etl.types.catalog import (
    SERVICES,
    CatalogRowRaw,
    ContentType,
    GenreRowRaw,
    RatingScoreData,
    RatingStatus,
    ServiceName,
)
from streamcat.etl.types.pipeline import (
    ETLResult,
    QualityReportData,
    UnifyStatsData,
)

__all__ = [
    # Catalog
    "SERVICES",
    "ServiceName",
    "ContentType",
    "RatingStatus",
    "CatalogRowRaw",
    "GenreRowRaw",
    "RatingScoreData",
    # Pipeline
    "ETLResult",
    "QualityReportData",
    "UnifyStatsData",
]
