"""Analytics queries over the unified catalog relation."""

from streamcat.etl.analytics.engine import AnalyticsEngine, AnalyticsReport
from streamcat.etl.analytics.queries import (
    DivisivePolicy,
    divergence_by_year,
    divergence_rows,
    divisive_titles,
    family_share,
    score_by_type,
)

__all__ = [
    "AnalyticsEngine",
    "AnalyticsReport",
    "DivisivePolicy",
    "family_share",
    "score_by_type",
    "divergence_rows",
    "divergence_by_year",
    "divisive_titles",
]
