"""Analytics engine running every aggregate query on one relation."""

from collections.abc import Sequence
from dataclasses import dataclass

import polars as pl

from streamcat.etl.analytics.queries import (
    DivisivePolicy,
    divergence_by_year,
    divisive_titles,
    family_share,
    score_by_type,
)
from streamcat.etl.utils.logger import setup_logger


@dataclass(frozen=True)
class AnalyticsReport:
    """Result relations of the four queries."""

    family_share: pl.DataFrame
    score_by_type: pl.DataFrame
    divergence_by_year: pl.DataFrame
    divisive_titles: pl.DataFrame

    def frames(self) -> dict[str, pl.DataFrame]:
        """Result relations keyed by query name."""
        return {
            "family_share": self.family_share,
            "score_by_type": self.score_by_type,
            "divergence_by_year": self.divergence_by_year,
            "divisive_titles": self.divisive_titles,
        }


class AnalyticsEngine:
    """Runs the aggregate queries against the unified relation.

    Unset parameters fall back to the analysis settings.

    Attributes:
        family_keywords: Genre substrings marking family content.
        min_year: First release year kept by the divergence queries.
        policy: Ranking policy for divisive titles.
    """

    def __init__(
        self,
        family_keywords: Sequence[str] | None = None,
        min_year: int | None = None,
        policy: DivisivePolicy | None = None,
    ) -> None:
        """Initialize engine from explicit values or settings."""
        from streamcat.settings import settings

        analysis = settings.analysis
        self.family_keywords = list(family_keywords or analysis.family_keywords)
        self.min_year = analysis.divergence_min_year if min_year is None else min_year
        self.policy = policy or DivisivePolicy(
            min_count=analysis.divisive_min_count,
            prior_weight=analysis.divisive_prior_weight,
            top_n=analysis.divisive_top_n,
        )
        self._logger = setup_logger("etl.analytics")

    def run(self, unified: pl.DataFrame) -> AnalyticsReport:
        """Run every query on the same unified relation.

        Args:
            unified: Unified relation, computed once by the caller.

        Returns:
            AnalyticsReport with one relation per query.
        """
        self._logger.info(f"Running analytics on {len(unified)} rows")

        report = AnalyticsReport(
            family_share=family_share(unified, self.family_keywords),
            score_by_type=score_by_type(unified),
            divergence_by_year=divergence_by_year(unified, self.min_year),
            divisive_titles=divisive_titles(unified, self.min_year, self.policy),
        )

        for name, frame in report.frames().items():
            self._logger.info(f"{name}: {len(frame)} rows")
        return report
