"""Aggregate queries over the unified catalog relation.

Each query is a pure function of the unified relation: no query reads
another query's output and none mutates its input.

    - family_share: percentage of family titles per service
    - score_by_type: mean critic score per service and content type
    - divergence_by_year: mean critic/audience gap per release year
    - divisive_titles: titles ranked by mean critic/audience gap
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import polars as pl

from streamcat.etl.transform.classifiers import (
    DEFAULT_FAMILY_KEYWORDS,
    content_type_expr,
    family_expr,
    service_rank_expr,
)
from streamcat.etl.transform.ratings import (
    audience_score,
    critic_score,
    with_rating_scores,
)

logger = logging.getLogger(__name__)

DEFAULT_DIVERGENCE_MIN_YEAR = 2000


# =============================================================================
# RANKING POLICY
# =============================================================================


@dataclass(frozen=True)
class DivisivePolicy:
    """How titles are ranked by critic/audience divergence.

    With the defaults every title counts, whatever its number of rows,
    and titles are ranked by their plain mean difference.

    Attributes:
        min_count: Drop titles with fewer rows than this.
        prior_weight: Pseudo-count k pulling each title toward the global
            mean: (n * mean + k * global_mean) / (n + k). 0 disables it.
        top_n: Keep only the first N titles (None keeps all).
    """

    min_count: int = 1
    prior_weight: float = 0.0
    top_n: int | None = None

    def __post_init__(self) -> None:
        """Validate policy values."""
        if self.min_count < 1:
            raise ValueError(f"min_count must be >= 1, got {self.min_count}")
        if self.prior_weight < 0:
            raise ValueError(f"prior_weight must be >= 0, got {self.prior_weight}")
        if self.top_n is not None and self.top_n < 1:
            raise ValueError(f"top_n must be >= 1, got {self.top_n}")


# =============================================================================
# QUERIES
# =============================================================================


def family_share(
    unified: pl.DataFrame,
    keywords: Sequence[str] = DEFAULT_FAMILY_KEYWORDS,
) -> pl.DataFrame:
    """Percentage of family titles per service.

    Every row counts in the denominator, including rows without a genre.

    Args:
        unified: Unified relation.
        keywords: Genre substrings marking family content.

    Returns:
        DataFrame (service, total_titles, family_titles, family_pct).
    """
    return (
        unified.with_columns(family_expr(keywords).alias("is_family"))
        .group_by("service")
        .agg(
            pl.len().cast(pl.Int64).alias("total_titles"),
            pl.col("is_family").sum().cast(pl.Int64).alias("family_titles"),
        )
        .with_columns(
            (pl.col("family_titles") / pl.col("total_titles") * 100).alias("family_pct")
        )
        .with_columns(service_rank_expr().alias("_order"))
        .sort("_order", "service")
        .drop("_order")
    )


def score_by_type(unified: pl.DataFrame) -> pl.DataFrame:
    """Mean Rotten Tomatoes score per service and content type.

    Missing or malformed scores are excluded from the mean, not counted
    as zero. Rows whose type flag is neither movie nor TV are skipped.

    Args:
        unified: Unified relation.

    Returns:
        DataFrame (service, content_type, avg_rt_score, scored_titles).
    """
    typed = with_rating_scores(unified).with_columns(
        content_type_expr().alias("content_type"),
        critic_score().alias("rt_value"),
    )

    unknown = typed["content_type"].null_count()
    if unknown:
        logger.warning("score_by_type: %d rows with unknown type flag skipped", unknown)

    return (
        typed.filter(pl.col("content_type").is_not_null())
        .group_by("service", "content_type")
        .agg(
            pl.col("rt_value").mean().alias("avg_rt_score"),
            pl.col("rt_value").count().cast(pl.Int64).alias("scored_titles"),
        )
        .with_columns(service_rank_expr().alias("_order"))
        .sort("_order", "service", "content_type")
        .drop("_order")
    )


def divergence_rows(
    unified: pl.DataFrame,
    min_year: int = DEFAULT_DIVERGENCE_MIN_YEAR,
) -> pl.DataFrame:
    """Rows eligible for divergence queries, with their absolute gap.

    Keeps rows released in ``min_year`` or later whose IMDb and Rotten
    Tomatoes scores are both present and parseable. IMDb is scaled by 10
    so both scores share the 0-100 scale.

    Args:
        unified: Unified relation.
        min_year: First release year kept.

    Returns:
        Filtered relation with an added ``difference`` column.
    """
    return (
        with_rating_scores(unified)
        .filter(
            pl.col("year") >= min_year,
            pl.col("imdb").is_not_null(),
            pl.col("rotten_tomatoes").is_not_null(),
        )
        .with_columns((audience_score() - critic_score()).abs().alias("difference"))
        .filter(pl.col("difference").is_not_null())
    )


def divergence_by_year(
    unified: pl.DataFrame,
    min_year: int = DEFAULT_DIVERGENCE_MIN_YEAR,
) -> pl.DataFrame:
    """Mean critic/audience divergence per release year, oldest first.

    ``year_date`` (January 1st of the year) is a charting convenience;
    the grouping key is the integer year.

    Args:
        unified: Unified relation.
        min_year: First release year kept.

    Returns:
        DataFrame (year, year_date, avg_difference, titles).
    """
    return (
        divergence_rows(unified, min_year)
        .group_by("year")
        .agg(
            pl.col("difference").mean().alias("avg_difference"),
            pl.len().cast(pl.Int64).alias("titles"),
        )
        .sort("year")
        .select(
            "year",
            pl.date(pl.col("year"), 1, 1).alias("year_date"),
            "avg_difference",
            "titles",
        )
    )


def divisive_titles(
    unified: pl.DataFrame,
    min_year: int = DEFAULT_DIVERGENCE_MIN_YEAR,
    policy: DivisivePolicy | None = None,
) -> pl.DataFrame:
    """Titles ranked by mean critic/audience divergence, highest first.

    All rows sharing a title (for instance the same film on several
    services) form one group. Ties are ordered by title.

    Args:
        unified: Unified relation.
        min_year: First release year kept.
        policy: Ranking policy; defaults to the plain mean over all titles.

    Returns:
        DataFrame (title, avg_difference, titles, ranking_score).
    """
    policy = policy or DivisivePolicy()
    rows = divergence_rows(unified, min_year)
    global_mean = rows["difference"].mean() if len(rows) else 0.0

    ranked = (
        rows.group_by("title")
        .agg(
            pl.col("difference").mean().alias("avg_difference"),
            pl.len().cast(pl.Int64).alias("titles"),
        )
        .filter(pl.col("titles") >= policy.min_count)
        .with_columns(_ranking_score(policy.prior_weight, global_mean).alias("ranking_score"))
        .sort(["ranking_score", "title"], descending=[True, False])
    )

    if policy.top_n is not None:
        ranked = ranked.head(policy.top_n)
    return ranked


def _ranking_score(prior_weight: float, global_mean: float) -> pl.Expr:
    """Mean difference shrunk toward the global mean by ``prior_weight``."""
    if prior_weight == 0:
        return pl.col("avg_difference")

    n = pl.col("titles")
    return (n * pl.col("avg_difference") + prior_weight * global_mean) / (n + prior_weight)
