"""Value parsing and row classification expressions."""

from streamcat.etl.transform.classifiers import (
    DEFAULT_FAMILY_KEYWORDS,
    MOVIE,
    TV,
    content_type_expr,
    family_expr,
    service_rank_expr,
)
from streamcat.etl.transform.ratings import (
    IMDB_SCALE_FACTOR,
    RATING_PATTERN,
    SCORE_SOURCES,
    STATUS_MALFORMED,
    STATUS_MISSING,
    STATUS_OK,
    audience_score,
    critic_score,
    parse_ratings,
    rating_expr,
    with_rating_scores,
)

__all__ = [
    # Ratings
    "RATING_PATTERN",
    "IMDB_SCALE_FACTOR",
    "SCORE_SOURCES",
    "STATUS_OK",
    "STATUS_MISSING",
    "STATUS_MALFORMED",
    "rating_expr",
    "with_rating_scores",
    "critic_score",
    "audience_score",
    "parse_ratings",
    # Classifiers
    "DEFAULT_FAMILY_KEYWORDS",
    "MOVIE",
    "TV",
    "family_expr",
    "content_type_expr",
    "service_rank_expr",
]
