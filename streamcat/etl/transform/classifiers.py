"""Row classification expressions for catalog analytics."""

from collections.abc import Sequence
from typing import Final

import polars as pl

from streamcat.etl.types import SERVICES, ContentType

DEFAULT_FAMILY_KEYWORDS: Final[tuple[str, ...]] = ("kids", "family", "children")

MOVIE: Final[ContentType] = "movie"
TV: Final[ContentType] = "tv"

MOVIE_FLAGS: Final[frozenset[str]] = frozenset({"0", "0.0", "movie", "film"})
TV_FLAGS: Final[frozenset[str]] = frozenset({"1", "1.0", "tv", "tv show", "show", "series"})


def family_expr(
    keywords: Sequence[str] = DEFAULT_FAMILY_KEYWORDS,
    column: str = "genres",
) -> pl.Expr:
    """Flag rows whose genre string contains a family keyword.

    Matching is a case-insensitive substring search, so "Kids TV" and
    "Family-Friendly" both match. A null genre is never family.

    Args:
        keywords: Substrings marking family content.
        column: Genre string column.

    Returns:
        Boolean expression without nulls.
    """
    cleaned = [k.strip().lower() for k in keywords if k.strip()]
    if not cleaned:
        return pl.lit(False)

    genre = pl.col(column).cast(pl.String).str.to_lowercase()
    matches = [genre.str.contains(keyword, literal=True) for keyword in cleaned]
    return pl.any_horizontal(matches).fill_null(False)


def content_type_expr(column: str = "type") -> pl.Expr:
    """Map a raw type flag onto "movie" or "tv".

    Numeric flags follow the catalog export convention (0 = movie,
    1 = TV show); textual labels are accepted too. Unknown flags map
    to null.

    Args:
        column: Raw type column.

    Returns:
        String expression, "movie", "tv" or null.
    """
    flag = pl.col(column).cast(pl.String).str.strip_chars().str.to_lowercase()
    return (
        pl.when(flag.is_in(list(MOVIE_FLAGS)))
        .then(pl.lit(MOVIE))
        .when(flag.is_in(list(TV_FLAGS)))
        .then(pl.lit(TV))
        .otherwise(pl.lit(None, dtype=pl.String))
    )


def service_rank_expr(column: str = "service") -> pl.Expr:
    """Position of a service in the fixed service order.

    Unknown labels sort after the known services.
    """
    order = {service: position for position, service in enumerate(SERVICES)}
    return pl.col(column).replace_strict(order, default=len(SERVICES), return_dtype=pl.Int64)
