"""Rating string parsing.

Catalog scores are exported as "number/denominator" strings
("7.5/10", "80/100"). They are parsed once into a tagged struct
{raw, value, out_of, status} so downstream queries never split
strings themselves and parse failures stay explicit.
"""

from collections.abc import Sequence
from typing import Final

import polars as pl

from streamcat.etl.types import RatingScoreData

RATING_PATTERN: Final[str] = r"^\s*(\d+(?:\.\d+)?)\s*/\s*(\d+(?:\.\d+)?)\s*$"
"""Leading number, slash, denominator. Surrounding whitespace allowed."""

STATUS_OK: Final[str] = "ok"
STATUS_MISSING: Final[str] = "missing"
STATUS_MALFORMED: Final[str] = "malformed"

IMDB_SCALE_FACTOR: Final[float] = 10.0
"""Factor placing an IMDb score (0-10) on the 0-100 critic scale."""

IMDB_SCORE_COLUMN: Final[str] = "imdb_score"
RT_SCORE_COLUMN: Final[str] = "rt_score"


def rating_expr(column: str) -> pl.Expr:
    """Build the tagged rating struct for a raw score column.

    Null or blank values are "missing"; values that do not match
    RATING_PATTERN, or have a zero denominator, are "malformed".
    ``value`` and ``out_of`` are only set when status is "ok".

    Args:
        column: Raw score column name.

    Returns:
        Struct expression with fields raw, value, out_of, status.
    """
    raw = pl.col(column).cast(pl.String)
    value = raw.str.extract(RATING_PATTERN, 1).cast(pl.Float64, strict=False)
    out_of = raw.str.extract(RATING_PATTERN, 2).cast(pl.Float64, strict=False)

    is_missing = raw.is_null() | (raw.str.strip_chars() == "")
    is_valid = value.is_not_null() & out_of.is_not_null() & (out_of > 0)

    status = (
        pl.when(is_missing)
        .then(pl.lit(STATUS_MISSING))
        .when(is_valid)
        .then(pl.lit(STATUS_OK))
        .otherwise(pl.lit(STATUS_MALFORMED))
    )
    parsed = ~is_missing & is_valid

    return pl.struct(
        raw.alias("raw"),
        pl.when(parsed).then(value).alias("value"),
        pl.when(parsed).then(out_of).alias("out_of"),
        status.alias("status"),
    )


SCORE_SOURCES: Final[dict[str, str]] = {
    IMDB_SCORE_COLUMN: "imdb",
    RT_SCORE_COLUMN: "rotten_tomatoes",
}
"""Tagged score column -> raw column it is parsed from."""


def with_rating_scores(df: pl.DataFrame) -> pl.DataFrame:
    """Attach imdb_score and rt_score structs unless already present.

    A non-struct column already using one of those names (a service's
    own score column) is kept as ``catalog_<name>``.

    Args:
        df: Relation with raw ``imdb`` and ``rotten_tomatoes`` columns.

    Returns:
        Relation with both tagged score columns.
    """
    renames: dict[str, str] = {}
    exprs = []
    for column, raw in SCORE_SOURCES.items():
        dtype = df.schema.get(column)
        if isinstance(dtype, pl.Struct):
            continue
        if dtype is not None:
            renames[column] = f"catalog_{column}"
        exprs.append(rating_expr(raw).alias(column))

    if not exprs:
        return df
    return df.rename(renames).with_columns(exprs)


def score_value(column: str) -> pl.Expr:
    """Leading number of a tagged score, null unless parsed."""
    return pl.col(column).struct.field("value")


def score_status(column: str) -> pl.Expr:
    """Parse status of a tagged score."""
    return pl.col(column).struct.field("status")


def critic_score() -> pl.Expr:
    """Rotten Tomatoes score on its native 0-100 scale."""
    return score_value(RT_SCORE_COLUMN)


def audience_score() -> pl.Expr:
    """IMDb score scaled to 0-100."""
    return score_value(IMDB_SCORE_COLUMN) * IMDB_SCALE_FACTOR


def parse_ratings(values: Sequence[str | None]) -> list[RatingScoreData]:
    """Parse raw rating strings outside of a DataFrame.

    Args:
        values: Raw "N/D" strings.

    Returns:
        One tagged rating per input value, in order.
    """
    frame = pl.DataFrame({"rating": list(values)}, schema={"rating": pl.String})
    return frame.select(rating_expr("rating").alias("parsed"))["parsed"].to_list()
