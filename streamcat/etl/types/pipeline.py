"""Pipeline data types.

TypedDict definitions for step results and report payloads.
"""

from typing import NotRequired, TypedDict


class ETLResult(TypedDict):
    """Result of a source loading step."""

    source: str
    success: bool
    count: int
    errors: NotRequired[list[str]]
    duration_seconds: NotRequired[float]


class QualityReportData(TypedDict):
    """Serialized missing-value audit."""

    total_rows: int
    imdb_missing: int
    age_missing: int
    rt_missing: int
    imdb_malformed: int
    rt_malformed: int


class UnifyStatsData(TypedDict):
    """Serialized unifier statistics."""

    rows_per_service: dict[str, int]
    total_rows: int
    genre_matched: int
    genre_unmatched: int
    genre_duplicates: int
