"""Catalog data types.

Service enumeration, content types and TypedDict definitions for
raw catalog and genre rows.
"""

from typing import Final, Literal, TypedDict

ServiceName = Literal["amazon", "hulu", "netflix", "disney"]
"""Streaming services covered by the analysis."""

SERVICES: Final[tuple[ServiceName, ...]] = ("amazon", "hulu", "netflix", "disney")
"""Fixed service order used for unions and reports."""

ContentType = Literal["movie", "tv"]

RatingStatus = Literal["ok", "missing", "malformed"]
"""Outcome of parsing a raw "N/D" rating string."""


class CatalogRowRaw(TypedDict, total=False):
    """One content item as exported by a streaming service.

    Scores are kept as raw strings ("7.5/10", "80/100").
    """

    title: str
    type: int | str | None
    year: int | None
    age: str | None
    imdb: str | None
    rotten_tomatoes: str | None


class GenreRowRaw(TypedDict):
    """Film name to genre string mapping."""

    film: str
    genres: str | None


class RatingScoreData(TypedDict):
    """Parsed rating as a tagged value.

    Attributes:
        raw: Original string.
        value: Leading number, None unless status is "ok".
        out_of: Denominator, None unless status is "ok".
        status: Parse outcome.
    """

    raw: str | None
    value: float | None
    out_of: float | None
    status: RatingStatus
